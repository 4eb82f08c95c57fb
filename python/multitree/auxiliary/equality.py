###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""Module defining functions for comparing arbitrary elements for equality."""

from typing import Any

import numpy as np

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "elements_equal",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


def elements_equal(first: Any, second: Any) -> bool:
    """
    Determine whether two elements are equal.

    An element is always equal to itself, even if it is NaN or an array
    holding NaN. `None` is a valid element and is only equal to `None`. NumPy
    arrays are compared by shape and content, since the `==` operator on
    arrays is element-wise and its result has no single truth value. All
    other elements are compared with the `==` operator.

    Parameters
    ----------
    `first: Any` - The first element.

    `second: Any` - The second element.

    Returns
    -------
    `bool` - Whether the elements are equal.
    """
    if first is second:
        return True
    if first is None or second is None:
        return False
    if isinstance(first, np.ndarray) or isinstance(second, np.ndarray):
        return bool(np.array_equal(first, second))
    return bool(first == second)
