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

"""Module defining the exceptions raised by the binary tree structures."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from multitree.datastructures.trees import BinaryTree

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "BinaryTreeError",
    "ElementNotFound",
    "InvalidConstruction",
    "TreeInvariantError"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


class BinaryTreeError(Exception):
    """Base class for all binary tree errors."""


class ElementNotFound(BinaryTreeError, KeyError):
    """
    Raised when removing an element that has no occurrences in a tree.

    The tree the element was sought in is never altered.
    """

    def __init__(self, element: Any, tree: "BinaryTree") -> None:
        """Create a new element not found error."""
        super().__init__(element, tree)
        self.__element: Any = element
        self.__tree: "BinaryTree" = tree

    def __str__(self) -> str:
        """Get a readable description of the error."""
        return f"Element {self.__element!r} is not in the tree {self.__tree}."

    @property
    def element(self) -> Any:
        """The element that was not found."""
        return self.__element

    @property
    def tree(self) -> "BinaryTree":
        """The tree the element was sought in."""
        return self.__tree


class InvalidConstruction(BinaryTreeError, ValueError):
    """
    Raised when a tree cannot be built from the given elements or subtrees.

    This happens when fewer than two elements are given to build a composed
    tree, when an element is rejected by a validity predicate, or when a
    composed node would break its structural invariants.
    """


class TreeInvariantError(BinaryTreeError, RuntimeError):
    """Raised when an operation would treat a tree as a different variant."""
