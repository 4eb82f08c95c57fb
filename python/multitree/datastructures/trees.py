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

"""Module containing an immutable multiset binary tree."""

import collections.abc
import enum
import logging
from abc import abstractmethod
from typing import (Any, Callable, Generic, Iterator, Literal, Optional,
                    Sequence, TypeAlias, TypeVar, final)

from typing_extensions import override

from multitree.auxiliary.equality import elements_equal
from multitree.datastructures.exceptions import (ElementNotFound,
                                                 InvalidConstruction,
                                                 TreeInvariantError)

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "BinaryTree",
    "EmptyTree",
    "LeafTree",
    "ComposedTree",
    "EMPTY_TREE",
    "InsertionPolicy",
    "DEFAULT_INSERTION_POLICY",
    "build_from"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


@enum.unique
class InsertionPolicy(enum.Enum):
    """
    Enumeration defining the subtree new elements are added to.

    Items
    -----
    `LEFT = "left"` - Always add to the left subtree.

    `RIGHT = "right"` - Always add to the right subtree.

    `BALANCED = "balanced"` - Add to the subtree with fewer elements, or to
    the left subtree if both have the same number of elements.
    """

    LEFT = "left"
    RIGHT = "right"
    BALANCED = "balanced"


InsertionPolicyNames: TypeAlias = Literal[
    "left",
    "right",
    "balanced"
]


DEFAULT_INSERTION_POLICY: InsertionPolicy = InsertionPolicy.LEFT


def _get_policy(
    policy: InsertionPolicy | InsertionPolicyNames
) -> InsertionPolicy:
    """Get the insertion policy enum member for the given policy or name."""
    if isinstance(policy, InsertionPolicy):
        return policy
    try:
        return InsertionPolicy[policy.upper()]
    except (KeyError, AttributeError) as exc:
        raise ValueError(f"Unknown insertion policy {policy!r}.") from exc


# Binary tree generic element type.
ET = TypeVar("ET")


class BinaryTree(collections.abc.Collection, Generic[ET]):
    """
    Base class for immutable binary trees representing a multiset.

    A binary tree is either empty, a leaf holding exactly one element, or a
    composed tree holding an element at its root plus all elements of its
    left and right subtrees. The same element may occur any number of times,
    and `None` is a valid element.

    Trees are never modified. Adding or removing an element returns a new
    tree, which shares all unaffected subtrees with the original.

    Example Usage
    -------------
    ```
    from multitree.datastructures.trees import EMPTY_TREE, build_from

    >>> tree = build_from([1, 2, 3])
    >>> tree
    ComposedTree(2, LeafTree(1), LeafTree(3))
    >>> tree.add(1).count(1)
    2
    >>> tree.remove(2)
    ComposedTree(1, EmptyTree(), LeafTree(3))
    >>> tree.count(2)
    1
    >>> EMPTY_TREE.add(None)
    LeafTree(None)
    ```
    """

    __TREE_LOGGER = logging.getLogger("BinaryTree")

    __slots__ = {
        "__hash": "The cached hash of the tree."
    }

    def __init__(self) -> None:
        """Create a new binary tree."""
        self.__hash: Optional[int] = None

    @classmethod
    def _log_debug(cls, msg: str, *args: Any) -> None:
        """Log a debug message to the binary tree logger."""
        BinaryTree.__TREE_LOGGER.debug(msg, *args)

    def __str__(self) -> str:
        """Get a summary of the tree."""
        return (f"{self.__class__.__name__}: "
                f"total elements = {self.total_elements()}, "
                f"height = {self.height()}")

    def __contains__(self, element: object) -> bool:
        """Whether the element occurs at least once in the tree."""
        return self.contains(element)

    def __iter__(self) -> Iterator[ET]:
        """Iterate over all element occurrences in pre-order."""
        frontier: list[BinaryTree[ET]] = [self]
        while frontier:
            node = frontier.pop()
            if node.is_empty():
                continue
            yield node.root_element
            frontier.extend([node.right, node.left])

    def __len__(self) -> int:
        """Get the total number of element occurrences in the tree."""
        return self.total_elements()

    def __eq__(self, other: object) -> bool:
        """Whether both trees hold the same elements equally often."""
        if not isinstance(other, BinaryTree):
            return NotImplemented
        if self is other:
            return True
        if self.total_elements() != other.total_elements():
            return False
        return all(self.count(element) == other.count(element)
                   for element in self)

    def __hash__(self) -> int:
        """
        Get the hash of the tree.

        The hash does not depend on the shape of the tree, only on the
        elements it holds.
        """
        if self.__hash is None:
            self.__hash = hash(("BinaryTree", sum(map(hash, self))))
        return self.__hash

    @property
    @abstractmethod
    def root_element(self) -> ET:
        """The element stored at the root of the tree."""
        ...

    @property
    @abstractmethod
    def left(self) -> "BinaryTree[ET]":
        """The left subtree."""
        ...

    @property
    @abstractmethod
    def right(self) -> "BinaryTree[ET]":
        """The right subtree."""
        ...

    @abstractmethod
    def count(self, element: Any) -> int:
        """Get the number of occurrences of the element in the tree."""
        ...

    def contains(self, element: Any) -> bool:
        """Whether the element occurs at least once in the tree."""
        return self.count(element) > 0

    @abstractmethod
    def total_elements(self) -> int:
        """Get the total number of element occurrences in the tree."""
        ...

    def is_empty(self) -> bool:
        """Whether the tree holds no elements."""
        return self.total_elements() == 0

    def can_have_as_element(self, element: Any) -> bool:
        """Whether the element can be stored in the tree."""
        return True

    def can_have_as_count(self, count: int, element: Any) -> bool:
        """
        Whether the tree could hold the given number of occurrences of the
        element.

        Zero occurrences are always valid, negative occurrences never are, and
        a positive number of occurrences is valid only for valid elements.
        """
        return count == 0 or (count > 0 and self.can_have_as_element(element))

    def can_have_as_subtree(self, tree: object) -> bool:
        """
        Whether the given object could be a subtree of this tree.

        A subtree must be a binary tree, must not be this tree, and must not
        contain this tree.
        """
        return (isinstance(tree, BinaryTree)
                and tree is not self
                and not tree.contains_subtree(self))

    @abstractmethod
    def add(
        self,
        element: ET,
        policy: InsertionPolicy | InsertionPolicyNames = (
            DEFAULT_INSERTION_POLICY)
    ) -> "BinaryTree[ET]":
        """
        Get a new tree holding one more occurrence of the element.

        Parameters
        ----------
        `element: ET@BinaryTree` - The element to add, may be `None`.

        `policy: InsertionPolicy | InsertionPolicyNames = "left"` - The
        subtree the element is added to when the tree is not empty.

        Returns
        -------
        `BinaryTree[ET]` - The new tree, this tree is unchanged.
        """
        ...

    @abstractmethod
    def remove(
        self,
        element: Any,
        debug: bool = False
    ) -> "BinaryTree[ET]":
        """
        Get a new tree holding one less occurrence of the element.

        If `debug` is True, a debug message is logged when the element is not
        found.

        Raises
        ------
        `ElementNotFound` - If the element does not occur in the tree.
        """
        ...

    @abstractmethod
    def _remove_root(self) -> "BinaryTree[ET]":
        """Get a new tree without the element stored at the root."""
        ...

    @abstractmethod
    def contains_subtree(self, tree: "BinaryTree") -> bool:
        """Whether the given tree is a (possibly indirect) subtree."""
        ...

    @abstractmethod
    def height(self) -> int:
        """Get the number of levels of the tree."""
        ...

    @abstractmethod
    def get_inverted(self) -> "BinaryTree[ET]":
        """Get the mirror image of the tree, which holds the same elements."""
        ...

    def sum_depths(self) -> int:
        """Return the sum of the depths of all nodes in the tree."""
        frontier: list[tuple[int, BinaryTree[ET]]] = [(0, self)]
        depth_sum: int = 0

        while frontier:
            depth, node = frontier.pop()
            if node.is_empty():
                continue
            depth_sum += depth
            frontier.extend([(depth + 1, node.left), (depth + 1, node.right)])

        return depth_sum


@final
class EmptyTree(BinaryTree[ET]):
    """
    The empty binary tree.

    There is only ever one instance, `EMPTY_TREE`; calling the constructor
    returns that instance.
    """

    __slots__ = ()

    __instance: Optional["EmptyTree"] = None

    def __new__(cls) -> "EmptyTree":
        """Get the empty tree instance."""
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __repr__(self) -> str:
        """Get an instantiable string representation of the tree."""
        return "EmptyTree()"

    @override
    def __iter__(self) -> Iterator[ET]:
        return iter(())

    @property
    @override
    def root_element(self) -> ET:
        raise TreeInvariantError("The empty tree has no root element.")

    @property
    @override
    def left(self) -> BinaryTree[ET]:
        raise TreeInvariantError("The empty tree has no left subtree.")

    @property
    @override
    def right(self) -> BinaryTree[ET]:
        raise TreeInvariantError("The empty tree has no right subtree.")

    @override
    def count(self, element: Any) -> int:
        return 0

    @override
    def contains(self, element: Any) -> bool:
        return False

    @override
    def total_elements(self) -> int:
        return 0

    @override
    def is_empty(self) -> bool:
        return True

    @override
    def can_have_as_count(self, count: int, element: Any) -> bool:
        return count == 0

    @override
    def add(
        self,
        element: ET,
        policy: InsertionPolicy | InsertionPolicyNames = (
            DEFAULT_INSERTION_POLICY)
    ) -> "LeafTree[ET]":
        # Only validates the policy, an empty tree has no subtree to choose.
        _get_policy(policy)
        return LeafTree(element)

    @override
    def remove(self, element: Any, debug: bool = False) -> BinaryTree[ET]:
        if debug:
            self._log_debug(
                "Element %r not found in the empty tree.", element)
        raise ElementNotFound(element, self)

    @override
    def _remove_root(self) -> BinaryTree[ET]:
        raise TreeInvariantError("Cannot remove the root of the empty tree.")

    @override
    def contains_subtree(self, tree: BinaryTree) -> bool:
        return False

    @override
    def height(self) -> int:
        return 0

    @override
    def get_inverted(self) -> "EmptyTree":
        return self


EMPTY_TREE: EmptyTree = EmptyTree()


@final
class LeafTree(BinaryTree[ET]):
    """A binary tree holding exactly one element and no subtrees."""

    __slots__ = {
        "__element": "The element held by the leaf."
    }

    def __init__(self, element: ET) -> None:
        """Create a new leaf holding the given element."""
        super().__init__()
        self.__element: ET = element

    def __repr__(self) -> str:
        """Get an instantiable string representation of the tree."""
        return f"LeafTree({self.__element!r})"

    @property
    @override
    def root_element(self) -> ET:
        return self.__element

    @property
    @override
    def left(self) -> EmptyTree:
        return EMPTY_TREE

    @property
    @override
    def right(self) -> EmptyTree:
        return EMPTY_TREE

    @override
    def count(self, element: Any) -> int:
        return int(elements_equal(self.__element, element))

    @override
    def contains(self, element: Any) -> bool:
        return elements_equal(self.__element, element)

    @override
    def total_elements(self) -> int:
        return 1

    @override
    def is_empty(self) -> bool:
        return False

    @override
    def can_have_as_count(self, count: int, element: Any) -> bool:
        return count == 0 or (count == 1 and self.can_have_as_element(element))

    @override
    def add(
        self,
        element: ET,
        policy: InsertionPolicy | InsertionPolicyNames = (
            DEFAULT_INSERTION_POLICY)
    ) -> "ComposedTree[ET]":
        # The new element becomes the root and this leaf is demoted.
        if _get_policy(policy) is InsertionPolicy.RIGHT:
            return ComposedTree._from_subtrees(element, EMPTY_TREE, self)
        return ComposedTree._from_subtrees(element, self, EMPTY_TREE)

    @override
    def remove(self, element: Any, debug: bool = False) -> EmptyTree:
        if not self.contains(element):
            if debug:
                self._log_debug("Element %r not found in %s.", element, self)
            raise ElementNotFound(element, self)
        return EMPTY_TREE

    @override
    def _remove_root(self) -> EmptyTree:
        return EMPTY_TREE

    @override
    def contains_subtree(self, tree: BinaryTree) -> bool:
        return False

    @override
    def height(self) -> int:
        return 1

    @override
    def get_inverted(self) -> "LeafTree[ET]":
        return self


@final
class ComposedTree(BinaryTree[ET]):
    """
    A binary tree holding an element at its root and two subtrees, at least
    one of which is not empty.
    """

    __slots__ = {
        "__element": "The element held at the root.",
        "__left": "The left subtree.",
        "__right": "The right subtree.",
        "__total": "The total number of element occurrences."
    }

    def __init__(
        self,
        element: ET,
        left: BinaryTree[ET],
        right: BinaryTree[ET]
    ) -> None:
        """
        Create a new composed tree.

        Raises
        ------
        `InvalidConstruction` - If either subtree is not a valid subtree of
        the new tree, or if both subtrees are empty.
        """
        super().__init__()
        for side, tree in (("left", left), ("right", right)):
            if not self.can_have_as_subtree(tree):
                raise InvalidConstruction(
                    f"Cannot have {tree!r} as the {side} subtree of a "
                    "composed tree.")
        if left.is_empty() and right.is_empty():
            raise InvalidConstruction(
                "A composed tree must have at least one non-empty subtree.")
        self.__set_fields(element, left, right)

    @classmethod
    def _from_subtrees(
        cls,
        element: ET,
        left: BinaryTree[ET],
        right: BinaryTree[ET]
    ) -> "ComposedTree[ET]":
        """
        Create a composed tree over subtrees that are known to be valid,
        skipping the subtree checks.

        A new node cannot be contained by existing trees, so the checks can
        only fail for subtrees that are not trees or are both empty.
        """
        tree = cls.__new__(cls)
        BinaryTree.__init__(tree)
        tree.__set_fields(element, left, right)
        return tree

    def __set_fields(
        self,
        element: ET,
        left: BinaryTree[ET],
        right: BinaryTree[ET]
    ) -> None:
        self.__element: ET = element
        self.__left: BinaryTree[ET] = left
        self.__right: BinaryTree[ET] = right
        self.__total: int = 1 + left.total_elements() + right.total_elements()

    def __repr__(self) -> str:
        """Get an instantiable string representation of the tree."""
        return (f"ComposedTree({self.__element!r}, "
                f"{self.__left!r}, {self.__right!r})")

    @property
    @override
    def root_element(self) -> ET:
        return self.__element

    @property
    @override
    def left(self) -> BinaryTree[ET]:
        return self.__left

    @property
    @override
    def right(self) -> BinaryTree[ET]:
        return self.__right

    @override
    def count(self, element: Any) -> int:
        return (int(elements_equal(self.__element, element))
                + self.__left.count(element)
                + self.__right.count(element))

    @override
    def contains(self, element: Any) -> bool:
        return (elements_equal(self.__element, element)
                or self.__left.contains(element)
                or self.__right.contains(element))

    @override
    def total_elements(self) -> int:
        return self.__total

    @override
    def is_empty(self) -> bool:
        return False

    @override
    def add(
        self,
        element: ET,
        policy: InsertionPolicy | InsertionPolicyNames = (
            DEFAULT_INSERTION_POLICY)
    ) -> "ComposedTree[ET]":
        policy = _get_policy(policy)
        add_left: bool
        if policy is InsertionPolicy.BALANCED:
            add_left = (self.__left.total_elements()
                        <= self.__right.total_elements())
        else:
            add_left = policy is InsertionPolicy.LEFT
        if add_left:
            return ComposedTree._from_subtrees(
                self.__element,
                self.__left.add(element, policy),
                self.__right)
        return ComposedTree._from_subtrees(
            self.__element,
            self.__left,
            self.__right.add(element, policy))

    @override
    def remove(self, element: Any, debug: bool = False) -> BinaryTree[ET]:
        if elements_equal(self.__element, element):
            return self._remove_root()
        try:
            left = self.__left.remove(element)
        except ElementNotFound:
            try:
                right = self.__right.remove(element)
            except ElementNotFound as exc:
                if debug:
                    self._log_debug(
                        "Element %r not found in either subtree of %s.",
                        element, self)
                raise ElementNotFound(element, self) from exc
            return _compose(self.__element, self.__left, right)
        return _compose(self.__element, left, self.__right)

    @override
    def _remove_root(self) -> BinaryTree[ET]:
        # The root of the left subtree replaces this root, or if there is no
        # left subtree, the right subtree replaces this tree.
        if not self.__left.is_empty():
            return _compose(self.__left.root_element,
                            self.__left._remove_root(),
                            self.__right)
        if self.__right.is_empty():
            raise TreeInvariantError(
                f"Composed tree {self!r} has two empty subtrees.")
        return self.__right

    @override
    def contains_subtree(self, tree: BinaryTree) -> bool:
        return (self.__left is tree
                or self.__right is tree
                or self.__left.contains_subtree(tree)
                or self.__right.contains_subtree(tree))

    @override
    def height(self) -> int:
        return 1 + max(self.__left.height(), self.__right.height())

    @override
    def get_inverted(self) -> "ComposedTree[ET]":
        return ComposedTree._from_subtrees(self.__element,
                                           self.__right.get_inverted(),
                                           self.__left.get_inverted())


def _compose(
    element: ET,
    left: BinaryTree[ET],
    right: BinaryTree[ET]
) -> LeafTree[ET] | ComposedTree[ET]:
    """Create a composed tree, or a leaf if both subtrees are empty."""
    if left.is_empty() and right.is_empty():
        return LeafTree(element)
    return ComposedTree._from_subtrees(element, left, right)


def build_from(
    elements: Sequence[ET],
    root_index: Optional[int] = None,
    predicate: Optional[Callable[[ET], bool]] = None,
    policy: InsertionPolicy | InsertionPolicyNames = InsertionPolicy.BALANCED,
    debug: bool = False
) -> ComposedTree[ET]:
    """
    Build a composed tree from a sequence of at least two elements.

    The element at the root index becomes the root of the tree. All elements
    before it are added in order to the left subtree, and all elements after
    it are added in order to the right subtree.

    Parameters
    ----------
    `elements: Sequence[ET]` - The elements to build the tree from.

    `root_index: int | None = None` - The index of the root element. If not
    given or None, the middle index, `len(elements) // 2`, is used.

    `predicate: Callable[[ET], bool] | None = None` - Optional element validity
    predicate. If given, every element must satisfy it.

    `policy: InsertionPolicy | InsertionPolicyNames = "balanced"` - The
    insertion policy used to build the subtrees. The balanced policy keeps the
    depth of the tree logarithmic in the number of elements.

    `debug: bool = False` - Whether to log debug messages.

    Returns
    -------
    `ComposedTree[ET]` - The new tree.

    Raises
    ------
    `InvalidConstruction` - If fewer than two elements are given, if the root
    index is out of range, or if an element does not satisfy the predicate.
    """
    if len(elements) < 2:
        raise InvalidConstruction(
            "At least two elements are needed to build a composed tree, "
            f"got {len(elements)}.")
    if predicate is not None:
        for element in elements:
            if not predicate(element):
                raise InvalidConstruction(
                    f"Element {element!r} is not a valid tree element.")
    if root_index is None:
        root_index = len(elements) // 2
    elif not 0 <= root_index < len(elements):
        raise InvalidConstruction(
            f"Root index {root_index} is out of range for "
            f"{len(elements)} elements.")
    policy = _get_policy(policy)

    if debug:
        BinaryTree._log_debug(
            "Building tree from %s elements with: "
            "root_index=%s, policy=%s",
            len(elements), root_index, policy.value
        )

    left: BinaryTree[ET] = EMPTY_TREE
    for element in elements[:root_index]:
        left = left.add(element, policy)
        if debug:
            BinaryTree._log_debug("Added %r to the left subtree.", element)

    right: BinaryTree[ET] = EMPTY_TREE
    for element in elements[root_index + 1:]:
        right = right.add(element, policy)
        if debug:
            BinaryTree._log_debug("Added %r to the right subtree.", element)

    return ComposedTree._from_subtrees(elements[root_index], left, right)
