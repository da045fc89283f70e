"""Tree node types shared by every forest operation.

A tree node is either a ``Leaf`` holding a single value, or a ``Branch`` holding
a value and an ordered tuple of child nodes. Both are frozen dataclasses, so
nodes can be shared freely between forests and compare structurally with ``==``.

A branch without children is still a branch:

    ```python
    from dataknobs_forest.tree import Branch, Leaf, is_tree_branch

    empty_dir = Branch("emptyDir")
    assert is_tree_branch(empty_dir)
    assert empty_dir != Leaf("emptyDir")
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, List, Tuple, TypeVar, Union

T = TypeVar("T")
B = TypeVar("B")


@dataclass(frozen=True)
class Leaf(Generic[T]):
    """Terminal tree node carrying a single value."""

    value: T


@dataclass(frozen=True)
class Branch(Generic[T, B]):
    """Tree node carrying a value and an ordered sequence of children.

    Attributes:
        value: The branch value.
        children: Child nodes in order; any iterable given at construction is
            stored as a tuple.
    """

    value: B
    children: Tuple["Tree[T, B]", ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))


Tree = Union[Leaf[T], Branch[T, B]]

# A sequence of sibling indices, the first one selecting a root tree.
ForestPath = Tuple[int, ...]


def is_tree_branch(tree: Tree[Any, Any]) -> bool:
    """Check whether a node is a branch (possibly one without children)."""
    return isinstance(tree, Branch)


def is_tree_leaf(tree: Tree[Any, Any]) -> bool:
    """Check whether a node is a leaf."""
    return isinstance(tree, Leaf)


def build_tree_from_list(data: Union[Any, List]) -> Tree[Any, Any]:
    """Build a tree node from a nested list representation.

    A list becomes a branch whose first element is the branch value and whose
    remaining elements are its children (themselves built recursively). Any
    other object becomes a leaf.

    Args:
        data: The node data, e.g. ``["subdir", 7, ["emptySubdir"]]``.

    Returns:
        The constructed node.

    Raises:
        ValueError: If ``data`` is an empty list (a branch needs a value).

    Example:
        ```python
        tree = build_tree_from_list(["subdir", 7, ["emptySubdir"]])
        # Branch("subdir", (Leaf(7), Branch("emptySubdir")))
        ```
    """
    if isinstance(data, list):
        if len(data) == 0:
            raise ValueError("Cannot build a branch from an empty list")
        return Branch(data[0], tuple(build_tree_from_list(child) for child in data[1:]))
    return Leaf(data)


def build_trees_from_list(data: Iterable[Any]) -> Tuple[Tree[Any, Any], ...]:
    """Build a sequence of sibling nodes with ``build_tree_from_list``."""
    return tuple(build_tree_from_list(item) for item in data)
