"""Exception hierarchy for forest path resolution and editing.

All errors raised by this package derive from ``ForestError``, which mirrors the
dataknobs convention of carrying an optional ``context`` dictionary alongside the
message. Positional errors additionally record the offending path element and
its depth within the path.

Searches that simply find nothing (``Forest.find_path``, ``Forest.get_first_leaf``,
``Forest.values_to_path``) do not raise; they return ``None``.

Example:
    ```python
    from dataknobs_forest import Forest, ForestError, OutOfBoundsError

    try:
        forest.get_tree_at((2, 7))
    except OutOfBoundsError as e:
        print(e.index, e.depth)  # 7 1
    except ForestError as e:
        print(e.context)
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Dict


class ForestError(Exception):
    """Base exception for all forest errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both are provided)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ZeroLengthPathError(ForestError):
    """Raised when an empty path is given to a path consuming operation."""

    def __init__(self) -> None:
        super().__init__("Zero length forest paths are not allowed.")


class ForestPathError(ForestError):
    """Base for errors tied to a particular element of a path.

    Attributes:
        index: The path element (sibling index) that failed, if known.
        depth: Position of that element within the path, if known.
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        depth: int | None = None,
    ):
        super().__init__(message, context={"index": index, "depth": depth})
        self.index = index
        self.depth = depth


class OutOfBoundsError(ForestPathError):
    """Raised when a path element has no corresponding node at its depth."""

    def __init__(self, index: int, depth: int):
        super().__init__(
            f"Failed to resolve tree by path: path element {index} (at {depth}) is out of bounds",
            index=index,
            depth=depth,
        )


class ExpectedBranchError(ForestPathError):
    """Raised when a branch was required but a leaf was found.

    This happens either when a leaf sits somewhere other than at the end of a
    path, or when a branch specific accessor or updater meets a leaf.
    """

    def __init__(self, index: int | None = None, depth: int | None = None):
        if index is None:
            message = "Failed to resolve tree by path: expected branch, but got leaf"
        else:
            message = (
                f"Failed to resolve tree by path: path element {index} (at {depth})"
                " points to a leaf, but a branch was expected"
            )
        super().__init__(message, index=index, depth=depth)


class ExpectedLeafError(ForestPathError):
    """Raised when a leaf specific accessor or updater meets a branch."""

    def __init__(self, index: int | None = None, depth: int | None = None):
        if index is None:
            message = "Failed to resolve tree by path: expected leaf, but got branch"
        else:
            message = (
                f"Failed to resolve tree by path: path element {index} (at {depth})"
                " points to a branch, but a leaf was expected"
            )
        super().__init__(message, index=index, depth=depth)


class InvalidMoveError(ForestError):
    """Raised when a move would place nodes inside their own subtree."""

    def __init__(self, from_path: Sequence[int], to_path: Sequence[int]):
        super().__init__(
            f"Cannot move nodes at {tuple(from_path)} into their own subtree at {tuple(to_path)}",
            context={"from_path": tuple(from_path), "to_path": tuple(to_path)},
        )
        self.from_path = tuple(from_path)
        self.to_path = tuple(to_path)
