"""Immutable forest of trees addressed by positional paths.

A ``Forest`` is an ordered tuple of root trees. Every node is reached by a path
of sibling indices: ``(2, 1, 0)`` is the first child of the second child of the
third root. Paths are positions, not identifiers, so any edit that shifts
siblings ahead of a node changes that node's path.

Every edit returns a new ``Forest``. Only the chain of ancestors leading to the
edit site is rebuilt; all other subtrees are shared with the original forest.

Typical usage example:

    ```python
    from dataknobs_forest import build_forest_from_list

    forest = build_forest_from_list(
        [["emptyDir"], 5, ["nonEmptyDir", 6, ["subdir", 7, ["emptySubdir"]]]]
    )
    print(forest.get_tree_at((2, 1)).value)   # "subdir"

    moved = forest.move((2, 0), (2, 2))
    print(moved)
    # ├emptyDir
    # ├5
    # └nonEmptyDir
    #  ├subdir
    #  │├7
    #  │└emptySubdir
    #  └6
    ```
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator, Sequence
from functools import cmp_to_key
from typing import Any, Deque, Generic, List, Tuple, TypeVar

import graphviz

from dataknobs_forest.exceptions import (
    ExpectedBranchError,
    ExpectedLeafError,
    InvalidMoveError,
    OutOfBoundsError,
    ZeroLengthPathError,
)
from dataknobs_forest.rendering import RenderConfig, build_dot, render_trees
from dataknobs_forest.tree import (
    B,
    Branch,
    ForestPath,
    Leaf,
    T,
    Tree,
    build_trees_from_list,
    is_tree_branch,
    is_tree_leaf,
)

logger = logging.getLogger(__name__)

TT = TypeVar("TT")
BB = TypeVar("BB")

# Orders two sibling nodes: negative, zero or positive like a classic cmp().
Comparator = Callable[[Tree[Any, Any], Tree[Any, Any]], int]

_Trees = Tuple[Tree[Any, Any], ...]


class Forest(Generic[T, B]):
    """An immutable, ordered collection of root trees.

    Leaves carry values of type ``T`` and branches carry values of type ``B``.
    All methods are pure: queries return values, paths or lazy generators, and
    edits return a new ``Forest`` leaving this one untouched.

    Failures to resolve a path raise a ``ForestError`` subclass. Searches that
    find nothing return ``None`` instead of raising.

    Attributes:
        trees: The root level trees, as a tuple.

    Example:
        ```python
        forest = Forest([Branch("dir", [Leaf(1)]), Leaf(2)])
        forest = forest.insert_leaf_at((0, 1), 3)
        print(list(forest.get_leaves()))  # [1, 3, 2]
        ```
    """

    def __init__(self, trees: Iterable[Tree[T, B]] = ()):
        """Initialize a forest from root trees.

        Args:
            trees: The root level trees in order. No deep validation is done.
        """
        self._trees: Tuple[Tree[T, B], ...] = tuple(trees)

    @property
    def trees(self) -> Tuple[Tree[T, B], ...]:
        """The root level trees of this forest."""
        return self._trees

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Forest):
            return NotImplemented
        return self._trees == other._trees

    def __hash__(self) -> int:
        return hash(self._trees)

    def __len__(self) -> int:
        return len(self._trees)

    def __iter__(self) -> Iterator[Tree[T, B]]:
        return iter(self._trees)

    def __repr__(self) -> str:
        return f"Forest(<{len(self._trees)} root trees>)"

    def __str__(self) -> str:
        return self.to_string()

    # --- traversal and queries ---

    def get_all_trees(self) -> Iterator[Tuple[Tree[T, B], ForestPath]]:
        """Lazily yield every node with its path, depth-first in pre-order.

        A node is yielded before its children and siblings are visited in
        index order. Each call starts a new traversal.
        """
        return _iter_trees(self._trees, lambda _tree: True)

    def get_leaves_with_paths(self) -> Iterator[Tuple[T, ForestPath]]:
        """Lazily yield every leaf value with its path, in pre-order."""
        for leaf, path in _iter_trees(self._trees, is_tree_leaf):
            yield leaf.value, path

    def get_leaves(self) -> Iterator[T]:
        """Lazily yield every leaf value, in pre-order."""
        for value, _path in self.get_leaves_with_paths():
            yield value

    def get_branches_with_paths(self) -> Iterator[Tuple[B, ForestPath]]:
        """Lazily yield every branch value with its path, in pre-order."""
        for branch, path in _iter_trees(self._trees, is_tree_branch):
            yield branch.value, path

    def get_branches(self) -> Iterator[B]:
        """Lazily yield every branch value, in pre-order."""
        for value, _path in self.get_branches_with_paths():
            yield value

    def get_edges(self) -> Iterator[Tuple[B, Any]]:
        """Lazily yield ``(parent_value, child_value)`` pairs, parents in pre-order."""
        for branch, _path in _iter_trees(self._trees, is_tree_branch):
            for child in branch.children:
                yield branch.value, child.value

    def find_path_by_tree(
        self, accept_tree_fn: Callable[[Tree[T, B]], bool]
    ) -> ForestPath | None:
        """Find the path of the first node (in pre-order) accepted by a predicate.

        The traversal stops at the first match.

        Args:
            accept_tree_fn: Function taking a tree node and returning True for
                the node being looked for.

        Returns:
            The path of the first accepted node, or None if no node matches.
        """
        for _tree, path in _iter_trees(self._trees, accept_tree_fn):
            return path
        return None

    def find_path(self, accept_value_fn: Callable[[Any], bool]) -> ForestPath | None:
        """Find the path of the first node whose value is accepted by a predicate."""
        return self.find_path_by_tree(lambda tree: accept_value_fn(tree.value))

    def find(self, accept_value_fn: Callable[[Any], bool], default: Any = None) -> Any:
        """Find the first value (in pre-order) accepted by a predicate.

        Args:
            accept_value_fn: Function taking a leaf or branch value.
            default: Returned when no value matches.

        Returns:
            The first accepted value, or ``default``.
        """
        for tree, _path in _iter_trees(self._trees, lambda tree: accept_value_fn(tree.value)):
            return tree.value
        return default

    def get_first_leaf(self, default: Any = None) -> T | Any:
        """Get the value of the first leaf in pre-order, or ``default`` if there are no leaves."""
        for value, _path in self.get_leaves_with_paths():
            return value
        return default

    def get_first_leaf_path(self) -> ForestPath | None:
        """Get the path of the first leaf in pre-order, or None if there are no leaves."""
        for _value, path in self.get_leaves_with_paths():
            return path
        return None

    def get_sibling_trees_at(self, path: Sequence[int]) -> List[Tree[T, B]]:
        """Get the nodes sharing a level with the node at ``path``, excluding it.

        Args:
            path: Path of the node whose siblings are wanted.

        Returns:
            The other nodes of that level, in order.

        Raises:
            ZeroLengthPathError: If ``path`` is empty.
            ExpectedBranchError: If the parent of the node is a leaf.
            OutOfBoundsError: If the path does not address an existing node.
        """
        if len(path) == 0:
            raise ZeroLengthPathError()
        level = self._level_at(path)
        index = path[-1]
        _tree_at(level, index, len(path) - 1)
        return list(level[:index] + level[index + 1:])

    def get_siblings_at(self, path: Sequence[int]) -> List[Any]:
        """Get the values of the siblings of the node at ``path``, excluding its own."""
        return [tree.value for tree in self.get_sibling_trees_at(path)]

    # --- path resolution ---

    def path_to_trees(self, path: Sequence[int]) -> List[Tree[T, B]]:
        """Resolve every element of a path to the node it selects.

        Args:
            path: Sibling indices, starting at the root level.

        Returns:
            The visited nodes, one per path element; the last one is the node
            the path addresses.

        Raises:
            ZeroLengthPathError: If ``path`` is empty.
            OutOfBoundsError: If an element has no node at its depth.
            ExpectedBranchError: If a leaf is reached before the last element.
        """
        if len(path) == 0:
            raise ZeroLengthPathError()
        result: List[Tree[T, B]] = []
        trees: Sequence[Tree[T, B]] = self._trees
        for depth, index in enumerate(path):
            tree = _tree_at(trees, index, depth)
            result.append(tree)
            if depth == len(path) - 1:
                break
            if not isinstance(tree, Branch):
                raise ExpectedBranchError(index, depth)
            trees = tree.children
        return result

    def path_to_values(self, path: Sequence[int]) -> List[Any]:
        """Resolve every element of a path to the value of the node it selects."""
        return [tree.value for tree in self.path_to_trees(path)]

    def values_to_path(self, values: Sequence[Any]) -> ForestPath | None:
        """Convert a sequence of node values into the path of indices they describe.

        At each level the first node whose value equals the next value is
        selected (left to right), and the search continues among its children.

        Args:
            values: Node values from a root down to the target node.

        Returns:
            The matching path, or None if some value has no match at its level
            or ``values`` is empty.

        Raises:
            ExpectedBranchError: If a value matches a leaf while more values
                remain.

        Example:
            ```python
            forest.values_to_path(["nonEmptyDir", "subdir", "emptySubdir"])
            # (2, 1, 1)
            ```
        """
        result: List[int] = []
        trees: Sequence[Tree[T, B]] = self._trees
        tree: Tree[T, B] | None = None
        for depth, value in enumerate(values):
            if tree is not None:
                if not isinstance(tree, Branch):
                    raise ExpectedBranchError(result[-1], depth - 1)
                trees = tree.children
            index = next((idx for idx, node in enumerate(trees) if node.value == value), None)
            if index is None:
                return None
            tree = trees[index]
            result.append(index)
        return tuple(result) if result else None

    def get_tree_at(self, path: Sequence[int]) -> Tree[T, B]:
        """Resolve a path to the node it addresses."""
        return self.path_to_trees(path)[-1]

    def get_trees_at(self, path: Sequence[int], amount: int) -> Tuple[Tree[T, B], ...]:
        """Get up to ``amount`` consecutive siblings starting at ``path``.

        Fewer nodes are returned when the level ends first, and none when
        ``path`` is empty.
        """
        if len(path) == 0 or amount <= 0:
            return ()
        level = self._level_at(path)
        start = path[-1]
        if start < 0:
            raise OutOfBoundsError(start, len(path) - 1)
        return tuple(level[start:start + amount])

    def get_leaf_tree_at(self, path: Sequence[int]) -> Leaf[T]:
        """Resolve a path to a leaf node, raising ExpectedLeafError for a branch."""
        tree = self.get_tree_at(path)
        if isinstance(tree, Branch):
            raise ExpectedLeafError(path[-1], len(path) - 1)
        return tree

    def get_leaf_at(self, path: Sequence[int]) -> T:
        """Resolve a path to a leaf value."""
        return self.get_leaf_tree_at(path).value

    def get_branch_tree_at(self, path: Sequence[int]) -> Branch[T, B]:
        """Resolve a path to a branch node, raising ExpectedBranchError for a leaf."""
        tree = self.get_tree_at(path)
        if not isinstance(tree, Branch):
            raise ExpectedBranchError(path[-1], len(path) - 1)
        return tree

    def get_branch_at(self, path: Sequence[int]) -> B:
        """Resolve a path to a branch value."""
        return self.get_branch_tree_at(path).value

    def _level_at(self, path: Sequence[int]) -> Sequence[Tree[T, B]]:
        # The sibling collection holding the node at path (len(path) >= 1).
        if len(path) == 1:
            return self._trees
        parent = self.get_tree_at(path[:-1])
        if not isinstance(parent, Branch):
            raise ExpectedBranchError(path[-2], len(path) - 2)
        return parent.children

    # --- structural edits ---

    def insert_trees_at(
        self,
        path: Sequence[int],
        new_trees: Iterable[Tree[T, B]],
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Insert nodes so that the first of them ends up at ``path``.

        The node currently at ``path`` and its later siblings shift to higher
        indices by the number of inserted nodes. An index past the end of the
        level appends.

        Args:
            path: Where the first inserted node should sit.
            new_trees: The nodes to insert, in order.
            comparator: If given, the level receiving the nodes is re-sorted
                with it after insertion. Other levels are left as they are.

        Returns:
            A new forest with the nodes inserted.

        Raises:
            ZeroLengthPathError: If ``path`` is empty.
            OutOfBoundsError: If a parent path element has no node, or the
                last element is negative.
            ExpectedBranchError: If a parent path element addresses a leaf.
        """
        new_trees = tuple(new_trees)
        trees = _insert_internal(self._trees, path, new_trees, comparator)
        logger.debug("Inserted %d tree(s) at %s", len(new_trees), tuple(path))
        return Forest(trees)

    def insert_tree_at(
        self,
        path: Sequence[int],
        new_tree: Tree[T, B],
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Insert a single node at ``path``; see ``insert_trees_at``."""
        return self.insert_trees_at(path, (new_tree,), comparator)

    def insert_leaf_at(
        self, path: Sequence[int], value: T, comparator: Comparator | None = None
    ) -> Forest[T, B]:
        """Insert a new leaf holding ``value`` at ``path``."""
        return self.insert_tree_at(path, Leaf(value), comparator)

    def insert_branch_at(
        self,
        path: Sequence[int],
        value: B,
        children: Iterable[Tree[T, B]] = (),
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Insert a new branch holding ``value`` (and optional children) at ``path``."""
        return self.insert_tree_at(path, Branch(value, tuple(children)), comparator)

    def delete_at(self, path: Sequence[int]) -> Forest[T, B]:
        """Delete the node at ``path`` together with its subtree."""
        return self.delete_several_at(path, 1)

    def delete_several_at(self, path: Sequence[int], amount: int) -> Forest[T, B]:
        """Delete ``amount`` consecutive siblings starting at ``path``.

        Later siblings shift down. Deletion stops at the end of the level.

        Raises:
            ValueError: If ``amount`` is less than 1.
            ZeroLengthPathError: If ``path`` is empty.
            OutOfBoundsError: If ``path`` does not address an existing node.
            ExpectedBranchError: If a parent path element addresses a leaf.
        """
        if amount < 1:
            raise ValueError(f"amount must be at least 1, got {amount}")
        trees = _delete_internal(self._trees, path, amount)
        logger.debug("Deleted %d tree(s) at %s", amount, tuple(path))
        return Forest(trees)

    def move(
        self,
        from_path: Sequence[int],
        to_path: Sequence[int],
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Move the node at ``from_path`` to ``to_path``; see ``move_several``."""
        return self.move_several(from_path, to_path, 1, comparator)

    def move_several(
        self,
        from_path: Sequence[int],
        to_path: Sequence[int],
        amount: int,
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Move consecutive siblings from one place in the forest to another.

        The nodes are removed first and then inserted, so ``to_path`` is
        adjusted for the removal: at the first depth where ``from_path`` has
        the smaller index, ``to_path``'s index is reduced by the number of
        moved nodes and deeper indices are left alone. Insert shifting rules
        then apply (see ``insert_trees_at``), which means moving a node onto a
        later sibling's position leaves it where it was, while moving it one
        past that sibling puts it after the sibling.

        Args:
            from_path: Path of the first node to move.
            to_path: Target path, expressed in the numbering before the move.
            amount: Number of consecutive siblings to move.
            comparator: If given, the receiving level is re-sorted after
                insertion.

        Returns:
            A new forest with the nodes moved.

        Raises:
            ValueError: If ``amount`` is less than 1.
            ZeroLengthPathError: If either path is empty.
            InvalidMoveError: If ``to_path`` lies inside one of the moved
                subtrees.
            OutOfBoundsError, ExpectedBranchError: If a path does not resolve.
        """
        if amount < 1:
            raise ValueError(f"amount must be at least 1, got {amount}")
        if len(from_path) == 0 or len(to_path) == 0:
            raise ZeroLengthPathError()
        self.get_tree_at(from_path)
        moved = self.get_trees_at(from_path, amount)
        if _is_inside_moved(from_path, to_path, len(moved)):
            raise InvalidMoveError(from_path, to_path)
        adjusted = _adjust_move_path(from_path, to_path, len(moved))

        trees = _delete_internal(self._trees, from_path, len(moved))
        trees = _insert_internal(trees, adjusted, moved, comparator)
        logger.debug(
            "Moved %d tree(s) from %s to %s (adjusted to %s)",
            len(moved), tuple(from_path), tuple(to_path), adjusted,
        )
        return Forest(trees)

    def update_tree_at(
        self,
        path: Sequence[int],
        updater: Callable[[Tree[T, B]], Tree[T, B]],
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Replace the node at ``path`` with ``updater(node)``.

        Args:
            path: Path of the node to replace.
            updater: Function receiving the current node and returning its
                replacement.
            comparator: If given, the level containing the replaced node is
                re-sorted afterwards.

        Returns:
            A new forest with the node replaced.
        """
        if len(path) == 0:
            raise ZeroLengthPathError()
        trees = _update_internal(self._trees, tuple(path), updater, comparator)
        logger.debug("Updated tree at %s", tuple(path))
        return Forest(trees)

    def update_leaf_at(
        self,
        path: Sequence[int],
        updater: Callable[[T], T],
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Replace the value of the leaf at ``path`` with ``updater(value)``.

        Raises:
            ExpectedLeafError: If ``path`` addresses a branch.
        """
        def update_leaf(tree: Tree[T, B]) -> Tree[T, B]:
            if isinstance(tree, Branch):
                raise ExpectedLeafError(path[-1], len(path) - 1)
            return Leaf(updater(tree.value))

        return self.update_tree_at(path, update_leaf, comparator)

    def update_branch_at(
        self,
        path: Sequence[int],
        updater: Callable[[B], B],
        comparator: Comparator | None = None,
    ) -> Forest[T, B]:
        """Replace the value of the branch at ``path``, keeping its children.

        Raises:
            ExpectedBranchError: If ``path`` addresses a leaf.
        """
        def update_branch(tree: Tree[T, B]) -> Tree[T, B]:
            if not isinstance(tree, Branch):
                raise ExpectedBranchError(path[-1], len(path) - 1)
            return Branch(updater(tree.value), tree.children)

        return self.update_tree_at(path, update_branch, comparator)

    # --- bulk transforms ---

    def filter_trees(
        self, should_keep: Callable[[Tree[T, B], ForestPath], bool]
    ) -> Forest[T, B]:
        """Drop every node rejected by a predicate, together with its subtree.

        Filtering runs bottom-up: a branch's children are filtered before the
        branch itself is tested, so the predicate sees the pruned branch.

        Args:
            should_keep: Function taking a node and its path in this forest,
                returning True to keep the node.

        Returns:
            A new, filtered forest.
        """
        return Forest(_filter_internal(self._trees, should_keep))

    def filter(self, should_keep: Callable[[Any, ForestPath], bool]) -> Forest[T, B]:
        """Drop every node whose value (with its path) is rejected by a predicate."""
        return self.filter_trees(lambda tree, path: should_keep(tree.value, path))

    def filter_leaves(
        self,
        should_keep: Callable[[T, ForestPath], bool],
        drop_empty_branches: bool = False,
    ) -> Forest[T, B]:
        """Drop leaves rejected by a predicate, keeping branches.

        Args:
            should_keep: Function taking a leaf value and its path.
            drop_empty_branches: If True, branches left without children once
                their leaves were filtered are dropped as well. Branches that
                were empty to begin with are dropped too.

        Returns:
            A new, filtered forest.
        """
        def keep(tree: Tree[T, B], path: ForestPath) -> bool:
            if isinstance(tree, Branch):
                return len(tree.children) > 0 or not drop_empty_branches
            return should_keep(tree.value, path)

        return self.filter_trees(keep)

    def map(
        self,
        map_leaf: Callable[[T, ForestPath], TT],
        map_branch: Callable[[B, ForestPath], BB] | None = None,
    ) -> Forest[TT, BB]:
        """Transform every value in the forest, keeping its shape.

        Args:
            map_leaf: Function taking a leaf value and its path, returning the
                new leaf value.
            map_branch: Function taking a branch value and its path, returning
                the new branch value. Branch values are kept when omitted.

        Returns:
            A new forest with the same structure and mapped values.
        """
        if map_branch is None:
            def map_branch(value, _path):
                return value
        return Forest(_map_internal(self._trees, map_leaf, map_branch))

    def sort(self, comparator: Comparator) -> Forest[T, B]:
        """Stably sort the nodes of every level, roots included, with ``comparator``."""
        return Forest(_sort_internal(self._trees, cmp_to_key(comparator)))

    # --- rendering ---

    def to_string(self, config: RenderConfig | None = None) -> str:
        """Render the forest as box-drawing text, one line per node.

        Args:
            config: Optional rendering glyphs and value formatting. The
                default produces the canonical format used by ``str()``.

        Returns:
            The rendered text.
        """
        return render_trees(self._trees, config)

    def build_dot(
        self,
        node_name_fn: Callable[[Tree[T, B]], str] | None = None,
        **kwargs: Any,
    ) -> graphviz.graphs.Digraph:
        """Build a Graphviz Digraph for visualizing this forest.

        Args:
            node_name_fn: Optional function to generate node labels from tree
                nodes. If None, uses ``str(node.value)``.
            **kwargs: Passed to the ``graphviz.Digraph`` constructor.

        Returns:
            A graphviz.Digraph object representing this forest.

        Example:
            ```python
            dot = forest.build_dot(name="Files", node_attr={"shape": "box"})
            print(dot.source)
            ```
        """
        return build_dot(self._trees, node_name_fn, **kwargs)


def build_forest_from_list(data: Iterable[Any]) -> Forest[Any, Any]:
    """Build a forest from nested lists, one entry per root.

    Each entry is built with ``build_tree_from_list``: a list becomes a branch
    whose first element is its value and whose remaining elements are its
    children, anything else becomes a leaf.

    Example:
        ```python
        forest = build_forest_from_list([["emptyDir"], 5, ["dir", 6]])
        print(forest)
        # ├emptyDir
        # ├5
        # └dir
        #  └6
        ```
    """
    return Forest(build_trees_from_list(data))


def _tree_at(trees: Sequence[Tree[Any, Any]], index: int, depth: int) -> Tree[Any, Any]:
    if not 0 <= index < len(trees):
        raise OutOfBoundsError(index, depth)
    return trees[index]


def _iter_trees(
    trees: Sequence[Tree[Any, Any]],
    accept_tree_fn: Callable[[Tree[Any, Any]], bool],
) -> Iterator[Tuple[Any, ForestPath]]:
    queue: Deque[Tuple[Tree[Any, Any], ForestPath]] = deque(
        (tree, (idx,)) for idx, tree in enumerate(trees)
    )
    while queue:
        tree, path = queue.popleft()
        if accept_tree_fn(tree):
            yield tree, path
        if isinstance(tree, Branch):
            queue.extendleft(reversed([
                (child, path + (idx,)) for idx, child in enumerate(tree.children)
            ]))


def _sorted_level(level: _Trees, comparator: Comparator | None) -> _Trees:
    if comparator is None:
        return level
    return tuple(sorted(level, key=cmp_to_key(comparator)))


def _update_internal(
    trees: _Trees,
    path: ForestPath,
    updater: Callable[[Tree[Any, Any]], Tree[Any, Any]],
    comparator: Comparator | None = None,
    depth: int = 0,
) -> _Trees:
    # Rebuilds only the ancestor chain of path; siblings are reused as is.
    index = path[depth]
    tree = _tree_at(trees, index, depth)
    if depth == len(path) - 1:
        replacement = updater(tree)
    else:
        if not isinstance(tree, Branch):
            raise ExpectedBranchError(index, depth)
        replacement = Branch(
            tree.value,
            _update_internal(tree.children, path, updater, comparator, depth + 1),
        )
    result = trees[:index] + (replacement,) + trees[index + 1:]
    if depth == len(path) - 1:
        result = _sorted_level(result, comparator)
    return result


def _splice_internal(
    trees: _Trees,
    path: Sequence[int],
    splice: Callable[[_Trees, int, int], _Trees],
) -> _Trees:
    # Applies splice(level, index, depth) to the level holding path's last element.
    if len(path) == 0:
        raise ZeroLengthPathError()
    path = tuple(path)
    depth = len(path) - 1
    if depth == 0:
        return splice(trees, path[0], 0)

    def splice_children(parent: Tree[Any, Any]) -> Tree[Any, Any]:
        if not isinstance(parent, Branch):
            raise ExpectedBranchError(path[-2], depth - 1)
        return Branch(parent.value, splice(parent.children, path[-1], depth))

    return _update_internal(trees, path[:-1], splice_children)


def _insert_internal(
    trees: _Trees,
    path: Sequence[int],
    new_trees: _Trees,
    comparator: Comparator | None = None,
) -> _Trees:
    def insert(level: _Trees, index: int, depth: int) -> _Trees:
        if index < 0:
            raise OutOfBoundsError(index, depth)
        return _sorted_level(level[:index] + new_trees + level[index:], comparator)

    return _splice_internal(trees, path, insert)


def _delete_internal(trees: _Trees, path: Sequence[int], amount: int) -> _Trees:
    def delete(level: _Trees, index: int, depth: int) -> _Trees:
        _tree_at(level, index, depth)
        return level[:index] + level[index + amount:]

    return _splice_internal(trees, path, delete)


def _is_inside_moved(from_path: Sequence[int], to_path: Sequence[int], amount: int) -> bool:
    # True when to_path descends into one of the subtrees being moved.
    depth = len(from_path) - 1
    return (
        len(to_path) > len(from_path)
        and tuple(to_path[:depth]) == tuple(from_path[:depth])
        and from_path[depth] <= to_path[depth] < from_path[depth] + amount
    )


def _adjust_move_path(
    from_path: Sequence[int], to_path: Sequence[int], amount: int
) -> ForestPath:
    # Only the first depth where from_path is ahead of to_path is corrected.
    result = list(to_path)
    for depth in range(min(len(from_path), len(to_path))):
        if from_path[depth] < to_path[depth]:
            result[depth] = max(to_path[depth] - amount, from_path[depth])
            break
    return tuple(result)


def _filter_internal(
    trees: _Trees,
    should_keep: Callable[[Tree[Any, Any], ForestPath], bool],
    parent_path: ForestPath = (),
) -> _Trees:
    result: List[Tree[Any, Any]] = []
    for idx, tree in enumerate(trees):
        path = parent_path + (idx,)
        if isinstance(tree, Branch):
            tree = Branch(tree.value, _filter_internal(tree.children, should_keep, path))
        if should_keep(tree, path):
            result.append(tree)
    return tuple(result)


def _map_internal(
    trees: _Trees,
    map_leaf: Callable[[Any, ForestPath], Any],
    map_branch: Callable[[Any, ForestPath], Any],
    parent_path: ForestPath = (),
) -> _Trees:
    result: List[Tree[Any, Any]] = []
    for idx, tree in enumerate(trees):
        path = parent_path + (idx,)
        if isinstance(tree, Branch):
            result.append(Branch(
                map_branch(tree.value, path),
                _map_internal(tree.children, map_leaf, map_branch, path),
            ))
        else:
            result.append(Leaf(map_leaf(tree.value, path)))
    return tuple(result)


def _sort_internal(trees: _Trees, key: Callable[[Tree[Any, Any]], Any]) -> _Trees:
    rebuilt = [
        Branch(tree.value, _sort_internal(tree.children, key)) if isinstance(tree, Branch) else tree
        for tree in trees
    ]
    return tuple(sorted(rebuilt, key=key))
