"""Human-readable renderings of a forest.

Two renderings are provided:

- ``render_trees`` produces the canonical box-drawing text used by
  ``str(forest)``, one line per node in pre-order:

    ```
    ├emptyDir
    ├5
    └nonEmptyDir
     ├6
     └subdir
      ├7
      └emptySubdir
    ```

- ``build_dot`` produces a Graphviz ``Digraph`` for visual inspection.

Neither is meant to be parsed back into a forest.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Deque, List, Tuple

import graphviz

from dataknobs_forest.tree import Branch, ForestPath, Tree


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for the text rendering of a forest.

    The defaults reproduce the canonical format exactly; change them only for
    output that nothing compares against.

    Attributes:
        tee: Connector for a node that has later siblings.
        last: Connector for the last node of its level.
        pipe: Continuation for an ancestor that has later siblings.
        blank: Continuation for an ancestor that is the last of its level.
        value_formatter: Converts a node value to its displayed text.
    """

    tee: str = "├"
    last: str = "└"
    pipe: str = "│"
    blank: str = " "
    value_formatter: Callable[[Any], str] = str


DEFAULT_RENDER_CONFIG = RenderConfig()


def render_trees(
    trees: Sequence[Tree[Any, Any]], config: RenderConfig | None = None
) -> str:
    """Render trees as connector-prefixed lines joined by newlines.

    Args:
        trees: Root level nodes to render.
        config: Glyphs and value formatting; defaults to ``DEFAULT_RENDER_CONFIG``.

    Returns:
        The rendered text, or an empty string when there are no trees.
    """
    config = config or DEFAULT_RENDER_CONFIG
    lines: List[str] = []
    # (node, prefix of its line, is last of its level), popped in pre-order
    stack: List[Tuple[Tree[Any, Any], str, bool]] = _level_entries(trees, "")
    while stack:
        tree, prefix, is_last = stack.pop()
        connector = config.last if is_last else config.tee
        lines.append(prefix + connector + config.value_formatter(tree.value))
        if isinstance(tree, Branch):
            child_prefix = prefix + (config.blank if is_last else config.pipe)
            stack.extend(_level_entries(tree.children, child_prefix))
    return "\n".join(lines)


def _level_entries(
    trees: Sequence[Tree[Any, Any]], prefix: str
) -> List[Tuple[Tree[Any, Any], str, bool]]:
    # Reversed so that popping from the end yields the first sibling first.
    last_idx = len(trees) - 1
    return [(tree, prefix, idx == last_idx) for idx, tree in reversed(list(enumerate(trees)))]


def _walk_with_parents(
    trees: Sequence[Tree[Any, Any]]
) -> Iterator[Tuple[Tree[Any, Any], ForestPath, ForestPath]]:
    queue: Deque[Tuple[Tree[Any, Any], ForestPath, ForestPath]] = deque(
        (tree, (idx,), ()) for idx, tree in enumerate(trees)
    )
    while queue:
        tree, path, parent_path = queue.popleft()
        yield tree, path, parent_path
        if isinstance(tree, Branch):
            queue.extendleft(reversed([
                (child, path + (idx,), path) for idx, child in enumerate(tree.children)
            ]))


def _node_id(path: ForestPath) -> str:
    return "N_" + "_".join(str(idx) for idx in path)


def build_dot(
    trees: Sequence[Tree[Any, Any]],
    node_name_fn: Callable[[Tree[Any, Any]], str] | None = None,
    **kwargs: Any,
) -> graphviz.graphs.Digraph:
    """Build a Graphviz Digraph for visualizing a forest.

    Every node becomes a graph node whose id is derived from its path (e.g.
    ``N_2_1`` for path ``(2, 1)``), and every parent/child pair becomes an edge.
    Root trees have no incoming edges.

    Args:
        trees: Root level nodes to draw.
        node_name_fn: Optional function producing a node label from a tree
            node. If None, uses ``str(node.value)``.
        **kwargs: Additional keyword arguments passed to the
            ``graphviz.Digraph`` constructor (e.g., name, format, node_attr).

    Returns:
        A graphviz.Digraph object representing the forest.

    Note:
        Rendering the result to an image requires a Graphviz system
        installation; building it does not.
    """
    if node_name_fn is None:
        def node_name_fn(n):
            return str(n.value)
    dot = graphviz.Digraph(**kwargs)
    for tree, path, parent_path in _walk_with_parents(trees):
        dot.node(_node_id(path), node_name_fn(tree))
        if parent_path:
            dot.edge(_node_id(parent_path), _node_id(path))
    return dot
