"""Immutable forests of trees with path-based navigation and editing.

The dataknobs-forest package provides a persistent (copy-on-write) forest
structure: an ordered collection of root trees whose nodes are addressed by
paths of sibling indices.

## Modules

### Tree - Node types
- Leaf: a terminal node holding one value
- Branch: a node holding a value and an ordered tuple of children
- Helpers to discriminate the two and to build trees from nested lists

### Forest - The forest itself
- Path resolution (`get_tree_at`, `path_to_trees`, `values_to_path`)
- Lazy pre-order traversal and search (`get_all_trees`, `find_path`, `find`)
- Structural edits (`insert_*`, `delete_*`, `move*`, `update_*`)
- Bulk transforms (`filter*`, `map`, `sort`)
- Text rendering via `str()` and Graphviz visualization via `build_dot()`

### Exceptions
`ForestError` and its subclasses describe why a path could not be resolved.
Searches that find nothing return None rather than raising.

## Quick Example

```python
from dataknobs_forest import build_forest_from_list

forest = build_forest_from_list([["docs", "a.md", "b.md"], "README"])
forest = forest.insert_leaf_at((0, 1), "intro.md")
print(forest)
# ├docs
# │├a.md
# │├intro.md
# │└b.md
# └README

print(forest.values_to_path(["docs", "b.md"]))  # (0, 2)
```

## Installation

```bash
pip install dataknobs-forest
```
"""

from dataknobs_forest.exceptions import (
    ExpectedBranchError,
    ExpectedLeafError,
    ForestError,
    ForestPathError,
    InvalidMoveError,
    OutOfBoundsError,
    ZeroLengthPathError,
)
from dataknobs_forest.forest import Comparator, Forest, build_forest_from_list
from dataknobs_forest.rendering import DEFAULT_RENDER_CONFIG, RenderConfig
from dataknobs_forest.tree import (
    Branch,
    ForestPath,
    Leaf,
    Tree,
    build_tree_from_list,
    is_tree_branch,
    is_tree_leaf,
)

__version__ = "1.0.0"

__all__ = [
    "Branch",
    "Comparator",
    "DEFAULT_RENDER_CONFIG",
    "ExpectedBranchError",
    "ExpectedLeafError",
    "Forest",
    "ForestError",
    "ForestPath",
    "ForestPathError",
    "InvalidMoveError",
    "Leaf",
    "OutOfBoundsError",
    "RenderConfig",
    "Tree",
    "ZeroLengthPathError",
    "build_forest_from_list",
    "build_tree_from_list",
    "is_tree_branch",
    "is_tree_leaf",
]
