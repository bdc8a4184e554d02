"""Catalog comparison and directory collapsing."""

from .differ import ComparisonResult, compare_catalogs
from .tree import (
    CollapsedTree,
    TreeNode,
    build_collapsed_tree,
    build_tree,
    collect_files,
    count_tree_items,
    directories_with_matches,
    entire_directories,
    mark_entire_directories,
    prune_empty_directories,
)

__all__ = [
    "CollapsedTree",
    "ComparisonResult",
    "TreeNode",
    "build_collapsed_tree",
    "build_tree",
    "collect_files",
    "compare_catalogs",
    "count_tree_items",
    "directories_with_matches",
    "entire_directories",
    "mark_entire_directories",
    "prune_empty_directories",
]
