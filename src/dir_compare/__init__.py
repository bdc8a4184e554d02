"""Content-addressed comparison of directory sets."""

from .compare import ComparisonResult, TreeNode, build_collapsed_tree, compare_catalogs
from .engine import ComparisonRun, run_comparison
from .scan import FileCatalog, FileRecord, ScanError, scan_directories

__all__ = [
    "ComparisonResult",
    "ComparisonRun",
    "FileCatalog",
    "FileRecord",
    "ScanError",
    "TreeNode",
    "build_collapsed_tree",
    "compare_catalogs",
    "run_comparison",
    "scan_directories",
]
