"""End-to-end comparison of two directory sets."""

from __future__ import annotations

from dataclasses import dataclass

from dir_compare.compare import (
    CollapsedTree,
    ComparisonResult,
    build_collapsed_tree,
    build_tree,
    compare_catalogs,
)
from dir_compare.config import ScanSettings
from dir_compare.logging import WarningSink
from dir_compare.scan import FileCatalog, scan_directories


@dataclass(slots=True, frozen=True)
class ComparisonRun:
    """Catalogs, classification and unique-file trees for one comparison."""

    baseline_roots: tuple[str, ...]
    candidate_roots: tuple[str, ...]
    baseline: FileCatalog
    candidate: FileCatalog
    result: ComparisonResult
    unique_to_baseline_tree: CollapsedTree
    unique_to_candidate_tree: CollapsedTree
    scan_profiles: dict[str, dict[str, object]]


def parse_roots(raw: str) -> list[str]:
    """Split a comma-separated root list, trimming blanks."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def run_comparison(
    baseline_roots: list[str],
    candidate_roots: list[str],
    *,
    settings: ScanSettings | None = None,
    max_files: int | None = None,
    collapse: bool = True,
    on_warning: WarningSink | None = None,
) -> ComparisonRun:
    """Scan both sets, classify their files and build the unique-file trees.

    With `collapse` disabled the unique trees are plain hierarchies with no
    directory marked as an entire subtree.
    """
    active = settings or ScanSettings()
    baseline_profile: dict[str, object] = {}
    candidate_profile: dict[str, object] = {}
    baseline = scan_directories(
        baseline_roots,
        max_files=max_files,
        settings=active,
        on_warning=on_warning,
        profile=baseline_profile,
    )
    candidate = scan_directories(
        candidate_roots,
        max_files=max_files,
        settings=active,
        on_warning=on_warning,
        profile=candidate_profile,
    )
    result = compare_catalogs(baseline, candidate)
    if collapse:
        baseline_tree = build_collapsed_tree(result.unique_to_baseline, baseline, candidate)
        candidate_tree = build_collapsed_tree(result.unique_to_candidate, candidate, baseline)
    else:
        baseline_tree = build_tree(result.unique_to_baseline)
        candidate_tree = build_tree(result.unique_to_candidate)
    return ComparisonRun(
        baseline_roots=tuple(baseline_roots),
        candidate_roots=tuple(candidate_roots),
        baseline=baseline,
        candidate=candidate,
        result=result,
        unique_to_baseline_tree=CollapsedTree(root=baseline_tree, source=baseline),
        unique_to_candidate_tree=CollapsedTree(root=candidate_tree, source=candidate),
        scan_profiles={"baseline": baseline_profile, "candidate": candidate_profile},
    )
