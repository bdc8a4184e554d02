"""Text and JSON rendering of comparison runs."""

from __future__ import annotations

from collections.abc import Mapping

from dir_compare.compare import TreeNode, build_tree, count_tree_items, entire_directories
from dir_compare.config import ReportSettings
from dir_compare.engine import ComparisonRun
from dir_compare.scan import FileRecord

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_SPACE = "    "
_RULE = "=" * 51


def render_tree(
    node: TreeNode,
    *,
    show_details: bool = False,
    name_mappings: Mapping[str, tuple[FileRecord, ...]] | None = None,
) -> list[str]:
    """Render a tree as connector-prefixed lines; entire subtrees hide their contents."""
    lines: list[str] = []
    _render_node(node, "", True, show_details, name_mappings, lines)
    return lines


def _render_node(
    node: TreeNode,
    prefix: str,
    is_last: bool,
    show_details: bool,
    name_mappings: Mapping[str, tuple[FileRecord, ...]] | None,
    lines: list[str],
) -> None:
    if node.name != "":
        connector = _LAST if is_last else _BRANCH
        suffix = " (entire directory)" if node.is_entire_subtree else ""
        lines.append(f"{prefix}{connector}{node.name}/{suffix}")
        prefix += _SPACE if is_last else _PIPE
    if node.is_entire_subtree:
        return

    children = node.sorted_children()
    files = sorted(node.files, key=lambda record: record.relative_path)
    for index, record in enumerate(files):
        last_file = index == len(files) - 1 and not children
        connector = _LAST if last_file else _BRANCH
        lines.append(f"{prefix}{connector}{_file_label(record, show_details, name_mappings)}")
    for index, child in enumerate(children):
        _render_node(
            child, prefix, index == len(children) - 1, show_details, name_mappings, lines
        )


def _file_label(
    record: FileRecord,
    show_details: bool,
    name_mappings: Mapping[str, tuple[FileRecord, ...]] | None,
) -> str:
    label = record.name
    if show_details:
        label += f" ({record.size} bytes)"
    if name_mappings is not None:
        mapped = name_mappings.get(record.name)
        if mapped:
            label += f" -> {mapped[0].relative_path}"
    return label


def render_text_report(run: ComparisonRun, settings: ReportSettings) -> str:
    """Render the full human-readable report."""
    baseline_label = ", ".join(run.baseline_roots)
    candidate_label = ", ".join(run.candidate_roots)
    result = run.result
    lines = [
        "Directory Comparison",
        "=" * 20,
        "",
        f"Set 1 directories: {baseline_label}",
        f"Set 2 directories: {candidate_label}",
        f"Set 1 files: {len(run.baseline)}",
        f"Set 2 files: {len(run.candidate)}",
        "",
    ]

    if settings.show_modified:
        if result.modified:
            lines.append(
                f"Files with same name but different content ({len(result.modified)} files)"
                f" - Set 2 ({candidate_label}) -> Set 1 ({baseline_label}):"
            )
            lines.extend([_RULE, ""])
            lines.extend(
                render_tree(
                    build_tree(result.modified),
                    show_details=settings.show_details,
                    name_mappings=result.name_mappings,
                )
            )
        else:
            lines.append("No files found with same name but different content.")
        lines.append("")

    if settings.show_unique_candidate:
        lines.extend(
            _unique_section(
                "Set 2",
                candidate_label,
                "Set 1",
                baseline_label,
                result.unique_to_candidate,
                run.unique_to_candidate_tree.root,
                settings.show_details,
            )
        )
    if settings.show_unique_baseline:
        lines.extend(
            _unique_section(
                "Set 1",
                baseline_label,
                "Set 2",
                candidate_label,
                result.unique_to_baseline,
                run.unique_to_baseline_tree.root,
                settings.show_details,
            )
        )

    lines.extend(_summary(run, settings))
    return "\n".join(lines) + "\n"


def _unique_section(
    side: str,
    side_label: str,
    other: str,
    other_label: str,
    records: tuple[FileRecord, ...],
    root: TreeNode,
    show_details: bool,
) -> list[str]:
    if not records:
        return [f"No unique files found in {side}.", ""]
    lines = [
        f"Files unique to {side} ({side_label}) - not found in {other} ({other_label})"
        f" ({len(records)} files):",
        _RULE,
        "",
    ]
    lines.extend(render_tree(root, show_details=show_details))
    lines.append("")
    return lines


def _summary(run: ComparisonRun, settings: ReportSettings) -> list[str]:
    result = run.result
    lines = [
        "Summary:",
        f"  - Files in Set 1: {len(run.baseline)}",
        f"  - Files in Set 2: {len(run.candidate)}",
    ]
    sizes: list[str] = []
    if settings.show_modified:
        lines.append(f"  - Same name, different content: {len(result.modified)}")
        sizes.append(_size_line("Same name, different content", result.modified))
    if settings.show_unique_candidate:
        lines.append(f"  - Unique to Set 2: {len(result.unique_to_candidate)}")
        sizes.append(_size_line("Unique to Set 2", result.unique_to_candidate))
    if settings.show_unique_baseline:
        lines.append(f"  - Unique to Set 1: {len(result.unique_to_baseline)}")
        sizes.append(_size_line("Unique to Set 1", result.unique_to_baseline))
    sizes = [line for line in sizes if line]
    if sizes:
        lines.append("  - Total sizes:")
        lines.extend(sizes)
    return lines


def _size_line(label: str, records: tuple[FileRecord, ...]) -> str:
    total = sum(record.size for record in records)
    if total == 0:
        return ""
    return f"    - {label}: {total} bytes"


def record_to_dict(record: FileRecord) -> dict[str, object]:
    return {
        "relative_path": record.relative_path,
        "name": record.name,
        "fingerprint": record.fingerprint,
        "size": record.size,
        "root_dir": record.root_dir,
    }


def tree_to_dict(node: TreeNode) -> dict[str, object]:
    """Serialize a tree; entire subtrees keep their contents for consumers."""
    return {
        "name": node.name,
        "path": node.path,
        "entire_directory": node.is_entire_subtree,
        "files": [
            record.relative_path
            for record in sorted(node.files, key=lambda item: item.relative_path)
        ],
        "children": [tree_to_dict(child) for child in node.sorted_children()],
    }


def comparison_to_dict(run: ComparisonRun, settings: ReportSettings) -> dict[str, object]:
    """Build the JSON payload for the enabled result categories."""
    result = run.result
    payload: dict[str, object] = {
        "baseline": {"roots": list(run.baseline_roots), "file_count": len(run.baseline)},
        "candidate": {"roots": list(run.candidate_roots), "file_count": len(run.candidate)},
    }
    if settings.show_modified:
        payload["modified"] = [
            {
                **record_to_dict(record),
                "replaces": [
                    item.relative_path for item in result.name_mappings.get(record.name, ())
                ],
            }
            for record in sorted(result.modified, key=lambda item: item.relative_path)
        ]
    if settings.show_unique_candidate:
        payload["unique_to_candidate"] = _unique_payload(
            result.unique_to_candidate, run.unique_to_candidate_tree.root
        )
    if settings.show_unique_baseline:
        payload["unique_to_baseline"] = _unique_payload(
            result.unique_to_baseline, run.unique_to_baseline_tree.root
        )
    return payload


def _unique_payload(records: tuple[FileRecord, ...], root: TreeNode) -> dict[str, object]:
    files, dirs = count_tree_items(root)
    return {
        "count": len(records),
        "total_size": sum(record.size for record in records),
        "files": [
            record_to_dict(record)
            for record in sorted(records, key=lambda item: item.relative_path)
        ],
        "entire_directories": entire_directories(root),
        "tree": tree_to_dict(root),
        "tree_counts": {"files": files, "directories": dirs},
    }
