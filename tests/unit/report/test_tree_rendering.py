from __future__ import annotations

import hashlib

from dir_compare.compare import build_collapsed_tree, build_tree
from dir_compare.report import render_tree, tree_to_dict
from dir_compare.scan import FileCatalog, FileRecord


def _catalog(files: dict[str, str]) -> FileCatalog:
    return FileCatalog.from_records(
        FileRecord(
            relative_path=path,
            absolute_path=f"/set/{path}",
            name=path.rsplit("/", 1)[-1],
            fingerprint=hashlib.sha256(content.encode("utf-8")).hexdigest(),
            size=len(content),
            root_dir="/set",
        )
        for path, content in files.items()
    )


def test_entire_directory_hides_its_contents() -> None:
    source = _catalog({"z.txt": "z", "new/a.txt": "a", "new/deep/b.txt": "b", "mix/c.txt": "c"})
    other = _catalog({"c_copy.txt": "c", "mix_name.txt": "other"})
    unique = [record for record in source if not other.has_fingerprint(record.fingerprint)]

    lines = render_tree(build_collapsed_tree(unique, source, other))

    assert lines == [
        "├── z.txt",
        "└── new/ (entire directory)",
    ]


def test_details_and_name_mappings() -> None:
    baseline = _catalog({"docs/report.txt": "old"})
    modified = _catalog({"archive/report.txt": "newer"})

    lines = render_tree(
        build_tree(modified.records),
        show_details=True,
        name_mappings={"report.txt": baseline.records},
    )

    assert lines == [
        "└── archive/",
        "    └── report.txt (5 bytes) -> docs/report.txt",
    ]


def test_nested_connectors() -> None:
    source = _catalog({"a/one.txt": "1", "a/b/two.txt": "2", "c/three.txt": "3"})

    lines = render_tree(build_tree(source.records))

    assert lines == [
        "├── a/",
        "│   ├── one.txt",
        "│   └── b/",
        "│       └── two.txt",
        "└── c/",
        "    └── three.txt",
    ]


def test_tree_to_dict_keeps_collapsed_contents() -> None:
    source = _catalog({"new/a.txt": "a"})

    payload = tree_to_dict(build_collapsed_tree(source.records, source, FileCatalog.empty()))

    child = payload["children"][0]
    assert child["path"] == "new"
    assert child["entire_directory"] is True
    assert child["files"] == ["new/a.txt"]
