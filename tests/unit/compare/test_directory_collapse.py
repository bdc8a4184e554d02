from __future__ import annotations

import gc
import hashlib

from dir_compare.compare import (
    build_collapsed_tree,
    build_tree,
    collect_files,
    compare_catalogs,
    count_tree_items,
    entire_directories,
    mark_entire_directories,
    prune_empty_directories,
)
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


def _snapshot(node) -> tuple:  # type: ignore[no-untyped-def]
    return (
        node.name,
        node.is_entire_subtree,
        tuple(sorted(record.relative_path for record in node.files)),
        tuple(_snapshot(child) for child in node.sorted_children()),
    )


def test_directory_with_only_unmatched_files_is_entire() -> None:
    source = _catalog({"dir/a.txt": "a", "dir/b.txt": "b"})
    other = _catalog({"elsewhere.txt": "x"})

    root = build_collapsed_tree(source.records, source, other)

    assert root.is_entire_subtree is False
    assert root.children["dir"].is_entire_subtree is True
    assert entire_directories(root) == ["dir"]


def test_partial_match_disqualifies_parent_but_not_clean_child() -> None:
    source = _catalog({"dir/a.txt": "a", "dir/sub/b.txt": "b", "dir/c.txt": "shared"})
    other = _catalog({"copy_of_c.txt": "shared"})
    unique = compare_catalogs(other, source).unique_to_candidate

    root = build_collapsed_tree(unique, source, other)

    directory = root.children["dir"]
    assert directory.is_entire_subtree is False
    assert directory.children["sub"].is_entire_subtree is True
    assert entire_directories(root) == ["dir/sub"]
    assert [record.name for record in directory.files] == ["a.txt"]


def test_matched_file_deep_inside_disqualifies_every_ancestor() -> None:
    source = _catalog(
        {"top/mid/leaf/new.txt": "n", "top/mid/leaf/old.txt": "o", "top/mid/x.txt": "x"}
    )
    other = _catalog({"old.txt": "o"})
    unique = [record for record in source if not other.has_fingerprint(record.fingerprint)]

    root = build_collapsed_tree(unique, source, other)

    top = root.children["top"]
    assert top.is_entire_subtree is False
    assert top.children["mid"].is_entire_subtree is False
    assert top.children["mid"].children["leaf"].is_entire_subtree is False


def test_marked_nodes_have_no_matched_descendants() -> None:
    source = _catalog(
        {
            "a/one.txt": "1",
            "a/b/two.txt": "2",
            "a/b/c/three.txt": "3",
            "a/d/four.txt": "4",
            "e/five.txt": "5",
        }
    )
    other = _catalog({"moved/four.txt": "4"})
    unique = [record for record in source if not other.has_fingerprint(record.fingerprint)]

    root = build_collapsed_tree(unique, source, other)

    def walk(node):  # type: ignore[no-untyped-def]
        yield node
        for child in node.children.values():
            yield from walk(child)

    marked = [node for node in walk(root) if node.is_entire_subtree]
    assert {node.path for node in marked} == {"a/b", "a/b/c", "e"}
    for node in marked:
        prefix = node.path + "/"
        descendants = [record for record in source if record.relative_path.startswith(prefix)]
        assert descendants
        assert not any(other.has_fingerprint(record.fingerprint) for record in descendants)


def test_directory_absent_from_source_is_never_entire() -> None:
    unique_source = _catalog({"ghost/a.txt": "a"})
    real_source = _catalog({"real/a.txt": "a"})
    other = FileCatalog.empty()

    root = build_tree(unique_source.records)
    mark_entire_directories(root, real_source, other)

    assert root.children["ghost"].is_entire_subtree is False


def test_empty_input_yields_empty_root() -> None:
    root = build_collapsed_tree([], FileCatalog.empty(), FileCatalog.empty())

    assert root.name == ""
    assert root.files == []
    assert root.children == {}
    assert root.is_entire_subtree is False
    assert count_tree_items(root) == (0, 0)


def test_single_top_level_file_stays_on_root() -> None:
    source = _catalog({"solo.txt": "s"})

    root = build_collapsed_tree(source.records, source, FileCatalog.empty())

    assert [record.name for record in root.files] == ["solo.txt"]
    assert root.children == {}
    assert root.is_entire_subtree is False


def test_node_paths_follow_parent_links() -> None:
    source = _catalog({"a/b/c/file.txt": "f"})

    root = build_tree(source.records)
    leaf = root.children["a"].children["b"].children["c"]

    assert leaf.path == "a/b/c"
    assert leaf.parent is root.children["a"].children["b"]
    assert root.parent is None
    assert root.path == ""
    assert collect_files(root) == list(source.records)
    assert count_tree_items(root) == (1, 3)


def test_subtree_kept_without_its_root_loses_ancestor_paths() -> None:
    source = _catalog({"a/b/c/file.txt": "f"})
    root = build_tree(source.records)
    middle = root.children["a"].children["b"]
    leaf = middle.children["c"]

    assert leaf.path == "a/b/c"
    del root
    gc.collect()

    assert middle.parent is None
    assert middle.path == "b"
    assert leaf.path == "b/c"


def test_prune_removes_empty_directories_and_is_idempotent() -> None:
    source = _catalog({"keep/a.txt": "a", "drop/inner/b.txt": "b"})
    root = build_tree(source.records)
    root.children["drop"].children["inner"].files.clear()

    assert prune_empty_directories(root) is True
    assert set(root.children) == {"keep"}

    before = _snapshot(root)
    prune_empty_directories(root)
    assert _snapshot(root) == before


def test_prune_reports_empty_root() -> None:
    root = build_tree([])

    assert prune_empty_directories(root) is False


def test_matched_directories_cover_every_ancestor() -> None:
    from dir_compare.compare import directories_with_matches

    source = _catalog({"a/b/c/match.txt": "m", "a/free.txt": "f", "top.txt": "m"})
    other = _catalog({"copy.txt": "m"})

    assert directories_with_matches(source, other) == frozenset({"a", "a/b", "a/b/c"})
