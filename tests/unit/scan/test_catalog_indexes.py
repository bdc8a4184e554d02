from __future__ import annotations

import pytest

from dir_compare.scan import FileCatalog, FileRecord


def _record(relative_path: str, fingerprint: str) -> FileRecord:
    return FileRecord(
        relative_path=relative_path,
        absolute_path=f"/root/{relative_path}",
        name=relative_path.rsplit("/", 1)[-1],
        fingerprint=fingerprint,
        size=len(fingerprint),
        root_dir="/root",
    )


def test_indexes_keep_every_record_sharing_a_key() -> None:
    first = _record("a/notes.txt", "h1")
    second = _record("b/notes.txt", "h2")
    copy = _record("c/copy.txt", "h1")

    catalog = FileCatalog.from_records([first, second, copy])

    assert catalog.by_name["notes.txt"] == (first, second)
    assert catalog.by_fingerprint["h1"] == (first, copy)
    assert catalog.has_name("copy.txt")
    assert not catalog.has_fingerprint("h3")
    assert len(catalog) == 3
    assert list(catalog) == [first, second, copy]
    assert catalog.total_size == 6


def test_directory_paths_include_every_ancestor() -> None:
    catalog = FileCatalog.from_records(
        [_record("top.txt", "h0"), _record("a/b/c/deep.txt", "h1"), _record("x/y.txt", "h2")]
    )

    assert catalog.directory_paths == frozenset({"a", "a/b", "a/b/c", "x"})
    assert catalog.records_in_directory("a/b/c")[0].name == "deep.txt"
    assert catalog.records_in_directory("a/b") == ()
    assert catalog.records_in_directory("")[0].name == "top.txt"


def test_empty_catalog_has_no_entries() -> None:
    catalog = FileCatalog.empty()

    assert len(catalog) == 0
    assert catalog.directory_paths == frozenset()
    assert dict(catalog.by_name) == {}


def test_catalog_indexes_reject_mutation() -> None:
    record = _record("a/notes.txt", "h1")
    catalog = FileCatalog.from_records([record])

    with pytest.raises(TypeError):
        catalog.by_name["notes.txt"] = ()  # type: ignore[index]
    with pytest.raises(TypeError):
        catalog.by_fingerprint["h2"] = (record,)  # type: ignore[index]
    with pytest.raises(TypeError):
        del catalog.by_directory["a"]  # type: ignore[attr-defined]
    assert catalog.has_fingerprint("h1")
    assert not catalog.has_fingerprint("h2")
