"""Typed models for scanned directory sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class FileRecord:
    """Represents one file observed during a scan."""

    relative_path: str
    absolute_path: str
    name: str
    fingerprint: str
    size: int
    root_dir: str

    @property
    def directory(self) -> str:
        """Return the POSIX parent directory, or "" for top-level files."""
        parent = PurePosixPath(self.relative_path).parent.as_posix()
        return "" if parent == "." else parent


@dataclass(slots=True, frozen=True)
class FileCatalog:
    """Read-only collection of file records with name and fingerprint indexes."""

    records: tuple[FileRecord, ...]
    by_name: Mapping[str, tuple[FileRecord, ...]]
    by_fingerprint: Mapping[str, tuple[FileRecord, ...]]
    by_directory: Mapping[str, tuple[FileRecord, ...]]
    directory_paths: frozenset[str]

    @classmethod
    def from_records(cls, records: Iterable[FileRecord]) -> FileCatalog:
        """Build a catalog and its derived indexes in one pass."""
        ordered = tuple(records)
        by_name: dict[str, list[FileRecord]] = {}
        by_fingerprint: dict[str, list[FileRecord]] = {}
        by_directory: dict[str, list[FileRecord]] = {}
        directories: set[str] = set()
        for record in ordered:
            by_name.setdefault(record.name, []).append(record)
            by_fingerprint.setdefault(record.fingerprint, []).append(record)
            directory = record.directory
            by_directory.setdefault(directory, []).append(record)
            if directory:
                directories.add(directory)
                directories.update(
                    parent.as_posix()
                    for parent in PurePosixPath(directory).parents
                    if parent.as_posix() != "."
                )
        return cls(
            records=ordered,
            by_name=_freeze(by_name),
            by_fingerprint=_freeze(by_fingerprint),
            by_directory=_freeze(by_directory),
            directory_paths=frozenset(directories),
        )

    @classmethod
    def empty(cls) -> FileCatalog:
        return cls.from_records(())

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.records)

    def has_fingerprint(self, fingerprint: str) -> bool:
        return fingerprint in self.by_fingerprint

    def has_name(self, name: str) -> bool:
        return name in self.by_name

    def records_in_directory(self, directory: str) -> tuple[FileRecord, ...]:
        """Return records whose immediate parent directory is `directory`."""
        return self.by_directory.get(directory, ())

    @property
    def total_size(self) -> int:
        return sum(record.size for record in self.records)


def _freeze(index: dict[str, list[FileRecord]]) -> Mapping[str, tuple[FileRecord, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in index.items()})
