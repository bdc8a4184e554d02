"""Content-first classification of two file catalogs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from dir_compare.scan.models import FileCatalog, FileRecord


@dataclass(slots=True, frozen=True)
class ComparisonResult:
    """Modified and unique files between a baseline and a candidate set."""

    modified: tuple[FileRecord, ...]
    name_mappings: Mapping[str, tuple[FileRecord, ...]]
    unique_to_candidate: tuple[FileRecord, ...]
    unique_to_baseline: tuple[FileRecord, ...]

    @property
    def is_empty(self) -> bool:
        return not (self.modified or self.unique_to_candidate or self.unique_to_baseline)


def compare_catalogs(baseline: FileCatalog, candidate: FileCatalog) -> ComparisonResult:
    """Classify every file by fingerprint first, then by basename.

    A candidate file whose content exists anywhere in the baseline is
    identical and not reported. Otherwise a shared basename makes it
    modified, and no match at all makes it unique. Baseline files are only
    checked for uniqueness; modified files are reported from the candidate
    side.
    """
    modified: list[FileRecord] = []
    name_mappings: dict[str, tuple[FileRecord, ...]] = {}
    unique_to_candidate: list[FileRecord] = []
    for record in candidate:
        if baseline.has_fingerprint(record.fingerprint):
            continue
        same_name = baseline.by_name.get(record.name)
        if same_name:
            modified.append(record)
            name_mappings[record.name] = same_name
            continue
        unique_to_candidate.append(record)

    unique_to_baseline = [
        record
        for record in baseline
        if not candidate.has_fingerprint(record.fingerprint)
        and not candidate.has_name(record.name)
    ]

    return ComparisonResult(
        modified=tuple(modified),
        name_mappings=MappingProxyType(name_mappings),
        unique_to_candidate=tuple(unique_to_candidate),
        unique_to_baseline=tuple(unique_to_baseline),
    )
