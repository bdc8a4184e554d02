"""Deterministic file enumeration across the roots of one directory set."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from dir_compare.logging import ScanWarning, WarningSink


class ScanError(Exception):
    """Raised when a root cannot be traversed at all."""

    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"error walking directory {root}: {reason}")
        self.root = root
        self.reason = reason


@dataclass(slots=True, frozen=True)
class CandidateFile:
    """Regular file found during traversal, not yet fingerprinted."""

    relative_path: str
    full_path: Path
    name: str
    size: int
    root_dir: str


@dataclass(slots=True, frozen=True)
class DiscoveryResult:
    """Candidate files plus traversal counters."""

    candidates: tuple[CandidateFile, ...]
    missing_roots: int
    access_errors: int
    limit_reached: bool


def discover_candidates(
    roots: list[str],
    max_files: int | None = None,
    on_warning: WarningSink | None = None,
) -> DiscoveryResult:
    """Enumerate regular files under every root in lexical depth-first order.

    Directories are not reported. A positive `max_files` caps the number of
    candidates across all roots combined; traversal stops once it is reached.
    A root that is a regular file is listed under its basename. Missing
    roots, unreadable entries and links that do not resolve to a regular
    file are reported through `on_warning` and skipped.
    """
    limit = max_files if max_files is not None and max_files > 0 else None
    emit = on_warning or _discard
    candidates: list[CandidateFile] = []
    missing_roots = 0
    access_errors = 0

    for root in roots:
        if limit is not None and len(candidates) >= limit:
            return DiscoveryResult(tuple(candidates), missing_roots, access_errors, True)
        root_path = Path(root)
        if not root_path.exists():
            missing_roots += 1
            emit(ScanWarning(kind="missing_root", path=root, message="directory does not exist"))
            continue
        if root_path.is_file():
            try:
                size = root_path.stat().st_size
            except OSError as exc:
                access_errors += 1
                emit(ScanWarning(kind="access_error", path=root, message=_reason(exc)))
                continue
            candidates.append(
                CandidateFile(
                    relative_path=root_path.name,
                    full_path=root_path,
                    name=root_path.name,
                    size=size,
                    root_dir=root,
                )
            )
            continue
        if not root_path.is_dir():
            raise ScanError(root, "not a directory or regular file")

        stack: list[Iterator[os.DirEntry[str]]] = []
        entries, failed = _sorted_entries(root_path, emit)
        access_errors += failed
        stack.append(iter(entries))
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            try:
                if entry.is_dir(follow_symlinks=False):
                    children, failed = _sorted_entries(Path(entry.path), emit)
                    access_errors += failed
                    stack.append(iter(children))
                    continue
                if not entry.is_file():
                    if entry.is_symlink():
                        access_errors += 1
                        emit(
                            ScanWarning(
                                kind="access_error",
                                path=entry.path,
                                message="symbolic link does not point to a regular file",
                            )
                        )
                    continue
                stat = entry.stat()
            except OSError as exc:
                access_errors += 1
                emit(ScanWarning(kind="access_error", path=entry.path, message=_reason(exc)))
                continue
            if limit is not None and len(candidates) >= limit:
                return DiscoveryResult(tuple(candidates), missing_roots, access_errors, True)
            full_path = Path(entry.path)
            candidates.append(
                CandidateFile(
                    relative_path=full_path.relative_to(root_path).as_posix(),
                    full_path=full_path,
                    name=entry.name,
                    size=stat.st_size,
                    root_dir=root,
                )
            )

    return DiscoveryResult(tuple(candidates), missing_roots, access_errors, False)


def _sorted_entries(directory: Path, emit: WarningSink) -> tuple[list[os.DirEntry[str]], int]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda item: item.name), 0
    except OSError as exc:
        emit(ScanWarning(kind="access_error", path=str(directory), message=_reason(exc)))
        return [], 1


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _discard(warning: ScanWarning) -> None:
    return None
