"""Fingerprint discovered files sequentially or on a worker pool."""

from __future__ import annotations

import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import asdict, dataclass

from dir_compare.config import ScanSettings
from dir_compare.logging import ScanWarning, WarningSink
from dir_compare.scan.discovery import CandidateFile, discover_candidates
from dir_compare.scan.hashing import sha256_file
from dir_compare.scan.models import FileCatalog, FileRecord


@dataclass(slots=True, frozen=True)
class ScanProfile:
    """Diagnostics for one scan pass."""

    strategy: str
    total_candidates: int
    hashed_files: int
    hash_errors: int
    missing_roots: int
    access_errors: int
    limit_reached: bool
    workers: int
    batches: int
    enumerate_seconds: float
    hash_seconds: float
    total_seconds: float


@dataclass(slots=True, frozen=True)
class BatchResult:
    """Records and warnings produced by hashing one batch."""

    records: tuple[FileRecord, ...]
    warnings: tuple[ScanWarning, ...]


def scan_directories(
    roots: list[str],
    *,
    max_files: int | None = None,
    settings: ScanSettings | None = None,
    on_warning: WarningSink | None = None,
    profile: dict[str, object] | None = None,
) -> FileCatalog:
    """Scan one directory set into a fingerprinted catalog.

    Files are enumerated first. Fewer than `settings.parallel_threshold`
    candidates are hashed on the calling thread; otherwise batches are
    hashed on a thread pool and assembled in completion order. Unreadable
    files are reported through `on_warning` and left out of the catalog.
    """
    started = time.perf_counter()
    active = settings or ScanSettings()
    cap = max_files if max_files is not None else active.max_files
    discovery = discover_candidates(roots, max_files=cap, on_warning=on_warning)
    enumerate_seconds = time.perf_counter() - started

    candidates = list(discovery.candidates)
    hash_started = time.perf_counter()
    if len(candidates) < active.parallel_threshold:
        strategy = "sequential"
        workers = 1
        batches = 1 if candidates else 0
        result = hash_batch(candidates, active.chunk_bytes)
        results = [result]
    else:
        strategy = "parallel"
        workers = worker_count(active.worker_fraction)
        jobs = partition_batches(candidates, workers, active.min_batch_size)
        batches = len(jobs)
        results = _hash_in_parallel(jobs, workers, active.chunk_bytes)
    hash_seconds = time.perf_counter() - hash_started

    records: list[FileRecord] = []
    hash_errors = 0
    for result in results:
        records.extend(result.records)
        hash_errors += len(result.warnings)
        if on_warning is not None:
            for warning in result.warnings:
                on_warning(warning)

    catalog = FileCatalog.from_records(records)
    if profile is not None:
        payload = ScanProfile(
            strategy=strategy,
            total_candidates=len(candidates),
            hashed_files=len(records),
            hash_errors=hash_errors,
            missing_roots=discovery.missing_roots,
            access_errors=discovery.access_errors,
            limit_reached=discovery.limit_reached,
            workers=workers,
            batches=batches,
            enumerate_seconds=enumerate_seconds,
            hash_seconds=hash_seconds,
            total_seconds=time.perf_counter() - started,
        )
        profile.update(asdict(payload))
    return catalog


def worker_count(fraction: float, cpu_count: int | None = None) -> int:
    """Size the pool to a fraction of logical cores, never below one."""
    cores = cpu_count if cpu_count is not None else (os.cpu_count() or 1)
    return max(1, int(cores * fraction))


def partition_batches(
    candidates: list[CandidateFile], workers: int, min_batch_size: int
) -> list[list[CandidateFile]]:
    """Split candidates into contiguous batches, aiming for two per worker."""
    batch_size = max(min_batch_size, len(candidates) // (workers * 2))
    return [
        candidates[start : start + batch_size]
        for start in range(0, len(candidates), batch_size)
    ]


def hash_batch(candidates: list[CandidateFile], chunk_bytes: int) -> BatchResult:
    """Fingerprint every candidate in order, collecting failures as warnings."""
    records: list[FileRecord] = []
    warnings: list[ScanWarning] = []
    for candidate in candidates:
        try:
            fingerprint = sha256_file(candidate.full_path, chunk_bytes)
        except OSError as exc:
            warnings.append(
                ScanWarning(
                    kind="hash_error",
                    path=str(candidate.full_path),
                    message=exc.strerror or str(exc),
                )
            )
            continue
        records.append(
            FileRecord(
                relative_path=candidate.relative_path,
                absolute_path=os.path.abspath(candidate.full_path),
                name=candidate.name,
                fingerprint=fingerprint,
                size=candidate.size,
                root_dir=candidate.root_dir,
            )
        )
    return BatchResult(records=tuple(records), warnings=tuple(warnings))


def _hash_in_parallel(
    jobs: list[list[CandidateFile]], workers: int, chunk_bytes: int
) -> list[BatchResult]:
    results: list[BatchResult] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dir-compare-hash") as executor:
        futures = [executor.submit(hash_batch, job, chunk_bytes) for job in jobs]
        for future in as_completed(futures):
            results.append(future.result())
    return results
