"""File discovery, fingerprinting and catalogs."""

from .discovery import CandidateFile, DiscoveryResult, ScanError, discover_candidates
from .hashing import EMPTY_FINGERPRINT, sha256_file
from .models import FileCatalog, FileRecord
from .scanner import (
    BatchResult,
    ScanProfile,
    hash_batch,
    partition_batches,
    scan_directories,
    worker_count,
)

__all__ = [
    "BatchResult",
    "CandidateFile",
    "DiscoveryResult",
    "EMPTY_FINGERPRINT",
    "FileCatalog",
    "FileRecord",
    "ScanError",
    "ScanProfile",
    "discover_candidates",
    "hash_batch",
    "partition_batches",
    "scan_directories",
    "sha256_file",
    "worker_count",
]
