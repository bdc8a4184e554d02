"""Streaming content fingerprints."""

from __future__ import annotations

import hashlib
from pathlib import Path

from dir_compare.config import DEFAULT_CHUNK_BYTES

EMPTY_FINGERPRINT = hashlib.sha256(b"").hexdigest()


def sha256_file(path: Path, chunk_bytes: int = DEFAULT_CHUNK_BYTES) -> str:
    """Compute SHA-256 hash in deterministic chunked reads."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        while True:
            chunk = handle.read(chunk_bytes)
            if not chunk:
                break
            digest.update(chunk)
    return digest.hexdigest()
