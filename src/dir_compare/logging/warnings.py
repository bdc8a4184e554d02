"""Structured scan warnings and JSONL warning log."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path

WarningSink = Callable[["ScanWarning"], None]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True, frozen=True)
class ScanWarning:
    """Advisory problem observed while scanning one directory set."""

    kind: str
    path: str
    message: str
    timestamp: str = field(default_factory=utc_timestamp)

    def render(self) -> str:
        """Return the human-readable warning line."""
        if self.kind == "missing_root":
            return f"Warning: Directory {self.path} does not exist, skipping..."
        if self.kind == "access_error":
            return f"Warning: Error accessing {self.path}: {self.message}"
        return f"Warning: Could not hash file {self.path}: {self.message}"


class WarningCollector:
    """In-memory warning sink."""

    def __init__(self) -> None:
        self._events: list[ScanWarning] = []

    def __call__(self, warning: ScanWarning) -> None:
        self._events.append(warning)

    @property
    def events(self) -> tuple[ScanWarning, ...]:
        return tuple(self._events)

    def of_kind(self, kind: str) -> list[ScanWarning]:
        return [event for event in self._events if event.kind == kind]


class JsonlWarningLog:
    """Append-only JSONL warning log and bounded reader."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def __call__(self, warning: ScanWarning) -> None:
        self.append(warning)

    def append(self, warning: ScanWarning) -> None:
        """Append one warning as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(warning), sort_keys=True))
            handle.write("\n")

    def read(self, kind: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Read recent warnings, optionally filtered by kind."""
        if limit < 1:
            return []
        entries: list[dict[str, object]] = []
        if not self._path.exists():
            return entries
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                if kind is not None and record.get("kind") != kind:
                    continue
                entries.append(record)
        if len(entries) <= limit:
            return entries
        return entries[-limit:]
