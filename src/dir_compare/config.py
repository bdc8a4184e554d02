"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_FILENAME = "dir_compare.toml"

DEFAULT_PARALLEL_THRESHOLD = 20
DEFAULT_MIN_BATCH_SIZE = 10
DEFAULT_WORKER_FRACTION = 0.75
DEFAULT_CHUNK_BYTES = 1024 * 128
OUTPUT_FORMATS = ("text", "json")


@dataclass(slots=True, frozen=True)
class ScanSettings:
    """Scanner tuning knobs."""

    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD
    min_batch_size: int = DEFAULT_MIN_BATCH_SIZE
    worker_fraction: float = DEFAULT_WORKER_FRACTION
    chunk_bytes: int = DEFAULT_CHUNK_BYTES
    max_files: int | None = None


@dataclass(slots=True, frozen=True)
class ReportSettings:
    """Which result categories to present and how."""

    show_modified: bool = False
    show_unique_baseline: bool = False
    show_unique_candidate: bool = False
    show_details: bool = False
    output_format: str = "text"


@dataclass(slots=True, frozen=True)
class CompareConfig:
    """Fully merged comparison configuration."""

    scan: ScanSettings
    report: ReportSettings

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for reports."""
        return {
            "scan": {
                "parallel_threshold": self.scan.parallel_threshold,
                "min_batch_size": self.scan.min_batch_size,
                "worker_fraction": self.scan.worker_fraction,
                "chunk_bytes": self.scan.chunk_bytes,
                "max_files": self.scan.max_files,
            },
            "report": {
                "show_modified": self.report.show_modified,
                "show_unique_baseline": self.report.show_unique_baseline,
                "show_unique_candidate": self.report.show_unique_candidate,
                "show_details": self.report.show_details,
                "output_format": self.report.output_format,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    parallel_threshold: int | None = None
    min_batch_size: int | None = None
    worker_fraction: float | None = None
    chunk_bytes: int | None = None
    max_files: int | None = None
    show_modified: bool | None = None
    show_unique_baseline: bool | None = None
    show_unique_candidate: bool | None = None
    show_details: bool | None = None
    output_format: str | None = None


def default_config() -> CompareConfig:
    """Build the built-in default configuration."""
    return CompareConfig(scan=ScanSettings(), report=ReportSettings())


def load_config_file(config_path: Path) -> dict[str, object]:
    """Load an optional TOML config file."""
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{config_path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def merge_config(
    base: CompareConfig, payload: dict[str, object], overrides: CliOverrides
) -> CompareConfig:
    """Merge defaults, config file, then CLI overrides."""
    scan_payload = _get_table(payload, "scan")
    report_payload = _get_table(payload, "report")

    scan = ScanSettings(
        parallel_threshold=_optional_positive_int(
            scan_payload.get("parallel_threshold"),
            "scan.parallel_threshold",
            base.scan.parallel_threshold,
        ),
        min_batch_size=_optional_positive_int(
            scan_payload.get("min_batch_size"),
            "scan.min_batch_size",
            base.scan.min_batch_size,
        ),
        worker_fraction=_optional_fraction(
            scan_payload.get("worker_fraction"),
            "scan.worker_fraction",
            base.scan.worker_fraction,
        ),
        chunk_bytes=_optional_positive_int(
            scan_payload.get("chunk_bytes"),
            "scan.chunk_bytes",
            base.scan.chunk_bytes,
        ),
        max_files=_optional_file_cap(
            scan_payload.get("max_files"), "scan.max_files", base.scan.max_files
        ),
    )
    report = ReportSettings(
        show_modified=_optional_bool(
            report_payload.get("show_modified"),
            "report.show_modified",
            base.report.show_modified,
        ),
        show_unique_baseline=_optional_bool(
            report_payload.get("show_unique_baseline"),
            "report.show_unique_baseline",
            base.report.show_unique_baseline,
        ),
        show_unique_candidate=_optional_bool(
            report_payload.get("show_unique_candidate"),
            "report.show_unique_candidate",
            base.report.show_unique_candidate,
        ),
        show_details=_optional_bool(
            report_payload.get("show_details"),
            "report.show_details",
            base.report.show_details,
        ),
        output_format=_optional_format(
            report_payload.get("output_format"),
            "report.output_format",
            base.report.output_format,
        ),
    )
    return apply_cli_overrides(CompareConfig(scan=scan, report=report), overrides)


def apply_cli_overrides(config: CompareConfig, overrides: CliOverrides) -> CompareConfig:
    """Apply startup overrides at highest precedence."""
    scan = ScanSettings(
        parallel_threshold=_optional_positive_int(
            overrides.parallel_threshold,
            "overrides.parallel_threshold",
            config.scan.parallel_threshold,
        ),
        min_batch_size=_optional_positive_int(
            overrides.min_batch_size,
            "overrides.min_batch_size",
            config.scan.min_batch_size,
        ),
        worker_fraction=_optional_fraction(
            overrides.worker_fraction,
            "overrides.worker_fraction",
            config.scan.worker_fraction,
        ),
        chunk_bytes=_optional_positive_int(
            overrides.chunk_bytes,
            "overrides.chunk_bytes",
            config.scan.chunk_bytes,
        ),
        max_files=_optional_file_cap(
            overrides.max_files, "overrides.max_files", config.scan.max_files
        ),
    )
    report = ReportSettings(
        show_modified=_pick(overrides.show_modified, config.report.show_modified),
        show_unique_baseline=_pick(
            overrides.show_unique_baseline, config.report.show_unique_baseline
        ),
        show_unique_candidate=_pick(
            overrides.show_unique_candidate, config.report.show_unique_candidate
        ),
        show_details=_pick(overrides.show_details, config.report.show_details),
        output_format=_optional_format(
            overrides.output_format, "overrides.output_format", config.report.output_format
        ),
    )
    return CompareConfig(scan=scan, report=report)


def load_effective_config(
    config_path: Path | None = None, overrides: CliOverrides | None = None
) -> CompareConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    path = config_path if config_path is not None else Path.cwd() / DEFAULT_CONFIG_FILENAME
    payload = load_config_file(path)
    return merge_config(default_config(), payload, overrides or CliOverrides())


def _pick(value: bool | None, default: bool) -> bool:
    return value if value is not None else default


def _optional_positive_int(value: object, name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    return value


def _optional_file_cap(value: object, name: str, default: int | None) -> int | None:
    """Validate a file cap; non-positive integers mean unlimited."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Config field '{name}' must be an integer.")
    if value < 1:
        return None
    return value


def _optional_fraction(value: object, name: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Config field '{name}' must be a number in (0, 1].")
    if not 0 < value <= 1:
        raise ValueError(f"Config field '{name}' must be a number in (0, 1].")
    return float(value)


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_format(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if value not in OUTPUT_FORMATS:
        raise ValueError(f"Config field '{name}' must be one of: {', '.join(OUTPUT_FORMATS)}.")
    return str(value)
