"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from dir_compare.config import OUTPUT_FORMATS, CliOverrides, load_effective_config
from dir_compare.engine import parse_roots, run_comparison
from dir_compare.logging import JsonlWarningLog, ScanWarning, WarningSink
from dir_compare.report import comparison_to_dict, render_text_report
from dir_compare.scan import ScanError

DEFAULT_PREVIEW_COUNT = 10


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for one comparison run."""
    parser = argparse.ArgumentParser(
        prog="dir-compare",
        description="Compare two sets of directories by file content.",
    )
    parser.add_argument("set1", help="Comma-separated list of directories in the first set")
    parser.add_argument("set2", help="Comma-separated list of directories in the second set")
    parser.add_argument("--details", action="store_true", default=None)
    parser.add_argument("--show-modified", action="store_true", default=None)
    parser.add_argument("--show-unique-1", action="store_true", default=None)
    parser.add_argument("--show-unique-2", action="store_true", default=None)
    parser.add_argument("--all", action="store_true", help="Show every result category")
    parser.add_argument("--preview", action="store_true")
    parser.add_argument("--preview-count", type=int, required=False, default=None)
    parser.add_argument("--max-files", type=int, required=False, default=None)
    parser.add_argument("--format", choices=OUTPUT_FORMATS, required=False, default=None)
    parser.add_argument("--config", required=False, default=None)
    parser.add_argument("--warnings-log", required=False, default=None)
    parser.add_argument("--parallel-threshold", type=int, required=False, default=None)
    parser.add_argument("--workers-fraction", type=float, required=False, default=None)
    return parser


def main(
    argv: list[str] | None = None,
    out_stream: TextIO | None = None,
    err_stream: TextIO | None = None,
) -> int:
    """Entrypoint for the directory comparison tool."""
    out = out_stream or sys.stdout
    err = err_stream or sys.stderr
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    preview = args.preview or args.preview_count is not None
    preview_count = DEFAULT_PREVIEW_COUNT
    if args.preview_count is not None:
        if args.preview_count < 1:
            err.write(
                f"Invalid preview count: {args.preview_count}. "
                f"Using default of {DEFAULT_PREVIEW_COUNT}.\n"
            )
        else:
            preview_count = args.preview_count

    overrides = CliOverrides(
        parallel_threshold=args.parallel_threshold,
        worker_fraction=args.workers_fraction,
        max_files=preview_count if preview else args.max_files,
        show_modified=True if args.all else args.show_modified,
        show_unique_baseline=True if args.all else args.show_unique_1,
        show_unique_candidate=True if args.all else args.show_unique_2,
        show_details=args.details,
        output_format=args.format,
    )
    try:
        config = load_effective_config(
            config_path=Path(args.config) if args.config is not None else None,
            overrides=overrides,
        )
    except ValueError as exc:
        err.write(f"Error: {exc}\n")
        return 1

    baseline_roots = parse_roots(args.set1)
    candidate_roots = parse_roots(args.set2)
    if not baseline_roots or not candidate_roots:
        err.write("Error: both directory sets must name at least one directory.\n")
        return 1

    sinks: list[WarningSink] = [_stream_sink(err)]
    if args.warnings_log is not None:
        try:
            sinks.append(JsonlWarningLog(Path(args.warnings_log)))
        except OSError as exc:
            err.write(f"Error: cannot open warnings log {args.warnings_log}: {exc}\n")
            return 1

    def on_warning(warning: ScanWarning) -> None:
        for sink in sinks:
            sink(warning)

    try:
        run = run_comparison(
            baseline_roots,
            candidate_roots,
            settings=config.scan,
            collapse=not preview,
            on_warning=on_warning,
        )
    except ScanError as exc:
        err.write(f"Error: {exc}\n")
        return 1

    if config.report.output_format == "json":
        payload = comparison_to_dict(run, config.report)
        payload["preview"] = preview
        payload["config"] = config.to_public_dict()
        out.write(f"{json.dumps(payload, sort_keys=True, indent=2)}\n")
        return 0

    if preview:
        out.write(f"PREVIEW: processing the first {preview_count} files of each set\n\n")
    out.write(render_text_report(run, config.report))
    if preview:
        out.write("\nTo see complete results, run the same command without --preview\n")
    return 0


def _stream_sink(stream: TextIO) -> WarningSink:
    def write(warning: ScanWarning) -> None:
        stream.write(f"{warning.render()}\n")

    return write


if __name__ == "__main__":
    raise SystemExit(main())
