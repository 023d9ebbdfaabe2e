"""Command-line interface for modgraph."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from artifacts.renderers import UnsupportedFormatError
from artifacts.write import analyze_root, default_output_path, write_report
from contract.artifacts import (
    DEPENDENCY_REPORT_JSON,
    REPORT_FORMAT_SPECS,
    ReportFormat,
)
from contract.validation import validate_report
from logging_setup import configure_logging
from rules.config import CONFIG_FILENAME, ConfigError, load_config
from verify.verify import verify_determinism

STDOUT_DESTINATION = "-"


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _format_epilog() -> str:
    lines = ["formats:"]
    for fmt, spec in REPORT_FORMAT_SPECS.items():
        lines.append(f"  {fmt.value:<8} {spec.description}")
    lines.extend(
        [
            "",
            "naming:",
            "  Modules are named after their directory by default. Imports name",
            f"  classes (UsersModule), so set naming = \"class\" in {CONFIG_FILENAME}",
            "  for imports to resolve and cycles to be found.",
        ]
    )
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modgraph")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze module dependencies and render a report",
        epilog=_format_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_common_paths(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ReportFormat],
        default=None,
        help="Report format (default: config format, else text)",
    )
    analyze_parser.add_argument(
        "--output",
        default=None,
        help=(
            "Destination file relative to root, or '-' for stdout (default: "
            "stdout for text, a format-specific file under root otherwise)"
        ),
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a JSON dependency report"
    )
    validate_parser.add_argument("report", help="Path to a JSON report")

    verify_parser = subparsers.add_parser(
        "verify", help="Verify a JSON report matches a fresh analysis"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--report",
        default=None,
        help=f"JSON report to verify (default: <root>/{DEPENDENCY_REPORT_JSON})",
    )

    return parser


def _resolve_destination(
    root: Path, fmt: ReportFormat, output: str | None
) -> Path | None:
    if output == STDOUT_DESTINATION:
        return None
    if output is None:
        if fmt is ReportFormat.TEXT:
            return None
        return default_output_path(root, fmt)
    # Relative destinations land under the analyzed root.
    return (root / Path(output).expanduser()).resolve()


def _handle_analyze(root: Path, fmt_value: str | None, output: str | None) -> int:
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    fmt = ReportFormat(fmt_value) if fmt_value else config.format
    report = analyze_root(root, config=config)
    if not report.modules:
        sys.stderr.write(f"No modules found under {root}.\n")

    destination = _resolve_destination(root, fmt, output)
    try:
        rendered = write_report(report, fmt, destination)
    except UnsupportedFormatError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if destination is None:
        sys.stdout.write(rendered)
    else:
        sys.stderr.write(f"{fmt.value} report exported to {destination}\n")
    return 0


def _handle_validate(report: str) -> int:
    report_path = Path(report).expanduser().resolve()
    result = validate_report(report_path)
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, report: str | None) -> int:
    report_path = (
        root / DEPENDENCY_REPORT_JSON
        if report is None
        else Path(report).expanduser().resolve()
    )
    try:
        config = load_config(root)
        result = verify_determinism(root=root, report_path=report_path, config=config)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (FileNotFoundError, IsADirectoryError) as exc:
        sys.stderr.write(f"report: {report_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for line in result.diff:
            sys.stderr.write(f"{line}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.command == "validate":
        return _handle_validate(args.report)

    root = Path(args.root).expanduser().resolve()

    if args.command == "analyze":
        return _handle_analyze(root, args.format, args.output)

    if args.command == "verify":
        return _handle_verify(root, args.report)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
