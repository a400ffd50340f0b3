"""CLI entrypoint for jaudit."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from jaudit import __version__
from jaudit.config import JauditConfig, load_config
from jaudit.constants.branding import CLI_DESCRIPTION
from jaudit.constants.reporting import EXIT_CLEAN, EXIT_CONFIG_ERROR, EXIT_FINDINGS, EXIT_PHASE_FAILED
from jaudit.exceptions import ConfigError, JauditError
from jaudit.model import AuditReport
from jaudit.reporting import StdoutReporter, write_json_report
from jaudit.scanner import run_audit


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="jaudit",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    audit = subparsers.add_parser(
        "audit",
        help="Check dependencies against OSV and scan sources for insecure patterns",
    )
    audit.add_argument(
        "-r",
        "--root",
        type=Path,
        default=Path("."),
        help="Project root holding pom.xml or build.gradle (default: current directory)",
    )
    audit.add_argument("-c", "--config", type=Path, help="Explicit config file")
    audit.add_argument("-o", "--output", type=Path, default=None, help="Write a JSON report to this file")
    audit.add_argument("-n", "--no-cache", action="store_true", help="Disable cache reads/writes")
    audit.add_argument("--cache-path", type=Path, default=None, help="Override the cache file location")
    audit.add_argument(
        "--min-severity",
        choices=["low", "medium", "high", "critical"],
        default=None,
        help="Only print source findings at or above this severity",
    )
    audit.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    audit.add_argument("--no-color", action="store_true", help="Disable colored output")
    audit.add_argument("-v", "--verbose", action="store_true", help="Show cache stats, references and diagnostics")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without auditing")
    validate.add_argument("-r", "--root", type=Path, default=Path("."), help="Project root path")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return _handle_validate_config(args)

    if args.command != "audit":
        parser.error(f"Unsupported command: {args.command}")

    try:
        config = load_config(args.root, args.config)
        if args.cache_path is not None:
            config = _with_cache_path(config, args.cache_path)
        report = run_audit(root=args.root, config=config, use_cache=not args.no_cache)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except JauditError as exc:
        print(f"Audit error: {exc}", file=sys.stderr)
        return EXIT_PHASE_FAILED

    if args.output is not None:
        try:
            write_json_report(args.output, report)
        except OSError as exc:
            print(f"Failed to write report to {args.output}: {exc}", file=sys.stderr)
            return EXIT_PHASE_FAILED

    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        reporter = StdoutReporter(report, color=use_color, verbose=args.verbose, min_severity=args.min_severity)
        print(reporter.render())

    return exit_code_for(report)


def exit_code_for(report: AuditReport) -> int:
    """Map a report to a process exit code; a failed phase outranks findings."""
    if report.failed:
        return EXIT_PHASE_FAILED
    if report.has_findings:
        return EXIT_FINDINGS
    return EXIT_CLEAN


def _with_cache_path(config: JauditConfig, cache_path: Path) -> JauditConfig:
    return replace(config, cache_path=cache_path.expanduser().resolve())


def _handle_validate_config(args: argparse.Namespace) -> int:
    """Load the config and report whether it is valid."""
    try:
        load_config(args.root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print("Configuration is valid.")
    return EXIT_CLEAN


if __name__ == "__main__":
    raise SystemExit(main())
