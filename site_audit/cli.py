"""CLI entry point for site-audit."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime

from site_audit import __version__

# File extensions per output format
_FORMAT_EXT = {"json": ".json", "markdown": ".md", "html": ".html"}

_KNOWN_COMMANDS = {"audit", "list-detectors"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-audit",
        description="Audit a website repository for performance, code quality, SEO, "
        "accessibility and security issues.",
    )
    parser.add_argument("--version", action="version", version=f"site-audit {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands (default: audit)")

    # -- audit --
    audit_parser = subparsers.add_parser("audit", help="Audit a checked-out website repository")
    audit_parser.add_argument("path", help="Path to the repository root")
    _add_selection_args(audit_parser)
    _add_output_args(audit_parser)
    audit_parser.add_argument("--config", "-c", help="Path to site-audit.yaml (default: auto-discover)")
    audit_parser.add_argument("--verbose", "-v", action="store_true", help="Print progress")

    # -- list-detectors --
    list_parser = subparsers.add_parser("list-detectors", help="List all available detectors")
    list_parser.add_argument(
        "--categories",
        help="Comma-separated list of categories to filter",
    )

    return parser


def _add_selection_args(parser: argparse.ArgumentParser):
    grp = parser.add_argument_group("detector selection")
    grp.add_argument(
        "--categories",
        help="Comma-separated list of categories to run (default: all)",
    )
    grp.add_argument("--exclude", help="Comma-separated detector names to skip")
    grp.add_argument("--include-only", help="Comma-separated detector names to run exclusively")


def _add_output_args(parser: argparse.ArgumentParser):
    grp = parser.add_argument_group("output")
    grp.add_argument(
        "--format",
        "-f",
        choices=["json", "markdown", "html"],
        default="html",
        help="Report format (default: html)",
    )
    grp.add_argument("--output", "-o", help="Output file path (default: ./reports/<name>_<timestamp>.<ext>)")
    grp.add_argument("--no-todo", action="store_true", help="Omit the To Do list from the report")


def _split(value: str | None) -> set[str] | None:
    if not value:
        return None
    return {v.strip() for v in value.split(",") if v.strip()}


def main(argv: list[str] | None = None):
    parser = build_parser()

    # Default to "audit" when no subcommand is given but arguments are present
    raw_args = argv if argv is not None else sys.argv[1:]
    if raw_args and raw_args[0] not in _KNOWN_COMMANDS and raw_args[0] not in ("--version", "--help", "-h"):
        raw_args = ["audit"] + list(raw_args)
    elif not raw_args:
        parser.print_help()
        sys.exit(1)

    args = parser.parse_args(raw_args)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "list-detectors":
        _cmd_list_detectors(args)
    elif args.command == "audit":
        _cmd_audit(args)


def _cmd_list_detectors(args):
    from site_audit.registry import discover_detectors

    categories = args.categories.split(",") if args.categories else None
    detectors = discover_detectors(categories=categories)

    if not detectors:
        print("No detectors found.")
        return

    current_cat = None
    for detector in detectors:
        if detector.category != current_cat:
            current_cat = detector.category
            print(f"\n[{current_cat}]")
        print(f"  {detector.name:24s} {detector.description}")


def _cmd_audit(args):
    from site_audit.auditor import run_audit
    from site_audit.config import load_config, merge_cli_with_config
    from site_audit.scoring import ConfigurationError
    from site_audit.snapshot import scan_repository

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        detector_cfg, report_cfg = merge_cli_with_config(
            config,
            cli_exclude=_split(args.exclude),
            cli_include_only=_split(args.include_only),
            cli_no_todo=args.no_todo,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ConfigurationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        snapshot = scan_repository(args.path, config.analysis)
    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    categories = args.categories.split(",") if args.categories else None
    try:
        report = run_audit(
            snapshot,
            categories=categories,
            exclude=detector_cfg.exclude,
            include_only=detector_cfg.include_only,
            weights=config.scoring.weights,
            verbose=args.verbose,
        )
    except ConfigurationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    output = _render_report(report, args.format, todo_list=report_cfg.todo_list)
    _write_output(output, args, name=report.name)


def _write_output(output: str, args, name: str = ""):
    """Write report to file (with timestamped name)."""
    if args.output:
        path = _make_output_path(args.output, args.format, name)
    else:
        # Default: write to ./reports/<name>_<timestamp>.<ext>
        path = _make_default_output_path(args.format, name)

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(output)
    print(f"Report written to {path}", file=sys.stderr)


def _make_default_output_path(fmt: str, name: str) -> str:
    """Generate a default output path: ./reports/<name>_<timestamp>.<ext>."""
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    ext = _FORMAT_EXT.get(fmt, "")
    name = name or "site-audit"
    return os.path.join("reports", f"{name}_{ts}{ext}")


def _make_output_path(user_path: str, fmt: str, name: str = "") -> str:
    """Insert a timestamp into the output filename.

    If the user provides a path like ``report.html``, the result is
    ``report_20260127_131504.html``.  If they provide a bare directory,
    the file is placed there with an auto-generated name.
    """
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    ext = _FORMAT_EXT.get(fmt, "")
    name = name or "site-audit"

    if os.path.isdir(user_path):
        return os.path.join(user_path, f"{name}_{ts}{ext}")

    base, existing_ext = os.path.splitext(user_path)
    if not existing_ext:
        existing_ext = ext
    return f"{base}_{ts}{existing_ext}"


def _render_report(report, fmt: str, todo_list: bool = True) -> str:
    if fmt == "json":
        from site_audit.reporters.json_reporter import render

        return render(report)
    if fmt == "markdown":
        from site_audit.reporters.markdown_reporter import render
    elif fmt == "html":
        from site_audit.reporters.html_reporter import render
    else:
        raise ValueError(f"Unknown format: {fmt}")
    return render(report, todo_list=todo_list)
