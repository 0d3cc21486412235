"""
Command-line interface for typelint.

Provides commands to scan Rust sources for wasteful or overly complex type
expressions, to score a single type, and to list the available lints.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from typelint import __version__
from typelint.analysis.complexity import score
from typelint.core.config import Config, find_config
from typelint.core.engine import ScanEngine
from typelint.core.lints import ALL_LINTS
from typelint.parsing.treesitter import parse_type
from typelint.reporting import format_json, format_sarif, format_text


SEVERITY_ORDER = {"Low": 1, "Medium": 2, "High": 3, "Critical": 4}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="typelint",
        description="Static checks for wasteful and overly complex Rust type expressions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  typelint scan ./src                       # Scan a directory
  typelint scan src/lib.rs --format json    # Output as JSON
  typelint scan . --format sarif -o out     # SARIF output to file
  typelint score "Vec<Box<u8>>"             # Complexity score of a type
  typelint list-rules                       # Show available lints
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="Scan a Rust file or directory")
    scan_parser.add_argument("path", nargs="?", default=".", help="Path to scan")
    scan_parser.add_argument("-c", "--config", dest="config_path", help="Path to YAML/JSON config file")
    scan_parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "sarif"],
        help="Output format (overrides config)",
    )
    scan_parser.add_argument("-o", "--output", help="Write output to file instead of stdout")
    scan_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    score_parser = subparsers.add_parser("score", help="Print the complexity score of a type expression")
    score_parser.add_argument("type", help="Rust type, e.g. 'Vec<Box<u8>>'")

    subparsers.add_parser("list-rules", help="List available lints")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "scan":
            return cmd_scan(args)
        if args.command == "score":
            return cmd_score(args)
        if args.command == "list-rules":
            return cmd_list_rules(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    config_path = args.config_path or find_config(args.path)
    config = Config.load(config_path)
    engine = ScanEngine(config)
    report = engine.scan(args.path)
    fmt = args.format or config.reporting().get("format", "text")
    if fmt == "json":
        output = format_json(report.findings, report.suppressed, report.files_scanned)
    elif fmt == "sarif":
        output = format_sarif(report.findings)
    else:
        output = format_text(report.findings, report.suppressed, report.files_scanned)
    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output, end="")
    return _exit_code(report.findings, config.reporting().get("fail_on_severity", "High"))


def cmd_score(args: argparse.Namespace) -> int:
    print(score(parse_type(args.type)))
    return 0


def cmd_list_rules(args: argparse.Namespace) -> int:
    for lint in ALL_LINTS:
        print(f"{lint.rule_id:<22} {lint.group:<12} {lint.description}")
    return 0


def _exit_code(findings, threshold: str) -> int:
    threshold_value = SEVERITY_ORDER.get(threshold, 3)
    for finding in findings:
        if SEVERITY_ORDER.get(finding.severity, 0) >= threshold_value:
            return 2
    return 0
