"""
Command line entry point.

    convention-check openapi.yaml schemas/ --format json --ignore money-amount-precision
"""

import argparse
import logging
import sys
from pathlib import Path

from convention_check.checker import ConventionChecker
from convention_check.config import APP_TITLE, APP_VERSION, DEFAULT_FAIL_ON, SEVERITY_ORDER
from convention_check.loader import DocumentLoadError, load_reference_hints
from convention_check.orchestrator import run_convention_check
from convention_check.report_engine import generate_report
from convention_check.rules import discover_rules

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def build_parser():
    parser = argparse.ArgumentParser(
        prog="convention-check",
        description="Check JSON-Schema / OpenAPI documents against API naming and schema conventions.",
    )
    parser.add_argument("paths", nargs="*", help="Schema files or directories (.json, .yaml, .yml)")
    parser.add_argument("--format", choices=("text", "json", "html"), default="text", help="Report format")
    parser.add_argument("--output", "-o", default=None, help="Write the report to this file instead of stdout")
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="RULE",
        help="Only run this rule or rule group (repeatable)",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="RULE",
        help="Skip this rule or rule group (repeatable)",
    )
    parser.add_argument(
        "--fail-on",
        choices=SEVERITY_ORDER,
        default=DEFAULT_FAIL_ON,
        help="Exit non-zero when a finding of this severity or stronger is found",
    )
    parser.add_argument(
        "--reference-hints",
        default=None,
        metavar="FILE",
        help="JSON/YAML mapping of property pointer to referenced type name",
    )
    parser.add_argument("--list-rules", action="store_true", help="List available rules and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"{APP_TITLE} {APP_VERSION}")
    return parser


def _list_rules():
    for rule in discover_rules():
        print(f"{rule.name:<32} {rule.group:<10} {rule.severity:<6} {rule.description}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    if args.list_rules:
        _list_rules()
        return EXIT_OK

    if not args.paths:
        parser.print_usage(sys.stderr)
        print("convention-check: error: at least one path is required", file=sys.stderr)
        return EXIT_ERROR

    hints = None
    if args.reference_hints:
        try:
            hints = load_reference_hints(args.reference_hints)
        except DocumentLoadError as e:
            print(f"convention-check: error: {e}", file=sys.stderr)
            return EXIT_ERROR

    checker = ConventionChecker(select=args.select, ignore=args.ignore)
    report = run_convention_check(args.paths, checker=checker, reference_hints=hints)
    output = generate_report(report, args.format)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output)

    if report.errored_documents:
        return EXIT_ERROR
    return EXIT_FINDINGS if report.has_failures(args.fail_on) else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
