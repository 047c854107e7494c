"""
Orchestrator — runs the convention checker over a set of schema files.

Usage:
    from convention_check.orchestrator import run_convention_check
    report = run_convention_check(["openapi.yaml", "schemas/"])
    print(json.dumps(report.to_dict(), indent=2))
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, Optional

from convention_check.checker import ConventionChecker
from convention_check.loader import DocumentLoadError, iter_schema_files, load_document
from convention_check.models import DocumentResult, Report

logger = logging.getLogger(__name__)


def check_document(
    name: str,
    document,
    checker: Optional[ConventionChecker] = None,
    reference_hints: Optional[Dict[str, str]] = None,
    source: Optional[str] = None,
) -> DocumentResult:
    """Check one in-memory document and wrap its findings."""
    checker = checker or ConventionChecker()
    findings = checker.check(document, reference_hints=reference_hints)
    return DocumentResult(
        name=name,
        source=source,
        findings=[replace(f, document=name) for f in findings],
    )


def run_convention_check(
    paths: Iterable,
    checker: Optional[ConventionChecker] = None,
    reference_hints: Optional[Dict[str, str]] = None,
    report_name: Optional[str] = None,
) -> Report:
    """Check every schema file under ``paths``.

    Args:
        paths: Files and/or directories.
        checker: Configured checker (defaults to all rules).
        reference_hints: Pointer → referenced type, applied to every document.
        report_name: Human-friendly report name.

    Returns:
        A Report with one DocumentResult per file. Files that fail to load
        get a DocumentResult with ``error`` set; the rest are still checked.
    """
    checker = checker or ConventionChecker()
    files = iter_schema_files(paths)
    report = Report(name=report_name or (files[0].name if len(files) == 1 else "convention check"))

    for path in files:
        try:
            document = load_document(path)
        except DocumentLoadError as e:
            logger.warning("Skipping %s: %s", e.path, e.reason)
            report.documents.append(DocumentResult(name=str(path), source=str(path), error=e.reason))
            continue

        result = check_document(
            str(path),
            document,
            checker=checker,
            reference_hints=reference_hints,
            source=str(path),
        )
        logger.info("%s: %d finding(s)", path, len(result.findings))
        report.documents.append(result)

    return report
