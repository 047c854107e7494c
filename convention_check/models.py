"""
Data models for convention check runs.

  report → document_results → findings
"""

import time
import uuid
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

from convention_check.config import MUST, SHOULD, SEVERITY_ORDER

CONVENTION = "convention"
MALFORMED_NODE = "MALFORMED_NODE"


@dataclass(frozen=True)
class Finding:
    """One deviation from a convention, located by JSON pointer."""
    rule: str
    path: str
    message: str
    severity: str = MUST            # MUST | SHOULD
    kind: str = CONVENTION          # convention | MALFORMED_NODE
    document: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def is_malformed(self) -> bool:
        return self.kind == MALFORMED_NODE


def severity_at_least(severity: str, threshold: str) -> bool:
    """True if ``severity`` is as strong as ``threshold`` (MUST > SHOULD)."""
    return SEVERITY_ORDER.index(severity) <= SEVERITY_ORDER.index(threshold)


@dataclass
class DocumentResult:
    """Findings for one schema document."""
    name: str
    source: Optional[str] = None
    findings: List[Finding] = field(default_factory=list)
    error: Optional[str] = None     # set when the document could not be loaded

    @property
    def status(self) -> str:
        if self.error:
            return "error"
        return "fail" if self.findings else "pass"

    def count(self, severity: str) -> int:
        return sum(1 for f in self.findings if f.severity == severity)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["status"] = self.status
        d["findings"] = [f.to_dict() for f in self.findings]
        return d


@dataclass
class Report:
    """Top-level container for one run over a set of schema documents."""
    name: str = "convention check"
    documents: List[DocumentResult] = field(default_factory=list)
    created_at: int = field(default_factory=lambda: int(time.time()))
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["documents"] = [doc.to_dict() for doc in self.documents]
        d["summary"] = {
            "documents": self.total_documents,
            "findings": self.total_findings,
            MUST: self.must_findings,
            SHOULD: self.should_findings,
            "errors": self.errored_documents,
        }
        return d

    # ── Convenience aggregations ──────────────────────────────

    @property
    def findings(self) -> List[Finding]:
        return [f for doc in self.documents for f in doc.findings]

    @property
    def total_documents(self) -> int:
        return len(self.documents)

    @property
    def total_findings(self) -> int:
        return sum(len(doc.findings) for doc in self.documents)

    @property
    def must_findings(self) -> int:
        return sum(doc.count(MUST) for doc in self.documents)

    @property
    def should_findings(self) -> int:
        return sum(doc.count(SHOULD) for doc in self.documents)

    @property
    def errored_documents(self) -> int:
        return sum(1 for doc in self.documents if doc.error)

    def has_failures(self, fail_on: str = MUST) -> bool:
        if self.errored_documents:
            return True
        return any(severity_at_least(f.severity, fail_on) for f in self.findings)

    def summary_by_rule(self) -> Dict[str, Dict[str, Any]]:
        rules: Dict[str, Dict[str, Any]] = {}
        for f in self.findings:
            r = rules.setdefault(f.rule, {"severity": f.severity, "count": 0})
            r["count"] += 1
        return rules
