"""Core result data structures for the audit engine."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .severity import Severity

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
)


class Category(str, Enum):
    """Kind of issue a finding describes."""

    SECRET = "secret"
    VULNERABILITY = "vulnerability"
    CONFIG = "config"


@dataclass(frozen=True)
class Finding:
    """Capture a single detected issue."""

    id: str
    name: str
    severity: Severity
    file: str
    line: int
    match: str
    category: Category
    cwe: Optional[str] = None
    description: Optional[str] = None

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}" if self.line else self.file

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["category"] = self.category.value
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class Summary:
    """Aggregate finding counts by severity."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.value
        setattr(self, attr, getattr(self, attr) + 1)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value)) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value) for severity in SEVERITY_ORDER)

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> "Summary":
        summary = cls()
        for finding in findings:
            summary.increment(finding.severity)
        return summary


@dataclass
class ScanResult:
    """Accumulate findings produced by the rules of one scan."""

    summary: Summary = field(default_factory=Summary)
    findings: List[Finding] = field(default_factory=list)

    def add_finding(self, finding: Finding) -> None:
        self.summary.increment(finding.severity)
        self.findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        for finding in findings:
            self.add_finding(finding)

    def sorted_findings(self) -> List[Finding]:
        return sort_findings(self.findings)

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "findings": [finding.to_dict() for finding in self.sorted_findings()],
        }


def sort_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Order findings by descending severity, keeping input order for ties."""

    return sorted(findings, key=lambda finding: -finding.severity.rank)


def exit_code_for(summary: Summary) -> int:
    if summary.critical > 0 or summary.high > 0:
        return 2
    if summary.medium > 0:
        return 1
    return 0


def format_summary_table(summary: Summary, findings: Sequence[Finding], title: str = "Scan Summary") -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append(title)
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in summary.as_rows():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    lines.append(f"Findings  : {summary.total}")

    if findings:
        lines.append("")
        lines.append("Findings")
        lines.append("-" * 40)
        for finding in findings:
            lines.append(f"[{finding.severity.value.upper()}] {finding.id} {finding.name} -> {finding.location}")
            if finding.cwe:
                lines.append(f"  CWE     : {finding.cwe}")
            if finding.match:
                lines.append(f"  Match   : {finding.match}")
            if finding.description:
                lines.append(f"  Issue   : {finding.description}")
    return "\n".join(lines)
