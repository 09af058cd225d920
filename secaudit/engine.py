"""Scan operations exposed to callers.

Each operation resolves the root directory, collects files once, runs its
scanners in a fixed order and returns structured data. Nothing is cached
between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config import ScanConfig, load_config
from .errors import DirectoryNotFoundError
from .result import Finding, ScanResult, Summary, sort_findings
from .rules import Rule, ScanContext
from .rules.code import CodeRule
from .rules.config_audit import ConfigRule
from .rules.env_files import EnvFileInfo, EnvFileRule
from .rules.permissions import PermissionRule, PermissionStatus
from .rules.secrets import SecretRule
from .scoring import Grade, grade_findings

logger = logging.getLogger(__name__)


@dataclass
class EnvAuditResult:
    findings: List[Finding]
    env_files: List[EnvFileInfo]

    def to_dict(self) -> Dict[str, object]:
        return {
            "env_files": [info.to_dict() for info in self.env_files],
            "findings": [finding.to_dict() for finding in self.findings],
        }


@dataclass
class PermissionAudit:
    status: PermissionStatus
    findings: List[Finding]
    checked: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status.value,
            "checked": list(self.checked),
            "findings": [finding.to_dict() for finding in self.findings],
        }


@dataclass
class Report:
    """Graded view over every finding of a full scan."""

    directory: str
    files_scanned: int
    findings: List[Finding]
    total: int
    omitted: int
    counts: Summary
    score: int
    grade: str
    summary: str
    sections: Dict[str, int]
    env_files: List[EnvFileInfo] = field(default_factory=list)
    permission_status: PermissionStatus = PermissionStatus.OK

    def to_dict(self) -> Dict[str, object]:
        return {
            "directory": self.directory,
            "files_scanned": self.files_scanned,
            "grade": self.grade,
            "score": self.score,
            "summary": self.summary,
            "total": self.total,
            "omitted": self.omitted,
            "counts": self.counts.to_dict(),
            "sections": dict(self.sections),
            "env_files": [info.to_dict() for info in self.env_files],
            "permission_status": self.permission_status.value,
            "findings": [finding.to_dict() for finding in self.findings],
        }


@dataclass
class Aggregate:
    """Merged, ordered and graded findings from several scanners."""

    findings: List[Finding]
    shown: List[Finding]
    counts: Summary
    grade: Grade

    @property
    def omitted(self) -> int:
        return len(self.findings) - len(self.shown)


def aggregate(*finding_lists: Sequence[Finding], limit: Optional[int] = None) -> Aggregate:
    """Concatenate scanner outputs, sort by severity and grade the result.

    Ties keep their input order. ``limit`` only truncates ``shown``; counts
    and grade always cover every finding.
    """

    combined: List[Finding] = []
    for findings in finding_lists:
        combined.extend(findings)
    ordered = sort_findings(combined)
    shown = ordered if limit is None else ordered[:limit]
    return Aggregate(
        findings=ordered,
        shown=shown,
        counts=Summary.from_findings(ordered),
        grade=grade_findings(ordered),
    )


def open_context(directory: str, config: Optional[ScanConfig] = None, collect: bool = True) -> ScanContext:
    """Validate ``directory`` and build the context for one scan."""

    root = Path(directory).expanduser().resolve()
    if not root.is_dir():
        raise DirectoryNotFoundError(str(root))
    if config is None:
        config = load_config(root)
    return ScanContext.create(root, config, collect=collect)


def run_rule(context: ScanContext, rule: Rule) -> List[Finding]:
    """Run one scanner and drop findings for suppressed rule ids."""

    result = ScanResult()
    rule.scan(context, result)
    findings = [finding for finding in result.findings if finding.id not in context.config.ignore_rules]
    logger.debug("%s: %d finding(s)", rule.name, len(findings))
    return findings


def scan_secrets(directory: str, config: Optional[ScanConfig] = None) -> List[Finding]:
    context = open_context(directory, config)
    return sort_findings(run_rule(context, SecretRule()))


def scan_code(directory: str, config: Optional[ScanConfig] = None) -> List[Finding]:
    context = open_context(directory, config)
    return sort_findings(run_rule(context, CodeRule()))


def scan_env(directory: str, config: Optional[ScanConfig] = None) -> EnvAuditResult:
    context = open_context(directory, config)
    rule = EnvFileRule()
    findings = run_rule(context, rule)
    return EnvAuditResult(findings=sort_findings(findings), env_files=rule.env_files)


def audit_config(directory: str, config: Optional[ScanConfig] = None) -> List[Finding]:
    context = open_context(directory, config)
    return sort_findings(run_rule(context, ConfigRule()))


def check_permissions(directory: str, config: Optional[ScanConfig] = None) -> PermissionAudit:
    context = open_context(directory, config, collect=False)
    rule = PermissionRule()
    findings = run_rule(context, rule)
    return PermissionAudit(status=rule.status, findings=sort_findings(findings), checked=rule.checked)


def build_report(
    directory: str,
    config: Optional[ScanConfig] = None,
    limit: Optional[int] = None,
) -> Report:
    """Run every scanner and grade the combined findings.

    The graded score covers all findings; only the listed findings are
    truncated to ``limit`` (the configured ``report_limit`` by default).
    """

    context = open_context(directory, config)
    if limit is None:
        limit = context.config.report_limit

    env_rule = EnvFileRule()
    permission_rule = PermissionRule()
    rules: List[Rule] = [SecretRule(), CodeRule(), env_rule, permission_rule, ConfigRule()]

    outputs = [run_rule(context, rule) for rule in rules]
    merged = aggregate(*outputs, limit=limit)
    sections = {rule.name: len(findings) for rule, findings in zip(rules, outputs)}

    return Report(
        directory=str(context.root),
        files_scanned=len(context.files),
        findings=merged.shown,
        total=len(merged.findings),
        omitted=merged.omitted,
        counts=merged.counts,
        score=merged.grade.score,
        grade=merged.grade.grade,
        summary=merged.grade.summary,
        sections=sections,
        env_files=env_rule.env_files,
        permission_status=permission_rule.status,
    )
