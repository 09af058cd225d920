"""Convert a finding set into a numeric score and letter grade."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .result import Finding, Summary

# Deductions per finding; low severity is informational.
CRITICAL_PENALTY = 15
HIGH_PENALTY = 8
MEDIUM_PENALTY = 3

GRADE_THRESHOLDS: Sequence[Tuple[int, str]] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
NO_SERIOUS_ISSUES = "No critical or high severity issues found."


@dataclass(frozen=True)
class Grade:
    score: int
    grade: str
    summary: str


def letter_for(score: int, thresholds: Sequence[Tuple[int, str]] = GRADE_THRESHOLDS) -> str:
    for minimum, letter in thresholds:
        if score >= minimum:
            return letter
    return "F"


def compute_score(summary: Summary) -> int:
    score = 100
    score -= summary.critical * CRITICAL_PENALTY
    score -= summary.high * HIGH_PENALTY
    score -= summary.medium * MEDIUM_PENALTY
    return max(0, min(100, score))


def grade_findings(findings: Iterable[Finding]) -> Grade:
    summary = Summary.from_findings(findings)
    score = compute_score(summary)
    if summary.critical + summary.high == 0:
        sentence = NO_SERIOUS_ISSUES
    else:
        sentence = f"{summary.critical} critical, {summary.high} high severity issue(s) require attention."
    return Grade(score=score, grade=letter_for(score), summary=sentence)
