"""Grade a set of HTTP response headers against the security header list.

Fetching the headers is left to the caller; this module only evaluates a
mapping that was already retrieved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .catalog import SecurityHeader
from .catalog.headers import LEAKY_HEADERS, SECURITY_HEADERS
from .scoring import letter_for

HEADER_GRADE_THRESHOLDS: Sequence[Tuple[int, str]] = (
    (85, "A"),
    (70, "B"),
    (55, "C"),
    (40, "D"),
)


@dataclass(frozen=True)
class HeaderCheck:
    header: SecurityHeader
    value: Optional[str]

    @property
    def present(self) -> bool:
        return bool(self.value)

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.header.name,
            "present": self.present,
            "value": self.value,
            "severity": self.header.severity.value,
            "description": self.header.description,
            "recommended": self.header.recommended,
        }


@dataclass
class HeaderReport:
    checks: List[HeaderCheck]
    score: int
    grade: str
    leaks: List[str] = field(default_factory=list)

    @property
    def present_count(self) -> int:
        return sum(1 for check in self.checks if check.present)

    @property
    def missing(self) -> List[HeaderCheck]:
        return [check for check in self.checks if not check.present]

    def to_dict(self) -> Dict[str, object]:
        return {
            "score": self.score,
            "grade": self.grade,
            "present": self.present_count,
            "total": len(self.checks),
            "headers": [check.to_dict() for check in self.checks],
            "leaks": list(self.leaks),
        }


def evaluate_headers(headers: Mapping[str, str]) -> HeaderReport:
    """Compare ``headers`` (any key casing) with the expected header list."""

    lowered = {str(key).lower(): str(value) for key, value in headers.items()}
    checks = [HeaderCheck(header=header, value=lowered.get(header.name.lower())) for header in SECURITY_HEADERS]
    present = sum(1 for check in checks if check.present)
    score = round(present / len(checks) * 100) if checks else 0

    leaks = []
    for name, advice in LEAKY_HEADERS:
        value = lowered.get(name.lower())
        if value:
            leaks.append(f"{name}: {value} ({advice})")

    return HeaderReport(
        checks=checks,
        score=score,
        grade=letter_for(score, HEADER_GRADE_THRESHOLDS),
        leaks=leaks,
    )
