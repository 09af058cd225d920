"""Record types for the immutable detection rule tables.

Every table in this package is plain data: adding a rule means appending a
record, never touching control flow. Tables are built once at import time
and never mutated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Tuple

from secaudit.severity import Severity


@dataclass(frozen=True)
class SecretPattern:
    """Regex tuned to one credential format.

    When the expression has a capturing group, group 1 is the credential
    value itself and is masked wherever it appears in a surfaced match.
    """

    id: str
    name: str
    pattern: re.Pattern[str]
    severity: Severity


@dataclass(frozen=True)
class VulnPattern:
    """Regex describing a risky code construct."""

    id: str
    name: str
    pattern: re.Pattern[str]
    severity: Severity
    cwe: str
    description: str
    languages: Tuple[str, ...]


@dataclass(frozen=True)
class CheckOutcome:
    found: bool
    detail: str = ""


NOT_FOUND = CheckOutcome(found=False)


@dataclass(frozen=True)
class ConfigCheck:
    """Whole-file predicate applied to files matching ``file_pattern``."""

    id: str
    name: str
    file_pattern: str
    check: Callable[[str, str], CheckOutcome]
    severity: Severity


@dataclass(frozen=True)
class SecurityHeader:
    name: str
    description: str
    recommended: str
    severity: Severity


__all__ = [
    "CheckOutcome",
    "ConfigCheck",
    "NOT_FOUND",
    "SecretPattern",
    "SecurityHeader",
    "VulnPattern",
]
