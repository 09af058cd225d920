"""Redaction of credential values before findings are surfaced."""

from __future__ import annotations

import re
from typing import Optional

MIN_SECRET_LENGTH = 8
VISIBLE_PREFIX = 4
MASK = "****"

# An assignment or mapping separator, an optional quote, then the value.
ASSIGNED_VALUE = re.compile(r"([=:]\s*)([\"']?)([a-zA-Z0-9+/=\-_]{%d,})" % MIN_SECRET_LENGTH)


def redact(value: str) -> str:
    """Keep the first four characters of ``value`` and mask the rest."""

    if len(value) < MIN_SECRET_LENGTH:
        return value
    return value[:VISIBLE_PREFIX] + MASK


def _redact_assignment(match: re.Match[str]) -> str:
    separator, quote, value = match.groups()
    return f"{separator}{quote}{redact(value)}"


def mask_secrets(text: str, value: Optional[str] = None) -> str:
    """Redact credential values in ``text``.

    Every ``key=value`` / ``key: value`` payload of eight or more characters
    is masked, keeping key names intact. When the detecting rule captured the
    credential itself as ``value``, any remaining occurrence of it is masked
    as well, including a prefix left behind by truncation at the end of the
    text.
    """

    masked = ASSIGNED_VALUE.sub(_redact_assignment, text)
    if value and len(value) >= MIN_SECRET_LENGTH:
        masked = masked.replace(value, redact(value))
        for size in range(len(value) - 1, MIN_SECRET_LENGTH - 1, -1):
            if masked.endswith(value[:size]):
                masked = masked[: len(masked) - size] + redact(value[:size])
                break
    return masked
