"""Detect hardcoded credentials in every collected file."""

from __future__ import annotations

from secaudit.catalog.secrets import SECRET_PATTERNS
from secaudit.result import Category, ScanResult

from . import ScanContext, match_file


class SecretRule:
    """Flag lines matching a known credential format."""

    name = "secrets"

    def scan(self, context: ScanContext, result: ScanResult) -> None:
        for path in context.files:
            result.extend(match_file(context, path, SECRET_PATTERNS, Category.SECRET))
