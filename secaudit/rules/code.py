"""Detect known-dangerous code constructs in source files."""

from __future__ import annotations

from secaudit.catalog.files import CODE_EXTENSIONS
from secaudit.catalog.vulnerabilities import VULN_PATTERNS
from secaudit.result import Category, ScanResult

from . import ScanContext, match_file


class CodeRule:
    """Flag source lines matching a vulnerability pattern."""

    name = "vulnerabilities"

    def scan(self, context: ScanContext, result: ScanResult) -> None:
        for path in context.files:
            if path.suffix.lower() not in CODE_EXTENSIONS:
                continue
            result.extend(match_file(context, path, VULN_PATTERNS, Category.VULNERABILITY))
