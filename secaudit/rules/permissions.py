"""Inspect filesystem mode bits of well-known sensitive files."""

from __future__ import annotations

import logging
import os
import stat
from enum import Enum
from typing import List

from secaudit.catalog.files import SENSITIVE_FILES
from secaudit.result import Category, Finding, ScanResult
from secaudit.severity import Severity

from . import ScanContext

logger = logging.getLogger(__name__)


class PermissionStatus(str, Enum):
    OK = "ok"
    NOT_APPLICABLE = "not_applicable"


def supports_mode_bits() -> bool:
    return os.name == "posix"


class PermissionRule:
    """Flag sensitive files that other users can read or write.

    Only the fixed list of names directly under the scan root is checked.
    On hosts without POSIX mode bits the rule reports ``not_applicable``.
    """

    name = "permissions"

    def __init__(self) -> None:
        self.status = PermissionStatus.OK
        self.checked: List[str] = []

    def scan(self, context: ScanContext, result: ScanResult) -> None:
        self.checked = []
        if not supports_mode_bits():
            self.status = PermissionStatus.NOT_APPLICABLE
            logger.debug("Permission checks not applicable on %s", os.name)
            return
        self.status = PermissionStatus.OK

        for name in SENSITIVE_FILES:
            try:
                mode = stat.S_IMODE(os.stat(context.root / name).st_mode)
            except OSError:
                continue
            self.checked.append(name)
            octal = format(mode & 0o777, "o")

            if mode & stat.S_IROTH:
                result.add_finding(
                    Finding(
                        id="world-readable-sensitive",
                        name="Sensitive File World-Readable",
                        severity=Severity.HIGH,
                        file=name,
                        line=0,
                        match=f"{name} is world-readable (mode: {octal})",
                        category=Category.CONFIG,
                    )
                )
            if mode & stat.S_IWOTH:
                result.add_finding(
                    Finding(
                        id="world-writable-sensitive",
                        name="Sensitive File World-Writable",
                        severity=Severity.CRITICAL,
                        file=name,
                        line=0,
                        match=f"{name} is world-writable (mode: {octal})",
                        category=Category.CONFIG,
                    )
                )
