"""Run whole-file configuration predicates over matching files."""

from __future__ import annotations

import logging
import re
from fnmatch import fnmatchcase
from functools import lru_cache
from typing import Tuple

from secaudit.catalog.config_checks import CONFIG_CHECKS
from secaudit.result import Category, Finding, ScanResult

from . import ScanContext

logger = logging.getLogger(__name__)

BRACE_GROUP = re.compile(r"\{([^{}]*)\}")
ANY_DIRECTORY = "**/"


@lru_cache(maxsize=None)
def expand_braces(pattern: str) -> Tuple[str, ...]:
    """Expand ``{a,b}`` alternations into plain glob patterns."""

    match = BRACE_GROUP.search(pattern)
    if match is None:
        return (pattern,)
    head, tail = pattern[: match.start()], pattern[match.end():]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return tuple(expanded)


def matches_file_pattern(pattern: str, relative_path: str) -> bool:
    """Match a POSIX relative path against a ``**/``-style glob."""

    for candidate in expand_braces(pattern):
        if candidate.startswith(ANY_DIRECTORY):
            tail = candidate[len(ANY_DIRECTORY):]
            name = relative_path.rsplit("/", 1)[-1]
            if fnmatchcase(name, tail) or fnmatchcase(relative_path, tail) or fnmatchcase(relative_path, candidate):
                return True
        elif fnmatchcase(relative_path, candidate):
            return True
    return False


class ConfigRule:
    """Flag risky configuration such as debug flags and default keys."""

    name = "config"

    def scan(self, context: ScanContext, result: ScanResult) -> None:
        for path in context.files:
            relative = context.relative(path)
            checks = [check for check in CONFIG_CHECKS if matches_file_pattern(check.file_pattern, relative)]
            if not checks:
                continue
            content = context.read(path)
            if content is None:
                continue
            for check in checks:
                try:
                    outcome = check.check(content, relative)
                except Exception as exc:  # pylint: disable=broad-except
                    logger.warning("Check %s failed on %s: %s", check.id, relative, exc)
                    continue
                if not outcome.found:
                    continue
                result.add_finding(
                    Finding(
                        id=check.id,
                        name=check.name,
                        severity=check.severity,
                        file=relative,
                        line=0,
                        match=outcome.detail,
                        category=Category.CONFIG,
                    )
                )
