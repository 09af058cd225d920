"""Audit dotenv files for sensitive variables and .gitignore coverage."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, List

from secaudit.catalog.files import ENV_FILE_PREFIX, SENSITIVE_ENV_KEYS
from secaudit.catalog.secrets import SECRET_PATTERNS
from secaudit.result import Category, Finding, ScanResult
from secaudit.severity import Severity

from . import ScanContext, match_file

GITIGNORE = ".gitignore"


@dataclass
class EnvFileInfo:
    path: str
    in_gitignore: bool
    variable_count: int
    sensitive_vars: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def is_env_file(path: Path) -> bool:
    name = path.name.lower()
    return name.startswith(ENV_FILE_PREFIX) or name.endswith(ENV_FILE_PREFIX)


def parse_variables(content: str) -> List[str]:
    """Return the lower-cased keys of the ``KEY=value`` lines in ``content``."""

    keys: List[str] = []
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        keys.append(stripped.split("=", 1)[0].strip().lower())
    return keys


def sensitive_keys(keys: List[str]) -> List[str]:
    return [key for key in keys if any(fragment in key for fragment in SENSITIVE_ENV_KEYS)]


class EnvFileRule:
    """Flag env files holding secrets that version control would pick up.

    After :meth:`scan`, ``env_files`` describes every env file seen.
    """

    name = "env"

    def __init__(self) -> None:
        self.env_files: List[EnvFileInfo] = []

    def scan(self, context: ScanContext, result: ScanResult) -> None:
        gitignore = context.read(context.root / GITIGNORE) or ""
        self.env_files = []

        for path in context.files:
            if not is_env_file(path):
                continue
            content = context.read(path)
            if content is None:
                continue
            relative = context.relative(path)
            keys = parse_variables(content)
            sensitive = sensitive_keys(keys)
            in_gitignore = ".env" in gitignore or path.name.lower() in gitignore or relative in gitignore

            self.env_files.append(
                EnvFileInfo(
                    path=relative,
                    in_gitignore=in_gitignore,
                    variable_count=len(keys),
                    sensitive_vars=sensitive,
                )
            )

            if sensitive and not in_gitignore:
                result.add_finding(
                    Finding(
                        id="env-not-gitignored",
                        name="Env File with Secrets Not in .gitignore",
                        severity=Severity.CRITICAL,
                        file=relative,
                        line=0,
                        match=(
                            f"{relative} contains {len(sensitive)} sensitive variable(s) "
                            "but is not in .gitignore"
                        ),
                        category=Category.CONFIG,
                    )
                )

            result.extend(match_file(context, path, SECRET_PATTERNS, Category.SECRET))
