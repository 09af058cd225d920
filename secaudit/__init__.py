"""Local pattern-based security audit engine."""

from importlib.metadata import version, PackageNotFoundError

from .engine import (
    aggregate,
    audit_config,
    build_report,
    check_permissions,
    scan_code,
    scan_env,
    scan_secrets,
)
from .errors import ConfigError, DirectoryNotFoundError, SecAuditError
from .headers import evaluate_headers

try:
    __version__ = version("security-audit")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = [
    "ConfigError",
    "DirectoryNotFoundError",
    "SecAuditError",
    "__version__",
    "aggregate",
    "audit_config",
    "build_report",
    "check_permissions",
    "evaluate_headers",
    "scan_code",
    "scan_env",
    "scan_secrets",
]
