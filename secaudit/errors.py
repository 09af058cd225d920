"""Exception hierarchy for the audit engine."""

from __future__ import annotations


class SecAuditError(Exception):
    """Base class for errors surfaced to callers of the engine."""


class DirectoryNotFoundError(SecAuditError):
    """Raised when the scan root does not exist or is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory not found: {path}")
        self.path = path


class ConfigError(SecAuditError):
    """Raised when a configuration file cannot be used."""
