"""Scan configuration loaded from ``.secaudit.yaml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml

from .errors import ConfigError
from .utils.collector import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_FILES
from .utils.fileio import read_yaml_file

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".secaudit.yaml"
DEFAULT_REPORT_LIMIT = 20


@dataclass(frozen=True)
class ScanConfig:
    """Limits and suppressions applied to every scan operation."""

    max_files: int = DEFAULT_MAX_FILES
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_depth: int = DEFAULT_MAX_DEPTH
    extra_skip_dirs: FrozenSet[str] = field(default_factory=frozenset)
    ignore_rules: FrozenSet[str] = field(default_factory=frozenset)
    report_limit: int = DEFAULT_REPORT_LIMIT

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ScanConfig":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for name in ("max_files", "max_file_size", "max_depth", "report_limit"):
            if name in data:
                value = data[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
                values[name] = value
        for name in ("extra_skip_dirs", "ignore_rules"):
            if name in data:
                value = data[name]
                if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
                    raise ConfigError(f"{name} must be a list of strings")
                values[name] = frozenset(value)
        return cls(**values)


def load_config(root: Path, explicit_path: Optional[str] = None) -> ScanConfig:
    """Resolve the configuration for a scan of ``root``.

    An explicit path must exist. Otherwise ``<root>/.secaudit.yaml`` is used
    when present, and defaults apply when it is not.
    """

    if explicit_path is not None:
        path = Path(explicit_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {explicit_path}")
    else:
        path = root / CONFIG_FILENAME
        if not path.is_file():
            return ScanConfig()

    try:
        data = read_yaml_file(path)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    if data is None:
        return ScanConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} is not a mapping")
    logger.debug("Loaded configuration from %s", path)
    return ScanConfig.from_mapping(data)
