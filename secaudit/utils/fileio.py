"""Basic file IO helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_text_file(path: Path) -> Optional[str]:
    """Return the file contents as UTF-8 text, or ``None`` when unreadable.

    Missing files, permission errors and non-UTF-8 content are all treated
    the same way: the caller skips the file. Line endings are returned
    untranslated so that only ``\\n`` separates lines.
    """

    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except UnicodeDecodeError:
        logger.debug("Skipping non-UTF-8 file %s", path)
    except OSError as exc:
        logger.debug("Skipping unreadable file %s: %s", path, exc)
    return None
