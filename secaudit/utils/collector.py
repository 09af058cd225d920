"""Bounded directory walker producing the candidate file list."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet, List, Optional

from secaudit.catalog.files import (
    BINARY_SUFFIXES,
    ENV_FILE_PREFIX,
    KNOWN_FILES,
    SCANNABLE_EXTENSIONS,
    SKIP_DIRS,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILES = 5000
DEFAULT_MAX_FILE_SIZE = 512 * 1024
DEFAULT_MAX_DEPTH = 15


def is_scannable(name: str) -> bool:
    """Decide from the file name alone whether the file should be read."""

    lowered = name.lower()
    if lowered.endswith(BINARY_SUFFIXES):
        return False
    if os.path.splitext(lowered)[1] in SCANNABLE_EXTENSIONS:
        return True
    return lowered in KNOWN_FILES or lowered.startswith(ENV_FILE_PREFIX)


def collect_files(
    root: Path,
    max_files: int = DEFAULT_MAX_FILES,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    max_depth: int = DEFAULT_MAX_DEPTH,
    extra_skip_dirs: Optional[AbstractSet[str]] = None,
) -> List[Path]:
    """Walk ``root`` depth-first and return scannable files.

    Entries are visited sorted by name so the same tree always yields the
    same list. Symlinked directories are not followed, which rules out
    loops. The walk stops as soon as ``max_files`` files are collected.
    """

    skip = SKIP_DIRS | (extra_skip_dirs or frozenset())
    files: List[Path] = []

    def walk(current: Path, depth: int) -> None:
        if depth > max_depth or len(files) >= max_files:
            return
        try:
            with os.scandir(current) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", current, exc)
            return

        for entry in entries:
            if len(files) >= max_files:
                return
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name in skip or entry.name.startswith("."):
                        continue
                    walk(Path(entry.path), depth + 1)
                elif entry.is_file() and is_scannable(entry.name):
                    if entry.stat().st_size <= max_file_size:
                        files.append(Path(entry.path))
                    else:
                        logger.debug("Skipping oversized file %s", entry.path)
            except OSError as exc:
                logger.debug("Skipping %s: %s", entry.path, exc)

    walk(root, 0)
    return files
