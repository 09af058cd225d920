"""Scanner registry and the per-scan context shared by all scanners."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from secaudit.config import ScanConfig
from secaudit.matcher import LineRule, match_lines
from secaudit.result import Category, Finding, ScanResult
from secaudit.utils import collect_files, read_text_file

logger = logging.getLogger(__name__)

# Upper bound on cached file text per scan, in characters.
DEFAULT_CACHE_BUDGET = 8 * 1024 * 1024


class Rule(Protocol):
    """Protocol implemented by all scanners."""

    name: str

    def scan(self, context: "ScanContext", result: ScanResult) -> None:
        """Analyze the provided context and append findings to ``result``."""


@dataclass
class ScanContext:
    """State owned by a single scan invocation.

    Nothing here is shared between scans. File contents are cached so that
    later scanners reuse earlier reads, until ``cache_budget`` characters
    are held; files read after that are re-read on every request.
    """

    root: Path
    files: List[Path]
    config: ScanConfig = field(default_factory=ScanConfig)
    cache_budget: int = DEFAULT_CACHE_BUDGET
    _contents: Dict[Path, Optional[str]] = field(default_factory=dict, repr=False)
    _cached_size: int = field(default=0, repr=False)

    @classmethod
    def create(cls, root: Path, config: Optional[ScanConfig] = None, collect: bool = True) -> "ScanContext":
        """Build the context for ``root``, an existing and resolved directory."""

        config = config or ScanConfig()
        if not collect:
            return cls(root=root, files=[], config=config)
        files = collect_files(
            root,
            max_files=config.max_files,
            max_file_size=config.max_file_size,
            max_depth=config.max_depth,
            extra_skip_dirs=config.extra_skip_dirs,
        )
        logger.info("Scanning %s (%d file(s))", root, len(files))
        return cls(root=root, files=files, config=config)

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def read(self, path: Path) -> Optional[str]:
        if path in self._contents:
            return self._contents[path]
        content = read_text_file(path)
        size = len(content) if content else 0
        if self._cached_size + size <= self.cache_budget:
            self._contents[path] = content
            self._cached_size += size
        return content


def match_file(
    context: ScanContext,
    path: Path,
    rules: Sequence[LineRule],
    category: Category,
) -> List[Finding]:
    """Run the line matcher over one file, treating any failure as a skip."""

    content = context.read(path)
    if content is None:
        return []
    relative = context.relative(path)
    try:
        return match_lines(content, relative, rules, category)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Skipping %s after matcher error: %s", relative, exc)
        return []
