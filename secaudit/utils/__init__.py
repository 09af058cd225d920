"""Utility helpers for the audit engine."""

from .collector import collect_files, is_scannable
from .fileio import read_text_file, read_yaml_file

__all__ = [
    "collect_files",
    "is_scannable",
    "read_text_file",
    "read_yaml_file",
]
