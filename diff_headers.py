from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from diff_lines import DiffConfig
from path_sanitizer import sanitize_path


@dataclass(frozen=True)
class FileHeaderPair:
    """Old and new paths named by a ``diff --git`` line."""

    old_file: str | None = None
    new_file: str | None = None


def extract_file_names_from_header(
    diff_header: str, sanitize: Callable[[str], str] = sanitize_path
) -> FileHeaderPair:
    """
    Extract the old and new file paths from a ``diff --git a/<old> b/<new>`` line.

    Args:
        diff_header: A single header line.
        sanitize: Cleans each extracted path.

    Returns:
        FileHeaderPair with both paths, or with both set to None when the line
        is not a git header.
    """
    m = DiffConfig.GIT_HEADER_PATTERN.fullmatch(diff_header)
    if not m:
        return FileHeaderPair()
    return FileHeaderPair(old_file=sanitize(m.group(1)), new_file=sanitize(m.group(2)))
