"""
Default path sanitizer for paths pulled out of diff headers.

Model-written diffs sometimes carry terminal escape sequences or their
escaped spellings (``\\x1b[31m``) inside file names.
"""

from __future__ import annotations

import re

ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b[@-_]")
ESCAPED_ANSI_PATTERN = re.compile(
    r"(?:\\x1b|\\u001b|\\033)(?:\[[0-9;?]*[A-Za-z])?", re.IGNORECASE
)
ESCAPED_WHITESPACE_PATTERN = re.compile(r"\\[nrt]")
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sanitize_path(path: str) -> str:
    """Strip control characters and escape sequences from a diff path."""
    cleaned = ANSI_ESCAPE_PATTERN.sub("", path)
    cleaned = ESCAPED_ANSI_PATTERN.sub("", cleaned)
    cleaned = ESCAPED_WHITESPACE_PATTERN.sub("", cleaned)
    cleaned = CONTROL_CHAR_PATTERN.sub("", cleaned)
    return cleaned.strip()
