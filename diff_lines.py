"""
Line classification shared by every diff repair stage.

Each line of a diff is tagged exactly once with a LineKind; the repair stages
decide what to do with a line by looking at its kind instead of re-running
their own prefix tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class DiffConfig:
    """Central configuration for diff processing."""

    # Patterns
    HUNK_HEADER_PATTERN = re.compile(
        r"@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)", re.ASCII
    )
    STRICT_HUNK_HEADER_PATTERN = re.compile(r"@@ -\d+,\d+ \+\d+,\d+ @@", re.ASCII)
    GIT_HEADER_PATTERN = re.compile(r"diff --git a/(.*) b/(.*)")
    NEW_FILE_PATH_PATTERN = re.compile(r"\+\+\+ b/(.+)")
    LINE_ENDING_PATTERN = re.compile(r"\r\n|\r")

    # Prefixes and markers
    GIT_HEADER_PREFIX = "diff --git"
    HUNK_PREFIX = "@@ "
    OLD_FILE_PREFIX = "--- "
    NEW_FILE_PREFIX = "+++ "

    # Git extended header lines that must never be mistaken for context.
    METADATA_PREFIXES = (
        "diff ",
        "index ",
        "new file",
        "deleted file",
        "old mode",
        "new mode",
        "similarity index",
        "dissimilarity index",
        "copy ",
        "rename ",
        "binary ",
        "Binary files ",
        "GIT binary patch",
        "\\",
    )

    PLACEHOLDER_PATH = "unknown-file"


class LineKind(Enum):
    """What a single diff line is, judged from its leading characters."""

    GIT_HEADER = "git_header"
    HUNK_HEADER = "hunk_header"
    HUNK_FRAGMENT = "hunk_fragment"
    OLD_FILE_MARKER = "old_file_marker"
    NEW_FILE_MARKER = "new_file_marker"
    METADATA = "metadata"
    ADDITION = "addition"
    DELETION = "deletion"
    CONTEXT = "context"
    BLANK = "blank"
    UNCLASSIFIED = "unclassified"

    @property
    def starts_section(self) -> bool:
        """True for lines that end the body of the hunk before them."""
        return self in (LineKind.GIT_HEADER, LineKind.HUNK_HEADER)

    @property
    def counts_old(self) -> bool:
        # A deleted "-- foo" line reads as "--- foo" inside a hunk body.
        return self in (LineKind.CONTEXT, LineKind.DELETION, LineKind.OLD_FILE_MARKER)

    @property
    def counts_new(self) -> bool:
        return self in (LineKind.CONTEXT, LineKind.ADDITION, LineKind.NEW_FILE_MARKER)

    @property
    def is_change(self) -> bool:
        return self.counts_old != self.counts_new


@dataclass(frozen=True)
class DiffLine:
    """A line of diff text together with its classification."""

    text: str
    kind: LineKind
    number: int  # 1-based


def classify_line(
    line: str, metadata_prefixes: tuple[str, ...] = DiffConfig.METADATA_PREFIXES
) -> LineKind:
    """Classify one line of diff text (without its line terminator)."""
    if line.startswith(DiffConfig.GIT_HEADER_PREFIX):
        return LineKind.GIT_HEADER
    if line.startswith(DiffConfig.HUNK_PREFIX):
        return LineKind.HUNK_HEADER
    if line.startswith("@"):
        return LineKind.HUNK_FRAGMENT
    if line.startswith(DiffConfig.OLD_FILE_PREFIX):
        return LineKind.OLD_FILE_MARKER
    if line.startswith(DiffConfig.NEW_FILE_PREFIX):
        return LineKind.NEW_FILE_MARKER
    if line.startswith("-"):
        return LineKind.DELETION
    if line.startswith("+"):
        return LineKind.ADDITION
    if line.startswith(" "):
        return LineKind.CONTEXT
    if not line.strip():
        return LineKind.BLANK
    if line.startswith(metadata_prefixes):
        return LineKind.METADATA
    return LineKind.UNCLASSIFIED


def classify_lines(
    diff_text: str, metadata_prefixes: tuple[str, ...] = DiffConfig.METADATA_PREFIXES
) -> list[DiffLine]:
    """Split diff text on LF and classify every line in one pass."""
    return [
        DiffLine(text=line, kind=classify_line(line, metadata_prefixes), number=i + 1)
        for i, line in enumerate(diff_text.split("\n"))
    ]


def join_lines(lines: list[DiffLine]) -> str:
    return "\n".join(line.text for line in lines)
