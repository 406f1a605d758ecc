from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from diff_lines import DiffConfig, DiffLine, classify_lines, join_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HunkHeader:
    """
    Fields of a ``@@ -old_start,old_count +new_start,new_count @@trailing`` line.

    Start values and the trailing text are kept as the exact text found in the
    header so that rewriting a header never alters them. Counts are None when
    the header omitted them.
    """

    old_start: str
    old_count: int | None
    new_start: str
    new_count: int | None
    trailing: str = ""

    def format(self) -> str:
        # Counts are always written out, defaulting to 1 like unified diff does.
        old_count = 1 if self.old_count is None else self.old_count
        new_count = 1 if self.new_count is None else self.new_count
        return (
            f"@@ -{self.old_start},{old_count} "
            f"+{self.new_start},{new_count} @@{self.trailing}"
        )

    def with_counts(self, old_count: int, new_count: int) -> HunkHeader:
        return replace(self, old_count=old_count, new_count=new_count)


def parse_hunk_header(line: str) -> HunkHeader | None:
    """
    Parse a hunk header line.

    Returns:
        The parsed header, or None if the line does not follow the hunk header
        grammar (both count groups are optional).
    """
    m = DiffConfig.HUNK_HEADER_PATTERN.fullmatch(line)
    if not m:
        return None
    old_start, old_count, new_start, new_count, trailing = m.groups()
    return HunkHeader(
        old_start=old_start,
        old_count=int(old_count) if old_count is not None else None,
        new_start=new_start,
        new_count=int(new_count) if new_count is not None else None,
        trailing=trailing or "",
    )


def count_hunk_body(body: Iterable[DiffLine]) -> tuple[int, int]:
    """Count (old, new) lines of a hunk body; lines without a diff marker count for neither."""
    old_count = 0
    new_count = 0
    for line in body:
        if line.kind.counts_old:
            old_count += 1
        if line.kind.counts_new:
            new_count += 1
    return old_count, new_count


def find_body_end(lines: list[DiffLine], start: int) -> int:
    """Index of the first line at or after ``start`` that opens a new hunk or file."""
    end = start
    while end < len(lines) and not lines[end].kind.starts_section:
        end += 1
    return end


def adjust_hunk_headers(diff_text: str) -> str:
    """
    Rewrite every hunk header so its line counts match the body that follows it.

    Start line numbers and any trailing function-context text are kept as they
    are. Headers that cannot be parsed are left untouched.
    """
    lines = classify_lines(diff_text)
    result: list[DiffLine] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        header = parse_hunk_header(line.text)
        if header is None:
            result.append(line)
            i += 1
            continue

        end = find_body_end(lines, i + 1)
        old_count, new_count = count_hunk_body(lines[i + 1 : end])
        fixed = header.with_counts(old_count, new_count).format()
        if fixed != line.text:
            logger.debug("Line %d: rewrote %r as %r", line.number, line.text, fixed)

        result.append(replace(line, text=fixed))
        result.extend(lines[i + 1 : end])
        i = end

    return join_lines(result)
