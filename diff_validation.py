"""
Structural checks for unified diff text.

is_unified_diff decides whether text is worth repairing at all; Validation
reports what a repair would change without changing anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from diff_lines import DiffConfig, DiffLine, LineKind, classify_line, classify_lines
from hunk_headers import count_hunk_body, find_body_end, parse_hunk_header

logger = logging.getLogger(__name__)


def is_unified_diff(text: Optional[str]) -> bool:
    """Return True if the text looks like a unified diff.

    Any single signal is enough; text rejected here is never repaired.
    """
    if not text or not text.strip():
        return False

    has_diff_marker = (
        DiffConfig.GIT_HEADER_PREFIX in text
        or DiffConfig.OLD_FILE_PREFIX in text
        or DiffConfig.NEW_FILE_PREFIX in text
    )
    if has_diff_marker:
        return True

    if DiffConfig.STRICT_HUNK_HEADER_PATTERN.search(text):
        return True

    change_lines = sum(
        1 for line in text.split("\n") if classify_line(line.strip()).is_change
    )
    return change_lines >= 2


@dataclass
class Issue:
    """Represents a validation issue found in diff content."""

    line: int
    type: str
    message: str
    severity: str = "info"


class Validation:
    """Reports structural problems in a diff."""

    @staticmethod
    def validate_diff(diff_content: str) -> List[Issue]:
        """
        Collect structural issues in LF-normalized diff content.

        Args:
            diff_content: The diff content to inspect

        Returns:
            Issues in line order
        """
        lines = classify_lines(diff_content)
        issues = []

        has_header = any(
            line.kind
            in (
                LineKind.GIT_HEADER,
                LineKind.OLD_FILE_MARKER,
                LineKind.NEW_FILE_MARKER,
            )
            for line in lines
        )
        if not has_header:
            issues.append(
                Issue(
                    line=1,
                    type="missing_header",
                    message="Diff missing file headers",
                    severity="error",
                )
            )

        in_hunk = False
        for i, line in enumerate(lines):
            if line.kind is LineKind.GIT_HEADER:
                in_hunk = False
            elif line.kind is LineKind.HUNK_HEADER:
                in_hunk = True
                issue = Validation._check_hunk_header(lines, i)
                if issue:
                    issues.append(issue)
            elif in_hunk and line.kind is LineKind.UNCLASSIFIED:
                issues.append(Validation._missing_context_prefix(line))

        logger.debug("Found %d issue(s)", len(issues))
        return issues

    @staticmethod
    def _check_hunk_header(lines: List[DiffLine], index: int) -> Optional[Issue]:
        line = lines[index]
        header = parse_hunk_header(line.text)
        if header is None:
            return Issue(
                line=line.number,
                type="hunk_header",
                message=f"Invalid hunk header format: {line.text}",
                severity="error",
            )

        end = find_body_end(lines, index + 1)
        old_count, new_count = count_hunk_body(lines[index + 1 : end])

        declared_old = 1 if header.old_count is None else header.old_count
        declared_new = 1 if header.new_count is None else header.new_count
        if (declared_old, declared_new) == (old_count, new_count):
            return None

        return Issue(
            line=line.number,
            type="hunk_count_mismatch",
            message=(
                f"Header declares -{declared_old} +{declared_new} "
                f"but body has -{old_count} +{new_count}"
            ),
            severity="warning",
        )

    @staticmethod
    def _missing_context_prefix(line: DiffLine) -> Issue:
        message = f"Missing space prefix for context line: {line.text[:50]}"
        if len(line.text) > 50:
            message += "..."
        return Issue(line=line.number, type="context_fix", message=message)
