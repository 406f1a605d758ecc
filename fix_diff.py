#!/usr/bin/env python3
"""
Repair malformed unified diffs so that standard diff parsers accept them.
Every stage is a total text-to-text transform: input it cannot make sense of
is passed through instead of rejected.
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import Enum
from pathlib import Path

from diff_lines import DiffConfig, DiffLine, LineKind, classify_lines
from diff_validation import Validation, is_unified_diff
from hunk_headers import adjust_hunk_headers

logger = logging.getLogger(__name__)


def normalize_line_endings(text: str) -> str:
    """Replace every CRLF or lone CR with LF."""
    return DiffConfig.LINE_ENDING_PATTERN.sub("\n", text)


def auto_fix_spaces(
    diff_text: str, metadata_prefixes: tuple[str, ...] = DiffConfig.METADATA_PREFIXES
) -> str:
    """Add the missing leading space to context lines.

    Any non-blank line that has no diff marker and is not a recognized header
    or metadata line is taken to be a context line.
    """
    fixed = []
    for line in classify_lines(diff_text, metadata_prefixes):
        if line.kind is LineKind.UNCLASSIFIED:
            logger.debug("Line %d: added missing context space", line.number)
            fixed.append(" " + line.text)
        else:
            fixed.append(line.text)
    return "\n".join(fixed)


class PreambleState(Enum):
    """Which file markers a diff without a ``diff`` line already carries."""

    NO_MARKERS = "no_markers"
    ONLY_NEW_FILE_MARKER = "only_new_file_marker"
    HAS_OLD_FILE_MARKER = "has_old_file_marker"

    @classmethod
    def of(cls, lines: list[DiffLine]) -> PreambleState:
        kinds = {line.kind for line in lines}
        if LineKind.OLD_FILE_MARKER in kinds:
            return cls.HAS_OLD_FILE_MARKER
        if LineKind.NEW_FILE_MARKER in kinds:
            return cls.ONLY_NEW_FILE_MARKER
        return cls.NO_MARKERS


def _recover_file_path(lines: list[DiffLine]) -> str:
    for line in lines:
        if line.kind is LineKind.NEW_FILE_MARKER:
            m = DiffConfig.NEW_FILE_PATH_PATTERN.match(line.text)
            if m:
                return m.group(1)
    return DiffConfig.PLACEHOLDER_PATH


def add_missing_headers(diff_text: str) -> str:
    """Prepend a synthetic ``diff --git`` preamble when the diff has none.

    Existing content is never removed or reordered.
    """
    if diff_text.strip().startswith("diff "):
        return diff_text

    lines = classify_lines(diff_text)
    file_path = _recover_file_path(lines)
    state = PreambleState.of(lines)

    git_header = f"diff --git a/{file_path} b/{file_path}"
    old_marker = f"--- a/{file_path}"

    if state is PreambleState.NO_MARKERS:
        logger.debug("Synthesized full preamble for %s", file_path)
        return "\n".join([git_header, old_marker, f"+++ a/{file_path}", diff_text])
    if state is PreambleState.ONLY_NEW_FILE_MARKER:
        logger.debug("Synthesized diff and old file lines for %s", file_path)
        return "\n".join([git_header, old_marker, diff_text])
    return diff_text


def normalize_diff(diff_text: str) -> str:
    """Normalize line endings, restore context spaces and add missing headers."""
    normalized = normalize_line_endings(diff_text)
    normalized = auto_fix_spaces(normalized)
    return add_missing_headers(normalized)


class DiffFixer:
    """Runs the whole repair pipeline."""

    @classmethod
    def run(cls, diff_content: str, recalculate_hunk_headers: bool = True) -> str:
        """Fix a malformed diff.

        Hunk headers are recalculated last, once the preamble and body
        markers have been repaired.
        """
        fixed = normalize_diff(diff_content)
        if recalculate_hunk_headers:
            fixed = adjust_hunk_headers(fixed)
        return fixed


def _read_input(diff_file: str) -> str:
    if diff_file == "-":
        return sys.stdin.read()
    return Path(diff_file).read_text(encoding="utf-8")


def check(diff_content: str) -> int:
    """Print whether the content looks like a diff plus any structural issues."""
    if not is_unified_diff(diff_content):
        print("Not a unified diff")
        return 1

    issues = Validation.validate_diff(normalize_line_endings(diff_content))
    for issue in issues:
        print(f"line {issue.line}: [{issue.severity}] {issue.type}: {issue.message}")
    print(f"Unified diff with {len(issues)} issue(s)")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Fix malformatted diff files")
    parser.add_argument("diff_file", help="Path to the diff file ('-' for stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument(
        "--no-recalculate",
        action="store_true",
        help="Keep hunk header line counts as written",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Report whether the input is a diff and list its issues, without fixing",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log each repair to stderr"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.diff_file != "-" and not Path(args.diff_file).exists():
            print(f"Error: Diff file '{args.diff_file}' not found", file=sys.stderr)
            sys.exit(1)

        diff_content = _read_input(args.diff_file)

        if args.check:
            sys.exit(check(diff_content))

        fixed_diff = DiffFixer.run(
            diff_content, recalculate_hunk_headers=not args.no_recalculate
        )

        if args.output:
            Path(args.output).write_text(fixed_diff, encoding="utf-8")
            print(f"Fixed diff written to {args.output}")
        else:
            print(fixed_diff)

    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
