#!/usr/bin/env python3
"""
Command-line tool for managing diff fixtures.

Each fixture is a directory under tests/fixtures/pass holding a malformed
``diff`` and the ``expected`` output of the fixer.

Provides two subcommands:
1. process - Run the fixer over every fixture diff and write its expected file
2. check - Compare the fixer's output against each fixture's expected file

Usage examples:
  python manage_fixtures.py process                    # Write missing expected files
  python manage_fixtures.py process --force            # Overwrite existing expected files
  python manage_fixtures.py process --filter "hunk"    # Only fixtures with "hunk" in name

  python manage_fixtures.py check                      # Test all fixtures
  python manage_fixtures.py check -f "header" -d       # Show output for failures
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from diff_validation import Validation
from fix_diff import DiffFixer

# Define paths - fixtures live next to this tool under tests/fixtures/pass
PWD = Path(__file__).absolute().parent / "tests" / "fixtures" / "pass"


def read_fixture_text(path: Path) -> str:
    """Read a fixture file keeping its line endings exactly as stored."""
    return path.read_bytes().decode("utf-8")


def iter_fixtures(fixtures_dir: Path = PWD, filter_name: str | None = None):
    """Yield fixture directories that contain a diff file, sorted by name."""
    for item in sorted(fixtures_dir.iterdir()):
        if not item.is_dir() or item.name in ["venv", "__pycache__", ".git"]:
            continue

        # Apply name filter if specified
        if filter_name and filter_name.lower() not in item.name.lower():
            continue

        if (item / "diff").exists():
            yield item


def process_fixtures(
    fixtures_dir: Path = PWD, filter_name: str | None = None, force: bool = False
) -> tuple[int, int]:
    """Write the fixer output for each fixture diff to its expected file."""
    processed_count = 0
    skipped_count = 0

    print("Processing fixture diffs to create expected files...")
    if filter_name:
        print(f"Filtering fixtures by name containing: '{filter_name}'\n")

    for item in iter_fixtures(fixtures_dir, filter_name):
        expected_file = item / "expected"
        if expected_file.exists() and not force:
            print(f"- Skipped {item.name} (expected exists, use --force)")
            skipped_count += 1
            continue

        fixed_diff = DiffFixer.run(read_fixture_text(item / "diff"))
        expected_file.write_bytes(fixed_diff.encode("utf-8"))
        print(f"✓ Processed {item.name}")
        processed_count += 1

    print("\nFixture processing summary:")
    print(f"  Processed: {processed_count} fixtures")
    print(f"  Skipped: {skipped_count} fixtures")

    return processed_count, skipped_count


def check_fixtures(
    fixtures_dir: Path = PWD, filter_name: str | None = None, debug: bool = False
) -> tuple[list[str], list[str]]:
    """Run the fixer on each fixture and compare with its expected file.

    Returns:
        tuple: (passed fixture names, failed fixture names)
    """
    passed = []
    failed = []

    print("Testing DiffFixer on fixtures...\n")
    if filter_name:
        print(f"Filtering fixtures by name containing: '{filter_name}'\n")

    for item in iter_fixtures(fixtures_dir, filter_name):
        expected_file = item / "expected"
        if not expected_file.exists():
            print(f"✗ {item.name}: no expected file")
            failed.append(item.name)
            continue

        fixed_diff = DiffFixer.run(read_fixture_text(item / "diff"))
        expected = read_fixture_text(expected_file)

        if fixed_diff != expected:
            print(f"✗ {item.name}: output differs from expected")
            if debug:
                print(f"\n--- DEBUG INFO for {item.name} ---")
                print("## Expected:")
                print(expected)
                print("## What the fixer generated:")
                print(fixed_diff)
                print("--- END DEBUG INFO ---\n")
            failed.append(item.name)
            continue

        mismatches = [
            issue
            for issue in Validation.validate_diff(fixed_diff)
            if issue.type == "hunk_count_mismatch"
        ]
        if mismatches:
            print(f"✗ {item.name}: {mismatches[0].message}")
            failed.append(item.name)
            continue

        print(f"✓ {item.name}")
        passed.append(item.name)

    print(f"\nResults: {len(passed)}/{len(passed) + len(failed)} fixtures passed")
    return passed, failed


def process_command(args):
    """Handle the process subcommand."""
    process_fixtures(filter_name=args.filter, force=args.force)


def check_command(args):
    """Handle the check subcommand."""
    _, failed = check_fixtures(filter_name=args.filter, debug=args.debug)
    if failed:
        sys.exit(1)


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="Manage diff fixtures: write expected files and check the fixer"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser(
        "process", help="Run the fixer over fixture diffs and write expected files"
    )
    process_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite expected files that already exist",
    )
    process_parser.add_argument(
        "--filter",
        "-f",
        help="Filter fixtures by name (partial match, case-insensitive)",
    )

    check_parser = subparsers.add_parser(
        "check", help="Compare DiffFixer output with fixture expected files"
    )
    check_parser.add_argument(
        "--filter",
        "-f",
        help="Filter fixtures by name (partial match, case-insensitive)",
    )
    check_parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Show expected and generated diffs for failed fixtures",
    )

    args = parser.parse_args()

    if args.command == "process":
        process_command(args)
    elif args.command == "check":
        check_command(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
