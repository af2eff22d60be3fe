#!/usr/bin/env python3
"""
Regression checker for album-title parsing.

Parses tests/regression_album_cases.txt lines of the form:
  Release Title => Artist | Album | Year

An expected value of ``-`` means the title must not parse at all. The
checker prints every mismatch and exits non-zero when there is one.
"""
import re
from pathlib import Path
from typing import Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
CASES_FILE = ROOT / "tests" / "regression_album_cases.txt"

import sys
sys.path.insert(0, str(ROOT))

from parsing.engine import TitleParser
from parsing.patterns import build_tables
from utils.config_loader import load_config

Expected = Optional[Tuple[str, str, str]]


def parse_case(line: str) -> Optional[Tuple[str, Expected]]:
    """Parse a test case line."""
    line = line.strip()
    if not line or line.startswith('#'):
        return None
    m = re.match(r"(.+?)\s*=>\s*(.+)$", line)
    if not m:
        return None
    title, expected = m.group(1).strip(), m.group(2).strip()
    if expected == '-':
        return title, None
    fields = [part.strip() for part in expected.split('|')]
    if len(fields) != 3:
        return None
    return title, (fields[0], fields[1], fields[2])


def describe(result) -> Expected:
    if result is None:
        return None
    return result.artist_name, result.album_title, result.release_date


def main() -> int:
    """Run regression cases."""
    config = load_config()
    parser = TitleParser(tables=build_tables(config))

    cases = []
    with open(CASES_FILE, 'r', encoding='utf-8') as f:
        for line in f:
            parsed = parse_case(line)
            if parsed:
                cases.append(parsed)

    total = len(cases)
    if total == 0:
        print("No test cases found.")
        return 0

    print(f"Running {total} regression cases...")

    failures = []
    for title, expected in cases:
        got = describe(parser.parse_album_title(title))
        if got != expected:
            failures.append((title, expected, got))

    passed = total - len(failures)
    print(f"\nChecked {total} cases: {passed} passed, {len(failures)} failed.")

    if failures:
        print(f"\n{len(failures)} Failures:")
        for title, expected, got in failures:
            print(f" - {title}: expected {expected}, got {got}")
        return 1

    print("All regression cases passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
