"""
Title normalization: reversal repair, extension stripping, noise removal
and air-date canonicalization.

All functions are pure. ``normalize_title_steps`` keeps the intermediate
forms because the classifiers need the title before the noise tokens are
removed.
"""

import logging
from typing import NamedTuple

from parsing.patterns import (
    AIR_DATE_REGEX, DEFAULT_TABLES, FILE_EXTENSION_REGEX, REVERSED_TITLE_REGEX,
    SIMPLE_TITLE_REGEX, SIX_DIGIT_AIR_DATE_REGEX, WEBSITE_PREFIX_REGEX, ParserTables
)

logger = logging.getLogger(__name__)


class NormalizedTitle(NamedTuple):
    title: str          # input with any reversal repaired
    release_title: str  # ``title`` without its media extension
    simple_title: str   # cleaned string fed to the cascades


def remove_file_extension(title: str, tables: ParserTables = DEFAULT_TABLES) -> str:
    """Strip a trailing extension, but only a known media/download one."""
    def _strip_known(match):
        if match.group(0).lower() in tables.strippable_extensions:
            return ""
        return match.group(0)

    return FILE_EXTENSION_REGEX.sub(_strip_known, title)


def repair_reversed_title(title: str, tables: ParserTables = DEFAULT_TABLES) -> str:
    """Un-reverse titles like 'p027.10E10S.wohS' while keeping the extension."""
    if not REVERSED_TITLE_REGEX.search(title):
        return title

    without_extension = remove_file_extension(title, tables)
    repaired = without_extension[::-1] + title[len(without_extension):]

    logger.debug(f"Reversed name detected. Converted to '{repaired}'")
    return repaired


def strip_quality_noise(title: str) -> str:
    return SIMPLE_TITLE_REGEX.sub("", title)


def strip_prefix_and_suffix(title: str, tables: ParserTables = DEFAULT_TABLES) -> str:
    title = WEBSITE_PREFIX_REGEX.sub("", title)
    return tables.clean_torrent_suffix_regex.sub("", title)


def canonicalize_air_date(title: str) -> str:
    """
    Rewrite an embedded date as ``yyyy.mm.dd``.

    A four-digit-year date keeps the text before it and drops everything
    after it. Otherwise a delimiter-bounded ``yymmdd`` run is expanded to
    ``20yy.mm.dd`` unless both month and day are zero.
    """
    air_date = AIR_DATE_REGEX.search(title)
    if air_date:
        if air_date.group('airyear'):
            year, month, day = air_date.group('airyear', 'airmonth', 'airday')
        else:
            year, month, day = air_date.group('usyear', 'usmonth', 'usday')
        title = f"{air_date.group(1)}{year}.{month}.{day}"

    six_digit = SIX_DIGIT_AIR_DATE_REGEX.search(title)
    if six_digit:
        year, month, day = six_digit.group('airyear', 'airmonth', 'airday')

        if month != "00" or day != "00":
            title = title.replace(six_digit.group('airdate'), f"20{year}.{month}.{day}")

    return title


def normalize_title_steps(title: str, tables: ParserTables = DEFAULT_TABLES) -> NormalizedTitle:
    """
    Run the full normalization chain and keep each intermediate form.

    Args:
        title: Raw release title or file name
        tables: Compiled configuration tables

    Returns:
        NormalizedTitle with the repaired, extension-free and cleaned forms
    """
    title = repair_reversed_title(title, tables)
    release_title = remove_file_extension(title, tables)

    simple_title = strip_quality_noise(release_title)
    simple_title = strip_prefix_and_suffix(simple_title, tables)
    simple_title = canonicalize_air_date(simple_title)

    return NormalizedTitle(title, release_title, simple_title)


def normalize(title: str, tables: ParserTables = DEFAULT_TABLES) -> str:
    return normalize_title_steps(title, tables).simple_title
