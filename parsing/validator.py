"""Up-front rejection of titles that are known junk."""

import logging

from parsing.normalizer import remove_file_extension
from parsing.patterns import DEFAULT_TABLES, ParserTables

logger = logging.getLogger(__name__)


def is_obfuscated_marker(title: str) -> bool:
    """True for intentionally obscured 'password ... yenc' posts."""
    lowered = title.lower()
    return "password" in lowered and "yenc" in lowered


def mentions_obfuscation(title: str) -> bool:
    """True when either marker appears; errors on such titles stay quiet."""
    lowered = title.lower()
    return "password" in lowered or "yenc" in lowered


def validate(title: str, tables: ParserTables = DEFAULT_TABLES) -> bool:
    """
    Decide whether a title is worth parsing at all.

    Args:
        title: Raw release title
        tables: Compiled configuration tables

    Returns:
        False for obfuscated markers, titles without any alphanumeric
        character and hash-like junk names
    """
    if is_obfuscated_marker(title):
        return False

    if not any(char.isalnum() for char in title):
        logger.debug(f"Rejected title without alphanumeric characters: '{title}'")
        return False

    title_without_extension = remove_file_extension(title, tables)

    if any(regex.search(title_without_extension) for regex in tables.hashed_release_regexes):
        logger.debug(f"Rejected Hashed Release Title: {title}")
        return False

    return True
