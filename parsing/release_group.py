"""Release-group and anime sub-group extraction."""

import logging
from typing import Optional

from parsing.normalizer import remove_file_extension
from parsing.patterns import (
    ANIME_RELEASE_GROUP_REGEX, DEFAULT_TABLES, WEBSITE_PREFIX_REGEX, ParserTables
)

logger = logging.getLogger(__name__)


def resolve_group(title: str, tables: ParserTables = DEFAULT_TABLES) -> Optional[str]:
    """
    Find the uploader tag of a release title.

    A leading ``[SubGroup]`` wins outright. Otherwise the last ``-GROUP``
    marker is used, skipping codec/source tokens such as ``-FLAC``; purely
    numeric candidates are not groups.

    Args:
        title: Release title, extension optional
        tables: Compiled configuration tables

    Returns:
        The group name, or None when there is none
    """
    title = title.strip()
    title = remove_file_extension(title, tables)
    title = WEBSITE_PREFIX_REGEX.sub("", title)

    anime_match = ANIME_RELEASE_GROUP_REGEX.search(title)
    if anime_match:
        return anime_match.group('subgroup')

    title = tables.clean_release_group_regex.sub("", title)

    candidates = list(tables.release_group_regex.finditer(title))
    if not candidates:
        return None

    group = candidates[-1].group('releasegroup')
    if group.isdigit():
        return None

    return group
