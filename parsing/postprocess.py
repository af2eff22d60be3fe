"""
Turn a winning cascade match into typed results.

The track path rebuilds dotted initialisms in artist names; the album path
resolves discography ranges and versions. Neither path raises for bad
numbers: unparsable years and track numbers become 0.
"""

import datetime
import logging
import re
from enum import Enum
from typing import List, Optional

from api.schemas import ArtistTitleInfo, ParsedAlbumInfo, ParsedTrackInfo
from parsing.patterns import CANONICAL_DATE_TAIL_REGEX, REQUEST_INFO_REGEX

logger = logging.getLogger(__name__)

DATE_SLOTS = ('releaseyear', 'startyear', 'endyear')
FALSE_POSITIVE_HASHES = frozenset({'1280x720'})


def slot(match: re.Match, name: str) -> str:
    """Value of a named slot, or '' when the rule lacks it or it did not take part."""
    if name not in match.re.groupindex:
        return ""
    return match.group(name) or ""


def slot_matched(match: re.Match, name: str) -> bool:
    return name in match.re.groupindex and match.group(name) is not None


def parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def strip_request_info(text: str) -> str:
    return REQUEST_INFO_REGEX.sub("", text).strip(' ')


class AcronymState(Enum):
    IDLE = "idle"
    IN_ACRONYM = "in_acronym"


def repair_acronyms(name: str) -> str:
    """
    Rebuild a dot-separated artist name, keeping initialisms together.

    'Will.I.Am' becomes 'Will I. Am' and 'A.B.C' becomes 'A.B.C.'. The token
    'a' only joins a run when a run is open or the lookahead token is a
    single character. Past the last token the lookahead keeps its previous
    value, so a trailing 'a' after another token is treated as an initial.
    """
    parts = name.split('.')
    buffer: List[str] = []
    state = AcronymState.IDLE
    lookahead = ""

    for index, part in enumerate(parts):
        if index + 1 < len(parts):
            lookahead = parts[index + 1]

        is_letter = len(part) == 1 and part.lower() != 'a' and not part.isdigit()
        is_joining_a = part.lower() == 'a' and (
            state is AcronymState.IN_ACRONYM or len(lookahead) == 1
        )

        if is_letter or is_joining_a:
            buffer.append(part + '.')
            state = AcronymState.IN_ACRONYM
        else:
            if state is AcronymState.IN_ACRONYM:
                buffer.append(' ')
                state = AcronymState.IDLE
            buffer.append(part + ' ')

    return "".join(buffer).strip(' ')


def artist_title_info(title: str) -> ArtistTitleInfo:
    return ArtistTitleInfo(title=title)


def build_track_info(match: re.Match) -> ParsedTrackInfo:
    """Build a ParsedTrackInfo from a track-rule match."""
    artist_name = slot(match, 'artist').replace('_', ' ')
    artist_name = repair_acronyms(strip_request_info(artist_name))

    track_number = parse_int(slot(match, 'trackNumber'))

    result = ParsedTrackInfo(
        artist_title=artist_name,
        artist_title_info=artist_title_info(artist_name),
        track_numbers=[track_number],
    )

    logger.debug(f"Track Parsed. {result}")
    return result


def _clean_fragment(value: str) -> str:
    return strip_request_info(value.replace('.', ' ').replace('_', ' '))


def build_album_info(match: re.Match) -> ParsedAlbumInfo:
    """Build a ParsedAlbumInfo from an album-rule match (groups attached later)."""
    artist_name = _clean_fragment(slot(match, 'artist'))
    album_title = _clean_fragment(slot(match, 'album'))
    release_version = _clean_fragment(slot(match, 'version'))

    release_year = parse_int(slot(match, 'releaseyear'))

    result = ParsedAlbumInfo(
        artist_name=artist_name,
        album_title=album_title,
        artist_title_info=artist_title_info(artist_name),
        release_date=str(release_year),
        release_version=release_version,
    )

    if slot_matched(match, 'discography'):
        start = parse_int(slot(match, 'startyear'))
        end = parse_int(slot(match, 'endyear'))
        result.discography = True

        if start > 0 and end > 0:
            result.discography_start = start
            result.discography_end = end
        elif end > 0:
            result.discography_end = end

        result.album_title = "Discography"

    logger.debug(f"Album Parsed. {result}")
    return result


def find_invalid_date(match: re.Match, text: str) -> Optional[str]:
    """
    Check year slots that are part of a canonical ``yyyy.mm.dd`` date.

    Returns:
        A reason string when such a date is not a real calendar day
    """
    for name in DATE_SLOTS:
        value = slot(match, name)
        if not value:
            continue

        tail = CANONICAL_DATE_TAIL_REGEX.match(text, match.end(name))
        if tail is None:
            continue

        month, day = tail.group('month'), tail.group('day')
        try:
            datetime.date(int(value), int(month), int(day))
        except ValueError as e:
            return f"Invalid date {value}.{month}.{day} in '{text}': {e}"

    return None


def get_sub_group(match: re.Match) -> str:
    if slot_matched(match, 'subgroup'):
        return match.group('subgroup')
    return ""


def get_release_hash(match: re.Match) -> str:
    if not slot_matched(match, 'hash'):
        return ""

    hash_value = match.group('hash').strip('[]')
    if hash_value in FALSE_POSITIVE_HASHES:
        return ""

    return hash_value
