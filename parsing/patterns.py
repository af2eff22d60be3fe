"""
Regular expressions and rule tables used by the release title parser.

Everything in this module is compiled once at import time and never mutated,
so the tables can be shared freely between threads. The cascade tables are
ordered: a rule's position in the tuple is its priority.

The hand-curated junk lists (hash-like names, release-group junk suffixes,
tracker tags, media extensions) come from configuration and are compiled into
a ``ParserTables`` instance by ``build_tables``.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Pattern, Tuple

from utils.config_loader import default_config
from utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class PatternRule:
    """A named extraction pattern; its slots are the pattern's named groups."""

    name: str
    pattern: Pattern

    def slots(self) -> FrozenSet[str]:
        return frozenset(self.pattern.groupindex)


def _rule(name: str, pattern: str, flags: int = re.IGNORECASE) -> PatternRule:
    return PatternRule(name, re.compile(pattern, flags))


# Track-style titles. The first rule matches almost anything, the others are
# kept so callers that swap tables keep the same priority layout.
TRACK_RULES: Tuple[PatternRule, ...] = (
    # 01 - artist - trackName
    _rule("track with artist",
          r"(?P<trackNumber>\d*)?([-| ]?)(?P<artist>[a-zA-Z0-9, ().&_]*)[-| ]?(?P<trackName>[a-zA-Z0-9, ().&_]+)"),
    # 01 - trackName
    _rule("track without artist",
          r"(?P<trackNumber>\d*)[-| .]?(?P<trackName>[a-zA-Z0-9, ().&_]+)"),
    # trackName
    _rule("track without number or artist",
          r"(?P<trackNumber>\d*)[-| .]?(?P<trackName>[a-zA-Z0-9, ().&_]+)"),
    # artist - trackName
    _rule("track with artist without number",
          r"(?P<trackNumber>\d*)[-| .]?(?P<trackName>[a-zA-Z0-9, ().&_]+)"),
    # 01 - artist - trackName, artist starting the title
    _rule("track with artist and leading title",
          r"(?P<trackNumber>\d*)?[-| ]?(?P<artist>[a-zA-Z0-9, ().&_]*)[-| ]?(?P<trackName>[a-zA-Z0-9, ().&_]+)"),
)

# Album-style titles, most constrained first.
ALBUM_RULES: Tuple[PatternRule, ...] = (
    # ruTracker - (Genre) [Source]? Artist - Discography
    _rule("rutracker discography",
          r"^(?:\(.+?\))(?:\W*(?:\[(?P<source>.+?)\]))?\W*(?P<artist>.+?)(?: - )(?P<discography>Discography|Discografia).+?(?P<startyear>\d{4}).+?(?P<endyear>\d{4})"),
    # Artist - Discography with two years
    _rule("artist - discography with two years",
          r"^(?P<artist>.+?)(?: - )(?:.+?)?(?P<discography>Discography|Discografia).+?(?P<startyear>\d{4}).+?(?P<endyear>\d{4})"),
    # Artist - Discography with end year
    _rule("artist - discography with end year",
          r"^(?P<artist>.+?)(?: - )(?:.+?)?(?P<discography>Discography|Discografia).+?(?P<endyear>\d{4})"),
    # Artist Discography with two years
    _rule("artist discography with two years",
          r"^(?P<artist>.+?)\W*(?P<discography>Discography|Discografia).+?(?P<startyear>\d{4}).+?(?P<endyear>\d{4})"),
    # Artist Discography with end year
    _rule("artist discography with end year",
          r"^(?P<artist>.+?)\W*(?P<discography>Discography|Discografia).+?(?P<endyear>\d{4})"),
    # Artist Discography
    _rule("artist discography",
          r"^(?P<artist>.+?)\W*(?P<discography>Discography|Discografia)"),
    # ruTracker - (Genre) [Source]? Artist - Album - Year
    _rule("rutracker album",
          r"^(?:\(.+?\))(?:\W*(?:\[(?P<source>.+?)\]))?\W*(?P<artist>.+?)(?: - )(?P<album>.+?)(?: - )(?P<releaseyear>\d{4})"),
    # Imagine Dragons-Smoke And Mirrors-Deluxe Edition-2CD-FLAC-2015-JLM
    _rule("artist-album-version-source-year",
          r"^(?P<artist>.+?)[-](?P<album>.+?)[-](?:[\(|\[]?)(?P<version>.+?(?:Edition)?)(?:[\)|\]]?)[-](?P<source>\d?CD|WEB).+?(?P<releaseyear>\d{4})"),
    # Dani_Sbert-Togheter-WEB-2017-FURY
    _rule("artist-album-source-year",
          r"^(?P<artist>.+?)[-](?P<album>.+?)[-](?P<source>\d?CD|WEB).+?(?P<releaseyear>\d{4})"),
    # Artist - Album (Year) Strict
    _rule("artist - album (year) strict",
          r"^(?:(?P<artist>.+?)(?: - )+)(?P<album>.+?)\W*(?:\(|\[).+?(?P<releaseyear>\d{4})"),
    # Artist - Album (Year)
    _rule("artist - album (year)",
          r"^(?:(?P<artist>.+?)(?: - )+)(?P<album>.+?)\W*(?:\(|\[)(?P<releaseyear>\d{4})"),
    # Artist - Album - Year [something]
    _rule("artist - album - year [something]",
          r"^(?:(?P<artist>.+?)(?: - )+)(?P<album>.+?)\W*(?: - )(?P<releaseyear>\d{4})\W*(?:\(|\[)"),
    # Artist - Album [something] or Artist - Album (something)
    _rule("artist - album [something]",
          r"^(?:(?P<artist>.+?)(?: - )+)(?P<album>.+?)\W*(?:\(|\[)"),
    # Artist - Album Year
    _rule("artist - album year",
          r"^(?:(?P<artist>.+?)(?: - )+)(?P<album>.+?)\W*(?P<releaseyear>\d{4})"),
    # Artist-Album (Year) Strict, no spaces around the hyphen
    _rule("artist-album (year) strict",
          r"^(?:(?P<artist>.+?)(?:-)+)(?P<album>.+?)\W*(?:\(|\[).+?(?P<releaseyear>\d{4})"),
    # Artist-Album (Year)
    _rule("artist-album (year)",
          r"^(?:(?P<artist>.+?)(?:-)+)(?P<album>.+?)\W*(?:\(|\[)(?P<releaseyear>\d{4})"),
    # Artist-Album [something] or Artist-Album (something)
    _rule("artist-album [something]",
          r"^(?:(?P<artist>.+?)(?:-)+)(?P<album>.+?)\W*(?:\(|\[)"),
    # Artist-Album-something-Year
    _rule("artist-album-something-year",
          r"^(?:(?P<artist>.+?)(?:-)+)(?P<album>.+?)(?:-.+?)(?P<releaseyear>\d{4})"),
    # Artist-Album Year
    _rule("artist-album year",
          r"^(?:(?P<artist>.+?)(?:-)+)(?:(?P<album>.+?)(?:-)+)(?P<releaseyear>\d{4})"),
    # Artist-Year-Album, any spacing around the hyphens
    _rule("artist-year-album",
          r"^(?:(?P<artist>.+?)(?:-))(?P<releaseyear>\d{4})(?:-)(?P<album>[^-]+)"),
)

# Reversed "720p", "1080p" or "S01E02" fragments
REVERSED_TITLE_REGEX = re.compile(r"[-._ ](p027|p0801|\d{2}E\d{2}S)[-._ ]")

FILE_EXTENSION_REGEX = re.compile(r"\.[a-z0-9]{2,4}$", re.IGNORECASE)

SIMPLE_TITLE_REGEX = re.compile(
    r"(?:(480|720|1080|2160|320)[ip]|[xh][\W_]?26[45]|DD\W?5\W1|[<>*:|]|848x480|1280x720|1920x1080|3840x2160|4096x2160|(8|10)b(it)?)\s*",
    re.IGNORECASE)

WEBSITE_PREFIX_REGEX = re.compile(
    r"^\[\s*[a-z]+(\.[a-z]+)+\s*\][- ]*|^www\.[a-z]+\.(?:com|net)[ -]*",
    re.IGNORECASE)

AIR_DATE_REGEX = re.compile(
    r"^(.*?)(?<!\d)(?:(?P<airyear>\d{4})[_.-](?P<airmonth>[0-1][0-9])[_.-](?P<airday>[0-3][0-9])"
    r"|(?P<usmonth>[0-1][0-9])[_.-](?P<usday>[0-3][0-9])[_.-](?P<usyear>\d{4}))(?!\d)",
    re.IGNORECASE)

SIX_DIGIT_AIR_DATE_REGEX = re.compile(
    r"(?<=[_.-])(?P<airdate>(?<!\d)(?P<airyear>[1-9]\d{1})(?P<airmonth>[0-1][0-9])(?P<airday>[0-3][0-9]))(?=[_.-])",
    re.IGNORECASE)

# "yyyy.mm.dd" trailing a captured year slot
CANONICAL_DATE_TAIL_REGEX = re.compile(r"\.(?P<month>\d{2})\.(?P<day>\d{2})(?!\d)")

ANIME_RELEASE_GROUP_REGEX = re.compile(
    r"^(?:\[(?P<subgroup>(?!\s).+?(?<!\s))\](?:_|-|\s|\.)?)",
    re.IGNORECASE)

REQUEST_INFO_REGEX = re.compile(r"\[.+?\]")

NORMALIZE_REGEX = re.compile(
    r"((?:\b|_)(?<!^)(a(?!$)|an|the|and|or|of)(?:\b|_))|\W|_",
    re.IGNORECASE)

NUMERIC_REGEX = re.compile(r"^\s*[-+]?\d+\s*$")

WORD_DELIMITER_REGEX = re.compile(r"(\s|\.|,|_|-|=|\|)+")
PUNCTUATION_REGEX = re.compile(r"[^\w\s]")
COMMON_WORD_REGEX = re.compile(r"\b(a|an|the|and|or|of)\b\s?", re.IGNORECASE)
SPECIAL_EPISODE_WORD_REGEX = re.compile(r"\b(part|special|edition|christmas)\b\s?", re.IGNORECASE)
DUPLICATE_SPACES_REGEX = re.compile(r"\s{2,}")

FEATURING_REGEX = re.compile(
    r"(\[|\()*\b((featuring|feat.|feat|ft|ft.)\s{1}){1}\s*.*(\]|\))*",
    re.IGNORECASE)
EDITION_TAG_REGEX = re.compile(
    r"(?:\(|\[)(?:[^\(\[]*)(?:version|limited|deluxe|single|clean|album|special|bonus|promo|remastered)(?:[^\)\]]*)(?:\)|\])",
    re.IGNORECASE)
COMMON_TAG_REGEXES = (FEATURING_REGEX, EDITION_TAG_REGEX)

BRACKET_REGEXES = (
    re.compile(r"\(.*\)"),
    re.compile(r"\[.*\]"),
)

AFTER_DASH_REGEX = re.compile(r"[-:].*")


@dataclass(frozen=True)
class ParserTables:
    """Configuration-driven tables, compiled once and shared read-only."""

    strippable_extensions: FrozenSet[str]
    media_extensions: FrozenSet[str]
    hashed_release_regexes: Tuple[Pattern, ...]
    clean_release_group_regex: Pattern
    release_group_regex: Pattern
    clean_torrent_suffix_regex: Pattern


def build_tables(config: Optional[Dict[str, Any]] = None) -> ParserTables:
    """
    Compile the configurable junk lists into a ``ParserTables`` instance.

    Args:
        config: Full configuration dictionary (defaults when omitted)

    Returns:
        Immutable tables for the validator, normalizer and group resolver

    Raises:
        ConfigurationError: If a configured pattern does not compile
    """
    parser_config = (config or default_config())['parser']

    media_extensions = frozenset(ext.lower() for ext in parser_config['media_extensions'])
    download_extensions = frozenset(ext.lower() for ext in parser_config['download_extensions'])

    try:
        hashed = tuple(
            re.compile(entry['pattern'], re.IGNORECASE if entry.get('ignore_case') else 0)
            for entry in parser_config['hashed_release_patterns']
        )
    except re.error as e:
        raise ConfigurationError(f"Invalid hashed release pattern: {e}")

    junk = "|".join(re.escape(suffix) for suffix in parser_config['release_group_junk_suffixes'])
    clean_release_group = re.compile(
        rf"^(.*?[-._ ])|(-({junk}))+$", re.IGNORECASE)

    # One lookbehind per token; re needs fixed-width lookbehinds
    exclusions = "".join(
        f"(?<!{re.escape(token)})" for token in parser_config['release_group_excluded_tokens']
    )
    release_group = re.compile(
        rf"-(?P<releasegroup>[a-z0-9]+){exclusions}(?:\b|[-._ ])", re.IGNORECASE)

    trackers = "|".join(re.escape(suffix) for suffix in parser_config['torrent_suffixes'])
    clean_torrent_suffix = re.compile(rf"\[(?:{trackers})\]$", re.IGNORECASE)

    return ParserTables(
        strippable_extensions=media_extensions | download_extensions,
        media_extensions=media_extensions,
        hashed_release_regexes=hashed,
        clean_release_group_regex=clean_release_group,
        release_group_regex=release_group,
        clean_torrent_suffix_regex=clean_torrent_suffix,
    )


DEFAULT_TABLES = build_tables()
