"""
String helpers shared by the parser and by downstream matching.

These are stateless transforms; none of them consult configuration except
``remove_file_extension``, which is re-exported from the normalizer.
"""

import unicodedata

from parsing.normalizer import remove_file_extension
from parsing.patterns import (
    AFTER_DASH_REGEX, BRACKET_REGEXES, COMMON_TAG_REGEXES, COMMON_WORD_REGEX,
    DUPLICATE_SPACES_REGEX, EDITION_TAG_REGEX, NORMALIZE_REGEX, NUMERIC_REGEX,
    PUNCTUATION_REGEX, SPECIAL_EPISODE_WORD_REGEX, WORD_DELIMITER_REGEX
)

__all__ = [
    'remove_file_extension', 'remove_accent', 'clean_artist_name',
    'normalize_track_title', 'normalize_title', 'clean_album_title',
    'clean_track_title', 'remove_brackets_and_contents', 'remove_after_dash',
]


def remove_accent(text: str) -> str:
    decomposed = unicodedata.normalize('NFD', text)
    stripped = "".join(char for char in decomposed if unicodedata.category(char) != 'Mn')
    return unicodedata.normalize('NFC', stripped)


def clean_artist_name(name: str) -> str:
    """
    Fold an artist name for matching.

    Articles and conjunctions are dropped unless they start the name, all
    non-word characters go, and the result is lower-cased without accents.
    Purely numeric names are returned untouched.
    """
    if NUMERIC_REGEX.match(name):
        return name

    return remove_accent(NORMALIZE_REGEX.sub("", name).lower())


def normalize_track_title(title: str) -> str:
    title = SPECIAL_EPISODE_WORD_REGEX.sub("", title)
    title = PUNCTUATION_REGEX.sub(" ", title)
    title = DUPLICATE_SPACES_REGEX.sub(" ", title)

    return title.strip().lower()


def normalize_title(title: str) -> str:
    title = WORD_DELIMITER_REGEX.sub(" ", title)
    title = PUNCTUATION_REGEX.sub("", title)
    title = COMMON_WORD_REGEX.sub("", title)
    title = DUPLICATE_SPACES_REGEX.sub(" ", title)

    return title.strip().lower()


def clean_album_title(album: str) -> str:
    """Drop bracketed edition qualifiers such as '(Deluxe Version)'."""
    return EDITION_TAG_REGEX.sub("", album).strip()


def clean_track_title(title: str) -> str:
    """Drop featuring credits and bracketed edition qualifiers."""
    for regex in COMMON_TAG_REGEXES:
        title = regex.sub("", title).strip()

    return title


def remove_brackets_and_contents(text: str) -> str:
    for regex in BRACKET_REGEXES:
        text = regex.sub("", text).strip()

    return text


def remove_after_dash(text: str) -> str:
    return AFTER_DASH_REGEX.sub("", text).strip()
