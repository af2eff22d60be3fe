"""Tests for match post-processing."""

import re

import pytest

from parsing.postprocess import (
    build_album_info, find_invalid_date, get_release_hash, get_sub_group,
    parse_int, repair_acronyms, slot, strip_request_info
)


@pytest.mark.parametrize("name,expected", [
    ("Will.I.Am", "Will I. Am"),
    ("A.B.C", "A.B.C."),
    ("Jay.Z", "Jay Z."),
    ("2.Chainz", "2 Chainz"),
    ("a.Foo", "a Foo"),
    ("a.B", "a.B."),
    ("Artist Name", "Artist Name"),
    ("", ""),
])
def test_repair_acronyms(name, expected):
    assert repair_acronyms(name) == expected


def test_trailing_a_after_a_word_becomes_an_initial():
    # The lookahead keeps its last value past the end of the token list
    assert repair_acronyms("Foo.a") == "Foo a."


def test_parse_int_defaults_to_zero():
    assert parse_int("42") == 42
    assert parse_int("") == 0
    assert parse_int("abc") == 0


def test_strip_request_info():
    assert strip_request_info("[REQ] Artist ") == "Artist"


def test_slot_is_empty_for_missing_or_unmatched_groups():
    match = re.search(r"(?P<artist>\w+)(?P<album>-x)?", "Artist")

    assert slot(match, 'artist') == "Artist"
    assert slot(match, 'album') == ""
    assert slot(match, 'releaseyear') == ""


HASH_RULE = re.compile(r"^(?P<artist>.+?) - (?P<album>.+?) (?P<hash>\[[0-9A-Fx]+\])")


def test_release_hash_is_read_from_the_hash_slot():
    match = HASH_RULE.search("Artist - Album [ABCDEF12]")

    assert get_release_hash(match) == "ABCDEF12"


def test_resolution_is_not_a_release_hash():
    match = HASH_RULE.search("Artist - Album [1280x720]")

    assert get_release_hash(match) == ""


def test_release_hash_without_slot():
    match = re.search(r"(?P<artist>.+)", "Artist")

    assert get_release_hash(match) == ""
    assert get_sub_group(match) == ""


def test_sub_group_slot():
    match = re.search(r"^\[(?P<subgroup>[^\]]+)\] (?P<artist>.+)", "[Group] Artist")

    assert get_sub_group(match) == "Group"


def test_album_info_for_discography_range():
    match = re.search(
        r"^(?P<artist>.+?) - (?P<discography>Discography) (?P<startyear>\d{4})-(?P<endyear>\d{4})",
        "Some_Artist - Discography 1990-2020"
    )

    result = build_album_info(match)

    assert result.artist_name == "Some Artist"
    assert result.album_title == "Discography"
    assert result.discography is True
    assert (result.discography_start, result.discography_end) == (1990, 2020)
    assert result.release_date == "0"


DATE_RULE = re.compile(r"^(?P<artist>.+?) - (?P<album>.+?) - (?P<releaseyear>\d{4})")


@pytest.mark.parametrize("text,is_invalid", [
    ("Artist - Album - 2015.02.30", True),
    ("Artist - Album - 2016.02.29", False),
    ("Artist - Album - 2015.13.01", True),
    ("Artist - Album - 2015", False),
])
def test_find_invalid_date(text, is_invalid):
    match = DATE_RULE.search(text)

    assert bool(find_invalid_date(match, text)) is is_invalid
