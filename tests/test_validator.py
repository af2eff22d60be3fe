"""Tests for up-front title rejection."""

import pytest

from parsing import engine
from parsing.validator import validate

HASH_32 = "0123456789abcdefABCDEF0123456789"


@pytest.mark.parametrize("title", [
    "password yEnc Some.Release",
    "PASSWORD protected [YENC] upload",
    "",
    "!!! --- ...",
    HASH_32,
    HASH_32 + ".mp3",
    "abcdefghijklmnopqrstuvwx",
    "ABCDEFGHIJK123",
    "abcdefghijkl123",
    "Backup_12345S01-02",
    "123",
    "123.nzb",
    "ABC",
    "abc.mp3",
    "B00BS",
])
def test_rejects_junk_titles(title):
    assert validate(title) is False


@pytest.mark.parametrize("title", [
    "Artist Name - Album Title (2016)",
    "Imagine Dragons-Smoke And Mirrors-Deluxe Edition-2CD-FLAC-2015-JLM",
    "password protected but not usenet",
    "1234",
    "abcd",
])
def test_accepts_ordinary_titles(title):
    assert validate(title) is True


def test_hash_like_name_with_media_extension_is_not_parsed():
    title = HASH_32 + ".flac"

    assert engine.parse_album_title(title) is None
    assert engine.parse_music_title(title) is None


@pytest.mark.parametrize("title", ["password yenc", "???", HASH_32, "b00bs"])
def test_rejected_titles_never_reach_the_cascade(monkeypatch, title):
    calls = []

    def recording_cascade(*args, **kwargs):
        calls.append(args)
        raise AssertionError("cascade evaluated")

    monkeypatch.setattr(engine, "run_cascade", recording_cascade)

    assert engine.parse_album_title(title) is None
    assert engine.parse_music_title(title) is None
    assert calls == []


def test_obfuscated_marker_is_rejected_silently(caplog):
    caplog.set_level("DEBUG", logger="parsing.validator")

    assert validate("password yenc junk") is False
    assert not [r for r in caplog.records if r.name == "parsing.validator"]


def test_hash_rejection_is_logged(caplog):
    caplog.set_level("DEBUG", logger="parsing.validator")

    assert validate(HASH_32) is False
    assert any("Rejected Hashed Release Title" in r.getMessage() for r in caplog.records)
