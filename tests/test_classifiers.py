"""Tests for the default quality and language classifiers."""

import pytest

from api.schemas import Language
from parsing.classifiers import classify_language, classify_quality


@pytest.mark.parametrize("name,expected", [
    ("Artist - Album (2016) [FLAC]", "FLAC"),
    ("Artist - Album [FLAC 24bit]", "FLAC 24bit"),
    ("Artist - Album [MP3 320]", "MP3-320"),
    ("Artist - Album (V0)", "MP3-VBR-V0"),
    ("Artist - Album [VBR]", "MP3-VBR"),
    ("Artist - Album [ALAC]", "ALAC"),
    ("Artist - Album", "Unknown"),
])
def test_quality_from_name(name, expected):
    assert classify_quality(name).name == expected


def test_codec_description_wins_over_name():
    quality = classify_quality("01 - Song.mp3", "MP3", 256, 0)

    assert quality.name == "MP3-256"
    assert quality.bitrate == 256


def test_unknown_codec_falls_back_to_name():
    assert classify_quality("Artist - Album [FLAC]", "Mystery Codec", 0, 0).name == "FLAC"


@pytest.mark.parametrize("title,expected", [
    ("Artist - Album [French]", Language.FRENCH),
    ("Artist - Album (German Edition)", Language.GERMAN),
    ("Artist - Album (2016)", Language.ENGLISH),
])
def test_language(title, expected):
    assert classify_language(title) is expected
