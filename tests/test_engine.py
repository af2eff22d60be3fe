"""End-to-end tests for the parser entry points."""

from pathlib import Path

import pytest

from api.schemas import AudioTagInfo, CodecInfo, Language
from parsing import engine
from parsing.engine import TitleParser
from utils.exceptions import MetadataExtractionError


class StubTagReader:
    """Tag reader double that records the paths it was asked for."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def read(self, path):
        self.calls.append(path)
        if self.error:
            raise self.error
        return self.result


def test_album_with_version_source_and_group():
    result = engine.parse_album_title("Imagine Dragons-Smoke And Mirrors-Deluxe Edition-2CD-FLAC-2015-JLM")

    assert result.artist_name == "Imagine Dragons"
    assert result.album_title == "Smoke And Mirrors"
    assert result.release_version == "Deluxe Edition"
    assert result.release_date == "2015"
    assert result.release_group == "JLM"
    assert result.quality.name == "FLAC"
    assert result.language is Language.ENGLISH
    assert result.discography is False


def test_album_with_year_in_brackets():
    result = engine.parse_album_title("Artist Name - Album Title (2016)")

    assert result.artist_name == "Artist Name"
    assert result.album_title == "Album Title"
    assert result.release_date == "2016"
    assert result.release_group is None
    assert result.artist_title_info.title == "Artist Name"


def test_discography_with_range():
    result = engine.parse_album_title("Artist - Discography 1990-2020")

    assert result.artist_name == "Artist"
    assert result.album_title == "Discography"
    assert result.discography is True
    assert result.discography_start == 1990
    assert result.discography_end == 2020
    assert result.release_date == "0"


def test_discography_with_end_year_only():
    result = engine.parse_album_title("Artist - Discography (2004)")

    assert result.discography is True
    assert (result.discography_start, result.discography_end) == (0, 2004)


def test_rutracker_discography():
    result = engine.parse_album_title("(Rock) [FLAC] Metallica - Discography - 1983-2016")

    assert result.artist_name == "Metallica"
    assert (result.discography_start, result.discography_end) == (1983, 2016)


def test_invalid_calendar_date_aborts_the_whole_cascade():
    assert engine.parse_album_title("Artist - Album - 2015.02.30") is None

    valid = engine.parse_album_title("Artist - Album - 2015.02.28")
    assert (valid.artist_name, valid.album_title, valid.release_date) == ("Artist", "Album", "2015")


def test_language_is_classified_from_the_release_title():
    result = engine.parse_album_title("Artist - Album [French] (2010)")

    assert result.language is Language.FRENCH


def test_track_with_dotted_artist():
    result = engine.parse_music_title("Will.I.Am - Scream & Shout")

    assert result.artist_title == "Will I. Am"
    assert result.artist_title_info.title == "Will I. Am"
    assert result.track_numbers == [0]


def test_track_with_number():
    result = engine.parse_music_title("05 Artist Name - Song.mp3")

    assert result.artist_title == "Artist Name"
    assert result.track_numbers == [5]


@pytest.mark.parametrize("title", ["", "---", "b00bs"])
def test_junk_is_not_parsed(title):
    assert engine.parse_album_title(title) is None
    assert engine.parse_music_title(title) is None


def test_parsing_is_deterministic():
    title = "Imagine Dragons-Smoke And Mirrors-Deluxe Edition-2CD-FLAC-2015-JLM"

    assert engine.parse_album_title(title) == engine.parse_album_title(title)


def test_artist_name_falls_back_to_cleaned_title():
    assert engine.parse_artist_name("Artist Name - Album Title (2016)") == "Artist Name"
    assert engine.parse_artist_name("The Beatles") == "thebeatles"


def test_release_group_entry_point():
    assert engine.parse_release_group("Dani_Sbert-Togheter-WEB-2017-FURY") == "FURY"


def test_search_criteria_match():
    result = engine.parse_album_title_with_search_criteria(
        "Linkin Park - Hybrid Theory (2000) [FLAC]", "Linkin Park", ["Hybrid Theory", "Meteora"]
    )

    assert result.artist_name == "Linkin Park"
    assert result.album_title == "Hybrid Theory"
    assert result.release_date == "0"
    assert result.quality.name == "FLAC"


def test_search_criteria_matches_any_album_and_is_case_insensitive():
    result = engine.parse_album_title_with_search_criteria(
        "linkin.park.meteora.2003", "Linkin Park", ["Hybrid Theory", "Meteora"]
    )

    assert result.album_title == "meteora"


def test_search_criteria_mismatch():
    assert engine.parse_album_title_with_search_criteria(
        "Linkin Park - Hybrid Theory (2000)", "Metallica", ["Hybrid Theory"]
    ) is None


def test_unexpected_errors_are_logged_and_swallowed(caplog):
    def broken_classifier(*args):
        raise RuntimeError("boom")

    parser = TitleParser(quality_classifier=broken_classifier)

    assert parser.parse_album_title("Artist Name - Album Title (2016)") is None
    assert any(r.levelname == "ERROR" and "boom" in r.getMessage() for r in caplog.records)


def test_errors_on_obfuscated_titles_stay_silent(caplog):
    def broken_classifier(*args):
        raise RuntimeError("boom")

    parser = TitleParser(quality_classifier=broken_classifier)

    assert parser.parse_album_title("Artist Name - Album Title (2016) password") is None
    assert not [r for r in caplog.records if r.levelname == "ERROR"]


def test_injected_language_classifier():
    parser = TitleParser(language_classifier=lambda title: Language.GERMAN)

    assert parser.parse_album_title("Artist Name - Album Title (2016)").language is Language.GERMAN


def test_music_path_prefers_tags():
    tags = AudioTagInfo(
        track_number="3/12", title="Song", disc_number=1, album="Album", artist="Artist",
        year="2001-05-01", codecs=[CodecInfo(description="FLAC", bitrate=900, bits_per_sample=24)]
    )
    reader = StubTagReader(result=tags)
    parser = TitleParser(tag_reader=reader)

    result = parser.parse_music_path(Path("/music/Other/01 - Song.flac"))

    assert reader.calls == [Path("/music/Other/01 - Song.flac")]
    assert result.artist_title == "Artist"
    assert result.title == "Song"
    assert result.album_title == "Album"
    assert result.track_numbers == [3]
    assert result.disc_number == 1
    assert result.artist_title_info.year == 2001
    assert result.quality.name == "FLAC 24bit"


@pytest.mark.parametrize("reader", [
    StubTagReader(result=None),
    StubTagReader(error=MetadataExtractionError("01.flac", "corrupt")),
])
def test_music_path_falls_back_to_names(reader):
    parser = TitleParser(tag_reader=reader)

    result = parser.parse_music_path("/music/Will.I.Am - Scream/01.flac")

    assert result.artist_title == "Will I. Am"


def test_music_path_skips_tags_for_non_media_files():
    reader = StubTagReader(result=AudioTagInfo(artist="Never Used"))
    parser = TitleParser(tag_reader=reader)

    result = parser.parse_music_path("/music/Artist - Album (2016)/cover.jpg")

    assert reader.calls == []
    assert result.artist_title == "Artist"
