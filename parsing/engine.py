"""
Entry points of the release title parser.

Each ``parse_*`` call runs Validator -> Normalizer -> Cascade ->
Post-processor and attaches the quality/language classifications. None of
them raise: rejected titles, pattern misses, invalid dates and unexpected
errors all come back as ``None``.
"""

import logging
import re
import traceback
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from api.schemas import AudioTagInfo, Language, ParsedAlbumInfo, ParsedTrackInfo, Quality
from filesystem.file_ops import AudioTagReader
from parsing.cascade import OutcomeKind, RuleOutcome, run_cascade
from parsing.classifiers import classify_language, classify_quality
from parsing.normalizer import (
    normalize_title_steps, remove_file_extension, repair_reversed_title,
    strip_prefix_and_suffix, strip_quality_noise
)
from parsing.patterns import ALBUM_RULES, DEFAULT_TABLES, TRACK_RULES, ParserTables, PatternRule
from parsing.postprocess import (
    artist_title_info, build_album_info, build_track_info, find_invalid_date,
    get_release_hash, get_sub_group
)
from parsing.release_group import resolve_group
from parsing.text_utils import clean_artist_name
from parsing.validator import mentions_obfuscation, validate
from utils.exceptions import MetadataExtractionError

logger = logging.getLogger(__name__)

QualityClassifier = Callable[..., Quality]
LanguageClassifier = Callable[[str], Language]


class TitleParser:
    """
    Parses release titles and media paths into track/album records.

    Instances hold only immutable tables and callables, so one parser can be
    shared across threads.
    """

    def __init__(
        self,
        tables: ParserTables = DEFAULT_TABLES,
        quality_classifier: QualityClassifier = classify_quality,
        language_classifier: LanguageClassifier = classify_language,
        tag_reader: Optional[AudioTagReader] = None,
        track_rules: Iterable[PatternRule] = TRACK_RULES,
        album_rules: Iterable[PatternRule] = ALBUM_RULES
    ):
        self.tables = tables
        self.quality_classifier = quality_classifier
        self.language_classifier = language_classifier
        self.tag_reader = tag_reader or AudioTagReader()
        self.track_rules = tuple(track_rules)
        self.album_rules = tuple(album_rules)

    def parse_music_title(self, title: str) -> Optional[ParsedTrackInfo]:
        """
        Parse a track-style title.

        Args:
            title: Release title or file name

        Returns:
            ParsedTrackInfo, or None when the title cannot be parsed
        """
        try:
            if not validate(title, self.tables):
                return None

            logger.debug(f"Parsing string '{title}'")

            normalized = normalize_title_steps(title, self.tables)
            outcome = run_cascade(self.track_rules, normalized.simple_title)

            if outcome.matched:
                result = build_track_info(outcome.match)
                result.quality = self.quality_classifier(normalized.title, None, 0)
                logger.debug(f"Quality parsed: {result.quality}")
                result.language = self.language_classifier(normalized.release_title)
                return result

            self._log_invalid(outcome)

        except Exception as e:
            self._log_unexpected(title, e)

        logger.debug(f"Unable to parse {title}")
        return None

    def parse_album_title(self, title: str) -> Optional[ParsedAlbumInfo]:
        """
        Parse an album-style release title.

        Args:
            title: Release title or directory name

        Returns:
            ParsedAlbumInfo, or None when the title cannot be parsed
        """
        try:
            if not validate(title, self.tables):
                return None

            logger.debug(f"Parsing string '{title}'")

            normalized = normalize_title_steps(title, self.tables)
            outcome = run_cascade(self.album_rules, normalized.simple_title, find_invalid_date)

            if outcome.matched:
                return self._complete_album(outcome.match, normalized.title, normalized.release_title)

            self._log_invalid(outcome)

        except Exception as e:
            self._log_unexpected(title, e)

        logger.debug(f"Unable to parse {title}")
        return None

    def parse_album_title_with_search_criteria(
        self,
        title: str,
        artist_name: str,
        album_titles: Iterable[str]
    ) -> Optional[ParsedAlbumInfo]:
        """
        Parse a title known to be about a given artist and one of its albums.

        Args:
            title: Release title from a search result
            artist_name: Artist searched for
            album_titles: Album titles searched for

        Returns:
            ParsedAlbumInfo when both the artist and an album appear in order
        """
        try:
            if not validate(title, self.tables):
                return None

            album_titles = list(album_titles)
            logger.debug(
                f"Parsing string '{title}' using search criteria artist: "
                f"'{artist_name}' album: '{', '.join(album_titles)}'"
            )

            title = repair_reversed_title(title, self.tables)
            release_title = remove_file_extension(title, self.tables)

            simple_title = strip_quality_noise(release_title)
            simple_title = strip_prefix_and_suffix(simple_title, self.tables)

            release_regex = _search_criteria_regex(artist_name, album_titles)
            match = release_regex.search(simple_title)

            if match:
                return self._complete_album(match, title, release_title)

        except Exception as e:
            self._log_unexpected(title, e)

        logger.debug(f"Unable to parse {title}")
        return None

    def parse_music_path(self, path: Union[str, Path]) -> Optional[ParsedTrackInfo]:
        """
        Parse a media file, preferring its embedded tags over its names.

        Falls back to "<directory> <file name>" and then to
        "<directory><extension>" when the tags give nothing.
        """
        path = Path(path)
        result = None

        if path.suffix.lower() in self.tables.media_extensions:
            result = self.parse_audio_tags(path)

        if result is None:
            logger.debug(f"Attempting to parse track info using directory and file names. {path.parent.name}")
            result = self.parse_music_title(f"{path.parent.name} {path.name}")

        if result is None:
            logger.debug(f"Attempting to parse track info using directory name. {path.parent.name}")
            result = self.parse_music_title(path.parent.name + path.suffix)

        return result

    def parse_audio_tags(self, path: Path) -> Optional[ParsedTrackInfo]:
        try:
            tags = self.tag_reader.read(path)
            if tags is None:
                return None

            return self._track_from_tags(path, tags)

        except MetadataExtractionError as e:
            logger.warning(str(e))
        except Exception as e:
            self._log_unexpected(str(path), e)

        return None

    def parse_artist_name(self, title: str) -> str:
        logger.debug(f"Parsing string '{title}'")

        result = self.parse_album_title(title)
        if result is None:
            return clean_artist_name(title)

        return result.artist_name

    def parse_release_group(self, title: str) -> Optional[str]:
        return resolve_group(title, self.tables)

    def _complete_album(self, match: re.Match, title: str, release_title: str) -> ParsedAlbumInfo:
        result = build_album_info(match)

        result.language = self.language_classifier(release_title)
        logger.debug(f"Language parsed: {result.language}")

        result.quality = self.quality_classifier(title, None, 0)
        logger.debug(f"Quality parsed: {result.quality}")

        result.release_group = resolve_group(release_title, self.tables)

        sub_group = get_sub_group(match)
        if sub_group.strip():
            result.release_group = sub_group

        logger.debug(f"Release Group parsed: {result.release_group}")

        result.release_hash = get_release_hash(match)
        if result.release_hash.strip():
            logger.debug(f"Release Hash parsed: {result.release_hash}")

        return result

    def _track_from_tags(self, path: Path, tags: AudioTagInfo) -> ParsedTrackInfo:
        info = artist_title_info(tags.artist or "")
        info.year = tags.year

        result = ParsedTrackInfo(
            language=Language.ENGLISH,
            album_title=tags.album,
            artist_title=tags.artist,
            artist_mb_id=tags.artist_mb_id,
            release_mb_id=tags.release_mb_id,
            track_mb_id=tags.track_mb_id,
            disc_number=tags.disc_number,
            track_numbers=[tags.track_number],
            artist_title_info=info,
            title=tags.title,
        )

        for codec in tags.codecs:
            logger.debug(
                f"Audio Properties : {codec.description}, Bitrate: {codec.bitrate}, "
                f"Sample Size: {codec.bits_per_sample}, SampleRate: {codec.sample_rate}, "
                f"Channels: {codec.channels}"
            )
            result.quality = self.quality_classifier(
                path.name, codec.description, codec.bitrate, codec.bits_per_sample
            )
            logger.debug(f"Quality parsed: {result.quality}")

        return result

    @staticmethod
    def _log_invalid(outcome: RuleOutcome):
        if outcome.kind is OutcomeKind.MATCHED_INVALID:
            logger.debug(f"Rule '{outcome.rule.name}' aborted the cascade: {outcome.reason}")

    @staticmethod
    def _log_unexpected(title: str, error: Exception):
        if mentions_obfuscation(title):
            return
        logger.error(f"An error has occurred while trying to parse {title}: {error}")
        logger.debug(f"Full traceback: {traceback.format_exc()}")


def _search_criteria_regex(artist_name: str, album_titles: Iterable[str]) -> re.Pattern:
    escaped_artist = re.escape(artist_name).replace(r"\ ", r"[\W_]")
    escaped_albums = "|".join(
        re.escape(album).replace(r"\ ", r"[\W_]") for album in album_titles
    )

    return re.compile(
        r"^(\W*|\b)(?P<artist>" + escaped_artist + r")(\W*|\b).*(\W*|\b)(?P<album>"
        + escaped_albums + r")(\W*|\b)",
        re.IGNORECASE
    )


_default_parser = TitleParser()


def parse_music_title(title: str) -> Optional[ParsedTrackInfo]:
    return _default_parser.parse_music_title(title)


def parse_album_title(title: str) -> Optional[ParsedAlbumInfo]:
    return _default_parser.parse_album_title(title)


def parse_album_title_with_search_criteria(
    title: str, artist_name: str, album_titles: Iterable[str]
) -> Optional[ParsedAlbumInfo]:
    return _default_parser.parse_album_title_with_search_criteria(title, artist_name, album_titles)


def parse_music_path(path: Union[str, Path]) -> Optional[ParsedTrackInfo]:
    return _default_parser.parse_music_path(path)


def parse_artist_name(title: str) -> str:
    return _default_parser.parse_artist_name(title)


def parse_release_group(title: str) -> Optional[str]:
    return _default_parser.parse_release_group(title)
