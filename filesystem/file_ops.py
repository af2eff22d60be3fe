"""
Filesystem access for the path-based entry points.

The only blocking work the parser does lives here: reading embedded audio
tags through mutagen and walking directories for batch runs. Both are
per-call and safe to run from several threads at once.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

import mutagen

from api.schemas import AudioTagInfo, CodecInfo
from utils.exceptions import FilesystemError, MetadataExtractionError

logger = logging.getLogger(__name__)


# Easy-tag keys first, raw frame/atom names as fallbacks
TAG_MAPPING = {
    'title': ['title', 'TIT2', 'TITLE', '\xa9nam'],
    'artist': ['artist', 'TPE1', 'ARTIST', '\xa9ART'],
    'albumartist': ['albumartist', 'TPE2', 'ALBUMARTIST', 'aART'],
    'album': ['album', 'TALB', 'ALBUM', '\xa9alb'],
    'date': ['date', 'TDRC', 'DATE', '\xa9day', 'year', 'TYER'],
    'track': ['tracknumber', 'TRCK', 'TRACKNUMBER'],
    'disc': ['discnumber', 'TPOS', 'DISCNUMBER'],
    'musicbrainz_artistid': ['musicbrainz_artistid', 'MUSICBRAINZ_ARTISTID'],
    'musicbrainz_albumid': ['musicbrainz_albumid', 'MUSICBRAINZ_ALBUMID'],
    'musicbrainz_trackid': ['musicbrainz_trackid', 'MUSICBRAINZ_TRACKID'],
}


def _first_value(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class AudioTagReader:
    """Reads track, disc, artist and codec details from embedded tags."""

    def read(self, file_path: Path) -> Optional[AudioTagInfo]:
        """
        Read the tags of an audio file.

        Args:
            file_path: Path to the audio file

        Returns:
            AudioTagInfo, or None when mutagen does not recognise the format

        Raises:
            MetadataExtractionError: If the file cannot be opened or decoded
        """
        try:
            audio_file = mutagen.File(str(file_path), easy=True)
        except (mutagen.MutagenError, OSError) as e:
            raise MetadataExtractionError(str(file_path), str(e))

        if audio_file is None:
            logger.debug(f"Format not recognized by mutagen: {file_path}")
            return None

        logger.debug(f"Starting Tag Parse for {file_path.name}")

        tags = audio_file.tags or {}
        values = {key: self._lookup(tags, keys) for key, keys in TAG_MAPPING.items()}

        artist = values['albumartist'] or values['artist']

        info = AudioTagInfo(
            track_number=values['track'],
            title=values['title'],
            disc_number=values['disc'],
            album=values['album'],
            artist=artist,
            year=values['date'],
            artist_mb_id=values['musicbrainz_artistid'],
            release_mb_id=values['musicbrainz_albumid'],
            track_mb_id=values['musicbrainz_trackid'],
            codecs=self._codecs(audio_file),
        )

        logger.debug(
            f"File Tags Parsed: Artist: {info.artist}, Album: {info.album}, "
            f"Disc: {info.disc_number}, Track: {info.track_number}, Title: {info.title}"
        )
        return info

    @staticmethod
    def _lookup(tags: Any, keys: Iterable[str]) -> Optional[str]:
        for key in keys:
            try:
                if key in tags:
                    value = _first_value(tags[key])
                    if value:
                        return value
            except (ValueError, KeyError, TypeError) as key_error:
                # Easy wrappers reject keys they do not know
                logger.debug(f"Error reading tag {key}: {key_error}")
        return None

    @staticmethod
    def _codecs(audio_file: Any) -> List[CodecInfo]:
        info = getattr(audio_file, 'info', None)
        if info is None:
            return []

        description = getattr(info, 'codec_description', None) or type(audio_file).__name__
        bitrate = getattr(info, 'bitrate', 0) or 0

        return [CodecInfo(
            description=description,
            bitrate=int(bitrate) // 1000,
            sample_rate=getattr(info, 'sample_rate', 0) or 0,
            channels=getattr(info, 'channels', 0) or 0,
            bits_per_sample=getattr(info, 'bits_per_sample', 0) or 0,
        )]


def discover_media_files(root_dir: Path, extensions: Iterable[str], recursive: bool = True) -> Iterator[Path]:
    """
    Yield files below ``root_dir`` whose extension is in ``extensions``.

    Raises:
        FilesystemError: If the root directory cannot be scanned
    """
    if not root_dir.exists():
        raise FilesystemError(str(root_dir), "scan", "Directory does not exist")

    if not root_dir.is_dir():
        raise FilesystemError(str(root_dir), "scan", "Path is not a directory")

    wanted = {ext.lower() for ext in extensions}

    try:
        pattern = "**/*" if recursive else "*"
        for path in sorted(root_dir.glob(pattern)):
            if path.is_file() and path.suffix.lower() in wanted:
                yield path
    except PermissionError as e:
        raise FilesystemError(str(root_dir), "scan", f"Permission denied: {e}")
    except OSError as e:
        raise FilesystemError(str(root_dir), "scan", f"OS error: {e}")
