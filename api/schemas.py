"""
Pydantic schemas returned by the release title parser.

Every model here is created fresh per parse call and carries no identity of
its own; callers tell "parsed" from "not parsed" by whether they got one back.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Language(str, Enum):
    """Audio language hint derived from a release title."""

    UNKNOWN = "Unknown"
    ENGLISH = "English"
    FRENCH = "French"
    SPANISH = "Spanish"
    GERMAN = "German"
    ITALIAN = "Italian"
    DANISH = "Danish"
    DUTCH = "Dutch"
    JAPANESE = "Japanese"
    CANTONESE = "Cantonese"
    MANDARIN = "Mandarin"
    RUSSIAN = "Russian"
    POLISH = "Polish"
    VIETNAMESE = "Vietnamese"
    SWEDISH = "Swedish"
    NORWEGIAN = "Norwegian"
    FINNISH = "Finnish"
    TURKISH = "Turkish"
    PORTUGUESE = "Portuguese"
    FLEMISH = "Flemish"
    GREEK = "Greek"
    KOREAN = "Korean"
    HUNGARIAN = "Hungarian"
    HEBREW = "Hebrew"
    CZECH = "Czech"


class Quality(BaseModel):
    """Quality descriptor produced by the quality classifier."""

    name: str = Field(default="Unknown", description="Quality name, e.g. 'FLAC' or 'MP3-320'")
    bitrate: int = Field(default=0, description="Bitrate in kbps when known", ge=0)
    bits_per_sample: int = Field(default=0, description="Sample size when known", ge=0)

    @classmethod
    def unknown(cls) -> "Quality":
        return cls()


class ArtistTitleInfo(BaseModel):
    """Lightweight artist descriptor handed to catalog matching."""

    title: str = Field(default="", description="Artist name as parsed")
    year: int = Field(default=0, description="Year hint, 0 when unknown")


class CodecInfo(BaseModel):
    """One codec descriptor as reported by the audio-tag reader."""

    description: Optional[str] = Field(default=None, description="Human-readable codec description")
    bitrate: int = Field(default=0, description="Bitrate in kbps")
    sample_rate: int = Field(default=0, description="Sample rate in Hz")
    channels: int = Field(default=0, description="Channel count")
    bits_per_sample: int = Field(default=0, description="Bits per sample (0 for lossy codecs)")


class AudioTagInfo(BaseModel):
    """Output contract of the audio-tag reader."""

    track_number: int = Field(default=0, description="Track number from the tags")
    title: Optional[str] = Field(default=None, description="Track title")
    disc_number: int = Field(default=0, description="Disc number from the tags")
    album: Optional[str] = Field(default=None, description="Album title")
    artist: Optional[str] = Field(default=None, description="Album artist, falling back to performer")
    year: int = Field(default=0, description="Release year, 0 when missing")
    artist_mb_id: Optional[str] = None
    release_mb_id: Optional[str] = None
    track_mb_id: Optional[str] = None
    codecs: List[CodecInfo] = Field(default_factory=list)

    @field_validator('track_number', 'disc_number', 'year', mode='before')
    @classmethod
    def parse_leading_number(cls, v):
        """Accept tag values such as '3/12' or '2004-05-01'."""
        if v is None or v == "":
            return 0
        if isinstance(v, int):
            return v
        digits = ""
        for char in str(v).strip():
            if not char.isdigit():
                break
            digits += char
        return int(digits) if digits else 0

    @field_validator('title', 'album', 'artist')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if v else v


class ParsedTrackInfo(BaseModel):
    """Result of the track path (titles or audio tags)."""

    artist_title: Optional[str] = Field(default=None, description="Artist name")
    artist_title_info: Optional[ArtistTitleInfo] = None
    title: Optional[str] = Field(default=None, description="Track title when known")
    track_numbers: List[int] = Field(default_factory=list, description="Track number(s)")
    disc_number: int = Field(default=0, description="Disc number, 0 when unknown")
    album_title: Optional[str] = Field(default=None, description="Album title when known")
    language: Language = Language.UNKNOWN
    quality: Quality = Field(default_factory=Quality.unknown)
    artist_mb_id: Optional[str] = None
    release_mb_id: Optional[str] = None
    track_mb_id: Optional[str] = None


class ParsedAlbumInfo(BaseModel):
    """Result of the album path."""

    artist_name: str = Field(default="", description="Artist name")
    album_title: str = Field(default="", description="Album title, 'Discography' for catalog bundles")
    artist_title_info: Optional[ArtistTitleInfo] = None
    release_date: str = Field(default="0", description="Release year as a string, '0' when unknown")
    release_version: str = Field(default="", description="Edition/version qualifier")
    release_group: Optional[str] = Field(default=None, description="Uploader or sub-group tag")
    release_hash: str = Field(default="", description="Release hash when the rule captures one")
    discography: bool = False
    discography_start: int = 0
    discography_end: int = 0
    language: Language = Language.UNKNOWN
    quality: Quality = Field(default_factory=Quality.unknown)
