"""
Default quality and language classifiers.

The engine treats both as plain callables and accepts replacements, so these
implementations stay deliberately small: token spotting on the release title,
or the codec descriptor when a tag reader supplied one.
"""

import re
from typing import Optional

from api.schemas import Language, Quality

MP3_BITRATES = (320, 256, 224, 192, 160, 128, 112, 96, 80, 64, 56, 48, 40, 32, 24, 16, 8)

QUALITY_NAME_PATTERNS = (
    ('ALAC', re.compile(r'\bALAC\b', re.IGNORECASE)),
    ('APE', re.compile(r'\bAPE\b', re.IGNORECASE)),
    ('WavPack', re.compile(r'\bWavPack\b|\bWV\b', re.IGNORECASE)),
    ('WAV', re.compile(r'\bWAV\b', re.IGNORECASE)),
    ('OGG Vorbis', re.compile(r'\b(?:OGG|Vorbis)\b', re.IGNORECASE)),
    ('Opus', re.compile(r'\bOpus\b', re.IGNORECASE)),
    ('AAC', re.compile(r'\b(?:AAC|M4A)\b', re.IGNORECASE)),
    ('WMA', re.compile(r'\bWMA\b', re.IGNORECASE)),
)

FLAC_REGEX = re.compile(r'\bFLAC\b', re.IGNORECASE)
HI_RES_REGEX = re.compile(r'\b24[ -]?bit\b|\b24-(?:44|48|88|96|176|192)\b|\b(?:88|96|176|192)kHz\b', re.IGNORECASE)
MP3_REGEX = re.compile(r'\bMP3\b', re.IGNORECASE)
VBR_REGEX = re.compile(r'\b(?P<preset>V0|V2)\b|\bVBR\b', re.IGNORECASE)
BITRATE_REGEX = re.compile(r'\b(?P<bitrate>' + '|'.join(str(b) for b in MP3_BITRATES) + r')\s?(?:kbps|kbit|k)?\b',
                           re.IGNORECASE)

LANGUAGE_PATTERNS = (
    (Language.FRENCH, re.compile(r'\b(?:french|vostfr|vff|truefrench|francais)\b', re.IGNORECASE)),
    (Language.SPANISH, re.compile(r'\b(?:spanish|espanol|castellano)\b', re.IGNORECASE)),
    (Language.GERMAN, re.compile(r'\b(?:german|deutsch)\b', re.IGNORECASE)),
    (Language.ITALIAN, re.compile(r'\b(?:italian|ita)\b', re.IGNORECASE)),
    (Language.DANISH, re.compile(r'\bdanish\b', re.IGNORECASE)),
    (Language.DUTCH, re.compile(r'\b(?:dutch|nl)\b', re.IGNORECASE)),
    (Language.JAPANESE, re.compile(r'\b(?:japanese|jap|jpn)\b', re.IGNORECASE)),
    (Language.CANTONESE, re.compile(r'\bcantonese\b', re.IGNORECASE)),
    (Language.MANDARIN, re.compile(r'\b(?:mandarin|chinese)\b', re.IGNORECASE)),
    (Language.RUSSIAN, re.compile(r'\b(?:russian|rus)\b', re.IGNORECASE)),
    (Language.POLISH, re.compile(r'\b(?:polish|pl)\b', re.IGNORECASE)),
    (Language.VIETNAMESE, re.compile(r'\bvietnamese\b', re.IGNORECASE)),
    (Language.SWEDISH, re.compile(r'\b(?:swedish|swesub)\b', re.IGNORECASE)),
    (Language.NORWEGIAN, re.compile(r'\b(?:norwegian|nordic)\b', re.IGNORECASE)),
    (Language.FINNISH, re.compile(r'\bfinnish\b', re.IGNORECASE)),
    (Language.TURKISH, re.compile(r'\bturkish\b', re.IGNORECASE)),
    (Language.PORTUGUESE, re.compile(r'\b(?:portuguese|brazilian)\b', re.IGNORECASE)),
    (Language.FLEMISH, re.compile(r'\bflemish\b', re.IGNORECASE)),
    (Language.GREEK, re.compile(r'\bgreek\b', re.IGNORECASE)),
    (Language.KOREAN, re.compile(r'\bkorean\b', re.IGNORECASE)),
    (Language.HUNGARIAN, re.compile(r'\b(?:hungarian|hundub)\b', re.IGNORECASE)),
    (Language.HEBREW, re.compile(r'\bhebrew\b', re.IGNORECASE)),
    (Language.CZECH, re.compile(r'\bczech\b', re.IGNORECASE)),
)


def _mp3_quality(bitrate: int) -> Quality:
    for standard in MP3_BITRATES:
        if bitrate >= standard:
            return Quality(name=f"MP3-{standard}", bitrate=bitrate)

    return Quality(name="MP3-Unknown", bitrate=bitrate)


def _quality_from_codec(description: str, bitrate: int, bits_per_sample: int) -> Quality:
    lowered = description.lower()

    if 'flac' in lowered:
        name = "FLAC 24bit" if bits_per_sample >= 24 else "FLAC"
        return Quality(name=name, bitrate=bitrate, bits_per_sample=bits_per_sample)
    if 'alac' in lowered:
        return Quality(name="ALAC", bitrate=bitrate, bits_per_sample=bits_per_sample)
    if 'mp3' in lowered or 'layer 3' in lowered:
        return _mp3_quality(bitrate)
    if 'aac' in lowered or 'mp4' in lowered:
        return Quality(name="AAC", bitrate=bitrate)
    if 'vorbis' in lowered:
        return Quality(name="OGG Vorbis", bitrate=bitrate)
    if 'opus' in lowered:
        return Quality(name="Opus", bitrate=bitrate)
    if 'wavpack' in lowered:
        return Quality(name="WavPack", bitrate=bitrate, bits_per_sample=bits_per_sample)
    if 'monkey' in lowered or lowered == 'ape':
        return Quality(name="APE", bitrate=bitrate, bits_per_sample=bits_per_sample)
    if 'wav' in lowered or 'aiff' in lowered or 'pcm' in lowered:
        return Quality(name="WAV", bitrate=bitrate, bits_per_sample=bits_per_sample)
    if 'asf' in lowered or 'wma' in lowered:
        return Quality(name="WMA", bitrate=bitrate)

    return Quality.unknown()


def _quality_from_name(name: str) -> Quality:
    if FLAC_REGEX.search(name):
        if HI_RES_REGEX.search(name):
            return Quality(name="FLAC 24bit", bits_per_sample=24)
        return Quality(name="FLAC")

    for quality_name, regex in QUALITY_NAME_PATTERNS:
        if regex.search(name):
            return Quality(name=quality_name)

    vbr = VBR_REGEX.search(name)
    bitrate = BITRATE_REGEX.search(name)

    if MP3_REGEX.search(name) or vbr or bitrate:
        if vbr:
            preset = vbr.group('preset')
            return Quality(name=f"MP3-VBR-{preset.upper()}" if preset else "MP3-VBR")
        return _mp3_quality(int(bitrate.group('bitrate')) if bitrate else 0)

    return Quality.unknown()


def classify_quality(
    name: str,
    codec_description: Optional[str] = None,
    bitrate: int = 0,
    bits_per_sample: int = 0
) -> Quality:
    """
    Classify the audio quality of a release.

    Args:
        name: Release title or file name, before normalization
        codec_description: Codec description from the tag reader, if any
        bitrate: Bitrate in kbps from the tag reader
        bits_per_sample: Sample size from the tag reader

    Returns:
        Quality, ``Unknown`` when nothing recognisable was found
    """
    if codec_description:
        quality = _quality_from_codec(codec_description, bitrate or 0, bits_per_sample or 0)
        if quality.name != "Unknown":
            return quality

    return _quality_from_name(name)


def classify_language(title: str) -> Language:
    """First language keyword found in the title; English otherwise."""
    for language, regex in LANGUAGE_PATTERNS:
        if regex.search(title):
            return language

    return Language.ENGLISH
