"""
Configuration management for the release title parser.

This module handles loading and validating configuration from YAML files
with built-in defaults and environment variable support. The hand-curated
junk lists used by the parser (hash-like release names, release-group junk
suffixes, tracker tags) live here as data so they can be updated without
touching the parsing code.
"""

import json
import os
import re
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from utils.exceptions import ConfigurationError


ENV_PREFIX = "RELEASE_PARSER_"


@dataclass
class ParsingSection:
    """Data tables consumed by the parsing engine."""

    media_extensions: list = field(default_factory=lambda: [
        # Audio
        '.mp2', '.mp3', '.m4a', '.m4b', '.m4p', '.flac', '.ape', '.wma', '.wav',
        '.wv', '.ogg', '.oga', '.opus', '.aac', '.aif', '.aiff', '.alac', '.dsf',
        '.dff', '.mpc', '.mka',
        # Video containers still turn up in music searches
        '.webm', '.m4v', '.3gp', '.nsv', '.ty', '.strm', '.rm', '.rmvb', '.m3u',
        '.ifo', '.mov', '.qt', '.divx', '.xvid', '.bivx', '.nrg', '.pva', '.wmv',
        '.asf', '.asx', '.ogm', '.ogv', '.m2v', '.avi', '.bin', '.dat', '.mpg',
        '.mpeg', '.mp4', '.avc', '.vp3', '.svq3', '.nuv', '.viv', '.dv', '.fli',
        '.flv', '.wpl', '.img', '.iso', '.vob', '.mkv', '.ts', '.wtv', '.m2ts'
    ])
    download_extensions: list = field(default_factory=lambda: ['.par2', '.nzb'])

    # Release names that are (or degenerate to) opaque tokens
    hashed_release_patterns: list = field(default_factory=lambda: [
        # Generic match for md5 and mixed-case hashes
        {'pattern': r'^[0-9a-zA-Z]{32}', 'ignore_case': False},
        # Generic match for shorter lower-case hashes
        {'pattern': r'^[a-z0-9]{24}$', 'ignore_case': False},
        # Fixed-width indexer formats, kept strict
        {'pattern': r'^[A-Z]{11}\d{3}$', 'ignore_case': False},
        {'pattern': r'^[a-z]{12}\d{3}$', 'ignore_case': False},
        # Backup filename (unknown origins)
        {'pattern': r'^Backup_\d{5,}S\d{2}-\d{2}$', 'ignore_case': False},
        # Placeholder names seen since late 2014
        {'pattern': r'^123$', 'ignore_case': False},
        {'pattern': r'^abc$', 'ignore_case': True},
        {'pattern': r'^b00bs$', 'ignore_case': True},
    ])

    release_group_junk_suffixes: list = field(default_factory=lambda: [
        'RP', '1', 'NZBGeek', 'Obfuscated', 'Scrambled', 'sample', 'Pre',
        'postbot', 'xpost'
    ])
    # Trailing "-TOKEN" values that are codecs or sources, never groups
    release_group_excluded_tokens: list = field(default_factory=lambda: [
        'MP3', 'ALAC', 'FLAC', 'WEB'
    ])
    torrent_suffixes: list = field(default_factory=lambda: [
        'ettv', 'rartv', 'rarbg', 'cttv'
    ])


@dataclass
class ConcurrencySection:
    max_workers: int = 4


@dataclass
class LoggingSection:
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class ParserConfig:
    """Structured configuration class with defaults."""

    parser: ParsingSection = field(default_factory=ParsingSection)
    concurrency: ConcurrencySection = field(default_factory=ConcurrencySection)
    logging: LoggingSection = field(default_factory=LoggingSection)


def default_config() -> Dict[str, Any]:
    """Return the built-in configuration as a plain nested dictionary."""
    return _dataclass_to_dict(ParserConfig())


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file with defaults and environment variable support.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config_dict = default_config()

    if config_path and config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
                if file_config:
                    if not isinstance(file_config, dict):
                        raise ConfigurationError(
                            f"Config file {config_path} must contain a mapping"
                        )
                    config_dict = _merge_configs(config_dict, file_config)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")
        except IOError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}")

    config_dict = _apply_env_overrides(config_dict)

    _validate_config(config_dict)

    return config_dict


def _dataclass_to_dict(obj) -> Dict[str, Any]:
    """Convert dataclass to dictionary recursively."""
    if hasattr(obj, '__dataclass_fields__'):
        result = {}
        for field_name in obj.__dataclass_fields__:
            value = getattr(obj, field_name)
            result[field_name] = _dataclass_to_dict(value)
        return result
    elif isinstance(obj, dict):
        return {k: _dataclass_to_dict(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_dataclass_to_dict(item) for item in obj]
    else:
        return obj


def _merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge configuration dictionaries.

    Lists are replaced, not concatenated, so a config file can shrink a
    junk table as well as grow it.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables should be prefixed with RELEASE_PARSER_ and use
    double underscores to represent nested keys.

    Examples:
        RELEASE_PARSER_CONCURRENCY__MAX_WORKERS=8
        RELEASE_PARSER_LOGGING__LEVEL=DEBUG
        RELEASE_PARSER_PARSER__TORRENT_SUFFIXES='["ettv", "eztv"]'
    """
    for env_var, value in os.environ.items():
        if not env_var.startswith(ENV_PREFIX):
            continue

        key_path = env_var[len(ENV_PREFIX):].lower().split('__')
        _set_nested_value(config, key_path, _convert_env_value(value))

    return config


def _convert_env_value(value: str) -> Any:
    """Convert environment variable string to appropriate Python type."""
    if value.lower() in ('true', 'yes', 'on'):
        return True
    elif value.lower() in ('false', 'no', 'off'):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    # JSON/List values (if starts with [ or {)
    if value.startswith(('[', '{')):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def _set_nested_value(config: Dict[str, Any], key_path: list, value: Any):
    """Set a value in a nested dictionary using a list of keys."""
    current = config

    for key in key_path[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]

    current[key_path[-1]] = value


def _validate_string_list(values: Any, name: str, allow_empty: bool = False):
    if not isinstance(values, list) or (not values and not allow_empty):
        raise ConfigurationError(f"{name} must be a non-empty list")
    for item in values:
        if not isinstance(item, str) or not item:
            raise ConfigurationError(f"{name} must only contain non-empty strings")


def _validate_config(config: Dict[str, Any]):
    """
    Validate configuration values.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser_config = config.get('parser', {})

    for key in ('media_extensions', 'download_extensions'):
        extensions = parser_config.get(key, [])
        _validate_string_list(extensions, f"parser.{key}")
        for extension in extensions:
            if not extension.startswith('.'):
                raise ConfigurationError(
                    f"parser.{key} entries must start with a dot: {extension!r}"
                )

    _validate_string_list(
        parser_config.get('release_group_junk_suffixes', []),
        "parser.release_group_junk_suffixes"
    )
    _validate_string_list(
        parser_config.get('release_group_excluded_tokens', []),
        "parser.release_group_excluded_tokens",
        allow_empty=True
    )
    _validate_string_list(
        parser_config.get('torrent_suffixes', []),
        "parser.torrent_suffixes"
    )

    hashed_patterns = parser_config.get('hashed_release_patterns', [])
    if not isinstance(hashed_patterns, list):
        raise ConfigurationError("parser.hashed_release_patterns must be a list")
    for entry in hashed_patterns:
        if not isinstance(entry, dict) or not isinstance(entry.get('pattern'), str):
            raise ConfigurationError(
                "parser.hashed_release_patterns entries need a 'pattern' string"
            )
        try:
            re.compile(entry['pattern'])
        except re.error as e:
            raise ConfigurationError(
                f"Invalid hashed release pattern {entry['pattern']!r}: {e}"
            )

    max_workers = config.get('concurrency', {}).get('max_workers', 4)
    if not isinstance(max_workers, int) or isinstance(max_workers, bool) or max_workers < 1:
        raise ConfigurationError("concurrency.max_workers must be a positive integer")

    log_level = config.get('logging', {}).get('level', 'INFO')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if not isinstance(log_level, str) or log_level.upper() not in valid_levels:
        raise ConfigurationError(f"logging.level must be one of {valid_levels}")


def get_config_template() -> str:
    """
    Get a YAML template for the configuration file.

    Returns:
        YAML configuration template as string
    """
    return """# Configuration for the release title parser
parser:
  # Only these trailing extensions are stripped from titles
  media_extensions: [.flac, .mp3, .m4a, .ogg, .opus, .wav, .ape, .wv, .mkv, .mp4, .avi]
  download_extensions: [.par2, .nzb]

  # Titles matching any of these (extension removed) are rejected as junk
  hashed_release_patterns:
    - {pattern: "^[0-9a-zA-Z]{32}", ignore_case: false}
    - {pattern: "^[a-z0-9]{24}$", ignore_case: false}
    - {pattern: "^[A-Z]{11}\\\\d{3}$", ignore_case: false}
    - {pattern: "^[a-z]{12}\\\\d{3}$", ignore_case: false}
    - {pattern: "^Backup_\\\\d{5,}S\\\\d{2}-\\\\d{2}$", ignore_case: false}
    - {pattern: "^123$", ignore_case: false}
    - {pattern: "^abc$", ignore_case: true}
    - {pattern: "^b00bs$", ignore_case: true}

  release_group_junk_suffixes: [RP, "1", NZBGeek, Obfuscated, Scrambled, sample, Pre, postbot, xpost]
  release_group_excluded_tokens: [MP3, ALAC, FLAC, WEB]
  torrent_suffixes: [ettv, rartv, rarbg, cttv]

concurrency:
  max_workers: 4

logging:
  level: INFO
  format: "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
  file: null
"""
