"""Tests for configuration loading."""

import pytest

from parsing.patterns import build_tables
from utils.config_loader import default_config, get_config_template, load_config
from utils.exceptions import ConfigurationError


def test_defaults_without_a_file(tmp_path):
    config = load_config(tmp_path / "missing.yaml")

    assert config['concurrency']['max_workers'] == 4
    assert config['logging']['level'] == "INFO"
    assert '.flac' in config['parser']['media_extensions']
    assert config['parser']['release_group_excluded_tokens'] == ['MP3', 'ALAC', 'FLAC', 'WEB']


def test_yaml_file_overrides_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "concurrency:\n"
        "  max_workers: 8\n"
        "parser:\n"
        "  torrent_suffixes: [eztv]\n",
        encoding="utf-8"
    )

    config = load_config(config_file)

    assert config['concurrency']['max_workers'] == 8
    assert config['parser']['torrent_suffixes'] == ['eztv']
    assert '.flac' in config['parser']['media_extensions']


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("RELEASE_PARSER_CONCURRENCY__MAX_WORKERS", "2")
    monkeypatch.setenv("RELEASE_PARSER_LOGGING__LEVEL", "DEBUG")
    monkeypatch.setenv("RELEASE_PARSER_PARSER__TORRENT_SUFFIXES", '["ettv", "eztv"]')

    config = load_config(tmp_path / "missing.yaml")

    assert config['concurrency']['max_workers'] == 2
    assert config['logging']['level'] == "DEBUG"
    assert config['parser']['torrent_suffixes'] == ["ettv", "eztv"]


@pytest.mark.parametrize("content", [
    "parser: [unclosed\n",
    "- just\n- a list\n",
    "concurrency:\n  max_workers: 0\n",
    "logging:\n  level: LOUD\n",
    "parser:\n  media_extensions: [flac]\n",
    "parser:\n  hashed_release_patterns:\n    - {pattern: '('}\n",
    "parser:\n  torrent_suffixes: []\n",
])
def test_invalid_config_raises(tmp_path, content):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_template_loads_and_builds_tables(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(get_config_template(), encoding="utf-8")

    config = load_config(config_file)
    tables = build_tables(config)

    assert '.flac' in tables.media_extensions
    assert '.nzb' in tables.strippable_extensions
    assert len(tables.hashed_release_regexes) == 8


def test_build_tables_rejects_bad_patterns():
    config = default_config()
    config['parser']['hashed_release_patterns'] = [{'pattern': '[unclosed'}]

    with pytest.raises(ConfigurationError):
        build_tables(config)
