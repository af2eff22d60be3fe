"""Tests for the command line entry point."""

import json
import logging

import pytest

import main


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def run(capsys, *argv):
    code = main.main(list(argv) + ["--config", "missing-config.yaml"])
    return code, capsys.readouterr()


def test_album_mode_prints_json(capsys):
    code, captured = run(capsys, "Artist Name - Album Title (2016)", "b00bs")

    output = json.loads(captured.out)
    assert code == 0
    assert output["Artist Name - Album Title (2016)"]["album_title"] == "Album Title"
    assert output["Artist Name - Album Title (2016)"]["language"] == "English"
    assert output["b00bs"] is None


def test_group_mode(capsys):
    code, captured = run(capsys, "--mode", "group", "Dani_Sbert-Togheter-WEB-2017-FURY")

    assert code == 0
    assert json.loads(captured.out) == {"Dani_Sbert-Togheter-WEB-2017-FURY": "FURY"}


def test_artist_mode(capsys):
    code, captured = run(capsys, "--mode", "artist", "The Beatles")

    assert json.loads(captured.out) == {"The Beatles": "thebeatles"}


def test_track_mode(capsys):
    code, captured = run(capsys, "--mode", "track", "Will.I.Am - Scream & Shout")

    assert json.loads(captured.out)["Will.I.Am - Scream & Shout"]["artist_title"] == "Will I. Am"


def test_nothing_to_parse(capsys):
    code, captured = run(capsys)

    assert code == 1
    assert "Nothing to parse" in captured.err


def test_print_config(capsys):
    assert main.main(["--print-config"]) == 0
    assert "hashed_release_patterns" in capsys.readouterr().out


def test_missing_directory_is_reported(capsys, tmp_path):
    code, captured = run(capsys, "--path", str(tmp_path / "missing"))

    assert code == 1
    assert "Error:" in captured.err
