"""Tests for the persistent JSON settings helpers."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

random_melody = importlib.import_module("random_melody")


def test_missing_file_returns_empty(tmp_path):
    assert random_melody.load_settings(tmp_path / "absent.json") == {}


def test_save_then_load(tmp_path):
    path = tmp_path / "prefs.json"
    random_melody.save_settings({"measures": 8, "seed": "x"}, path)
    assert random_melody.load_settings(path) == {"measures": 8, "seed": "x"}


def test_malformed_file_logs_error(tmp_path, caplog):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with caplog.at_level(logging.ERROR):
        assert random_melody.load_settings(path) == {}
    assert "Could not load settings" in caplog.text


def test_non_object_file_ignored(tmp_path, caplog):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]")
    with caplog.at_level(logging.ERROR):
        assert random_melody.load_settings(path) == {}
    assert "does not contain an object" in caplog.text


def test_save_failure_is_logged(tmp_path, caplog):
    target = tmp_path / "missing_dir" / "prefs.json"
    with caplog.at_level(logging.ERROR):
        random_melody.save_settings({"measures": 1}, target)
    assert "Could not save settings" in caplog.text
    assert not target.exists()

