"""Shared fixtures for the Random Melody test-suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable

import pytest

# Ensure the package is importable regardless of the current working directory
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import random_melody  # noqa: E402  # isort:skip
from random_melody.prng import RandomSource  # noqa: E402  # isort:skip


class ScriptedSource(RandomSource):
    """Random source replaying a fixed list of draws.

    Raises ``StopIteration`` when the script runs out so tests notice when the
    code under test consumes more draws than expected.
    """

    def __init__(self, values: Iterable[float]) -> None:
        super().__init__(None)
        self._values = iter(values)
        self.consumed = 0

    def next(self) -> float:
        self.consumed += 1
        return next(self._values)


@pytest.fixture()
def scripted():
    """Return the :class:`ScriptedSource` factory."""

    return ScriptedSource


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Point the default settings file at a temporary location.

    Tests must never read or write the real ``~/.random_melody_settings.json``.
    """

    path = tmp_path / "settings.json"
    monkeypatch.setattr(random_melody, "DEFAULT_SETTINGS_FILE", path)
    return path
