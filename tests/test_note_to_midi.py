"""Unit tests for note ↔ MIDI conversion helpers.

These tests exercise both :func:`note_to_midi` and :func:`midi_to_note`.
Invalid inputs must result in descriptive errors instead of silent failures.
"""

import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

random_melody = importlib.import_module("random_melody")
note_to_midi = random_melody.note_to_midi
midi_to_note = random_melody.midi_to_note


@pytest.mark.parametrize(
    "midi, name",
    [(60, "C4"), (61, "C#4"), (55, "G3"), (76, "E5"), (0, "C-1"), (127, "G9"), (70, "A#4")],
)
def test_midi_to_note_uses_sharps(midi, name):
    assert midi_to_note(midi) == name


def test_sharp_and_flat_conversion():
    assert note_to_midi("C#4") == 61
    assert note_to_midi("Db4") == 61
    assert note_to_midi("c4") == 60


def test_every_generated_name_parses_back():
    """Names produced for the MIDI writer always resolve to the same pitch."""
    for midi in range(128):
        assert note_to_midi(midi_to_note(midi)) == midi


@pytest.mark.parametrize("bad", ["H4", "C", "C#", "4C", ""])
def test_invalid_note_format(bad):
    with pytest.raises(ValueError):
        note_to_midi(bad)


@pytest.mark.parametrize("bad", ["C-2", "C10"])
def test_note_out_of_range(bad):
    with pytest.raises(ValueError, match="out of range"):
        note_to_midi(bad)


@pytest.mark.parametrize("bad", [-1, 128])
def test_midi_to_note_out_of_range(bad):
    with pytest.raises(ValueError):
        midi_to_note(bad)
