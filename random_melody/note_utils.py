"""Utility functions for translating between note names and MIDI numbers.

This module groups helpers dealing with note representation conversions.
The generator works with MIDI numbers internally while reports and the MIDI
writer use names such as ``C#4``.

Example
-------
>>> from random_melody.note_utils import note_to_midi, midi_to_note
>>> note_to_midi("C4")
60
>>> midi_to_note(61)
'C#4'
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from . import NOTE_TO_SEMITONE, NOTES

__all__ = ["note_to_midi", "midi_to_note"]


@lru_cache(maxsize=None)
def note_to_midi(note: str) -> int:
    """Convert a note string such as ``C#4`` into a MIDI number.

    Parameters
    ----------
    note:
        Note name including octave. Octaves may be negative or contain
        multiple digits and flats are accepted (``Db4``).

    Returns
    -------
    int
        MIDI note number in the range ``0-127``.

    Raises
    ------
    ValueError
        If ``note`` is not properly formatted or if the computed MIDI value
        falls outside the allowed ``0-127`` range.
    """

    # A letter A-G, an optional accidental and a signed integer octave.
    match = re.fullmatch(r"([A-Ga-g][#b]?)(-?\d+)", note)
    if not match:
        logging.error("Invalid note format: %s", note)
        raise ValueError(f"Invalid note format: {note}")

    note_name, octave_str = match.groups()
    # MIDI octave numbers are offset by one relative to scientific pitch
    # notation, hence the ``+ 1``.
    octave = int(octave_str) + 1
    note_name = note_name.capitalize()

    try:
        note_idx = NOTE_TO_SEMITONE[note_name]
    except KeyError:
        logging.error("Unknown note name: %s", note_name)
        raise ValueError(f"Unknown note name: {note_name}")

    midi_val = note_idx + (octave * 12)
    if not 0 <= midi_val <= 127:
        logging.error("MIDI value out of range: %s -> %d", note, midi_val)
        raise ValueError(
            f"Computed MIDI value {midi_val} out of range 0-127 for note {note}"
        )

    return midi_val


def midi_to_note(midi_note: int) -> str:
    """Convert a MIDI number into a note name using sharps.

    Parameters
    ----------
    midi_note:
        Integer representing the MIDI note number. Valid values range from
        ``0`` (``C-1``) through ``127`` (``G9``).

    Returns
    -------
    str
        Note name with octave, e.g. ``C4``.

    Raises
    ------
    ValueError
        If ``midi_note`` is outside the inclusive ``0-127`` range.

    Examples
    --------
    >>> midi_to_note(60)
    'C4'
    >>> midi_to_note(55)
    'G3'
    """

    if not 0 <= midi_note <= 127:
        raise ValueError(f"MIDI note {midi_note} out of range 0-127")

    octave = midi_note // 12 - 1
    name = NOTES[midi_note % 12]
    return f"{name}{octave}"
