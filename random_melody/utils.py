"""Validation helpers shared by the library, the CLI and batch generation.

Usage Example
-------------
>>> from random_melody.utils import parse_midi_value, validate_midi_range
>>> parse_midi_value("G3")
55
>>> parse_midi_value("76")
76
>>> validate_midi_range(55, 76)
(55, 76)
"""

from __future__ import annotations

from typing import Tuple

from .note_utils import note_to_midi

__all__ = ["validate_positive", "validate_midi_range", "parse_midi_value"]

# Re-declared locally to avoid a circular import; must match
# :data:`random_melody.MIN_MIDI` and :data:`random_melody.MAX_MIDI`.
MIN_MIDI = 0
MAX_MIDI = 127


def validate_positive(name: str, value: int) -> int:
    """Return ``value`` when it is a positive integer.

    Raises
    ------
    ValueError
        If ``value`` is not an ``int`` or is zero or negative.
    """

    # ``bool`` is an ``int`` subclass but ``True`` measures make no sense.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer")
    return value


def validate_midi_range(low: int, high: int) -> Tuple[int, int]:
    """Check that ``low`` and ``high`` form a valid inclusive MIDI range.

    Parameters
    ----------
    low, high:
        Lowest and highest MIDI note numbers allowed in the melody.

    Returns
    -------
    tuple[int, int]
        ``(low, high)`` unchanged.

    Raises
    ------
    ValueError
        If either bound is outside ``0-127`` or ``low`` exceeds ``high``.
    """

    for label, value in (("lowMidi", low), ("highMidi", high)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{label} must be an integer")
        if not MIN_MIDI <= value <= MAX_MIDI:
            raise ValueError(f"{label} must be between {MIN_MIDI} and {MAX_MIDI}")
    if low > high:
        raise ValueError(f"lowMidi ({low}) must not exceed highMidi ({high})")
    return low, high


def parse_midi_value(text: str) -> int:
    """Parse a pitch bound given as a MIDI number or a note name.

    ``"60"`` and ``"C4"`` both return ``60``. Used as an ``argparse`` type so
    range bounds can be written either way on the command line.

    Raises
    ------
    ValueError
        If ``text`` is neither an integer nor a valid note name.
    """

    text = str(text).strip()
    try:
        return int(text)
    except ValueError:
        return note_to_midi(text)
