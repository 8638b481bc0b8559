"""Utilities for writing melodies as Standard MIDI Files.

Durations and waits are first expressed as symbolic *duration tokens*, the
vocabulary of the classic name-based MIDI writers: ``"1"`` is a whole note,
``"4"`` a quarter, a ``d`` prefix marks a dotted value and ``"T<n>"`` gives an
explicit tick count.  Beat values missing from :data:`DURATION_TOKENS` fall
back to ticks at :data:`TICKS_PER_BEAT` resolution.  Tokens are then resolved
to ticks and written with :mod:`mido`.

Example
-------
>>> from random_melody import GenerationParams, generate_melody
>>> from random_melody.midi_io import create_midi_file
>>> melody = generate_melody(GenerationParams(seed="hello"))
>>> create_midi_file(melody, 100, "out.mid")  # doctest: +SKIP

Design Notes
------------
The wait before each note is the distance between its start and the start of
the previous note, and it is applied after the previous note ends.  Since
melodies are contiguous this leaves a rest as long as the previous note
between consecutive notes in the written file.  Keep this spacing; existing
files depend on it.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Sequence

if TYPE_CHECKING:
    # ``MidiFile`` is only needed for type checking to avoid requiring the
    # dependency at import time.
    from mido import MidiFile

    from . import NoteEvent

from .note_utils import note_to_midi

__all__ = [
    "DURATION_TOKENS",
    "TICKS_PER_BEAT",
    "TRACK_NAME",
    "beats_to_duration_token",
    "duration_token_to_ticks",
    "create_midi_file",
]

TICKS_PER_BEAT = 128

# Beat lengths with a dedicated symbolic token. ``T0`` marks a zero-length
# wait.
DURATION_TOKENS: Dict[float, str] = {
    0: "T0",
    0.5: "8",
    1: "4",
    1.5: "d4",
    2: "2",
    3: "d2",
    4: "1",
}

TRACK_NAME = "Random Melody (no key)"

# Default note velocity: 50 on a 1-100 scale, i.e. 64 in MIDI units.
DEFAULT_VELOCITY = 64


def beats_to_duration_token(beats: float) -> str:
    """Return the duration token for ``beats``.

    >>> beats_to_duration_token(1.5)
    'd4'
    >>> beats_to_duration_token(0.375)
    'T48'
    """

    token = DURATION_TOKENS.get(beats)
    if token is not None:
        return token
    # Round half up; ``round`` would use banker's rounding.
    ticks = math.floor(beats * TICKS_PER_BEAT + 0.5)
    return f"T{ticks}"


def duration_token_to_ticks(token: str) -> int:
    """Resolve a duration token to a tick count.

    ``"4"`` is a quarter note (one beat), ``"2"`` a half note and so on; a
    leading ``d`` adds half the value again and ``"T<n>"`` is ``n`` ticks.

    Raises
    ------
    ValueError
        If ``token`` is not a recognised duration.
    """

    if token.startswith("T"):
        try:
            ticks = int(token[1:])
        except ValueError as exc:
            raise ValueError(f"Invalid tick duration: {token}") from exc
        if ticks < 0:
            raise ValueError(f"Invalid tick duration: {token}")
        return ticks

    dotted = token.startswith("d")
    try:
        division = int(token[1:] if dotted else token)
    except ValueError as exc:
        raise ValueError(f"Unknown duration token: {token}") from exc
    if division not in (1, 2, 4, 8, 16, 32, 64):
        raise ValueError(f"Unknown duration token: {token}")

    whole_note_ticks = TICKS_PER_BEAT * 4
    ticks = whole_note_ticks // division
    if dotted:
        ticks += ticks // 2
    return ticks


def _note_tokens(melody: Sequence["NoteEvent"]) -> List[tuple]:
    """Return ``(name, duration_token, wait_token)`` for every event."""

    triples = []
    last_start = 0.0
    for event in melody:
        wait = event.start_beats - last_start
        last_start = event.start_beats
        triples.append(
            (
                event.name,
                beats_to_duration_token(event.duration_beats),
                beats_to_duration_token(wait),
            )
        )
    return triples


def create_midi_file(
    melody: Sequence["NoteEvent"],
    tempo: int,
    output_file: str,
    *,
    track_name: str = TRACK_NAME,
    velocity: int = DEFAULT_VELOCITY,
) -> "MidiFile":
    """Write ``melody`` to ``output_file`` as a single-track MIDI file.

    The parent directory of ``output_file`` is created automatically.  Any
    ``OSError`` raised while saving propagates to the caller; nothing is
    retried.

    @param melody (Sequence[NoteEvent]): Notes in playback order.
    @param tempo (int): Beats per minute. Must be positive.
    @param output_file (str): Destination path.
    @param track_name (str): Name stored in the track's meta data.
    @param velocity (int): Velocity of every note (1-127).
    @returns MidiFile: In-memory representation of the written file.
    """
    # ``mido`` is imported lazily so the generator itself can be used without
    # the MIDI dependency installed.
    try:
        import mido
        from mido import Message, MidiFile, MidiTrack
    except ModuleNotFoundError as exc:
        raise ImportError(
            "mido is required to create MIDI files; install it with 'pip install mido'"
        ) from exc

    if tempo <= 0:
        raise ValueError("tempo must be a positive integer")
    if not 1 <= velocity <= 127:
        raise ValueError("velocity must be between 1 and 127")

    mid = MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(tempo)))
    track.append(mido.MetaMessage("track_name", name=track_name))

    for name, duration, wait in _note_tokens(melody):
        pitch = note_to_midi(name)
        track.append(
            Message(
                "note_on",
                note=pitch,
                velocity=velocity,
                time=duration_token_to_ticks(wait),
            )
        )
        track.append(
            Message(
                "note_off",
                note=pitch,
                velocity=velocity,
                time=duration_token_to_ticks(duration),
            )
        )

    Path(output_file).expanduser().parent.mkdir(parents=True, exist_ok=True)

    mid.save(output_file)
    logging.info("MIDI file saved to %s", output_file)
    return mid
