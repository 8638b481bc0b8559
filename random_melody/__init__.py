#!/usr/bin/env python3
"""Random Melody library.

This package generates short melodies from a handful of numeric parameters
and an optional text seed.  A typical workflow is to build a
:class:`GenerationParams`, call :func:`generate_melody` and feed the result into
:func:`create_midi_file` to produce a MIDI track.  The command line interface
in :mod:`random_melody.cli` wraps these calls and also prints a JSON report of
the generated notes.

Underlying Algorithm
--------------------
Melodies have no key.  Each measure of 4/4 is filled with durations drawn from
a fixed pool (whole down to sixteenth notes) and every note moves the running
pitch by a random step or, less often, a leap.  Pitches are clamped to the
requested MIDI range.  All randomness comes from a single
:class:`~random_melody.prng.RandomSource` so a seed reproduces the melody
exactly.

Algorithm Pseudocode
--------------------
The following outlines the main loop executed by :func:`generate_melody`::

    pitch = clamp(60, low, high)
    cursor = 0
    for measure in range(measures):
        for fraction in generate_measure_durations(rand):
            pitch = next_midi(rand, pitch, low, high)
            emit(pitch, start=cursor, duration=fraction * 4)
            cursor += fraction * 4

Notes are contiguous: each one starts where the previous one ends and every
measure adds up to exactly four beats.
"""

__version__ = "0.1.0"

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

# Default path for storing user preferences. The file lives in the user's
# home directory so settings persist between runs of the application.
env_path = os.environ.get("RANDOM_MELODY_SETTINGS_FILE")
if env_path:
    DEFAULT_SETTINGS_FILE = Path(env_path).expanduser()
else:
    DEFAULT_SETTINGS_FILE = Path.home() / ".random_melody_settings.json"

# Built-in parameter defaults. Keys use the same spelling as the command line
# options and the settings file.
DEFAULTS: Dict[str, Any] = {
    "measures": 4,
    "tempo": 100,
    "seed": None,
    "lowMidi": 55,  # G3
    "highMidi": 76,  # E5
    "output": "out.mid",
}

# MIDI defines note numbers in the inclusive range 0-127.
MIN_MIDI = 0
MAX_MIDI = 127

# Every measure is a whole note in 4/4 time.
BEATS_PER_MEASURE = 4

# Middle C. The walk starts here unless the range excludes it.
START_PITCH = 60


def load_settings(path: Path = DEFAULT_SETTINGS_FILE) -> dict:
    """Load saved user settings from ``path`` if it exists.

    @param path (Path): Location of the settings file.
    @returns dict: Loaded settings or an empty dictionary when unavailable.
    """
    # Prefer the user's saved options but fall back to an empty dictionary
    # when the settings file is missing or unreadable.
    if path.is_file():
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logging.error(f"Could not load settings: {exc}")
            return {}
        if not isinstance(data, dict):
            logging.error("Could not load settings: %s does not contain an object", path)
            return {}
        return data
    return {}


def save_settings(settings: dict, path: Path = DEFAULT_SETTINGS_FILE) -> None:
    """Save user ``settings`` to ``path`` as JSON.

    @param settings (dict): Options to be persisted.
    @param path (Path): Destination file path.
    @returns None: Function does not return a value.
    """
    # Failing to save preferences never prevents melody generation, so the
    # error is logged rather than raised.
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh, indent=2)
    except OSError as exc:
        logging.error(f"Could not save settings: {exc}")


# NOTE_TO_SEMITONE maps both sharp and flat spellings to the correct semitone
# offset within an octave so ``note_to_midi`` handles enharmonic names.
NOTE_TO_SEMITONE = {
    "C": 0,
    "B#": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
}

# Sharp spellings indexed by pitch class. Generated note names always use
# these.
NOTES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

from .note_utils import note_to_midi, midi_to_note  # noqa: E402,F401
from .prng import RandomSource  # noqa: E402
from .rhythm_engine import RHYTHM_POOL, generate_measure_durations  # noqa: E402,F401
from .pitch_walk import clamp, next_midi  # noqa: E402
from .utils import validate_midi_range, validate_positive  # noqa: E402


@dataclass(frozen=True)
class GenerationParams:
    """Inputs of a single generation run.

    ``tempo`` does not influence the generated notes; it is passed through to
    the MIDI writer. ``low_midi`` and ``high_midi`` bound the pitch walk
    inclusively.
    """

    measures: int = DEFAULTS["measures"]
    tempo: int = DEFAULTS["tempo"]
    seed: Optional[str] = None
    low_midi: int = DEFAULTS["lowMidi"]
    high_midi: int = DEFAULTS["highMidi"]

    def validate(self) -> "GenerationParams":
        """Return ``self`` after checking every field.

        :func:`generate_melody` assumes valid parameters, so callers accepting
        user input run this first.

        Raises
        ------
        ValueError
            If ``measures`` or ``tempo`` is not positive, a bound lies outside
            ``0-127`` or ``low_midi`` exceeds ``high_midi``.
        """

        validate_positive("measures", self.measures)
        validate_positive("tempo", self.tempo)
        validate_midi_range(self.low_midi, self.high_midi)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Return the parameters as they appear in the JSON report."""

        data: Dict[str, Any] = {"measures": self.measures, "tempo": self.tempo}
        if self.seed:
            data["seed"] = self.seed
        data["lowMidi"] = self.low_midi
        data["highMidi"] = self.high_midi
        return data


@dataclass(frozen=True)
class NoteEvent:
    """One generated note. Times are measured in beats from the start."""

    midi: int
    start_beats: float
    duration_beats: float

    @property
    def name(self) -> str:
        """Sharp-spelled note name such as ``C#4``."""
        return midi_to_note(self.midi)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "start": self.start_beats, "dur": self.duration_beats}


def generate_melody(
    params: GenerationParams, rand: Optional[RandomSource] = None
) -> List[NoteEvent]:
    """Return a melody spanning ``params.measures`` measures.

    The algorithm works in a few stages:

    1.  Start the running pitch at middle C, clamped into the requested range.
    2.  For every measure, partition the whole note with
        :func:`generate_measure_durations`.
    3.  For every duration, advance the pitch with :func:`next_midi`, convert
        the fraction to beats and append a :class:`NoteEvent` starting at the
        current time cursor.

    The result depends only on ``params`` and the draws taken from ``rand``.
    Parameters are not validated here; see :meth:`GenerationParams.validate`.

    @param params (GenerationParams): Run configuration.
    @param rand (RandomSource|None): Random source owned by this run. When
        omitted a new one is created from ``params.seed``.
    @returns List[NoteEvent]: Notes in playback order.
    """
    if rand is None:
        rand = RandomSource(params.seed)
    logging.debug(
        "Generating %d measures (seed=%r, range %d-%d)",
        params.measures,
        rand.seed,
        params.low_midi,
        params.high_midi,
    )

    events: List[NoteEvent] = []
    cursor = 0.0
    pitch = clamp(START_PITCH, params.low_midi, params.high_midi)

    for _ in range(params.measures):
        for fraction in generate_measure_durations(rand):
            pitch = next_midi(rand, pitch, params.low_midi, params.high_midi)
            duration = fraction * BEATS_PER_MEASURE
            events.append(NoteEvent(pitch, cursor, duration))
            cursor += duration

    logging.debug("Generated %d notes spanning %s beats", len(events), cursor)
    return events


def melody_summary(params: GenerationParams, melody: List[NoteEvent]) -> Dict[str, Any]:
    """Return the JSON-serialisable report printed by the CLI.

    @param params (GenerationParams): Parameters used for the run.
    @param melody (List[NoteEvent]): Generated notes.
    @returns dict: ``{"params": {...}, "notes": [{"name", "start", "dur"}, ...]}``.
    """
    return {
        "params": params.to_dict(),
        "notes": [event.to_dict() for event in melody],
    }


from . import midi_io  # noqa: F401,E402
from .midi_io import (  # noqa: F401,E402
    beats_to_duration_token,
    create_midi_file,
    duration_token_to_ticks,
)


def run_cli():
    from .cli import run_cli as _run_cli
    _run_cli()


def main():
    from .cli import main as _main
    _main()


if __name__ == "__main__":
    main()
