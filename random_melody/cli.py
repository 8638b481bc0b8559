"""Command line helpers for Random Melody.

This module implements the console entry point for the project.  The
:func:`run_cli` function parses command line arguments, generates a melody,
prints a JSON report of every note and writes the MIDI file.  :func:`main`
configures logging before delegating to :func:`run_cli`.

Defaults for every option may be stored in a JSON settings file (see
:func:`random_melody.load_settings`).  Values given on the command line take
precedence over the settings file, which in turn overrides the built-in
:data:`random_melody.DEFAULTS`.

Example
-------
Running ``python -m random_melody --measures 8 --tempo 120 --seed hello``
prints the note report and writes ``out.mid`` to the current directory.
Omitting ``--seed`` produces a different melody on every run.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import DEFAULTS
from .utils import parse_midi_value

__all__ = ["run_cli", "main"]


def _merge_defaults(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay recognised ``settings`` onto :data:`DEFAULTS`."""

    merged = dict(DEFAULTS)
    for key, value in settings.items():
        if key in merged:
            merged[key] = value
        else:
            logging.warning("Ignoring unknown setting: %s", key)
    return merged


def _build_parser(defaults: Dict[str, Any]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a random melody, print it as JSON and save it as a MIDI file."
    )
    parser.add_argument("--measures", type=int, default=defaults["measures"], help="Number of 4/4 measures to generate (default: %(default)s).")
    parser.add_argument("--tempo", type=int, default=defaults["tempo"], help="Tempo in beats per minute (default: %(default)s).")
    parser.add_argument("--seed", type=str, default=defaults["seed"], help="Text seed for reproducible output. Omit for a different melody every run.")
    parser.add_argument(
        "--lowMidi",
        "--low-midi",
        dest="low_midi",
        type=parse_midi_value,
        default=defaults["lowMidi"],
        help="Lowest pitch as a MIDI number or note name (default: %(default)s).",
    )
    parser.add_argument(
        "--highMidi",
        "--high-midi",
        dest="high_midi",
        type=parse_midi_value,
        default=defaults["highMidi"],
        help="Highest pitch as a MIDI number or note name (default: %(default)s).",
    )
    parser.add_argument("--output", type=str, default=defaults["output"], help="Output MIDI file path (default: %(default)s).")
    parser.add_argument("--settings-file", type=str, help="Path to the JSON settings file providing defaults")
    parser.add_argument("--save-settings", action="store_true", help="Store the effective options in the settings file")
    parser.add_argument("--no-report", dest="report", action="store_false", help="Do not print the JSON note report")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def run_cli(argv: Optional[List[str]] = None) -> None:
    """Parse CLI arguments, print the melody report and write a MIDI file.

    Invalid parameters and failures while writing the MIDI file are logged
    and terminate the process with exit status ``1``.

    @param argv (List[str]|None): Arguments to parse. Defaults to
        ``sys.argv[1:]``.
    @returns None: Function does not return a value.
    """

    from . import (
        DEFAULT_SETTINGS_FILE,
        GenerationParams,
        create_midi_file,
        generate_melody,
        load_settings,
        melody_summary,
        save_settings,
    )

    if argv is None:
        argv = sys.argv[1:]

    # The settings file supplies parser defaults, so locate it before the
    # full parser is built.
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--settings-file", type=str)
    pre_args, _ = pre_parser.parse_known_args(argv)
    settings_path = (
        Path(pre_args.settings_file).expanduser()
        if pre_args.settings_file
        else DEFAULT_SETTINGS_FILE
    )

    parser = _build_parser(_merge_defaults(load_settings(settings_path)))
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    seed = str(args.seed) if args.seed not in (None, "") else None
    params = GenerationParams(
        measures=args.measures,
        tempo=args.tempo,
        seed=seed,
        low_midi=args.low_midi,
        high_midi=args.high_midi,
    )
    try:
        params.validate()
    except ValueError as exc:
        logging.error(str(exc))
        sys.exit(1)

    if args.save_settings:
        save_settings({**params.to_dict(), "output": args.output}, settings_path)

    melody = generate_melody(params)
    if args.report:
        print(json.dumps(melody_summary(params, melody), indent=2))

    out = Path(args.output).expanduser().resolve()
    try:
        create_midi_file(melody, params.tempo, str(out))
    except OSError as exc:
        # Permission issues or full disks surface as ``OSError``. No retry.
        logging.error("Could not write MIDI file: %s", exc)
        sys.exit(1)
    print(f"\nWrote MIDI -> {out}")
    logging.info("Melody generation complete.")


def main() -> None:
    """Console script entry point."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_cli()
