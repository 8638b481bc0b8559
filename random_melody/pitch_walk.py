"""Bounded random walk over MIDI pitch numbers.

Each call to :func:`next_midi` moves the running pitch by a small step most of
the time and by a leap of a fourth or fifth occasionally.  The result is
clamped into the caller's inclusive ``[low, high]`` range.

Note that the clamp saturates at the boundary instead of reflecting back into
the range.  Under sustained outward motion the walk therefore repeats the
boundary pitch.  This behaviour is part of the reproducibility contract:
changing it would alter every seeded melody.
"""

from __future__ import annotations

from .prng import RandomSource

__all__ = ["STEP_PROBABILITY", "STEP_DELTAS", "LEAP_DELTAS", "clamp", "next_midi"]

# Probability of a stepwise move. The remainder goes to leaps.
STEP_PROBABILITY = 0.8

# Semitone offsets for the two kinds of motion. Index order is significant
# because a single uniform draw selects the entry.
STEP_DELTAS = (-2, -1, 1, 2)
LEAP_DELTAS = (-7, -5, 5, 7)


def clamp(value: int, low: int, high: int) -> int:
    """Return ``value`` limited to the inclusive range ``[low, high]``."""

    return max(low, min(high, value))


def next_midi(rand: RandomSource, current: int, low: int, high: int) -> int:
    """Return the pitch following ``current``.

    Two draws are consumed: the first decides between a step and a leap, the
    second selects the interval.

    @param rand (RandomSource): Random source owned by the current run.
    @param current (int): Previous MIDI pitch.
    @param low (int): Lowest allowed MIDI pitch.
    @param high (int): Highest allowed MIDI pitch.
    @returns int: Next MIDI pitch within ``[low, high]``.
    """

    if rand.next() < STEP_PROBABILITY:
        delta = rand.choice(STEP_DELTAS)
    else:
        delta = rand.choice(LEAP_DELTAS)
    return clamp(current + delta, low, high)
