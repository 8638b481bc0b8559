"""Measure-filling rhythm generation.

This module partitions a single measure into note durations.  A measure is
treated as the unit interval where ``1.0`` is a whole note, so every duration
is a fraction of a whole note.  Durations are drawn one at a time from
:data:`RHYTHM_POOL`, restricted to the values that still fit in the measure,
until the measure is full.  The caller converts the fractions into beats.

Decoupling rhythm from pitch mirrors a typical composing workflow where the
groove is established first and notes are layered on afterwards.
"""

from __future__ import annotations

from typing import List, Sequence

from .prng import RandomSource

__all__ = ["RHYTHM_POOL", "EPSILON", "generate_measure_durations"]

# Whole, half, quarter, eighth and sixteenth notes as fractions of a measure.
# The order matters: it is the index space used when a candidate is drawn.
RHYTHM_POOL = (1.0, 0.5, 0.25, 0.125, 0.0625)

# Tolerance used when comparing accumulated durations against the measure.
EPSILON = 1e-6


def generate_measure_durations(
    rand: RandomSource, pool: Sequence[float] = RHYTHM_POOL
) -> List[float]:
    """Return durations that exactly fill one measure.

    Parameters
    ----------
    rand:
        Random source owned by the current run. One draw is consumed per
        duration picked.
    pool:
        Ordered durations allowed in the measure. Defaults to
        :data:`RHYTHM_POOL`.

    Returns
    -------
    List[float]
        Fractions of a whole note summing to ``1.0``.

    Raises
    ------
    ValueError
        If ``pool`` is empty.
    """

    if not pool:
        raise ValueError("pool must contain at least one duration")

    durations: List[float] = []
    used = 0.0
    while 1 - used > EPSILON:
        remaining = 1 - used
        candidates = [value for value in pool if value <= remaining + EPSILON]
        if not candidates:
            # Only reachable through floating point drift or a pool whose
            # smallest value does not divide the measure.
            durations.append(remaining)
            break
        value = rand.choice(candidates)
        durations.append(value)
        used += value

    # Snap the last duration so the measure closes exactly.
    diff = 1 - sum(durations)
    if abs(diff) > EPSILON:
        durations[-1] += diff
    return durations
