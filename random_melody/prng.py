"""Seedable pseudo-random source used by every generation run.

A :class:`RandomSource` turns an optional text seed into a reproducible stream
of floats in ``[0, 1)``. Seeds are hashed to a single 32-bit integer with the
*xmur3* string hash and that integer drives a *Mulberry32* generator. Both
algorithms are tiny, fast and well mixed, which is all a melody needs; they are
not suitable for cryptography.

When no seed is supplied the source falls back to a private
:class:`random.Random` instance seeded from OS entropy, so results vary from
run to run.

Example
-------
>>> from random_melody.prng import RandomSource
>>> rand = RandomSource("hello")
>>> rand.next()
0.17875796859152615
>>> rand.choice([1.0, 0.5, 0.25])
0.25

Design Notes
------------
Every run owns exactly one source and threads it explicitly through the rhythm
and pitch helpers. Nothing here touches the module level :mod:`random` state,
so melodies generated concurrently in separate workers never interfere with
each other.
"""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence, TypeVar

__all__ = ["RandomSource", "xmur3", "mulberry32"]

T = TypeVar("T")

# All arithmetic below emulates unsigned 32-bit registers.
_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """Return the low 32 bits of ``a * b``."""

    return (a * b) & _MASK32


def _utf16_units(text: str) -> list[int]:
    """Return ``text`` as UTF-16 code units.

    Hashing code units rather than code points keeps seeds containing
    characters outside the Basic Multilingual Plane (emoji for instance)
    compatible with other xmur3 implementations.
    """

    data = text.encode("utf-16-le")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def xmur3(text: str) -> Callable[[], int]:
    """Return a generator of 32-bit hashes derived from ``text``.

    Each call of the returned function yields the next hash in the sequence.
    The first value is used as the Mulberry32 state.

    >>> xmur3("hello")()
    3588693721
    """

    units = _utf16_units(text)
    h = (1779033703 ^ len(units)) & _MASK32
    for unit in units:
        h = _imul(h ^ unit, 3432918353)
        h = ((h << 13) & _MASK32) | (h >> 19)

    def seed() -> int:
        nonlocal h
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        return h

    return seed


def mulberry32(state: int) -> Callable[[], float]:
    """Return a Mulberry32 generator producing floats in ``[0, 1)``."""

    a = state & _MASK32

    def draw() -> float:
        nonlocal a
        a = (a + 0x6D2B79F5) & _MASK32
        t = _imul(a ^ (a >> 15), a | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return (t ^ (t >> 14)) / 4294967296

    return draw


class RandomSource:
    """Stream of uniform floats owned by a single melody generation run.

    Parameters
    ----------
    seed:
        Optional text seed. The same seed always yields the same stream. An
        empty string counts as no seed at all.
    """

    def __init__(self, seed: Optional[str] = None) -> None:
        self.seed = seed or None
        if self.seed is not None:
            self._draw = mulberry32(xmur3(self.seed)())
        else:
            self._draw = random.Random().random

    @property
    def reproducible(self) -> bool:
        """``True`` when the stream is derived from a seed."""

        return self.seed is not None

    def next(self) -> float:
        """Return the next value of the stream in ``[0, 1)``."""

        return self._draw()

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of ``seq`` uniformly using a single draw.

        Raises
        ------
        ValueError
            If ``seq`` is empty.
        """

        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[int(self.next() * len(seq))]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
