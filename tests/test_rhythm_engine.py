"""Unit tests for the measure-filling rhythm engine."""

import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

rhythm = importlib.import_module("random_melody.rhythm_engine")
prng = importlib.import_module("random_melody.prng")


@pytest.mark.parametrize("seed", ["a", "b", "groove", "12345", "hello"])
def test_measure_closes_exactly(seed):
    """Durations come from the pool and add up to one whole note."""
    rand = prng.RandomSource(seed)
    for _ in range(50):
        durations = rhythm.generate_measure_durations(rand)
        assert durations
        assert all(d in rhythm.RHYTHM_POOL for d in durations)
        assert abs(sum(durations) - 1.0) <= rhythm.EPSILON


def test_lowest_draw_picks_whole_note(scripted):
    rand = scripted([0.0])
    assert rhythm.generate_measure_durations(rand) == [1.0]
    assert rand.consumed == 1


def test_highest_draws_pick_sixteenths(scripted):
    """The last candidate is always the sixteenth note."""
    rand = scripted([0.99] * 16)
    assert rhythm.generate_measure_durations(rand) == [0.0625] * 16


def test_candidates_shrink_with_remaining_space(scripted):
    # 0.3 selects index 1 of five, then index 1 of four, then index 0 of three.
    rand = scripted([0.3, 0.3, 0.3])
    assert rhythm.generate_measure_durations(rand) == [0.5, 0.25, 0.25]


def test_safety_net_closes_measure_with_remainder():
    """A pool that cannot fill the measure ends with the leftover space."""
    rand = prng.RandomSource("net")
    durations = rhythm.generate_measure_durations(rand, pool=(0.3,))
    assert len(durations) == 4
    assert durations[:3] == [0.3, 0.3, 0.3]
    assert durations[-1] == pytest.approx(0.1)
    assert abs(sum(durations) - 1.0) <= rhythm.EPSILON


def test_empty_pool_rejected():
    with pytest.raises(ValueError):
        rhythm.generate_measure_durations(prng.RandomSource("x"), pool=())
