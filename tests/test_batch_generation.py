import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

batch = importlib.import_module("random_melody.batch_generation")
random_melody = importlib.import_module("random_melody")


CONFIGS = [
    {"measures": 2, "seed": "first"},
    {"measures": 3, "seed": "second", "low_midi": 48, "high_midi": 72},
]


def _expected():
    return [
        random_melody.generate_melody(random_melody.GenerationParams(**cfg))
        for cfg in CONFIGS
    ]


def test_generate_batch_serial_matches_single_runs():
    """``workers=1`` generates in-process and keeps input order."""
    assert batch.generate_batch(CONFIGS, workers=1) == _expected()


def test_generate_batch_uses_process_pool(monkeypatch):
    """``generate_batch`` should create a ``ProcessPoolExecutor`` when workers>1."""

    calls = {}

    class DummyExec:
        def __init__(self, max_workers=None):
            calls["workers"] = max_workers

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            pass

        def submit(self, fn, params):
            calls.setdefault("submitted", []).append(params)

            class DummyFut:
                def result(self_inner):
                    return fn(params)

            return DummyFut()

    monkeypatch.setattr(batch, "ProcessPoolExecutor", DummyExec)

    result = batch.generate_batch(CONFIGS, workers=2)

    assert calls["workers"] == 2
    assert [p.seed for p in calls["submitted"]] == ["first", "second"]
    assert result == _expected()


def test_generate_batch_defaults_to_cpu_count(monkeypatch):
    monkeypatch.setattr(batch.os, "cpu_count", lambda: None)
    # ``None`` from ``cpu_count`` falls back to a single serial worker.
    assert batch.generate_batch(CONFIGS) == _expected()


@pytest.mark.parametrize("workers", [0, -1])
def test_generate_batch_invalid_workers(workers):
    with pytest.raises(ValueError):
        batch.generate_batch(CONFIGS, workers=workers)


@pytest.mark.parametrize(
    "config",
    [
        {"measures": 0},
        {"low_midi": 80, "high_midi": 70},
        {"key": "C"},
    ],
)
def test_generate_batch_rejects_invalid_config(config):
    with pytest.raises(ValueError):
        batch.generate_batch([config], workers=1)
