"""Parallel melody generation helpers.

This module provides a small convenience function for producing many
melodies concurrently.  It offloads each generation call to a worker process
via :class:`concurrent.futures.ProcessPoolExecutor` so CPU bound work scales
with the number of available cores.

Example
-------
>>> configs = [
...     {"measures": 4, "seed": "a"},
...     {"measures": 8, "seed": "b", "low_midi": 48, "high_midi": 72},
... ]
>>> melodies = generate_batch(configs, workers=2)
>>> len(melodies)
2

Design Notes
------------
Each configuration becomes its own :class:`~random_melody.GenerationParams`
and every worker builds its own random source from that configuration's seed,
so results never depend on scheduling.  Configurations are validated before
any work is dispatched.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

from . import GenerationParams, NoteEvent, generate_melody

__all__ = ["generate_batch"]


def _generate_single(params: GenerationParams) -> List[NoteEvent]:
    """Wrapper used by worker processes to generate one melody."""

    return generate_melody(params)


def generate_batch(
    configs: Iterable[Dict[str, Any]], *, workers: Optional[int] = None
) -> List[List[NoteEvent]]:
    """Generate multiple melodies in parallel.

    Parameters
    ----------
    configs:
        Iterable of keyword dictionaries accepted by
        :class:`~random_melody.GenerationParams`.
    workers:
        Optional number of worker processes. When ``None`` the CPU count is
        used. ``1`` disables multiprocessing and runs serially. ``ValueError``
        is raised when ``workers`` is ``0`` or negative.

    Returns
    -------
    List[List[NoteEvent]]
        One melody per configuration, in input order.

    Raises
    ------
    ValueError
        If ``workers`` is not positive or a configuration is invalid.
    """

    if workers is not None and workers <= 0:
        raise ValueError("workers must be positive")
    try:
        params_list = [GenerationParams(**cfg).validate() for cfg in configs]
    except TypeError as exc:
        raise ValueError(f"Invalid batch configuration: {exc}") from exc

    if workers is None:
        workers = os.cpu_count() or 1
    logging.debug("Generating %d melodies with %d workers", len(params_list), workers)
    if workers <= 1:
        # Serial path keeps unit tests free of subprocesses.
        return [_generate_single(params) for params in params_list]

    with ProcessPoolExecutor(max_workers=workers) as pool:
        futs = [pool.submit(_generate_single, params) for params in params_list]
        return [f.result() for f in futs]
