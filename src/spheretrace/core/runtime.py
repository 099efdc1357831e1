"""Taichi runtime initialisation.

The tracer works in double precision on the CPU backend, with one CPU
thread per render worker. ``init_runtime`` must run before importing any
module that declares Taichi fields, since ``ti.init`` discards fields
declared earlier.
"""

from __future__ import annotations

import logging
import os

import taichi as ti

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Number of available execution units (at least 1)."""
    return os.cpu_count() or 1


def init_runtime(num_workers: int | None = None, *, debug: bool = False) -> int:
    """Initialise Taichi for rendering.

    Args:
        num_workers: Size of the CPU thread pool. Defaults to the number
            of available CPUs.
        debug: Enable Taichi debug mode (bounds checks).

    Returns:
        The worker count the runtime was initialised with.

    Raises:
        ValueError: If num_workers is not positive.
    """
    workers = default_worker_count() if num_workers is None else num_workers
    if workers <= 0:
        raise ValueError(f"num_workers must be positive, got {workers}")

    ti.init(
        arch=ti.cpu,
        default_fp=ti.f64,
        cpu_max_num_threads=workers,
        debug=debug,
    )
    logger.debug("Taichi initialised on CPU with %d threads", workers)
    return workers
