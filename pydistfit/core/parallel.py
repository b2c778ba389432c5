"""
Ordered fan-out over independent units of work.

Estimating many families and re-estimating on many bootstrap resamples
are both side-effect-free loops. ordered_map runs them on a thread pool
and merges the results back in input order, so the output never depends
on which worker finished first.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

import numpy as np

from pydistfit.core.validation import check_positive_int

T = TypeVar('T')
R = TypeVar('R')


def ordered_map(fn: Callable[[T], R], items: Iterable[T], n_jobs: int = 1) -> list[R]:
    """
    Apply fn to every item, returning results in input order.

    Args:
        fn: Pure function of one item.
        items: Work items.
        n_jobs: Worker threads. 1 runs sequentially in the calling thread.

    Returns:
        [fn(item) for item in items], in the same order.
    """
    check_positive_int(n_jobs, "n_jobs")
    work = list(items)
    if n_jobs == 1 or len(work) <= 1:
        return [fn(item) for item in work]
    with ThreadPoolExecutor(max_workers=min(n_jobs, len(work))) as pool:
        return list(pool.map(fn, work))


def spawn_generators(seed: int | None, count: int) -> list[np.random.Generator]:
    """
    Create independent random streams, one per parallel task.

    The streams are derived from a single SeedSequence, so a fixed seed
    reproduces every stream regardless of how tasks are scheduled.
    """
    children = np.random.SeedSequence(seed).spawn(count)
    return [np.random.default_rng(child) for child in children]
