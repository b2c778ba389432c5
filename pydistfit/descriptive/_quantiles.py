"""
Sample quantiles and plotting positions.

The continuous quantile definition used throughout is Hyndman & Fan (1996)
type 7, the default of R's quantile(): for sorted x of length n and
probability p, h = (n - 1) * p, and the quantile interpolates linearly
between x[floor(h)] and x[floor(h) + 1].

Reference:
    Hyndman, R.J. and Fan, Y. (1996) "Sample Quantiles in Statistical
    Packages", The American Statistician, 50(4), 361-365.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.exceptions import ValidationError

PlottingPosition = Literal["base", "continuity1", "continuity2"]


def type7_quantile(x: ArrayLike, probs: ArrayLike, *, is_sorted: bool = False) -> NDArray:
    """
    Compute type-7 sample quantiles.

    Parameters
    ----------
    x : array-like
        1D sample with no NaN values.
    probs : array-like
        Probabilities in [0, 1].
    is_sorted : bool
        Skip sorting when x is already ascending.

    Returns
    -------
    NDArray
        One quantile per probability. NaN for an empty sample.
    """
    xs = np.asarray(x, dtype=np.float64)
    if not is_sorted:
        xs = np.sort(xs)
    p = np.atleast_1d(np.asarray(probs, dtype=np.float64))
    if np.any((p < 0.0) | (p > 1.0)):
        raise ValidationError(f"probs: must lie in [0, 1], got {p}")

    n = len(xs)
    if n == 0:
        return np.full(len(p), np.nan)
    if n == 1:
        return np.full(len(p), xs[0])

    h = (n - 1) * p
    lo = np.floor(h).astype(int)
    hi = np.minimum(lo + 1, n - 1)
    frac = h - lo
    return xs[lo] + frac * (xs[hi] - xs[lo])


def empirical_probabilities(n: int, kind: PlottingPosition = "continuity1") -> NDArray:
    """
    Plotting positions for the order statistics of a sample of size n.

    - base:        i / n
    - continuity1: (i - 0.5) / n
    - continuity2: (i - 0.375) / (n + 0.25)

    for i = 1..n.
    """
    if n < 1:
        raise ValidationError(f"n: the number of observations must be >= 1, got {n}")
    i = np.arange(1, n + 1, dtype=np.float64)
    if kind == "base":
        return i / n
    if kind == "continuity1":
        return (i - 0.5) / n
    if kind == "continuity2":
        return (i - 0.375) / (n + 0.25)
    raise ValidationError(
        f"kind: must be 'base', 'continuity1' or 'continuity2', got {kind!r}"
    )
