"""
Break point construction.

Break points are the ordered boundaries that partition the real line into
histogram bins. This module builds them from a range and a bin count,
extends them with support limits or infinite sentinels, and chooses
equal-probability break points under a candidate distribution for
chi-squared style comparisons.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pydistfit.core.exceptions import ValidationError
from pydistfit.core.validation import check_array, check_level, check_positive_int

# Below this sample size the equalized break points fall back to tertiles
MIN_EQUALIZED_SAMPLE_SIZE = 15


def _check_break_points(break_points: ArrayLike) -> NDArray:
    bp = check_array(break_points, "break_points").ravel()
    if bp.size == 0:
        raise ValidationError("break_points: the break points array was empty")
    if np.any(np.isnan(bp)):
        raise ValidationError("break_points: contains NaN")
    return bp


def normalize_break_points(break_points: ArrayLike) -> NDArray:
    """
    Sort break points ascending and drop duplicates.

    Raises:
        ValidationError: If the array is empty or contains NaN
    """
    return np.unique(_check_break_points(break_points))


def create_break_points(lower: float, upper: float, num_bins: int) -> NDArray:
    """
    num_bins + 1 equally spaced break points from lower to upper.

    Raises:
        ValidationError: If a limit is infinite, lower >= upper or num_bins < 1
    """
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise ValidationError(
            f"The limits of the range cannot be infinite, got ({lower}, {upper})"
        )
    if lower >= upper:
        raise ValidationError(
            f"The lower limit must be < the upper limit of the range, got ({lower}, {upper})"
        )
    check_positive_int(num_bins, "num_bins")
    return np.linspace(lower, upper, num_bins + 1)


def create_break_points_by_width(lower: float, num_bins: int, width: float) -> NDArray:
    """num_bins + 1 break points starting at lower and spaced by width."""
    if not math.isfinite(lower):
        raise ValidationError(f"The lower limit cannot be infinite, got {lower}")
    check_positive_int(num_bins, "num_bins")
    if not (width > 0.0 and math.isfinite(width)):
        raise ValidationError(f"The width of the bins must be > 0, got {width}")
    return lower + width * np.arange(num_bins + 1, dtype=np.float64)


def add_lower_limit(lower: float, break_points: ArrayLike) -> NDArray:
    """Prepend lower unless it is not below the first break point."""
    bp = _check_break_points(break_points)
    if lower >= bp[0]:
        return bp.copy()
    return np.concatenate(([lower], bp))


def add_upper_limit(upper: float, break_points: ArrayLike) -> NDArray:
    """Append upper unless it is not above the last break point."""
    bp = _check_break_points(break_points)
    if upper <= bp[-1]:
        return bp.copy()
    return np.concatenate((bp, [upper]))


def add_negative_infinity(break_points: ArrayLike) -> NDArray:
    return add_lower_limit(-math.inf, break_points)


def add_positive_infinity(break_points: ArrayLike) -> NDArray:
    return add_upper_limit(math.inf, break_points)


def add_domain_limits(break_points: ArrayLike, domain: tuple[float, float]) -> NDArray:
    """Extend break points so the bins cover the whole support (lower, upper)."""
    bp = add_lower_limit(domain[0], break_points)
    return add_upper_limit(domain[1], bp)


def recommend_num_intervals(sample_size: int, level: float = 0.95) -> int:
    """
    Recommended number of equal-probability intervals for a chi-squared test.

    k = max(3, min(floor(4 * (2 (n-1)^2 / c^2)^(1/5)), floor(n / 5)))

    where c is the standard normal quantile at level. The floor(n/5) cap
    keeps the expected count per interval at 5 or more.
    """
    check_positive_int(sample_size, "sample_size")
    check_level(level, "level")
    c = sp_stats.norm.ppf(level)
    n = sample_size
    k1 = max(3, int(math.floor(4.0 * (2.0 * (n - 1) ** 2 / (c * c)) ** 0.2)))
    return max(3, min(k1, n // 5))


def recommend_u01_break_points(sample_size: int, level: float = 0.95) -> NDArray:
    """Interior break points i/k, i = 1..k-1, for k recommended intervals."""
    k = recommend_num_intervals(sample_size, level)
    return np.arange(1, k, dtype=np.float64) / k


def equalized_break_points(
    sample_size: int,
    inv_cdf: Callable[[NDArray], NDArray],
) -> NDArray:
    """
    Break points with approximately equal probability between them.

    For samples smaller than 15 the tertiles 1/3 and 2/3 are used. Otherwise
    the recommended equally spaced probabilities are mapped through the
    inverse cdf. Duplicates (which discrete inverse cdfs produce) are
    removed and the result is sorted.

    Args:
        sample_size: Number of observations that will be binned.
        inv_cdf: Vectorized inverse cdf of the candidate distribution.

    Returns:
        Interior break points; add the support limits with add_domain_limits().
    """
    check_positive_int(sample_size, "sample_size")
    if sample_size < MIN_EQUALIZED_SAMPLE_SIZE:
        p = np.array([1.0 / 3.0, 2.0 / 3.0])
    else:
        p = recommend_u01_break_points(sample_size)
    bp = np.asarray(inv_cdf(p), dtype=np.float64)
    bp = bp[np.isfinite(bp)]
    if bp.size == 0:
        raise ValidationError("inv_cdf produced no finite break points")
    return np.unique(bp)


def recommend_break_points(data: ArrayLike) -> NDArray:
    """
    Break points for a descriptive histogram of the data.

    Uses the bin width 3.49 * s * n^(-1/3) (Scott's rule), starting at
    floor(min). A single observation, or all-equal data, yields one
    break point at floor of the value.
    """
    x = check_array(data, "data").ravel()
    if x.size == 0:
        raise ValidationError("data: the supplied observations array was empty")
    lo, hi = float(np.min(x)), float(np.max(x))
    if x.size == 1 or lo == hi:
        return np.array([math.floor(lo)])
    width = 3.49 * float(np.std(x, ddof=1)) * x.size ** (-1.0 / 3.0)
    start = math.floor(lo)
    num_bins = max(1, int(math.ceil((math.ceil(hi) - start) / width)))
    return create_break_points_by_width(start, num_bins, width)
