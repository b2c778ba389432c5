"""
Goodness-of-fit statistics computed from order statistics.

Every function takes the raw sample and a vectorized cdf (or inverse cdf)
and sorts internally. None of them raise on data-dependent trouble: a log
of zero or a degenerate sample produces inf or NaN, which the scoring
models turn into the metric's bad score.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.descriptive import empirical_probabilities

CDF = Callable[[NDArray], NDArray]


def _sorted_cdf(data: ArrayLike, cdf: CDF) -> tuple[NDArray, NDArray]:
    x = np.sort(np.asarray(data, dtype=np.float64).ravel())
    return x, np.asarray(cdf(x), dtype=np.float64)


def anderson_darling_statistic(data: ArrayLike, cdf: CDF) -> float:
    """
    A^2 = -n - (1/n) sum_{i=1..n} (2i - 1) [ln F(x_(i)) + ln(1 - F(x_(n+1-i)))]
    """
    x, u = _sorted_cdf(data, cdf)
    n = x.size
    if n == 0:
        return math.nan
    i = np.arange(1, n + 1, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        terms = (2.0 * i - 1.0) * (np.log(u) + np.log1p(-u[::-1]))
    return float(-n - np.sum(terms) / n)


def cramer_von_mises_statistic(data: ArrayLike, cdf: CDF) -> float:
    """W^2 = 1/(12n) + sum_{i=1..n} ((2i - 1)/(2n) - F(x_(i)))^2"""
    x, u = _sorted_cdf(data, cdf)
    n = x.size
    if n == 0:
        return math.nan
    e = (2.0 * np.arange(1, n + 1, dtype=np.float64) - 1.0) / (2.0 * n)
    return float(1.0 / (12.0 * n) + np.sum((e - u) ** 2))


def watson_statistic(data: ArrayLike, cdf: CDF) -> float:
    """U^2 = W^2 - n (mean(F(x)) - 1/2)^2"""
    x, u = _sorted_cdf(data, cdf)
    n = x.size
    if n == 0:
        return math.nan
    e = (2.0 * np.arange(1, n + 1, dtype=np.float64) - 1.0) / (2.0 * n)
    w2 = 1.0 / (12.0 * n) + np.sum((e - u) ** 2)
    return float(w2 - n * (np.mean(u) - 0.5) ** 2)


def ks_statistic(data: ArrayLike, cdf: CDF) -> tuple[float, float, float]:
    """
    Kolmogorov-Smirnov statistics.

    Returns:
        (D, D+, D-) where D+ = max(i/n - F(x_(i))), D- = max(F(x_(i)) - (i-1)/n)
        and D = max(D+, D-).
    """
    x, u = _sorted_cdf(data, cdf)
    n = x.size
    if n == 0:
        return math.nan, math.nan, math.nan
    i = np.arange(1, n + 1, dtype=np.float64)
    d_plus = float(np.max(i / n - u))
    d_minus = float(np.max(u - (i - 1.0) / n))
    return max(d_plus, d_minus), d_plus, d_minus


def chi_squared_statistic(observed: ArrayLike, expected: ArrayLike) -> float:
    """
    sum (o - e)^2 / e over bins.

    Bins with e == 0 and o == 0 contribute nothing; e == 0 with o > 0
    makes the statistic infinite.
    """
    o = np.asarray(observed, dtype=np.float64)
    e = np.asarray(expected, dtype=np.float64)
    both_empty = (o == 0.0) & (e == 0.0)
    o, e = o[~both_empty], e[~both_empty]
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.sum((o - e) ** 2 / e))


def pp_sum_of_squares(data: ArrayLike, cdf: CDF, kind: str = "continuity1") -> float:
    """sum (F(x_(i)) - p_i)^2 with plotting positions p_i."""
    x, u = _sorted_cdf(data, cdf)
    if x.size == 0:
        return math.nan
    p = empirical_probabilities(x.size, kind)
    return float(np.sum((u - p) ** 2))


def qq_sum_of_squares(data: ArrayLike, inv_cdf: CDF, kind: str = "continuity1") -> float:
    """sum (x_(i) - F^-1(p_i))^2 with plotting positions p_i."""
    x = np.sort(np.asarray(data, dtype=np.float64).ravel())
    if x.size == 0:
        return math.nan
    q = np.asarray(inv_cdf(empirical_probabilities(x.size, kind)), dtype=np.float64)
    with np.errstate(invalid='ignore', over='ignore'):
        return float(np.sum((x - q) ** 2))


def _correlation(a: NDArray, b: NDArray) -> float:
    if a.size < 2 or not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        return math.nan
    if np.ptp(a) == 0.0 or np.ptp(b) == 0.0:
        return math.nan
    return float(np.corrcoef(a, b)[0, 1])


def pp_correlation(data: ArrayLike, cdf: CDF, kind: str = "continuity1") -> float:
    """Pearson correlation between F(x_(i)) and the plotting positions."""
    x, u = _sorted_cdf(data, cdf)
    if x.size == 0:
        return math.nan
    return _correlation(u, empirical_probabilities(x.size, kind))


def qq_correlation(data: ArrayLike, inv_cdf: CDF, kind: str = "continuity1") -> float:
    """Pearson correlation between x_(i) and F^-1(p_i)."""
    x = np.sort(np.asarray(data, dtype=np.float64).ravel())
    if x.size == 0:
        return math.nan
    q = np.asarray(inv_cdf(empirical_probabilities(x.size, kind)), dtype=np.float64)
    return _correlation(x, q)


def aic(log_likelihood: float, num_parameters: int, n: int) -> float:
    """
    Akaike information criterion with a sample-size penalty.

    AIC = (n - 2k + 2) / (n - k + 1) - 2 LL, defined only for
    n - k + 1 > 0; NaN otherwise.
    """
    k = float(num_parameters)
    denom = n - k + 1.0
    if denom <= 0.0:
        return math.nan
    return (n - 2.0 * k + 2.0) / denom - 2.0 * log_likelihood


def bic(log_likelihood: float, num_parameters: int, n: int) -> float:
    """Bayesian information criterion, k ln(n) - 2 LL."""
    return num_parameters * math.log(n) - 2.0 * log_likelihood
