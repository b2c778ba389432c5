"""
Left-shift estimation.

Distributions such as the exponential, gamma and Weibull have support
starting at zero. When a sample is clearly bounded away from zero, fitting
works better on the data moved left by an estimated shift.

The estimator is the order-statistic method of Law (2007), p. 360:

    shift = (x(1) * x(n) - x(k)^2) / (x(1) + x(n) - 2 * x(k))

where x(k) is the smallest observation strictly greater than x(1). It is
a best-effort heuristic: whenever the preconditions fail it returns 0.0
rather than raising.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike

from pydistfit.core.config import DEFAULT_ESTIMATION
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.validation import check_positive, check_sample
from pydistfit.estimation._common import ShiftedData

logger = logging.getLogger(__name__)


def estimate_left_shift_parameter(
    data: ArrayLike,
    tolerance: float = DEFAULT_ESTIMATION.zero_tolerance,
) -> float:
    """
    Estimate a left shift for the sample.

    Returns 0.0 (no shift) when there are fewer than three observations,
    any observation is negative, the minimum is zero, all observations are
    equal, or the second distinct value is the maximum. A computed shift
    below tolerance, or one that would move the minimum below zero, is
    also reported as 0.0.

    Args:
        data: 1D sample.
        tolerance: Shifts smaller than this are treated as no shift.

    Returns:
        The shift, a value in [tolerance, min(data)) or exactly 0.0.
    """
    check_positive(tolerance, "tolerance")
    x = check_sample(data)
    if len(x) < 3:
        return 0.0
    lo = float(np.min(x))
    hi = float(np.max(x))
    if lo <= 0.0 or lo == hi:
        return 0.0
    xk = float(np.min(x[x > lo]))
    if xk == hi:
        return 0.0

    top = lo * hi - xk * xk
    bottom = lo + hi - 2.0 * xk
    if top == 0.0 or bottom == 0.0:
        return 0.0
    shift = top / bottom
    if shift < tolerance or shift >= lo:
        return 0.0
    logger.debug("estimated left shift %g (min=%g, x(k)=%g, max=%g)", shift, lo, xk, hi)
    return shift


def left_shift_data(
    data: ArrayLike,
    tolerance: float = DEFAULT_ESTIMATION.zero_tolerance,
) -> ShiftedData:
    """Estimate the left shift and subtract it from every observation."""
    x = check_sample(data)
    shift = estimate_left_shift_parameter(x, tolerance)
    return ShiftedData.from_original(x, shift)


def range_estimate(minimum: float, maximum: float, n: int) -> tuple[float, float]:
    """
    Estimate the support [a, b] of a bounded sample.

    Minimum unbiased estimators based on the order statistics (Castillo and
    Hadi, 1995): a = min - r/(n-1), b = max + r/(n-1) with r = max - min.
    The estimated limits always lie strictly outside the observed range.

    Raises:
        ValidationError: If n < 2 or minimum >= maximum.
    """
    if n < 2:
        raise ValidationError(f"range_estimate: there must be at least two observations, got {n}")
    if not minimum < maximum:
        raise ValidationError(
            f"range_estimate: the minimum must be strictly less than the maximum, "
            f"got ({minimum}, {maximum})"
        )
    r = maximum - minimum
    return minimum - r / (n - 1.0), maximum + r / (n - 1.0)
