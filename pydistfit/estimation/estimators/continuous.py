"""
Closed-form estimators for continuous families.

Exponential, Normal and Lognormal use maximum likelihood; Uniform and
Triangular estimate their support from the order statistics; Logistic and
Laplace match location and spread.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pydistfit.descriptive.statistic import StatisticSummary
from pydistfit.distributions import Family
from pydistfit.estimation._common import EstimationResult
from pydistfit.estimation.estimators._base import (
    ALL_EQUAL,
    AT_LEAST_ONE,
    AT_LEAST_TWO,
    ParameterEstimator,
    negative_values_message,
)
from pydistfit.estimation.shift import range_estimate


class ExponentialMLEParameterEstimator(ParameterEstimator):
    """Exponential MLE: mean = sample average."""

    family = Family.EXPONENTIAL
    method = "MLE"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 1:
            return self._failure(x, stats, AT_LEAST_ONE)
        if stats.min < 0.0:
            return self._failure(x, stats, negative_values_message("exponential"))
        if stats.mean <= 0.0:
            return self._failure(x, stats, "The sample average of the data was <= 0.0")
        return self._success(
            x, stats, {"mean": stats.mean},
            "The exponential parameters were estimated successfully using a MLE technique",
        )


class NormalMLEParameterEstimator(ParameterEstimator):
    """Normal MLE: sample mean and sample variance."""

    family = Family.NORMAL
    method = "MLE"

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        return self._success(
            x, stats, {"mean": stats.mean, "variance": stats.variance},
            "The normal parameters were estimated successfully using a MLE technique",
        )


class LognormalMLEParameterEstimator(ParameterEstimator):
    """
    Lognormal MLE.

    Fits a normal to ln(x) and converts (mu, sigma^2) back to the mean and
    variance of the lognormal:

        mean = exp(mu + sigma^2 / 2)
        variance = exp(2 mu + sigma^2) (exp(sigma^2) - 1)
    """

    family = Family.LOGNORMAL
    method = "MLE"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min <= 0.0:
            return self._failure(x, stats, negative_values_message("lognormal", strict=True))
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        logs = np.log(x)
        mu = float(np.mean(logs))
        sigma2 = float(np.var(logs, ddof=1))
        mean = math.exp(mu + sigma2 / 2.0)
        variance = math.exp(2.0 * mu + sigma2) * math.expm1(sigma2)
        return self._success(
            x, stats, {"mean": mean, "variance": variance},
            "The lognormal parameters were estimated successfully using a MLE technique",
        )


class UniformParameterEstimator(ParameterEstimator):
    """Uniform support from the minimum unbiased order-statistic estimators."""

    family = Family.UNIFORM

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        a, b = range_estimate(stats.min, stats.max, stats.count)
        return self._success(
            x, stats, {"min": a, "max": b},
            "The uniform parameters were estimated successfully.",
        )


class TriangularParameterEstimator(ParameterEstimator):
    """
    Triangular support as for the uniform; the mode matches the mean.

    The mean of a triangular distribution is (a + c + b) / 3, so
    c = 3 * mean - a - b, clamped into [a, b].
    """

    family = Family.TRIANGULAR

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        a, b = range_estimate(stats.min, stats.max, stats.count)
        c = min(max(3.0 * stats.mean - a - b, a), b)
        return self._success(
            x, stats, {"min": a, "mode": c, "max": b},
            "The triangular parameters were estimated successfully.",
        )


class LogisticParameterEstimator(ParameterEstimator):
    """Logistic by moments: location = mean, scale = s * sqrt(3) / pi."""

    family = Family.LOGISTIC
    method = "MOM"

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        scale = stats.std_dev * math.sqrt(3.0) / math.pi
        return self._success(
            x, stats, {"location": stats.mean, "scale": scale},
            "The logistic parameters were estimated successfully using a MOM technique",
        )


class LaplaceParameterEstimator(ParameterEstimator):
    """Laplace MLE: location = median, scale = mean absolute deviation from the median."""

    family = Family.LAPLACE
    method = "MLE"

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        location = float(np.median(x))
        scale = float(np.mean(np.abs(x - location)))
        return self._success(
            x, stats, {"location": location, "scale": scale},
            "The Laplace parameters were estimated successfully using a MLE technique",
        )
