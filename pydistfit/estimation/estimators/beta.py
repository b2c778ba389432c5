"""
Beta-family estimators by the method of moments.

For data on [0, 1] with mean m and variance v:

    alpha = m * (m (1 - m) / v - 1)
    beta = (1 - m) * (m (1 - m) / v - 1)

The generalized beta first estimates its support [a, c] with the
order-statistic range estimate and then matches moments on that interval.
"""

from __future__ import annotations

from numpy.typing import NDArray

from pydistfit.descriptive.statistic import StatisticSummary
from pydistfit.distributions import Family
from pydistfit.estimation._common import EstimationResult
from pydistfit.estimation.estimators._base import (
    AT_LEAST_TWO,
    ParameterEstimator,
    negative_values_message,
)
from pydistfit.estimation.shift import range_estimate


class BetaMOMParameterEstimator(ParameterEstimator):

    family = Family.BETA
    method = "MOM"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min < 0.0:
            return self._failure(x, stats, negative_values_message("beta"))
        if stats.max > 1.0:
            return self._failure(
                x, stats,
                "Cannot fit beta distribution when some observations are greater than 1.0",
            )
        if stats.mean <= 0.0:
            return self._failure(x, stats, "The sample average of the data was <= 0.0")
        if stats.variance == 0.0:
            return self._failure(x, stats, "The sample variance of the data was = 0.0")
        m = stats.mean
        c = m * (1.0 - m) / stats.variance - 1.0
        alpha = m * c
        beta = (1.0 - m) * c
        if alpha <= 0.0 or beta <= 0.0:
            return self._failure(
                x, stats,
                "The estimated shape parameters were not both > 0.0",
            )
        return self._success(
            x, stats, {"alpha": alpha, "beta": beta},
            "The beta parameters were estimated successfully using a MOM technique",
        )


class GeneralizedBetaMOMParameterEstimator(ParameterEstimator):

    family = Family.GENERALIZED_BETA
    method = "MOM"

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.variance == 0.0:
            return self._failure(x, stats, "The sample variance of the data was = 0.0")
        if stats.range == 0.0:
            return self._failure(x, stats, "The sample range of the data was = 0.0")
        a, c = range_estimate(stats.min, stats.max, stats.count)
        mu = stats.mean
        s2 = stats.variance
        denominator = s2 * (c - a)
        common = a * c - a * mu - c * mu + mu * mu + s2
        alpha = (a - mu) * common / denominator
        beta = (mu - c) * common / denominator
        if alpha <= 0.0:
            return self._failure(x, stats, "The estimated alpha (first shape) value was <= 0.0")
        if beta <= 0.0:
            return self._failure(x, stats, "The estimated beta (second shape) value was <= 0.0")
        return self._success(
            x, stats, {"alpha": alpha, "beta": beta, "min": a, "max": c},
            "The generalized beta parameters were estimated successfully using a MOM technique",
        )
