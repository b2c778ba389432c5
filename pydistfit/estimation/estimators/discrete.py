"""
Estimators for the discrete families.

All three families live on the non-negative integers; the data are
expected to be integer-valued but only the sign is checked.
"""

from __future__ import annotations

import math

from numpy.typing import NDArray

from pydistfit.descriptive.statistic import StatisticSummary
from pydistfit.distributions import Family
from pydistfit.estimation._common import EstimationResult
from pydistfit.estimation.estimators._base import (
    AT_LEAST_ONE,
    AT_LEAST_TWO,
    ParameterEstimator,
    negative_values_message,
)
from pydistfit.estimation.shift import range_estimate


class BinomialMOMParameterEstimator(ParameterEstimator):
    """Binomial by moments: p = 1 - var/mean, n = round(mean / p)."""

    family = Family.BINOMIAL
    method = "MOM"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min < 0.0:
            return self._failure(x, stats, negative_values_message("binomial"))
        if stats.mean <= 0.0:
            return self._failure(x, stats, "The sample average of the data was <= 0.0")
        if stats.mean <= stats.variance:
            return self._failure(
                x, stats, "Cannot match moments when sample average <= sample variance",
            )
        p = 1.0 - stats.variance / stats.mean
        n = max(round(stats.mean / p), 1)
        return self._success(
            x, stats, {"probOfSuccess": p, "numTrials": float(n)},
            "The binomial parameters were estimated successfully using a MOM technique",
        )


class BinomialMaxParameterEstimator(ParameterEstimator):
    """
    Binomial with the number of trials from the sample maximum.

    n = ceil(b), where b is the upper order-statistic range estimate, and
    p = mean / n.
    """

    family = Family.BINOMIAL
    method = "Max"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min < 0.0:
            return self._failure(x, stats, negative_values_message("binomial"))
        if stats.all_equal:
            return self._failure(x, stats, "Cannot estimate parameters.  The observations were all equal.")
        if stats.mean <= 0.0:
            return self._failure(x, stats, "The sample average of the data was <= 0.0")
        _, upper = range_estimate(stats.min, stats.max, stats.count)
        n = max(math.ceil(upper), 1)
        p = min(stats.mean / n, 1.0)
        return self._success(
            x, stats, {"probOfSuccess": p, "numTrials": float(n)},
            "The binomial parameters were estimated successfully using the sample maximum",
        )


class NegBinomialMOMParameterEstimator(ParameterEstimator):
    """Negative binomial by moments: p = mean/var, r = mean^2 / (var - mean)."""

    family = Family.NEGATIVE_BINOMIAL
    method = "MOM"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min < 0.0:
            return self._failure(x, stats, negative_values_message("negative binomial"))
        if stats.mean <= 0.0:
            return self._failure(x, stats, "The sample average of the data was <= 0.0")
        if stats.variance <= 0.0:
            return self._failure(x, stats, "The sample variance of the data was <= 0.0")
        if stats.variance <= stats.mean:
            return self._failure(
                x, stats, "Cannot match moments when sample variance <= sample average",
            )
        mean, var = stats.mean, stats.variance
        return self._success(
            x, stats,
            {"probOfSuccess": mean / var, "numSuccesses": mean * mean / (var - mean)},
            "The negative binomial parameters were estimated successfully using a MOM technique",
        )


class PoissonMLEParameterEstimator(ParameterEstimator):
    """Poisson MLE: mean = sample average."""

    family = Family.POISSON
    method = "MLE"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 1:
            return self._failure(x, stats, AT_LEAST_ONE)
        if stats.min < 0.0:
            return self._failure(x, stats, negative_values_message("Poisson"))
        if stats.mean <= 0.0:
            return self._failure(x, stats, "The sample average of the data was = 0.0")
        return self._success(
            x, stats, {"mean": stats.mean},
            "The Poisson parameters were estimated successfully using a MLE technique",
        )
