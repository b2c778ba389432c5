"""
Gamma-family estimators.

The method-of-moments fit is closed form. The maximum likelihood shape
solves

    ln(mean / alpha) + digamma(alpha) - mean(ln x) = 0

by bisection, seeded with the moment estimate; scale = mean / alpha. When
no bracket or no convergence is achieved the moment estimate is returned
with a message saying so. The Pearson type V fit is the gamma MLE applied
to 1/x.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

import numpy as np
from numpy.typing import NDArray
from scipy import special

from pydistfit.descriptive.statistic import StatisticSummary, accumulate
from pydistfit.distributions import Family
from pydistfit.estimation._common import EstimationResult
from pydistfit.estimation.estimators._base import (
    AT_LEAST_TWO,
    ParameterEstimator,
    negative_values_message,
)
from pydistfit.rootfinding import bisection, find_interval, has_root

logger = logging.getLogger(__name__)

NO_INTERVAL = "MLE search failed to find suitable search interval. the MOM estimator was returned."
NO_CONVERGENCE = "MLE search failed to converge. The MOM estimator was returned."


def gamma_parameters_from_moments(mean: float, variance: float) -> tuple[float, float]:
    """(shape, scale) with shape * scale = mean and shape * scale^2 = variance."""
    return mean * mean / variance, variance / mean


def gamma_mom_estimate(
    estimator: ParameterEstimator,
    x: NDArray,
    stats: StatisticSummary,
) -> EstimationResult:
    """Method-of-moments gamma fit, reported on behalf of estimator."""
    if stats.count < 2:
        return estimator._failure(x, stats, AT_LEAST_TWO)
    if stats.min < 0.0:
        return estimator._failure(x, stats, negative_values_message("gamma"))
    if stats.mean <= 0.0:
        return estimator._failure(x, stats, "The sample average of the data was <= 0.0")
    if not stats.variance > 0.0:
        return estimator._failure(x, stats, "The sample variance of the data was <= 0.0")
    shape, scale = gamma_parameters_from_moments(stats.mean, stats.variance)
    return estimator._success(
        x, stats, {"shape": shape, "scale": scale},
        "The gamma parameters were estimated successfully using a MOM technique",
    )


class GammaMOMParameterEstimator(ParameterEstimator):
    """Gamma by matching the sample mean and variance."""

    family = Family.GAMMA
    method = "MOM"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        return gamma_mom_estimate(self, x, stats)


class GammaMLEParameterEstimator(ParameterEstimator):
    """Gamma maximum likelihood, falling back to the moment estimate."""

    family = Family.GAMMA
    method = "MLE"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        start = gamma_mom_estimate(self, x, stats)
        if not start.success:
            return start
        shape0 = start.parameters["shape"]
        mean = stats.mean
        with np.errstate(divide='ignore'):
            rhs = float(np.mean(np.log(x)))
        cfg = self.config
        tol = cfg.zero_tolerance

        def score(alpha: float) -> float:
            with np.errstate(divide='ignore', invalid='ignore'):
                return float(np.log(mean / alpha) + special.digamma(alpha) - rhs)

        lower, upper = self._initial_interval(shape0)
        if not has_root(score, lower, upper):
            search = find_interval(score, lower, upper, cfg.root_finding)
            if not search.found:
                return _with_message(start, NO_INTERVAL)
            lower, upper = search.lower, search.upper
            if lower <= 0.0:
                lower = tol
                if not has_root(score, lower, upper):
                    return _with_message(start, NO_INTERVAL)

        initial = shape0 if lower < shape0 < upper else None
        solution = bisection(score, lower, upper, initial=initial, config=cfg.root_finding)
        if not solution.converged:
            return _with_message(start, NO_CONVERGENCE)
        alpha = solution.root
        return self._success(
            x, stats, {"shape": alpha, "scale": mean / alpha},
            "The gamma parameters were estimated successfully using a MLE technique",
        )

    def _initial_interval(self, shape: float) -> tuple[float, float]:
        # rough prediction interval on the shape with the scale held fixed
        factor = self.config.gamma_interval_factor
        half_width = factor * math.sqrt(shape)
        lower = shape - half_width
        upper = shape + half_width
        if lower <= 0.0:
            lower = self.config.zero_tolerance / 10.0
        while lower >= upper:
            upper += factor
        return lower, upper


class PearsonType5MLEParameterEstimator(ParameterEstimator):
    """
    Pearson type V maximum likelihood.

    If X is Pearson type V(shape, scale) then 1/X is gamma(shape, 1/scale),
    so the gamma MLE on the reciprocals gives both parameters.
    """

    family = Family.PEARSON_TYPE5
    method = "MLE"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min <= 0.0:
            return self._failure(x, stats, negative_values_message("Pearson type 5", strict=True))
        inverse = 1.0 / x
        gamma_fit = GammaMLEParameterEstimator(self.config).estimate(inverse, accumulate(inverse))
        if not gamma_fit.success:
            return self._failure(
                x, stats,
                "The parameters were not estimated successfully using a MLE technique",
            )
        return self._success(
            x, stats,
            {"shape": gamma_fit.parameters["shape"], "scale": 1.0 / gamma_fit.parameters["scale"]},
            "The Pearson Type 5 parameters were estimated successfully using a MLE technique",
        )


def _with_message(result: EstimationResult, message: str) -> EstimationResult:
    logger.debug("gamma MLE fallback: %s", message)
    return replace(result, message=message)
