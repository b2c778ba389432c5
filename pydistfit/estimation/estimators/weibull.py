"""
Weibull estimators.

Both estimators work on y = x / max(x). The likelihood equation for the
shape is invariant under rescaling and y**a never overflows, so the only
place max(x) reappears is the scale.

References:
    Law, A.M. (2007) Simulation Modeling and Analysis, 4th ed.,
    pp. 188 and 280.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pydistfit.descriptive._quantiles import type7_quantile
from pydistfit.descriptive.statistic import StatisticSummary
from pydistfit.distributions import Family
from pydistfit.estimation._common import EstimationResult
from pydistfit.estimation.estimators._base import (
    ALL_EQUAL,
    AT_LEAST_TWO,
    ParameterEstimator,
    negative_values_message,
)
from pydistfit.montecarlo._jackknife import JackknifeEstimator
from pydistfit.rootfinding import bisection, find_interval, has_root


def initial_shape_estimate(x: NDArray) -> float:
    """
    Starting shape from the spread of ln(x).

    a0 = 1 / sqrt(6 / pi^2 * sum((ln x - mean(ln x))^2) / (n - 1))
    """
    logs = np.log(x)
    s2 = float(np.var(logs, ddof=1))
    f = math.sqrt(6.0 / (math.pi * math.pi) * s2)
    if f == 0.0:
        return math.inf
    return 1.0 / f


def estimate_scale(shape: float, x: NDArray) -> float:
    """Scale MLE given the shape: (mean(x^a))^(1/a)."""
    top = float(np.max(x))
    y = x / top
    return top * float(np.mean(y ** shape)) ** (1.0 / shape)


def parameters_from_percentiles(xp1: float, xp2: float, p1: float, p2: float) -> tuple[float, float]:
    """
    Shape and scale of the Weibull whose p1 and p2 quantiles are xp1 and xp2.

    With c = -ln(1 - p), shape = (ln c1 - ln c2) / (ln xp1 - ln xp2) and
    scale = xp1 / c1^(1/shape). Returns NaN for degenerate pairs.
    """
    if xp1 <= 0.0 or xp2 <= 0.0 or xp1 == xp2 or p1 == p2:
        return math.nan, math.nan
    c1 = -math.log1p(-p1)
    c2 = -math.log1p(-p2)
    shape = (math.log(c1) - math.log(c2)) / (math.log(xp1) - math.log(xp2))
    if shape <= 0.0:
        return math.nan, math.nan
    scale = xp1 / c1 ** (1.0 / shape)
    return shape, scale


class _ShapeEquation:
    """
    Likelihood equation for the shape and its Newton step.

        g(a) = sum(y^a ln y) / sum(y^a) - 1/a - mean(ln y)
    """

    def __init__(self, x: NDArray):
        self._lny = np.log(x / np.max(x))
        self._mean_lny = float(np.mean(self._lny))

    def _sums(self, a: float) -> tuple[float, float, float]:
        w = np.exp(a * self._lny)
        b = float(np.sum(w))
        c = float(np.sum(w * self._lny))
        h = float(np.sum(w * self._lny * self._lny))
        return b, c, h

    def __call__(self, a: float) -> float:
        if not a > 0.0:
            return math.nan
        b, c, _ = self._sums(a)
        return c / b - 1.0 / a - self._mean_lny

    def newton_step(self, a: float) -> float:
        b, c, h = self._sums(a)
        numerator = self._mean_lny + 1.0 / a - c / b
        denominator = 1.0 / (a * a) + (b * h - c * c) / (b * b)
        return a + numerator / denominator


class WeibullPercentileParameterEstimator(ParameterEstimator):
    """
    Weibull by percentile matching.

    Every lower-half percentile p is paired with every complement 1 - q;
    each pair of empirical quantiles yields a shape, and the jackknife
    bias-corrected average of those shapes is the estimate. The scale is
    the MLE given that shape.
    """

    family = Family.WEIBULL
    method = "Percentile"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)
        if stats.count <= 10:
            return self._failure(
                x, stats,
                "The percentile parameter estimation approach is not recommended "
                "with less than 10 observations",
            )
        if stats.min <= 0.0:
            return self._failure(x, stats, negative_values_message("Weibull", strict=True))

        cfg = self.config
        if stats.count < cfg.weibull_sample_size_factor:
            lower_p = np.array(cfg.weibull_reduced_percentiles)
        else:
            lower_p = np.array(cfg.weibull_expanded_percentiles)
        upper_p = 1.0 - lower_p

        sorted_x = np.sort(x)
        lower_q = type7_quantile(sorted_x, lower_p, is_sorted=True)
        upper_q = type7_quantile(sorted_x, upper_p, is_sorted=True)

        shapes = []
        for p1, q1 in zip(lower_p, lower_q):
            for p2, q2 in zip(upper_p, upper_q):
                shape, _ = parameters_from_percentiles(q1, q2, p1, p2)
                if math.isfinite(shape):
                    shapes.append(shape)
        if len(shapes) < 2:
            return self._failure(
                x, stats,
                "The percentile technique could not form enough distinct quantile pairs",
            )

        shape = JackknifeEstimator(shapes).bias_corrected_estimate
        return self._success(
            x, stats, {"shape": shape, "scale": estimate_scale(shape, x)},
            "The Weibull parameters were estimated successfully using the percentile technique",
        )


class WeibullMLEParameterEstimator(ParameterEstimator):
    """
    Weibull maximum likelihood.

    The shape is seeded with the closed-form starting value, refined by a
    fixed number of Newton steps and then polished by bisection on an
    interval around the Newton result. If Newton leaves the positive axis
    the seed is averaged with the percentile estimate instead.
    """

    family = Family.WEIBULL
    method = "MLE"
    check_range = True

    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        if stats.count < 2:
            return self._failure(x, stats, AT_LEAST_TWO)
        if stats.min <= 0.0:
            return self._failure(x, stats, negative_values_message("Weibull", strict=True))
        if stats.all_equal:
            return self._failure(x, stats, ALL_EQUAL)

        equation = _ShapeEquation(x)
        shape = self._initial_shape(x, stats, equation)
        if not (math.isfinite(shape) and shape > 0.0):
            return self._failure(
                x, stats,
                "Cannot estimate parameters.  No viable initial shape estimate could be found!",
            )

        cfg = self.config
        width = cfg.weibull_bisection_width
        lower = max(shape - width, cfg.zero_tolerance)
        upper = shape + width
        if not has_root(equation, lower, upper):
            search = find_interval(equation, lower, upper, cfg.root_finding)
            if not search.found:
                return self._failure(
                    x, stats,
                    "MLE search failed to find suitable search interval. Returned initial estimate.",
                    parameters={"shape": shape, "scale": estimate_scale(shape, x)},
                )
            lower, upper = search.lower, search.upper

        solution = bisection(equation, lower, upper, initial=shape, config=cfg.root_finding)
        shape = solution.root
        params = {"shape": shape, "scale": estimate_scale(shape, x)}
        if not solution.converged:
            return self._failure(
                x, stats,
                "MLE search failed to converge. Returned the current estimates based on failed search.",
                parameters=params,
            )
        return self._success(
            x, stats, params,
            "The Weibull parameters were estimated successfully using a MLE technique",
        )

    def _initial_shape(self, x: NDArray, stats: StatisticSummary, equation: _ShapeEquation) -> float:
        seed = initial_shape_estimate(x)
        if not (math.isfinite(seed) and seed > 0.0):
            return self._percentile_shape(x, stats)
        shape = seed
        for _ in range(self.config.weibull_newton_steps):
            shape = equation.newton_step(shape)
            if not (math.isfinite(shape) and shape > 0.0):
                break
        if math.isfinite(shape) and shape > 0.0:
            return shape
        # Newton left the positive axis
        alternative = self._percentile_shape(x, stats)
        if math.isfinite(alternative) and alternative > 0.0:
            return (seed + alternative) / 2.0
        return seed

    def _percentile_shape(self, x: NDArray, stats: StatisticSummary) -> float:
        result = WeibullPercentileParameterEstimator(self.config)._estimate(x, stats)
        if not result.is_usable:
            return math.nan
        return result.parameters["shape"]
