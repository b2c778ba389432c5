"""
Goodness-of-fit scoring models.

A scoring model maps (data, fitted distribution) to a Score of its metric.
Each model is a small strategy object: the shared contract lives in
ScoringModel and the binning every histogram-based model needs lives in
chi_squared_histogram(). Data-dependent trouble (empty data, a model that
puts no mass where the data is, parameters that cannot build a
distribution) yields the metric's bad score rather than an exception.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.config import DEFAULT_BOOTSTRAP, BootstrapConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.validation import check_sample
from pydistfit.distributions import FittedDistribution
from pydistfit.histogram import (
    Histogram,
    add_negative_infinity,
    add_positive_infinity,
    equalized_break_points,
)
from pydistfit.scoring import _statistics as st
from pydistfit.scoring._common import MAX_VALUE, Direction, Metric, Score

if TYPE_CHECKING:
    from pydistfit.estimation._common import EstimationResult

logger = logging.getLogger(__name__)


def chi_squared_histogram(data: ArrayLike, distribution: FittedDistribution) -> Histogram:
    """
    Histogram of the data over equal-probability bins of the distribution.

    The outer bins extend to -inf and +inf so every observation is counted
    and the bin probabilities sum to one.
    """
    x = check_sample(data, "data")
    bp = equalized_break_points(x.size, distribution.inv_cdf)
    bp = add_positive_infinity(add_negative_infinity(bp))
    return Histogram(bp, x)


class ScoringModel(ABC):
    """
    Base class for scoring models.

    Subclasses provide default_metric() and _compute(). The metric may be
    overridden per instance, e.g. with a rescaled domain.
    """

    def __init__(self, metric: Metric | None = None):
        self._metric = metric if metric is not None else self.default_metric()

    @classmethod
    @abstractmethod
    def default_metric(cls) -> Metric:
        ...

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def name(self) -> str:
        return self._metric.name

    @property
    def direction(self) -> Direction:
        return self._metric.direction

    def score(self, data: ArrayLike, distribution: FittedDistribution) -> Score:
        """Score a distribution against data; bad score for empty data."""
        x = check_sample(data, "data")
        if x.size == 0:
            return self._metric.bad_score()
        return self._metric.score(self._compute(x, distribution))

    def score_result(self, result: EstimationResult) -> Score:
        """
        Score an estimation result against its test data.

        The unshifted distribution is scored against the (possibly shifted)
        data it was fitted to. Results without usable parameters get the
        bad score.
        """
        if not result.is_usable:
            return self._metric.bad_score()
        try:
            distribution = result.distribution()
        except ValidationError as exc:
            logger.debug("%s: cannot build %s: %s", self.name, result.distribution_name, exc)
            return self._metric.bad_score()
        return self.score(result.test_data, distribution)

    @abstractmethod
    def _compute(self, x: NDArray, distribution: FittedDistribution) -> float:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(metric={self._metric})"


# ---------------------------------------------------------------------------
# Histogram based
# ---------------------------------------------------------------------------

class ChiSquaredScoringModel(ScoringModel):
    """Pearson chi-squared statistic over equal-probability bins."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("Chi-Squared", description="Chi-squared goodness-of-fit statistic")

    def _compute(self, x, distribution):
        h = chi_squared_histogram(x, distribution)
        return st.chi_squared_statistic(h.bin_counts, h.expected_counts(distribution))


class SquaredErrorScoringModel(ScoringModel):
    """Sum of squared differences between bin fractions and bin probabilities."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("SSE", description="Sum of squared error of the histogram fractions")

    def _compute(self, x, distribution):
        h = chi_squared_histogram(x, distribution)
        return float(np.sum((h.bin_fractions - h.bin_probabilities(distribution)) ** 2))


# ---------------------------------------------------------------------------
# Order statistics based
# ---------------------------------------------------------------------------

class AndersonDarlingScoringModel(ScoringModel):

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("Anderson-Darling", description="Anderson-Darling statistic")

    def _compute(self, x, distribution):
        return st.anderson_darling_statistic(x, distribution.cdf)


class CramerVonMisesScoringModel(ScoringModel):

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("Cramer-von Mises", description="Cramer-von Mises statistic")

    def _compute(self, x, distribution):
        return st.cramer_von_mises_statistic(x, distribution.cdf)


class WatsonScoringModel(ScoringModel):

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("Watson", description="Watson statistic")

    def _compute(self, x, distribution):
        return st.watson_statistic(x, distribution.cdf)


class KSScoringModel(ScoringModel):
    """Kolmogorov-Smirnov D, the largest vertical gap between the cdfs."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("K-S", lower=0.0, upper=1.0, description="Kolmogorov-Smirnov statistic")

    def _compute(self, x, distribution):
        return st.ks_statistic(x, distribution.cdf)[0]


class PPSSEScoringModel(ScoringModel):
    """Sum of squared error on the P-P plot, with (i - 0.5)/n plotting positions."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("PP-SSE", description="Sum of squared error of the P-P plot")

    def _compute(self, x, distribution):
        return st.pp_sum_of_squares(x, distribution.cdf)


class QQSSEScoringModel(ScoringModel):
    """Sum of squared error on the Q-Q plot, with (i - 0.5)/n plotting positions."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("QQ-SSE", description="Sum of squared error of the Q-Q plot")

    def _compute(self, x, distribution):
        return st.qq_sum_of_squares(x, distribution.inv_cdf)


class MallowsL2ScoringModel(ScoringModel):
    """Mallows L2 distance, sqrt(QQ-SSE / n)."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("Mallows-L2", description="Mallows L2 distance between quantiles")

    def _compute(self, x, distribution):
        return math.sqrt(st.qq_sum_of_squares(x, distribution.inv_cdf) / x.size)


class PPCorrelationScoringModel(ScoringModel):

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric(
            "PP-Correlation", lower=0.0, upper=1.0,
            direction=Direction.BIGGER_IS_BETTER,
            allow_lower_limit_adjustment=False, allow_upper_limit_adjustment=False,
            description="Correlation of the P-P plot",
        )

    def _compute(self, x, distribution):
        return st.pp_correlation(x, distribution.cdf)


class QQCorrelationScoringModel(ScoringModel):

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric(
            "QQ-Correlation", lower=0.0, upper=1.0,
            direction=Direction.BIGGER_IS_BETTER,
            allow_lower_limit_adjustment=False, allow_upper_limit_adjustment=False,
            description="Correlation of the Q-Q plot",
        )

    def _compute(self, x, distribution):
        return st.qq_correlation(x, distribution.inv_cdf)


# ---------------------------------------------------------------------------
# Likelihood based
# ---------------------------------------------------------------------------

class AICScoringModel(ScoringModel):
    """Akaike information criterion, (n - 2k + 2)/(n - k + 1) - 2 ln L."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("AIC", lower=-math.inf, upper=math.inf,
                      description="Akaike information criterion")

    def _compute(self, x, distribution):
        return st.aic(distribution.log_likelihood(x), distribution.num_parameters, x.size)


class BICScoringModel(ScoringModel):
    """Bayesian information criterion, k ln n - 2 ln L."""

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("BIC", lower=-math.inf, upper=math.inf,
                      description="Bayesian information criterion")

    def _compute(self, x, distribution):
        return st.bic(distribution.log_likelihood(x), distribution.num_parameters, x.size)


# ---------------------------------------------------------------------------
# Bootstrap based
# ---------------------------------------------------------------------------

class ParameterMSEScoringModel(ScoringModel):
    """
    sqrt of the total bootstrap MSE of the estimated parameters.

    The estimator that produced a result is re-run on resamples of its test
    data. When scoring a bare distribution the family's default estimator
    is used.

    Args:
        config: Bootstrap settings (number of resamples, level, seed).
        metric: Optional metric override.
    """

    def __init__(self, config: BootstrapConfig = DEFAULT_BOOTSTRAP, metric: Metric | None = None):
        super().__init__(metric)
        self._config = config

    @property
    def config(self) -> BootstrapConfig:
        return self._config

    @classmethod
    def default_metric(cls) -> Metric:
        return Metric("Parameter-MSE", description="Root of the total bootstrap parameter MSE")

    def score_result(self, result: EstimationResult) -> Score:
        if not result.is_usable or result.estimator is None or result.test_data.size == 0:
            return self._metric.bad_score()
        return self._metric.score(self._bootstrap(result.estimator, result.test_data))

    def _compute(self, x, distribution):
        from pydistfit.estimation.registry import get_estimator
        return self._bootstrap(get_estimator(distribution.family), x)

    def _bootstrap(self, estimator, x) -> float:
        from pydistfit.montecarlo.solvers import bootstrap_parameters
        c = self._config
        try:
            solution = bootstrap_parameters(
                estimator, x, num_samples=c.num_samples, level=c.level,
                seed=c.seed, n_jobs=c.n_jobs,
            )
        except ValidationError as exc:
            logger.debug("%s: bootstrap of %s failed: %s", self.name, estimator.name, exc)
            return math.nan
        return math.sqrt(solution.total_mse)


def default_scoring_models() -> list[ScoringModel]:
    """BIC, Anderson-Darling, Cramer-von Mises and Q-Q correlation."""
    return [
        BICScoringModel(),
        AndersonDarlingScoringModel(),
        CramerVonMisesScoringModel(),
        QQCorrelationScoringModel(),
    ]


def all_scoring_models(bootstrap: BootstrapConfig = DEFAULT_BOOTSTRAP) -> list[ScoringModel]:
    """One instance of every scoring model."""
    return [
        ChiSquaredScoringModel(),
        SquaredErrorScoringModel(),
        AndersonDarlingScoringModel(),
        CramerVonMisesScoringModel(),
        WatsonScoringModel(),
        KSScoringModel(),
        PPSSEScoringModel(),
        QQSSEScoringModel(),
        MallowsL2ScoringModel(),
        PPCorrelationScoringModel(),
        QQCorrelationScoringModel(),
        AICScoringModel(),
        BICScoringModel(),
        ParameterMSEScoringModel(bootstrap),
    ]
