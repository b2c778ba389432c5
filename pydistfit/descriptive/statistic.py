"""
Statistics accumulator.

Statistic collects observations one at a time or an array at a time. Each
batch is reduced to its count and central moments and merged into the
running totals with the pairwise update of Chan, Golub and LeVeque, which
is Welford's update generalized to batches. The resulting
StatisticSummary is computed once per sample and handed to every
estimator so none of them rescans the data for the basics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pydistfit.core.validation import check_sample


@dataclass(frozen=True)
class StatisticSummary:
    """
    Summary statistics of a sample.

    Attributes:
        count: Number of observations.
        mean: Sample average (NaN when empty).
        variance: Sample variance with n-1 denominator (NaN when count < 2,
            exactly 0.0 when all values are equal).
        min: Smallest observation (NaN when empty).
        max: Largest observation (NaN when empty).
        sum: Sum of the observations.
        skewness: Bias-corrected sample skewness (NaN when undefined).
        kurtosis: Bias-corrected excess kurtosis (NaN when undefined).
        lag1_correlation: Lag-1 autocorrelation (NaN when undefined).
    """
    count: int
    mean: float
    variance: float
    min: float
    max: float
    sum: float
    skewness: float = math.nan
    kurtosis: float = math.nan
    lag1_correlation: float = math.nan

    @property
    def std_dev(self) -> float:
        """Sample standard deviation."""
        if math.isnan(self.variance):
            return math.nan
        return math.sqrt(self.variance)

    @property
    def range(self) -> float:
        """max - min."""
        return self.max - self.min

    @property
    def all_equal(self) -> bool:
        """True when there is at least one observation and min == max."""
        return self.count > 0 and self.min == self.max

    def to_dict(self) -> dict[str, Any]:
        return {
            'count': self.count,
            'mean': self.mean,
            'variance': self.variance,
            'std_dev': self.std_dev,
            'min': self.min,
            'max': self.max,
            'sum': self.sum,
            'skewness': self.skewness,
            'kurtosis': self.kurtosis,
            'lag1_correlation': self.lag1_correlation,
        }


class Statistic:
    """
    Running accumulator for summary statistics.

    Usage:
        stat = Statistic()
        stat.collect(values)
        stat.collect(42.0)
        summary = stat.summary()
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Forget every collected observation."""
        self._n = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._m3 = 0.0
        self._m4 = 0.0
        self._sum = 0.0
        self._min = math.inf
        self._max = -math.inf
        self._first = math.nan
        self._last = math.nan
        self._sum_xy = 0.0

    @property
    def count(self) -> int:
        return self._n

    def collect(self, values: ArrayLike | float) -> None:
        """Collect a single value or every value of a 1D array, in order."""
        x = check_sample(values, "values")
        nb = len(x)
        if nb == 0:
            return

        mean_b = float(np.mean(x))
        dev = x - mean_b
        m2_b = float(np.sum(dev ** 2))
        m3_b = float(np.sum(dev ** 3))
        m4_b = float(np.sum(dev ** 4))

        na = self._n
        n = na + nb
        delta = mean_b - self._mean
        m2_a, m3_a = self._m2, self._m3

        self._m4 += (
            m4_b
            + delta ** 4 * na * nb * (na * na - na * nb + nb * nb) / n ** 3
            + 6.0 * delta ** 2 * (na * na * m2_b + nb * nb * m2_a) / n ** 2
            + 4.0 * delta * (na * m3_b - nb * m3_a) / n
        )
        self._m3 += (
            m3_b
            + delta ** 3 * na * nb * (na - nb) / n ** 2
            + 3.0 * delta * (na * m2_b - nb * m2_a) / n
        )
        self._m2 += m2_b + delta ** 2 * na * nb / n
        self._mean += delta * nb / n
        self._n = n

        self._sum += float(np.sum(x))
        self._min = min(self._min, float(np.min(x)))
        self._max = max(self._max, float(np.max(x)))

        # lag-1 cross products, including the seam with the previous batch
        if na == 0:
            self._first = float(x[0])
        else:
            self._sum_xy += self._last * float(x[0])
        self._sum_xy += float(np.sum(x[:-1] * x[1:]))
        self._last = float(x[-1])

    def summary(self) -> StatisticSummary:
        """Snapshot the collected statistics."""
        n = self._n
        if n == 0:
            return StatisticSummary(
                count=0, mean=math.nan, variance=math.nan,
                min=math.nan, max=math.nan, sum=0.0,
            )

        if self._min == self._max:
            return StatisticSummary(
                count=n, mean=self._min, variance=0.0 if n > 1 else math.nan,
                min=self._min, max=self._max, sum=self._sum,
            )

        return StatisticSummary(
            count=n,
            mean=self._mean,
            variance=self._m2 / (n - 1) if n > 1 else math.nan,
            min=self._min,
            max=self._max,
            sum=self._sum,
            skewness=self._skewness(),
            kurtosis=self._kurtosis(),
            lag1_correlation=self._lag1_correlation(),
        )

    def _skewness(self) -> float:
        n = self._n
        if n < 3 or self._m2 <= 0.0:
            return math.nan
        g1 = math.sqrt(n) * self._m3 / self._m2 ** 1.5
        return g1 * math.sqrt(n * (n - 1)) / (n - 2)

    def _kurtosis(self) -> float:
        n = self._n
        if n < 4 or self._m2 <= 0.0:
            return math.nan
        g2 = n * self._m4 / (self._m2 * self._m2) - 3.0
        return ((n + 1) * g2 + 6.0) * (n - 1) / ((n - 2) * (n - 3))

    def _lag1_correlation(self) -> float:
        n = self._n
        if n < 2 or self._m2 <= 0.0:
            return math.nan
        mean = self._mean
        head = self._sum - self._last
        tail = self._sum - self._first
        c1 = (self._sum_xy - mean * (head + tail) + (n - 1) * mean * mean) / n
        c0 = self._m2 / n
        return c1 / c0


def accumulate(sample: ArrayLike) -> StatisticSummary:
    """
    Summarize a sample.

    Degenerate inputs (empty, a single value, all values equal) never raise;
    the summary reports NaN or 0.0 variance as appropriate and estimators
    decide what to do with it.
    """
    stat = Statistic()
    stat.collect(sample)
    return stat.summary()
