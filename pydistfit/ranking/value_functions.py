"""
Value functions.

A value function maps a raw score of one metric onto the common [0, 1]
desirability scale: the worst end of the metric's domain maps to 0 and the
best end to 1. Values are clipped to [0, 1]; invalid scores are the
caller's concern (the ranking model gives them 0).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.exceptions import ValidationError
from pydistfit.descriptive import type7_quantile
from pydistfit.scoring._common import Metric


class ValueFunction(ABC):
    """Maps raw scores of a metric to [0, 1]."""

    def __init__(self, metric: Metric):
        self._metric = metric

    @property
    def metric(self) -> Metric:
        return self._metric

    @abstractmethod
    def value(self, x: float) -> float:
        ...

    def values(self, x: ArrayLike) -> NDArray:
        return np.array([self.value(float(v)) for v in np.asarray(x, dtype=np.float64).ravel()])


class LinearValueFunction(ValueFunction):
    """
    Straight line through (worst, 0) and (best, 1).

    When the metric's domain is unbounded (its limits could not be
    rescaled) every in-domain score has value 1.
    """

    def value(self, x: float) -> float:
        m = self._metric
        if math.isnan(x):
            return 0.0
        width = m.upper - m.lower
        if not math.isfinite(width):
            return 1.0 if m.contains(x) else 0.0
        if m.bigger_is_better:
            v = (x - m.lower) / width
        else:
            v = (m.upper - x) / width
        return min(max(v, 0.0), 1.0)

    def __repr__(self) -> str:
        return f"LinearValueFunction({self._metric})"


class LogisticValueFunction(ValueFunction):
    """
    Logistic curve centred on a location.

    For smaller-is-better metrics v(x) = 1 / (1 + exp((x - location) / scale));
    the sign flips for bigger-is-better metrics. A scale of zero gives a
    step at the location.

    Args:
        metric: The metric scored.
        location: Score with value 0.5.
        scale: Positive spread, or 0.0 for a step.
    """

    def __init__(self, metric: Metric, location: float, scale: float):
        super().__init__(metric)
        if not math.isfinite(location):
            raise ValidationError(f"location: must be finite, got {location}")
        if not (math.isfinite(scale) and scale >= 0.0):
            raise ValidationError(f"scale: must be finite and >= 0, got {scale}")
        self._location = float(location)
        self._scale = float(scale)

    @classmethod
    def from_scores(
        cls,
        metric: Metric,
        scores: Sequence[float] | ArrayLike,
        factor: float = 0.25,
    ) -> LogisticValueFunction:
        """
        Fit the curve to observed scores.

        The location is the median. The scale makes the factor and
        1 - factor quantiles of the scores map to values f and 1 - f
        (which end gets which follows the metric's direction).
        """
        if not 0.0 < factor < 0.5:
            raise ValidationError(f"factor: must be in (0, 0.5), got {factor}")
        x = np.asarray(scores, dtype=np.float64).ravel()
        x = x[np.isfinite(x)]
        if x.size == 0:
            raise ValidationError(f"{metric.name}: no finite scores to fit a logistic value function")
        lo, med, hi = type7_quantile(x, [factor, 0.5, 1.0 - factor])
        scale = (hi - lo) / (2.0 * math.log((1.0 - factor) / factor))
        return cls(metric, float(med), float(scale))

    @property
    def location(self) -> float:
        return self._location

    @property
    def scale(self) -> float:
        return self._scale

    def value(self, x: float) -> float:
        if math.isnan(x):
            return 0.0
        z = x - self._location
        if not self._metric.bigger_is_better:
            z = -z
        if self._scale == 0.0:
            return 0.5 if z == 0.0 else float(z > 0.0)
        z /= self._scale
        # numerically stable logistic
        if z >= 0.0:
            return 1.0 / (1.0 + math.exp(-z))
        e = math.exp(z)
        return e / (1.0 + e)

    def __repr__(self) -> str:
        return (
            f"LogisticValueFunction({self._metric.name}, location={self._location:.6g}, "
            f"scale={self._scale:.6g})"
        )
