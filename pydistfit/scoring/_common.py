"""
Metrics and scores.

A Metric names a goodness-of-fit measure, the interval its raw values live
in and whether bigger or smaller is better. A Score is one raw value of a
metric for one fitted distribution. Metrics are immutable: rescaling a
domain produces a new Metric with the same name and direction, and metric
identity for lookups is by name.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field, replace
from enum import Enum

from pydistfit.core.exceptions import ValidationError

MAX_VALUE = sys.float_info.max


class Direction(str, Enum):
    """Which end of a metric's domain is preferred."""
    BIGGER_IS_BETTER = "BiggerIsBetter"
    SMALLER_IS_BETTER = "SmallerIsBetter"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Metric:
    """
    A measure with a domain and a preferred direction.

    Attributes:
        name: Unique metric name.
        lower: Lower end of the domain.
        upper: Upper end of the domain.
        direction: Preferred direction.
        allow_lower_limit_adjustment: Whether the lower limit may be
            rescaled from observed scores.
        allow_upper_limit_adjustment: Whether the upper limit may be
            rescaled from observed scores.
        description: Free text.
    """
    name: str
    lower: float = 0.0
    upper: float = MAX_VALUE
    direction: Direction = Direction.SMALLER_IS_BETTER
    allow_lower_limit_adjustment: bool = True
    allow_upper_limit_adjustment: bool = True
    description: str | None = field(default=None, compare=False)

    def __post_init__(self):
        if not self.name:
            raise ValidationError("Metric: name must not be empty")
        width = self.upper - self.lower
        if not width > 0.0:
            raise ValidationError(
                f"Metric {self.name}: the width of the domain must be > 0.0, "
                f"got [{self.lower}, {self.upper}]"
            )

    @property
    def domain(self) -> tuple[float, float]:
        return self.lower, self.upper

    @property
    def bigger_is_better(self) -> bool:
        return self.direction is Direction.BIGGER_IS_BETTER

    @property
    def worst_value(self) -> float:
        """The end of the domain that scores worst."""
        return self.lower if self.bigger_is_better else self.upper

    @property
    def best_value(self) -> float:
        return self.upper if self.bigger_is_better else self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def bad_score(self) -> Score:
        """Sentinel score at the worst end of the domain, flagged invalid."""
        return Score(self, self.worst_value, valid=False)

    def score(self, value: float) -> Score:
        """
        Wrap a raw value, substituting bad_score() for non-finite or out-of-domain values.
        """
        value = float(value)
        if not math.isfinite(value) or not self.contains(value):
            return self.bad_score()
        return Score(self, value)

    def with_domain(self, lower: float, upper: float) -> Metric:
        """Copy with a different domain."""
        return replace(self, lower=float(lower), upper=float(upper))

    def __str__(self) -> str:
        return f"{self.name} [{self.lower:.6g}, {self.upper:.6g}] {self.direction.value}"


@dataclass(frozen=True)
class Score:
    """
    A raw metric value.

    Attributes:
        metric: The metric measured.
        value: Raw value within the metric's domain.
        valid: False for sentinel scores produced when the metric could not
            be computed.
    """
    metric: Metric
    value: float
    valid: bool = True

    @property
    def name(self) -> str:
        return self.metric.name

    def __str__(self) -> str:
        flag = "" if self.valid else " (invalid)"
        return f"{self.metric.name} = {self.value:.6g}{flag}"


@dataclass(frozen=True)
class EDFStatistic:
    """An EDF goodness-of-fit statistic and its upper-tail p-value."""
    name: str
    statistic: float
    p_value: float


@dataclass(frozen=True)
class ChiSquaredTest:
    """
    Chi-squared test over equal-probability bins.

    Attributes:
        statistic: sum (o - e)^2 / e.
        dof: num_bins - 1 - num_estimated_parameters.
        p_value: Upper-tail chi-squared probability (NaN when dof == 0).
        break_points: Bin boundaries, including the infinite outer limits.
        observed: Observed counts per bin.
        expected: Expected counts per bin.
    """
    statistic: float
    dof: int
    p_value: float
    break_points: tuple[float, ...]
    observed: tuple[float, ...]
    expected: tuple[float, ...]

    @property
    def num_bins(self) -> int:
        return len(self.observed)

    @property
    def num_small_expected(self) -> int:
        """Bins whose expected count is at most 5."""
        return sum(1 for e in self.expected if e <= 5.0)


@dataclass(frozen=True)
class GOFParams:
    """Parameter payload of a goodness-of-fit report."""
    distribution_name: str
    n: int
    num_estimated_parameters: int
    chi_squared: ChiSquaredTest
    ks: EDFStatistic
    anderson_darling: EDFStatistic
    cramer_von_mises: EDFStatistic
    watson: EDFStatistic

    @property
    def edf_statistics(self) -> tuple[EDFStatistic, ...]:
        return (self.ks, self.anderson_darling, self.cramer_von_mises, self.watson)
