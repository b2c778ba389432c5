"""
Base class for parameter estimators.

Every estimator is a small immutable object: a family tag, a method label,
a range-check flag and a configuration. estimate() never raises on data
it cannot fit; the failure is reported through EstimationResult with a
message naming the precondition that failed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.config import DEFAULT_ESTIMATION, EstimationConfig
from pydistfit.descriptive.statistic import StatisticSummary, accumulate
from pydistfit.core.validation import check_sample
from pydistfit.distributions import Family
from pydistfit.estimation._common import EstimationResult

logger = logging.getLogger(__name__)

AT_LEAST_ONE = "There must be at least one observation"
AT_LEAST_TWO = "There must be at least two observations"
ALL_EQUAL = "Cannot estimate parameters.  The observations were all equal."


class ParameterEstimator(ABC):
    """
    Estimates the parameters of one distribution family from a sample.

    Subclasses set the class attributes and implement _estimate().

    Attributes:
        family: Family whose parameters are estimated.
        method: Short label for the technique ('MLE', 'MOM', ...).
        check_range: True when the family's support starts at zero, so the
            modeler should try a left shift before estimating.
    """

    family: Family
    method: str = ""
    check_range: bool = False

    def __init__(self, config: EstimationConfig = DEFAULT_ESTIMATION, name: str | None = None):
        self._config = config
        self._name = name

    @property
    def config(self) -> EstimationConfig:
        return self._config

    @property
    def name(self) -> str:
        if self._name is not None:
            return self._name
        return f"{self.family.value}{self.method}"

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return self.family.parameter_names

    def estimate(
        self,
        data: ArrayLike,
        statistics: StatisticSummary | None = None,
    ) -> EstimationResult:
        """
        Estimate the family's parameters.

        Args:
            data: 1D sample of finite values.
            statistics: Summary of exactly this sample. Computed when None.

        Returns:
            EstimationResult. success is False when the data cannot be
            fitted; parameters may still hold a fallback estimate.

        Raises:
            ValidationError: If data is non-numeric or contains NaN/Inf.
        """
        x = check_sample(data)
        stats = accumulate(x) if statistics is None else statistics
        result = self._estimate(x, stats)
        if result.success:
            logger.debug("%s: %s", self.name, result.message,
                         extra={'estimator': self.name, 'family': self.family.value})
        else:
            logger.info("%s failed: %s", self.name, result.message,
                        extra={'estimator': self.name, 'family': self.family.value})
        return result

    def estimate_array(self, data: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Parameter values in declared order, or an empty array on failure.

        This is the form the bootstrap works with.
        """
        result = self.estimate(data)
        if not result.is_usable:
            return np.empty(0, dtype=np.float64)
        return result.parameter_array()

    @abstractmethod
    def _estimate(self, x: NDArray, stats: StatisticSummary) -> EstimationResult:
        ...

    # --- Result builders ---

    def _success(self, x: NDArray, stats: StatisticSummary,
                 parameters: Mapping[str, float], message: str) -> EstimationResult:
        return EstimationResult(
            original_data=x,
            statistics=stats,
            parameters={k: float(v) for k, v in parameters.items()},
            success=True,
            message=message,
            estimator=self,
        )

    def _failure(self, x: NDArray, stats: StatisticSummary, message: str,
                 parameters: Mapping[str, float] | None = None) -> EstimationResult:
        params = None if parameters is None else {k: float(v) for k, v in parameters.items()}
        return EstimationResult(
            original_data=x,
            statistics=stats,
            parameters=params,
            success=False,
            message=message,
            estimator=self,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, check_range={self.check_range})"


def negative_values_message(family_label: str, strict: bool = False) -> str:
    """Failure message for data outside a non-negative (or positive) support."""
    if strict:
        return (
            f"Cannot fit {family_label} distribution when some observations "
            f"are less than or equal to 0.0"
        )
    return f"Cannot fit {family_label} distribution when some observations are less than 0.0"
