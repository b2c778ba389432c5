"""
Design class for bootstrap resampling.

BootstrapDesign encapsulates everything the backend needs: the sample,
the function re-run on each resample, the parameter names, the number of
resamples, the confidence level and the seed. Immutable, validated at
construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.config import DEFAULT_BOOTSTRAP, BootstrapConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.validation import check_sample

if TYPE_CHECKING:
    from pydistfit.estimation.estimators._base import ParameterEstimator

# fn(sample) -> parameter vector; an empty vector marks a failed estimate
VectorEstimator = Callable[[NDArray], NDArray]


@dataclass(frozen=True)
class BootstrapDesign:
    """
    Frozen design for bootstrap resampling.

    Attributes:
        data: Original sample, shape (n,).
        estimator: fn(sample) -> parameter vector of length k, or an empty
            vector when the sample cannot be fitted.
        names: Parameter names, length k.
        config: Resample count, level, seed and worker threads.
        label: Optional description shown in summaries.
    """
    data: NDArray[np.floating[Any]]
    estimator: VectorEstimator
    names: tuple[str, ...]
    config: BootstrapConfig
    label: str | None = None

    @property
    def num_samples(self) -> int:
        return self.config.num_samples

    @property
    def level(self) -> float:
        return self.config.level

    @property
    def seed(self) -> int | None:
        return self.config.seed

    @classmethod
    def for_estimator(
        cls,
        estimator: 'ParameterEstimator',
        data: ArrayLike,
        *,
        config: BootstrapConfig = DEFAULT_BOOTSTRAP,
        label: str | None = None,
    ) -> BootstrapDesign:
        """
        Bootstrap a parameter estimator.

        Raises:
            ValidationError: If the sample is empty or invalid.
        """
        data_arr = _check_data(data)
        return cls(
            data=data_arr,
            estimator=estimator.estimate_array,
            names=tuple(estimator.parameter_names),
            config=config,
            label=label if label is not None else estimator.name,
        )

    @classmethod
    def for_statistic(
        cls,
        data: ArrayLike,
        statistic: Callable[[NDArray], float],
        *,
        name: str = "statistic",
        config: BootstrapConfig = DEFAULT_BOOTSTRAP,
        label: str | None = None,
    ) -> BootstrapDesign:
        """
        Bootstrap a scalar statistic such as the minimum.

        Raises:
            ValidationError: If the sample is empty or statistic is not callable.
        """
        data_arr = _check_data(data)
        if not callable(statistic):
            raise ValidationError(f"statistic: must be callable, got {type(statistic).__name__}")

        def vector(sample: NDArray) -> NDArray:
            return np.atleast_1d(np.asarray(statistic(sample), dtype=np.float64))

        return cls(
            data=data_arr,
            estimator=vector,
            names=(name,),
            config=config,
            label=label if label is not None else name,
        )


def _check_data(data: ArrayLike) -> NDArray:
    data_arr = check_sample(data).copy()
    if len(data_arr) < 1:
        raise ValidationError("data: must have at least 1 observation")
    return data_arr
