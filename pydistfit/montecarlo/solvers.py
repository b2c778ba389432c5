"""
Solver dispatch for bootstrap resampling.

bootstrap_parameters() re-runs a parameter estimator on resamples of its
data; bootstrap_statistic() does the same for any scalar statistic. The
interval helpers for the sample minimum and maximum drive the automatic
left shift in the modeler.
"""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.config import BootstrapConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.montecarlo.backends.cpu import CPUBootstrapBackend
from pydistfit.montecarlo.design import BootstrapDesign
from pydistfit.montecarlo.solution import BootstrapSolution

if TYPE_CHECKING:
    from pydistfit.estimation._common import EstimationResult
    from pydistfit.estimation.estimators._base import ParameterEstimator


def _get_backend(backend: str = 'cpu'):
    if backend in ('cpu', 'auto'):
        return CPUBootstrapBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def bootstrap(design: BootstrapDesign, *, backend: str = 'cpu') -> BootstrapSolution:
    """Run a prepared BootstrapDesign."""
    result = _get_backend(backend).solve(design)
    return BootstrapSolution(_result=result, _design=design)


def bootstrap_parameters(
    source: 'EstimationResult | ParameterEstimator',
    data: ArrayLike | None = None,
    *,
    num_samples: int = 399,
    level: float = 0.95,
    seed: int | None = None,
    n_jobs: int = 1,
    backend: str = 'cpu',
) -> BootstrapSolution:
    """
    Bootstrap a parameter estimator.

    Parameters
    ----------
    source : EstimationResult or ParameterEstimator
        An estimation result (its estimator is re-run on resamples of its
        test data, i.e. the shifted data when a shift was applied) or an
        estimator, in which case data is required.
    data : array-like, optional
        Sample to resample. Overrides the result's test data.
    num_samples : int
        Number of resamples. Default 399.
    level : float
        Confidence level of the percentile intervals. Default 0.95.
    seed : int or None
        Seed for the resampling streams.
    n_jobs : int
        Worker threads for the resample loop.

    Returns
    -------
    BootstrapSolution

    Raises
    ------
    ValidationError
        If no data is available, the result has no estimator, or the
        estimator fails on the original sample.
    """
    from pydistfit.estimation._common import EstimationResult

    if isinstance(source, EstimationResult):
        if source.estimator is None:
            raise ValidationError("bootstrap_parameters: the estimation result has no estimator")
        estimator = source.estimator
        sample = source.test_data if data is None else data
    else:
        estimator = source
        if data is None:
            raise ValidationError("bootstrap_parameters: data is required with an estimator")
        sample = data

    config = BootstrapConfig(num_samples=num_samples, level=level, seed=seed, n_jobs=n_jobs)
    design = BootstrapDesign.for_estimator(estimator, sample, config=config)
    return bootstrap(design, backend=backend)


def bootstrap_statistic(
    data: ArrayLike,
    statistic: Callable[[NDArray], float],
    *,
    name: str = "statistic",
    num_samples: int = 399,
    level: float = 0.95,
    seed: int | None = None,
    n_jobs: int = 1,
    backend: str = 'cpu',
) -> BootstrapSolution:
    """Bootstrap a scalar statistic of a sample."""
    config = BootstrapConfig(num_samples=num_samples, level=level, seed=seed, n_jobs=n_jobs)
    design = BootstrapDesign.for_statistic(data, statistic, name=name, config=config)
    return bootstrap(design, backend=backend)


def confidence_interval_for_minimum(
    data: ArrayLike,
    num_samples: int = 399,
    level: float = 0.95,
    seed: int | None = None,
) -> tuple[float, float]:
    """Percentile bootstrap interval for the sample minimum."""
    solution = bootstrap_statistic(
        data, np.min, name="minimum", num_samples=num_samples, level=level, seed=seed,
    )
    return solution.estimates[0].ci


def confidence_interval_for_maximum(
    data: ArrayLike,
    num_samples: int = 399,
    level: float = 0.95,
    seed: int | None = None,
) -> tuple[float, float]:
    """Percentile bootstrap interval for the sample maximum."""
    solution = bootstrap_statistic(
        data, np.max, name="maximum", num_samples=num_samples, level=level, seed=seed,
    )
    return solution.estimates[0].ci
