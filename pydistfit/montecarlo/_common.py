"""
Common data structures for bootstrap resampling.

BootstrapParams is the payload wrapped by Result[P]; BootstrapEstimate is
the per-parameter summary exposed through BootstrapSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class BootstrapEstimate:
    """
    Bootstrap summary of one parameter.

    Attributes:
        name: Parameter name.
        original: Estimate on the original sample.
        mean: Average over the successful resamples.
        bias: mean - original.
        variance: Variance over the successful resamples (n-1 denominator).
        mse: variance + bias^2.
        ci: Percentile confidence interval (lower, upper).
        level: Confidence level of ci.
        num_samples: Successful resamples the summary is based on.
    """
    name: str
    original: float
    mean: float
    bias: float
    variance: float
    mse: float
    ci: tuple[float, float]
    level: float
    num_samples: int

    @property
    def std_error(self) -> float:
        return float(np.sqrt(self.variance))

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'original': self.original,
            'mean': self.mean,
            'bias': self.bias,
            'variance': self.variance,
            'std_error': self.std_error,
            'mse': self.mse,
            'ci_lower': self.ci[0],
            'ci_upper': self.ci[1],
            'level': self.level,
            'num_samples': self.num_samples,
        }


@dataclass(frozen=True)
class BootstrapParams:
    """
    Parameter payload for bootstrap results.

    - t0: estimates on the original sample, shape (k,)
    - t: estimates on each successful resample, shape (R_ok, k)
    - names: parameter names, length k
    - num_requested / num_failed: resamples drawn and resamples dropped
      because the estimator produced no usable estimate
    """
    t0: NDArray[np.floating[Any]]
    t: NDArray[np.floating[Any]]
    names: tuple[str, ...]
    num_requested: int
    num_failed: int
    estimates: tuple[BootstrapEstimate, ...]
