"""
Delete-1 jackknife.

For a statistic theta and a sample of size n, theta_(i) is the statistic
on the sample with observation i removed and theta_(.) their average:

    bias = (n - 1) * (theta_(.) - theta)
    bias-corrected estimate = theta - bias
    se = sqrt((n - 1) / n * sum((theta_(i) - theta_(.))^2))
"""

from __future__ import annotations

import math
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pydistfit.core.exceptions import ValidationError
from pydistfit.core.validation import check_level, check_sample


class JackknifeEstimator:
    """
    Jackknife bias and standard error of a scalar statistic.

    Args:
        data: 1D sample with at least two observations.
        statistic: fn(sample) -> float. Defaults to the sample average.
    """

    def __init__(
        self,
        data: ArrayLike,
        statistic: Callable[[NDArray], float] | None = None,
    ):
        x = check_sample(data)
        if len(x) < 2:
            raise ValidationError(
                f"JackknifeEstimator: requires at least 2 observations, got {len(x)}"
            )
        self._data = x
        self._statistic = statistic if statistic is not None else np.mean
        self._original = float(self._statistic(x))
        n = len(x)
        mask = ~np.eye(n, dtype=bool)
        self._leave_one_out = np.array(
            [float(self._statistic(x[mask[i]])) for i in range(n)],
            dtype=np.float64,
        )

    @property
    def sample_size(self) -> int:
        return len(self._data)

    @property
    def original_estimate(self) -> float:
        """Statistic on the full sample."""
        return self._original

    @property
    def leave_one_out_estimates(self) -> NDArray[np.floating[Any]]:
        return self._leave_one_out.copy()

    @property
    def jackknife_estimate(self) -> float:
        """Average of the leave-one-out estimates."""
        return float(np.mean(self._leave_one_out))

    @property
    def bias(self) -> float:
        return (self.sample_size - 1.0) * (self.jackknife_estimate - self._original)

    @property
    def bias_corrected_estimate(self) -> float:
        return self._original - self.bias

    @property
    def standard_error(self) -> float:
        n = self.sample_size
        dev = self._leave_one_out - self.jackknife_estimate
        return math.sqrt((n - 1.0) / n * float(np.sum(dev * dev)))

    @property
    def pseudo_values(self) -> NDArray[np.floating[Any]]:
        """n * theta - (n - 1) * theta_(i)."""
        n = self.sample_size
        return n * self._original - (n - 1.0) * self._leave_one_out

    def confidence_interval(self, level: float = 0.95) -> tuple[float, float]:
        """Student-t interval around the jackknife estimate."""
        check_level(level)
        t = sp_stats.t.ppf(1.0 - (1.0 - level) / 2.0, self.sample_size - 1)
        center = self.jackknife_estimate
        half = t * self.standard_error
        return center - half, center + half

    def summary(self) -> str:
        lines = [
            "Jackknife",
            f"  sample size:               {self.sample_size}",
            f"  original estimate:         {self._original:.6g}",
            f"  jackknife estimate:        {self.jackknife_estimate:.6g}",
            f"  bias:                      {self.bias:.6g}",
            f"  bias-corrected estimate:   {self.bias_corrected_estimate:.6g}",
            f"  std. error:                {self.standard_error:.6g}",
        ]
        return "\n".join(lines)
