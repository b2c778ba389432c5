"""
Common data structures for parameter estimation.

EstimationResult is produced by every estimator and consumed by the
scoring and ranking stages. ShiftedData records a left shift applied to a
sample before fitting.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pydistfit.descriptive.statistic import StatisticSummary
from pydistfit.distributions import Family, FittedDistribution, create_distribution

if TYPE_CHECKING:
    from pydistfit.estimation.estimators._base import ParameterEstimator
    from pydistfit.montecarlo.solution import BootstrapSolution


@dataclass(frozen=True)
class ShiftedData:
    """
    A left-shifted copy of a sample.

    Invariant: data[i] == original[i] - shift. Equality and hashing use
    the shift only.
    """
    shift: float
    data: NDArray[np.floating[Any]] = field(repr=False, compare=False)

    @classmethod
    def from_original(cls, original: NDArray, shift: float) -> ShiftedData:
        return cls(shift=float(shift), data=np.asarray(original, dtype=np.float64) - shift)


@dataclass(frozen=True)
class EstimationResult:
    """
    Outcome of one estimator applied to one sample.

    Attributes:
        original_data: The sample as supplied by the caller (before any shift).
        statistics: Summary of the data the parameters were fitted to
            (the shifted data when shifted is set).
        shifted: The left shift applied before fitting, or None.
        parameters: Named parameter estimates, or None when nothing usable
            was produced. May be set even when success is False (for example
            a search that did not converge); check success before trusting it.
        success: True when the estimate is valid.
        message: Human-readable diagnostic.
        estimator: The estimator that produced this result.

    The sample itself takes no part in equality; results compare by their
    statistics, parameters, outcome and shift.
    """
    original_data: NDArray[np.floating[Any]] = field(repr=False, compare=False)
    statistics: StatisticSummary = field(repr=False)
    parameters: Mapping[str, float] | None = field(hash=False)
    success: bool
    message: str
    estimator: 'ParameterEstimator | None' = field(default=None, compare=False)
    shifted: ShiftedData | None = None

    # --- Derived views ---

    @property
    def family(self) -> Family | None:
        return None if self.estimator is None else self.estimator.family

    @property
    def estimator_name(self) -> str:
        return "" if self.estimator is None else self.estimator.name

    @property
    def shift(self) -> float:
        return 0.0 if self.shifted is None else self.shifted.shift

    @property
    def test_data(self) -> NDArray[np.floating[Any]]:
        """The data the parameters were fitted to: shifted data if present, else original."""
        if self.shifted is not None:
            return self.shifted.data
        return self.original_data

    @property
    def has_parameters(self) -> bool:
        return self.parameters is not None

    @property
    def is_usable(self) -> bool:
        """Successful and carrying parameters, i.e. ready for scoring."""
        return self.success and self.parameters is not None

    @property
    def num_parameters(self) -> int:
        return 0 if self.parameters is None else len(self.parameters)

    def parameter_dict(self) -> dict[str, float]:
        """Parameters as a plain dict (empty when there are none)."""
        return {} if self.parameters is None else dict(self.parameters)

    def parameter_array(self) -> NDArray[np.floating[Any]]:
        """Parameter values in the family's declared order."""
        if self.parameters is None:
            return np.empty(0, dtype=np.float64)
        return np.array(list(self.parameters.values()), dtype=np.float64)

    @property
    def distribution_name(self) -> str:
        """'shift + Family' when shifted, else 'Family'; '' without an estimator."""
        fam = self.family
        if fam is None:
            return ""
        if self.shifted is not None:
            return f"{self.shift:.6g} + {fam.value}"
        return fam.value

    def distribution(self, include_shift: bool = False) -> FittedDistribution | None:
        """
        The fitted distribution, or None without parameters.

        With include_shift=False the model describes test_data; with True
        it describes original_data (shift + fitted distribution).
        """
        if self.parameters is None or self.family is None:
            return None
        shift = self.shift if include_shift else 0.0
        return create_distribution(self.family, self.parameters, shift=shift)

    def with_shift(self, original_data: NDArray, shifted: ShiftedData) -> EstimationResult:
        """Copy of this result re-attached to the unshifted sample."""
        return replace(self, original_data=original_data, shifted=shifted)

    # --- Bootstrap ---

    def bootstrap(self, num_samples: int = 399, level: float = 0.95,
                  seed: int | None = None, n_jobs: int = 1) -> 'BootstrapSolution':
        """Bootstrap this result's estimator on its test data."""
        from pydistfit.montecarlo.solvers import bootstrap_parameters
        return bootstrap_parameters(
            self, num_samples=num_samples, level=level, seed=seed, n_jobs=n_jobs,
        )

    def percentile_bootstrap_ci(self, level: float = 0.95, num_samples: int = 399,
                                seed: int | None = None) -> dict[str, tuple[float, float]]:
        """Percentile bootstrap confidence interval for each parameter."""
        return self.bootstrap(num_samples=num_samples, level=level, seed=seed).confidence_intervals

    def __str__(self) -> str:
        lines = [
            f"Estimator: {self.estimator_name}",
            f"Distribution: {self.distribution_name}",
            f"Success: {self.success}",
            f"Message: {self.message}",
        ]
        if self.shifted is not None:
            lines.append(f"Shift: {self.shift:.6g}")
        if self.parameters is not None:
            params = ", ".join(f"{k}={v:.6g}" for k, v in self.parameters.items())
            lines.append(f"Parameters: {params}")
        else:
            lines.append("Parameters: None")
        return "\n".join(lines)
