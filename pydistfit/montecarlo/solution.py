"""
Solution wrapper for bootstrap results.

BootstrapSolution wraps Result[BootstrapParams] and provides per-parameter
accessors and a tabular summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pydistfit.core.exceptions import ValidationError
from pydistfit.core.result import Result
from pydistfit.montecarlo._common import BootstrapEstimate, BootstrapParams

if TYPE_CHECKING:
    from pydistfit.montecarlo.design import BootstrapDesign


@dataclass
class BootstrapSolution:
    """
    User-facing bootstrap results.

    One BootstrapEstimate per parameter: original estimate, bootstrap mean,
    bias, variance, MSE and percentile confidence interval.
    """
    _result: Result[BootstrapParams]
    _design: 'BootstrapDesign'

    # --- Replicates ---

    @property
    def t0(self) -> NDArray[np.floating[Any]]:
        """Estimates on the original sample, shape (k,)."""
        return self._result.params.t0

    @property
    def t(self) -> NDArray[np.floating[Any]]:
        """Estimates on each successful resample, shape (R_ok, k)."""
        return self._result.params.t

    @property
    def names(self) -> tuple[str, ...]:
        return self._result.params.names

    @property
    def num_samples(self) -> int:
        """Resamples drawn."""
        return self._result.params.num_requested

    @property
    def num_failed(self) -> int:
        """Resamples dropped because re-estimation failed."""
        return self._result.params.num_failed

    # --- Per-parameter summaries ---

    @property
    def estimates(self) -> tuple[BootstrapEstimate, ...]:
        return self._result.params.estimates

    def estimate(self, name: str) -> BootstrapEstimate:
        for e in self.estimates:
            if e.name == name:
                return e
        raise ValidationError(f"Unknown parameter {name!r}; available: {list(self.names)}")

    @property
    def bias(self) -> NDArray[np.floating[Any]]:
        return np.array([e.bias for e in self.estimates])

    @property
    def variance(self) -> NDArray[np.floating[Any]]:
        return np.array([e.variance for e in self.estimates])

    @property
    def mse(self) -> NDArray[np.floating[Any]]:
        return np.array([e.mse for e in self.estimates])

    @property
    def total_mse(self) -> float:
        """Sum of the per-parameter MSEs."""
        return float(np.sum(self.mse))

    @property
    def confidence_intervals(self) -> dict[str, tuple[float, float]]:
        return {e.name: e.ci for e in self.estimates}

    @property
    def level(self) -> float:
        return self._design.level

    # --- Metadata ---

    @property
    def data(self) -> NDArray:
        return self._design.data

    @property
    def label(self) -> str | None:
        return self._design.label

    @property
    def seed(self) -> int | None:
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def to_records(self) -> list[dict[str, Any]]:
        """One dict per parameter, suitable for tabular reporting."""
        records = []
        for e in self.estimates:
            row = e.to_dict()
            row['label'] = self.label
            records.append(row)
        return records

    def summary(self) -> str:
        """
        Tabular bootstrap summary.

        Produces:
            BOOTSTRAP ESTIMATES: GammaMLE

            Resamples: 399 (0 failed)

                     original       bias   std. error          MSE   95% CI
            shape     2.01234    0.01234      0.12345      0.01539   (1.8, 2.3)
        """
        lines = [f"\nBOOTSTRAP ESTIMATES: {self.label or ''}\n"]
        lines.append(f"Resamples: {self.num_samples} ({self.num_failed} failed)")
        lines.append("")
        pct = f"{self.level * 100:g}% CI"
        lines.append(
            f"{'':>14s} {'original':>12s} {'bias':>12s} {'std. error':>12s} "
            f"{'MSE':>12s}   {pct}"
        )
        for e in self.estimates:
            lines.append(
                f"{e.name:>14s} {e.original:12.5g} {e.bias:12.5g} {e.std_error:12.5g} "
                f"{e.mse:12.5g}   ({e.ci[0]:.5g}, {e.ci[1]:.5g})"
            )
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BootstrapSolution(label={self.label!r}, R={self.num_samples}, "
            f"k={len(self.names)}, failed={self.num_failed})"
        )
