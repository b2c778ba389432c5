"""
Histogram with arbitrary break points.

Bins are half-open, [lower, upper). Observations below the first break
point are counted as underflow and observations at or above the last break
point as overflow. When the break points start at -inf and end at +inf,
every finite observation lands in a bin and the bin counts sum to the
sample size.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydistfit.core.validation import check_sample
from pydistfit.histogram.breakpoints import normalize_break_points, recommend_break_points


class IntervalProbabilityModel(Protocol):
    """Anything that can report P(lower <= X < upper), e.g. FittedDistribution."""

    def interval_probability(self, lower: ArrayLike, upper: ArrayLike) -> NDArray:
        ...


@dataclass(frozen=True)
class HistogramBin:
    """One bin of a histogram. Bin numbers start at 1."""
    number: int
    lower: float
    upper: float
    count: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def __str__(self) -> str:
        return f"{self.number:3d} [{self.lower:g}, {self.upper:g})"


class Histogram:
    """
    Counts of observations falling into the bins defined by break points.

    Break points are sorted and de-duplicated on construction. A single
    break point b defines the two bins [-inf, b) and [b, +inf).

    Args:
        break_points: Bin boundaries.
        data: Optional observations to collect immediately.
    """

    def __init__(self, break_points: ArrayLike, data: ArrayLike | None = None):
        bp = normalize_break_points(break_points)
        if bp.size == 1:
            bp = np.array([-math.inf, bp[0], math.inf])
        self._break_points = bp
        self._counts = np.zeros(bp.size - 1, dtype=np.float64)
        self._underflow = 0.0
        self._overflow = 0.0
        if data is not None:
            self.collect(data)

    @classmethod
    def create(cls, data: ArrayLike, break_points: ArrayLike | None = None) -> Histogram:
        """Histogram of data, using recommended break points when none are given."""
        if break_points is None:
            break_points = recommend_break_points(data)
        return cls(break_points, data)

    # --- Collection ---

    def collect(self, data: ArrayLike) -> None:
        """Tally observations (a scalar or a 1D array)."""
        x = check_sample(data, "data")
        if x.size == 0:
            return
        bp = self._break_points
        idx = np.searchsorted(bp, x, side='right') - 1
        self._underflow += float(np.sum(idx < 0))
        self._overflow += float(np.sum(idx >= self.num_bins))
        inside = idx[(idx >= 0) & (idx < self.num_bins)]
        self._counts += np.bincount(inside, minlength=self.num_bins)

    def reset(self) -> None:
        self._counts[:] = 0.0
        self._underflow = 0.0
        self._overflow = 0.0

    # --- Structure ---

    @property
    def break_points(self) -> NDArray:
        return self._break_points.copy()

    @property
    def num_bins(self) -> int:
        return self._break_points.size - 1

    @property
    def lower_limits(self) -> NDArray:
        return self._break_points[:-1].copy()

    @property
    def upper_limits(self) -> NDArray:
        return self._break_points[1:].copy()

    @property
    def bins(self) -> list[HistogramBin]:
        bp = self._break_points
        return [
            HistogramBin(i + 1, float(bp[i]), float(bp[i + 1]), float(self._counts[i]))
            for i in range(self.num_bins)
        ]

    def bin_number(self, x: float) -> int:
        """
        1-based number of the bin containing x; 0 for underflow,
        num_bins + 1 for overflow.
        """
        idx = int(np.searchsorted(self._break_points, x, side='right')) - 1
        if idx < 0:
            return 0
        return min(idx, self.num_bins) + 1

    # --- Counts ---

    @property
    def bin_counts(self) -> NDArray:
        return self._counts.copy()

    @property
    def count(self) -> float:
        """Observations that landed in a bin."""
        return float(np.sum(self._counts))

    @property
    def underflow_count(self) -> float:
        return self._underflow

    @property
    def overflow_count(self) -> float:
        return self._overflow

    @property
    def total_count(self) -> float:
        """All collected observations, including underflow and overflow."""
        return self.count + self._underflow + self._overflow

    @property
    def bin_fractions(self) -> NDArray:
        """Bin counts divided by the binned count (NaN when nothing was binned)."""
        n = self.count
        if n == 0.0:
            return np.full(self.num_bins, np.nan)
        return self._counts / n

    @property
    def cumulative_bin_counts(self) -> NDArray:
        return np.cumsum(self._counts)

    @property
    def cumulative_bin_fractions(self) -> NDArray:
        n = self.count
        if n == 0.0:
            return np.full(self.num_bins, np.nan)
        return np.cumsum(self._counts) / n

    # --- Model comparisons ---

    def bin_probabilities(self, model: IntervalProbabilityModel) -> NDArray:
        """Probability mass the model assigns to each bin."""
        probs = model.interval_probability(self._break_points[:-1], self._break_points[1:])
        return np.clip(np.asarray(probs, dtype=np.float64), 0.0, 1.0)

    def expected_counts(self, model: IntervalProbabilityModel) -> NDArray:
        """bin_probabilities(model) * total_count."""
        return self.bin_probabilities(model) * self.total_count

    # --- Display ---

    def to_dict(self) -> dict[str, Any]:
        return {
            'lower': self.lower_limits.tolist(),
            'upper': self.upper_limits.tolist(),
            'count': self._counts.tolist(),
            'fraction': self.bin_fractions.tolist(),
            'cumulative_fraction': self.cumulative_bin_fractions.tolist(),
        }

    def summary(self) -> str:
        lines = [
            "Histogram",
            "-------------------------------------",
            f"Number of bins = {self.num_bins}",
            f"First bin starts at = {self._break_points[0]:g}",
            f"Last bin ends at = {self._break_points[-1]:g}",
            f"Under flow count = {self._underflow:g}",
            f"Over flow count = {self._overflow:g}",
            f"Total bin count = {self.count:g}",
            f"Total count = {self.total_count:g}",
            "-------------------------------------",
            f"{'Bin':>3s} {'Range':<24s} {'Count':>8s} {'CumTot':>8s} {'Frac':>8s} {'CumFrac':>8s}",
        ]
        n = self.count
        cum = 0.0
        for b in self.bins:
            cum += b.count
            frac = b.count / n if n > 0 else math.nan
            cfrac = cum / n if n > 0 else math.nan
            rng = f"[{b.lower:g}, {b.upper:g})"
            lines.append(
                f"{b.number:3d} {rng:<24s} {b.count:8g} {cum:8g} {frac:8.4f} {cfrac:8.4f}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Histogram(num_bins={self.num_bins}, count={self.count:g}, "
            f"underflow={self._underflow:g}, overflow={self._overflow:g})"
        )
