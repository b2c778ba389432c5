"""
Percentile bootstrap confidence intervals.

CI = [Q(alpha/2), Q(1 - alpha/2)] of the bootstrap replicates, with
type-7 quantiles.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pydistfit.core.validation import check_level
from pydistfit.descriptive._quantiles import type7_quantile


def percentile_ci(replicates: NDArray, level: float) -> tuple[float, float]:
    """Percentile interval for one parameter. (NaN, NaN) without replicates."""
    check_level(level)
    t = np.asarray(replicates, dtype=np.float64)
    if t.size == 0:
        return float('nan'), float('nan')
    alpha = 1.0 - level
    lo, hi = type7_quantile(t, [alpha / 2.0, 1.0 - alpha / 2.0])
    return float(lo), float(hi)
