"""
Descriptive statistics used by the estimators.

Public API:
    accumulate(sample)        - StatisticSummary in one pass
    Statistic                 - running accumulator
    type7_quantile(x, probs)  - R's default sample quantile
    empirical_probabilities   - plotting positions for order statistics
"""

from pydistfit.descriptive.statistic import Statistic, StatisticSummary, accumulate
from pydistfit.descriptive._quantiles import type7_quantile, empirical_probabilities

__all__ = [
    "Statistic",
    "StatisticSummary",
    "accumulate",
    "type7_quantile",
    "empirical_probabilities",
]
