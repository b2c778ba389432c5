"""
Multi-criteria ranking of fitted distributions.

Public API:
    AdditiveMODAModel      - weighted values, per-metric ranks, orderings
    LinearValueFunction    - worst -> 0, best -> 1 along a line
    LogisticValueFunction  - logistic curve fitted to observed scores
"""

from pydistfit.ranking.value_functions import (
    ValueFunction,
    LinearValueFunction,
    LogisticValueFunction,
)
from pydistfit.ranking.moda import AdditiveMODAModel

__all__ = [
    "ValueFunction",
    "LinearValueFunction",
    "LogisticValueFunction",
    "AdditiveMODAModel",
]
