"""
Histogram and binning engine.

Public API:
    Histogram                 - counts, fractions, model probabilities
    equalized_break_points    - equal-probability break points under a model
    recommend_num_intervals   - chi-squared interval count for a sample size
    add_domain_limits, add_lower_limit, add_upper_limit,
    add_negative_infinity, add_positive_infinity
    create_break_points, create_break_points_by_width, recommend_break_points
"""

from pydistfit.histogram.histogram import Histogram, HistogramBin
from pydistfit.histogram.breakpoints import (
    normalize_break_points,
    create_break_points,
    create_break_points_by_width,
    add_lower_limit,
    add_upper_limit,
    add_negative_infinity,
    add_positive_infinity,
    add_domain_limits,
    recommend_num_intervals,
    recommend_u01_break_points,
    equalized_break_points,
    recommend_break_points,
)

__all__ = [
    "Histogram",
    "HistogramBin",
    "normalize_break_points",
    "create_break_points",
    "create_break_points_by_width",
    "add_lower_limit",
    "add_upper_limit",
    "add_negative_infinity",
    "add_positive_infinity",
    "add_domain_limits",
    "recommend_num_intervals",
    "recommend_u01_break_points",
    "equalized_break_points",
    "recommend_break_points",
]
