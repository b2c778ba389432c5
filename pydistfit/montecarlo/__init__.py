"""
Bootstrap and jackknife resampling.

Usage:
    from pydistfit.montecarlo import bootstrap_parameters

    solution = bootstrap_parameters(estimation_result, num_samples=399, seed=42)
    print(solution.summary())
"""

from pydistfit.montecarlo._common import BootstrapEstimate
from pydistfit.montecarlo._jackknife import JackknifeEstimator
from pydistfit.montecarlo.design import BootstrapDesign
from pydistfit.montecarlo.solution import BootstrapSolution
from pydistfit.montecarlo.solvers import (
    bootstrap,
    bootstrap_parameters,
    bootstrap_statistic,
    confidence_interval_for_maximum,
    confidence_interval_for_minimum,
)

__all__ = [
    "BootstrapEstimate",
    "BootstrapDesign",
    "BootstrapSolution",
    "JackknifeEstimator",
    "bootstrap",
    "bootstrap_parameters",
    "bootstrap_statistic",
    "confidence_interval_for_maximum",
    "confidence_interval_for_minimum",
]
