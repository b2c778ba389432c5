"""
Parameter estimation.

Usage:
    from pydistfit.estimation import get_estimator

    result = get_estimator("Gamma").estimate(data)
    if result.success:
        print(result.parameters)
"""

from pydistfit.estimation._common import EstimationResult, ShiftedData
from pydistfit.estimation.estimators import (
    BetaMOMParameterEstimator,
    BinomialMaxParameterEstimator,
    BinomialMOMParameterEstimator,
    ExponentialMLEParameterEstimator,
    GammaMLEParameterEstimator,
    GammaMOMParameterEstimator,
    GeneralizedBetaMOMParameterEstimator,
    LaplaceParameterEstimator,
    LogisticParameterEstimator,
    LognormalMLEParameterEstimator,
    NegBinomialMOMParameterEstimator,
    NormalMLEParameterEstimator,
    ParameterEstimator,
    PearsonType5MLEParameterEstimator,
    PoissonMLEParameterEstimator,
    TriangularParameterEstimator,
    UniformParameterEstimator,
    WeibullMLEParameterEstimator,
    WeibullPercentileParameterEstimator,
)
from pydistfit.estimation.registry import (
    all_estimators,
    discrete_estimators,
    get_estimator,
    non_restricted_estimators,
    positive_restricted_estimators,
)
from pydistfit.estimation.shift import (
    estimate_left_shift_parameter,
    left_shift_data,
    range_estimate,
)

__all__ = [
    "EstimationResult",
    "ShiftedData",
    "ParameterEstimator",
    "BetaMOMParameterEstimator",
    "BinomialMaxParameterEstimator",
    "BinomialMOMParameterEstimator",
    "ExponentialMLEParameterEstimator",
    "GammaMLEParameterEstimator",
    "GammaMOMParameterEstimator",
    "GeneralizedBetaMOMParameterEstimator",
    "LaplaceParameterEstimator",
    "LogisticParameterEstimator",
    "LognormalMLEParameterEstimator",
    "NegBinomialMOMParameterEstimator",
    "NormalMLEParameterEstimator",
    "PearsonType5MLEParameterEstimator",
    "PoissonMLEParameterEstimator",
    "TriangularParameterEstimator",
    "UniformParameterEstimator",
    "WeibullMLEParameterEstimator",
    "WeibullPercentileParameterEstimator",
    "all_estimators",
    "discrete_estimators",
    "get_estimator",
    "non_restricted_estimators",
    "positive_restricted_estimators",
    "estimate_left_shift_parameter",
    "left_shift_data",
    "range_estimate",
]
