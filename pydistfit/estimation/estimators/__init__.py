"""Per-family parameter estimators."""

from pydistfit.estimation.estimators._base import ParameterEstimator
from pydistfit.estimation.estimators.beta import (
    BetaMOMParameterEstimator,
    GeneralizedBetaMOMParameterEstimator,
)
from pydistfit.estimation.estimators.continuous import (
    ExponentialMLEParameterEstimator,
    LaplaceParameterEstimator,
    LogisticParameterEstimator,
    LognormalMLEParameterEstimator,
    NormalMLEParameterEstimator,
    TriangularParameterEstimator,
    UniformParameterEstimator,
)
from pydistfit.estimation.estimators.discrete import (
    BinomialMaxParameterEstimator,
    BinomialMOMParameterEstimator,
    NegBinomialMOMParameterEstimator,
    PoissonMLEParameterEstimator,
)
from pydistfit.estimation.estimators.gamma import (
    GammaMLEParameterEstimator,
    GammaMOMParameterEstimator,
    PearsonType5MLEParameterEstimator,
)
from pydistfit.estimation.estimators.weibull import (
    WeibullMLEParameterEstimator,
    WeibullPercentileParameterEstimator,
)

__all__ = [
    "ParameterEstimator",
    "BetaMOMParameterEstimator",
    "GeneralizedBetaMOMParameterEstimator",
    "ExponentialMLEParameterEstimator",
    "LaplaceParameterEstimator",
    "LogisticParameterEstimator",
    "LognormalMLEParameterEstimator",
    "NormalMLEParameterEstimator",
    "TriangularParameterEstimator",
    "UniformParameterEstimator",
    "BinomialMaxParameterEstimator",
    "BinomialMOMParameterEstimator",
    "NegBinomialMOMParameterEstimator",
    "PoissonMLEParameterEstimator",
    "GammaMLEParameterEstimator",
    "GammaMOMParameterEstimator",
    "PearsonType5MLEParameterEstimator",
    "WeibullMLEParameterEstimator",
    "WeibullPercentileParameterEstimator",
]
