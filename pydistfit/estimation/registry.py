"""
Estimator registry.

Maps each family to the estimator the modeler uses for it by default and
defines the standard estimator sets.
"""

from __future__ import annotations

from pydistfit.core.config import DEFAULT_ESTIMATION, EstimationConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.distributions import Family, resolve_family
from pydistfit.estimation.estimators import (
    BetaMOMParameterEstimator,
    BinomialMOMParameterEstimator,
    ExponentialMLEParameterEstimator,
    GammaMLEParameterEstimator,
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
)

_DEFAULT_ESTIMATORS: dict[Family, type[ParameterEstimator]] = {
    Family.EXPONENTIAL: ExponentialMLEParameterEstimator,
    Family.NORMAL: NormalMLEParameterEstimator,
    Family.LOGNORMAL: LognormalMLEParameterEstimator,
    Family.GAMMA: GammaMLEParameterEstimator,
    Family.WEIBULL: WeibullMLEParameterEstimator,
    Family.PEARSON_TYPE5: PearsonType5MLEParameterEstimator,
    Family.UNIFORM: UniformParameterEstimator,
    Family.TRIANGULAR: TriangularParameterEstimator,
    Family.BETA: BetaMOMParameterEstimator,
    Family.GENERALIZED_BETA: GeneralizedBetaMOMParameterEstimator,
    Family.LOGISTIC: LogisticParameterEstimator,
    Family.LAPLACE: LaplaceParameterEstimator,
    Family.BINOMIAL: BinomialMOMParameterEstimator,
    Family.NEGATIVE_BINOMIAL: NegBinomialMOMParameterEstimator,
    Family.POISSON: PoissonMLEParameterEstimator,
}


def get_estimator(
    family: str | Family,
    config: EstimationConfig = DEFAULT_ESTIMATION,
) -> ParameterEstimator:
    """
    Default estimator for a family.

    Raises:
        ValidationError: If the family is unknown.
    """
    fam = resolve_family(family)
    if fam not in _DEFAULT_ESTIMATORS:
        raise ValidationError(f"No estimator registered for {fam.value}")
    return _DEFAULT_ESTIMATORS[fam](config)


def non_restricted_estimators(
    config: EstimationConfig = DEFAULT_ESTIMATION,
) -> list[ParameterEstimator]:
    """Estimators for families whose support is not tied to zero."""
    return [
        UniformParameterEstimator(config),
        TriangularParameterEstimator(config),
        NormalMLEParameterEstimator(config),
        GeneralizedBetaMOMParameterEstimator(config),
        LogisticParameterEstimator(config),
        LaplaceParameterEstimator(config),
    ]


def positive_restricted_estimators(
    config: EstimationConfig = DEFAULT_ESTIMATION,
) -> list[ParameterEstimator]:
    """Estimators for families on (0, inf)."""
    return [
        ExponentialMLEParameterEstimator(config),
        LognormalMLEParameterEstimator(config),
        GammaMLEParameterEstimator(config),
        WeibullMLEParameterEstimator(config),
        PearsonType5MLEParameterEstimator(config),
    ]


def all_estimators(config: EstimationConfig = DEFAULT_ESTIMATION) -> list[ParameterEstimator]:
    """Every continuous estimator used by default, non-restricted first."""
    return non_restricted_estimators(config) + positive_restricted_estimators(config)


def discrete_estimators(config: EstimationConfig = DEFAULT_ESTIMATION) -> list[ParameterEstimator]:
    return [
        BinomialMOMParameterEstimator(config),
        NegBinomialMOMParameterEstimator(config),
        PoissonMLEParameterEstimator(config),
    ]
