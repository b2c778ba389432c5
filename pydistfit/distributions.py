"""
Distribution families and fitted distributions.

The fitting engine does not implement densities itself. Each Family maps
its named parameters onto a frozen ``scipy.stats`` distribution, and
FittedDistribution wraps that object with the handful of operations the
estimators, histograms and scoring models need: cdf, pdf/pmf, inverse cdf,
support, log-likelihood and the number of estimated parameters.

Parameter names follow the conventions of the estimators:

    Exponential       mean
    Normal            mean, variance
    Lognormal         mean, variance        (of the lognormal itself)
    Gamma             shape, scale
    Weibull           shape, scale
    PearsonType5      shape, scale
    Uniform           min, max
    Triangular        min, mode, max
    Beta              alpha, beta
    GeneralizedBeta   alpha, beta, min, max
    Logistic          location, scale
    Laplace           location, scale
    Binomial          probOfSuccess, numTrials
    NegativeBinomial  probOfSuccess, numSuccesses  (failures before the r-th success)
    Poisson           mean
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pydistfit.core.exceptions import ValidationError


class Family(str, Enum):
    """Distribution family tags."""
    EXPONENTIAL = "Exponential"
    NORMAL = "Normal"
    LOGNORMAL = "Lognormal"
    GAMMA = "Gamma"
    WEIBULL = "Weibull"
    PEARSON_TYPE5 = "PearsonType5"
    UNIFORM = "Uniform"
    TRIANGULAR = "Triangular"
    BETA = "Beta"
    GENERALIZED_BETA = "GeneralizedBeta"
    LOGISTIC = "Logistic"
    LAPLACE = "Laplace"
    BINOMIAL = "Binomial"
    NEGATIVE_BINOMIAL = "NegativeBinomial"
    POISSON = "Poisson"

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return _PARAMETER_NAMES[self]

    @property
    def num_parameters(self) -> int:
        return len(_PARAMETER_NAMES[self])

    @property
    def is_discrete(self) -> bool:
        return self in (Family.BINOMIAL, Family.NEGATIVE_BINOMIAL, Family.POISSON)

    def __str__(self) -> str:
        return self.value


_PARAMETER_NAMES: dict[Family, tuple[str, ...]] = {
    Family.EXPONENTIAL: ("mean",),
    Family.NORMAL: ("mean", "variance"),
    Family.LOGNORMAL: ("mean", "variance"),
    Family.GAMMA: ("shape", "scale"),
    Family.WEIBULL: ("shape", "scale"),
    Family.PEARSON_TYPE5: ("shape", "scale"),
    Family.UNIFORM: ("min", "max"),
    Family.TRIANGULAR: ("min", "mode", "max"),
    Family.BETA: ("alpha", "beta"),
    Family.GENERALIZED_BETA: ("alpha", "beta", "min", "max"),
    Family.LOGISTIC: ("location", "scale"),
    Family.LAPLACE: ("location", "scale"),
    Family.BINOMIAL: ("probOfSuccess", "numTrials"),
    Family.NEGATIVE_BINOMIAL: ("probOfSuccess", "numSuccesses"),
    Family.POISSON: ("mean",),
}


def resolve_family(family: str | Family) -> Family:
    """Look up a Family by tag or case-insensitive name."""
    if isinstance(family, Family):
        return family
    for f in Family:
        if family.lower() in (f.value.lower(), f.name.lower()):
            return f
    raise ValidationError(
        f"Unknown family: {family!r}. "
        f"Available: {[f.value for f in Family]}"
    )


# ---------------------------------------------------------------------------
# scipy builders
# ---------------------------------------------------------------------------

def _require(condition: bool, family: Family, message: str) -> None:
    if not condition:
        raise ValidationError(f"{family.value}: {message}")


def _exponential(p, shift):
    _require(p["mean"] > 0.0, Family.EXPONENTIAL, f"mean must be > 0, got {p['mean']}")
    return sp_stats.expon(loc=shift, scale=p["mean"])


def _normal(p, shift):
    _require(p["variance"] > 0.0, Family.NORMAL, f"variance must be > 0, got {p['variance']}")
    return sp_stats.norm(loc=p["mean"] + shift, scale=math.sqrt(p["variance"]))


def _lognormal(p, shift):
    mean, var = p["mean"], p["variance"]
    _require(mean > 0.0 and var > 0.0, Family.LOGNORMAL,
             f"mean and variance must be > 0, got mean={mean}, variance={var}")
    sigma2 = math.log1p(var / (mean * mean))
    mu = math.log(mean) - 0.5 * sigma2
    return sp_stats.lognorm(s=math.sqrt(sigma2), loc=shift, scale=math.exp(mu))


def _shape_scale(family, factory):
    def build(p, shift):
        _require(p["shape"] > 0.0 and p["scale"] > 0.0, family,
                 f"shape and scale must be > 0, got shape={p['shape']}, scale={p['scale']}")
        return factory(p["shape"], loc=shift, scale=p["scale"])
    return build


def _uniform(p, shift):
    _require(p["min"] < p["max"], Family.UNIFORM, f"min must be < max, got {p['min']}, {p['max']}")
    return sp_stats.uniform(loc=p["min"] + shift, scale=p["max"] - p["min"])


def _triangular(p, shift):
    a, c, b = p["min"], p["mode"], p["max"]
    _require(a < b and a <= c <= b, Family.TRIANGULAR,
             f"need min <= mode <= max and min < max, got {a}, {c}, {b}")
    return sp_stats.triang(c=(c - a) / (b - a), loc=a + shift, scale=b - a)


def _beta(p, shift):
    _require(p["alpha"] > 0.0 and p["beta"] > 0.0, Family.BETA,
             f"alpha and beta must be > 0, got {p['alpha']}, {p['beta']}")
    return sp_stats.beta(p["alpha"], p["beta"], loc=shift)


def _generalized_beta(p, shift):
    _require(p["alpha"] > 0.0 and p["beta"] > 0.0, Family.GENERALIZED_BETA,
             f"alpha and beta must be > 0, got {p['alpha']}, {p['beta']}")
    _require(p["min"] < p["max"], Family.GENERALIZED_BETA,
             f"min must be < max, got {p['min']}, {p['max']}")
    return sp_stats.beta(p["alpha"], p["beta"], loc=p["min"] + shift, scale=p["max"] - p["min"])


def _location_scale(family, factory):
    def build(p, shift):
        _require(p["scale"] > 0.0, family, f"scale must be > 0, got {p['scale']}")
        return factory(loc=p["location"] + shift, scale=p["scale"])
    return build


def _binomial(p, shift):
    prob, trials = p["probOfSuccess"], p["numTrials"]
    _require(0.0 < prob <= 1.0, Family.BINOMIAL, f"probOfSuccess must be in (0, 1], got {prob}")
    _require(trials >= 1 and float(trials).is_integer(), Family.BINOMIAL,
             f"numTrials must be a positive integer, got {trials}")
    return sp_stats.binom(int(trials), prob, loc=shift)


def _negative_binomial(p, shift):
    prob, r = p["probOfSuccess"], p["numSuccesses"]
    _require(0.0 < prob <= 1.0, Family.NEGATIVE_BINOMIAL,
             f"probOfSuccess must be in (0, 1], got {prob}")
    _require(r > 0.0, Family.NEGATIVE_BINOMIAL, f"numSuccesses must be > 0, got {r}")
    return sp_stats.nbinom(r, prob, loc=shift)


def _poisson(p, shift):
    _require(p["mean"] > 0.0, Family.POISSON, f"mean must be > 0, got {p['mean']}")
    return sp_stats.poisson(p["mean"], loc=shift)


_BUILDERS: dict[Family, Callable[[Mapping[str, float], float], Any]] = {
    Family.EXPONENTIAL: _exponential,
    Family.NORMAL: _normal,
    Family.LOGNORMAL: _lognormal,
    Family.GAMMA: _shape_scale(Family.GAMMA, sp_stats.gamma),
    Family.WEIBULL: _shape_scale(Family.WEIBULL, sp_stats.weibull_min),
    Family.PEARSON_TYPE5: _shape_scale(Family.PEARSON_TYPE5, sp_stats.invgamma),
    Family.UNIFORM: _uniform,
    Family.TRIANGULAR: _triangular,
    Family.BETA: _beta,
    Family.GENERALIZED_BETA: _generalized_beta,
    Family.LOGISTIC: _location_scale(Family.LOGISTIC, sp_stats.logistic),
    Family.LAPLACE: _location_scale(Family.LAPLACE, sp_stats.laplace),
    Family.BINOMIAL: _binomial,
    Family.NEGATIVE_BINOMIAL: _negative_binomial,
    Family.POISSON: _poisson,
}


# ---------------------------------------------------------------------------
# Fitted distribution
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FittedDistribution:
    """
    A family with concrete parameter values, optionally shifted right.

    Use create_distribution() rather than constructing directly.

    Attributes:
        family: Distribution family tag.
        parameters: Named parameter values.
        shift: Location shift added to the family's support.
        rv: Frozen scipy.stats distribution.
    """
    family: Family
    parameters: Mapping[str, float]
    shift: float
    rv: Any = field(repr=False, compare=False)

    @property
    def is_discrete(self) -> bool:
        return self.family.is_discrete

    @property
    def num_parameters(self) -> int:
        """Number of parameters estimated for this distribution."""
        return self.family.num_parameters

    @property
    def name(self) -> str:
        params = ", ".join(f"{k}={v:.6g}" for k, v in self.parameters.items())
        base = f"{self.family.value}({params})"
        if self.shift != 0.0:
            return f"{self.shift:.6g} + {base}"
        return base

    def cdf(self, x: ArrayLike) -> NDArray:
        return self.rv.cdf(x)

    def pdf(self, x: ArrayLike) -> NDArray:
        """Density, or probability mass for discrete families."""
        if self.is_discrete:
            return self.rv.pmf(x)
        return self.rv.pdf(x)

    def log_pdf(self, x: ArrayLike) -> NDArray:
        if self.is_discrete:
            return self.rv.logpmf(x)
        return self.rv.logpdf(x)

    def inv_cdf(self, p: ArrayLike) -> NDArray:
        return self.rv.ppf(p)

    def domain(self) -> tuple[float, float]:
        """Support interval (lower, upper), possibly infinite."""
        lower, upper = self.rv.support()
        return float(lower), float(upper)

    def mean(self) -> float:
        return float(self.rv.mean())

    def variance(self) -> float:
        return float(self.rv.var())

    def interval_probability(self, lower: ArrayLike, upper: ArrayLike) -> NDArray:
        """
        P(lower <= X < upper) for each (lower, upper) pair.

        For discrete families the half-open interval contains the integers
        ceil(lower) .. ceil(upper) - 1.
        """
        lower = np.asarray(lower, dtype=np.float64)
        upper = np.asarray(upper, dtype=np.float64)
        if self.is_discrete:
            return self.rv.cdf(np.ceil(upper) - 1.0) - self.rv.cdf(np.ceil(lower) - 1.0)
        return self.rv.cdf(upper) - self.rv.cdf(lower)

    def log_likelihood(self, data: ArrayLike) -> float:
        """Sum of log densities (or log masses) over the data."""
        values = self.log_pdf(np.asarray(data, dtype=np.float64))
        return float(np.sum(values))

    def __str__(self) -> str:
        return self.name


def create_distribution(
    family: str | Family,
    parameters: Mapping[str, float],
    shift: float = 0.0,
) -> FittedDistribution:
    """
    Build a FittedDistribution from named parameters.

    Args:
        family: Family tag or name.
        parameters: Mapping containing every name in family.parameter_names.
            Extra keys are ignored.
        shift: Location shift (the final model is shift + distribution).

    Returns:
        FittedDistribution

    Raises:
        ValidationError: If a parameter is missing or outside its valid range.
    """
    fam = resolve_family(family)
    missing = [n for n in fam.parameter_names if n not in parameters]
    if missing:
        raise ValidationError(
            f"{fam.value}: missing parameters {missing}; "
            f"expected {list(fam.parameter_names)}"
        )
    values = {n: float(parameters[n]) for n in fam.parameter_names}
    if not all(math.isfinite(v) for v in values.values()):
        raise ValidationError(f"{fam.value}: parameters must be finite, got {values}")
    if not math.isfinite(shift):
        raise ValidationError(f"shift: must be finite, got {shift}")
    rv = _BUILDERS[fam](values, float(shift))
    return FittedDistribution(family=fam, parameters=values, shift=float(shift), rv=rv)
