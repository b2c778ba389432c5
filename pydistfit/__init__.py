"""
pydistfit: fit, score and rank probability distributions for a sample.

Estimates the parameters of many candidate families, scores each fit with
goodness-of-fit measures and combines the scores with a multi-objective
value model to recommend a distribution.

Submodules:
    descriptive: Statistics accumulator, quantiles, plotting positions
    histogram: Break points and histograms
    rootfinding: Bracketing and bisection
    distributions: Distribution families backed by scipy.stats
    estimation: Shift estimator and per-family parameter estimators
    montecarlo: Bootstrap and jackknife
    scoring: Goodness-of-fit statistics and scoring models
    ranking: Value functions and the additive MODA model
    modeler: The end-to-end fitting pipeline
"""

__version__ = "0.1.0"

from pydistfit import descriptive
from pydistfit import histogram
from pydistfit import rootfinding
from pydistfit import distributions
from pydistfit import estimation
from pydistfit import montecarlo
from pydistfit import scoring
from pydistfit import ranking
from pydistfit import modeler
from pydistfit.modeler import fit_distributions, PDFModeler

__all__ = [
    "__version__",
    "descriptive",
    "histogram",
    "rootfinding",
    "distributions",
    "estimation",
    "montecarlo",
    "scoring",
    "ranking",
    "modeler",
    "fit_distributions",
    "PDFModeler",
]
