"""
Solver dispatch for distribution modeling.

fit_distributions() runs the whole estimate-score-rank pipeline on a
sample. bootstrap_family_frequency() repeats it on bootstrap resamples to
show how stable the recommendation is.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pydistfit.core.config import DEFAULT_MODELING, ModelingConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.parallel import ordered_map, spawn_generators
from pydistfit.core.validation import check_positive_int, check_sample
from pydistfit.estimation.estimators._base import ParameterEstimator
from pydistfit.estimation.registry import all_estimators
from pydistfit.modeler._common import EvaluationMethod, FamilyFrequency
from pydistfit.modeler.modeler import PDFModeler
from pydistfit.modeler.solution import PDFModelingResults
from pydistfit.scoring.models import ScoringModel

logger = logging.getLogger(__name__)


def fit_distributions(
    data: ArrayLike,
    estimators: Sequence[ParameterEstimator] | None = None,
    *,
    scoring_models: Sequence[ScoringModel] | None = None,
    config: ModelingConfig = DEFAULT_MODELING,
    weights: Mapping[str, float] | None = None,
    automatic_shifting: bool | None = None,
) -> PDFModelingResults:
    """
    Fit, score and rank candidate distributions.

    Parameters
    ----------
    data : array-like
        1D sample of finite observations.
    estimators : sequence of ParameterEstimator, optional
        Candidates. Default: the non-restricted and positive-restricted
        continuous estimators.
    scoring_models : sequence of ScoringModel, optional
        Default: BIC, Anderson-Darling, Cramer-von Mises, Q-Q correlation.
    config : ModelingConfig
        Shifting, value-function, ranking and parallelism settings.
    weights : mapping, optional
        Metric weights by metric name. Default: equal.
    automatic_shifting : bool, optional
        Overrides config.automatic_shifting.

    Returns
    -------
    PDFModelingResults

    Raises
    ------
    ValidationError
        If data is empty or non-finite, or the scoring models are invalid.
    """
    modeler = PDFModeler(data, scoring_models, config, weights)
    return modeler.estimate_and_evaluate(estimators, automatic_shifting)


def bootstrap_family_frequency(
    data: ArrayLike,
    estimators: Sequence[ParameterEstimator] | None = None,
    *,
    num_samples: int = 400,
    seed: int | None = None,
    evaluation_method: str | EvaluationMethod | None = None,
    scoring_models: Sequence[ScoringModel] | None = None,
    config: ModelingConfig = DEFAULT_MODELING,
    automatic_shifting: bool | None = None,
    n_jobs: int = 1,
) -> FamilyFrequency:
    """
    Count how often each family is recommended across bootstrap resamples.

    Each resample is refitted from scratch (shift, estimation, scoring and
    evaluation) and the family of its top result is counted. Resamples on
    which nothing could be scored are counted as failed.

    Parameters
    ----------
    data : array-like
        The sample.
    estimators : sequence of ParameterEstimator, optional
        Candidates; default as in fit_distributions().
    num_samples : int
        Number of resamples. Default 400.
    seed : int or None
        Seed for the resampling streams.
    evaluation_method : str, optional
        'scoring' or 'ranking'; default from the config.
    n_jobs : int
        Worker threads across resamples.

    Returns
    -------
    FamilyFrequency
    """
    x = check_sample(data, "data")
    if x.size == 0:
        raise ValidationError("data: the supplied observations array was empty")
    check_positive_int(num_samples, "num_samples")
    method = EvaluationMethod(
        evaluation_method if evaluation_method is not None else config.evaluation_method
    )
    estimators = all_estimators() if estimators is None else list(estimators)
    n = x.size

    def replicate(rng: np.random.Generator) -> str | None:
        sample = x[rng.integers(0, n, size=n)]
        results = PDFModeler(sample, scoring_models, config).estimate_and_evaluate(
            estimators, automatic_shifting,
        )
        ordered = results.ordered_results(method)
        if not ordered:
            return None
        return ordered[0].family.value

    tops = ordered_map(replicate, spawn_generators(seed, num_samples), n_jobs=n_jobs)
    counts: dict[str, int] = {}
    for fam in tops:
        if fam is not None:
            counts[fam] = counts.get(fam, 0) + 1
    num_failed = sum(1 for fam in tops if fam is None)
    if num_failed:
        logger.info("bootstrap family frequency: %d of %d resamples had no scored distribution",
                    num_failed, num_samples)
    return FamilyFrequency(
        counts=counts,
        num_samples=num_samples,
        num_failed=num_failed,
        evaluation_method=method,
    )
