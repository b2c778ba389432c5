"""
Solver dispatch for scoring.

gof_test() produces a goodness-of-fit report for one fitted distribution;
score_results() applies scoring models to a batch of estimation results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from numpy.typing import ArrayLike

from pydistfit.core.compute.timing import Timer
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.result import Result
from pydistfit.core.validation import check_min_samples, check_sample
from pydistfit.distributions import FittedDistribution
from pydistfit.scoring._common import Score
from pydistfit.scoring._gof import gof_report
from pydistfit.scoring.models import ScoringModel, default_scoring_models
from pydistfit.scoring.solution import GOFSolution

if TYPE_CHECKING:
    from pydistfit.estimation._common import EstimationResult


def gof_test(
    data: 'ArrayLike | EstimationResult',
    distribution: FittedDistribution | None = None,
    *,
    num_estimated_parameters: int | None = None,
) -> GOFSolution:
    """
    Goodness-of-fit report for a fitted distribution.

    Parameters
    ----------
    data : array-like or EstimationResult
        The sample, or an estimation result whose test data and unshifted
        distribution are used.
    distribution : FittedDistribution, optional
        Required when data is an array.
    num_estimated_parameters : int, optional
        Parameters estimated from the data, subtracted from the chi-squared
        degrees of freedom. Defaults to the distribution's parameter count.

    Returns
    -------
    GOFSolution

    Raises
    ------
    ValidationError
        If fewer than two observations are given, the result has no usable
        parameters, or the chi-squared degrees of freedom would be negative.
    """
    from pydistfit.estimation._common import EstimationResult

    if isinstance(data, EstimationResult):
        if not data.is_usable:
            raise ValidationError(
                f"gof_test: {data.estimator_name} has no usable parameters: {data.message}"
            )
        distribution = data.distribution()
        data = data.test_data
    if distribution is None:
        raise ValidationError("gof_test: distribution is required with an array")

    x = check_sample(data, "data")
    check_min_samples(x, 2, "data")
    k = distribution.num_parameters if num_estimated_parameters is None else num_estimated_parameters
    if k < 0:
        raise ValidationError(f"num_estimated_parameters: must be >= 0, got {k}")

    timer = Timer()
    timer.start()
    with timer.section('statistics'):
        params, warnings_list = gof_report(x, distribution, k)
    timer.stop()

    result = Result(
        params=params,
        info={'n': x.size, 'num_bins': params.chi_squared.num_bins, 'dof': params.chi_squared.dof},
        timing=timer.result(),
        backend_name='cpu_gof',
        warnings=tuple(warnings_list),
    )
    return GOFSolution(_result=result, _distribution=distribution)


def score_results(
    results: Sequence['EstimationResult'],
    models: Sequence[ScoringModel] | None = None,
) -> list[list[Score]]:
    """Scores of every result under every model, in input order; unusable results get bad scores."""
    models = default_scoring_models() if models is None else list(models)
    return [[m.score_result(r) for m in models] for r in results]
