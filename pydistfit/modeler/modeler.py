"""
End-to-end distribution modeling.

PDFModeler runs the pipeline for one sample:

1. optionally estimate a left shift (when a bootstrap interval for the
   minimum lies clearly above zero),
2. run every estimator, the range-checked ones on the shifted data,
3. score every usable estimate with every scoring model,
4. evaluate the scores with an additive MODA model and order the results.

Estimation and scoring of different families are independent and run on
the ordered thread-pool map; results always come back in estimator order.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping, Sequence

from numpy.typing import ArrayLike, NDArray

from pydistfit.core.compute.timing import Timer
from pydistfit.core.config import DEFAULT_MODELING, ModelingConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.parallel import ordered_map
from pydistfit.core.result import Result
from pydistfit.core.validation import check_sample
from pydistfit.descriptive import StatisticSummary, accumulate
from pydistfit.estimation._common import EstimationResult, ShiftedData
from pydistfit.estimation.estimators._base import ParameterEstimator
from pydistfit.estimation.registry import all_estimators
from pydistfit.estimation.shift import left_shift_data
from pydistfit.modeler._common import ModelingParams, ScoringResult
from pydistfit.modeler.solution import PDFModelingResults
from pydistfit.montecarlo.solution import BootstrapSolution
from pydistfit.montecarlo.solvers import bootstrap_parameters, confidence_interval_for_minimum
from pydistfit.ranking.moda import AdditiveMODAModel
from pydistfit.scoring.models import ScoringModel, default_scoring_models
from pydistfit.scoring.solution import GOFSolution
from pydistfit.scoring.solvers import gof_test

logger = logging.getLogger(__name__)


class PDFModeler:
    """
    Fits, scores and ranks candidate distributions for a sample.

    Args:
        data: 1D sample with at least one finite observation.
        scoring_models: Models scoring each fit. Default: BIC,
            Anderson-Darling, Cramer-von Mises, Q-Q correlation.
        config: Modeling settings.
        weights: Optional metric weights by metric name (equal by default).

    Usage:
        modeler = PDFModeler(data)
        results = modeler.estimate_and_evaluate()
        print(results.top_result.name)
    """

    def __init__(
        self,
        data: ArrayLike,
        scoring_models: Sequence[ScoringModel] | None = None,
        config: ModelingConfig = DEFAULT_MODELING,
        weights: Mapping[str, float] | None = None,
    ):
        x = check_sample(data, "data")
        if x.size == 0:
            raise ValidationError("data: the supplied observations array was empty")
        models = default_scoring_models() if scoring_models is None else list(scoring_models)
        if not models:
            raise ValidationError("scoring_models: at least one scoring model is required")
        names = [m.name for m in models]
        if len(set(names)) != len(names):
            raise ValidationError(f"scoring_models: metric names must be unique, got {names}")
        self._data = x.copy()
        self._statistics = accumulate(self._data)
        self._scoring_models = models
        self._config = config
        self._weights = None if weights is None else dict(weights)

    @property
    def data(self) -> NDArray:
        return self._data.copy()

    @property
    def statistics(self) -> StatisticSummary:
        return self._statistics

    @property
    def scoring_models(self) -> list[ScoringModel]:
        return list(self._scoring_models)

    @property
    def config(self) -> ModelingConfig:
        return self._config

    # --- Shift ---

    def confidence_interval_for_minimum(
        self, num_samples: int | None = None, level: float | None = None,
    ) -> tuple[float, float]:
        """Percentile bootstrap interval for the sample minimum."""
        bs = self._config.shift_bootstrap
        return confidence_interval_for_minimum(
            self._data,
            num_samples=bs.num_samples if num_samples is None else num_samples,
            level=bs.level if level is None else level,
            seed=bs.seed,
        )

    def automatic_shift(self) -> tuple[ShiftedData | None, tuple[float, float]]:
        """
        The left shift the pipeline would apply, with the interval behind it.

        Data is shifted only when the zero tolerance lies below the lower
        limit of the interval for the minimum and the shift estimate is
        positive.
        """
        ci = self.confidence_interval_for_minimum()
        if self._config.zero_tolerance < ci[0]:
            shifted = left_shift_data(self._data, self._config.zero_tolerance)
            if shifted.shift <= 0.0:
                logger.debug("automatic shift: minimum CI [%g, %g] but no shift estimated",
                             ci[0], ci[1])
                return None, ci
            logger.info("automatic shift: minimum CI [%g, %g], shift %g", ci[0], ci[1],
                        shifted.shift, extra={'component': 'modeler'})
            return shifted, ci
        logger.debug("automatic shift: minimum CI [%g, %g] reaches the zero tolerance, no shift",
                     ci[0], ci[1])
        return None, ci

    # --- Estimation ---

    def estimate_parameters(
        self,
        estimators: Sequence[ParameterEstimator] | None = None,
        automatic_shifting: bool | None = None,
    ) -> list[EstimationResult]:
        """
        Run every estimator on the data.

        With automatic shifting, estimators with check_range run on the
        shifted data and their results carry the ShiftedData; their
        original_data is still the unshifted sample.
        """
        estimators = all_estimators() if estimators is None else list(estimators)
        shifting = self._config.automatic_shifting if automatic_shifting is None else automatic_shifting
        shifted = self.automatic_shift()[0] if shifting else None
        return self._estimate(estimators, shifted)

    def _estimate(
        self,
        estimators: Sequence[ParameterEstimator],
        shifted: ShiftedData | None,
    ) -> list[EstimationResult]:
        shifted_stats = None if shifted is None else accumulate(shifted.data)

        def run(estimator: ParameterEstimator) -> EstimationResult:
            if estimator.check_range and shifted is not None:
                r = estimator.estimate(shifted.data, shifted_stats)
                return r.with_shift(self._data, shifted)
            return estimator.estimate(self._data, self._statistics)

        return ordered_map(run, estimators, n_jobs=self._config.n_jobs)

    def bootstrap_parameter_estimates(
        self,
        source: EstimationResult | ParameterEstimator,
        num_samples: int = 399,
        level: float = 0.95,
        seed: int | None = None,
    ) -> BootstrapSolution:
        """Bootstrap an estimation result (on its test data) or an estimator (on the data)."""
        if isinstance(source, EstimationResult):
            return bootstrap_parameters(source, num_samples=num_samples, level=level, seed=seed)
        return bootstrap_parameters(source, self._data, num_samples=num_samples,
                                    level=level, seed=seed)

    # --- Scoring ---

    def scoring_results(self, results: Sequence[EstimationResult]) -> list[ScoringResult]:
        """
        Score every usable estimation result with every scoring model.

        Results that failed or carry no parameters are skipped.
        """
        usable = []
        for r in results:
            if not r.is_usable:
                logger.debug("not scoring %s: %s", r.estimator_name, r.message)
                continue
            usable.append(r)

        def run(result: EstimationResult) -> ScoringResult | None:
            try:
                distribution = result.distribution()
                shifted_model = result.distribution(include_shift=True)
            except ValidationError as exc:
                logger.info("not scoring %s: %s", result.estimator_name, exc)
                return None
            scores = tuple(m.score_result(result) for m in self._scoring_models)
            return ScoringResult(
                name=shifted_model.name,
                distribution=distribution,
                estimation_result=result,
                scores=scores,
            )

        scored = [s for s in ordered_map(run, usable, n_jobs=self._config.n_jobs) if s is not None]
        return _unique_names(scored)

    # --- Evaluation ---

    def evaluation_model(self) -> AdditiveMODAModel:
        """A fresh ranking model over this modeler's metrics."""
        return AdditiveMODAModel(
            [m.metric for m in self._scoring_models],
            self._weights,
            scaling_function=self._config.scaling_function,
            logistic_factor=self._config.logistic_factor,
        )

    def evaluate_scoring_results(
        self,
        scoring_results: Sequence[ScoringResult],
        model: AdditiveMODAModel | None = None,
    ) -> tuple[AdditiveMODAModel, list[ScoringResult]]:
        """
        Evaluate scoring results with a MODA model.

        Returns the model (its metric domains possibly rescaled) and copies
        of the scoring results carrying their values and rank statistics.
        """
        model = self.evaluation_model() if model is None else model
        if not scoring_results:
            return model, []
        expected = [m.name for m in model.metrics]
        for sr in scoring_results:
            if [s.name for s in sr.scores] != expected:
                raise ValidationError(
                    f"The metrics of {sr.name} do not match the metrics of the model {expected}"
                )
        cfg = self._config
        model.define_alternatives(
            {sr.name: sr.scores for sr in scoring_results},
            adjust_lower_limits=cfg.adjust_lower_limits,
            adjust_upper_limits=cfg.adjust_upper_limits,
        )
        firsts = model.first_rank_counts(cfg.ranking_method)
        averages = model.average_ranks(cfg.ranking_method)
        evaluated = [
            replace(
                sr,
                values=model.alternative_values(sr.name),
                weighted_value=model.multi_objective_value(sr.name),
                weights=model.weights,
                average_ranking=averages[sr.name],
                first_rank_count=firsts[sr.name],
            )
            for sr in scoring_results
        ]
        return model, evaluated

    def evaluate(
        self,
        estimation_results: Sequence[EstimationResult],
        shifted: ShiftedData | None = None,
        minimum_ci: tuple[float, float] | None = None,
    ) -> PDFModelingResults:
        """Score and rank estimation results."""
        timer = Timer()
        timer.start()
        with timer.section('scoring'):
            scored = self.scoring_results(estimation_results)
        with timer.section('evaluation'):
            model, evaluated = self.evaluate_scoring_results(scored)
        timer.stop()
        return self._package(estimation_results, evaluated, model, shifted, minimum_ci, timer)

    def estimate_and_evaluate(
        self,
        estimators: Sequence[ParameterEstimator] | None = None,
        automatic_shifting: bool | None = None,
    ) -> PDFModelingResults:
        """Estimate, score and rank in one call."""
        estimators = all_estimators() if estimators is None else list(estimators)
        shifting = self._config.automatic_shifting if automatic_shifting is None else automatic_shifting

        timer = Timer()
        timer.start()
        shifted, ci = None, None
        if shifting:
            with timer.section('shift'):
                shifted, ci = self.automatic_shift()
        with timer.section('estimation'):
            estimation_results = self._estimate(estimators, shifted)
        with timer.section('scoring'):
            scored = self.scoring_results(estimation_results)
        with timer.section('evaluation'):
            model, evaluated = self.evaluate_scoring_results(scored)
        timer.stop()
        return self._package(estimation_results, evaluated, model, shifted, ci, timer)

    def _package(self, estimation_results, evaluated, model, shifted, minimum_ci, timer):
        estimation_results = tuple(estimation_results)
        warnings_list = []
        failed = [r for r in estimation_results if not r.success]
        if failed:
            warnings_list.append(
                f"{len(failed)} of {len(estimation_results)} estimators failed: "
                + ", ".join(r.estimator_name for r in failed)
            )
        if not evaluated:
            warnings_list.append("no distribution could be scored")
        params = ModelingParams(
            estimation_results=estimation_results,
            scoring_results=tuple(evaluated),
            evaluation_model=model,
            shifted=shifted,
            minimum_ci=minimum_ci,
        )
        result = Result(
            params=params,
            info={
                'n': int(self._data.size),
                'num_estimators': len(estimation_results),
                'num_scored': len(evaluated),
                'shift': 0.0 if shifted is None else shifted.shift,
                'scaling_function': self._config.scaling_function,
                'ranking_method': self._config.ranking_method,
                'evaluation_method': self._config.evaluation_method,
            },
            timing=timer.result(),
            backend_name='cpu_modeler',
            warnings=tuple(warnings_list),
        )
        return PDFModelingResults(_result=result, _config=self._config)

    # --- Reports ---

    def gof_test(self, result: ScoringResult | EstimationResult) -> GOFSolution:
        """Goodness-of-fit report for one fitted distribution."""
        if isinstance(result, ScoringResult):
            result = result.estimation_result
        return gof_test(result)

    def statistical_summary(self) -> str:
        """Summary statistics of the data, the left shift estimate and the minimum CI."""
        s = self._statistics
        ci = self.confidence_interval_for_minimum()
        shift = left_shift_data(self._data, self._config.zero_tolerance).shift
        lines = [
            "Statistical summary",
            "-------------------------------------",
            f"Count              {s.count}",
            f"Average            {s.mean:.6g}",
            f"Std. Dev.          {s.std_dev:.6g}",
            f"Minimum            {s.min:.6g}",
            f"Maximum            {s.max:.6g}",
            f"Skewness           {s.skewness:.6g}",
            f"Kurtosis           {s.kurtosis:.6g}",
            f"Lag-1 Correlation  {s.lag1_correlation:.6g}",
            f"Left shift         {shift:.6g}",
            f"Minimum CI         [{ci[0]:.6g}, {ci[1]:.6g}]",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PDFModeler(n={self._data.size}, "
            f"scoring_models={[m.name for m in self._scoring_models]})"
        )


def _unique_names(results: list[ScoringResult]) -> list[ScoringResult]:
    seen: dict[str, int] = {}
    for sr in results:
        seen[sr.name] = seen.get(sr.name, 0) + 1
    return [
        replace(sr, name=f"{sr.name} [{sr.estimator_name}]") if seen[sr.name] > 1 else sr
        for sr in results
    ]
