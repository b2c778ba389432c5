"""
Modeling session solution type.

PDFModelingResults wraps Result[ModelingParams]: every estimation
attempted, the evaluated scoring results, the ranking model, and the
orderings by weighted value and by average rank.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydistfit.core.config import DEFAULT_MODELING, ModelingConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.result import Result
from pydistfit.distributions import Family, resolve_family
from pydistfit.estimation._common import EstimationResult, ShiftedData
from pydistfit.modeler._common import EvaluationMethod, ModelingParams, ScoringResult
from pydistfit.ranking.moda import AdditiveMODAModel


@dataclass
class PDFModelingResults:
    """
    User-facing results of a modeling session.

    The scoring results are about estimators, not families: two estimators
    of the same family (e.g. Gamma MOM and Gamma MLE) are ranked
    separately. rank(family) reports the first one.
    """
    _result: Result[ModelingParams]
    _config: ModelingConfig = DEFAULT_MODELING

    # --- Collections ---

    @property
    def estimation_results(self) -> list[EstimationResult]:
        return list(self._result.params.estimation_results)

    @property
    def scoring_results(self) -> list[ScoringResult]:
        """Scoring results in estimator order."""
        return list(self._result.params.scoring_results)

    @property
    def evaluation_model(self) -> AdditiveMODAModel | None:
        return self._result.params.evaluation_model

    @property
    def shifted(self) -> ShiftedData | None:
        return self._result.params.shifted

    @property
    def minimum_ci(self) -> tuple[float, float] | None:
        return self._result.params.minimum_ci

    @property
    def failed_results(self) -> list[EstimationResult]:
        return [r for r in self._result.params.estimation_results if not r.success]

    # --- Orderings ---

    @property
    def sorted_scoring_results(self) -> list[ScoringResult]:
        """Best weighted value first; ties broken by name."""
        return sorted(self._result.params.scoring_results,
                      key=lambda sr: (-sr.weighted_value, sr.name))

    @property
    def sorted_ranking_results(self) -> list[ScoringResult]:
        """Lowest average rank first; ties to more first places, then name."""
        return sorted(self._result.params.scoring_results,
                      key=lambda sr: (sr.average_ranking, -sr.first_rank_count, sr.name))

    def ordered_results(self, method: str | EvaluationMethod | None = None) -> list[ScoringResult]:
        """Scoring results ordered by the evaluation method (default from the config)."""
        m = EvaluationMethod(method if method is not None else self._config.evaluation_method)
        if m is EvaluationMethod.SCORING:
            return self.sorted_scoring_results
        return self.sorted_ranking_results

    @property
    def top_result(self) -> ScoringResult:
        """The recommended distribution by the configured evaluation method."""
        return self.top_result_by(self._config.evaluation_method)

    def top_result_by(self, method: str | EvaluationMethod) -> ScoringResult:
        ordered = self.ordered_results(method)
        if not ordered:
            raise ValidationError("no distribution could be scored; there is no top result")
        return ordered[0]

    @property
    def top_result_by_scoring(self) -> ScoringResult:
        return self.top_result_by(EvaluationMethod.SCORING)

    @property
    def top_result_by_ranking(self) -> ScoringResult:
        return self.top_result_by(EvaluationMethod.RANKING)

    def rank(
        self,
        target: EstimationResult | Family | str,
        method: str | EvaluationMethod | None = None,
    ) -> int:
        """
        1-based position in the chosen ordering, or 0 when not found.

        Args:
            target: An estimation result (matched by identity of the result)
                or a family (first scoring result of that family).
            method: 'scoring' or 'ranking'; default from the config.
        """
        ordered = self.ordered_results(method)
        if isinstance(target, EstimationResult):
            for i, sr in enumerate(ordered):
                if sr.estimation_result is target:
                    return i + 1
            return 0
        family = resolve_family(target)
        for i, sr in enumerate(ordered):
            if sr.family is family:
                return i + 1
        return 0

    # --- Tables ---

    def scores_table(self) -> dict[str, list[Any]]:
        """Column dict: 'Distribution' then raw scores per metric."""
        return self._table(lambda model: model.score_table())

    def values_table(self) -> dict[str, list[Any]]:
        """Column dict: 'Distribution', metric values and the overall value."""
        return self._table(lambda model: model.value_table())

    def ranks_table(self, method: str | None = None) -> dict[str, list[Any]]:
        """Column dict: per-metric ranks, average rank and first-rank count."""
        m = self._config.ranking_method if method is None else method
        return self._table(lambda model: model.rank_table(m))

    def _table(self, build) -> dict[str, list[Any]]:
        model = self.evaluation_model
        if model is None or not model.alternatives:
            return {"Distribution": []}
        return {
            ("Distribution" if k == "Alternative" else k): v
            for k, v in build(model).items()
        }

    def estimation_table(self) -> dict[str, list[Any]]:
        """Every attempted estimator with its success flag and message."""
        rs = self._result.params.estimation_results
        return {
            "Estimator": [r.estimator_name for r in rs],
            "Distribution": [r.distribution_name for r in rs],
            "Success": [r.success for r in rs],
            "Message": [r.message for r in rs],
        }

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Text report: estimations, then the scored results in recommended order."""
        p = self._result.params
        lines = ["Distribution modeling results", "=" * 60]
        if p.shifted is not None:
            lines.append(f"Left shift applied: {p.shifted.shift:.6g}")
        if p.minimum_ci is not None:
            lines.append(f"Minimum CI: [{p.minimum_ci[0]:.6g}, {p.minimum_ci[1]:.6g}]")
        lines.append("")
        lines.append("Estimation results")
        lines.append("-" * 60)
        for r in p.estimation_results:
            flag = "ok" if r.success else "FAILED"
            lines.append(f"{r.estimator_name:<28s}{flag:<8s}{r.message}")

        method = EvaluationMethod(self._config.evaluation_method)
        ordered = self.ordered_results(method)
        lines.append("")
        lines.append(f"Ranked distributions (by {method.value})")
        lines.append("-" * 60)
        lines.append(f"{'Rank':<6s}{'Value':>8s}{'AvgRank':>9s}{'Firsts':>8s}  Distribution")
        for i, sr in enumerate(ordered, start=1):
            lines.append(
                f"{i:<6d}{sr.weighted_value:>8.4f}{sr.average_ranking:>9.2f}"
                f"{sr.first_rank_count:>8d}  {sr.name}"
            )
        if ordered:
            lines.append("")
            lines.append(f"Recommended: {ordered[0].name}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        top = self.top_result.name if p.scoring_results else None
        return (
            f"PDFModelingResults(estimated={len(p.estimation_results)}, "
            f"scored={len(p.scoring_results)}, top={top!r})"
        )
