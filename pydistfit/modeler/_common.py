"""
Common types for distribution modeling.

ScoringResult carries the scores of one fitted distribution and, once the
ranking model has evaluated it, its metric values, weighted value and
rank statistics. ModelingParams is the payload of a modeling session.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from pydistfit.distributions import Family, FittedDistribution
from pydistfit.estimation._common import EstimationResult, ShiftedData
from pydistfit.ranking.moda import AdditiveMODAModel
from pydistfit.scoring._common import Metric, Score


class EvaluationMethod(str, Enum):
    """Which ordering picks the recommended distribution."""
    SCORING = "scoring"
    RANKING = "ranking"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScoringResult:
    """
    Scores of one successfully estimated distribution.

    Attributes:
        name: Alternative name, "shift + Family(params)" when shifted.
        distribution: Fitted distribution for the test data (no shift).
        estimation_result: The estimation that produced the parameters.
        scores: One score per scoring model, in model order.
        values: Metric name -> value in [0, 1] (set by evaluation).
        weighted_value: Overall value (set by evaluation).
        weights: Metric weights used (set by evaluation).
        average_ranking: Mean of the per-metric ranks (set by evaluation).
        first_rank_count: Metrics on which this result ranked first.
    """
    name: str
    distribution: FittedDistribution
    estimation_result: EstimationResult = field(repr=False)
    scores: tuple[Score, ...]
    values: Mapping[str, float] = field(default_factory=dict)
    weighted_value: float = math.nan
    weights: Mapping[str, float] = field(default_factory=dict)
    average_ranking: float = math.nan
    first_rank_count: int = 0

    @property
    def family(self) -> Family:
        return self.distribution.family

    @property
    def metrics(self) -> list[Metric]:
        return [s.metric for s in self.scores]

    @property
    def shift(self) -> float:
        return self.estimation_result.shift

    @property
    def estimator_name(self) -> str:
        return self.estimation_result.estimator_name

    def score(self, metric: str) -> Score:
        """Score of the named metric."""
        for s in self.scores:
            if s.name == metric:
                return s
        raise KeyError(metric)

    @property
    def score_values(self) -> dict[str, float]:
        return {s.name: s.value for s in self.scores}

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'family': self.family.value,
            'estimator': self.estimator_name,
            'shift': self.shift,
            'parameters': dict(self.distribution.parameters),
            'scores': self.score_values,
            'values': dict(self.values),
            'weighted_value': self.weighted_value,
            'average_ranking': self.average_ranking,
            'first_rank_count': self.first_rank_count,
        }

    def __str__(self) -> str:
        scores = ", ".join(str(s) for s in self.scores)
        return f"{self.name}: value={self.weighted_value:.4f}, [{scores}]"


@dataclass(frozen=True)
class ModelingParams:
    """
    Payload of a modeling session.

    Attributes:
        estimation_results: Every estimation attempted, in estimator order.
        scoring_results: Evaluated results for the usable estimations.
        evaluation_model: The ranking model that evaluated them.
        shifted: The automatic left shift applied, or None.
        minimum_ci: Bootstrap interval for the sample minimum, or None when
            automatic shifting was off.
    """
    estimation_results: tuple[EstimationResult, ...]
    scoring_results: tuple[ScoringResult, ...]
    evaluation_model: AdditiveMODAModel | None
    shifted: ShiftedData | None = None
    minimum_ci: tuple[float, float] | None = None


@dataclass(frozen=True)
class FamilyFrequency:
    """
    How often each family came out on top across bootstrap resamples.

    Attributes:
        counts: Family name -> number of resamples it was recommended on.
        num_samples: Resamples requested.
        num_failed: Resamples on which no distribution could be scored.
        evaluation_method: Ordering used to pick the top result.
    """
    counts: Mapping[str, int]
    num_samples: int
    num_failed: int
    evaluation_method: EvaluationMethod

    @property
    def proportions(self) -> dict[str, float]:
        ok = self.num_samples - self.num_failed
        if ok == 0:
            return {k: math.nan for k in self.counts}
        return {k: v / ok for k, v in self.counts.items()}

    @property
    def most_frequent(self) -> str | None:
        if not self.counts:
            return None
        return max(sorted(self.counts), key=lambda k: self.counts[k])

    def summary(self) -> str:
        lines = [
            f"Bootstrap family frequency ({self.num_samples} resamples, "
            f"{self.num_failed} failed, by {self.evaluation_method.value})",
        ]
        props = self.proportions
        for fam in sorted(self.counts, key=lambda k: (-self.counts[k], k)):
            lines.append(f"  {fam:<20s}{self.counts[fam]:>8d}{props[fam]:>10.3f}")
        return "\n".join(lines)
