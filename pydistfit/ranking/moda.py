"""
Additive multi-objective decision analysis (MODA) model.

Alternatives (fitted distributions) carry one Score per metric. Each
metric gets a value function mapping its raw scores onto [0, 1]; the
overall value of an alternative is the weighted sum of its metric values.
Per-metric ranks, their average and the number of first places give an
independent ordering to cross-check the weighted values.

Metrics are looked up by name. Domains may be rescaled from the observed
scores, which keeps a metric with a huge nominal domain (e.g. [0, MAX])
from squashing every value to 1.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence

import numpy as np
from scipy import stats as sp_stats

from pydistfit.core.config import RANKING_METHODS, SCALING_FUNCTIONS
from pydistfit.core.exceptions import ValidationError
from pydistfit.estimation.shift import range_estimate
from pydistfit.ranking.value_functions import (
    LinearValueFunction,
    LogisticValueFunction,
    ValueFunction,
)
from pydistfit.scoring._common import Metric, Score

logger = logging.getLogger(__name__)


class AdditiveMODAModel:
    """
    Weighted additive value model over a fixed set of metrics.

    Args:
        metrics: The metrics every alternative is scored on (unique names).
        weights: Optional weight per metric name; missing names get 0.
            Weights are normalized to sum to one. Default: equal weights.
        scaling_function: 'linear' or 'logistic'.
        logistic_factor: Quantile factor for logistic value functions.

    Usage:
        model = AdditiveMODAModel([m.metric for m in scoring_models])
        model.define_alternatives({"Normal": normal_scores, "Gamma": gamma_scores})
        best = model.sorted_by_value()[0]
    """

    def __init__(
        self,
        metrics: Sequence[Metric],
        weights: Mapping[str, float] | None = None,
        *,
        scaling_function: str = "linear",
        logistic_factor: float = 0.25,
    ):
        if len(metrics) == 0:
            raise ValidationError("AdditiveMODAModel: at least one metric is required")
        names = [m.name for m in metrics]
        if len(set(names)) != len(names):
            raise ValidationError(f"AdditiveMODAModel: metric names must be unique, got {names}")
        if scaling_function not in SCALING_FUNCTIONS:
            raise ValidationError(
                f"scaling_function: must be one of {SCALING_FUNCTIONS}, got {scaling_function!r}"
            )
        self._metrics: dict[str, Metric] = {m.name: m for m in metrics}
        self._weights = self._normalize_weights(names, weights)
        self._scaling_function = scaling_function
        self._logistic_factor = logistic_factor
        self._alternatives: dict[str, dict[str, Score]] = {}
        self._value_functions: dict[str, ValueFunction] = {}
        self._build_value_functions()

    @staticmethod
    def _normalize_weights(names: list[str], weights: Mapping[str, float] | None) -> dict[str, float]:
        if weights is None:
            return {n: 1.0 / len(names) for n in names}
        unknown = set(weights) - set(names)
        if unknown:
            raise ValidationError(f"weights: unknown metrics {sorted(unknown)}")
        raw = {n: float(weights.get(n, 0.0)) for n in names}
        if any(w < 0.0 or not math.isfinite(w) for w in raw.values()):
            raise ValidationError(f"weights: must be finite and >= 0, got {raw}")
        total = sum(raw.values())
        if total <= 0.0:
            raise ValidationError("weights: at least one weight must be positive")
        return {n: w / total for n, w in raw.items()}

    # --- Definition ---

    def define_alternatives(
        self,
        alternatives: Mapping[str, Sequence[Score]],
        adjust_lower_limits: bool = False,
        adjust_upper_limits: bool = True,
    ) -> None:
        """
        Add alternatives and their scores.

        An alternative is skipped (and logged) unless it has exactly one
        score for every metric of the model. After adding, metric domains
        are rescaled from the valid scores when requested (and whenever a
        limit is infinite), then the value functions are rebuilt.
        """
        for name, scores in alternatives.items():
            by_metric = {s.name: s for s in scores}
            if len(scores) != len(self._metrics) or set(by_metric) != set(self._metrics):
                logger.info("MODA: skipping alternative %s, its scores do not match the metrics", name)
                continue
            self._alternatives[name] = by_metric
        self._rescale_metric_domains(adjust_lower_limits, adjust_upper_limits)
        self._build_value_functions()

    def _rescale_metric_domains(self, adjust_lower: bool, adjust_upper: bool) -> None:
        for name, metric in list(self._metrics.items()):
            valid = [s.value for s in self.metric_scores(name, valid_only=True)]
            if len(valid) < 2 or min(valid) == max(valid):
                continue
            lo_est, hi_est = range_estimate(min(valid), max(valid), len(valid))
            lower, upper = metric.lower, metric.upper
            if metric.allow_lower_limit_adjustment and (adjust_lower or math.isinf(lower)):
                lower = lo_est
            if metric.allow_upper_limit_adjustment and (adjust_upper or math.isinf(upper)):
                upper = hi_est
            if (lower, upper) != (metric.lower, metric.upper):
                self._metrics[name] = metric.with_domain(lower, upper)
                logger.debug("MODA: %s domain rescaled to [%g, %g]", name, lower, upper)

    def _build_value_functions(self) -> None:
        self._value_functions = {}
        for name, metric in self._metrics.items():
            vf: ValueFunction = LinearValueFunction(metric)
            if self._scaling_function == "logistic":
                valid = [s.value for s in self.metric_scores(name, valid_only=True)]
                if valid:
                    vf = LogisticValueFunction.from_scores(metric, valid, self._logistic_factor)
            self._value_functions[name] = vf

    # --- Accessors ---

    @property
    def metrics(self) -> list[Metric]:
        """The metrics, with any rescaled domains."""
        return list(self._metrics.values())

    @property
    def metric_names(self) -> list[str]:
        return list(self._metrics)

    @property
    def alternatives(self) -> list[str]:
        return list(self._alternatives)

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    @property
    def value_functions(self) -> dict[str, ValueFunction]:
        return dict(self._value_functions)

    @property
    def scaling_function(self) -> str:
        return self._scaling_function

    def _check_alternative(self, alternative: str) -> dict[str, Score]:
        if alternative not in self._alternatives:
            raise ValidationError(f"unknown alternative {alternative!r}")
        return self._alternatives[alternative]

    def metric_scores(self, metric: str, valid_only: bool = False) -> list[Score]:
        """Scores of one metric, in alternative order."""
        out = [alt[metric] for alt in self._alternatives.values()]
        if valid_only:
            out = [s for s in out if s.valid]
        return out

    def scores_by_metric(self) -> dict[str, list[float]]:
        return {m: [s.value for s in self.metric_scores(m)] for m in self._metrics}

    # --- Values ---

    def score_value(self, score: Score) -> float:
        """Value of one score; invalid scores are worth 0."""
        if not score.valid:
            return 0.0
        return self._value_functions[score.name].value(score.value)

    def alternative_values(self, alternative: str) -> dict[str, float]:
        """Metric name -> value for one alternative."""
        scores = self._check_alternative(alternative)
        return {m: self.score_value(scores[m]) for m in self._metrics}

    def values_by_metric(self) -> dict[str, list[float]]:
        return {
            m: [self.score_value(s) for s in self.metric_scores(m)]
            for m in self._metrics
        }

    def multi_objective_value(self, alternative: str) -> float:
        """Weighted sum of the alternative's metric values, in [0, 1]."""
        values = self.alternative_values(alternative)
        return sum(self._weights[m] * v for m, v in values.items())

    def multi_objective_values(self) -> dict[str, float]:
        return {a: self.multi_objective_value(a) for a in self._alternatives}

    def sorted_by_value(self) -> list[tuple[str, float]]:
        """(alternative, value) pairs, best first; ties broken by name."""
        values = self.multi_objective_values()
        return sorted(values.items(), key=lambda kv: (-kv[1], kv[0]))

    # --- Ranks ---

    def _check_method(self, method: str) -> None:
        if method not in RANKING_METHODS:
            raise ValidationError(f"method: must be one of {RANKING_METHODS}, got {method!r}")

    def ranks_by_metric(self, method: str = "ordinal") -> dict[str, list[float]]:
        """
        Rank of each alternative within each metric (1 = best).

        Ordinal ties keep alternative order.
        """
        self._check_method(method)
        out: dict[str, list[float]] = {}
        for name, metric in self._metrics.items():
            scores = np.array([s.value for s in self.metric_scores(name)], dtype=np.float64)
            if scores.size == 0:
                out[name] = []
                continue
            keys = -scores if metric.bigger_is_better else scores
            out[name] = sp_stats.rankdata(keys, method=method).astype(float).tolist()
        return out

    def alternative_ranks(self, method: str = "ordinal") -> dict[str, dict[str, float]]:
        """Alternative -> metric -> rank."""
        by_metric = self.ranks_by_metric(method)
        return {
            a: {m: by_metric[m][i] for m in self._metrics}
            for i, a in enumerate(self._alternatives)
        }

    def average_ranks(self, method: str = "ordinal") -> dict[str, float]:
        return {
            a: float(np.mean(list(ranks.values())))
            for a, ranks in self.alternative_ranks(method).items()
        }

    def first_rank_counts(self, method: str = "ordinal") -> dict[str, int]:
        """Number of metrics on which each alternative ranks first."""
        return {
            a: sum(1 for r in ranks.values() if r == 1.0)
            for a, ranks in self.alternative_ranks(method).items()
        }

    def sorted_by_average_rank(self, method: str = "ordinal") -> list[tuple[str, float]]:
        """
        (alternative, average rank) pairs, best first.

        Ties go to the alternative with more first places, then by name.
        """
        avg = self.average_ranks(method)
        firsts = self.first_rank_counts(method)
        return sorted(avg.items(), key=lambda kv: (kv[1], -firsts[kv[0]], kv[0]))

    # --- Tables ---

    def score_table(self) -> dict[str, list[Any]]:
        """Column dict: 'Alternative' plus one column of raw scores per metric."""
        table: dict[str, list[Any]] = {"Alternative": self.alternatives}
        table.update(self.scores_by_metric())
        return table

    def value_table(self) -> dict[str, list[Any]]:
        """Column dict of metric values plus the weighted overall value."""
        table: dict[str, list[Any]] = {"Alternative": self.alternatives}
        table.update(self.values_by_metric())
        table["Overall Value"] = [self.multi_objective_value(a) for a in self._alternatives]
        return table

    def rank_table(self, method: str = "ordinal") -> dict[str, list[Any]]:
        """Column dict of per-metric ranks, average rank and first-rank count."""
        table: dict[str, list[Any]] = {"Alternative": self.alternatives}
        table.update(self.ranks_by_metric(method))
        avg = self.average_ranks(method)
        firsts = self.first_rank_counts(method)
        table["Average Rank"] = [avg[a] for a in self._alternatives]
        table["First Rank Count"] = [firsts[a] for a in self._alternatives]
        return table

    def __repr__(self) -> str:
        return (
            f"AdditiveMODAModel(metrics={self.metric_names}, "
            f"alternatives={len(self._alternatives)}, scaling={self._scaling_function!r})"
        )
