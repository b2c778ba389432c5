"""
Tests for the scoring models.
"""

import math

import numpy as np
import pytest

from pydistfit.core.config import BootstrapConfig
from pydistfit.distributions import Family, create_distribution
from pydistfit.estimation import (
    ExponentialMLEParameterEstimator,
    NormalMLEParameterEstimator,
)
from pydistfit.scoring import (
    MAX_VALUE,
    AICScoringModel,
    AndersonDarlingScoringModel,
    BICScoringModel,
    ChiSquaredScoringModel,
    CramerVonMisesScoringModel,
    Direction,
    KSScoringModel,
    MallowsL2ScoringModel,
    Metric,
    ParameterMSEScoringModel,
    PPCorrelationScoringModel,
    QQCorrelationScoringModel,
    QQSSEScoringModel,
    SquaredErrorScoringModel,
    all_scoring_models,
    chi_squared_histogram,
    default_scoring_models,
    score_results,
)


@pytest.fixture
def true_exponential():
    return create_distribution(Family.EXPONENTIAL, {"mean": 10.0})


@pytest.fixture
def wrong_normal():
    return create_distribution(Family.NORMAL, {"mean": 50.0, "variance": 25.0})


class TestModelCatalogue:

    def test_default_models(self):
        names = [m.name for m in default_scoring_models()]
        assert names == ["BIC", "Anderson-Darling", "Cramer-von Mises", "QQ-Correlation"]

    def test_all_models_unique(self):
        names = [m.name for m in all_scoring_models()]
        assert len(names) == 14
        assert len(set(names)) == 14

    def test_correlations_prefer_bigger(self):
        for model in (PPCorrelationScoringModel(), QQCorrelationScoringModel()):
            assert model.direction is Direction.BIGGER_IS_BETTER
            assert model.metric.domain == (0.0, 1.0)
            assert not model.metric.allow_upper_limit_adjustment

    def test_information_criteria_unbounded(self):
        assert AICScoringModel().metric.domain == (-math.inf, math.inf)
        assert BICScoringModel().metric.domain == (-math.inf, math.inf)

    def test_metric_override(self):
        m = Metric("K-S", 0.0, 0.5)
        assert KSScoringModel(m).metric is m


class TestScoring:

    def test_empty_data_gives_bad_score(self, true_exponential):
        s = ChiSquaredScoringModel().score([], true_exponential)
        assert not s.valid
        assert s.value == MAX_VALUE

    def test_true_model_beats_wrong_model(self, exponential_data, true_exponential, wrong_normal):
        for model in (ChiSquaredScoringModel(), SquaredErrorScoringModel(),
                      AndersonDarlingScoringModel(), CramerVonMisesScoringModel(),
                      KSScoringModel(), QQSSEScoringModel(), BICScoringModel()):
            good = model.score(exponential_data, true_exponential)
            bad = model.score(exponential_data, wrong_normal)
            assert good.valid
            assert good.value < bad.value or not bad.valid, model.name

    def test_correlation_of_true_model(self, exponential_data, true_exponential):
        s = QQCorrelationScoringModel().score(exponential_data, true_exponential)
        assert s.valid
        assert s.value > 0.97

    def test_outside_support_is_bad(self):
        d = create_distribution(Family.UNIFORM, {"min": 0.0, "max": 1.0})
        s = AndersonDarlingScoringModel().score([0.2, 0.5, 2.0], d)
        assert not s.valid

    def test_mallows_is_root_mean_qq_sse(self, exponential_data, true_exponential):
        sse = QQSSEScoringModel().score(exponential_data, true_exponential).value
        l2 = MallowsL2ScoringModel().score(exponential_data, true_exponential).value
        assert l2 == pytest.approx(math.sqrt(sse / exponential_data.size))

    def test_aic_and_bic(self, exponential_data, true_exponential):
        ll = true_exponential.log_likelihood(exponential_data)
        n = exponential_data.size
        assert AICScoringModel().score(exponential_data, true_exponential).value == \
            pytest.approx(1.0 - 2.0 * ll)
        assert BICScoringModel().score(exponential_data, true_exponential).value == \
            pytest.approx(math.log(n) - 2.0 * ll)

    def test_aic_small_sample(self):
        d = create_distribution(Family.EXPONENTIAL, {"mean": 3.0})
        score = AICScoringModel().score([1.0, 2.0, 3.0, 4.0, 5.0], d)
        assert score.valid
        assert score.value == pytest.approx(21.9861228866811, rel=1e-12)

    def test_aic_too_few_observations_is_bad(self):
        d = create_distribution(
            Family.GENERALIZED_BETA, {"alpha": 2.0, "beta": 2.0, "min": 0.0, "max": 1.0}
        )
        score = AICScoringModel().score([0.3, 0.6], d)
        assert not score.valid
        assert score == AICScoringModel().metric.bad_score()


class TestScoreResult:

    def test_failed_result_gets_bad_score(self):
        failed = NormalMLEParameterEstimator().estimate([1.0])
        for model in default_scoring_models():
            assert not model.score_result(failed).valid

    def test_score_results_grid(self, exponential_data):
        results = [
            ExponentialMLEParameterEstimator().estimate(exponential_data),
            NormalMLEParameterEstimator().estimate([1.0]),
        ]
        grid = score_results(results)
        assert len(grid) == 2
        assert all(len(row) == 4 for row in grid)
        assert all(s.valid for s in grid[0])
        assert not any(s.valid for s in grid[1])


class TestParameterMSE:

    def test_score_result(self, exponential_data):
        model = ParameterMSEScoringModel(BootstrapConfig(num_samples=49, seed=1))
        result = ExponentialMLEParameterEstimator().estimate(exponential_data)
        s = model.score_result(result)
        assert s.valid
        # roughly the standard error of the mean, 10 / sqrt(500)
        assert 0.2 < s.value < 1.0

    def test_distribution_uses_default_estimator(self, exponential_data, true_exponential):
        model = ParameterMSEScoringModel(BootstrapConfig(num_samples=49, seed=1))
        result = ExponentialMLEParameterEstimator().estimate(exponential_data)
        assert model.score(exponential_data, true_exponential).value == \
            pytest.approx(model.score_result(result).value)


class TestChiSquaredHistogram:

    def test_every_observation_binned(self, exponential_data, true_exponential):
        h = chi_squared_histogram(exponential_data, true_exponential)
        assert h.count == exponential_data.size
        assert h.break_points[0] == -math.inf
        assert h.break_points[-1] == math.inf
        assert np.sum(h.bin_probabilities(true_exponential)) == pytest.approx(1.0)

    def test_equal_probability_bins(self, exponential_data, true_exponential):
        h = chi_squared_histogram(exponential_data, true_exponential)
        probs = h.bin_probabilities(true_exponential)
        np.testing.assert_allclose(probs, 1.0 / h.num_bins, rtol=1e-8)
