"""
Tests for the per-family parameter estimators.

Recovery tests draw large seeded samples and compare against the true
parameters or against scipy's fits; failure tests check that estimate()
reports the failed precondition instead of raising.
"""

import math

import numpy as np
import pytest
from scipy import stats as sp_stats

from pydistfit.core.exceptions import ValidationError
from pydistfit.estimation import (
    BetaMOMParameterEstimator,
    BinomialMaxParameterEstimator,
    BinomialMOMParameterEstimator,
    ExponentialMLEParameterEstimator,
    GammaMLEParameterEstimator,
    GammaMOMParameterEstimator,
    GeneralizedBetaMOMParameterEstimator,
    LaplaceParameterEstimator,
    LogisticParameterEstimator,
    LognormalMLEParameterEstimator,
    NegBinomialMOMParameterEstimator,
    NormalMLEParameterEstimator,
    PearsonType5MLEParameterEstimator,
    PoissonMLEParameterEstimator,
    ShiftedData,
    TriangularParameterEstimator,
    UniformParameterEstimator,
    WeibullMLEParameterEstimator,
    WeibullPercentileParameterEstimator,
)
from pydistfit.distributions import Family


class TestEstimatorBasics:

    def test_default_name(self):
        assert GammaMLEParameterEstimator().name == "GammaMLE"
        assert UniformParameterEstimator().name == "Uniform"
        assert WeibullPercentileParameterEstimator().name == "WeibullPercentile"

    def test_custom_name(self):
        assert NormalMLEParameterEstimator(name="MyNormal").name == "MyNormal"

    def test_check_range_flags(self):
        assert ExponentialMLEParameterEstimator.check_range
        assert GammaMLEParameterEstimator.check_range
        assert not NormalMLEParameterEstimator.check_range
        assert not UniformParameterEstimator.check_range

    def test_result_carries_estimator(self, exponential_data):
        est = ExponentialMLEParameterEstimator()
        result = est.estimate(exponential_data)
        assert result.estimator is est
        assert result.family is Family.EXPONENTIAL
        assert result.distribution_name == "Exponential"
        assert result.statistics.count == exponential_data.size

    def test_non_finite_data_raises(self):
        with pytest.raises(ValidationError, match="non-finite"):
            NormalMLEParameterEstimator().estimate([1.0, np.nan, 2.0])

    def test_estimate_array(self, normal_data):
        arr = NormalMLEParameterEstimator().estimate_array(normal_data)
        assert arr.shape == (2,)
        assert NormalMLEParameterEstimator().estimate_array([1.0]).size == 0


class TestResultEquality:
    """Results and shifts compare by value and stay hashable despite their arrays."""

    def test_same_data_results_are_equal(self, exponential_data):
        est = ExponentialMLEParameterEstimator()
        a = est.estimate(exponential_data)
        b = est.estimate(exponential_data.copy())
        assert a == b
        assert hash(a) == hash(b)

    def test_different_data_results_differ(self, exponential_data):
        est = ExponentialMLEParameterEstimator()
        assert est.estimate(exponential_data) != est.estimate(exponential_data[:100])

    def test_shifted_results(self, exponential_data):
        x = exponential_data + 5.0
        shifted = ShiftedData.from_original(x, 4.0)
        est = ExponentialMLEParameterEstimator()
        a = est.estimate(shifted.data).with_shift(x, shifted)
        b = est.estimate(shifted.data).with_shift(x.copy(), ShiftedData.from_original(x, 4.0))
        assert a == b
        assert len({a, b}) == 1

    def test_shifted_data_compares_by_shift(self):
        x = np.array([3.0, 4.0, 6.0])
        assert ShiftedData.from_original(x, 1.0) == ShiftedData.from_original(x, 1.0)
        assert ShiftedData.from_original(x, 1.0) != ShiftedData.from_original(x, 2.0)
        assert hash(ShiftedData.from_original(x, 1.0)) == hash(ShiftedData(1.0, x - 1.0))


class TestFailureMessages:
    """Data an estimator cannot fit gives success=False and a message."""

    def test_empty_data(self):
        result = NormalMLEParameterEstimator().estimate([])
        assert not result.success
        assert result.parameters is None
        assert "at least two observations" in result.message

    def test_empty_data_one_observation_families(self):
        result = ExponentialMLEParameterEstimator().estimate([])
        assert not result.success
        assert "at least one observation" in result.message

    @pytest.mark.parametrize("estimator_cls", [
        TriangularParameterEstimator,
        UniformParameterEstimator,
        WeibullPercentileParameterEstimator,
        NormalMLEParameterEstimator,
    ])
    def test_all_equal(self, estimator_cls):
        result = estimator_cls().estimate([1.0, 1.0, 1.0, 1.0])
        assert not result.success
        assert "all equal" in result.message

    @pytest.mark.parametrize("estimator_cls", [
        ExponentialMLEParameterEstimator,
        PoissonMLEParameterEstimator,
        BinomialMOMParameterEstimator,
        NegBinomialMOMParameterEstimator,
        GammaMOMParameterEstimator,
    ])
    def test_negative_values(self, estimator_cls):
        result = estimator_cls().estimate([-1.0, 2.0, 3.0])
        assert not result.success
        assert "less than 0.0" in result.message

    @pytest.mark.parametrize("estimator_cls", [
        LognormalMLEParameterEstimator,
        WeibullMLEParameterEstimator,
        PearsonType5MLEParameterEstimator,
    ])
    def test_strictly_positive_support(self, estimator_cls):
        result = estimator_cls().estimate([0.0, 2.0, 3.0])
        assert not result.success
        assert "less than or equal to 0.0" in result.message

    def test_weibull_percentile_small_sample(self):
        result = WeibullPercentileParameterEstimator().estimate(np.arange(1.0, 9.0))
        assert not result.success
        assert "less than 10 observations" in result.message

    def test_beta_above_one(self):
        result = BetaMOMParameterEstimator().estimate([0.2, 0.5, 1.5])
        assert not result.success
        assert "greater than 1.0" in result.message

    def test_binomial_underdispersion_required(self):
        result = BinomialMOMParameterEstimator().estimate([0.0, 10.0, 0.0, 10.0])
        assert not result.success
        assert "sample average <= sample variance" in result.message

    def test_negative_binomial_overdispersion_required(self):
        result = NegBinomialMOMParameterEstimator().estimate([1.0, 2.0, 1.0, 2.0])
        assert not result.success
        assert "sample variance <= sample average" in result.message


class TestContinuousRecovery:

    def test_exponential(self, rng):
        x = rng.exponential(10.0, size=2000)
        result = ExponentialMLEParameterEstimator().estimate(x)
        assert result.success
        assert abs(result.parameters["mean"] - 10.0) < 1.0

    def test_normal(self, normal_data):
        result = NormalMLEParameterEstimator().estimate(normal_data)
        assert result.parameters["mean"] == pytest.approx(np.mean(normal_data))
        assert result.parameters["variance"] == pytest.approx(np.var(normal_data, ddof=1))

    def test_lognormal_matches_log_moments(self, rng):
        x = rng.lognormal(1.0, 0.5, size=1000)
        result = LognormalMLEParameterEstimator().estimate(x)
        mu = np.mean(np.log(x))
        s2 = np.var(np.log(x), ddof=1)
        assert result.parameters["mean"] == pytest.approx(math.exp(mu + s2 / 2.0))
        assert result.distribution().mean() == pytest.approx(result.parameters["mean"])

    def test_uniform(self):
        x = np.arange(0.0, 11.0)
        result = UniformParameterEstimator().estimate(x)
        assert result.parameters == pytest.approx({"min": -1.0, "max": 11.0})

    def test_triangular_mode_inside_support(self, rng):
        x = rng.triangular(0.0, 2.0, 10.0, size=1000)
        p = TriangularParameterEstimator().estimate(x).parameters
        assert p["min"] <= p["mode"] <= p["max"]
        assert p["mode"] == pytest.approx(2.0, abs=1.0)

    def test_logistic(self, rng):
        x = rng.logistic(3.0, 2.0, size=2000)
        p = LogisticParameterEstimator().estimate(x).parameters
        assert p["location"] == pytest.approx(np.mean(x))
        assert p["scale"] == pytest.approx(np.std(x, ddof=1) * math.sqrt(3.0) / math.pi)

    def test_laplace(self, rng):
        x = rng.laplace(1.0, 2.0, size=2000)
        p = LaplaceParameterEstimator().estimate(x).parameters
        assert p["location"] == pytest.approx(np.median(x))
        assert p["scale"] == pytest.approx(2.0, rel=0.1)

    def test_beta(self, rng):
        x = rng.beta(2.0, 5.0, size=2000)
        p = BetaMOMParameterEstimator().estimate(x).parameters
        assert p["alpha"] == pytest.approx(2.0, rel=0.15)
        assert p["beta"] == pytest.approx(5.0, rel=0.15)

    def test_generalized_beta_support(self, rng):
        x = 10.0 + 5.0 * rng.beta(2.0, 3.0, size=1000)
        p = GeneralizedBetaMOMParameterEstimator().estimate(x).parameters
        assert p["min"] < x.min()
        assert p["max"] > x.max()
        assert p["alpha"] > 0.0 and p["beta"] > 0.0


class TestGammaFamily:

    def test_gamma_mle(self, rng):
        x = rng.gamma(shape=12.5, scale=0.4, size=1000)
        result = GammaMLEParameterEstimator().estimate(x)
        assert result.success
        p = result.parameters
        assert p["shape"] * p["scale"] == pytest.approx(np.mean(x), rel=0.05)
        ref_shape, _, _ = sp_stats.gamma.fit(x, floc=0.0)
        assert p["shape"] == pytest.approx(ref_shape, rel=0.02)

    def test_gamma_mom(self, gamma_data):
        p = GammaMOMParameterEstimator().estimate(gamma_data).parameters
        m, v = np.mean(gamma_data), np.var(gamma_data, ddof=1)
        assert p["shape"] == pytest.approx(m * m / v)
        assert p["scale"] == pytest.approx(v / m)

    def test_gamma_mle_close_to_truth(self, gamma_data):
        p = GammaMLEParameterEstimator().estimate(gamma_data).parameters
        assert p["shape"] == pytest.approx(3.0, rel=0.2)
        assert p["scale"] == pytest.approx(2.0, rel=0.2)

    def test_pearson_type5(self, rng):
        x = 1.0 / rng.gamma(shape=4.0, scale=0.5, size=2000)
        result = PearsonType5MLEParameterEstimator().estimate(x)
        assert result.success
        assert result.parameters["shape"] == pytest.approx(4.0, rel=0.15)
        assert result.parameters["scale"] == pytest.approx(2.0, rel=0.15)


class TestWeibull:

    def test_mle_matches_scipy(self, rng):
        x = 3.0 * rng.weibull(1.5, size=1000)
        result = WeibullMLEParameterEstimator().estimate(x)
        assert result.success
        ref_shape, _, ref_scale = sp_stats.weibull_min.fit(x, floc=0.0)
        assert result.parameters["shape"] == pytest.approx(ref_shape, rel=0.02)
        assert result.parameters["scale"] == pytest.approx(ref_scale, rel=0.02)

    def test_percentile(self, rng):
        x = 3.0 * rng.weibull(2.0, size=1000)
        result = WeibullPercentileParameterEstimator().estimate(x)
        assert result.success
        assert result.parameters["shape"] == pytest.approx(2.0, rel=0.2)
        assert result.parameters["scale"] == pytest.approx(3.0, rel=0.1)


class TestDiscrete:

    def test_poisson(self, rng):
        x = rng.poisson(4.0, size=1000).astype(float)
        p = PoissonMLEParameterEstimator().estimate(x).parameters
        assert p["mean"] == pytest.approx(np.mean(x))

    def test_poisson_all_zero(self):
        result = PoissonMLEParameterEstimator().estimate([0.0, 0.0, 0.0])
        assert not result.success

    def test_binomial_mom(self, rng):
        x = rng.binomial(20, 0.3, size=5000).astype(float)
        p = BinomialMOMParameterEstimator().estimate(x).parameters
        assert float(p["numTrials"]).is_integer()
        assert p["numTrials"] == pytest.approx(20.0, abs=4.0)
        assert 0.0 < p["probOfSuccess"] <= 1.0

    def test_binomial_max(self, rng):
        x = rng.binomial(20, 0.5, size=2000).astype(float)
        p = BinomialMaxParameterEstimator().estimate(x).parameters
        assert p["numTrials"] >= x.max()
        assert p["probOfSuccess"] * p["numTrials"] == pytest.approx(np.mean(x))

    def test_negative_binomial(self, rng):
        x = rng.negative_binomial(5, 0.4, size=5000).astype(float)
        p = NegBinomialMOMParameterEstimator().estimate(x).parameters
        assert p["probOfSuccess"] == pytest.approx(0.4, rel=0.15)
        assert p["numSuccesses"] == pytest.approx(5.0, rel=0.25)
