"""
Tests for bootstrap resampling.

Verifies seed reproducibility, parameter bootstraps driven by estimators,
dropped resamples, the interval helpers for the extremes and the coverage
of the percentile interval.
"""

import numpy as np
import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.estimation import (
    ExponentialMLEParameterEstimator,
    NormalMLEParameterEstimator,
)
from pydistfit.montecarlo import (
    BootstrapDesign,
    bootstrap,
    bootstrap_parameters,
    bootstrap_statistic,
    confidence_interval_for_maximum,
    confidence_interval_for_minimum,
)


class TestBootstrapStatistic:

    def test_mean(self, rng):
        x = rng.normal(10.0, 2.0, size=100)
        sol = bootstrap_statistic(x, np.mean, name="mean", num_samples=399, seed=1)
        assert sol.names == ("mean",)
        assert sol.num_samples == 399
        assert sol.num_failed == 0
        assert sol.t.shape == (399, 1)
        assert sol.t0[0] == pytest.approx(np.mean(x))
        est = sol.estimate("mean")
        assert est.std_error == pytest.approx(2.0 / np.sqrt(100), rel=0.25)
        lo, hi = est.ci
        assert lo < np.mean(x) < hi

    def test_seed_reproducible(self, rng):
        x = rng.exponential(size=60)
        a = bootstrap_statistic(x, np.median, num_samples=99, seed=7)
        b = bootstrap_statistic(x, np.median, num_samples=99, seed=7)
        np.testing.assert_array_equal(a.t, b.t)

    def test_threads_match_sequential(self, rng):
        x = rng.exponential(size=60)
        seq = bootstrap_statistic(x, np.mean, num_samples=50, seed=3, n_jobs=1)
        par = bootstrap_statistic(x, np.mean, num_samples=50, seed=3, n_jobs=4)
        np.testing.assert_array_equal(seq.t, par.t)

    def test_failed_resamples_are_dropped(self):
        x = np.arange(1.0, 11.0)

        def mean_if_max_present(sample):
            return np.mean(sample) if np.any(sample == 10.0) else np.nan

        sol = bootstrap_statistic(x, mean_if_max_present, num_samples=200, seed=5)
        assert sol.num_failed > 0
        assert sol.t.shape[0] == 200 - sol.num_failed
        assert sol.estimates[0].num_samples == sol.t.shape[0]
        assert any("dropped" in w for w in sol.warnings)

    def test_original_failure_raises(self):
        with pytest.raises(ValidationError, match="no usable estimate"):
            bootstrap_statistic([1.0, 2.0], lambda s: np.nan, num_samples=10)

    def test_empty_data_raises(self):
        with pytest.raises(ValidationError):
            bootstrap_statistic([], np.mean)

    def test_design_validation(self):
        with pytest.raises(ValidationError, match="callable"):
            BootstrapDesign.for_statistic([1.0, 2.0], "mean")

    def test_unknown_backend(self):
        design = BootstrapDesign.for_statistic([1.0, 2.0, 3.0], np.mean)
        with pytest.raises(ValidationError, match="Unknown backend"):
            bootstrap(design, backend='gpu')


class TestBootstrapParameters:

    def test_from_estimator(self, exponential_data):
        est = ExponentialMLEParameterEstimator()
        sol = bootstrap_parameters(est, exponential_data, num_samples=199, seed=42)
        assert sol.names == ("mean",)
        assert sol.label == "ExponentialMLE"
        assert sol.t0[0] == pytest.approx(np.mean(exponential_data))
        assert sol.total_mse == pytest.approx(sol.mse[0])
        assert sol.mse[0] == pytest.approx(sol.variance[0] + sol.bias[0] ** 2)

    def test_from_result_uses_test_data(self, normal_data):
        result = NormalMLEParameterEstimator().estimate(normal_data)
        sol = bootstrap_parameters(result, num_samples=99, seed=0)
        assert sol.names == ("mean", "variance")
        np.testing.assert_allclose(sol.t0, result.parameter_array())
        cis = sol.confidence_intervals
        assert cis["mean"][0] < 50.0 < cis["mean"][1]

    def test_estimator_requires_data(self):
        with pytest.raises(ValidationError, match="data is required"):
            bootstrap_parameters(NormalMLEParameterEstimator())

    def test_result_helpers(self, exponential_data):
        result = ExponentialMLEParameterEstimator().estimate(exponential_data)
        cis = result.percentile_bootstrap_ci(level=0.9, num_samples=99, seed=1)
        assert set(cis) == {"mean"}
        assert cis["mean"][0] < result.parameters["mean"] < cis["mean"][1]

    def test_summary(self, exponential_data):
        sol = bootstrap_parameters(
            ExponentialMLEParameterEstimator(), exponential_data, num_samples=49, seed=2,
        )
        text = sol.summary()
        assert "BOOTSTRAP ESTIMATES: ExponentialMLE" in text
        assert "95% CI" in text
        assert "failed=0" in repr(sol)
        records = sol.to_records()
        assert records[0]["name"] == "mean"
        assert records[0]["label"] == "ExponentialMLE"


class TestExtremes:

    def test_minimum_interval(self, rng):
        x = 5.0 + rng.exponential(2.0, size=200)
        lo, hi = confidence_interval_for_minimum(x, seed=11)
        assert lo == pytest.approx(x.min())
        assert hi >= lo

    def test_maximum_interval(self, rng):
        x = rng.uniform(0.0, 1.0, size=200)
        lo, hi = confidence_interval_for_maximum(x, seed=11)
        assert hi == pytest.approx(x.max())
        assert lo <= hi


class TestCoverage:

    def test_percentile_interval_covers_mean(self):
        """Percentile intervals for the mean cover the truth at roughly the nominal rate."""
        master = np.random.default_rng(2024)
        hits = 0
        reps = 40
        for _ in range(reps):
            x = master.normal(0.0, 1.0, size=50)
            sol = bootstrap_statistic(x, np.mean, num_samples=199,
                                      seed=int(master.integers(1 << 31)))
            lo, hi = sol.estimates[0].ci
            hits += lo <= 0.0 <= hi
        assert 0.8 <= hits / reps <= 1.0

    def test_estimator_interval_covers_exponential_mean(self):
        """Re-running the exponential MLE on resamples covers the true mean near 95%."""
        master = np.random.default_rng(7)
        estimator = ExponentialMLEParameterEstimator()
        hits = 0
        reps = 60
        for _ in range(reps):
            x = master.exponential(10.0, size=60)
            sol = bootstrap_parameters(estimator, x, num_samples=199, level=0.95,
                                       seed=int(master.integers(1 << 31)))
            assert sol.num_failed == 0
            lo, hi = sol.confidence_intervals["mean"]
            hits += lo <= 10.0 <= hi
        assert 0.8 <= hits / reps <= 1.0
