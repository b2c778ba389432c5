"""
Tests for gof_test().
"""

import math

import numpy as np
import pytest
from scipy import stats as sp_stats

from pydistfit.core.exceptions import ValidationError
from pydistfit.distributions import Family, create_distribution
from pydistfit.estimation import (
    ExponentialMLEParameterEstimator,
    NormalMLEParameterEstimator,
)
from pydistfit.scoring import gof_test


@pytest.fixture
def exponential10():
    return create_distribution(Family.EXPONENTIAL, {"mean": 10.0})


class TestGOFTest:

    def test_report_fields(self, exponential_data, exponential10):
        sol = gof_test(exponential_data, exponential10)
        assert set(sol.statistics) == {
            "Chi-Squared", "K-S", "Anderson-Darling", "Cramer-von Mises", "Watson",
        }
        assert all(0.0 <= p <= 1.0 for p in sol.p_values.values())
        assert sol.backend_name == 'cpu_gof'
        assert sol.n == exponential_data.size
        assert sol.chi_squared.num_bins == len(sol.chi_squared.break_points) - 1

    def test_ks_pvalue_matches_scipy(self, exponential_data, exponential10):
        sol = gof_test(exponential_data, exponential10)
        ref = sp_stats.kstest(exponential_data, exponential10.cdf, method='exact')
        assert sol.ks.statistic == pytest.approx(ref.statistic)
        assert sol.ks.p_value == pytest.approx(ref.pvalue, rel=1e-6)

    def test_cvm_pvalue_close_to_scipy(self, exponential_data, exponential10):
        sol = gof_test(exponential_data, exponential10)
        ref = sp_stats.cramervonmises(exponential_data, exponential10.cdf)
        assert sol.cramer_von_mises.p_value == pytest.approx(ref.pvalue, abs=0.02)

    def test_bad_fit_rejected(self, exponential_data):
        wrong = create_distribution(Family.NORMAL, {"mean": 50.0, "variance": 25.0})
        sol = gof_test(exponential_data, wrong)
        assert sol.p_values["K-S"] < 1e-6
        assert sol.p_values["Anderson-Darling"] < 1e-6
        assert sol.p_values["Chi-Squared"] < 1e-6

    def test_degrees_of_freedom(self, exponential_data, exponential10):
        sol = gof_test(exponential_data, exponential10)
        assert sol.chi_squared.dof == sol.chi_squared.num_bins - 1 - 1
        free = gof_test(exponential_data, exponential10, num_estimated_parameters=0)
        assert free.chi_squared.dof == free.chi_squared.num_bins - 1

    def test_small_expected_warning(self, rng, exponential10):
        x = rng.exponential(10.0, size=10)
        sol = gof_test(x, exponential10)
        assert sol.chi_squared.num_bins == 3
        assert sol.chi_squared.num_small_expected == 3
        assert any("Chi-squared approximation may be incorrect" in w for w in sol.warnings)

    def test_zero_dof_gives_nan_pvalue(self, rng):
        x = rng.normal(size=10)
        sol = gof_test(x, create_distribution(Family.NORMAL, {"mean": 0.0, "variance": 1.0}))
        assert sol.chi_squared.dof == 0
        assert math.isnan(sol.chi_squared.p_value)
        assert "NA" in sol.summary()

    def test_negative_dof_raises(self, rng):
        x = rng.triangular(0.0, 1.0, 2.0, size=10)
        tri = create_distribution(Family.TRIANGULAR, {"min": 0.0, "mode": 1.0, "max": 2.0})
        with pytest.raises(ValidationError, match="degrees of freedom"):
            gof_test(x, tri)

    def test_discrete_warning(self, rng):
        x = rng.poisson(4.0, size=200).astype(float)
        sol = gof_test(x, create_distribution(Family.POISSON, {"mean": 4.0}))
        assert any("discrete" in w for w in sol.warnings)


class TestGOFTestInputs:

    def test_from_estimation_result(self, exponential_data):
        result = ExponentialMLEParameterEstimator().estimate(exponential_data)
        sol = gof_test(result)
        assert sol.distribution.family is Family.EXPONENTIAL
        assert sol.n == exponential_data.size

    def test_unusable_result(self):
        failed = NormalMLEParameterEstimator().estimate([1.0])
        with pytest.raises(ValidationError, match="no usable parameters"):
            gof_test(failed)

    def test_distribution_required(self, exponential_data):
        with pytest.raises(ValidationError, match="distribution is required"):
            gof_test(exponential_data)

    def test_two_observations_required(self, exponential10):
        with pytest.raises(ValidationError):
            gof_test([1.0], exponential10)

    def test_negative_parameter_count(self, exponential_data, exponential10):
        with pytest.raises(ValidationError):
            gof_test(exponential_data, exponential10, num_estimated_parameters=-1)

    def test_summary_and_repr(self, exponential_data, exponential10):
        sol = gof_test(exponential_data, exponential10)
        text = sol.summary()
        assert "Goodness-of-fit tests" in text
        assert "Exponential(mean=10)" in text
        assert "Anderson-Darling" in text
        assert repr(sol).startswith("GOFSolution(")
