"""
Tests for the delete-1 jackknife.
"""

import math

import numpy as np
import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.montecarlo import JackknifeEstimator


class TestJackknife:

    def test_mean_is_unbiased(self, rng):
        x = rng.normal(size=30)
        jk = JackknifeEstimator(x)
        assert jk.original_estimate == pytest.approx(np.mean(x))
        assert jk.jackknife_estimate == pytest.approx(np.mean(x))
        assert jk.bias == pytest.approx(0.0, abs=1e-12)

    def test_standard_error_of_mean(self, rng):
        x = rng.normal(size=30)
        jk = JackknifeEstimator(x)
        assert jk.standard_error == pytest.approx(np.std(x, ddof=1) / math.sqrt(30))

    def test_corrects_plugin_variance(self, rng):
        # the jackknife correction of the plug-in variance is the unbiased variance
        x = rng.normal(size=25)
        jk = JackknifeEstimator(x, statistic=np.var)
        assert jk.bias_corrected_estimate == pytest.approx(np.var(x, ddof=1))

    def test_leave_one_out(self):
        jk = JackknifeEstimator([1.0, 2.0, 3.0])
        np.testing.assert_allclose(jk.leave_one_out_estimates, [2.5, 2.0, 1.5])
        np.testing.assert_allclose(jk.pseudo_values, [1.0, 2.0, 3.0])

    def test_confidence_interval(self, rng):
        x = rng.normal(5.0, 1.0, size=40)
        lo, hi = JackknifeEstimator(x).confidence_interval(0.95)
        assert lo < np.mean(x) < hi

    def test_requires_two_observations(self):
        with pytest.raises(ValidationError, match="at least 2"):
            JackknifeEstimator([1.0])

    def test_summary(self):
        text = JackknifeEstimator([1.0, 2.0, 4.0]).summary()
        assert "bias-corrected estimate" in text
