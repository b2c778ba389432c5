"""
Tests for type-7 quantiles and plotting positions.
"""

import numpy as np
import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.descriptive import empirical_probabilities, type7_quantile


class TestType7Quantile:
    """Matches numpy's default (linear) quantile."""

    def test_matches_numpy(self, rng):
        x = rng.normal(size=57)
        p = [0.0, 0.1, 0.25, 0.5, 0.9, 1.0]
        np.testing.assert_allclose(type7_quantile(x, p), np.quantile(x, p), rtol=1e-12)

    def test_median_of_four(self):
        assert type7_quantile([4.0, 1.0, 3.0, 2.0], [0.5])[0] == pytest.approx(2.5)


class TestEmpiricalProbabilities:

    def test_base(self):
        np.testing.assert_allclose(empirical_probabilities(4, "base"), [0.25, 0.5, 0.75, 1.0])

    def test_continuity1(self):
        np.testing.assert_allclose(
            empirical_probabilities(4, "continuity1"), [0.125, 0.375, 0.625, 0.875]
        )

    def test_continuity2(self):
        p = empirical_probabilities(3, "continuity2")
        np.testing.assert_allclose(p, (np.arange(1, 4) - 0.375) / 3.25)

    def test_invalid(self):
        with pytest.raises(ValidationError):
            empirical_probabilities(0)
        with pytest.raises(ValidationError):
            empirical_probabilities(3, "hazen")
