"""
Tests for left-shift and range estimation.
"""

import numpy as np
import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.estimation import (
    estimate_left_shift_parameter,
    left_shift_data,
    range_estimate,
)


class TestLeftShift:
    """estimate_left_shift_parameter() and left_shift_data()."""

    def test_shifted_exponential(self, rng):
        x = 5.0 + rng.exponential(2.0, size=500)
        shift = estimate_left_shift_parameter(x)
        assert 4.5 < shift < x.min()

    def test_min_zero_gives_no_shift(self, rng):
        x = np.concatenate([[0.0], rng.exponential(2.0, size=100)])
        assert estimate_left_shift_parameter(x) == 0.0

    def test_negative_values_give_no_shift(self):
        assert estimate_left_shift_parameter([-1.0, 2.0, 3.0, 10.0]) == 0.0

    def test_too_few_observations(self):
        assert estimate_left_shift_parameter([5.0, 6.0]) == 0.0

    def test_all_equal(self):
        assert estimate_left_shift_parameter([3.0, 3.0, 3.0]) == 0.0

    def test_second_value_is_max(self):
        assert estimate_left_shift_parameter([1.0, 1.0, 2.0, 2.0]) == 0.0

    def test_idempotent(self, rng):
        x = 5.0 + rng.exponential(2.0, size=500)
        shifted = left_shift_data(x)
        assert shifted.shift > 0.0
        again = estimate_left_shift_parameter(shifted.data)
        assert again < shifted.shift

    def test_shifted_data_invariant(self, rng):
        x = 3.0 + rng.gamma(2.0, 1.0, size=200)
        shifted = left_shift_data(x)
        np.testing.assert_allclose(shifted.data, x - shifted.shift)
        assert shifted.data.min() > 0.0

    def test_tolerance_must_be_positive(self):
        with pytest.raises(ValidationError):
            estimate_left_shift_parameter([1.0, 2.0, 3.0], tolerance=0.0)


class TestRangeEstimate:

    def test_values(self):
        assert range_estimate(0.0, 10.0, 11) == pytest.approx((-1.0, 11.0))

    def test_strictly_outside(self, rng):
        x = rng.uniform(2.0, 3.0, size=50)
        lo, hi = range_estimate(x.min(), x.max(), x.size)
        assert lo < x.min()
        assert hi > x.max()

    def test_needs_two_observations(self):
        with pytest.raises(ValidationError, match="at least two"):
            range_estimate(0.0, 1.0, 1)

    def test_needs_distinct_limits(self):
        with pytest.raises(ValidationError, match="strictly less"):
            range_estimate(1.0, 1.0, 5)
