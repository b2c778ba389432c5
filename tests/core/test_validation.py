"""
Tests for input validation utilities.
"""

import numpy as np
import pytest

from pydistfit.core.exceptions import DimensionError, ValidationError
from pydistfit.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_level,
    check_min_samples,
    check_positive,
    check_positive_int,
    check_sample,
)


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert isinstance(result, np.ndarray)
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_strings_rejected(self):
        with pytest.raises(ValidationError):
            check_array(["a", "b"], "x")


class TestCheckFinite:

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            check_finite(np.array([1.0, np.nan]), "x")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError):
            check_finite(np.array([1.0, np.inf]), "x")

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "x")


class TestCheckSample:
    """check_sample produces a finite 1D float array."""

    def test_scalar_becomes_length_one(self):
        result = check_sample(3.0)
        assert result.shape == (1,)

    def test_empty_accepted(self):
        assert check_sample([]).size == 0

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            check_sample(np.ones((3, 2)))

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            check_sample([1.0, float("nan")])


class TestScalarChecks:

    def test_check_1d(self):
        with pytest.raises(DimensionError):
            check_1d(np.ones((2, 2)), "x")

    def test_min_samples(self):
        with pytest.raises(ValidationError, match="at least 2"):
            check_min_samples(np.array([1.0]), 2, "x")

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 1.5])
    def test_level_outside_unit_interval(self, level):
        with pytest.raises(ValidationError):
            check_level(level)

    def test_level_inside(self):
        check_level(0.95)

    @pytest.mark.parametrize("value", [0, -3, 2.5, True])
    def test_positive_int_rejects(self, value):
        with pytest.raises(ValidationError):
            check_positive_int(value, "n")

    def test_positive_int_accepts_numpy_int(self):
        check_positive_int(np.int64(5), "n")

    @pytest.mark.parametrize("value", [0.0, -1.0, float("inf"), float("nan")])
    def test_positive_rejects(self, value):
        with pytest.raises(ValidationError):
            check_positive(value, "tol")
