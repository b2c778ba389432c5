"""
Tests for the value functions.
"""

import math

import numpy as np
import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.ranking import LinearValueFunction, LogisticValueFunction
from pydistfit.scoring import Direction, Metric

SMALLER = Metric("err", 0.0, 10.0)
BIGGER = Metric("corr", 0.0, 1.0, Direction.BIGGER_IS_BETTER)


class TestLinear:

    def test_smaller_is_better(self):
        vf = LinearValueFunction(SMALLER)
        assert vf.value(0.0) == 1.0
        assert vf.value(10.0) == 0.0
        assert vf.value(2.5) == pytest.approx(0.75)

    def test_bigger_is_better(self):
        vf = LinearValueFunction(BIGGER)
        assert vf.value(0.9) == pytest.approx(0.9)
        assert vf.value(0.0) == 0.0

    def test_clipped(self):
        vf = LinearValueFunction(SMALLER)
        assert vf.value(-5.0) == 1.0
        assert vf.value(50.0) == 0.0

    def test_nan_is_worthless(self):
        assert LinearValueFunction(SMALLER).value(math.nan) == 0.0

    def test_unbounded_domain(self):
        vf = LinearValueFunction(Metric("AIC", -math.inf, math.inf))
        assert vf.value(-1e6) == 1.0
        assert vf.value(123.0) == 1.0

    def test_values(self):
        vf = LinearValueFunction(SMALLER)
        np.testing.assert_allclose(vf.values([0.0, 5.0, 10.0]), [1.0, 0.5, 0.0])


class TestLogistic:

    def test_from_scores(self):
        vf = LogisticValueFunction.from_scores(SMALLER, [1.0, 2.0, 3.0, 4.0, 5.0], factor=0.25)
        assert vf.location == pytest.approx(3.0)
        assert vf.scale == pytest.approx(2.0 / (2.0 * math.log(3.0)))
        assert vf.value(3.0) == pytest.approx(0.5)
        assert vf.value(2.0) == pytest.approx(0.75)
        assert vf.value(4.0) == pytest.approx(0.25)

    def test_bigger_is_better_flips(self):
        vf = LogisticValueFunction(BIGGER, location=0.5, scale=0.1)
        assert vf.value(0.9) > 0.5 > vf.value(0.1)

    def test_extreme_values_stable(self):
        vf = LogisticValueFunction(SMALLER, location=0.0, scale=1e-3)
        assert vf.value(1e6) == pytest.approx(0.0)
        assert vf.value(-1e6) == pytest.approx(1.0)

    def test_step(self):
        vf = LogisticValueFunction.from_scores(SMALLER, [2.0, 2.0, 2.0])
        assert vf.scale == 0.0
        assert vf.value(1.0) == 1.0
        assert vf.value(2.0) == 0.5
        assert vf.value(3.0) == 0.0

    def test_non_finite_scores_ignored(self):
        vf = LogisticValueFunction.from_scores(SMALLER, [1.0, math.inf, 3.0, math.nan])
        assert vf.location == pytest.approx(2.0)

    def test_invalid_arguments(self):
        with pytest.raises(ValidationError, match="factor"):
            LogisticValueFunction.from_scores(SMALLER, [1.0, 2.0], factor=0.5)
        with pytest.raises(ValidationError, match="no finite scores"):
            LogisticValueFunction.from_scores(SMALLER, [math.nan])
        with pytest.raises(ValidationError, match="scale"):
            LogisticValueFunction(SMALLER, 0.0, -1.0)
