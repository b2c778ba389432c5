"""
Tests for metrics and scores.
"""

import math

import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.scoring import MAX_VALUE, Direction, Metric


class TestMetric:

    def test_defaults(self):
        m = Metric("SSE")
        assert m.domain == (0.0, MAX_VALUE)
        assert m.direction is Direction.SMALLER_IS_BETTER
        assert m.worst_value == MAX_VALUE
        assert m.best_value == 0.0

    def test_bigger_is_better_ends(self):
        m = Metric("corr", 0.0, 1.0, Direction.BIGGER_IS_BETTER)
        assert m.bigger_is_better
        assert m.worst_value == 0.0
        assert m.best_value == 1.0

    def test_empty_domain_rejected(self):
        with pytest.raises(ValidationError, match="width of the domain"):
            Metric("bad", lower=1.0, upper=1.0)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Metric("")

    def test_with_domain_keeps_identity(self):
        m = Metric("K-S", 0.0, 1.0, description="ks")
        r = m.with_domain(0.1, 0.5)
        assert r.name == "K-S"
        assert r.direction is m.direction
        assert r.domain == (0.1, 0.5)
        assert m.domain == (0.0, 1.0)

    def test_str(self):
        assert str(Metric("K-S", 0.0, 1.0)) == "K-S [0, 1] SmallerIsBetter"


class TestScore:

    def test_valid(self):
        s = Metric("K-S", 0.0, 1.0).score(0.25)
        assert s.valid
        assert s.value == 0.25
        assert s.name == "K-S"

    @pytest.mark.parametrize("value", [math.nan, math.inf, -0.5, 2.0])
    def test_unusable_values_become_bad_scores(self, value):
        m = Metric("K-S", 0.0, 1.0)
        s = m.score(value)
        assert not s.valid
        assert s.value == m.worst_value

    def test_bad_score_bigger_is_better(self):
        m = Metric("corr", 0.0, 1.0, Direction.BIGGER_IS_BETTER)
        assert m.bad_score().value == 0.0

    def test_infinite_domain(self):
        m = Metric("AIC", -math.inf, math.inf)
        assert m.score(-1234.5).valid
        assert not m.score(math.inf).valid

    def test_str(self):
        m = Metric("K-S", 0.0, 1.0)
        assert str(m.score(0.5)) == "K-S = 0.5"
        assert str(m.bad_score()) == "K-S = 1 (invalid)"
