"""
Tests for root bracketing and bisection.
"""

import math

import pytest

from pydistfit.core.config import RootFindingConfig
from pydistfit.core.exceptions import ConvergenceError, ValidationError
from pydistfit.rootfinding import bisection, find_interval, has_root


def cubic(x):
    return x ** 3 - 2.0 * x - 5.0


class TestHasRoot:

    def test_bracket(self):
        assert has_root(cubic, 2.0, 3.0)

    def test_no_bracket(self):
        assert not has_root(cubic, 3.0, 4.0)

    def test_reversed_interval(self):
        assert not has_root(cubic, 3.0, 2.0)

    def test_nan_never_brackets(self):
        assert not has_root(lambda x: math.nan, 0.0, 1.0)

    def test_endpoint_root(self):
        assert has_root(lambda x: x - 1.0, 1.0, 2.0)


class TestFindInterval:

    def test_expands_to_bracket(self):
        search = find_interval(lambda x: x - 100.0, 0.0, 1.0)
        assert search.found
        assert search.lower < 100.0 < search.upper

    def test_gives_up(self):
        search = find_interval(lambda x: x * x + 1.0, -1.0, 1.0,
                               RootFindingConfig(max_search_iterations=5))
        assert not search.found
        assert search.iterations == 5

    def test_invalid_interval(self):
        with pytest.raises(ValidationError):
            find_interval(cubic, 1.0, 1.0)


class TestBisection:

    def test_finds_root(self):
        sol = bisection(cubic, 2.0, 3.0, config=RootFindingConfig(desired_precision=1e-10))
        assert sol.converged
        assert sol.root == pytest.approx(2.0945514815, abs=1e-8)

    def test_initial_point(self):
        sol = bisection(lambda x: x - 0.3, 0.0, 1.0, initial=0.3)
        assert sol.converged
        assert sol.iterations == 1
        assert sol.root == pytest.approx(0.3)

    def test_root_at_endpoint(self):
        sol = bisection(lambda x: x - 1.0, 1.0, 2.0)
        assert sol.root == 1.0
        assert sol.iterations == 0

    def test_no_bracket_raises(self):
        with pytest.raises(ValidationError):
            bisection(cubic, 3.0, 4.0)

    def test_iteration_budget_is_a_hard_cap(self):
        cfg = RootFindingConfig(desired_precision=1e-14, max_iterations=5)
        sol = bisection(cubic, 2.0, 3.0, config=cfg)
        assert not sol.converged
        assert sol.iterations == 5
        with pytest.raises(ConvergenceError):
            sol.raise_if_not_converged(cfg.desired_precision)
