"""
Tests for the estimator registry.
"""

import pytest

from pydistfit.core.config import EstimationConfig
from pydistfit.core.exceptions import ValidationError
from pydistfit.distributions import Family
from pydistfit.estimation import (
    GammaMLEParameterEstimator,
    all_estimators,
    discrete_estimators,
    get_estimator,
    non_restricted_estimators,
    positive_restricted_estimators,
)


class TestGetEstimator:

    def test_every_family_has_a_default(self):
        for family in Family:
            assert get_estimator(family).family is family

    def test_by_name(self):
        assert isinstance(get_estimator("Gamma"), GammaMLEParameterEstimator)

    def test_config_is_passed(self):
        cfg = EstimationConfig(zero_tolerance=0.01)
        assert get_estimator(Family.WEIBULL, cfg).config is cfg

    def test_unknown_family(self):
        with pytest.raises(ValidationError):
            get_estimator("Cauchy")


class TestEstimatorSets:

    def test_all_is_union(self):
        names = [e.name for e in all_estimators()]
        expected = [e.name for e in non_restricted_estimators()]
        expected += [e.name for e in positive_restricted_estimators()]
        assert names == expected
        assert len(set(names)) == len(names)

    def test_range_check_partition(self):
        assert not any(e.check_range for e in non_restricted_estimators())
        assert all(e.check_range for e in positive_restricted_estimators())

    def test_discrete(self):
        families = {e.family for e in discrete_estimators()}
        assert families == {Family.BINOMIAL, Family.NEGATIVE_BINOMIAL, Family.POISSON}
