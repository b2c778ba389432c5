"""
Tests for the Histogram.
"""

import math

import numpy as np
import pytest

from pydistfit.distributions import create_distribution
from pydistfit.histogram import Histogram, add_negative_infinity, add_positive_infinity


class TestCounting:

    def test_half_open_bins(self):
        h = Histogram([0.0, 1.0, 2.0], [0.0, 0.5, 1.0, 1.5, 2.0, -1.0])
        np.testing.assert_array_equal(h.bin_counts, [2.0, 2.0])
        assert h.underflow_count == 1.0
        assert h.overflow_count == 1.0
        assert h.total_count == 6.0

    def test_single_break_point_two_bins(self):
        h = Histogram([5.0], [1.0, 6.0, 7.0])
        assert h.num_bins == 2
        np.testing.assert_array_equal(h.bin_counts, [1.0, 2.0])

    def test_bin_number(self):
        h = Histogram([0.0, 1.0, 2.0])
        assert h.bin_number(-0.5) == 0
        assert h.bin_number(0.0) == 1
        assert h.bin_number(1.5) == 2
        assert h.bin_number(2.0) == 3

    def test_collect_accumulates_and_reset(self):
        h = Histogram([0.0, 10.0])
        h.collect([1.0, 2.0])
        h.collect(3.0)
        assert h.count == 3.0
        h.reset()
        assert h.total_count == 0.0

    def test_fractions_when_empty(self):
        assert np.all(np.isnan(Histogram([0.0, 1.0]).bin_fractions))

    def test_bins(self):
        h = Histogram([0.0, 1.0, 3.0], [0.5, 2.0, 2.5])
        bins = h.bins
        assert [b.number for b in bins] == [1, 2]
        assert bins[1].width == 2.0
        assert bins[1].count == 2.0

    def test_create_with_recommended_break_points(self, rng):
        x = rng.uniform(0.0, 10.0, size=200)
        h = Histogram.create(x)
        assert h.total_count == 200.0


class TestMassConservation:
    """With infinite outer limits every observation is binned and probabilities sum to one."""

    @pytest.mark.parametrize("bp", [[0.0], [-1.0, 0.0, 1.0], [2.0, 3.5, 7.0, 20.0]])
    def test_counts_sum_to_sample_size(self, rng, bp):
        x = rng.normal(3.0, 4.0, size=137)
        h = Histogram(add_positive_infinity(add_negative_infinity(bp)), x)
        assert np.sum(h.bin_counts) == x.size

    @pytest.mark.parametrize("family,params", [
        ("Normal", {"mean": 3.0, "variance": 16.0}),
        ("Exponential", {"mean": 2.0}),
        ("Poisson", {"mean": 4.0}),
    ])
    def test_probabilities_sum_to_one(self, family, params):
        dist = create_distribution(family, params)
        h = Histogram(add_positive_infinity(add_negative_infinity([-1.0, 0.5, 2.0, 5.0])))
        assert np.sum(h.bin_probabilities(dist)) == pytest.approx(1.0, abs=1e-12)

    def test_expected_counts(self, rng):
        x = rng.normal(size=100)
        dist = create_distribution("Normal", {"mean": 0.0, "variance": 1.0})
        h = Histogram([-math.inf, 0.0, math.inf], x)
        np.testing.assert_allclose(h.expected_counts(dist), [50.0, 50.0])

    def test_to_dict_and_summary(self):
        h = Histogram([0.0, 1.0, 2.0], [0.5, 1.5])
        d = h.to_dict()
        assert d['count'] == [1.0, 1.0]
        assert "Histogram" in h.summary()
