"""
Tests for the ordered parallel map and random stream spawning.
"""

import numpy as np
import pytest

from pydistfit.core.exceptions import ValidationError
from pydistfit.core.parallel import ordered_map, spawn_generators


class TestOrderedMap:
    """Results come back in input order for any worker count."""

    @pytest.mark.parametrize("n_jobs", [1, 2, 4])
    def test_order_preserved(self, n_jobs):
        assert ordered_map(lambda v: v * v, range(10), n_jobs=n_jobs) == [v * v for v in range(10)]

    def test_empty(self):
        assert ordered_map(lambda v: v, [], n_jobs=3) == []

    def test_invalid_n_jobs(self):
        with pytest.raises(ValidationError):
            ordered_map(lambda v: v, [1], n_jobs=0)


class TestSpawnGenerators:

    def test_same_seed_same_streams(self):
        a = [g.random() for g in spawn_generators(7, 3)]
        b = [g.random() for g in spawn_generators(7, 3)]
        assert a == b

    def test_streams_differ(self):
        draws = [g.random() for g in spawn_generators(7, 3)]
        assert len(set(draws)) == 3

    def test_count(self):
        gens = spawn_generators(None, 5)
        assert len(gens) == 5
        assert all(isinstance(g, np.random.Generator) for g in gens)
