"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def exponential_data(rng):
    """Exponential sample with mean 10."""
    return rng.exponential(scale=10.0, size=500)


@pytest.fixture
def normal_data(rng):
    """Normal sample with mean 50 and standard deviation 5."""
    return rng.normal(loc=50.0, scale=5.0, size=500)


@pytest.fixture
def gamma_data(rng):
    """Gamma sample with shape 3 and scale 2 (mean 6)."""
    return rng.gamma(shape=3.0, scale=2.0, size=500)
