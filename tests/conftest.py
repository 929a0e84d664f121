"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyprobsim import RandomSource
from pyprobsim.sampling import FinitePopulation


@pytest.fixture
def source():
    """Seeded RandomSource for reproducible tests."""
    return RandomSource(42)


@pytest.fixture
def roulette():
    """±1 bet on red from the casino's side: Pr(+1) = 20/38 = 10/19."""
    return FinitePopulation.from_counts({-1: 18, 1: 20})


@pytest.fixture
def beads():
    """Urn of 2 red and 3 blue beads."""
    return FinitePopulation.from_counts({"red": 2, "blue": 3})


@pytest.fixture
def continuous_data():
    """Non-degenerate sample (no ties) for estimator properties."""
    rng = np.random.default_rng(2024)
    return rng.normal(69.0, 3.0, size=500)
