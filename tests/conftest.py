"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyols.datasets import linear_observations, small_example


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def small_observations():
    """The 5 x 3 documentation example (2 predictors + response)."""
    return small_example.copy()


@pytest.fixture
def exact_linear_data(rng):
    """Noise-free observations from y = 1.5 + 2x1 - 3x2 + 0.5x3."""
    coefficients = np.array([1.5, 2.0, -3.0, 0.5])
    return linear_observations(rng, coefficients, rows=40), coefficients


@pytest.fixture
def noisy_linear_data(rng):
    """Observations from y = -1 + 0.8x1 + 2x2 with N(0, 0.1²) noise."""
    coefficients = np.array([-1.0, 0.8, 2.0])
    return linear_observations(rng, coefficients, rows=200, noise=0.1), coefficients


@pytest.fixture
def duplicate_column_data(rng):
    """Two identical predictor columns (perfect collinearity)."""
    n = 30
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    y = 1.0 + x1 + x2 + rng.standard_normal(n) * 0.1
    return np.column_stack([x1, x2, x1, y])
