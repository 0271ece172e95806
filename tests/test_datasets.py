"""
Tests for synthetic observation generators.
"""

import numpy as np
import pytest

from pyols.core.datasource import parse_observations
from pyols.core.exceptions import DimensionError
from pyols.datasets import (
    linear_observations,
    random_observations,
    small_example,
    to_csv_text,
)


class TestRandomObservations:

    def test_shape_and_range(self, rng):
        obs = random_observations(rng, rows=10, cols=10)
        assert obs.shape == (10, 10)
        assert np.all((obs >= 0.0) & (obs < 100.0))

    def test_seeded_reproducible(self):
        a = random_observations(np.random.default_rng(7), 5, 3)
        b = random_observations(np.random.default_rng(7), 5, 3)
        np.testing.assert_array_equal(a, b)

    def test_negative_shape(self, rng):
        with pytest.raises(DimensionError):
            random_observations(rng, -1, 3)


class TestLinearObservations:

    def test_exact_relationship(self, rng):
        coef = [2.0, -1.0, 0.5]
        obs = linear_observations(rng, coef, rows=15)
        assert obs.shape == (15, 3)
        np.testing.assert_allclose(obs[:, -1], 2.0 - obs[:, 0] + 0.5 * obs[:, 1])

    def test_noise_added(self, rng):
        obs = linear_observations(rng, [0.0, 1.0], rows=50, noise=1.0)
        assert not np.allclose(obs[:, 1], obs[:, 0])

    def test_needs_a_slope(self, rng):
        with pytest.raises(DimensionError):
            linear_observations(rng, [1.0], rows=5)


class TestCsvText:

    def test_parses_back(self):
        text = to_csv_text(small_example)
        assert text.splitlines()[0] == "1.000000,1.000000,2.000000"
        np.testing.assert_array_equal(parse_observations(text), small_example)

    def test_rejects_1d(self):
        with pytest.raises(DimensionError):
            to_csv_text(np.zeros(3))
