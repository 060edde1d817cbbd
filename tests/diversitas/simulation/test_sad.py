"""
Tests for species abundance distributions.

Tests for diversitas/simulation/sad.py
"""

from __future__ import annotations

import numpy as np
import pytest

from diversitas.common import InvalidInput
from diversitas.simulation import SAD_TYPES, sad_probabilities, sim_sad


class TestSadProbabilities:
    """Test sad_probabilities function."""

    @pytest.mark.parametrize("sad_type", SAD_TYPES)
    def test_normalised_and_sorted(self, rng, sad_type):
        p = sad_probabilities(20, rng, sad_type=sad_type)

        assert len(p) == 20
        assert p.sum() == pytest.approx(1.0)
        assert np.all(np.diff(p) <= 0)

    def test_even(self, rng):
        np.testing.assert_allclose(sad_probabilities(4, rng, sad_type="even"), [0.25] * 4)

    def test_geometric_ratio(self, rng):
        p = sad_probabilities(5, rng, sad_type="geom", sad_coef={"prob": 0.5})

        np.testing.assert_allclose(p[1:] / p[:-1], [0.5] * 4)

    def test_lognormal_zero_cv_is_even(self, rng):
        p = sad_probabilities(5, rng, sad_type="lnorm", sad_coef={"cv_abund": 0})

        np.testing.assert_allclose(p, [0.2] * 5)

    def test_unknown_type(self, rng):
        with pytest.raises(InvalidInput, match="sad_type"):
            sad_probabilities(5, rng, sad_type="zipf")

    def test_unknown_coefficient(self, rng):
        with pytest.raises(InvalidInput, match="coefficients"):
            sad_probabilities(5, rng, sad_type="geom", sad_coef={"cv_abund": 1})

    @pytest.mark.parametrize("prob", [0.0, 1.0, 1.5])
    def test_bad_probability(self, rng, prob):
        with pytest.raises(InvalidInput):
            sad_probabilities(5, rng, sad_type="geom", sad_coef={"prob": prob})

    def test_empty_pool(self, rng):
        with pytest.raises(InvalidInput):
            sad_probabilities(0, rng)


class TestSimSad:
    """Test sim_sad function."""

    def test_total_and_universe(self, rng):
        sad = sim_sad(30, 1000, rng)

        assert sad.N == 1000
        assert len(sad) == 30
        assert sad.species[0] == "sp1"

    def test_reproducible(self):
        first = sim_sad(10, 200, np.random.default_rng(7), sad_type="geom")
        second = sim_sad(10, 200, np.random.default_rng(7), sad_type="geom")

        assert first == second

    def test_custom_species(self, rng):
        sad = sim_sad(3, 10, rng, sad_type="even", species=["x", "y", "z"])

        assert sad.species == ("x", "y", "z")

    def test_zero_individuals(self, rng):
        sad = sim_sad(5, 0, rng)

        assert sad.N == 0
        assert len(sad) == 5

    def test_negative_individuals(self, rng):
        with pytest.raises(InvalidInput):
            sim_sad(5, -1, rng)
