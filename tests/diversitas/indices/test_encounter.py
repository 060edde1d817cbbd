"""
Tests for PIE and S_PIE.

Tests for diversitas/indices/encounter.py
"""

from __future__ import annotations

import numpy as np
import pytest

from diversitas.common import DegenerateSample
from diversitas.indices import pie, s_pie, simpson_concentration


class TestPIE:
    """Test Hurlbert's probability of interspecific encounter."""

    def test_even(self, even_assemblage):
        """Test 1 - 5·10·9 / (50·49) for five species of ten."""
        assert pie(even_assemblage.to_array()) == pytest.approx(1 - 450 / 2450)

    def test_dominated(self, dominated_assemblage):
        assert pie(dominated_assemblage.to_array()) == pytest.approx(288 / 2450)

    def test_single_species(self):
        assert pie(np.array([10])) == 0.0

    def test_all_singletons(self, singleton_assemblage):
        """Test every pair of distinct individuals is interspecific."""
        assert pie(singleton_assemblage.to_array()) == pytest.approx(1.0)

    @pytest.mark.parametrize("counts", [[0, 0], [1, 0, 0]])
    def test_degenerate(self, counts):
        with pytest.raises(DegenerateSample, match="PIE"):
            pie(np.array(counts), label="plot")

    def test_in_unit_interval(self, uneven_assemblage):
        assert 0.0 <= pie(uneven_assemblage.to_array()) <= 1.0


class TestSPIE:
    """Test effective number of species at order 2."""

    def test_even_equals_richness(self, even_assemblage):
        assert s_pie(even_assemblage.to_array()) == pytest.approx(5.0)

    def test_dominated(self, dominated_assemblage):
        """Test 1 / (0.94² + 3·0.02²)."""
        assert s_pie(dominated_assemblage.to_array()) == pytest.approx(1 / 0.8848)

    def test_single_species(self):
        assert s_pie(np.array([7, 0])) == pytest.approx(1.0)

    def test_bounded_by_richness(self, uneven_assemblage):
        value = s_pie(uneven_assemblage.to_array())

        assert 1.0 <= value <= uneven_assemblage.S

    def test_concentration_ignores_zeros(self):
        assert simpson_concentration(np.array([5, 0, 5])) == pytest.approx(0.5)

    def test_degenerate(self):
        with pytest.raises(DegenerateSample, match="S_PIE"):
            s_pie(np.array([1]))
