"""
Tests for the index registry and diversity() entry point.

Tests for diversitas/indices/registry.py
"""

from __future__ import annotations

import pytest

from diversitas.common import InvalidInput
from diversitas.indices import (
    DEFAULT_INDICES,
    INDICES,
    AbstractDiversityIndex,
    available_indices,
    calc_indices,
    diversity,
    get_index,
)


class DoubleRichness(AbstractDiversityIndex):
    """Custom index used to check instances pass through the registry."""

    name = "2S"

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        return 2 * (counts > 0).sum()


class TestRegistry:
    """Test index lookup."""

    def test_available(self):
        assert set(available_indices()) == {
            "N",
            "S",
            "S_n",
            "S_asymp",
            "pct_rare",
            "PIE",
            "S_PIE",
        }

    def test_defaults_registered(self):
        assert all(name in INDICES for name in DEFAULT_INDICES)

    def test_unknown_index(self):
        with pytest.raises(InvalidInput, match="Unknown index"):
            get_index("shannon")

    def test_instance_passes_through(self):
        index = DoubleRichness()

        assert get_index(index) is index

    @pytest.mark.parametrize(
        "name, supports_beta",
        [
            ("N", False),
            ("S", True),
            ("S_n", True),
            ("S_asymp", True),
            ("pct_rare", False),
            ("PIE", False),
            ("S_PIE", True),
        ],
    )
    def test_beta_support(self, name, supports_beta):
        assert get_index(name).supports_beta is supports_beta


class TestDiversity:
    """Test diversity and calc_indices functions."""

    def test_by_name(self, even_assemblage):
        assert diversity(even_assemblage, "S") == 5.0
        assert diversity(even_assemblage, "S_n", effort=50) == 5.0

    def test_accepts_mapping_and_list(self):
        assert diversity({"a": 3, "b": 1}, "N") == 4.0
        assert diversity([3, 1, 0], "S") == 2.0

    def test_custom_index(self, even_assemblage):
        assert diversity(even_assemblage, DoubleRichness()) == 10.0

    def test_invalid_abundances(self):
        with pytest.raises(InvalidInput):
            diversity([2, -1], "S")

    def test_returns_float(self, even_assemblage):
        assert isinstance(diversity(even_assemblage, "N"), float)

    def test_calc_indices(self, even_assemblage):
        values = calc_indices(even_assemblage, effort=10)

        assert list(values) == list(DEFAULT_INDICES)
        assert values["N"] == 50.0
        assert values["S"] == 5.0
        assert values["PIE"] == pytest.approx(1 - 450 / 2450)
        assert values["S_PIE"] == pytest.approx(5.0)
        assert 1.0 < values["S_n"] < 5.0
