"""
Tests for individual-based rarefaction.

Tests for diversitas/rarefaction/curve.py
"""

from __future__ import annotations

import numpy as np
import pytest
from scipy.special import comb

from diversitas.common import Assemblage, InsufficientEffort, InvalidInput
from diversitas.rarefaction import (
    RarefactionCurve,
    expected_richness,
    rarefaction_curve,
    rarefaction_curves,
    rarefy,
)


def brute_force_rarefy(counts, n):
    """Hurlbert's formula with exact binomial coefficients."""
    counts = [c for c in counts if c > 0]
    total = sum(counts)
    return sum(1 - comb(total - c, n, exact=True) / comb(total, n, exact=True) for c in counts)


class TestRarefy:
    """Test rarefy function."""

    def test_full_curve_length(self, even_assemblage):
        """Test effort=None evaluates every size 1..N."""
        curve = rarefy(even_assemblage)

        assert len(curve) == 50

    def test_endpoint_equals_richness(self, uneven_assemblage):
        """Test the curve at N equals observed S exactly."""
        curve = rarefy(uneven_assemblage)

        assert curve[-1] == uneven_assemblage.S

    def test_first_point_is_one(self, uneven_assemblage):
        """Test a single individual is always one species."""
        assert rarefy(uneven_assemblage, effort=1) == pytest.approx(1.0)

    def test_zero_effort(self, even_assemblage):
        assert rarefy(even_assemblage, effort=0) == 0.0

    def test_even_scenario(self, even_assemblage):
        """Test [10]*5 rarefies to 0 at n=0, 1 at n=1 and 5 at n=50."""
        values = rarefy(even_assemblage, effort=[0, 1, 50])

        assert values[0] == 0.0
        assert values[1] == pytest.approx(1.0)
        assert values[2] == 5.0

    def test_matches_exact_binomials(self, uneven_assemblage):
        """Test log-gamma evaluation against exact integer arithmetic."""
        counts = uneven_assemblage.counts
        for n in (2, 5, 13, 30, 54):
            assert rarefy(counts, effort=n) == pytest.approx(
                brute_force_rarefy(counts, n), rel=1e-10
            )

    def test_singletons_give_min_n_s(self, singleton_assemblage):
        """Test all-singleton assemblages rarefy to min(n, S)."""
        curve = rarefy(singleton_assemblage)

        np.testing.assert_allclose(curve, np.arange(1, 9), rtol=1e-10)

    def test_non_decreasing_and_lipschitz(self, uneven_assemblage):
        """Test each added individual adds between 0 and 1 species."""
        curve = np.concatenate([[0.0], rarefy(uneven_assemblage)])
        steps = np.diff(curve)

        assert np.all(steps >= -1e-12)
        assert np.all(steps <= 1.0 + 1e-12)

    def test_large_assemblage_no_overflow(self):
        """Test factorial-sized totals stay finite."""
        counts = [50_000, 30_000, 15_000, 4_000, 900, 90, 9, 1]
        values = rarefy(counts, effort=[10, 1_000, sum(counts)])

        assert np.all(np.isfinite(values))
        assert values[-1] == 8.0

    def test_scalar_effort_returns_float(self, even_assemblage):
        assert isinstance(rarefy(even_assemblage, effort=10), float)

    def test_sequence_effort_returns_array(self, even_assemblage):
        values = rarefy(even_assemblage, effort=[5, 10])

        assert isinstance(values, np.ndarray)
        assert values.shape == (2,)

    def test_accepts_mapping(self):
        assert rarefy({"a": 3, "b": 3}, effort=6) == 2.0

    def test_zero_counts_ignored(self):
        """Test zero-abundance species do not change the curve."""
        np.testing.assert_allclose(rarefy([5, 0, 3, 0]), rarefy([5, 3]))

    def test_effort_above_n(self, even_assemblage):
        """Test rarefying up fails without extrapolation."""
        with pytest.raises(InsufficientEffort) as info:
            rarefy(even_assemblage, effort=51, label="plot")

        assert info.value.available == 50
        assert info.value.effort == 51

    def test_empty_assemblage(self):
        """Test any positive effort on N = 0 is invalid."""
        with pytest.raises(InvalidInput):
            rarefy([0, 0], effort=1)

    def test_empty_assemblage_full_curve(self):
        """Test the full curve of an empty assemblage is empty."""
        assert len(rarefy([0, 0])) == 0

    def test_negative_abundance(self):
        with pytest.raises(InvalidInput):
            rarefy([3, -1])

    @pytest.mark.parametrize("effort", [-1, 2.5, [1, -3]])
    def test_invalid_effort(self, even_assemblage, effort):
        with pytest.raises(InvalidInput):
            rarefy(even_assemblage, effort=effort)

    def test_extrapolate_beyond_n(self, uneven_assemblage):
        """Test extrapolated values exceed the observed richness."""
        value = rarefy(uneven_assemblage, effort=200, extrapolate=True)

        assert value > uneven_assemblage.S

    def test_expected_richness(self, even_assemblage):
        assert expected_richness(even_assemblage, 50) == 5.0


class TestRarefactionCurve:
    """Test RarefactionCurve dataclass and constructors."""

    def test_curve_endpoints(self, dominated_assemblage):
        curve = rarefaction_curve(dominated_assemblage, label="dom")

        assert curve.effort[0] == 1
        assert curve.max_effort == 50
        assert curve.final_richness == 4.0
        assert curve.label == "dom"

    def test_at(self, even_assemblage):
        curve = rarefaction_curve(even_assemblage)

        assert curve.at(0) == 0.0
        assert curve.at(50) == 5.0
        with pytest.raises(KeyError):
            curve.at(51)

    def test_unit_defaults_to_individuals(self, even_assemblage):
        assert rarefaction_curve(even_assemblage).unit == "individuals"

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            RarefactionCurve(effort=np.arange(3), richness=np.zeros(2))

    def test_dominance_lowers_curve(self, even_assemblage, dominated_assemblage):
        """Test an uneven assemblage accumulates species more slowly."""
        even = rarefy(even_assemblage, effort=10)
        dominated = rarefy(dominated_assemblage, effort=10)

        assert dominated < even

    def test_curves_per_sample(self, two_group_collection):
        curves = rarefaction_curves(two_group_collection)

        assert list(curves) == two_group_collection.sample_ids
        for sample in two_group_collection:
            assert curves[sample.sample_id].final_richness == sample.S
            assert len(curves[sample.sample_id]) == sample.N

    def test_repr(self):
        curve = rarefaction_curve(Assemblage.from_counts([2, 1]), label="s")

        assert "RarefactionCurve" in repr(curve)
