"""
Tests for quadrat sampling.

Tests for diversitas/simulation/sampling.py
"""

from __future__ import annotations

import pytest

from diversitas.common import InvalidInput
from diversitas.simulation import sample_quadrats, sim_poisson_community


@pytest.fixture
def community(rng):
    return sim_poisson_community(20, 2000, rng)


class TestSampleQuadrats:
    """Test sample_quadrats function."""

    def test_ids_and_group(self, community, rng):
        samples = sample_quadrats(community, 5, 0.01, rng, group="poisson", prefix="q")

        assert samples.sample_ids == ["q1", "q2", "q3", "q4", "q5"]
        assert all(s.group == "poisson" for s in samples)
        assert samples.species == community.species_names

    def test_random_quadrats_do_not_overlap(self, community, rng):
        samples = sample_quadrats(community, 8, 0.01, rng)
        side = 0.1

        centres = [(s.x, s.y) for s in samples]
        for i, (xi, yi) in enumerate(centres):
            assert side / 2 <= xi <= 1 - side / 2
            for xj, yj in centres[i + 1:]:
                assert abs(xi - xj) >= side - 1e-12 or abs(yi - yj) >= side - 1e-12

    def test_grid_covers_window(self, community, rng):
        """Test four quarter-area grid cells tile the unit square."""
        samples = sample_quadrats(community, 4, 0.25, rng, method="grid")

        assert sum(s.N for s in samples) == community.n_individuals
        assert [(s.x, s.y) for s in samples] == [
            (0.25, 0.25),
            (0.75, 0.25),
            (0.25, 0.75),
            (0.75, 0.75),
        ]

    def test_grid_overlap(self, community, rng):
        with pytest.raises(InvalidInput, match="grid"):
            sample_quadrats(community, 4, 0.36, rng, method="grid")

    def test_random_cannot_place(self, community, rng):
        with pytest.raises(InvalidInput, match="overlap"):
            sample_quadrats(community, 10, 0.2, rng, max_tries=50)

    def test_overlap_allowed(self, community, rng):
        samples = sample_quadrats(community, 10, 0.2, rng, avoid_overlap=False)

        assert len(samples) == 10

    @pytest.mark.parametrize(
        "n_quadrats, area, method",
        [
            (0, 0.01, "random"),
            (3, 0.0, "random"),
            (3, 2.0, "random"),
            (3, 0.01, "stratified"),
        ],
    )
    def test_invalid_arguments(self, community, rng, n_quadrats, area, method):
        with pytest.raises(InvalidInput):
            sample_quadrats(community, n_quadrats, area, rng, method=method)

    def test_quadrat_counts_within_community(self, community, rng):
        samples = sample_quadrats(community, 6, 0.02, rng)
        totals = community.abundances().to_array()

        for sample in samples:
            assert (sample.assemblage.to_array() <= totals).all()
        assert samples.abundance_matrix().sum() <= community.n_individuals
