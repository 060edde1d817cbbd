"""
Pytest configuration and shared fixtures for diversitas tests.

Provides reference assemblages, small sample collections and seeded
random generators.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from diversitas.common import Assemblage, Sample, SampleCollection

# =============================================================================
# Assemblage Fixtures
# =============================================================================


@pytest.fixture
def even_assemblage() -> Assemblage:
    """Five species with ten individuals each (N=50)."""
    return Assemblage.from_counts([10, 10, 10, 10, 10])


@pytest.fixture
def dominated_assemblage() -> Assemblage:
    """One dominant species and three singletons (N=50)."""
    return Assemblage.from_counts([47, 1, 1, 1])


@pytest.fixture
def singleton_assemblage() -> Assemblage:
    """Eight species with a single individual each."""
    return Assemblage.from_counts([1] * 8)


@pytest.fixture
def uneven_assemblage() -> Assemblage:
    """Realistic uneven assemblage with singletons, doubletons and zeros."""
    return Assemblage.from_counts([25, 12, 7, 4, 2, 2, 1, 1, 1, 0, 0])


# =============================================================================
# Collection Fixtures
# =============================================================================


@pytest.fixture
def two_group_collection() -> SampleCollection:
    """Invaded / uninvaded plots over a shared six-species universe."""
    species = ("a", "b", "c", "d", "e", "f")
    rows = {
        "plot1": ("invaded", [20, 3, 1, 0, 0, 0]),
        "plot2": ("invaded", [18, 0, 2, 1, 0, 0]),
        "plot3": ("invaded", [25, 1, 0, 0, 0, 1]),
        "plot4": ("uninvaded", [5, 6, 4, 3, 2, 0]),
        "plot5": ("uninvaded", [4, 5, 0, 6, 3, 2]),
        "plot6": ("uninvaded", [6, 2, 5, 4, 0, 3]),
    }
    return SampleCollection(
        Sample(
            sample_id=sample_id,
            assemblage=Assemblage.from_counts(counts, species=species),
            group=group,
            x=float(i),
            y=0.0,
            attributes={"block": "north" if i < 3 else "south"},
        )
        for i, (sample_id, (group, counts)) in enumerate(rows.items())
    )


@pytest.fixture
def identical_collection() -> SampleCollection:
    """Two samples with exactly the same abundances."""
    species = ("a", "b", "c", "d")
    counts = [12, 7, 3, 1]
    return SampleCollection(
        Sample(f"s{i}", Assemblage.from_counts(counts, species=species), group="g")
        for i in range(2)
    )


# =============================================================================
# Random Fixtures
# =============================================================================


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator threaded through simulations."""
    return np.random.default_rng(42)
