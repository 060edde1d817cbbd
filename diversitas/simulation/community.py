"""
Spatially explicit simulated communities.

A community is a point pattern: one (x, y) location and one species per
individual. Poisson communities place individuals uniformly at random;
Thomas communities cluster each species' individuals around mother points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

import numpy as np

from diversitas.common import Assemblage, InvalidInput

from .sad import sim_sad

logger = logging.getLogger(__name__)

Extent = Tuple[float, float, float, float]
UNIT_SQUARE: Extent = (0.0, 1.0, 0.0, 1.0)


def _check_extent(extent: Extent) -> Extent:
    x_min, x_max, y_min, y_max = (float(v) for v in extent)
    if not (x_max > x_min and y_max > y_min):
        raise InvalidInput(f"Extent must have positive width and height: {extent}")
    return x_min, x_max, y_min, y_max


@dataclass(frozen=True, eq=False)
class Community:
    """
    Point pattern of individuals.

    Attributes:
        x: x coordinate of every individual
        y: y coordinate of every individual
        species_index: Index into species_names for every individual
        species_names: Species universe
        extent: (x_min, x_max, y_min, y_max) window
    """

    x: np.ndarray
    y: np.ndarray
    species_index: np.ndarray
    species_names: Tuple[str, ...]
    extent: Extent = UNIT_SQUARE

    def __post_init__(self):
        object.__setattr__(self, "extent", _check_extent(self.extent))
        object.__setattr__(self, "x", np.asarray(self.x, dtype=np.float64))
        object.__setattr__(self, "y", np.asarray(self.y, dtype=np.float64))
        object.__setattr__(self, "species_index", np.asarray(self.species_index, dtype=np.int64))
        object.__setattr__(self, "species_names", tuple(self.species_names))
        n = len(self.species_index)
        if len(self.x) != n or len(self.y) != n:
            raise InvalidInput("x, y and species_index must have the same length")
        if n and (self.species_index.min() < 0 or self.species_index.max() >= len(self.species_names)):
            raise InvalidInput("species_index refers to species outside species_names")

    @property
    def n_individuals(self) -> int:
        return len(self.species_index)

    @property
    def width(self) -> float:
        return self.extent[1] - self.extent[0]

    @property
    def height(self) -> float:
        return self.extent[3] - self.extent[2]

    def abundances(self) -> Assemblage:
        """Species counts over the whole window."""
        counts = np.bincount(self.species_index, minlength=len(self.species_names))
        return Assemblage.from_counts(list(counts), species=self.species_names)

    def within(self, x0: float, x1: float, y0: float, y1: float) -> Assemblage:
        """Species counts inside the half-open rectangle [x0, x1) x [y0, y1)."""
        inside = (self.x >= x0) & (self.x < x1) & (self.y >= y0) & (self.y < y1)
        counts = np.bincount(self.species_index[inside], minlength=len(self.species_names))
        return Assemblage.from_counts(list(counts), species=self.species_names)

    def __repr__(self) -> str:
        return (
            f"Community({self.n_individuals} individuals, "
            f"{len(self.species_names)} species, extent={self.extent})"
        )


def _species_labels(sad: Assemblage) -> np.ndarray:
    return np.repeat(np.arange(len(sad), dtype=np.int64), sad.to_array())


def sim_poisson_community(
    s_pool: int,
    n_sim: int,
    rng: np.random.Generator,
    sad_type: str = "lnorm",
    sad_coef: Optional[Mapping[str, Any]] = None,
    extent: Extent = UNIT_SQUARE,
) -> Community:
    """
    Community with individuals placed uniformly at random (no aggregation).

    Args:
        s_pool: Number of species in the pool
        n_sim: Number of individuals
        rng: Random generator threaded through every draw
        sad_type: Species abundance distribution ("lnorm", "geom", "even")
        sad_coef: Distribution coefficients
        extent: (x_min, x_max, y_min, y_max) window

    Returns:
        Simulated Community
    """
    x_min, x_max, y_min, y_max = _check_extent(extent)
    sad = sim_sad(s_pool, n_sim, rng, sad_type=sad_type, sad_coef=sad_coef)
    species_index = _species_labels(sad)
    x = rng.uniform(x_min, x_max, size=len(species_index))
    y = rng.uniform(y_min, y_max, size=len(species_index))
    logger.debug(f"Simulated Poisson community: {n_sim} individuals, {sad.S} species")
    return Community(x, y, species_index, sad.species, (x_min, x_max, y_min, y_max))


def sim_thomas_community(
    s_pool: int,
    n_sim: int,
    rng: np.random.Generator,
    sad_type: str = "lnorm",
    sad_coef: Optional[Mapping[str, Any]] = None,
    sigma: float = 0.02,
    mother_points: Optional[int] = None,
    cluster_points: Optional[float] = None,
    extent: Extent = UNIT_SQUARE,
) -> Community:
    """
    Community where conspecific individuals cluster (Thomas process).

    Each species gets its own mother points placed uniformly at random.
    Every individual picks a mother at random and is displaced from it by a
    Gaussian offset with standard deviation sigma. Coordinates wrap around
    the window edges (torus), so no individual is lost.

    Args:
        s_pool: Number of species in the pool
        n_sim: Number of individuals
        rng: Random generator threaded through every draw
        sad_type: Species abundance distribution
        sad_coef: Distribution coefficients
        sigma: Cluster spread; smaller values mean stronger aggregation
        mother_points: Number of clusters per species
        cluster_points: Mean individuals per cluster, used when mother_points
            is not given; with neither, every species forms one cluster
        extent: (x_min, x_max, y_min, y_max) window

    Returns:
        Simulated Community
    """
    if sigma <= 0:
        raise InvalidInput(f"sigma must be positive, got {sigma}")
    if mother_points is not None and mother_points < 1:
        raise InvalidInput(f"mother_points must be at least 1, got {mother_points}")
    if cluster_points is not None and cluster_points <= 0:
        raise InvalidInput(f"cluster_points must be positive, got {cluster_points}")

    x_min, x_max, y_min, y_max = _check_extent(extent)
    sad = sim_sad(s_pool, n_sim, rng, sad_type=sad_type, sad_coef=sad_coef)

    xs, ys = [], []
    for abundance in sad.counts:
        if abundance == 0:
            continue
        if mother_points is not None:
            n_mothers = mother_points
        elif cluster_points is not None:
            n_mothers = max(1, int(round(abundance / cluster_points)))
        else:
            n_mothers = 1

        mother_x = rng.uniform(x_min, x_max, size=n_mothers)
        mother_y = rng.uniform(y_min, y_max, size=n_mothers)
        parent = rng.integers(0, n_mothers, size=abundance)
        xs.append(mother_x[parent] + rng.normal(0.0, sigma, size=abundance))
        ys.append(mother_y[parent] + rng.normal(0.0, sigma, size=abundance))

    x = np.concatenate(xs) if xs else np.zeros(0)
    y = np.concatenate(ys) if ys else np.zeros(0)
    # torus wrap keeps every offspring inside the window
    x = x_min + np.mod(x - x_min, x_max - x_min)
    y = y_min + np.mod(y - y_min, y_max - y_min)
    x = np.where(x >= x_max, x_min, x)
    y = np.where(y >= y_max, y_min, y)

    logger.debug(
        f"Simulated Thomas community: {n_sim} individuals, {sad.S} species, sigma={sigma}"
    )
    return Community(x, y, _species_labels(sad), sad.species, (x_min, x_max, y_min, y_max))
