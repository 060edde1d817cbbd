"""
Quadrat sampling of simulated communities.

Square quadrats are laid over a community and the individuals inside each
quadrat form one sample.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from diversitas.common import InvalidInput, Sample, SampleCollection

from .community import Community

logger = logging.getLogger(__name__)

SAMPLING_METHODS = ("random", "grid")


def _random_corners(
    community: Community,
    n_quadrats: int,
    side: float,
    rng: np.random.Generator,
    avoid_overlap: bool,
    max_tries: int,
) -> List[Tuple[float, float]]:
    x_min, x_max, y_min, y_max = community.extent
    corners: List[Tuple[float, float]] = []
    for i in range(n_quadrats):
        for _ in range(max_tries):
            x0 = rng.uniform(x_min, x_max - side)
            y0 = rng.uniform(y_min, y_max - side)
            if not avoid_overlap or all(
                abs(x0 - cx) >= side or abs(y0 - cy) >= side for cx, cy in corners
            ):
                corners.append((x0, y0))
                break
        else:
            raise InvalidInput(
                f"Could not place quadrat {i + 1} of {n_quadrats} without overlap "
                f"after {max_tries} tries; use fewer or smaller quadrats"
            )
    return corners


def _grid_corners(
    community: Community, n_quadrats: int, side: float, avoid_overlap: bool
) -> List[Tuple[float, float]]:
    x_min, _, y_min, _ = community.extent
    n_cols = math.ceil(math.sqrt(n_quadrats))
    n_rows = math.ceil(n_quadrats / n_cols)
    dx = community.width / n_cols
    dy = community.height / n_rows
    if avoid_overlap and (side > dx or side > dy):
        raise InvalidInput(
            f"{n_quadrats} quadrats of side {side:.4g} do not fit on a "
            f"{n_rows}x{n_cols} grid without overlap"
        )
    corners = []
    for k in range(n_quadrats):
        row, col = divmod(k, n_cols)
        corners.append(
            (x_min + (col + 0.5) * dx - side / 2, y_min + (row + 0.5) * dy - side / 2)
        )
    return corners


def sample_quadrats(
    community: Community,
    n_quadrats: int,
    quadrat_area: float,
    rng: np.random.Generator,
    method: str = "random",
    avoid_overlap: bool = True,
    group: Optional[str] = None,
    prefix: str = "site",
    max_tries: int = 1000,
) -> SampleCollection:
    """
    Count the individuals of each species inside square quadrats.

    Args:
        community: Community to sample
        n_quadrats: Number of quadrats
        quadrat_area: Area of each quadrat (same units as the extent)
        rng: Random generator (used by the random placement)
        method: "random" placement or a regular "grid"
        avoid_overlap: Reject quadrat placements that overlap earlier ones
        group: Group label attached to every sample (e.g. a treatment)
        prefix: Sample id prefix; samples are named <prefix>1..<prefix>n
        max_tries: Placement attempts per quadrat before giving up

    Returns:
        SampleCollection with one sample per quadrat, located at its centre

    Raises:
        InvalidInput: Bad arguments, or quadrats that cannot be placed
    """
    if method not in SAMPLING_METHODS:
        raise InvalidInput(f"Unknown method: {method}. Must be one of {SAMPLING_METHODS}")
    if n_quadrats < 1:
        raise InvalidInput(f"n_quadrats must be at least 1, got {n_quadrats}")
    if quadrat_area <= 0:
        raise InvalidInput(f"quadrat_area must be positive, got {quadrat_area}")

    side = math.sqrt(quadrat_area)
    if side > community.width or side > community.height:
        raise InvalidInput(f"Quadrat of area {quadrat_area} does not fit in {community.extent}")

    if method == "random":
        corners = _random_corners(community, n_quadrats, side, rng, avoid_overlap, max_tries)
    else:
        corners = _grid_corners(community, n_quadrats, side, avoid_overlap)

    samples = []
    for i, (x0, y0) in enumerate(corners):
        samples.append(
            Sample(
                sample_id=f"{prefix}{i + 1}",
                assemblage=community.within(x0, x0 + side, y0, y0 + side),
                group=group,
                x=x0 + side / 2,
                y=y0 + side / 2,
            )
        )

    logger.debug(
        f"Sampled {n_quadrats} quadrats of area {quadrat_area} ({method}) "
        f"from {community.n_individuals} individuals"
    )
    return SampleCollection(samples)
