"""
Sample-based rarefaction.

Expected species richness when m of the T sampling units in a collection are
pooled, in random order. This is the incidence analogue of Hurlbert's formula:

    E[S_m] = S - Σ_j C(T - Q_j, m) / C(T, m)

where Q_j is the number of sampling units in which species j occurs.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from diversitas.common import InvalidInput, SampleCollection

from .curve import RarefactionCurve, hurlbert

logger = logging.getLogger(__name__)


def incidence_frequencies(collection: SampleCollection) -> np.ndarray:
    """Number of samples each species occurs in (0 for species never seen)."""
    return (collection.abundance_matrix() > 0).sum(axis=0)


def sample_rarefy(
    collection: SampleCollection, label: Optional[str] = None
) -> RarefactionCurve:
    """
    Sample-based rarefaction curve for m = 1..T sampling units.

    Args:
        collection: Samples to accumulate
        label: Optional curve label (e.g. the group name)

    Returns:
        RarefactionCurve whose effort is counted in samples

    Raises:
        InvalidInput: If the collection is empty
    """
    n_units = len(collection)
    if n_units == 0:
        raise InvalidInput("Cannot rarefy an empty sample collection")

    incidence = incidence_frequencies(collection)
    effort = np.arange(1, n_units + 1, dtype=np.int64)
    richness = hurlbert(incidence[incidence > 0], effort, total=n_units)
    logger.debug(f"Sample-based rarefaction over {n_units} units: S={richness[-1]:.1f}")
    return RarefactionCurve(effort=effort, richness=richness, label=label, unit="samples")
