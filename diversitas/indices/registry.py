"""
Index registry and the diversity() entry point.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Dict, List, Optional, Union

from diversitas.common import InvalidInput, as_abundances

from .base import AbstractDiversityIndex
from .encounter import PIE, EffectiveSpeciesPIE
from .richness import (
    AsymptoticRichness,
    PercentRare,
    RarefiedRichness,
    Richness,
    TotalAbundance,
)

INDICES: Dict[str, AbstractDiversityIndex] = {
    index.name: index
    for index in (
        TotalAbundance(),
        Richness(),
        RarefiedRichness(),
        AsymptoticRichness(),
        PercentRare(),
        PIE(),
        EffectiveSpeciesPIE(),
    )
}

DEFAULT_INDICES = ("N", "S", "S_n", "PIE", "S_PIE")


def available_indices() -> List[str]:
    return list(INDICES)


def get_index(index: Union[str, AbstractDiversityIndex]) -> AbstractDiversityIndex:
    """
    Resolve an index name (or pass an index instance through).

    Raises:
        InvalidInput: If the name is not registered
    """
    if isinstance(index, AbstractDiversityIndex):
        return index
    try:
        return INDICES[index]
    except KeyError:
        raise InvalidInput(
            f"Unknown index: {index!r}. Must be one of {available_indices()}"
        ) from None


def diversity(
    abundances: Any,
    index: Union[str, AbstractDiversityIndex],
    effort: Optional[int] = None,
    extrapolate: bool = False,
    rare_threshold: float = 0.05,
    label: Optional[str] = None,
) -> float:
    """
    Compute one diversity index on one assemblage.

    Args:
        abundances: Assemblage, species -> count mapping, or count sequence
        index: Index name ("N", "S", "S_n", "S_asymp", "pct_rare", "PIE",
            "S_PIE") or index instance
        effort: Rarefaction effort for S_n
        extrapolate: Allow S_n efforts above N (Chao1 extrapolation)
        rare_threshold: Relative abundance cutoff for pct_rare
        label: Sample label used in error messages

    Returns:
        Index value

    Raises:
        InvalidInput: Malformed abundances, unknown index or missing effort
        InsufficientEffort: S_n effort above N without extrapolation
        DegenerateSample: PIE / S_PIE with fewer than 2 individuals
    """
    return get_index(index)(
        abundances,
        effort=effort,
        extrapolate=extrapolate,
        rare_threshold=rare_threshold,
        label=label,
    )


def calc_indices(
    abundances: Any,
    indices: Iterable[Union[str, AbstractDiversityIndex]] = DEFAULT_INDICES,
    **options,
) -> Dict[str, float]:
    """Compute several indices on one assemblage, keyed by index name."""
    counts = as_abundances(abundances)
    resolved = [get_index(i) for i in indices]
    return {index.name: index(counts, **options) for index in resolved}
