"""
Diversity-index calculator.

Scalar indices over a single assemblage: N, S, S_n, S_asymp, pct_rare,
PIE and S_PIE.
"""

from .base import AbstractDiversityIndex
from .encounter import PIE, EffectiveSpeciesPIE, pie, s_pie, simpson_concentration
from .registry import (
    DEFAULT_INDICES,
    INDICES,
    available_indices,
    calc_indices,
    diversity,
    get_index,
)
from .richness import (
    AsymptoticRichness,
    PercentRare,
    RarefiedRichness,
    Richness,
    TotalAbundance,
)

__all__ = [
    'AbstractDiversityIndex',
    'AsymptoticRichness',
    'DEFAULT_INDICES',
    'EffectiveSpeciesPIE',
    'INDICES',
    'PIE',
    'PercentRare',
    'RarefiedRichness',
    'Richness',
    'TotalAbundance',
    'available_indices',
    'calc_indices',
    'diversity',
    'get_index',
    'pie',
    's_pie',
    'simpson_concentration',
]
