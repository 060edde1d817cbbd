"""
Rarefaction engine.

Individual-based curves, sample-based curves and Chao1 extrapolation.
"""

from .curve import (
    RarefactionCurve,
    expected_richness,
    hurlbert,
    rarefaction_curve,
    rarefaction_curves,
    rarefy,
)
from .extrapolation import chao1, extrapolate_richness, undetected_richness
from .sample_based import incidence_frequencies, sample_rarefy

__all__ = [
    'RarefactionCurve',
    'chao1',
    'expected_richness',
    'extrapolate_richness',
    'hurlbert',
    'incidence_frequencies',
    'rarefaction_curve',
    'rarefaction_curves',
    'rarefy',
    'sample_rarefy',
    'undetected_richness',
]
