"""
Core data model and error kinds.

This module contains the building blocks shared by every computation:
- Assemblages (species -> count)
- Samples and sample collections
- Diversity-metric records
- Error hierarchy
"""

from .assemblage import (
    ALL_SAMPLES,
    Assemblage,
    Sample,
    SampleCollection,
    as_abundances,
    default_species_names,
)
from .errors import (
    DegenerateSample,
    DiversityError,
    GroupMismatch,
    InsufficientEffort,
    InvalidInput,
    UnsupportedIndexForBeta,
)
from .records import ALPHA, BETA, GAMMA, SCALES, DiversityRecord

__all__ = [
    "ALL_SAMPLES",
    "ALPHA",
    "Assemblage",
    "BETA",
    "DegenerateSample",
    "DiversityError",
    "DiversityRecord",
    "GAMMA",
    "GroupMismatch",
    "InsufficientEffort",
    "InvalidInput",
    "SCALES",
    "Sample",
    "SampleCollection",
    "UnsupportedIndexForBeta",
    "as_abundances",
    "default_species_names",
]
