"""
Diversitas: scale-dependent biodiversity metrics

Individual-based rarefaction, diversity indices (N, S, S_n, S_asymp,
pct_rare, PIE, S_PIE) and their alpha / gamma / beta decomposition over
collections of community samples, with simulated communities and
wide/long table reshaping for the data around them.
"""

__version__ = "0.1.0"

# Data model
from .common import (
    Assemblage,
    Sample,
    SampleCollection,
    DiversityRecord,
    DiversityError,
    InvalidInput,
    InsufficientEffort,
    DegenerateSample,
    UnsupportedIndexForBeta,
    GroupMismatch,
)

# Rarefaction
from .rarefaction import (
    RarefactionCurve,
    rarefy,
    rarefaction_curve,
    rarefaction_curves,
    sample_rarefy,
    chao1,
)

# Indices
from .indices import (
    AbstractDiversityIndex,
    DEFAULT_INDICES,
    diversity,
    calc_indices,
    get_index,
)

# Configuration
from .config import AnalysisConfig

# Scale aggregation
from .aggregation import (
    ScaleResult,
    aggregate,
    beta_diversity,
    pool,
    run_analysis,
)

# Simulation
from .simulation import (
    Community,
    sim_sad,
    sim_poisson_community,
    sim_thomas_community,
    sample_quadrats,
)

# Tables
from .tables import (
    collection_to_wide,
    collection_from_wide,
    collection_from_long,
    wide_to_long,
    long_to_wide,
    records_to_frame,
    curves_to_frame,
    summarize_records,
)

__all__ = [
    # Data model
    "Assemblage",
    "Sample",
    "SampleCollection",
    "DiversityRecord",
    "DiversityError",
    "InvalidInput",
    "InsufficientEffort",
    "DegenerateSample",
    "UnsupportedIndexForBeta",
    "GroupMismatch",
    # Rarefaction
    "RarefactionCurve",
    "rarefy",
    "rarefaction_curve",
    "rarefaction_curves",
    "sample_rarefy",
    "chao1",
    # Indices
    "AbstractDiversityIndex",
    "DEFAULT_INDICES",
    "diversity",
    "calc_indices",
    "get_index",
    # Configuration
    "AnalysisConfig",
    # Scale aggregation
    "ScaleResult",
    "aggregate",
    "beta_diversity",
    "pool",
    "run_analysis",
    # Simulation
    "Community",
    "sim_sad",
    "sim_poisson_community",
    "sim_thomas_community",
    "sample_quadrats",
    # Tables
    "collection_to_wide",
    "collection_from_wide",
    "collection_from_long",
    "wide_to_long",
    "long_to_wide",
    "records_to_frame",
    "curves_to_frame",
    "summarize_records",
]
