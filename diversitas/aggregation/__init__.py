"""
Scale aggregator.

Alpha (per sample), gamma (pooled per group) and beta
(gamma / mean alpha) diversity.
"""

from .data import ScaleResult
from .scales import (
    aggregate,
    alpha_records,
    beta_diversity,
    gamma_records,
    pool,
    run_analysis,
)

__all__ = [
    'ScaleResult',
    'aggregate',
    'alpha_records',
    'beta_diversity',
    'gamma_records',
    'pool',
    'run_analysis',
]
