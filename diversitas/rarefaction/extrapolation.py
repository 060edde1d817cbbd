"""
Chao1 richness and rarefaction beyond the observed sample size.

Extrapolation follows Colwell et al. (2012), eq. 9, using the
bias-corrected Chao1 estimate of undetected species.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from diversitas.common import as_abundances


def undetected_richness(abundances: Any) -> float:
    """
    Bias-corrected estimate of undetected species f0.

    f0 = (N-1)/N · f1² / (2 f2)          when f2 > 0
    f0 = (N-1)/N · f1 (f1 - 1) / 2       otherwise

    Args:
        abundances: Assemblage, mapping or count sequence

    Returns:
        Estimated number of unseen species (0 for an empty assemblage)
    """
    counts = as_abundances(abundances)
    total = int(counts.sum())
    if total == 0:
        return 0.0

    f1 = float(np.sum(counts == 1))
    f2 = float(np.sum(counts == 2))
    correction = (total - 1) / total
    if f2 > 0:
        return correction * f1 * f1 / (2.0 * f2)
    return correction * f1 * (f1 - 1.0) / 2.0


def chao1(abundances: Any) -> float:
    """Chao1 asymptotic richness: observed S plus estimated undetected species."""
    counts = as_abundances(abundances)
    return float(np.sum(counts > 0)) + undetected_richness(counts)


def extrapolate_richness(abundances: Any, effort: Any) -> np.ndarray:
    """
    Expected richness for efforts m beyond the observed N.

    S(N + m*) = S_obs + f0 · [1 - (1 - f1 / (N f0 + f1))^m*]

    Efforts at or below N return S_obs; callers rarefy those instead.
    """
    counts = as_abundances(abundances)
    efforts = np.atleast_1d(np.asarray(effort, dtype=np.float64))
    total = float(counts.sum())
    observed = float(np.sum(counts > 0))
    f0 = undetected_richness(counts)
    if f0 == 0.0:
        return np.full(efforts.shape, observed)

    f1 = float(np.sum(counts == 1))
    extra = np.maximum(efforts - total, 0.0)
    return observed + f0 * (1.0 - np.power(1.0 - f1 / (total * f0 + f1), extra))
