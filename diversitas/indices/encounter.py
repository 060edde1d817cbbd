"""
Encounter-based evenness indices.

PIE is Hurlbert's probability of interspecific encounter: the chance that
two individuals drawn without replacement belong to different species.

S_PIE converts evenness into an effective number of species (Hill number
of order q = 2). It uses the infinite-population form 1 / Σ p_i², so a
perfectly even assemblage of S species gives exactly S.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from diversitas.common import DegenerateSample

from .base import AbstractDiversityIndex


def _require_pair(counts: np.ndarray, name: str, label: Optional[str]) -> int:
    total = int(counts.sum())
    if total <= 1:
        where = f" ({label})" if label else ""
        raise DegenerateSample(f"{name} needs at least 2 individuals, got {total}{where}")
    return total


def pie(counts: np.ndarray, label: Optional[str] = None) -> float:
    """
    Hurlbert's PIE = 1 - Σ (N_i / N)(N_i - 1)/(N - 1).

    Raises:
        DegenerateSample: If N <= 1
    """
    total = _require_pair(counts, "PIE", label)
    c = counts.astype(np.float64)
    return 1.0 - float(np.sum(c * (c - 1.0))) / (total * (total - 1.0))


def simpson_concentration(counts: np.ndarray) -> float:
    """Σ p_i² with p_i = N_i / N."""
    p = counts[counts > 0] / counts.sum()
    return float(np.sum(p * p))


def s_pie(counts: np.ndarray, label: Optional[str] = None) -> float:
    """
    Effective number of species 1 / Σ p_i².

    Raises:
        DegenerateSample: If N <= 1
    """
    _require_pair(counts, "S_PIE", label)
    return 1.0 / simpson_concentration(counts)


class PIE(AbstractDiversityIndex):
    """Probability of interspecific encounter (without replacement)."""

    name = "PIE"

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        return pie(counts, label=label)


class EffectiveSpeciesPIE(AbstractDiversityIndex):
    """S_PIE: effective number of species at order q = 2."""

    name = "S_PIE"
    supports_beta = True

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        return s_pie(counts, label=label)
