"""
Abundance and richness indices.

N, S, rarefied richness S_n, Chao1 asymptotic richness S_asymp, and the
percentage of rare species.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from diversitas.common import DegenerateSample, InvalidInput
from diversitas.rarefaction import chao1, rarefy

from .base import AbstractDiversityIndex


class TotalAbundance(AbstractDiversityIndex):
    """N: total number of individuals."""

    name = "N"

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        return float(counts.sum())


class Richness(AbstractDiversityIndex):
    """S: number of species with at least one individual."""

    name = "S"
    supports_beta = True

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        return float(np.count_nonzero(counts))


class RarefiedRichness(AbstractDiversityIndex):
    """
    S_n: expected richness in a random draw of n individuals.

    Rarefying down to the smallest sample makes richness comparable between
    samples of different size. Efforts above N are only accepted when
    extrapolation is requested.
    """

    name = "S_n"
    supports_beta = True
    requires_effort = True

    def compute(
        self,
        counts: np.ndarray,
        effort: Optional[int] = None,
        extrapolate: bool = False,
        rare_threshold: float = 0.05,
        label: Optional[str] = None,
    ) -> float:
        if effort is None:
            raise InvalidInput("S_n requires a rarefaction effort")
        if np.ndim(effort) != 0:
            raise InvalidInput(f"S_n takes a single effort, got {effort!r}")
        return float(rarefy(counts, effort=effort, extrapolate=extrapolate, label=label))


class AsymptoticRichness(AbstractDiversityIndex):
    """S_asymp: Chao1 estimate of total richness including undetected species."""

    name = "S_asymp"
    supports_beta = True

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        return chao1(counts)


class PercentRare(AbstractDiversityIndex):
    """pct_rare: percent of observed species below rare_threshold · N individuals."""

    name = "pct_rare"

    def compute(self, counts, effort=None, extrapolate=False, rare_threshold=0.05, label=None):
        observed = counts[counts > 0]
        if len(observed) == 0:
            raise DegenerateSample(
                "pct_rare is undefined for an empty assemblage"
                f"{f' ({label})' if label else ''}"
            )
        if not 0.0 <= rare_threshold <= 1.0:
            raise InvalidInput(f"rare_threshold must lie in [0, 1], got {rare_threshold}")
        cutoff = rare_threshold * observed.sum()
        return 100.0 * float(np.sum(observed < cutoff)) / len(observed)
