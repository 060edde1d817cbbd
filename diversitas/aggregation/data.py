"""
Data structures for scale-dependent diversity results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import pandas as pd

from diversitas.common import ALPHA, BETA, GAMMA, SCALES, DiversityRecord
from diversitas.tables import records_to_frame


@dataclass
class ScaleResult:
    """
    Alpha, gamma and beta records of one analysis.

    Attributes:
        alpha: One record per sample per index
        gamma: One record per group per index (pooled samples)
        beta: One record per group per decomposable index (gamma / mean alpha)
        effort: Rarefaction effort used for S_n, if any
        group_by: Sample attribute the collection was partitioned on
    """

    alpha: List[DiversityRecord] = field(default_factory=list)
    gamma: List[DiversityRecord] = field(default_factory=list)
    beta: List[DiversityRecord] = field(default_factory=list)
    effort: Optional[int] = None
    group_by: Optional[str] = None

    def records(self) -> List[DiversityRecord]:
        """All records, alpha then gamma then beta."""
        return [*self.alpha, *self.gamma, *self.beta]

    def by_scale(self, scale: str) -> List[DiversityRecord]:
        if scale not in SCALES:
            raise ValueError(f"Unknown scale: {scale}. Must be one of {SCALES}")
        return {ALPHA: self.alpha, GAMMA: self.gamma, BETA: self.beta}[scale]

    def values(self, scale: str, index: str, group: Any = None) -> List[float]:
        """Values of one index at one scale, optionally restricted to a group."""
        return [
            r.value
            for r in self.by_scale(scale)
            if r.index == index and (group is None or r.group == group)
        ]

    def value(self, scale: str, index: str, group: Any) -> float:
        """Single gamma or beta value of a group."""
        matches = self.values(scale, index, group)
        if len(matches) != 1:
            raise KeyError((scale, index, group))
        return matches[0]

    @property
    def groups(self) -> List[Any]:
        seen = []
        for r in self.gamma:
            if r.group not in seen:
                seen.append(r.group)
        return seen

    def to_frame(self) -> pd.DataFrame:
        """Long table with one row per record."""
        return records_to_frame(self.records())

    def __repr__(self) -> str:
        return (
            f"ScaleResult({len(self.alpha)} alpha, {len(self.gamma)} gamma, "
            f"{len(self.beta)} beta records, effort={self.effort})"
        )
