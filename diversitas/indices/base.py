"""
Abstract diversity index.

An index reduces one assemblage to a scalar. Indices that behave like
species counts (effective numbers) also support the multiplicative
gamma = alpha · beta decomposition.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np

from diversitas.common import as_abundances


class AbstractDiversityIndex(ABC):
    """
    Abstract scalar diversity index.

    Class attributes:
        name: Index name used in records and configuration
        supports_beta: Whether beta = gamma / mean(alpha) is meaningful
        requires_effort: Whether the index needs a rarefaction effort
    """

    name: str = ""
    supports_beta: bool = False
    requires_effort: bool = False

    @abstractmethod
    def compute(
        self,
        counts: np.ndarray,
        effort: Optional[int] = None,
        extrapolate: bool = False,
        rare_threshold: float = 0.05,
        label: Optional[str] = None,
    ) -> float:
        """
        Compute the index from a validated count array.

        Args:
            counts: Non-negative integer counts
            effort: Rarefaction effort (only for effort-dependent indices)
            extrapolate: Allow efforts beyond the observed abundance
            rare_threshold: Relative abundance below which a species is rare
            label: Sample label used in error messages

        Returns:
            Scalar index value
        """
        pass

    def __call__(self, abundances: Any, **options) -> float:
        """Validate abundances and compute the index."""
        return float(self.compute(as_abundances(abundances), **options))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
