"""
Error kinds raised by diversity computations.

Every failure is reported synchronously as one of these types. All of them
derive from ValueError so callers that already guard numeric code with
``except ValueError`` keep working.
"""

from __future__ import annotations


class DiversityError(ValueError):
    """Base class for all diversity computation errors."""


class InvalidInput(DiversityError):
    """Negative, non-integral or otherwise malformed abundance data."""


class InsufficientEffort(DiversityError):
    """Requested rarefaction effort exceeds the available individuals."""

    def __init__(self, effort: int, available: int, label: str | None = None):
        self.effort = effort
        self.available = available
        self.label = label
        where = f" in sample {label!r}" if label is not None else ""
        super().__init__(
            f"Cannot rarefy to {effort} individuals{where}: only {available} observed"
        )


class DegenerateSample(DiversityError):
    """Too few individuals for the requested index to be defined."""


class UnsupportedIndexForBeta(DiversityError):
    """Index has no multiplicative gamma/alpha decomposition."""

    def __init__(self, index: str):
        self.index = index
        super().__init__(f"Index {index!r} cannot be decomposed into beta diversity")


class GroupMismatch(DiversityError):
    """Samples pooled into one gamma assemblage come from different groups."""
