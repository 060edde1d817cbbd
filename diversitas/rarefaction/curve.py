"""
Individual-based rarefaction.

Expected species richness when n individuals are drawn without replacement
from an assemblage (Hurlbert 1971):

    E[S_n] = S - Σ_i C(N - N_i, n) / C(N, n)

The binomial ratio is evaluated in log space so large assemblages never
overflow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import numpy as np
from scipy.special import gammaln

from diversitas.common import InsufficientEffort, InvalidInput, SampleCollection, as_abundances

from .extrapolation import extrapolate_richness

logger = logging.getLogger(__name__)


def _as_efforts(effort: Any) -> np.ndarray:
    efforts = np.atleast_1d(np.asarray(effort, dtype=np.float64))
    if efforts.ndim != 1:
        raise InvalidInput(f"Effort must be a scalar or 1-D sequence, got shape {efforts.shape}")
    if not np.all(np.isfinite(efforts)) or np.any(efforts != np.floor(efforts)):
        raise InvalidInput(f"Effort must be integral: {effort!r}")
    if np.any(efforts < 0):
        raise InvalidInput(f"Effort must be non-negative: {effort!r}")
    return efforts.astype(np.int64)


def hurlbert(
    counts: np.ndarray, efforts: np.ndarray, total: Optional[int] = None
) -> np.ndarray:
    """
    Hurlbert's expected richness for efforts within [0, N].

    Species sharing the same count share one term, so the work scales with
    the number of distinct counts rather than the number of species.

    Args:
        counts: Positive counts of the observed species
        efforts: Draw sizes, each at most the pool size
        total: Pool size; defaults to sum(counts). Incidence data passes the
            number of sampling units instead.

    Returns:
        Expected number of species at each effort
    """
    if total is None:
        total = int(counts.sum())
    n = efforts.astype(np.float64)
    richness = float(len(counts))
    result = np.full(n.shape, richness)

    # log(N! / (N - n)!); the n! of both binomials cancels
    log_denominator = gammaln(total + 1.0) - gammaln(total - n + 1.0)

    values, multiplicity = np.unique(counts, return_counts=True)
    for count, k in zip(values, multiplicity):
        remaining = float(total - count)
        feasible = n <= remaining
        if not np.any(feasible):
            continue
        log_numerator = gammaln(remaining + 1.0) - gammaln(remaining - n[feasible] + 1.0)
        result[feasible] -= k * np.exp(log_numerator - log_denominator[feasible])

    return np.clip(result, 0.0, richness)


def rarefy(
    abundances: Any,
    effort: Any = None,
    extrapolate: bool = False,
    label: Optional[str] = None,
) -> Union[np.ndarray, float]:
    """
    Expected species richness for draws of size n without replacement.

    Args:
        abundances: Assemblage, species -> count mapping, or count sequence
        effort: Draw size(s); None evaluates every size 1..N
        extrapolate: Use the Chao1 extrapolation for efforts above N
        label: Sample label used in error messages

    Returns:
        Array of expected richness per effort, or a float for a scalar effort

    Raises:
        InvalidInput: Malformed abundances or effort, or any n > 0 with N = 0
        InsufficientEffort: An effort exceeds N and extrapolate is False
    """
    counts = as_abundances(abundances)
    total = int(counts.sum())
    scalar = effort is not None and np.ndim(effort) == 0

    if effort is None:
        efforts = np.arange(1, total + 1, dtype=np.int64)
    else:
        efforts = _as_efforts(effort)

    if total == 0 and np.any(efforts > 0):
        raise InvalidInput(
            f"Cannot rarefy an empty assemblage{f' ({label})' if label else ''}"
        )

    over = efforts > total
    if np.any(over) and not extrapolate:
        raise InsufficientEffort(int(efforts[over].max()), total, label)

    result = np.zeros(efforts.shape, dtype=np.float64)
    within = ~over
    if np.any(within) and total > 0:
        result[within] = hurlbert(counts[counts > 0], efforts[within])
    if np.any(over):
        result[over] = extrapolate_richness(counts, efforts[over])

    return float(result[0]) if scalar else result


def expected_richness(abundances: Any, n: int, extrapolate: bool = False) -> float:
    """Expected richness E[S_n] at a single effort."""
    return float(rarefy(abundances, effort=n, extrapolate=extrapolate))


@dataclass
class RarefactionCurve:
    """
    Expected richness as a function of sampling effort.

    Attributes:
        effort: Sampling efforts (individuals, or samples for sample-based curves)
        richness: Expected species at each effort
        label: Optional sample or group label
        unit: What effort counts, "individuals" or "samples"
    """

    effort: np.ndarray
    richness: np.ndarray
    label: Optional[str] = None
    unit: str = field(default="individuals")

    def __post_init__(self):
        if len(self.effort) != len(self.richness):
            raise ValueError("Effort and richness must have the same length")

    def at(self, n: int) -> float:
        """Expected richness at effort n (0 at n = 0)."""
        if n == 0:
            return 0.0
        matches = np.flatnonzero(self.effort == n)
        if len(matches) == 0:
            raise KeyError(n)
        return float(self.richness[matches[0]])

    @property
    def max_effort(self) -> int:
        return int(self.effort[-1]) if len(self.effort) else 0

    @property
    def final_richness(self) -> float:
        return float(self.richness[-1]) if len(self.richness) else 0.0

    def __len__(self) -> int:
        return len(self.effort)

    def __repr__(self) -> str:
        return (
            f"RarefactionCurve(label={self.label!r}, {len(self)} points, "
            f"max_effort={self.max_effort}, final_richness={self.final_richness:.3f})"
        )


def rarefaction_curve(abundances: Any, label: Optional[str] = None) -> RarefactionCurve:
    """
    Full individual-based rarefaction curve from 1 to N individuals.

    The curve ends at (N, S) and never rises by more than one species
    per added individual.
    """
    counts = as_abundances(abundances)
    effort = np.arange(1, int(counts.sum()) + 1, dtype=np.int64)
    richness = rarefy(counts, label=label)
    return RarefactionCurve(effort=effort, richness=richness, label=label)


def rarefaction_curves(collection: SampleCollection) -> Dict[str, RarefactionCurve]:
    """Rarefaction curve of every sample, keyed by sample id."""
    curves = {}
    for sample in collection:
        curves[sample.sample_id] = rarefaction_curve(sample.assemblage, label=sample.sample_id)
        logger.debug(
            f"Rarefied {sample.sample_id}: N={sample.N}, S={sample.S}"
        )
    return curves
