"""
Diversity-metric records.

A record is the tuple (scale, index, value) produced per sample (alpha),
per pooled group (gamma) or per group ratio (beta).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

ALPHA = "alpha"
GAMMA = "gamma"
BETA = "beta"

SCALES = (ALPHA, GAMMA, BETA)


@dataclass(frozen=True)
class DiversityRecord:
    """
    One computed index value at one scale.

    Attributes:
        scale: "alpha", "gamma" or "beta"
        index: Index name (e.g. "S_PIE")
        value: Computed value (NaN only under an explicit degenerate policy)
        group: Group label the value belongs to
        sample_id: Sample the value was computed on (alpha scale only)
        effort: Rarefaction effort used, for effort-dependent indices
    """

    scale: str
    index: str
    value: float
    group: Any = None
    sample_id: Optional[str] = None
    effort: Optional[int] = None

    def __post_init__(self):
        if self.scale not in SCALES:
            raise ValueError(f"Unknown scale: {self.scale}. Must be one of {SCALES}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
