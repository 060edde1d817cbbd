"""
Analysis configuration.

Configurations are plain dataclasses with a deterministic id derived from
their values, so two analyses run with identical settings share an id.
"""

from __future__ import annotations

import copy
import hashlib
import json
import math
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import numpy as np

from diversitas.common import InvalidInput
from diversitas.indices import DEFAULT_INDICES, get_index

ON_DEGENERATE = ("raise", "nan")


def _canonical(obj: Any, places: int = 8) -> Any:
    # round floats so ids survive float noise; NaN would break json
    if isinstance(obj, float):
        if math.isnan(obj):
            return "NaN"
        rounded = round(obj, places)
        return 0.0 if rounded == 0.0 else rounded
    if isinstance(obj, dict):
        return {str(k): _canonical(v, places) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_canonical(v, places) for v in obj]
    return obj


def deterministic_id(obj: Any, digest_bytes: int = 16) -> str:
    """Stable blake2b hex digest of a dataclass's values."""
    payload = json.dumps(
        _canonical(asdict(obj)),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return hashlib.blake2b(payload.encode("utf-8"), digest_size=digest_bytes).hexdigest()


@dataclass
class SchemaClass:
    # Each schema gets unique id based on values
    def get_id(self) -> str:
        return deterministic_id(self)

    def __str__(self) -> str:
        return json.dumps(asdict(self), indent=4)

    # Schemas own their values; callers mutating a list they passed in
    # must not change the schema
    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, copy.deepcopy(getattr(self, f.name)))


@dataclass
class AnalysisConfig(SchemaClass):
    """
    Settings for a scale-dependent diversity analysis.

    Attributes:
        indices: Index names computed at alpha and gamma scale
        beta_indices: Indices to decompose into beta (None = every requested
            index that supports it)
        group_by: Sample attribute partitioning the collection (None = one group)
        effort: Rarefaction effort for S_n (None = smallest sample N)
        extrapolate: Allow S_n efforts above a sample's N
        rare_threshold: Relative abundance cutoff for pct_rare
        on_degenerate: "raise" to propagate DegenerateSample, "nan" to record NaN
        seed: Seed for simulations driven by this configuration
    """

    indices: List[str] = field(default_factory=lambda: list(DEFAULT_INDICES))
    beta_indices: Optional[List[str]] = None
    group_by: Optional[str] = "group"
    effort: Optional[int] = None
    extrapolate: bool = False
    rare_threshold: float = 0.05
    on_degenerate: str = "raise"
    seed: int = 0

    def validate(self) -> AnalysisConfig:
        """
        Check index names and policies.

        Raises:
            InvalidInput: On unknown indices, bad effort or unknown policy
        """
        for name in list(self.indices) + list(self.beta_indices or []):
            get_index(name)
        if self.effort is not None and self.effort < 0:
            raise InvalidInput(f"effort must be non-negative, got {self.effort}")
        if self.on_degenerate not in ON_DEGENERATE:
            raise InvalidInput(
                f"Invalid on_degenerate: {self.on_degenerate}. Must be one of {ON_DEGENERATE}"
            )
        if not 0.0 <= self.rare_threshold <= 1.0:
            raise InvalidInput(f"rare_threshold must lie in [0, 1], got {self.rare_threshold}")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidInput(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data).validate()

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> AnalysisConfig:
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data)

    def rng(self) -> np.random.Generator:
        """Fresh generator seeded from this configuration."""
        return np.random.default_rng(self.seed)
