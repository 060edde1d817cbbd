"""
Assemblages and sample collections.

An assemblage maps species to individual counts. Samples tag an assemblage
with an identifier, an optional group label and optional coordinates. A
sample collection holds samples that all share one species universe.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .errors import InvalidInput

ALL_SAMPLES = "all"


def _as_count(value: Any, species: str) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidInput(f"Abundance of {species!r} is a boolean: {value!r}")
    if isinstance(value, (int, np.integer)):
        number = int(value)
    else:
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Abundance of {species!r} is not numeric: {value!r}") from e
        if not np.isfinite(number) or number != int(number):
            raise InvalidInput(f"Abundance of {species!r} is not an integer: {value!r}")
        number = int(number)
    if number < 0:
        raise InvalidInput(f"Abundance of {species!r} is negative: {value!r}")
    return number


def default_species_names(n: int) -> Tuple[str, ...]:
    """Species labels sp1..spn."""
    return tuple(f"sp{i + 1}" for i in range(n))


@dataclass(frozen=True)
class Assemblage:
    """
    Individual counts per species.

    Species with zero individuals stay in the assemblage so that
    assemblages drawn from the same universe line up.

    Attributes:
        species: Tuple of species identifiers
        counts: Tuple of non-negative integer counts, aligned with species
    """

    species: Tuple[str, ...]
    counts: Tuple[int, ...]

    def __post_init__(self):
        species = tuple(str(s) for s in self.species)
        if len(species) != len(self.counts):
            raise InvalidInput(
                f"Got {len(species)} species but {len(self.counts)} counts"
            )
        if len(set(species)) != len(species):
            duplicated = [s for s, k in Counter(species).items() if k > 1]
            raise InvalidInput(f"Duplicate species identifiers: {duplicated}")
        counts = tuple(_as_count(c, s) for s, c in zip(species, self.counts))
        object.__setattr__(self, "species", species)
        object.__setattr__(self, "counts", counts)

    @classmethod
    def from_counts(
        cls, counts: Sequence[Any], species: Optional[Sequence[str]] = None
    ) -> Assemblage:
        """Create from a count vector, naming species sp1..spK if not given."""
        counts = list(counts)
        if species is None:
            species = default_species_names(len(counts))
        return cls(species=tuple(species), counts=tuple(counts))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Assemblage:
        """Create from a species -> count mapping."""
        return cls(species=tuple(mapping.keys()), counts=tuple(mapping.values()))

    @classmethod
    def from_observations(
        cls, observations: Iterable[str], species: Optional[Sequence[str]] = None
    ) -> Assemblage:
        """
        Count individual observations (one species label per individual).

        Args:
            observations: Species label for every observed individual
            species: Optional species universe; unobserved species get zero

        Returns:
            Assemblage of counts per species
        """
        counter = Counter(str(o) for o in observations)
        if species is None:
            species = sorted(counter)
        else:
            unknown = set(counter) - set(species)
            if unknown:
                raise InvalidInput(f"Observed species outside universe: {sorted(unknown)}")
        return cls(species=tuple(species), counts=tuple(counter.get(s, 0) for s in species))

    @property
    def N(self) -> int:
        """Total abundance."""
        return sum(self.counts)

    @property
    def S(self) -> int:
        """Observed species richness."""
        return sum(1 for c in self.counts if c > 0)

    def to_array(self) -> np.ndarray:
        """Counts as an int64 array."""
        return np.asarray(self.counts, dtype=np.int64)

    def to_dict(self) -> Dict[str, int]:
        return dict(zip(self.species, self.counts))

    def nonzero(self) -> np.ndarray:
        """Counts of the observed species only."""
        arr = self.to_array()
        return arr[arr > 0]

    def __len__(self) -> int:
        return len(self.species)

    def __add__(self, other: Assemblage) -> Assemblage:
        if self.species != other.species:
            raise InvalidInput("Cannot add assemblages over different species universes")
        return Assemblage(
            species=self.species,
            counts=tuple(a + b for a, b in zip(self.counts, other.counts)),
        )


def as_abundances(data: Any) -> np.ndarray:
    """
    Coerce an assemblage, mapping or count sequence into a count array.

    Raises:
        InvalidInput: If any count is negative or not an integer
    """
    if isinstance(data, Sample):
        data = data.assemblage
    if isinstance(data, Assemblage):
        return data.to_array()
    if isinstance(data, Mapping):
        return Assemblage.from_mapping(data).to_array()
    values = np.asarray(data)
    if values.ndim != 1:
        raise InvalidInput(f"Abundances must be one-dimensional, got shape {values.shape}")
    return np.asarray(
        [_as_count(v, f"species {i}") for i, v in enumerate(values)], dtype=np.int64
    )


@dataclass(frozen=True)
class Sample:
    """
    An assemblage observed at one sampling unit.

    Attributes:
        sample_id: Unique identifier within a collection
        assemblage: Species counts
        group: Optional treatment or group label
        x: Optional x coordinate (e.g. quadrat centre)
        y: Optional y coordinate
        attributes: Extra site attributes usable as grouping keys
    """

    sample_id: str
    assemblage: Assemblage
    group: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def attribute(self, key: str) -> Any:
        """Resolve a grouping key to this sample's value."""
        if key in ("sample_id", "group", "x", "y"):
            return getattr(self, key)
        if key in self.attributes:
            return self.attributes[key]
        raise InvalidInput(f"Sample {self.sample_id!r} has no attribute {key!r}")

    @property
    def N(self) -> int:
        return self.assemblage.N

    @property
    def S(self) -> int:
        return self.assemblage.S


class SampleCollection:
    """
    Immutable, ordered collection of samples over one species universe.

    Absent species must be recorded as zero counts rather than omitted, so
    every sample lists the same species in the same order.
    """

    def __init__(self, samples: Iterable[Sample]):
        self._samples: Tuple[Sample, ...] = tuple(samples)

        if self._samples:
            universe = self._samples[0].assemblage.species
            for sample in self._samples[1:]:
                if sample.assemblage.species != universe:
                    raise InvalidInput(
                        f"Sample {sample.sample_id!r} does not share the species "
                        f"universe of {self._samples[0].sample_id!r}"
                    )
            self._species = universe
        else:
            self._species = ()

        ids = [s.sample_id for s in self._samples]
        duplicated = [i for i, k in Counter(ids).items() if k > 1]
        if duplicated:
            raise InvalidInput(f"Duplicate sample ids: {duplicated}")

    @classmethod
    def from_matrix(
        cls,
        matrix: Sequence[Sequence[Any]],
        species: Optional[Sequence[str]] = None,
        sample_ids: Optional[Sequence[str]] = None,
        groups: Optional[Sequence[Optional[str]]] = None,
    ) -> SampleCollection:
        """Build a collection from a (samples x species) count matrix."""
        matrix = np.asarray(matrix)
        if matrix.ndim != 2:
            raise InvalidInput(f"Expected a 2-D count matrix, got shape {matrix.shape}")
        n_samples, n_species = matrix.shape
        species = tuple(species) if species is not None else default_species_names(n_species)
        if sample_ids is None:
            sample_ids = [f"sample{i + 1}" for i in range(n_samples)]
        if groups is None:
            groups = [None] * n_samples
        return cls(
            Sample(
                sample_id=str(sid),
                assemblage=Assemblage.from_counts(list(row), species=species),
                group=group,
            )
            for sid, row, group in zip(sample_ids, matrix, groups)
        )

    @property
    def species(self) -> Tuple[str, ...]:
        return self._species

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return self._samples

    @property
    def sample_ids(self) -> List[str]:
        return [s.sample_id for s in self._samples]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> Sample:
        return self._samples[index]

    def get(self, sample_id: str) -> Sample:
        for sample in self._samples:
            if sample.sample_id == sample_id:
                return sample
        raise KeyError(sample_id)

    def abundance_matrix(self) -> np.ndarray:
        """Counts as an array of shape (n_samples, n_species)."""
        if not self._samples:
            return np.zeros((0, 0), dtype=np.int64)
        return np.vstack([s.assemblage.to_array() for s in self._samples])

    def min_abundance(self) -> int:
        """Smallest total abundance among the samples."""
        if not self._samples:
            raise InvalidInput("Empty sample collection has no minimum abundance")
        return min(s.N for s in self._samples)

    def group_by(self, key: Optional[str] = "group") -> Dict[Any, List[Sample]]:
        """
        Partition samples by an attribute, keeping first-seen group order.

        Args:
            key: Sample attribute to group on; None puts every sample in "all"

        Returns:
            Mapping from group label to the samples carrying it
        """
        groups: Dict[Any, List[Sample]] = {}
        for sample in self._samples:
            label = ALL_SAMPLES if key is None else sample.attribute(key)
            groups.setdefault(label, []).append(sample)
        return groups

    def subset(self, predicate: Callable[[Sample], bool]) -> SampleCollection:
        return SampleCollection(s for s in self._samples if predicate(s))

    def __repr__(self) -> str:
        return f"SampleCollection({len(self)} samples, {len(self._species)} species)"
