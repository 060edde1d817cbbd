"""
Alpha, gamma and beta diversity.

Alpha values are computed per sample, gamma values on the pooled
abundances of a group, and beta values as gamma / mean(alpha) for indices
with a multiplicative decomposition.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, List, Optional, Union

import numpy as np

from diversitas.common import (
    ALL_SAMPLES,
    ALPHA,
    BETA,
    GAMMA,
    Assemblage,
    DegenerateSample,
    DiversityRecord,
    GroupMismatch,
    InvalidInput,
    Sample,
    SampleCollection,
    UnsupportedIndexForBeta,
)
from diversitas.config import ON_DEGENERATE, AnalysisConfig
from diversitas.indices import DEFAULT_INDICES, AbstractDiversityIndex, get_index

from .data import ScaleResult

logger = logging.getLogger(__name__)

IndexLike = Union[str, AbstractDiversityIndex]


def _group_label(sample: Sample, group_by: Optional[str]) -> Any:
    return ALL_SAMPLES if group_by is None else sample.attribute(group_by)


def _check_policy(on_degenerate: str) -> None:
    if on_degenerate not in ON_DEGENERATE:
        raise InvalidInput(
            f"Invalid on_degenerate: {on_degenerate}. Must be one of {ON_DEGENERATE}"
        )


def _evaluate(
    index: AbstractDiversityIndex,
    assemblage: Assemblage,
    label: str,
    on_degenerate: str,
    **options,
) -> float:
    try:
        return index(assemblage, label=label, **options)
    except DegenerateSample as e:
        if on_degenerate == "raise":
            raise
        logger.warning(f"Recording NaN for {index.name} of {label}: {e}")
        return float("nan")


def pool(samples: Sequence[Sample], group_by: Optional[str] = "group") -> Assemblage:
    """
    Sum the abundances of samples that share one group key.

    Args:
        samples: Samples to pool
        group_by: Attribute that must be equal across all samples

    Returns:
        Combined (gamma-scale) assemblage

    Raises:
        InvalidInput: If no samples are given or species universes differ
        GroupMismatch: If the samples come from different groups
    """
    samples = list(samples)
    if not samples:
        raise InvalidInput("Cannot pool an empty set of samples")

    if group_by is not None:
        labels = {_group_label(s, group_by) for s in samples}
        if len(labels) > 1:
            raise GroupMismatch(
                f"Cannot pool samples from different {group_by!r} groups: {sorted(map(str, labels))}"
            )

    pooled = samples[0].assemblage
    for sample in samples[1:]:
        pooled = pooled + sample.assemblage
    return pooled


def alpha_records(
    samples: Iterable[Sample],
    indices: Iterable[IndexLike] = DEFAULT_INDICES,
    group_by: Optional[str] = "group",
    effort: Optional[int] = None,
    extrapolate: bool = False,
    rare_threshold: float = 0.05,
    on_degenerate: str = "raise",
) -> List[DiversityRecord]:
    """
    Compute every index on every individual sample.

    Returns:
        One alpha record per sample per index, tagged with the sample's group
    """
    _check_policy(on_degenerate)
    resolved = [get_index(i) for i in indices]
    records = []
    for sample in samples:
        group = _group_label(sample, group_by)
        for index in resolved:
            value = _evaluate(
                index,
                sample.assemblage,
                sample.sample_id,
                on_degenerate,
                effort=effort,
                extrapolate=extrapolate,
                rare_threshold=rare_threshold,
            )
            records.append(
                DiversityRecord(
                    scale=ALPHA,
                    index=index.name,
                    value=value,
                    group=group,
                    sample_id=sample.sample_id,
                    effort=effort if index.requires_effort else None,
                )
            )
        logger.debug(f"Alpha indices computed for {sample.sample_id} (group {group})")
    return records


def gamma_records(
    samples: Sequence[Sample],
    group: Any,
    indices: Iterable[IndexLike] = DEFAULT_INDICES,
    group_by: Optional[str] = "group",
    effort: Optional[int] = None,
    extrapolate: bool = False,
    rare_threshold: float = 0.05,
    on_degenerate: str = "raise",
) -> List[DiversityRecord]:
    """
    Pool a group's samples and compute every index on the pooled assemblage.

    Raises:
        GroupMismatch: If any sample does not belong to ``group``
    """
    _check_policy(on_degenerate)
    samples = list(samples)
    strangers = [s.sample_id for s in samples if _group_label(s, group_by) != group]
    if strangers:
        raise GroupMismatch(f"Samples {strangers} do not belong to group {group!r}")

    pooled = pool(samples, group_by=group_by)
    records = []
    for index in (get_index(i) for i in indices):
        value = _evaluate(
            index,
            pooled,
            f"pooled {group}",
            on_degenerate,
            effort=effort,
            extrapolate=extrapolate,
            rare_threshold=rare_threshold,
        )
        records.append(
            DiversityRecord(
                scale=GAMMA,
                index=index.name,
                value=value,
                group=group,
                effort=effort if index.requires_effort else None,
            )
        )
    return records


def beta_diversity(
    gamma_value: float, alpha_values: Sequence[float], index: IndexLike
) -> float:
    """
    Multiplicative beta diversity gamma / mean(alpha).

    Raises:
        UnsupportedIndexForBeta: If the index has no multiplicative decomposition
        DegenerateSample: If there are no alpha values or their mean is zero
    """
    index = get_index(index)
    if not index.supports_beta:
        raise UnsupportedIndexForBeta(index.name)
    if len(alpha_values) == 0:
        raise DegenerateSample(f"Beta {index.name} needs at least one alpha value")
    mean_alpha = float(np.mean(alpha_values))
    if mean_alpha == 0.0:
        raise DegenerateSample(f"Beta {index.name} is undefined when mean alpha is zero")
    return float(gamma_value) / mean_alpha


def aggregate(
    collection: Union[SampleCollection, Iterable[Sample]],
    indices: Iterable[IndexLike] = DEFAULT_INDICES,
    group_by: Optional[str] = "group",
    beta_indices: Optional[Iterable[IndexLike]] = None,
    effort: Optional[int] = None,
    extrapolate: bool = False,
    rare_threshold: float = 0.05,
    on_degenerate: str = "raise",
) -> ScaleResult:
    """
    Compute alpha, gamma and beta diversity for every group of a collection.

    Args:
        collection: Samples to analyse
        indices: Indices computed at alpha and gamma scale
        group_by: Sample attribute partitioning the collection (None = one group)
        beta_indices: Indices to decompose into beta; None selects every
            requested index that supports it
        effort: Rarefaction effort for S_n; None uses the smallest sample N
            of the whole collection, so samples are only rarefied down
        extrapolate: Allow S_n efforts above a sample's N
        rare_threshold: Relative abundance cutoff for pct_rare
        on_degenerate: "raise" propagates DegenerateSample; "nan" records NaN

    Returns:
        ScaleResult with alpha, gamma and beta records

    Raises:
        UnsupportedIndexForBeta: If beta_indices names an index such as N
    """
    _check_policy(on_degenerate)
    if not isinstance(collection, SampleCollection):
        collection = SampleCollection(collection)
    if len(collection) == 0:
        raise InvalidInput("Cannot aggregate an empty sample collection")

    computed = [get_index(i) for i in indices]
    if beta_indices is None:
        decomposed = [i for i in computed if i.supports_beta]
    else:
        decomposed = [get_index(i) for i in beta_indices]
        for index in decomposed:
            if not index.supports_beta:
                raise UnsupportedIndexForBeta(index.name)
        computed += [i for i in decomposed if i.name not in {c.name for c in computed}]

    if effort is None and any(i.requires_effort for i in computed):
        effort = collection.min_abundance()
        logger.info(f"Rarefying to the smallest sample size: {effort} individuals")

    options = dict(
        effort=effort,
        extrapolate=extrapolate,
        rare_threshold=rare_threshold,
        on_degenerate=on_degenerate,
    )
    result = ScaleResult(effort=effort, group_by=group_by)

    for group, members in collection.group_by(group_by).items():
        alpha = alpha_records(members, computed, group_by=group_by, **options)
        gamma = gamma_records(members, group, computed, group_by=group_by, **options)
        result.alpha.extend(alpha)
        result.gamma.extend(gamma)

        for index in decomposed:
            alpha_values = [r.value for r in alpha if r.index == index.name]
            gamma_value = next(r.value for r in gamma if r.index == index.name)
            try:
                value = beta_diversity(gamma_value, alpha_values, index)
            except DegenerateSample as e:
                if on_degenerate == "raise":
                    raise
                logger.warning(f"Recording NaN for beta {index.name} of {group}: {e}")
                value = float("nan")
            result.beta.append(
                DiversityRecord(
                    scale=BETA,
                    index=index.name,
                    value=value,
                    group=group,
                    effort=effort if index.requires_effort else None,
                )
            )

        logger.info(f"Group {group}: {len(members)} samples aggregated")

    return result


def run_analysis(
    collection: Union[SampleCollection, Iterable[Sample]], config: AnalysisConfig
) -> ScaleResult:
    """Aggregate a collection with the settings of an AnalysisConfig."""
    config.validate()
    return aggregate(
        collection,
        indices=config.indices,
        group_by=config.group_by,
        beta_indices=config.beta_indices,
        effort=config.effort,
        extrapolate=config.extrapolate,
        rare_threshold=config.rare_threshold,
        on_degenerate=config.on_degenerate,
    )
