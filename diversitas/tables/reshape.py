"""
Wide and long community tables.

Wide tables hold one row per site and one column per species. Long tables
hold one row per (site, species) observation. Both convert to and from
SampleCollection, and diversity records and rarefaction curves flatten into
long tables for plotting and summaries.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, List, Optional

import numpy as np
import pandas as pd

from diversitas.common import (
    Assemblage,
    DiversityRecord,
    GroupMismatch,
    InvalidInput,
    Sample,
    SampleCollection,
)

if TYPE_CHECKING:
    from diversitas.rarefaction import RarefactionCurve

SITE_COLUMNS = ("sample_id", "group", "x", "y")
RECORD_COLUMNS = ["scale", "index", "value", "group", "sample_id", "effort"]
CURVE_COLUMNS = ["sample_id", "effort", "richness"]


def _require_columns(frame: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise InvalidInput(f"Missing columns: {missing}")


def _default_species_columns(frame: pd.DataFrame, exclude: Iterable[str]) -> List[str]:
    # tables written by collection_to_wide record which columns are species
    recorded = frame.attrs.get("species_columns")
    if recorded is not None:
        return [c for c in recorded if c in frame.columns]
    excluded = set(exclude) | set(frame.attrs.get("attribute_columns", ()))
    return [
        c
        for c in frame.columns
        if c not in excluded and pd.api.types.is_numeric_dtype(frame[c])
    ]


def collection_to_wide(collection: SampleCollection) -> pd.DataFrame:
    """
    One row per sample: site columns, attributes, then one column per species.

    The species and attribute column names are stored in ``frame.attrs`` so
    numeric attributes are never read back as species.
    """
    rows = []
    attribute_columns: List[str] = []
    for sample in collection:
        attribute_columns += [k for k in sample.attributes if k not in attribute_columns]
        row = {
            "sample_id": sample.sample_id,
            "group": sample.group,
            "x": sample.x,
            "y": sample.y,
        }
        row.update(sample.attributes)
        row.update(sample.assemblage.to_dict())
        rows.append(row)

    frame = pd.DataFrame(rows)
    if frame.empty:
        return pd.DataFrame(columns=list(SITE_COLUMNS))
    species = list(collection.species)
    frame[species] = frame[species].astype(np.int64)
    frame.attrs["species_columns"] = species
    frame.attrs["attribute_columns"] = attribute_columns
    return frame


def wide_to_long(
    frame: pd.DataFrame,
    species_columns: Optional[Sequence[str]] = None,
    id_columns: Optional[Sequence[str]] = None,
    species_col: str = "species",
    value_col: str = "abundance",
    drop_zeros: bool = False,
) -> pd.DataFrame:
    """
    Melt a site-by-species table into one row per (site, species).

    Args:
        frame: Wide table
        species_columns: Species columns; default the species recorded by
            collection_to_wide, else every numeric non-id column
        id_columns: Columns identifying a site; default the site columns present
            (or every non-species column when species_columns is given)
        species_col: Name of the species column in the result
        value_col: Name of the abundance column in the result
        drop_zeros: Drop observations with zero abundance

    Returns:
        Long table with id columns, species_col and value_col
    """
    if id_columns is None:
        if species_columns is None:
            id_columns = [c for c in frame.columns if c in SITE_COLUMNS]
        else:
            id_columns = [c for c in frame.columns if c not in set(species_columns)]
    if species_columns is None:
        species_columns = _default_species_columns(frame, id_columns)
    _require_columns(frame, list(id_columns) + list(species_columns))

    long = frame.melt(
        id_vars=list(id_columns),
        value_vars=list(species_columns),
        var_name=species_col,
        value_name=value_col,
    )
    if drop_zeros:
        long = long[long[value_col] > 0]
    long = long.reset_index(drop=True)
    long.attrs = {}
    return long


def long_to_wide(
    frame: pd.DataFrame,
    index_columns: Sequence[str] = ("sample_id",),
    species_col: str = "species",
    value_col: str = "abundance",
    species: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Pivot observations into a site-by-species table.

    Repeated (site, species) rows are summed and absent species are filled
    with zero, so every site lists the full species universe.

    Raises:
        InvalidInput: If columns are missing or an index column has missing
            values (pivoting would silently drop those rows)
    """
    _require_columns(frame, list(index_columns) + [species_col, value_col])
    incomplete = [c for c in index_columns if frame[c].isna().any()]
    if incomplete:
        raise InvalidInput(f"Index columns {incomplete} have missing values")
    if species is None:
        species = list(pd.unique(frame[species_col]))

    wide = frame.pivot_table(
        index=list(index_columns),
        columns=species_col,
        values=value_col,
        aggfunc="sum",
        fill_value=0,
        sort=False,
    )
    wide = wide.reindex(columns=list(species), fill_value=0)
    wide.columns.name = None
    wide = wide.reset_index()
    wide[list(species)] = wide[list(species)].astype(np.int64)
    wide.attrs = {"species_columns": list(species), "attribute_columns": []}
    return wide


def collection_from_wide(
    frame: pd.DataFrame,
    species_columns: Optional[Sequence[str]] = None,
    sample_col: str = "sample_id",
    group_col: Optional[str] = "group",
    x_col: Optional[str] = "x",
    y_col: Optional[str] = "y",
    attribute_columns: Optional[Sequence[str]] = None,
) -> SampleCollection:
    """
    Build a SampleCollection from a site-by-species table.

    Args:
        frame: Wide table, one row per site
        species_columns: Species columns; default the species recorded by
            collection_to_wide, else every numeric column that is not a site
            or attribute column
        sample_col: Sample id column (the row index is used when absent)
        group_col: Group label column, if any
        x_col: x coordinate column, if any
        y_col: y coordinate column, if any
        attribute_columns: Extra columns kept as sample attributes; default
            the attributes recorded by collection_to_wide

    Returns:
        SampleCollection over the species columns
    """
    if attribute_columns is None:
        attribute_columns = [
            c for c in frame.attrs.get("attribute_columns", ()) if c in frame.columns
        ]
    site_columns = [c for c in (sample_col, group_col, x_col, y_col) if c]
    if species_columns is None:
        species_columns = _default_species_columns(
            frame, site_columns + list(attribute_columns)
        )
    _require_columns(frame, list(species_columns) + list(attribute_columns))
    species = [str(s) for s in species_columns]

    def optional(row: pd.Series, column: Optional[str]):
        if column is None or column not in row.index or pd.isna(row[column]):
            return None
        return row[column]

    samples = []
    for label, row in frame.iterrows():
        sample_id = row[sample_col] if sample_col in frame.columns else label
        x, y = optional(row, x_col), optional(row, y_col)
        group = optional(row, group_col)
        samples.append(
            Sample(
                sample_id=str(sample_id),
                assemblage=Assemblage.from_counts(
                    [row[c] for c in species_columns], species=species
                ),
                group=None if group is None else str(group),
                x=None if x is None else float(x),
                y=None if y is None else float(y),
                attributes={c: row[c] for c in attribute_columns},
            )
        )
    return SampleCollection(samples)


def collection_from_long(
    frame: pd.DataFrame,
    sample_col: str = "sample_id",
    species_col: str = "species",
    value_col: str = "abundance",
    group_col: Optional[str] = "group",
    species: Optional[Sequence[str]] = None,
) -> SampleCollection:
    """
    Build a SampleCollection from one-row-per-observation data.

    Rows are pivoted on the sample id alone; each sample's group label is
    looked up separately, so ungrouped samples (missing labels) are kept.

    Raises:
        GroupMismatch: If one sample carries more than one group label
    """
    if species is None:
        _require_columns(frame, [species_col])
        species = list(pd.unique(frame[species_col]))

    wide = long_to_wide(
        frame,
        index_columns=[sample_col],
        species_col=species_col,
        value_col=value_col,
        species=species,
    )

    grouped = group_col is not None and group_col in frame.columns
    if grouped:
        labels = frame.groupby(sample_col, sort=False)[group_col]
        counts = labels.nunique()
        mixed = list(counts[counts > 1].index)
        if mixed:
            raise GroupMismatch(f"Samples {mixed} carry more than one {group_col!r} label")
        wide[group_col] = wide[sample_col].map(labels.first())

    return collection_from_wide(
        wide,
        species_columns=list(species),
        sample_col=sample_col,
        group_col=group_col if grouped else None,
        x_col=None,
        y_col=None,
        attribute_columns=(),
    )


def records_to_frame(records: Iterable[DiversityRecord]) -> pd.DataFrame:
    """One row per diversity record."""
    return pd.DataFrame([r.to_dict() for r in records], columns=RECORD_COLUMNS)


def curves_to_frame(curves: Mapping[str, "RarefactionCurve"]) -> pd.DataFrame:
    """Long (sample_id, effort, richness) rows for every curve."""
    frames = [
        pd.DataFrame(
            {
                "sample_id": label,
                "effort": curve.effort,
                "richness": curve.richness,
            }
        )
        for label, curve in curves.items()
        if len(curve)
    ]
    if not frames:
        return pd.DataFrame(columns=CURVE_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def summarize_records(
    frame: pd.DataFrame, by: Sequence[str] = ("scale", "index", "group")
) -> pd.DataFrame:
    """Mean, standard deviation and count of record values per group."""
    _require_columns(frame, list(by) + ["value"])
    return (
        frame.groupby(list(by), dropna=False, sort=False)["value"]
        .agg(["mean", "std", "count"])
        .reset_index()
    )
