"""
Tabular reshaping between wide and long community tables.
"""

from .reshape import (
    CURVE_COLUMNS,
    RECORD_COLUMNS,
    SITE_COLUMNS,
    collection_from_long,
    collection_from_wide,
    collection_to_wide,
    curves_to_frame,
    long_to_wide,
    records_to_frame,
    summarize_records,
    wide_to_long,
)

__all__ = [
    'CURVE_COLUMNS',
    'RECORD_COLUMNS',
    'SITE_COLUMNS',
    'collection_from_long',
    'collection_from_wide',
    'collection_to_wide',
    'curves_to_frame',
    'long_to_wide',
    'records_to_frame',
    'summarize_records',
    'wide_to_long',
]
