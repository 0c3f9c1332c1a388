"""
Movie dataset column layout.
"""

from .movie_schema import (
    ANALYSIS_VIEW_COLUMNS,
    CATEGORY_FIELDS,
    CORE_FIELDS,
    ORIGINAL_COLUMN_ALIASES,
    PASSTHROUGH_FIELDS,
    RAW_FIELDS,
    RAW_SCHEMA,
    canonical_column_name,
)

__all__ = [
    "ANALYSIS_VIEW_COLUMNS",
    "CATEGORY_FIELDS",
    "CORE_FIELDS",
    "ORIGINAL_COLUMN_ALIASES",
    "PASSTHROUGH_FIELDS",
    "RAW_FIELDS",
    "RAW_SCHEMA",
    "canonical_column_name",
]
