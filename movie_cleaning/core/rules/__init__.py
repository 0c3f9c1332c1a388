"""
Cleaning rule configuration (category bands, backfill table, run settings).
"""

from .config_loader import (
    BackfillConfigLoader,
    BackfillTableBuilder,
    CategoryBandLoader,
    PipelineConfigLoader,
    default_config_path,
    load_backfill_table,
    load_band_sets,
    load_pipeline_config,
)

__all__ = [
    "CategoryBandLoader",
    "BackfillConfigLoader",
    "PipelineConfigLoader",
    "BackfillTableBuilder",
    "default_config_path",
    "load_pipeline_config",
    "load_band_sets",
    "load_backfill_table",
]
