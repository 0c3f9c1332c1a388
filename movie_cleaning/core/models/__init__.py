"""
Core data models for the movie cleaning pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .backfill_correction import BackfillCorrection
from .category_band import CategoryBand, CategoryBandSet
from .clean_record import CleanRecord
from .cleaning_summary import CleaningSummary
from .pipeline_config import MagnitudeCorrection, PipelineConfig
from .profile_report import NumericRange, ProfileReport
from .raw_record import RawRecord

__all__ = [
    "RawRecord",
    "CleanRecord",
    "CategoryBand",
    "CategoryBandSet",
    "BackfillCorrection",
    "MagnitudeCorrection",
    "PipelineConfig",
    "NumericRange",
    "ProfileReport",
    "CleaningSummary",
]
