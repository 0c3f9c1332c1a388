"""
Spark batch cleaning module.
"""

from .categorizer import Categorizer
from .normalizer import MovieNormalizer, NormalizationResult
from .pipeline import CleaningPipeline
from .profiler import DatasetProfiler
from .readers import CSVReader, FileReader
from .view_publisher import AnalysisViewPublisher
from .writers import CleanRecordStore

__all__ = [
    "CleaningPipeline",
    "DatasetProfiler",
    "MovieNormalizer",
    "NormalizationResult",
    "Categorizer",
    "AnalysisViewPublisher",
    "CSVReader",
    "FileReader",
    "CleanRecordStore",
]
