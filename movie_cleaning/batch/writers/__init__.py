"""
Batch data sink writers.
"""

from .clean_store import CleanRecordStore

__all__ = [
    "CleanRecordStore",
]
