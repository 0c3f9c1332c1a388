"""
Movie data cleaning pipeline on Apache Spark.

Profiles a raw movie table, deduplicates and normalizes it, attaches
category labels and publishes an analysis view over the result.
"""

__version__ = "0.1.0"
