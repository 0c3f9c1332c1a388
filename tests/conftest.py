"""
Pytest configuration and fixtures for movie-cleaning tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
import pytest
from typing import Callable, Generator
from pyspark.sql import DataFrame, SparkSession

from movie_cleaning.core.models import PipelineConfig, RawRecord
from movie_cleaning.core.rules import load_backfill_table, load_band_sets
from movie_cleaning.core.schema import RAW_FIELDS, RAW_SCHEMA


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require Spark"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that run on a local Spark session"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that test the full pipeline"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# SPARK FIXTURES
# =======================

@pytest.fixture(scope="session")
def spark_session(tmp_path_factory) -> Generator[SparkSession, None, None]:
    """
    Create a Spark session for testing with local mode

    Yields:
        SparkSession configured for local testing
    """
    warehouse_dir = tmp_path_factory.mktemp("spark-warehouse")
    spark = (
        SparkSession.builder
        .appName("movie-cleaning-test")
        .master("local[2]")
        .config("spark.sql.shuffle.partitions", "2")
        .config("spark.sql.adaptive.enabled", "true")
        .config("spark.driver.memory", "1g")
        .config("spark.executor.memory", "1g")
        .config("spark.ui.enabled", "false")  # Disable UI for tests
        .config("spark.sql.warehouse.dir", str(warehouse_dir))
        .getOrCreate()
    )

    # Set log level to WARN to reduce test output noise
    spark.sparkContext.setLogLevel("WARN")

    yield spark

    # Cleanup
    spark.stop()


@pytest.fixture(scope="function")
def spark_test_session(spark_session) -> SparkSession:
    """
    Function-scoped Spark session that clears the catalog between tests

    Args:
        spark_session: Session-scoped Spark session

    Returns:
        SparkSession for individual test
    """
    spark_session.catalog.clearCache()
    for table in spark_session.catalog.listTables():
        if table.isTemporary:
            spark_session.catalog.dropTempView(table.name)

    return spark_session


# =======================
# DATA FIXTURES
# =======================

def _movie(**fields) -> dict:
    row = {
        "title": "Avatar",
        "duration": "178",
        "director_popularity": "0",
        "lead_actor_popularity": "1000",
        "gross": "760505847",
        "budget": "237000000",
        "release_year": "2009",
        "rating": "7.9",
    }
    row.update(fields)
    return row


@pytest.fixture(scope="session")
def raw_movie() -> Callable[..., dict]:
    """
    Raw movie row with sensible defaults; override any field by keyword

    Values are handed over as given, so numbers may be passed as text.
    """
    return _movie


@pytest.fixture(scope="function")
def make_raw_df(spark_test_session) -> Callable[..., DataFrame]:
    """
    Build a raw movie DataFrame (all text columns) from row dicts

    Returns:
        Function taking row dicts, returning a DataFrame with RAW_SCHEMA
    """
    def _make(*rows: dict) -> DataFrame:
        records = [RawRecord(**row) for row in rows]
        data = [tuple(getattr(record, name) for name in RAW_FIELDS) for record in records]
        return spark_test_session.createDataFrame(data, schema=RAW_SCHEMA)

    return _make


@pytest.fixture(scope="function")
def make_raw_table(make_raw_df) -> Callable[..., DataFrame]:
    """
    Register raw movie rows as a temp view named movies_raw (or table_name)
    """
    def _make(*rows: dict, table_name: str = "movies_raw") -> DataFrame:
        df = make_raw_df(*rows)
        df.createOrReplaceTempView(table_name)
        return df

    return _make


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="function")
def pipeline_config() -> PipelineConfig:
    """Default run settings"""
    return PipelineConfig()


@pytest.fixture(scope="session")
def band_sets():
    """Packaged category bands"""
    return load_band_sets(PipelineConfig())


@pytest.fixture(scope="session")
def backfill_table():
    """Packaged backfill corrections"""
    return load_backfill_table(PipelineConfig())


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")
