"""
Clean record store.

Registers the cleaned movie DataFrame in the Spark catalog, either as a
cached temp view (default, session-scoped) or as a managed table.
"""

from typing import Literal

from pyspark.sql import DataFrame, SparkSession

from movie_cleaning.core.models import CleanRecord
from movie_cleaning.observability.logger import get_logger
from movie_cleaning.utils.validation import sanitize_sql_identifier

logger = get_logger(__name__)

StoreMode = Literal["temp", "managed"]


class CleanRecordStore:
    """
    Writes clean records under a catalog name and reads them back.
    """

    def __init__(self, spark: SparkSession):
        """
        Initialize clean record store.

        Args:
            spark: Active Spark session
        """
        self.spark = spark

    def save(self, df: DataFrame, table_name: str, mode: StoreMode = "temp") -> int:
        """
        Replace the contents of table_name with df.

        Args:
            df: Clean, categorized records
            table_name: Catalog name to register
            mode: "temp" for a cached temp view, "managed" for saveAsTable

        Returns:
            Number of records stored

        Raises:
            ValueError: If mode is unknown
        """
        table_name = sanitize_sql_identifier(table_name, "table_name")

        # A previous run's temp view would shadow a managed table and hold cached data
        self.spark.catalog.dropTempView(table_name)

        if mode == "temp":
            df = df.cache()
            record_count = df.count()
            df.createOrReplaceTempView(table_name)
        elif mode == "managed":
            df.write.mode("overwrite").saveAsTable(table_name)
            record_count = self.spark.table(table_name).count()
        else:
            raise ValueError(f"Unsupported store mode: {mode}")

        logger.info(
            f"Stored {record_count} clean records in '{table_name}'",
            extra={"table": table_name, "mode": mode, "record_count": record_count}
        )
        return record_count

    def fetch_records(self, table_name: str) -> list[CleanRecord]:
        """
        Collect a clean table as validated models.

        Intended for small tables and tests; the whole table goes to the driver.
        """
        table_name = sanitize_sql_identifier(table_name, "table_name")
        rows = self.spark.table(table_name).collect()
        return [CleanRecord(**row.asDict()) for row in rows]
