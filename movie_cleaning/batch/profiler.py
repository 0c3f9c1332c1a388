"""
Read-only diagnostics over a movie dataset.

Run before and after cleaning to see what the pipeline changed. Nothing
here writes to the catalog.
"""

from collections.abc import Iterable
from functools import reduce

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F

from movie_cleaning.core.models import NumericRange, ProfileReport
from movie_cleaning.core.schema.movie_schema import TITLE
from movie_cleaning.observability.logger import get_logger
from movie_cleaning.utils.validation import require_columns, sanitize_sql_identifier

from .expressions import parse_number, quoted

logger = get_logger(__name__)


class DatasetProfiler:
    """
    Profiles a raw or clean movie DataFrame.

    Usage:
        profiler = DatasetProfiler.for_table(spark, "movies_raw")
        profiler.count()
        profiler.missing_counts({"title", "rating"})
    """

    def __init__(self, df: DataFrame, table: str = "dataset"):
        """
        Initialize profiler.

        Args:
            df: DataFrame to inspect
            table: Label used in reports and logs
        """
        self.df = df
        self.table = table

    @classmethod
    def for_table(cls, spark: SparkSession, table_name: str) -> "DatasetProfiler":
        """Profile a table registered in the Spark catalog."""
        table_name = sanitize_sql_identifier(table_name, "table_name")
        return cls(spark.table(table_name), table=table_name)

    def count(self) -> int:
        """Total record count."""
        return self.df.count()

    def missing_counts(self, fields: Iterable[str]) -> dict[str, int]:
        """
        Count records where each field is null or blank after trimming.

        Args:
            fields: Field names to check

        Returns:
            Mapping of field name to missing count
        """
        fields = require_columns(self.df.columns, dict.fromkeys(fields), "fields")
        if not fields:
            return {}

        dtypes = dict(self.df.dtypes)
        aggregations = []
        for name in fields:
            column = F.col(quoted(name))
            missing = column.isNull()
            # Typed columns cannot hold blank strings
            if dtypes[name] == "string":
                missing = missing | (F.trim(column) == "")
            aggregations.append(F.sum(F.when(missing, 1).otherwise(0)).alias(name))

        row = self.df.agg(*aggregations).collect()[0]
        return {name: int(row[name] or 0) for name in fields}

    def numeric_range(self, field: str) -> tuple[float | None, float | None, float | None]:
        """
        Min, max and average over values that parse as finite numbers.

        Non-numeric and blank values are left out rather than counted as zero.

        Args:
            field: Field name

        Returns:
            (min, max, avg), all None when no value parses
        """
        require_columns(self.df.columns, [field], "field")

        row = self.df \
            .select(parse_number(field).alias("value")) \
            .agg(F.min("value"), F.max("value"), F.avg("value")) \
            .collect()[0]

        return (row[0], row[1], row[2])

    def find_malformed_titles(
        self,
        markers: Iterable[str],
        title_field: str = TITLE
    ) -> list[str]:
        """
        Titles containing any of the marker characters.

        Args:
            markers: Characters that flag an encoding artifact (e.g. "?", '"')
            title_field: Column holding the title

        Returns:
            Matching titles
        """
        require_columns(self.df.columns, [title_field], "title_field")
        markers = [marker for marker in markers if marker]
        if not markers:
            return []

        title = F.col(quoted(title_field))
        condition = reduce(
            lambda left, right: left | right,
            [title.contains(marker) for marker in markers]
        )

        return [row[0] for row in self.df.filter(condition).select(title).collect()]

    def profile(
        self,
        critical_fields: Iterable[str],
        numeric_fields: Iterable[str],
        markers: Iterable[str]
    ) -> ProfileReport:
        """
        Run all four diagnostics and bundle them in a report.

        Fields missing from the DataFrame are skipped, so the same call works
        on raw and clean tables.
        """
        columns = set(self.df.columns)
        critical = [name for name in critical_fields if name in columns]
        numeric = [name for name in numeric_fields if name in columns]

        numeric_ranges = {}
        for name in numeric:
            minimum, maximum, average = self.numeric_range(name)
            numeric_ranges[name] = NumericRange(minimum=minimum, maximum=maximum, average=average)

        report = ProfileReport(
            table=self.table,
            record_count=self.count(),
            missing_counts=self.missing_counts(critical),
            numeric_ranges=numeric_ranges,
            malformed_titles=self.find_malformed_titles(markers) if TITLE in columns else [],
        )

        logger.info(
            f"Profiled '{self.table}': {report.record_count} records, "
            f"{len(report.malformed_titles)} malformed titles",
            extra={"table": self.table, "missing_counts": report.missing_counts}
        )
        return report
