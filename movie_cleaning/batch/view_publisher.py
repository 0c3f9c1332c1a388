"""
Publishes the analysis projection of the clean table as a Spark view.
"""

from pyspark.sql import DataFrame, SparkSession

from movie_cleaning.core.schema import ANALYSIS_VIEW_COLUMNS
from movie_cleaning.observability.logger import get_logger
from movie_cleaning.utils.validation import require_columns, sanitize_sql_identifier

from .expressions import quoted

logger = get_logger(__name__)


class AnalysisViewPublisher:
    """
    Creates the read-only analysis view over the clean table.

    The view is stored as SQL text, so it always reflects the clean table's
    current contents; re-running the pipeline needs no re-publish.
    """

    def __init__(self, spark: SparkSession, columns: list[str] | None = None):
        """
        Initialize view publisher.

        Args:
            spark: Active Spark session
            columns: Projected columns (analysis columns by default)
        """
        self.spark = spark
        self.columns = columns or list(ANALYSIS_VIEW_COLUMNS)

    def publish(self, source_table: str, view_name: str = "ready_for_analysis") -> str:
        """
        Create or replace the view over source_table.

        Args:
            source_table: Clean table registered in the catalog
            view_name: View to create

        Returns:
            The view name

        Raises:
            ValidationError: If a name is unsafe or a projected column is missing
        """
        source_table = sanitize_sql_identifier(source_table, "source_table")
        view_name = sanitize_sql_identifier(view_name, "view_name")
        require_columns(self.spark.table(source_table).columns, self.columns, source_table)

        projection = ", ".join(quoted(name) for name in self.columns)
        self.spark.sql(
            f"CREATE OR REPLACE TEMP VIEW {view_name} AS "
            f"SELECT {projection} FROM {source_table}"
        )

        logger.info(
            f"Published view '{view_name}' over '{source_table}'",
            extra={"view": view_name, "source_table": source_table, "columns": self.columns}
        )
        return view_name

    def read(self, view_name: str = "ready_for_analysis") -> DataFrame:
        """Read the published view."""
        return self.spark.table(sanitize_sql_identifier(view_name, "view_name"))
