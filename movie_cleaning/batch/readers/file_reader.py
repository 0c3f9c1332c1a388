"""
Generic file reader for raw movie data (CSV, JSON, Parquet).
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F

from movie_cleaning.core.schema import canonical_column_name
from movie_cleaning.observability.logger import get_logger
from movie_cleaning.utils.validation import sanitize_sql_identifier, validate_file_path

from .csv_reader import CSVReader

logger = get_logger(__name__)


class FileReader:
    """
    Loads a raw movie file and registers it as a catalog table.
    """

    def __init__(self, spark: SparkSession):
        """
        Initialize file reader.

        Args:
            spark: Active Spark session
        """
        self.spark = spark
        self.csv_reader = CSVReader(spark)

    def read(
        self,
        file_path: str,
        file_format: str = "csv",
        **options
    ) -> DataFrame:
        """
        Read file into Spark DataFrame with text columns.

        Args:
            file_path: Path to file
            file_format: Format (csv, json, parquet)
            **options: Format-specific options

        Returns:
            Spark DataFrame

        Raises:
            ValueError: If file format is unsupported
        """
        file_path = validate_file_path(file_path)

        if file_format.lower() == "csv":
            return self.csv_reader.read(file_path, **options)
        elif file_format.lower() == "json":
            df = self.spark.read.json(file_path)
        elif file_format.lower() == "parquet":
            df = self.spark.read.parquet(file_path)
        else:
            raise ValueError(f"Unsupported file format: {file_format}")

        # Raw records are text regardless of the storage format
        return df.select(*[
            F.col(f"`{name}`").cast("string").alias(canonical_column_name(name))
            for name in df.columns
        ])

    def load_table(
        self,
        file_path: str,
        table_name: str,
        file_format: str = "csv",
        **options
    ) -> DataFrame:
        """
        Read a file and register it as a temp view under table_name.

        Returns:
            The registered DataFrame
        """
        table_name = sanitize_sql_identifier(table_name, "table_name")
        df = self.read(file_path, file_format=file_format, **options)
        df.createOrReplaceTempView(table_name)
        logger.info(f"Registered {file_path} as table '{table_name}'")
        return df
