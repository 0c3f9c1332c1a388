"""
CSV reader using Spark for raw movie exports.
"""

from pyspark.sql import SparkSession, DataFrame

from movie_cleaning.core.schema import canonical_column_name


class CSVReader:
    """
    Reads raw movie CSV files with every column kept as text.

    Type inference stays off: numbers in the raw table are text until the
    normalizer parses them. Doubled quotes inside quoted fields are read
    as literal quote characters.
    """

    def __init__(self, spark: SparkSession):
        """
        Initialize CSV reader.

        Args:
            spark: Active Spark session
        """
        self.spark = spark

    def read(
        self,
        file_path: str,
        header: bool = True,
        delimiter: str = ",",
        rename_columns: bool = True
    ) -> DataFrame:
        """
        Read CSV file into Spark DataFrame.

        Args:
            file_path: Path to CSV file
            header: Whether CSV has header row
            delimiter: Field delimiter
            rename_columns: Map original export column names to canonical names

        Returns:
            Spark DataFrame with string columns
        """
        df = self.spark.read \
            .option("header", str(header).lower()) \
            .option("delimiter", delimiter) \
            .option("inferSchema", "false") \
            .option("mode", "PERMISSIVE") \
            .option("escape", "\"") \
            .csv(file_path)

        if rename_columns:
            df = df.toDF(*[canonical_column_name(name) for name in df.columns])

        return df
