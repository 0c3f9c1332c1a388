"""
Spark column expressions shared by the profiler and the normalizer.

Parsing goes through try_cast so a malformed value becomes null instead of
failing the job, with or without ANSI mode.
"""

from pyspark.sql import Column
from pyspark.sql import functions as F

MAX_DOUBLE = "1.7976931348623157E308"


def quoted(name: str) -> str:
    """Backtick-quote a column name for use inside SQL expressions."""
    return "`" + name.replace("`", "``") + "`"


def trimmed_text(name: str) -> str:
    """SQL for the trimmed text form of a column, null when blank."""
    return f"nullif(trim(CAST({quoted(name)} AS STRING)), '')"


def parse_number(name: str, sql_type: str = "double") -> Column:
    """
    Parse a column to a number of the given Spark SQL type.

    Blank, non-numeric, NaN, infinite and out-of-range values become null.
    Integer types round half up, so "120.5" parses to 121.

    Args:
        name: Column name
        sql_type: Target type ("int", "bigint" or "double")

    Returns:
        Column expression
    """
    as_double = f"try_cast({trimmed_text(name)} AS DOUBLE)"
    # Spark orders NaN above every double, so this drops NaN and +/-Infinity
    finite = f"CASE WHEN abs({as_double}) <= {MAX_DOUBLE} THEN {as_double} END"
    if sql_type == "double":
        return F.expr(finite)
    return F.expr(f"try_cast(round({finite}) AS {sql_type.upper()})")


def strip_substrings(column: Column, substrings: list[str]) -> Column:
    """Remove every occurrence of each substring, applied in order."""
    for substring in substrings:
        column = F.replace(column, F.lit(substring), F.lit(""))
    return column
