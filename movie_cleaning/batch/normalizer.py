"""
Normalization stage: raw movie rows to deduplicated, typed rows.

Flow: snapshot → rank duplicates → drop duplicates → strip artifacts →
coerce blanks → correct magnitude → backfill

Every step is a column expression, so a malformed value turns into null
rather than failing the batch.
"""

from dataclasses import dataclass, field
from functools import reduce

from pyspark.sql import Column, DataFrame, Window
from pyspark.sql import functions as F

from movie_cleaning.core.models import BackfillCorrection, PipelineConfig
from movie_cleaning.core.schema.movie_schema import DUPLICATE_RANK, SOURCE_ORDER, TITLE
from movie_cleaning.observability.logger import get_logger

from .expressions import parse_number, quoted, strip_substrings

logger = get_logger(__name__)


@dataclass
class NormalizationResult:
    """Clean rows plus what the normalizer did to get them."""

    df: DataFrame
    input_count: int
    duplicate_count: int
    backfilled: dict[str, int] = field(default_factory=dict)

    @property
    def output_count(self) -> int:
        return self.input_count - self.duplicate_count


class MovieNormalizer:
    """
    Turns the raw movie table into one typed row per identity group.

    The raw DataFrame is only ever read; every step returns a new frame.
    """

    def __init__(
        self,
        config: PipelineConfig,
        backfill_table: list[BackfillCorrection] | None = None
    ):
        """
        Initialize normalizer.

        Args:
            config: Run settings (identity fields, coerced fields, ...)
            backfill_table: Closed list of known-missing values

        Raises:
            ValueError: If a correction targets a field that is not numeric
        """
        self.config = config
        self.backfill_table = backfill_table or []

        for correction in self.backfill_table:
            if correction.field_name not in config.coerced_fields:
                raise ValueError(
                    f"Backfill for '{correction.title}' targets '{correction.field_name}', "
                    "which is not a coerced numeric field"
                )

    def normalize(self, raw_df: DataFrame) -> NormalizationResult:
        """
        Run every normalization step over the raw DataFrame.

        Args:
            raw_df: Raw movie records (text columns)

        Returns:
            NormalizationResult with the clean frame and step counts
        """
        input_count = raw_df.count()

        ranked_df = self.rank_duplicates(self.snapshot(raw_df))
        deduped_df = self.drop_duplicates(ranked_df)
        output_count = deduped_df.count()
        duplicate_count = input_count - output_count
        logger.info(
            f"Removed {duplicate_count} duplicate records",
            extra={"input_count": input_count, "output_count": output_count}
        )

        df = self.strip_artifacts(deduped_df)
        df = self.coerce_blanks(df)
        df = self.correct_magnitude(df)
        df, backfilled = self.apply_backfill(df)

        return NormalizationResult(
            df=df,
            input_count=input_count,
            duplicate_count=duplicate_count,
            backfilled=backfilled,
        )

    def snapshot(self, raw_df: DataFrame) -> DataFrame:
        """
        Copy raw rows into a workspace frame with a stable source order.

        Columns the cleaning rules need but the raw table lacks are added
        as nulls.
        """
        needed = dict.fromkeys(
            [TITLE, *self.config.identity_fields, *self.config.coerced_fields]
        )
        absent = [name for name in needed if name not in raw_df.columns]
        if absent:
            logger.warning(f"Raw table lacks columns {absent}; treating them as empty")

        return raw_df.select(
            *[F.col(quoted(name)) for name in raw_df.columns],
            *[F.lit(None).cast("string").alias(name) for name in absent],
            F.monotonically_increasing_id().alias(SOURCE_ORDER),
        )

    def rank_duplicates(self, working_df: DataFrame) -> DataFrame:
        """
        Number rows 1..n inside each identity group, in source order.

        Spark's window partitioning puts nulls in the same group, so two rows
        missing the same identity fields (and equal on the rest) are duplicates.
        """
        window = Window \
            .partitionBy(*[F.col(quoted(name)) for name in self.config.identity_fields]) \
            .orderBy(F.col(SOURCE_ORDER))

        return working_df.withColumn(DUPLICATE_RANK, F.row_number().over(window))

    def drop_duplicates(self, ranked_df: DataFrame) -> DataFrame:
        """Keep rank 1 of each identity group and drop the workspace columns."""
        return ranked_df \
            .filter(F.col(DUPLICATE_RANK) == 1) \
            .drop(DUPLICATE_RANK, SOURCE_ORDER)

    def strip_artifacts(self, df: DataFrame) -> DataFrame:
        """
        Remove stray question marks from titles and quotes from numeric text.

        A title made only of artifacts becomes null.
        """
        title = strip_substrings(F.col(quoted(TITLE)), self.config.title_artifacts)
        replacements = {
            TITLE: F.when(F.trim(title) == "", F.lit(None).cast("string")).otherwise(title)
        }
        for name in self.config.quote_stripped_fields:
            if name in df.columns:
                replacements[name] = strip_substrings(
                    F.col(quoted(name)).cast("string"), ["\""]
                )

        return df.withColumns(replacements)

    def coerce_blanks(self, df: DataFrame) -> DataFrame:
        """
        Trim each coerced field; blank becomes null, anything else is parsed
        to the field's numeric type (null when it does not parse).
        """
        return df.withColumns({
            name: parse_number(name, sql_type)
            for name, sql_type in self.config.coerced_fields.items()
        })

    def correct_magnitude(self, df: DataFrame) -> DataFrame:
        """Divide values above the implausibility threshold by the divisor."""
        rule = self.config.magnitude_correction
        sql_type = self.config.coerced_fields[rule.field_name]
        column = F.col(quoted(rule.field_name))

        corrected = F.when(
            column > F.lit(rule.threshold),
            (column / F.lit(rule.divisor)).cast(sql_type)
        ).otherwise(column)

        return df.withColumn(rule.field_name, corrected)

    def apply_backfill(self, df: DataFrame) -> tuple[DataFrame, dict[str, int]]:
        """
        Fill known-missing values for exact title matches.

        A correction applies only where the title is equal and the field is
        still null; every other row is left alone.

        Returns:
            Tuple of (backfilled_df, filled count per field)
        """
        if not self.backfill_table:
            return df, {}

        conditions: dict[str, list[Column]] = {}
        for correction in self.backfill_table:
            conditions.setdefault(correction.field_name, []).append(
                (F.col(quoted(TITLE)) == F.lit(correction.title))
                & F.col(quoted(correction.field_name)).isNull()
            )

        row = df.agg(*[
            F.sum(F.when(_any(field_conditions), 1).otherwise(0)).alias(field_name)
            for field_name, field_conditions in conditions.items()
        ]).collect()[0]
        backfilled = {field_name: int(row[field_name] or 0) for field_name in conditions}

        for correction in self.backfill_table:
            column = F.col(quoted(correction.field_name))
            sql_type = self.config.coerced_fields[correction.field_name]
            df = df.withColumn(
                correction.field_name,
                F.when(
                    (F.col(quoted(TITLE)) == F.lit(correction.title)) & column.isNull(),
                    F.lit(correction.value).cast(sql_type)
                ).otherwise(column)
            )

        for field_name, count in backfilled.items():
            if count:
                logger.info(f"Backfilled {count} missing '{field_name}' values")

        return df, backfilled


def _any(conditions: list[Column]) -> Column:
    """OR the conditions together, treating null as false."""
    return F.coalesce(reduce(lambda left, right: left | right, conditions), F.lit(False))
