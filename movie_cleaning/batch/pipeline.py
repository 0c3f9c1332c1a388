"""
Batch cleaning pipeline orchestration.

Coordinates the flow: snapshot → normalize → categorize → store → publish
"""

from pyspark.sql import SparkSession

from movie_cleaning.core.models import (
    BackfillCorrection,
    CategoryBandSet,
    CleaningSummary,
    PipelineConfig,
    ProfileReport,
)
from movie_cleaning.core.rules import load_backfill_table, load_band_sets, load_pipeline_config
from movie_cleaning.core.schema.movie_schema import DURATION, GROSS
from movie_cleaning.observability.logger import get_logger, log_stage
from movie_cleaning.observability.metrics import (
    record_cleaning_run,
    stage_duration_seconds,
    track_duration,
)
from movie_cleaning.utils.validation import sanitize_sql_identifier

from .categorizer import Categorizer
from .normalizer import MovieNormalizer
from .profiler import DatasetProfiler
from .view_publisher import AnalysisViewPublisher
from .writers import CleanRecordStore

logger = get_logger(__name__)


class CleaningPipeline:
    """
    Orchestrates one cleaning run over a raw movie table.

    Flow:
    1. Snapshot the raw table (never modified)
    2. Deduplicate, coerce, correct and backfill
    3. Attach category labels
    4. Replace the clean table
    5. Publish the analysis view over it

    Re-running over the same raw table produces the same clean table.
    """

    def __init__(
        self,
        spark: SparkSession,
        config: PipelineConfig | None = None,
        band_sets: list[CategoryBandSet] | None = None,
        backfill_table: list[BackfillCorrection] | None = None
    ):
        """
        Initialize cleaning pipeline.

        Args:
            spark: Active Spark session
            config: Run settings (loaded from YAML if None)
            band_sets: Category bands (loaded from config if None)
            backfill_table: Known-missing values (loaded from config if None)
        """
        self.spark = spark
        self.config = config or load_pipeline_config()

        if band_sets is None:
            band_sets = load_band_sets(self.config)
        if backfill_table is None:
            backfill_table = load_backfill_table(self.config)

        # Initialize components
        self.normalizer = MovieNormalizer(self.config, backfill_table)
        self.categorizer = Categorizer(band_sets)
        self.store = CleanRecordStore(spark)
        self.publisher = AnalysisViewPublisher(spark)

    def run(self, raw_table: str | None = None) -> CleaningSummary:
        """
        Clean raw_table into the clean table and publish the view.

        Args:
            raw_table: Raw table name (config.raw_table if None)

        Returns:
            CleaningSummary with before/after counts
        """
        raw_table = sanitize_sql_identifier(raw_table or self.config.raw_table, "raw_table")
        clean_table = sanitize_sql_identifier(self.config.clean_table, "clean_table")
        view_name = sanitize_sql_identifier(self.config.view_name, "view_name")

        logger.info(f"Starting cleaning run for table: {raw_table}")

        with log_stage("snapshot", logger=logger, table=raw_table), \
                track_duration(stage_duration_seconds, table=raw_table, stage="snapshot"):
            raw_df = self.spark.table(raw_table)

        with log_stage("normalize", logger=logger, table=raw_table) as stage, \
                track_duration(stage_duration_seconds, table=raw_table, stage="normalize"):
            result = self.normalizer.normalize(raw_df)
            stage.record_count = result.output_count

        with log_stage("categorize", logger=logger, table=raw_table), \
                track_duration(stage_duration_seconds, table=raw_table, stage="categorize"):
            clean_df = self.categorizer.categorize(result.df)

        with log_stage("store", logger=logger, table=clean_table) as stage, \
                track_duration(stage_duration_seconds, table=raw_table, stage="store"):
            cleaned_count = self.store.save(clean_df, clean_table, mode=self.config.store_mode)
            stage.record_count = cleaned_count

        with log_stage("publish", logger=logger, table=view_name), \
                track_duration(stage_duration_seconds, table=raw_table, stage="publish"):
            self.publisher.publish(clean_table, view_name)

        profiler = DatasetProfiler.for_table(self.spark, clean_table)
        missing_fields = dict.fromkeys([*self.config.critical_fields, DURATION, GROSS])
        missing = profiler.missing_counts(
            name for name in missing_fields if name in profiler.df.columns
        )

        record_cleaning_run(
            table=raw_table,
            input_records=result.input_count,
            normalized_records=result.output_count,
            clean_records=cleaned_count,
            duplicate_records=result.duplicate_count,
            backfills=result.backfilled,
            missing=missing,
        )

        summary = CleaningSummary(
            raw_table=raw_table,
            clean_table=clean_table,
            view_name=view_name,
            original_count=result.input_count,
            cleaned_count=cleaned_count,
            duplicates_removed=result.duplicate_count,
            backfilled=result.backfilled,
            still_missing_runtime=missing.get(DURATION, 0),
            still_missing_gross=missing.get(GROSS, 0),
        )

        logger.info(
            "Cleaning run complete",
            extra=summary.model_dump()
        )
        return summary

    def profile(self, table_name: str) -> ProfileReport:
        """
        Profile a catalog table with this run's settings.

        Args:
            table_name: Raw or clean table name

        Returns:
            ProfileReport
        """
        profiler = DatasetProfiler.for_table(self.spark, table_name)
        return profiler.profile(
            critical_fields=self.config.critical_fields,
            numeric_fields=self.config.numeric_fields,
            markers=self.config.malformed_title_markers,
        )
