"""
Command-line interface for movie data cleaning.

Usage:
    movie-cleaning run --input <file_path> [options]
    movie-cleaning profile --input <file_path> [options]
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from pyspark.sql import SparkSession

from movie_cleaning.batch.pipeline import CleaningPipeline
from movie_cleaning.batch.readers import FileReader
from movie_cleaning.core.models import ProfileReport
from movie_cleaning.core.rules import load_pipeline_config
from movie_cleaning.observability.logger import get_logger


logger = get_logger(__name__)


def create_spark_session(app_name: str = "MovieCleaning") -> SparkSession:
    """
    Create Spark session for batch cleaning.

    Args:
        app_name: Application name

    Returns:
        SparkSession
    """
    spark = SparkSession.builder \
        .appName(app_name) \
        .master("local[*]") \
        .config("spark.sql.adaptive.enabled", "true") \
        .config("spark.sql.adaptive.coalescePartitions.enabled", "true") \
        .getOrCreate()

    return spark


def log_profile(report: ProfileReport) -> None:
    """Log a profile report in readable lines."""
    logger.info(f"Profile of '{report.table}': {report.record_count} records")
    for field_name, count in report.missing_counts.items():
        logger.info(f"  missing {field_name}: {count}")
    for field_name, numeric_range in report.numeric_ranges.items():
        minimum, maximum, average = numeric_range.as_tuple()
        logger.info(f"  {field_name}: min={minimum} max={maximum} avg={average}")
    logger.info(f"  malformed titles: {len(report.malformed_titles)}")


def _load_input(spark: SparkSession, args, table_name: str) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {args.input}")
        sys.exit(1)

    FileReader(spark).load_table(str(input_path), table_name, file_format=args.format)


def run_command(args):
    """
    Execute a cleaning run.

    Args:
        args: Command-line arguments
    """
    config = load_pipeline_config(args.config)
    raw_table = args.table or config.raw_table
    logger.info(f"Input file: {args.input}")

    spark = create_spark_session(f"MovieCleaning-{raw_table}")

    try:
        _load_input(spark, args, raw_table)
        pipeline = CleaningPipeline(spark, config=config)

        if args.profile:
            log_profile(pipeline.profile(raw_table))

        summary = pipeline.run(raw_table)

        if args.profile:
            log_profile(pipeline.profile(summary.clean_table))

        # Display results
        logger.info("=" * 60)
        logger.info("CLEANING COMPLETE")
        logger.info("=" * 60)
        logger.info(f"Original records: {summary.original_count}")
        logger.info(f"Cleaned records: {summary.cleaned_count}")
        logger.info(f"Duplicates removed: {summary.duplicates_removed}")
        logger.info(f"Values backfilled: {summary.backfilled_count}")
        logger.info(f"Still missing runtime: {summary.still_missing_runtime}")
        logger.info(f"Still missing gross: {summary.still_missing_gross}")
        logger.info(f"Analysis view: {summary.view_name}")
        logger.info("=" * 60)

    except Exception as e:
        logger.error(f"Error during cleaning run: {e}", exc_info=True)
        sys.exit(1)
    finally:
        spark.stop()


def profile_command(args):
    """
    Profile a raw file without cleaning it.

    Args:
        args: Command-line arguments
    """
    config = load_pipeline_config(args.config)
    raw_table = args.table or config.raw_table

    spark = create_spark_session(f"MovieProfiling-{raw_table}")

    try:
        _load_input(spark, args, raw_table)
        pipeline = CleaningPipeline(spark, config=config)
        log_profile(pipeline.profile(raw_table))

    except Exception as e:
        logger.error(f"Error during profiling: {e}", exc_info=True)
        sys.exit(1)
    finally:
        spark.stop()


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        required=True,
        help="Path to raw movie file"
    )
    parser.add_argument(
        "--format",
        default="csv",
        choices=["csv", "json", "parquet"],
        help="Input file format (default: csv)"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to pipeline YAML file (default: $MOVIE_CLEANING_CONFIG or packaged config)"
    )
    parser.add_argument(
        "--table",
        default=None,
        help="Catalog name for the raw records (default: from config)"
    )


def main():
    """Main CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Movie data cleaning pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Clean a CSV export
  movie-cleaning run --input data/movies.csv

  # Clean and profile the data before and after
  movie-cleaning run --input data/movies.csv --profile

  # Use custom cleaning settings
  movie-cleaning run --input data/movies.csv --config config/pipeline.yaml

  # Only profile the raw data
  movie-cleaning profile --input data/movies.csv
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Clean a raw movie file")
    _add_input_arguments(run_parser)
    run_parser.add_argument(
        "--profile",
        action="store_true",
        help="Profile the raw and clean tables around the run"
    )

    profile_parser = subparsers.add_parser("profile", help="Profile a raw movie file")
    _add_input_arguments(profile_parser)

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    if args.command == "run":
        run_command(args)
    elif args.command == "profile":
        profile_command(args)


if __name__ == "__main__":
    main()
