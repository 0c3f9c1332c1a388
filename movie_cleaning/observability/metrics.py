"""
Prometheus metrics for the movie cleaning pipeline

Counts what each stage did to the batch so cleaning progress can be
compared across runs.
"""
from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    CollectorRegistry,
    generate_latest,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# STAGE METRICS
# =======================

records_processed_total = Counter(
    name="cleaning_records_processed_total",
    documentation="Total number of records leaving each pipeline stage",
    labelnames=["table", "stage"],  # stage: snapshot, normalize, categorize
    registry=REGISTRY,
)

stage_duration_seconds = Histogram(
    name="cleaning_stage_duration_seconds",
    documentation="Time spent in each pipeline stage in seconds",
    labelnames=["table", "stage"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

duplicates_removed_total = Counter(
    name="cleaning_duplicates_removed_total",
    documentation="Total number of duplicate records dropped by identity grouping",
    labelnames=["table"],
    registry=REGISTRY,
)

backfills_applied_total = Counter(
    name="cleaning_backfills_applied_total",
    documentation="Total number of values filled from the backfill table",
    labelnames=["table", "field_name"],
    registry=REGISTRY,
)

missing_values = Gauge(
    name="cleaning_missing_values",
    documentation="Missing values per field after the last run",
    labelnames=["table", "field_name"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


class track_duration:
    """
    Context manager for tracking stage duration

    Usage:
        with track_duration(stage_duration_seconds, table="movies_raw", stage="normalize"):
            ...
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    """Set a gauge metric value"""
    gauge.labels(**labels).set(value)


def record_cleaning_run(
    table: str,
    input_records: int,
    normalized_records: int,
    clean_records: int,
    duplicate_records: int,
    backfills: dict[str, int],
    missing: dict[str, int],
) -> None:
    """
    Record the outcome of one cleaning run.

    Args:
        table: Raw table the run read from
        input_records: Records in the raw snapshot
        normalized_records: Records left after deduplication
        clean_records: Records in the clean table
        duplicate_records: Records dropped as duplicates
        backfills: Backfilled value count per field
        missing: Missing value count per field in the clean table
    """
    increment_counter(records_processed_total, input_records, table=table, stage="snapshot")
    increment_counter(records_processed_total, normalized_records, table=table, stage="normalize")
    increment_counter(records_processed_total, clean_records, table=table, stage="categorize")

    # Counters reject negative increments
    if duplicate_records > 0:
        increment_counter(duplicates_removed_total, duplicate_records, table=table)

    for field_name, count in backfills.items():
        if count > 0:
            increment_counter(backfills_applied_total, count, table=table, field_name=field_name)

    for field_name, count in missing.items():
        set_gauge(missing_values, count, table=table, field_name=field_name)
