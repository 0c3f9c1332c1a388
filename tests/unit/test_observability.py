"""
Unit tests for structured logging and Prometheus metrics.
"""

import json
import logging

import pytest

from movie_cleaning.observability.logger import CustomJsonFormatter, log_stage, setup_logger
from movie_cleaning.observability.metrics import (
    REGISTRY,
    generate_metrics,
    record_cleaning_run,
    stage_duration_seconds,
    track_duration,
)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured_logger():
    logger = logging.getLogger("movie-cleaning-test-capture")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = _ListHandler()
    logger.addHandler(handler)
    yield logger, handler.records
    logger.removeHandler(handler)


@pytest.mark.unit
class TestLogging:
    """Tests for the JSON logger"""

    def test_json_formatter_fields(self):
        formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s"
        )
        record = logging.LogRecord(
            name="movie_cleaning.batch.normalizer",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Removed 45 duplicate records",
            args=(),
            exc_info=None,
            func="normalize",
        )
        record.input_count = 5043
        record.stage = "normalize"
        record.table = "movies_raw"

        payload = json.loads(formatter.format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "movie_cleaning.batch.normalizer"
        assert payload["function"] == "normalize"
        assert payload["message"] == "Removed 45 duplicate records"
        assert payload["input_count"] == 5043
        assert payload["pipeline"] == "movie-cleaning"
        assert payload["stage"] == "normalize"
        assert payload["table"] == "movies_raw"
        assert "timestamp" in payload

    def test_setup_logger_reads_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("LOG_FORMAT", "text")

        logger = setup_logger("movie-cleaning-test-env")

        assert logger.level == logging.WARNING
        assert not isinstance(logger.handlers[0].formatter, CustomJsonFormatter)
        assert len(logger.handlers) == 1

    def test_json_formatter_outside_stage(self):
        """Test stage and table are present but null on plain log lines"""
        formatter = CustomJsonFormatter(fmt="%(level)s %(message)s")
        record = logging.LogRecord(
            name="movie_cleaning.cli.clean_cli",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Loaded configuration",
            args=(),
            exc_info=None,
        )

        payload = json.loads(formatter.format(record))

        assert payload["pipeline"] == "movie-cleaning"
        assert payload["stage"] is None
        assert payload["table"] is None

    def test_log_stage_success(self, captured_logger):
        logger, records = captured_logger

        with log_stage("normalize", logger=logger, table="movies_raw") as stage:
            stage.record_count = 4998

        assert stage.duration is not None and stage.duration >= 0
        assert [r.getMessage() for r in records] == ["Starting: normalize", "Completed: normalize"]
        assert records[-1].status == "success"
        assert records[-1].table == "movies_raw"
        assert records[-1].stage == "normalize"
        assert records[-1].record_count == 4998
        assert not hasattr(records[0], "record_count")

    def test_log_stage_failure_propagates(self, captured_logger):
        logger, records = captured_logger

        with pytest.raises(RuntimeError):
            with log_stage("store", logger=logger):
                raise RuntimeError("disk full")

        assert records[-1].levelno == logging.ERROR
        assert records[-1].error_type == "RuntimeError"
        assert records[-1].stage == "store"


@pytest.mark.unit
class TestMetrics:
    """Tests for the cleaning metrics"""

    def test_record_cleaning_run(self):
        table = "metrics_test_raw"
        record_cleaning_run(
            table=table,
            input_records=10,
            normalized_records=8,
            clean_records=8,
            duplicate_records=2,
            backfills={"duration": 1, "gross": 0},
            missing={"gross": 3},
        )

        def sample(name, **labels):
            return REGISTRY.get_sample_value(name, {"table": table, **labels})

        assert sample("cleaning_records_processed_total", stage="snapshot") == 10
        assert sample("cleaning_records_processed_total", stage="normalize") == 8
        assert sample("cleaning_records_processed_total", stage="categorize") == 8
        assert sample("cleaning_duplicates_removed_total") == 2
        assert sample("cleaning_backfills_applied_total", field_name="duration") == 1
        assert sample("cleaning_backfills_applied_total", field_name="gross") is None
        assert sample("cleaning_missing_values", field_name="gross") == 3

    def test_no_duplicates_leaves_counter_untouched(self):
        record_cleaning_run("metrics_test_clean", 5, 5, 5, 0, {}, {})
        assert REGISTRY.get_sample_value(
            "cleaning_duplicates_removed_total", {"table": "metrics_test_clean"}
        ) is None

    def test_track_duration(self):
        with track_duration(stage_duration_seconds, table="metrics_test_timed", stage="publish"):
            pass

        assert REGISTRY.get_sample_value(
            "cleaning_stage_duration_seconds_count",
            {"table": "metrics_test_timed", "stage": "publish"},
        ) == 1

    def test_exposition(self):
        assert b"cleaning_records_processed_total" in generate_metrics()
