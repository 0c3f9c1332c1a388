"""
Structured JSON logging for the movie cleaning pipeline

Every module logs through get_logger(__name__) so that stage timings and
record counts come out as parseable JSON lines.
"""
import logging
import os
import sys
import time

from pythonjsonlogger import jsonlogger

DEFAULT_LOGGER_NAME = "movie-cleaning"

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for pipeline log lines

    Every line carries the pipeline name plus the stage and table it came
    from (null outside a stage).
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName

        log_record["pipeline"] = DEFAULT_LOGGER_NAME
        log_record["stage"] = getattr(record, "stage", None)
        log_record["table"] = getattr(record, "table", None)


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a logger

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
               defaults to the LOG_LEVEL env var
        format_type: "json" or "text", defaults to the LOG_FORMAT env var

    Returns:
        Configured logger instance
    """
    log_level_str = level or os.getenv("LOG_LEVEL", "INFO")
    log_level = LOG_LEVELS.get(log_level_str.upper(), logging.INFO)
    format_type = format_type or os.getenv("LOG_FORMAT", "json")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format_type == "json":
        formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        # Text format for local development
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance, configuring it on first use

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        return setup_logger(name)

    return logger


class log_stage:
    """
    Context manager for logging one pipeline stage

    Stage name and duration go on the Completed/Failed line, together with
    record_count when the block sets it.

    Usage:
        with log_stage("normalize", logger=logger, table="movies_raw") as stage:
            stage.record_count = df.count()
    """

    def __init__(self, stage: str, logger: logging.Logger | None = None, **extra_fields):
        self.stage = stage
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.record_count: int | None = None
        self.start_time: float | None = None
        self.duration: float | None = None

    def __enter__(self):
        self.start_time = time.time()
        self.logger.info(
            f"Starting: {self.stage}",
            extra={"stage": self.stage, **self.extra_fields}
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.time() - self.start_time
        fields = {
            "stage": self.stage,
            "duration_seconds": round(self.duration, 3),
            **self.extra_fields
        }
        if self.record_count is not None:
            fields["record_count"] = self.record_count

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.stage}",
                extra={**fields, "status": "success"}
            )
        else:
            self.logger.error(
                f"Failed: {self.stage}",
                extra={
                    **fields,
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                },
                exc_info=True
            )
        return False  # Don't suppress exceptions
