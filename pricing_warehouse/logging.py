"""Logging setup for pricing-warehouse runs and scripts."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty below WARNING
QUIET_LOGGERS = ("faker",)

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> None:
    """Configure the root logger for a run.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        ``"standard"`` for pipe-delimited lines, ``"json"`` for one JSON
        object per line.
    stream : IO[str] | None
        Destination; defaults to stderr so stdout stays free for reports
        printed by the console sink.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter
    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("pricing_warehouse").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including fields passed via ``extra=``."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
