# fintrack/utils/logging.py
"""
Logging configuration for the FinTrack engine.

The engines only ever call logging.getLogger(__name__); this module is for the
host process (service, CLI, notebook) that wants engine logs formatted
consistently:
- Level and format taken from settings unless passed explicitly
- Correlation ID on every record (see fintrack.utils.context)
- JSON output for log aggregation

Usage:
    from fintrack.utils import setup_logging

    setup_logging()                                  # from environment
    setup_logging(ledger_level="DEBUG")              # ledger balance traces only

Log Levels used by the engines:
    DEBUG   - Per-entry balance traces, price lookups
    INFO    - Computation summaries (assets valued, entries filled)
    WARNING - Data-quality gaps (missing price, missing FX rate)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from fintrack.config import settings
from fintrack.utils.context import get_correlation_id

# =============================================================================
# CONSTANTS
# =============================================================================

# Default text format: timestamp | level | correlation_id | logger_name | message
DEFAULT_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_CORRELATION_ID = "no-correlation-id"

# Parent of the ledger and ledger service loggers
LEDGER_LOGGER_NAME = "fintrack.services.ledger"

# Standard LogRecord attributes kept out of the JSON "extra" block
_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "correlation_id", "message", "taskName",
}


# =============================================================================
# CORRELATION ID FILTER
# =============================================================================

class CorrelationIdFilter(logging.Filter):
    """Adds the current correlation ID to every record as 'correlation_id'."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        record.correlation_id = correlation_id or NO_CORRELATION_ID
        return True


# =============================================================================
# JSON FORMATTER
# =============================================================================

class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.123+00:00",
        "level": "WARNING",
        "logger": "fintrack.services.valuation.calculators",
        "correlation_id": "abc-123-def",
        "message": "No market price for AAPL-STOCK",
        "extra": { ... }
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = {}
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                try:
                    json.dumps(value)
                    extra[key] = value
                except (TypeError, ValueError):
                    # Decimal, date and enum values land here
                    extra[key] = str(value)

        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry)


# =============================================================================
# SETUP FUNCTION
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        ledger_level: str | None = None,
) -> None:
    """
    Configure root logging with correlation ID support.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.log_level.
        log_format: 'text' or 'json'. Defaults to settings.log_format.
        ledger_level: Level for the ledger loggers only, so balance traces
                      (capped by settings.max_ledger_log_entries) can be
                      switched on without DEBUG everywhere. Defaults to
                      settings.ledger_log_level; unset inherits the root level.

    Raises:
        ValueError: If a level is not a valid log level
    """
    log_level_str = level or settings.log_level
    log_level = _get_log_level(log_level_str)
    format_type = log_format or settings.log_format

    ledger_level_str = ledger_level or settings.ledger_log_level
    ledger_logger = logging.getLogger(LEDGER_LOGGER_NAME)
    if ledger_level_str:
        ledger_logger.setLevel(_get_log_level(ledger_level_str))
    else:
        ledger_logger.setLevel(logging.NOTSET)

    if format_type.lower() == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt=DEFAULT_TEXT_FORMAT,
            datefmt=DEFAULT_DATE_FORMAT,
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        f"Logging configured: level={log_level_str}, format={format_type}, "
        f"ledger_level={ledger_level_str or log_level_str}",
        extra={"config": {"level": log_level_str, "format": format_type, "ledger_level": ledger_level_str}},
    )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _get_log_level(level_str: str) -> int:
    """
    Convert string log level to logging constant.

    Raises:
        ValueError: If level_str is not a valid log level
    """
    level_str = level_str.upper().strip()

    level_mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    if level_str not in level_mapping:
        valid_levels = ", ".join(level_mapping.keys())
        raise ValueError(
            f"Invalid log level: '{level_str}'. "
            f"Valid levels are: {valid_levels}"
        )

    return level_mapping[level_str]

