"""Logging setup for propscore.

Text output uses a pipe-delimited line; ``json`` output emits one object
per record and carries the analysis context fields when a record was
logged through :class:`AnalysisLoggerAdapter`.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping

CONTEXT_FIELDS = ("analysis_id", "rubric_type", "status")

# Libraries that log too much at INFO
QUIET_LOGGERS = ("confluent_kafka", "psycopg", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure the root logger for propscore.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        ``"standard"`` for text lines or ``"json"`` for structured output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("propscore").setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class AnalysisLoggerAdapter(logging.LoggerAdapter):
    """Attach analysis-record context to every message logged through it."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, **context: Any) -> logging.Logger | AnalysisLoggerAdapter:
    """Get a logger, optionally bound to analysis context.

    Parameters
    ----------
    name : str
        Logger name (usually __name__).
    **context
        Context fields such as ``analysis_id`` or ``rubric_type``.

    Returns
    -------
    logging.Logger | AnalysisLoggerAdapter
        Plain logger when no context is given, otherwise an adapter.
    """
    logger = logging.getLogger(name)
    if not context:
        return logger
    return AnalysisLoggerAdapter(logger, context)
