"""Logging configuration for the command-line tool.

Console output is coloured when writing to a terminal. Setting
``ONCALLREPORT_LOG_FORMAT=json`` switches to one JSON object per line for
log aggregation tools.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

LOG_FORMAT_ENV = "ONCALLREPORT_LOG_FORMAT"


class JSONFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Colours the level name for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color is None:
            return message
        return message.replace(
            record.levelname, f"{color}{record.levelname}{self.RESET}", 1
        )


def setup_logging(verbose: bool = False, stream=None) -> None:
    """Configure the root logger.

    Args:
        verbose: Log DEBUG records when True, INFO and above otherwise.
        stream: Stream to write to. Defaults to stderr so report text on
            stdout stays clean.
    """
    stream = stream or sys.stderr
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream)
    if os.getenv(LOG_FORMAT_ENV, "").lower() == "json":
        handler.setFormatter(JSONFormatter())
    elif hasattr(stream, "isatty") and stream.isatty():
        handler.setFormatter(
            ColoredFormatter(
                fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root_logger.addHandler(handler)
