"""Structured logging configuration for companion_genetics.

The breeding core only logs; it never configures handlers on import. Host
applications call configure_logging() once, or attach their own handlers to
the ``companion_genetics`` logger.

Configurable via environment variables:
- GENETICS_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR). Default: WARNING
- GENETICS_LOG_FORMAT: Output format ('text' or 'json'). Default: text

Usage:
    from companion_genetics.logging_config import configure_logging
    configure_logging()  # Call once at application startup
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import IO, Any, ClassVar

LOG_NAMESPACE = "companion_genetics"

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


def _short_name(name: str) -> str:
    prefix = f"{LOG_NAMESPACE}."
    return name[len(prefix) :] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Fields passed through ``extra=`` (for example ``companion_id`` or
    ``request_id``) are nested under ``"extra"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON string with log data.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": _short_name(record.name),
            "message": record.getMessage(),
        }

        if record.levelno >= logging.ERROR or record.levelno == logging.DEBUG:
            log_data["source"] = f"{record.filename}:{record.lineno}"

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = _extra_fields(record)
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines: TIMESTAMP LEVEL [LOGGER] MESSAGE key=value ..."""

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold red
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, use_colors: bool = False) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%d %H:%M:%S")
        level = f"{record.levelname:8s}"
        if self.use_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"

        line = f"{timestamp} {level} [{_short_name(record.name)}] {record.getMessage()}"

        extra = _extra_fields(record)
        if extra:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def get_log_level() -> int:
    """Read GENETICS_LOG_LEVEL; unknown values fall back to WARNING."""
    level_name = os.environ.get("GENETICS_LOG_LEVEL", "WARNING").upper()
    return _LEVELS.get(level_name, logging.WARNING)


def get_log_format() -> str:
    """Read GENETICS_LOG_FORMAT; anything but 'json' means 'text'."""
    format_name = os.environ.get("GENETICS_LOG_FORMAT", "text").lower()
    return "json" if format_name == "json" else "text"


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    stream: IO[str] | None = None,
    use_colors: bool | None = None,
) -> logging.Logger:
    """Attach a single handler to the companion_genetics logger.

    Calling it again replaces the previous handler.

    Args:
        level: Log level. If None, reads GENETICS_LOG_LEVEL.
        format_type: 'text' or 'json'. If None, reads GENETICS_LOG_FORMAT.
        stream: Output stream. Defaults to stderr.
        use_colors: Colorize text output. Defaults to whether stream is a TTY.

    Returns:
        The configured namespace logger.
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()
    if stream is None:
        stream = sys.stderr
    if use_colors is None:
        use_colors = hasattr(stream, "isatty") and stream.isatty()

    handler = logging.StreamHandler(stream)
    if format_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(use_colors=use_colors))

    logger = logging.getLogger(LOG_NAMESPACE)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug(
        "Logging configured: level=%s, format=%s", logging.getLevelName(level), format_type
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the companion_genetics namespace.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance.
    """
    if not name.startswith(LOG_NAMESPACE):
        name = f"{LOG_NAMESPACE}.{name}"
    return logging.getLogger(name)
