"""Logging configuration with optional JSON output."""

import logging
import sys
import json
from typing import Optional, Dict, Any
from datetime import datetime, timezone


class StructuredFormatter(logging.Formatter):
    """JSON formatter; context fields from contextual loggers are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, "context", None)
        if context:
            log_data.update(context)

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Use JSON output if True
        log_file: Optional log file path
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = StructuredFormatter() if structured else StandardFormatter()

    handlers = []
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # Driver loggers are noisy below WARNING
    logging.getLogger("psycopg2").setLevel(logging.WARNING)
    logging.getLogger("sqlglot").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """Attaches a fixed context dict to every record as ``record.context``."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = self.extra
        kwargs["extra"] = extra
        return msg, kwargs


def get_contextual_logger(name: str, context: Dict[str, Any]) -> ContextLoggerAdapter:
    """Get a logger that carries context into structured output.

    Example:
        >>> logger = get_contextual_logger(__name__, {"connection": "warehouse"})
        >>> logger.info("Listing tables")  # JSON output includes "connection"
    """
    return ContextLoggerAdapter(get_logger(name), context)
