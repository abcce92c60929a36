"""Structured logging setup using structlog."""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import FilteringBoundLogger


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    include_caller_info: bool = False,
    stream: TextIO = None,
) -> None:
    """Configure structured logging with appropriate processors.

    Log lines go to ``stream``, stdout by default.
    """

    level = getattr(logging, log_level.upper())
    stream = stream or sys.stdout

    # Configure standard library logging (uvicorn, httpx)
    logging.basicConfig(format="%(message)s", stream=stream, level=level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _safe_add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if include_caller_info:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
        ]
    )

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def _safe_add_logger_name(logger, method_name: str, event_dict):
    """Add the logger name, tolerating loggers that have none (WriteLogger)."""
    name = getattr(logger, "name", None)
    if name is None:
        name = getattr(getattr(logger, "_logger", None), "name", None)
    event_dict["logger"] = name or event_dict.get("logger", "unknown")
    return event_dict


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a configured structlog logger."""
    return structlog.get_logger(name)


def bind_request_context(**context: Any) -> None:
    """Bind request-scoped values (request id, path) to every log line."""
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    """Clear request-scoped logging context."""
    structlog.contextvars.clear_contextvars()


class StructuredLogger:
    """Wrapper for structured logging with convenience methods."""

    def __init__(self, name: str):
        self.logger = get_logger(name)
        self.name = name

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with structured data."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with structured data."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with structured data."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with structured data."""
        self.logger.error(message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(message, **kwargs)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Create a new logger with bound context."""
        bound_logger = StructuredLogger(self.name)
        bound_logger.logger = self.logger.bind(**kwargs)
        return bound_logger


def get_structured_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)
