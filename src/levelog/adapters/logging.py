"""Python logging handler adapter for levelog.

This adapter bridges Python's standard library logging module to a levelog
Logger, so records from third-party libraries go through the same severity
filter, deduplication and sink as the application's own log calls.
"""

import logging
import traceback
from typing import Any

from levelog.core.logger import Logger
from levelog.core.models import CallerFrame
from levelog.core.severity import Severity

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class LevelogHandler(logging.Handler):
    """Logging handler that forwards stdlib records to a levelog Logger.

    Example:
        ```python
        import logging

        from levelog import ConsoleSink, LevelogHandler, Logger

        logger = Logger(ConsoleSink())
        logging.getLogger().addHandler(LevelogHandler(logger))
        ```
    """

    def __init__(self, logger: Logger, include_logger_name: bool = True) -> None:
        """Initialize the handler with a target logger.

        Args:
            logger: Logger receiving the forwarded records.
            include_logger_name: Add the stdlib logger name to the context
                under ``logger``.
        """
        super().__init__()
        self._logger = logger
        self._include_logger_name = include_logger_name

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a log record to the levelog logger.

        Args:
            record: The log record to emit.
        """
        # @tra: Adapter.Logging.Emit
        context: dict[str, Any] = {}
        if self._include_logger_name:
            context["logger"] = record.name

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                context[key] = value

        # Extract exception info if present
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                context["exc_type"] = exc_type.__name__
            if exc_value is not None:
                context["exc_message"] = str(exc_value)
            if exc_tb is not None:
                context["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        caller = CallerFrame(
            file=record.pathname,
            line=record.lineno,
            function=record.funcName or "{script}",
        )
        self._logger.log(
            Severity.from_stdlib(record.levelno),
            record.getMessage(),
            context,
            caller=caller,
        )
