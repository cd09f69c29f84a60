"""Lazily created process-wide console and file loggers.

The first call creates the logger with the given settings; later calls
return the same instance and ignore their arguments until the factory is
reset. Created loggers flush their buffered duplicates at interpreter exit.
"""

import atexit
import os
import threading

from levelog.adapters.sinks.console import ConsoleSink
from levelog.adapters.sinks.file import FileSink
from levelog.core.logger import Logger
from levelog.core.severity import Severity

_lock = threading.Lock()
_console_logger: Logger | None = None
_file_logger: Logger | None = None


def _flush_at_exit(logger: Logger) -> None:
    # Only flush loggers the factories still own.
    if logger is _console_logger or logger is _file_logger:
        logger.flush_duplicates()


def get_console_logger(
    level: Severity | str | None = None,
    deduplication: bool = True,
) -> Logger:
    """Return the shared console logger, creating it on first use.

    Args:
        level: Minimum severity (default DEBUG), used only on creation.
        deduplication: Collapse repeated records, used only on creation.
    """
    global _console_logger
    with _lock:
        if _console_logger is None:
            _console_logger = Logger(
                ConsoleSink(),
                min_severity=level or Severity.DEBUG,
                deduplication=deduplication,
            )
            atexit.register(_flush_at_exit, _console_logger)
        return _console_logger


def reset_console_logger() -> None:
    """Flush and forget the shared console logger."""
    global _console_logger
    with _lock:
        logger, _console_logger = _console_logger, None
    if logger is not None:
        logger.flush_duplicates()


def get_file_logger(
    path: str | os.PathLike[str] | None = None,
    level: Severity | str | None = None,
    deduplication: bool = True,
) -> Logger:
    """Return the shared file logger, creating it on first use.

    Args:
        path: Log file path; None selects the default temp file.
        level: Minimum severity (default DEBUG), used only on creation.
        deduplication: Collapse repeated records, used only on creation.

    Raises:
        FileNotWrittenError: If the log file cannot be created.
    """
    global _file_logger
    with _lock:
        if _file_logger is None:
            _file_logger = Logger(
                FileSink(path),
                min_severity=level or Severity.DEBUG,
                deduplication=deduplication,
            )
            atexit.register(_flush_at_exit, _file_logger)
        return _file_logger


def reset_file_logger() -> None:
    """Flush and forget the shared file logger."""
    global _file_logger
    with _lock:
        logger, _file_logger = _file_logger, None
    if logger is not None:
        logger.flush_duplicates()
