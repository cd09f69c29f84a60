"""Holder for the logger shared by otherwise unrelated call sites.

A LoggerRegistry is a small context object; components that need a common
logger can be handed one explicitly. The module-level functions operate on
the process-wide default registry, which is what the dispatcher falls back
to when it was not given a logger of its own.
"""

import threading

from levelog.core.ports import LoggerPort


class LoggerRegistry:
    """Thread-safe holder of at most one shared logger."""

    def __init__(self) -> None:
        self._logger: LoggerPort | None = None
        self._lock = threading.Lock()

    def set_shared(self, logger: LoggerPort) -> None:
        """Make logger the shared logger."""
        with self._lock:
            self._logger = logger

    def get_shared(self) -> LoggerPort | None:
        """Return the shared logger, or None when none was set."""
        with self._lock:
            return self._logger

    def has_shared(self) -> bool:
        with self._lock:
            return self._logger is not None

    def reset_shared(self) -> None:
        """Drop the shared logger.

        A logger with buffered duplicates is flushed before it is dropped so
        no record is silently lost.
        """
        # @tra: Registry.Reset
        with self._lock:
            logger, self._logger = self._logger, None
        flush = getattr(logger, "flush_duplicates", None)
        if callable(flush):
            flush()


default_registry = LoggerRegistry()


def set_shared(logger: LoggerPort) -> None:
    """Set the process-wide shared logger."""
    default_registry.set_shared(logger)


def get_shared() -> LoggerPort | None:
    """Return the process-wide shared logger, if any."""
    return default_registry.get_shared()


def has_shared() -> bool:
    """Return True if a process-wide shared logger is set."""
    return default_registry.has_shared()


def reset_shared() -> None:
    """Drop the process-wide shared logger (mainly for test isolation)."""
    default_registry.reset_shared()
