"""The logger core: filtering, deduplication, attribution and sink output.

Example:
    ```python
    from levelog import ConsoleSink, Logger, Severity

    logger = Logger(ConsoleSink(), min_severity=Severity.INFO)
    logger.info("Server started", {"port": 8080})
    logger.flush_duplicates()
    ```
"""

import threading
import time
from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any

from levelog.config import LoggerConfig
from levelog.core.caller import CallerResolver
from levelog.core.dedup import (
    Deduplicator,
    EmitRecord,
    EmitRecordThenBuffer,
)
from levelog.core.formatting import EntryFormatter, snapshot_context
from levelog.core.models import CallerFrame, LogRecord
from levelog.core.ports import SinkPort
from levelog.core.severity import Severity, parse_severity


class Logger:
    """Leveled logger writing formatted lines to a single sink.

    A call to ``log()`` goes through three stages: the severity filter, the
    deduplicator, and (for records that are not held back) the formatter
    and sink. Records repeated back to back are buffered and written once
    with an ``(xN)`` suffix; call ``flush_duplicates()`` or ``close()`` to
    force out the last buffered record.

    Sink errors are never caught here; they propagate to the caller of
    ``log()``.
    """

    def __init__(
        self,
        sink: SinkPort,
        min_severity: Severity | str = Severity.DEBUG,
        deduplication: bool = True,
        *,
        resolver: CallerResolver | None = None,
        formatter: EntryFormatter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the logger.

        Args:
            sink: Destination for formatted lines.
            min_severity: Least severe level still written (inclusive).
            deduplication: Collapse immediately repeated records.
            resolver: Caller resolver; defaults to one walking the live stack.
            formatter: Line formatter; defaults to EntryFormatter().
            clock: Source of record timestamps.

        Raises:
            InvalidSeverity: If min_severity names no known severity.
        """
        self._sink = sink
        self._min_severity = parse_severity(min_severity)
        self._dedup = Deduplicator(enabled=deduplication)
        self._resolver = resolver or CallerResolver()
        self._formatter = formatter or EntryFormatter()
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, sink: SinkPort, config: LoggerConfig, **kwargs: Any) -> "Logger":
        """Create a logger from a LoggerConfig."""
        return cls(
            sink,
            min_severity=config.min_severity,
            deduplication=config.deduplication,
            **kwargs,
        )

    @property
    def sink(self) -> SinkPort:
        return self._sink

    @property
    def min_severity(self) -> Severity:
        return self._min_severity

    def set_min_severity(self, severity: Severity | str) -> None:
        """Change the severity floor.

        Raises:
            InvalidSeverity: If severity names no known severity.
        """
        self._min_severity = parse_severity(severity)

    def should_log(self, severity: Severity | str) -> bool:
        """Return True if records at this severity pass the filter.

        Raises:
            InvalidSeverity: If severity names no known severity.
        """
        # @tra: Core.Logger.ShouldLog
        return parse_severity(severity).rank <= self._min_severity.rank

    def is_deduplication_enabled(self) -> bool:
        return self._dedup.enabled

    def set_deduplication(self, enabled: bool) -> None:
        """Enable or disable deduplication.

        Disabling writes out any buffered record before taking effect.
        """
        # @tra: Core.Logger.DisableDedupFlushes
        with self._lock:
            flushed = self._dedup.set_enabled(enabled)
            if flushed is not None:
                self._write(flushed)

    def log(
        self,
        severity: Severity | str,
        message: object,
        context: Mapping[str, Any] | None = None,
        *,
        caller: CallerFrame | None = None,
    ) -> None:
        """Log a message at the given severity.

        Args:
            severity: Severity member or level name.
            message: Message text; non-strings are converted with ``str()``.
            context: Structured fields appended to the line as JSON.
            caller: Explicit caller attribution. When omitted the caller is
                resolved from the stack, but only if the record is written or
                buffered.

        Raises:
            InvalidSeverity: If severity names no known severity.
            SinkWriteError: If the sink fails to write a line.
        """
        # @tra: Core.Logger.Log
        level = parse_severity(severity)
        if level.rank > self._min_severity.rank:
            return
        text = str(message)
        fields = dict(context) if context else {}

        def build() -> LogRecord:
            return LogRecord(
                severity=level,
                message=text,
                context=snapshot_context(fields),
                timestamp=self._clock(),
                caller=caller or self._resolver.resolve(),
            )

        with self._lock:
            decision = self._dedup.submit(level, text, fields, build)
            if isinstance(decision, EmitRecord):
                self._write(decision.record)
            elif isinstance(decision, EmitRecordThenBuffer):
                self._write(decision.flushed)

    def flush_duplicates(self) -> None:
        """Write the buffered record, if any, and return to the idle state."""
        # @tra: Core.Logger.Flush
        with self._lock:
            flushed = self._dedup.flush()
            if flushed is not None:
                self._write(flushed)

    def close(self) -> None:
        """End the logger's lifecycle, flushing pending duplicates."""
        self.flush_duplicates()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def format(self, record: LogRecord) -> str:
        """Format a record the way this logger writes it."""
        return self._formatter.format(
            record, verbose=self._min_severity is Severity.DEBUG
        )

    def _write(self, record: LogRecord) -> None:
        self._sink.write(self.format(record), record.severity.value)

    def emergency(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.EMERGENCY, message, context)

    def alert(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.ALERT, message, context)

    def critical(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.CRITICAL, message, context)

    def error(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.ERROR, message, context)

    def warning(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.WARNING, message, context)

    def notice(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.NOTICE, message, context)

    def info(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.INFO, message, context)

    def debug(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        self.log(Severity.DEBUG, message, context)
