"""Deduplication of immediately repeated log records.

A Deduplicator holds at most one pending record. Repeats of that record
only bump a counter; the record is written once, with an ``(xN)`` suffix,
when a different record arrives or the buffer is flushed.
"""

import hashlib
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from levelog.core.models import LogRecord
from levelog.core.severity import Severity


@dataclass(frozen=True)
class Suppressed:
    """Nothing is written: the record was buffered or counted as a repeat."""


@dataclass(frozen=True)
class EmitRecord:
    """Write ``record`` now; nothing is buffered."""

    record: LogRecord


@dataclass(frozen=True)
class EmitRecordThenBuffer:
    """Write the previously pending ``flushed`` record; the new one is buffered."""

    flushed: LogRecord
    new_pending_key: str


EmitDecision = Suppressed | EmitRecord | EmitRecordThenBuffer


def serialize_context(context: Mapping[str, Any]) -> str:
    """Serialize context deterministically for hashing.

    Keys are sorted so two mappings with equal content but different
    insertion order produce the same text.
    """
    return json.dumps(context, sort_keys=True, default=str, ensure_ascii=False)


def record_key(severity: Severity, message: str, context: Mapping[str, Any]) -> str:
    """Hash a (severity, message, context) triple into a dedup key."""
    payload = "\x1f".join((severity.value, message, serialize_context(context)))
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


def with_repeat_suffix(record: LogRecord, repeat_count: int) -> LogRecord:
    """Return record with `` (xN)`` appended when it was repeated.

    Args:
        record: The buffered record.
        repeat_count: Occurrences beyond the first one.
    """
    if repeat_count <= 0:
        return record
    return replace(record, message=f"{record.message} (x{repeat_count + 1})")


class Deduplicator:
    """Collapses consecutive identical records into one.

    Args:
        enabled: Whether repeats are collapsed. When False every record is
            emitted immediately.

    Not thread-safe on its own; the owning Logger serializes access.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._pending_key: str | None = None
        self._pending: LogRecord | None = None
        self._repeat_count = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def pending_key(self) -> str | None:
        """Key of the buffered record, or None when nothing is buffered."""
        return self._pending_key

    @property
    def repeat_count(self) -> int:
        """Occurrences of the buffered record beyond the first."""
        return self._repeat_count

    def set_enabled(self, enabled: bool) -> LogRecord | None:
        """Enable or disable deduplication.

        Disabling flushes the pending record first; the caller must write the
        returned record, if any.

        Returns:
            The flushed record when dedup was switched off with a record
            pending, otherwise None.
        """
        flushed = None
        if self._enabled and not enabled:
            flushed = self.flush()
        self._enabled = enabled
        return flushed

    def submit(
        self,
        severity: Severity,
        message: str,
        context: Mapping[str, Any],
        build: Callable[[], LogRecord],
    ) -> EmitDecision:
        """Decide what to write for a new record.

        Args:
            severity: Severity of the new record.
            message: Message of the new record.
            context: Context of the new record.
            build: Builds the LogRecord. Only called when the record is
                emitted or buffered, never for a counted repeat.

        Returns:
            The EmitDecision the caller must act on.
        """
        # @tra: Core.Dedup.Disabled
        if not self._enabled:
            return EmitRecord(build())

        key = record_key(severity, message, context)

        # @tra: Core.Dedup.Seed
        pending = self._pending
        if pending is None:
            self._seed(key, build())
            return Suppressed()

        # @tra: Core.Dedup.Repeat
        if key == self._pending_key:
            self._repeat_count += 1
            return Suppressed()

        # @tra: Core.Dedup.Boundary
        flushed = with_repeat_suffix(pending, self._repeat_count)
        self._seed(key, build())
        return EmitRecordThenBuffer(flushed=flushed, new_pending_key=key)

    def flush(self) -> LogRecord | None:
        """Release the pending record, suffixed with its repeat count.

        Returns:
            The record to write, or None when nothing was buffered.
        """
        # @tra: Core.Dedup.Flush
        if self._pending is None:
            return None
        record = with_repeat_suffix(self._pending, self._repeat_count)
        self._pending_key = None
        self._pending = None
        self._repeat_count = 0
        return record

    def _seed(self, key: str, record: LogRecord) -> None:
        self._pending_key = key
        self._pending = record
        self._repeat_count = 0
