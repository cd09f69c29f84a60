"""Rendering of log records into single text lines."""

import json
import re
import traceback
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from levelog.core.models import LogRecord

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def encode_context(context: Mapping[str, Any]) -> str:
    """Encode context as compact JSON, keeping insertion order."""
    return json.dumps(
        context, ensure_ascii=False, separators=(",", ":"), default=str
    )


def snapshot_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Detach context from the caller's mutable objects.

    Returns a JSON-decoded copy of the encoded context, so it renders to the
    same text as ``context`` did at the time of the call.
    """
    if not context:
        return {}
    snapshot: dict[str, Any] = json.loads(encode_context(context))
    return snapshot


class EntryFormatter:
    """Formats LogRecords as ``[ts] severity [caller]: message {context}``.

    Args:
        timestamp_format: strftime pattern for the timestamp.
    """

    def __init__(self, timestamp_format: str = TIMESTAMP_FORMAT) -> None:
        self._timestamp_format = timestamp_format

    def format(self, record: LogRecord, verbose: bool = False) -> str:
        """Render a record as one line of text.

        Args:
            record: The record to render.
            verbose: Include the caller's file and line. The logger passes
                True only while its minimum severity is DEBUG.

        Returns:
            The formatted line, without trailing newline.
        """
        # @tra: Core.Formatter.Line
        timestamp = datetime.fromtimestamp(record.timestamp).strftime(
            self._timestamp_format
        )
        caller = record.caller.describe(verbose=verbose)
        line = f"[{timestamp}] {record.severity.value} [{caller}]: {record.message}"
        if record.context:
            line += " " + encode_context(record.context)
        return line


def _placeholder_value(value: Any) -> str:
    if value is None or isinstance(value, (str, int, float, bool)):
        return "" if value is None else str(value)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    if type(value).__str__ is not object.__str__:
        return str(value)
    return type(value).__name__


def interpolate_message(message: str, context: Mapping[str, Any]) -> str:
    """Replace ``{key}`` placeholders in message with context values.

    Keys starting with an underscore are treated as internal and left
    untouched. Lists and dicts are rendered as JSON, objects without a
    custom ``__str__`` as their class name.

    Example:
        >>> interpolate_message("User {user} logged in", {"user": "admin"})
        'User admin logged in'
    """
    # @tra: Core.Formatter.Interpolate
    replacements = {
        key: _placeholder_value(value)
        for key, value in context.items()
        if isinstance(key, str) and not key.startswith("_")
    }
    return _PLACEHOLDER.sub(
        lambda match: replacements.get(match.group(1), match.group(0)), message
    )


def exception_context(exc: BaseException) -> dict[str, Any]:
    """Extract structured details from an exception.

    Returns:
        Dict with exception class, message, code, origin file and line,
        formatted traceback and, for chained exceptions, a nested
        ``previous`` entry.
    """
    # @tra: Core.Formatter.ExceptionContext
    tb = exc.__traceback__
    frames = traceback.extract_tb(tb) if tb is not None else []
    origin = frames[-1] if frames else None
    context: dict[str, Any] = {
        "exception": type(exc).__name__,
        "message": str(exc),
        "code": getattr(exc, "code", 0),
        "file": origin.filename if origin else "unknown",
        "line": origin.lineno if origin else 0,
        "trace": "".join(traceback.format_exception(type(exc), exc, tb)),
    }
    # "raise ... from None" hides the implicit context.
    previous = exc.__cause__
    if previous is None and not exc.__suppress_context__:
        previous = exc.__context__
    if previous is not None:
        context["previous"] = exception_context(previous)
    return context
