"""Core domain models for log records and caller attribution."""

from dataclasses import dataclass, field
from typing import Any

from levelog.core.severity import Severity


@dataclass(frozen=True)
class CallerFrame:
    """The code location that requested a log line.

    Attributes:
        file: Source file of the calling code.
        line: Line inside ``file`` where the logging call was made.
        function: Name of the calling function.
        enclosing_type: Name of the class the function belongs to, if any.
    """

    file: str
    line: int
    function: str
    enclosing_type: str | None = None

    def describe(self, verbose: bool = False) -> str:
        """Render the caller as ``Type::function()`` or ``function``.

        Args:
            verbose: Append `` in file:line`` to the descriptor.
        """
        if self.enclosing_type:
            text = f"{self.enclosing_type}::{self.function}()"
        else:
            text = self.function
        if verbose:
            text += f" in {self.file}:{self.line}"
        return text


@dataclass(frozen=True)
class FrameInfo:
    """Snapshot of one stack frame as seen by the caller resolver.

    Attributes:
        function: Code object name (``co_name``).
        enclosing_type: Owning class derived from the qualified name.
        module: Value of ``__name__`` in the frame's globals.
        file: Source file being executed.
        line: Line currently executing in that frame.
    """

    function: str
    enclosing_type: str | None
    module: str
    file: str
    line: int


@dataclass(frozen=True)
class LogRecord:
    """A single log record on its way to a sink.

    Attributes:
        severity: Severity of the record.
        message: The log message.
        context: Structured fields, in insertion order.
        timestamp: Unix timestamp in seconds.
        caller: Code location that requested the record.
    """

    severity: Severity
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: float = 0.0
    caller: CallerFrame = field(
        default_factory=lambda: CallerFrame(file="unknown", line=0, function="{script}")
    )
