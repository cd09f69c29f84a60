"""Port interfaces for the collaborators the logger core depends on.

The core only talks to sinks and stack sources through these protocols,
never to a concrete implementation.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from levelog.core.models import FrameInfo


@runtime_checkable
class SinkPort(Protocol):
    """Port for emitting formatted log lines.

    Adapters implementing this protocol display or persist one line per call.
    Examples: ConsoleSink, FileSink, InMemorySink.
    """

    def write(self, line: str, severity: str) -> None:
        """Emit one formatted line.

        Args:
            line: Fully formatted log line, without trailing newline.
            severity: Severity name of the record (e.g. "error").

        Raises:
            SinkWriteError: If the line could not be emitted.
        """
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Port for anything that accepts leveled log calls.

    Logger implements it; the dispatcher and registry accept any object
    that does.
    """

    def log(
        self,
        severity: Any,
        message: object,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Log a message at the given severity."""
        ...


@runtime_checkable
class FrameSourcePort(Protocol):
    """Port for reading the active call stack.

    The default implementation walks the interpreter's frames; tests
    substitute a fixed list.
    """

    def frames(self) -> Iterable[FrameInfo]:
        """Return the current stack, innermost frame first."""
        ...
