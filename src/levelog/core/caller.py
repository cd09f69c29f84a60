"""Caller resolution: find the code that asked for a log line.

Logging calls pass through several layers of the library (the dispatcher,
its variant handlers, the logger itself) before a record is built. The
resolver walks the stack outward and skips those layers so the record is
attributed to the application code that made the call.
"""

import sys
from collections.abc import Iterable, Iterator
from types import FrameType

from levelog.core.models import CallerFrame, FrameInfo
from levelog.core.ports import FrameSourcePort

SCRIPT_FUNCTION = "{script}"

# Entry points of the dispatch machinery. Frames running one of these are
# never reported as the caller, whatever module they live in.
DEFAULT_INTERNAL_FUNCTIONS = frozenset(
    {
        "_log_internal",
        "_run_variant",
        "_generated_entry",
        "_dispatch_by_name",
    }
)

DEFAULT_INTERNAL_NAMESPACE = "levelog"


def _enclosing_type(qualname: str) -> str | None:
    """Derive the owning class name from a code object's qualified name."""
    parts = qualname.split(".")
    if len(parts) < 2 or parts[-2] == "<locals>":
        return None
    return parts[-2]


def frame_info(frame: FrameType) -> FrameInfo:
    """Build a FrameInfo snapshot from a live interpreter frame."""
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    return FrameInfo(
        function=code.co_name,
        enclosing_type=_enclosing_type(qualname),
        module=str(frame.f_globals.get("__name__", "")),
        file=code.co_filename,
        line=frame.f_lineno,
    )


class StackFrameSource:
    """FrameSourcePort implementation that walks the interpreter's frames."""

    def frames(self) -> Iterator[FrameInfo]:
        """Yield the active stack, innermost first, starting at the caller."""
        frame: FrameType | None = sys._getframe(1)
        while frame is not None:
            yield frame_info(frame)
            frame = frame.f_back


class CallerResolver:
    """Resolves the first frame outside the logging library.

    Args:
        internal_functions: Function names that always count as internal.
        internal_namespace: Module prefix of the logging library itself.
        frame_source: Stack provider; defaults to the live interpreter stack.
    """

    def __init__(
        self,
        internal_functions: Iterable[str] | None = None,
        internal_namespace: str = DEFAULT_INTERNAL_NAMESPACE,
        frame_source: FrameSourcePort | None = None,
    ) -> None:
        self._internal_functions = frozenset(
            DEFAULT_INTERNAL_FUNCTIONS
            if internal_functions is None
            else internal_functions
        )
        self._internal_namespace = internal_namespace
        self._frame_source = frame_source or StackFrameSource()

    @property
    def internal_functions(self) -> frozenset[str]:
        """Function names skipped during resolution."""
        return self._internal_functions

    def is_internal(self, frame: FrameInfo) -> bool:
        """Return True if the frame belongs to the logging machinery."""
        if frame.function in self._internal_functions:
            return True
        namespace = self._internal_namespace
        if not namespace:
            return False
        return frame.module == namespace or frame.module.startswith(namespace + ".")

    def resolve(self, additional_skip: int = 0) -> CallerFrame:
        """Return the first external frame on the stack.

        Args:
            additional_skip: Number of further external frames to skip past
                the first one, for wrappers that should stay invisible.

        Returns:
            CallerFrame of the resolved caller. Module-level code and an
            exhausted stack both resolve to the ``{script}`` sentinel.
        """
        # @tra: Core.Caller.Resolve
        remaining = additional_skip
        for frame in self._frame_source.frames():
            if self.is_internal(frame):
                continue
            if remaining > 0:
                remaining -= 1
                continue
            if frame.function == "<module>":
                # @tra: Core.Caller.ScriptSentinel
                return CallerFrame(
                    file=frame.file, line=frame.line, function=SCRIPT_FUNCTION
                )
            return CallerFrame(
                file=frame.file,
                line=frame.line,
                function=frame.function,
                enclosing_type=frame.enclosing_type,
            )
        return CallerFrame(file="unknown", line=0, function=SCRIPT_FUNCTION)
