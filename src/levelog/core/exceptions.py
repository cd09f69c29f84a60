"""Exception hierarchy for levelog.

Every error raised by the library derives from LevelogError. The concrete
types also subclass the builtin they refine so callers can catch them the
way they would catch the builtin (e.g. ``except ValueError``).
"""


class LevelogError(Exception):
    """Base class for all levelog errors.

    Attributes:
        code: Numeric error code (0 when not set).
    """

    def __init__(self, message: str = "", code: int = 0) -> None:
        super().__init__(message)
        self.code = code


class InvalidSeverity(LevelogError, ValueError):
    """Raised when a severity name is not one of the eight known levels.

    ``message`` replaces the generated text, e.g. when the error is raised
    through a log-and-throw call.
    """

    def __init__(
        self,
        severity: object = None,
        *,
        message: str | None = None,
        code: int = 0,
    ) -> None:
        if message is None:
            message = f"Invalid severity: {severity!r}"
        super().__init__(message, code)
        self.severity = severity


class UnknownLogMethod(LevelogError, AttributeError):
    """Raised when a dynamic log method name matches no (severity, variant)."""

    def __init__(
        self,
        name: str = "",
        owner: str = "LogDispatcher",
        *,
        message: str | None = None,
        code: int = 0,
    ) -> None:
        if message is None:
            message = f"Method {name} does not exist on {owner}"
        super().__init__(message, code)
        self.name = name


class SinkWriteError(LevelogError, OSError):
    """Raised when a sink fails to persist or display a line."""


class FileNotWrittenError(SinkWriteError):
    """Raised when a file sink cannot create or append to its log file."""
