"""levelog - leveled logging core with deduplication and caller attribution."""

from levelog.adapters.logging import LevelogHandler
from levelog.adapters.sinks import ConsoleSink, FileSink, InMemorySink
from levelog.config import LoggerConfig
from levelog.core.caller import CallerResolver
from levelog.core.dispatch import LogDispatcher, Variant, parse_method_name
from levelog.core.exceptions import (
    FileNotWrittenError,
    InvalidSeverity,
    LevelogError,
    SinkWriteError,
    UnknownLogMethod,
)
from levelog.core.formatting import EntryFormatter, interpolate_message
from levelog.core.logger import Logger
from levelog.core.models import CallerFrame, LogRecord
from levelog.core.ports import LoggerPort, SinkPort
from levelog.core.severity import Severity, parse_severity
from levelog.factories import (
    get_console_logger,
    get_file_logger,
    reset_console_logger,
    reset_file_logger,
)
from levelog.registry import (
    LoggerRegistry,
    get_shared,
    has_shared,
    reset_shared,
    set_shared,
)

__all__ = [
    # Core
    "Logger",
    "LoggerConfig",
    "Severity",
    "parse_severity",
    "LogDispatcher",
    "Variant",
    "parse_method_name",
    "CallerResolver",
    "EntryFormatter",
    "interpolate_message",
    # Models
    "CallerFrame",
    "LogRecord",
    # Ports
    "LoggerPort",
    "SinkPort",
    # Errors
    "LevelogError",
    "InvalidSeverity",
    "UnknownLogMethod",
    "SinkWriteError",
    "FileNotWrittenError",
    # Sinks
    "ConsoleSink",
    "FileSink",
    "InMemorySink",
    # Stdlib logging bridge
    "LevelogHandler",
    # Registry and factories
    "LoggerRegistry",
    "set_shared",
    "get_shared",
    "has_shared",
    "reset_shared",
    "get_console_logger",
    "get_file_logger",
    "reset_console_logger",
    "reset_file_logger",
]
