"""Sink adapters implementing SinkPort."""

from levelog.adapters.sinks.console import ConsoleSink
from levelog.adapters.sinks.file import FileSink
from levelog.adapters.sinks.in_memory import InMemorySink

__all__ = [
    "ConsoleSink",
    "FileSink",
    "InMemorySink",
]
