"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from levelog import factories
from levelog.adapters.sinks.in_memory import InMemorySink
from levelog.core.dispatch import LogDispatcher
from levelog.core.logger import Logger
from levelog.registry import reset_shared

FIXED_TIMESTAMP = 1702300000.0


@pytest.fixture(autouse=True)
def isolate_shared_state() -> Generator[None]:
    """Reset the registry, class-level dispatcher logger and factories."""
    yield
    reset_shared()
    LogDispatcher._class_logger = None
    factories.reset_console_logger()
    factories.reset_file_logger()


@pytest.fixture
def sink() -> InMemorySink:
    """Provide an empty in-memory sink."""
    return InMemorySink()


@pytest.fixture
def make_logger(sink: InMemorySink) -> Callable[..., Logger]:
    """Factory fixture for loggers writing to the shared in-memory sink.

    Loggers use a fixed clock so formatted timestamps are stable.

    Usage:
        def test_something(make_logger, sink):
            logger = make_logger(min_severity="warning", deduplication=False)
            logger.error("boom")
            assert len(sink.lines) == 1
    """

    def _make(**kwargs: Any) -> Logger:
        kwargs.setdefault("clock", lambda: FIXED_TIMESTAMP)
        return Logger(sink, **kwargs)

    return _make


@pytest.fixture
def logger(make_logger: Callable[..., Logger]) -> Logger:
    """Logger at DEBUG with deduplication disabled, so every call is written."""
    return make_logger(deduplication=False)
