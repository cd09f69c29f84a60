"""Tests for the shared logger registry."""

import threading

import pytest

from levelog.adapters.sinks.in_memory import InMemorySink
from levelog.core.logger import Logger
from levelog.registry import (
    LoggerRegistry,
    default_registry,
    get_shared,
    has_shared,
    reset_shared,
    set_shared,
)


class TestLoggerRegistry:
    """Tests for LoggerRegistry."""

    @pytest.mark.core
    def test_starts_empty(self) -> None:
        registry = LoggerRegistry()

        assert registry.get_shared() is None
        assert registry.has_shared() is False

    @pytest.mark.core
    def test_set_and_get(self, logger: Logger) -> None:
        registry = LoggerRegistry()

        registry.set_shared(logger)

        assert registry.get_shared() is logger
        assert registry.has_shared() is True

    @pytest.mark.core
    def test_set_replaces_previous(self, sink: InMemorySink) -> None:
        registry = LoggerRegistry()
        first, second = Logger(sink), Logger(sink)

        registry.set_shared(first)
        registry.set_shared(second)

        assert registry.get_shared() is second

    @pytest.mark.core
    @pytest.mark.tra("Registry.Reset")
    def test_reset_flushes_pending_duplicates(self, sink: InMemorySink) -> None:
        registry = LoggerRegistry()
        logger = Logger(sink)
        registry.set_shared(logger)
        logger.info("A")
        logger.info("A")

        registry.reset_shared()

        assert registry.has_shared() is False
        assert len(sink.lines) == 1
        assert sink.lines[0].endswith("A (x2)")

    @pytest.mark.core
    def test_reset_accepts_loggers_without_flush(self) -> None:
        class MinimalLogger:
            def log(self, severity, message, context=None) -> None:
                pass

        registry = LoggerRegistry()
        registry.set_shared(MinimalLogger())

        registry.reset_shared()

        assert registry.get_shared() is None

    @pytest.mark.core
    def test_reset_when_empty_is_noop(self) -> None:
        registry = LoggerRegistry()
        registry.reset_shared()
        assert registry.has_shared() is False

    @pytest.mark.core
    def test_concurrent_set_leaves_one_of_the_loggers(self, sink: InMemorySink) -> None:
        registry = LoggerRegistry()
        loggers = [Logger(sink) for _ in range(8)]
        threads = [
            threading.Thread(target=registry.set_shared, args=(lg,)) for lg in loggers
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert registry.get_shared() in loggers


class TestDefaultRegistry:
    """Tests for the module-level functions."""

    @pytest.mark.core
    def test_module_functions_use_default_registry(self, logger: Logger) -> None:
        set_shared(logger)

        assert get_shared() is logger
        assert has_shared() is True
        assert default_registry.get_shared() is logger

        reset_shared()

        assert has_shared() is False
