"""Tests for port interfaces."""

from collections.abc import Iterable, Mapping
from typing import Any

import pytest

from levelog.adapters.sinks import ConsoleSink, FileSink, InMemorySink
from levelog.core.caller import StackFrameSource
from levelog.core.logger import Logger
from levelog.core.models import FrameInfo
from levelog.core.ports import FrameSourcePort, LoggerPort, SinkPort


class TestSinkPort:
    """Tests for SinkPort protocol."""

    @pytest.mark.core
    def test_protocol_has_write_method(self) -> None:
        """SinkPort must define write(line: str, severity: str) -> None."""
        assert hasattr(SinkPort, "write")

    @pytest.mark.core
    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with a write method should satisfy SinkPort."""

        class FakeSink:
            def write(self, line: str, severity: str) -> None:
                pass

        sink: SinkPort = FakeSink()
        assert isinstance(sink, SinkPort)

    @pytest.mark.core
    @pytest.mark.parametrize("sink_type", [ConsoleSink, FileSink, InMemorySink])
    def test_bundled_sinks_satisfy_protocol(self, sink_type: type) -> None:
        assert hasattr(sink_type, "write")
        assert issubclass(sink_type, SinkPort)


class TestLoggerPort:
    """Tests for LoggerPort protocol."""

    @pytest.mark.core
    def test_protocol_has_log_method(self) -> None:
        """LoggerPort must define log(severity, message, context) -> None."""
        assert hasattr(LoggerPort, "log")

    @pytest.mark.core
    def test_logger_is_recognized(self) -> None:
        assert isinstance(Logger(InMemorySink()), LoggerPort)

    @pytest.mark.core
    def test_class_implementing_protocol_is_recognized(self) -> None:
        """Any object with a log method can stand in for Logger."""

        class FakeLogger:
            def log(
                self,
                severity: Any,
                message: object,
                context: Mapping[str, Any] | None = None,
            ) -> None:
                pass

        assert isinstance(FakeLogger(), LoggerPort)


class TestFrameSourcePort:
    """Tests for FrameSourcePort protocol."""

    @pytest.mark.core
    def test_protocol_has_frames_method(self) -> None:
        assert hasattr(FrameSourcePort, "frames")

    @pytest.mark.core
    def test_stack_frame_source_is_recognized(self) -> None:
        assert isinstance(StackFrameSource(), FrameSourcePort)

    @pytest.mark.core
    def test_class_implementing_protocol_is_recognized(self) -> None:
        class FakeFrames:
            def frames(self) -> Iterable[FrameInfo]:
                return []

        assert isinstance(FakeFrames(), FrameSourcePort)
