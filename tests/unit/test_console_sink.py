"""Tests for the console sink and terminal probes."""

import io
import sys

import pytest

from levelog.adapters.sinks.console import LEVEL_COLORS, RESET, ConsoleSink
from levelog.adapters.terminal import is_terminal, supports_color
from levelog.core.exceptions import SinkWriteError


class FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def clean_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NO_COLOR", "FORCE_COLOR", "TERM"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.sinks
class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_writes_line_with_newline(self) -> None:
        stream = io.StringIO()

        ConsoleSink(stream, colors=False).write("hello", "info")

        assert stream.getvalue() == "hello\n"

    def test_colors_wrap_line(self) -> None:
        stream = io.StringIO()

        ConsoleSink(stream, colors=True).write("boom", "error")

        assert stream.getvalue() == f"{LEVEL_COLORS['error']}boom{RESET}\n"

    @pytest.mark.parametrize("severity", list(LEVEL_COLORS))
    def test_every_severity_has_a_color(self, severity: str) -> None:
        stream = io.StringIO()

        ConsoleSink(stream, colors=True).write("x", severity)

        assert stream.getvalue().startswith(LEVEL_COLORS[severity])

    @pytest.mark.usefixtures("clean_color_env")
    def test_probes_stream_when_colors_unset(self) -> None:
        plain, tty = io.StringIO(), FakeTTY()

        ConsoleSink(plain).write("a", "info")
        ConsoleSink(tty).write("a", "info")

        assert plain.getvalue() == "a\n"
        assert tty.getvalue() == f"{LEVEL_COLORS['info']}a{RESET}\n"

    def test_defaults_to_current_stdout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        stream = io.StringIO()
        sink = ConsoleSink(colors=False)
        monkeypatch.setattr(sys, "stdout", stream)

        sink.write("late redirect", "notice")

        assert stream.getvalue() == "late redirect\n"

    def test_closed_stream_raises_sink_write_error(self) -> None:
        stream = io.StringIO()
        stream.close()

        with pytest.raises(SinkWriteError, match="Console write failed"):
            ConsoleSink(stream, colors=False).write("x", "info")


@pytest.mark.sinks
class TestTerminalProbes:
    """Tests for is_terminal() and supports_color()."""

    def test_string_io_is_not_a_terminal(self) -> None:
        assert is_terminal(io.StringIO()) is False

    def test_tty_is_a_terminal(self) -> None:
        assert is_terminal(FakeTTY()) is True

    def test_closed_stream_is_not_a_terminal(self) -> None:
        stream = io.StringIO()
        stream.close()

        assert is_terminal(stream) is False

    def test_object_without_isatty(self) -> None:
        assert is_terminal(object()) is False  # type: ignore[arg-type]

    def test_no_color_wins(self) -> None:
        assert supports_color(FakeTTY(), {"NO_COLOR": "1", "FORCE_COLOR": "1"}) is False

    def test_force_color_on_plain_stream(self) -> None:
        assert supports_color(io.StringIO(), {"FORCE_COLOR": "1"}) is True

    def test_dumb_terminal(self) -> None:
        assert supports_color(FakeTTY(), {"TERM": "dumb"}) is False

    def test_tty_without_overrides(self) -> None:
        assert supports_color(FakeTTY(), {}) is True
        assert supports_color(io.StringIO(), {}) is False
