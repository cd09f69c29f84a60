"""Integration tests for the shared console and file logger factories."""

from pathlib import Path

import pytest

from levelog.adapters.sinks.console import ConsoleSink
from levelog.adapters.sinks.file import FileSink
from levelog.core.severity import Severity
from levelog.factories import (
    get_console_logger,
    get_file_logger,
    reset_console_logger,
    reset_file_logger,
)

pytestmark = [pytest.mark.integration, pytest.mark.tier(1)]


@pytest.fixture(autouse=True)
def no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")


class TestConsoleFactory:
    """Tests for get_console_logger()."""

    def test_returns_same_instance(self) -> None:
        first = get_console_logger()

        assert get_console_logger() is first
        assert isinstance(first.sink, ConsoleSink)

    def test_arguments_apply_on_creation_only(self) -> None:
        logger = get_console_logger(level="error", deduplication=False)

        again = get_console_logger(level="debug", deduplication=True)

        assert again is logger
        assert logger.min_severity is Severity.ERROR
        assert logger.is_deduplication_enabled() is False

    def test_writes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_console_logger(level="info", deduplication=False)

        logger.warning("low disk")

        out = capsys.readouterr().out
        assert "warning [" in out
        assert out.endswith(": low disk\n")

    def test_reset_flushes_and_recreates(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_console_logger(level="info")
        logger.info("A")
        logger.info("A")
        assert capsys.readouterr().out == ""

        reset_console_logger()

        assert capsys.readouterr().out.endswith(": A (x2)\n")
        assert get_console_logger() is not logger


class TestFileFactory:
    """Tests for get_file_logger()."""

    def test_returns_same_instance(self, tmp_path: Path) -> None:
        first = get_file_logger(tmp_path / "app.log")

        assert get_file_logger(tmp_path / "other.log") is first
        assert isinstance(first.sink, FileSink)
        assert first.sink.path == tmp_path / "app.log"

    def test_reset_flushes_to_file(self, tmp_path: Path) -> None:
        path = tmp_path / "app.log"
        logger = get_file_logger(path, level=Severity.NOTICE)
        logger.notice("rotated keys")
        logger.notice("rotated keys")
        logger.info("filtered")

        reset_file_logger()

        content = path.read_text(encoding="utf-8-sig")
        assert content.endswith(": rotated keys (x2)\n")
        assert "filtered" not in content
        assert get_file_logger(tmp_path / "next.log") is not logger
