"""File sink with size-based rotation.

Lines are appended as UTF-8; new files start with a byte order mark. When
the file reaches ``max_file_size`` it is either archived under a timestamped
name or truncated, depending on ``rotate``.
"""

import os
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import NoReturn

from levelog.core.exceptions import FileNotWrittenError

UTF8_BOM = b"\xef\xbb\xbf"
DEFAULT_MAX_FILE_SIZE = 5_000_000
DEFAULT_FILE_NAME = "default.log"


def default_log_path() -> Path:
    """Location used when no usable log file is configured."""
    return Path(tempfile.gettempdir()) / DEFAULT_FILE_NAME


def _report_to_console(message: str) -> None:
    from levelog.factories import get_console_logger

    console = get_console_logger()
    console.error(message)
    console.flush_duplicates()


def _directory_writable(directory: Path) -> bool:
    return directory.is_dir() and os.access(directory, os.W_OK)


class FileSink:
    """SinkPort implementation appending lines to a log file.

    Args:
        path: Log file path. None selects ``<tempdir>/default.log``.
        fail_safe: Fall back to the default path when the directory of
            ``path`` does not exist or is not writable.
        max_file_size: Size in bytes at which the file is rotated.
        rotate: Archive full files as ``<path>.<YYYYmmdd_HHMMSS>``; when
            False the file is truncated instead.
        on_error: Called with a description before a write error is
            raised. Defaults to reporting on the shared console logger.

    Raises:
        FileNotWrittenError: If the directory or file cannot be created.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        fail_safe: bool = True,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        rotate: bool = True,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        if path is None or (fail_safe and not _directory_writable(Path(path).parent)):
            # @tra: Adapter.FileSink.DefaultPath
            path = default_log_path()
        self._path = Path(path)
        self._max_file_size = max_file_size
        self._rotate = rotate
        self._on_error = on_error or _report_to_console
        self._reporting_error = False

        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._fail(f"Could not create log directory {directory}", exc)
        self._ensure_file("Failed to create log file")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    def set_max_file_size(self, size: int) -> None:
        self._max_file_size = size

    def write(self, line: str, severity: str) -> None:
        """Append a line to the log file, rotating first if it is full.

        Raises:
            FileNotWrittenError: If the file cannot be rotated or written.
        """
        # @tra: Adapter.FileSink.Write
        if self._path.exists() and self._path.stat().st_size >= self._max_file_size:
            self._rotate_file()
        self._ensure_file("Failed to create log file")
        if not os.access(self._path, os.W_OK):
            self._fail(f"Log file is not writable: {self._path}")
        try:
            with self._path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            self._fail("Failed to write to log file", exc)

    def _ensure_file(self, error_message: str) -> None:
        if self._path.exists():
            return
        try:
            self._path.write_bytes(UTF8_BOM)
        except OSError as exc:
            self._fail(error_message, exc)

    def _rotate_file(self) -> None:
        # @tra: Adapter.FileSink.Rotate
        if self._rotate:
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            archive = self._path.with_name(f"{self._path.name}.{stamp}")
            try:
                self._path.rename(archive)
            except OSError as exc:
                self._fail("Failed to rotate log file", exc)
        else:
            try:
                self._path.write_bytes(UTF8_BOM)
            except OSError as exc:
                self._fail("Failed to truncate log file", exc)

    def _fail(self, message: str, cause: OSError | None = None) -> NoReturn:
        detail = f"{message}: {cause}" if cause is not None else message
        # Reporting goes through another logger; never recurse into it.
        if not self._reporting_error:
            self._reporting_error = True
            try:
                self._on_error(detail)
            finally:
                self._reporting_error = False
        raise FileNotWrittenError(detail) from cause
