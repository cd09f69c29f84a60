"""Console sink writing colored lines to a text stream."""

import sys
from typing import IO, Any

from levelog.adapters.terminal import supports_color
from levelog.core.exceptions import SinkWriteError

RESET = "\033[0m"

LEVEL_COLORS: dict[str, str] = {
    "emergency": "\033[1;31m",  # bold red
    "alert": "\033[1;31m",  # bold red
    "critical": "\033[1;35m",  # bold magenta
    "error": "\033[1;31m",  # bold red
    "warning": "\033[1;33m",  # bold yellow
    "notice": "\033[1;34m",  # bold blue
    "info": "\033[0;32m",  # green
    "debug": "\033[0;36m",  # cyan
}


class ConsoleSink:
    """SinkPort implementation writing one line per record to a stream.

    Args:
        stream: Target stream. Defaults to ``sys.stdout`` looked up at write
            time, so redirections made after construction are honoured.
        colors: Force colors on or off; None probes the stream.
    """

    def __init__(self, stream: IO[str] | None = None, colors: bool | None = None) -> None:
        self._stream = stream
        self._colors = colors

    @property
    def stream(self) -> IO[Any]:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, line: str, severity: str) -> None:
        """Write a line, colored by severity when the stream supports it.

        Raises:
            SinkWriteError: If the stream rejects the write.
        """
        stream = self.stream
        colors = supports_color(stream) if self._colors is None else self._colors
        if colors:
            line = f"{LEVEL_COLORS.get(severity.lower(), RESET)}{line}{RESET}"
        try:
            stream.write(line + "\n")
            stream.flush()
        except (OSError, ValueError) as exc:
            raise SinkWriteError(f"Console write failed: {exc}") from exc
