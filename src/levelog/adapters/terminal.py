"""Terminal capability probes used by the console sink."""

import os
from typing import IO, Any


def is_terminal(stream: IO[Any]) -> bool:
    """Return True if stream is attached to an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed streams raise ValueError from isatty().
        return False


def supports_color(stream: IO[Any], environ: dict[str, str] | None = None) -> bool:
    """Return True if ANSI colors should be written to stream.

    ``NO_COLOR`` disables colors, ``FORCE_COLOR`` enables them regardless of
    the stream, and ``TERM=dumb`` disables them on a terminal.
    """
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    if env.get("FORCE_COLOR"):
        return True
    if env.get("TERM") == "dumb":
        return False
    return is_terminal(stream)
