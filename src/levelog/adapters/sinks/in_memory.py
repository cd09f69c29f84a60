"""In-memory sink."""

from collections import deque


class InMemorySink:
    """SinkPort implementation that keeps written lines in memory.

    Suitable for testing and for embedding the logger where lines are
    consumed programmatically.

    Args:
        max_size: Keep only the newest max_size lines (unbounded if None).
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._entries: deque[tuple[str, str]] = deque(maxlen=max_size)

    def write(self, line: str, severity: str) -> None:
        """Store a line with its severity."""
        self._entries.append((line, severity))

    @property
    def entries(self) -> list[tuple[str, str]]:
        """Written (line, severity) pairs, oldest first."""
        return list(self._entries)

    @property
    def lines(self) -> list[str]:
        """Written lines, oldest first."""
        return [line for line, _ in self._entries]

    def clear(self) -> None:
        self._entries.clear()
