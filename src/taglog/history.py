"""
In-memory transcript of everything the logger emitted.

The buffer is append-only apart from clear(). It never trims itself;
long-running processes that care about memory should clear() it
periodically.
"""

from typing import List


class HistoryBuffer:
    """Growable text buffer recording emitted lines in order."""

    LINE_END = "\n"

    def __init__(self):
        self._chunks: List[str] = []
        self._size = 0

    def append(self, line: str) -> None:
        """Append a line followed by a line terminator."""
        self.append_raw(line + self.LINE_END)

    def append_raw(self, text: str) -> None:
        """Append text as-is, without a terminator."""
        if not text:
            return
        self._chunks.append(text)
        self._size += len(text)

    def clear(self) -> None:
        self._chunks = []
        self._size = 0

    def contents(self) -> str:
        """Return the full accumulated text."""
        if len(self._chunks) > 1:
            # Collapse so repeated reads stay cheap
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def __str__(self) -> str:
        return self.contents()

    def __len__(self) -> int:
        return self._size
