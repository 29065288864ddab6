"""
Console sink: where formatted log lines end up on screen.

The logger only needs two operations, so any object with write_line()
and write_error_line() can stand in for the console (a GUI panel, a
test double, a network forwarder).
"""

import sys
from typing import Any, Optional, Protocol, TextIO


class ConsoleSink(Protocol):
    """Destination for formatted log lines.

    `context` is an opaque reference some consoles use to link a line
    back to the object that produced it; others ignore it.
    """

    def write_line(self, text: str, context: Any = None) -> None:
        ...

    def write_error_line(self, text: str, context: Any = None) -> None:
        ...


class StreamConsole:
    """Console sink writing normal lines to stdout and errors to stderr.

    Streams default to the current sys.stdout/sys.stderr at write time,
    so output redirection installed after construction is honoured.
    """

    def __init__(self, out: Optional[TextIO] = None,
                 err: Optional[TextIO] = None):
        self.out = out
        self.err = err

    def write_line(self, text: str, context: Any = None) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def write_error_line(self, text: str, context: Any = None) -> None:
        print(text, file=self.err if self.err is not None else sys.stderr)
