"""
linebasic Runtime I/O

PRINT writes to, and INPUT reads from, an I/O handler. Any object with
write(text) and read_line() works.

Key classes:
- ConsoleIO: stdin/stdout handler
- BufferedIO: In-memory handler with captured output and queued input
"""

from __future__ import annotations

import sys
from collections import deque
from typing import Iterable, List, Optional, TextIO


class ConsoleIO:
    """Terminal handler."""

    def __init__(self, stdout: TextIO = None, stdin: TextIO = None):
        self.stdout = stdout or sys.stdout
        self.stdin = stdin or sys.stdin

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_line(self) -> Optional[str]:
        """Read one line without its newline; None at end of input."""
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")


class BufferedIO:
    """Captures output and serves queued input lines."""

    def __init__(self, input_lines: Iterable[str] = ()):
        self.pending = deque(input_lines)
        self.chunks: List[str] = []

    def write(self, text: str) -> None:
        self.chunks.append(text)

    def read_line(self) -> Optional[str]:
        if not self.pending:
            return None
        return self.pending.popleft()

    def feed(self, *lines: str) -> None:
        self.pending.extend(lines)

    @property
    def output(self) -> str:
        return "".join(self.chunks)

    def clear(self) -> None:
        self.chunks.clear()
