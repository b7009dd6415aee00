"""
linebasic Program Store

Ordered line table plus the execution cursor. Line numbers are unique and
the table is kept sorted on every insert, so a run can start at any time.

Key classes:
- Line: Stored, tokenized statement line
- ProgramStore: Sorted line table with cursor and capacity bound
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from linebasic.errors import BasicNameError, CapacityError
from linebasic.lexer.tokens import Token


@dataclass(frozen=True)
class Line:
    """A stored statement line. Replaced wholesale, never edited."""
    number: int
    text: str
    tokens: Tuple[Token, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "text": self.text,
            "tokens": [t.to_dict() for t in self.tokens],
        }


class ProgramStore:
    """Sorted sequence of Lines and the index of the line being executed."""

    def __init__(self, max_lines: int = 10000):
        self.max_lines = max_lines
        self.lines: List[Line] = []
        self._numbers: List[int] = []
        self.cursor = 0

    def store(self, line: Line) -> None:
        """Insert a line, replacing any line with the same number."""
        pos = bisect.bisect_left(self._numbers, line.number)
        if pos < len(self._numbers) and self._numbers[pos] == line.number:
            self.lines[pos] = line
            return

        if len(self.lines) >= self.max_lines:
            raise CapacityError("Too many lines")

        self._numbers.insert(pos, line.number)
        self.lines.insert(pos, line)

    def delete(self, number: int) -> bool:
        """Remove a line by number. Returns False when absent."""
        pos = self.index_of(number)
        if pos is None:
            return False
        del self._numbers[pos]
        del self.lines[pos]
        return True

    def index_of(self, number: int) -> Optional[int]:
        pos = bisect.bisect_left(self._numbers, number)
        if pos < len(self._numbers) and self._numbers[pos] == number:
            return pos
        return None

    def resolve(self, number: int) -> int:
        """Jump target lookup: line number -> index, error if absent."""
        pos = self.index_of(number)
        if pos is None:
            raise BasicNameError(f"Line number not found: {number}")
        return pos

    def next_number(self, increment: int = 10) -> int:
        """Number for an unnumbered line appended to the program."""
        return self._numbers[-1] + increment if self._numbers else increment

    def current_line(self) -> Optional[Line]:
        if 0 <= self.cursor < len(self.lines):
            return self.lines[self.cursor]
        return None

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def clear(self) -> None:
        self.lines.clear()
        self._numbers.clear()
        self.cursor = 0
