"""
linebasic Error Model

Every failure the engine can report is a BasicError. Errors are fail-fast:
the statement that raises aborts, effects already applied stand, and the
run halts with the error attached to the active line number.

Key classes:
- ErrorKind: Reported error category
- BasicError: Base exception carrying kind, message and line number
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    LEX = "LexError"
    SYNTAX = "SyntaxError"
    TYPE = "TypeError"
    RANGE = "RangeError"
    NAME = "NameError"
    STACK = "StackError"
    CAPACITY = "CapacityError"


class BasicError(Exception):
    """Base class for all engine errors."""

    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def at_line(self, line_number: Optional[int]) -> "BasicError":
        """Attach the active line number unless one is already set."""
        if self.line_number is None:
            self.line_number = line_number
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "line_number": self.line_number,
        }

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"Error at line {self.line_number}: {self.message}"


class LexError(BasicError):
    """Unterminated string or over-long line."""
    kind = ErrorKind.LEX


class BasicSyntaxError(BasicError):
    """Malformed statement shape or missing keyword."""
    kind = ErrorKind.SYNTAX


class UnsupportedStatementError(BasicSyntaxError):
    """Statement keyword is recognized but not executed (DIM, DATA, ...)."""

    def __init__(self, keyword: str, line_number: Optional[int] = None):
        super().__init__(f"Unsupported statement: {keyword}", line_number)
        self.keyword = keyword


class BasicTypeError(BasicError):
    """Wrong value kind for an operator, function or statement."""
    kind = ErrorKind.TYPE


class BasicRangeError(BasicError):
    """Numeric domain violation (division by zero, CHR$ out of range, ...)."""
    kind = ErrorKind.RANGE


class BasicNameError(BasicError):
    """Undefined variable or unknown jump target."""
    kind = ErrorKind.NAME


class StackError(BasicError):
    """FOR/GOSUB stack overflow, or NEXT/RETURN on an empty stack."""
    kind = ErrorKind.STACK


class CapacityError(BasicError):
    """Too many program lines or variables."""
    kind = ErrorKind.CAPACITY
