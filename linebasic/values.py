"""
linebasic Values

The universal runtime datum: a tagged scalar that is either a NUMBER
(IEEE double) or TEXT (a string, never unset).

Key classes:
- ValueKind: NUMBER or TEXT
- Value: Immutable tagged scalar
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ValueKind(Enum):
    NUMBER = "NUMBER"
    TEXT = "TEXT"


def format_number(number: float) -> str:
    """Render a number with 6 significant digits."""
    return "%.6g" % number


@dataclass(frozen=True)
class Value:
    """
    Tagged numeric/text scalar.

    Build values through of_number/of_text; of_text maps None to "" so a
    TEXT value always carries a defined payload.
    """
    kind: ValueKind
    number: float = 0.0
    text: str = ""

    @classmethod
    def of_number(cls, number: float) -> "Value":
        return cls(ValueKind.NUMBER, float(number), "")

    @classmethod
    def of_text(cls, text: Optional[str]) -> "Value":
        return cls(ValueKind.TEXT, 0.0, text if text is not None else "")

    @property
    def is_number(self) -> bool:
        return self.kind == ValueKind.NUMBER

    @property
    def is_text(self) -> bool:
        return self.kind == ValueKind.TEXT

    @property
    def payload(self) -> Any:
        return self.number if self.is_number else self.text

    def is_truthy(self) -> bool:
        """IF semantics: numeric and non-zero."""
        return self.is_number and self.number != 0

    def render(self) -> str:
        if self.is_number:
            return format_number(self.number)
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "value": self.payload}

    def __repr__(self) -> str:
        if self.is_number:
            return f"Number({self.number!r})"
        return f"Text({self.text!r})"


NUMBER_ZERO = Value.of_number(0.0)
NUMBER_ONE = Value.of_number(1.0)


def from_bool(flag: bool) -> Value:
    return NUMBER_ONE if flag else NUMBER_ZERO
