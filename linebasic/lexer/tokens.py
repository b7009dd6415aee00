"""
linebasic Token Model

Tokens are classified once at lexing time. Identifiers are resolved through
static, case-insensitive lookup tables in this order: keywords, word
operators (MOD, AND, OR, NOT), builtin functions. Anything else is a
variable.

Key classes:
- TokenKind: Token classification
- Keyword, Operator, Function: Subkind enums
- Token: One classified lexeme with its literal value
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from linebasic.values import Value


class TokenKind(Enum):
    NUMBER = "NUMBER"
    STRING = "STRING"
    KEYWORD = "KEYWORD"
    OPERATOR = "OPERATOR"
    FUNCTION = "FUNCTION"
    VARIABLE = "VARIABLE"
    DELIMITER = "DELIMITER"
    ERROR = "ERROR"


class Keyword(Enum):
    PRINT = "PRINT"
    LET = "LET"
    INPUT = "INPUT"
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    GOTO = "GOTO"
    GOSUB = "GOSUB"
    RETURN = "RETURN"
    FOR = "FOR"
    TO = "TO"
    STEP = "STEP"
    NEXT = "NEXT"
    END = "END"
    REM = "REM"
    DATA = "DATA"
    READ = "READ"
    RESTORE = "RESTORE"
    DIM = "DIM"
    DEF = "DEF"
    ON = "ON"
    STOP = "STOP"
    RUN = "RUN"
    LIST = "LIST"
    NEW = "NEW"
    CLEAR = "CLEAR"


class Operator(Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    MOD = "MOD"
    EQUAL = "="
    NOT_EQUAL = "<>"
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class Function(Enum):
    ABS = "ABS"
    SIN = "SIN"
    COS = "COS"
    TAN = "TAN"
    SQR = "SQR"
    INT = "INT"
    RND = "RND"
    LEN = "LEN"
    LEFT = "LEFT$"
    RIGHT = "RIGHT$"
    MID = "MID$"
    VAL = "VAL"
    STR = "STR$"
    CHR = "CHR$"
    ASC = "ASC"


KEYWORDS: Dict[str, Keyword] = {kw.value: kw for kw in Keyword}
OPERATORS: Dict[str, Operator] = {op.value: op for op in Operator}
WORD_OPERATORS: Dict[str, Operator] = {
    name: op for name, op in OPERATORS.items() if name.isalpha()
}
FUNCTIONS: Dict[str, Function] = {fn.value: fn for fn in Function}

# Binary precedence, low to high. NOT is unary only.
PRECEDENCE: Dict[Operator, int] = {
    Operator.OR: 1,
    Operator.AND: 2,
    Operator.NOT: 3,
    Operator.EQUAL: 4,
    Operator.NOT_EQUAL: 4,
    Operator.LESS: 4,
    Operator.LESS_EQUAL: 4,
    Operator.GREATER: 4,
    Operator.GREATER_EQUAL: 4,
    Operator.PLUS: 5,
    Operator.MINUS: 5,
    Operator.MULTIPLY: 6,
    Operator.DIVIDE: 6,
    Operator.MOD: 6,
    Operator.POWER: 7,
}

OPERATOR_CHARS = "+-*/^=<>"
DELIMITER_CHARS = "(),:;"
TWO_CHAR_OPERATORS = ("<=", ">=", "<>")
MAX_IDENTIFIER_LENGTH = 31

Subkind = Union[Keyword, Operator, Function, None]


def lookup_keyword(name: str) -> Optional[Keyword]:
    return KEYWORDS.get(name.upper())


def lookup_operator(name: str) -> Optional[Operator]:
    return OPERATORS.get(name.upper())


def lookup_function(name: str) -> Optional[Function]:
    return FUNCTIONS.get(name.upper())


@dataclass(frozen=True)
class Token:
    """One classified lexeme."""
    kind: TokenKind
    lexeme: str
    literal: Value = field(default_factory=lambda: Value.of_number(0.0))
    subkind: Subkind = None

    def is_keyword(self, keyword: Keyword) -> bool:
        return self.kind == TokenKind.KEYWORD and self.subkind == keyword

    def is_operator(self, operator: Operator) -> bool:
        return self.kind == TokenKind.OPERATOR and self.subkind == operator

    def is_delimiter(self, char: str) -> bool:
        return self.kind == TokenKind.DELIMITER and self.lexeme == char

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "lexeme": self.lexeme,
            "literal": self.literal.to_dict(),
            "subkind": self.subkind.name if self.subkind is not None else None,
        }

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.lexeme!r})"
