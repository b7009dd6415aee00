"""
linebasic Lexer

Turns a statement line into classified tokens:
- Token model and static lookup tables (keywords, operators, functions)
- Tokenizer (iter_tokens / tokenize)
"""

from linebasic.lexer.tokens import (
    Token,
    TokenKind,
    Keyword,
    Operator,
    Function,
    PRECEDENCE,
    lookup_keyword,
    lookup_operator,
    lookup_function,
)
from linebasic.lexer.tokenizer import iter_tokens, tokenize

__all__ = [
    "Token",
    "TokenKind",
    "Keyword",
    "Operator",
    "Function",
    "PRECEDENCE",
    "lookup_keyword",
    "lookup_operator",
    "lookup_function",
    "iter_tokens",
    "tokenize",
]
