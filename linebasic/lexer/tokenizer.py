"""
linebasic Tokenizer

Converts one line of source text into classified tokens. Scanning is total:
unknown characters are skipped and the scan always terminates. Rules are
tried in priority order at each position after whitespace:

1. numbers, 2. string literals, 3. two-character operators,
4. single-character operators and delimiters, 5. identifiers,
6. anything else is skipped.
"""

from __future__ import annotations

import re
from typing import Iterator, List

from linebasic.values import Value
from linebasic.lexer.tokens import (
    DELIMITER_CHARS,
    FUNCTIONS,
    KEYWORDS,
    MAX_IDENTIFIER_LENGTH,
    OPERATOR_CHARS,
    OPERATORS,
    TWO_CHAR_OPERATORS,
    WORD_OPERATORS,
    Token,
    TokenKind,
)

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_NUMBER_PREFIX = re.compile(r"\d*\.?\d*")


def _is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "$_")


def _number_literal(run: str) -> float:
    """Longest numeric prefix of a digit/dot run ("1.2.3" -> 1.2)."""
    prefix = _NUMBER_PREFIX.match(run).group()
    if prefix in ("", "."):
        return 0.0
    return float(prefix)


def _classify_identifier(name: str) -> Token:
    upper = name.upper()
    if upper in KEYWORDS:
        return Token(TokenKind.KEYWORD, name, subkind=KEYWORDS[upper])
    if upper in WORD_OPERATORS:
        return Token(TokenKind.OPERATOR, name, subkind=WORD_OPERATORS[upper])
    if upper in FUNCTIONS:
        return Token(TokenKind.FUNCTION, name, subkind=FUNCTIONS[upper])
    return Token(TokenKind.VARIABLE, name)


def iter_tokens(text: str) -> Iterator[Token]:
    """
    Yield the tokens of one line.

    An unterminated string literal yields a single ERROR token holding the
    rest of the line and ends the scan.
    """
    pos = 0
    length = len(text)

    while pos < length:
        ch = text[pos]

        if ch.isspace():
            pos += 1
            continue

        # Numbers
        if ch.isdigit() or (ch == "." and pos + 1 < length and text[pos + 1].isdigit()):
            start = pos
            while pos < length and (text[pos].isdigit() or text[pos] == "."):
                pos += 1
            run = text[start:pos]
            yield Token(TokenKind.NUMBER, run, Value.of_number(_number_literal(run)))
            continue

        # String literals
        if ch == '"':
            start = pos
            pos += 1
            chars: List[str] = []
            terminated = False
            while pos < length:
                c = text[pos]
                if c == "\\" and pos + 1 < length:
                    nxt = text[pos + 1]
                    chars.append(ESCAPES.get(nxt, c + nxt))
                    pos += 2
                    continue
                if c == '"':
                    terminated = True
                    pos += 1
                    break
                chars.append(c)
                pos += 1

            if not terminated:
                yield Token(TokenKind.ERROR, text[start:], Value.of_text("Unterminated string"))
                return

            yield Token(TokenKind.STRING, text[start:pos], Value.of_text("".join(chars)))
            continue

        # Two-character operators before single characters
        pair = text[pos:pos + 2]
        if pair in TWO_CHAR_OPERATORS:
            yield Token(TokenKind.OPERATOR, pair, subkind=OPERATORS[pair])
            pos += 2
            continue

        if ch in OPERATOR_CHARS:
            yield Token(TokenKind.OPERATOR, ch, subkind=OPERATORS[ch])
            pos += 1
            continue

        if ch in DELIMITER_CHARS:
            yield Token(TokenKind.DELIMITER, ch)
            pos += 1
            continue

        # Identifiers: keywords, word operators, functions, variables
        if ch.isascii() and ch.isalpha():
            start = pos
            while pos < length and _is_identifier_char(text[pos]):
                pos += 1
            name = text[start:pos]
            if len(name) <= MAX_IDENTIFIER_LENGTH:
                yield _classify_identifier(name)
            continue

        pos += 1


def tokenize(text: str) -> List[Token]:
    """Tokenize a full line at once."""
    return list(iter_tokens(text))
