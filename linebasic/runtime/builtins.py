"""
linebasic Builtin Functions

Each builtin checks its own argument count and kinds, then computes its
result. Contract violations raise BasicTypeError; domain violations raise
BasicRangeError.
"""

from __future__ import annotations

import math
import random
import re
from typing import Callable, Dict, List, Optional

from linebasic.errors import BasicRangeError, BasicTypeError
from linebasic.lexer.tokens import Function
from linebasic.values import Value, format_number

BuiltinImpl = Callable[[List[Value], random.Random], Value]

_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_leading_number(text: str) -> float:
    """Leading numeric value of text, 0 when there is none."""
    match = _NUMBER.match(text)
    if not match:
        return 0.0
    return float(match.group())


def parse_full_number(text: str) -> Optional[float]:
    """Float value when the whole text is a number, else None."""
    if _NUMBER.fullmatch(text):
        return float(text)
    return None


def _expect(name: str, args: List[Value], *kinds: str) -> None:
    if len(args) != len(kinds) or any(
        (k == "number" and not a.is_number) or (k == "text" and not a.is_text)
        for a, k in zip(args, kinds)
    ):
        described = ", ".join(kinds)
        raise BasicTypeError(f"{name} requires ({described}) arguments")


def _math(name: str, fn: Callable[[float], float]) -> BuiltinImpl:
    def impl(args: List[Value], rng: random.Random) -> Value:
        _expect(name, args, "number")
        try:
            return Value.of_number(fn(args[0].number))
        except (ValueError, OverflowError) as e:
            raise BasicRangeError(f"{name} argument out of range") from e
    return impl


def _sqr(args: List[Value], rng: random.Random) -> Value:
    _expect("SQR", args, "number")
    if args[0].number < 0:
        raise BasicRangeError("SQR of negative number")
    return Value.of_number(math.sqrt(args[0].number))


def _int(args: List[Value], rng: random.Random) -> Value:
    _expect("INT", args, "number")
    try:
        return Value.of_number(math.floor(args[0].number))
    except (ValueError, OverflowError) as e:
        raise BasicRangeError("INT argument out of range") from e


def _rnd(args: List[Value], rng: random.Random) -> Value:
    if len(args) > 1:
        raise BasicTypeError("RND takes at most one argument")
    if args and not args[0].is_number:
        raise BasicTypeError("RND requires a numeric argument")
    if args and args[0].number > 0:
        return Value.of_number(rng.random() * args[0].number)
    return Value.of_number(rng.random())


def _len(args: List[Value], rng: random.Random) -> Value:
    """Length in characters (code points), not encoded bytes."""
    _expect("LEN", args, "text")
    return Value.of_number(len(args[0].text))


def _val(args: List[Value], rng: random.Random) -> Value:
    _expect("VAL", args, "text")
    return Value.of_number(parse_leading_number(args[0].text))


def _str(args: List[Value], rng: random.Random) -> Value:
    _expect("STR$", args, "number")
    return Value.of_text(format_number(args[0].number))


def _chr(args: List[Value], rng: random.Random) -> Value:
    _expect("CHR$", args, "number")
    code = args[0].number
    if not 0 <= code <= 255:
        raise BasicRangeError("CHR$ argument out of range")
    return Value.of_text(chr(int(code)))


def _asc(args: List[Value], rng: random.Random) -> Value:
    """
    Unicode code point of the first character.

    Codes above 255 are returned as is, so CHR$(ASC(x)) only round-trips
    Latin-1 text.
    """
    _expect("ASC", args, "text")
    if not args[0].text:
        raise BasicRangeError("ASC of empty string")
    return Value.of_number(ord(args[0].text[0]))


def _count(name: str, value: Value) -> int:
    if math.isnan(value.number) or value.number < 0:
        raise BasicRangeError(f"{name} count must not be negative")
    return int(min(value.number, 2 ** 31))


def _left(args: List[Value], rng: random.Random) -> Value:
    _expect("LEFT$", args, "text", "number")
    return Value.of_text(args[0].text[:_count("LEFT$", args[1])])


def _right(args: List[Value], rng: random.Random) -> Value:
    _expect("RIGHT$", args, "text", "number")
    n = _count("RIGHT$", args[1])
    text = args[0].text
    return Value.of_text(text[len(text) - n:] if n < len(text) else text)


def _mid(args: List[Value], rng: random.Random) -> Value:
    if len(args) == 2:
        _expect("MID$", args, "text", "number")
    else:
        _expect("MID$", args, "text", "number", "number")
    start = args[1].number
    if math.isnan(start) or start < 1:
        raise BasicRangeError("MID$ start must be at least 1")
    text = args[0].text
    begin = int(min(start, len(text) + 1)) - 1
    if len(args) == 2:
        return Value.of_text(text[begin:])
    return Value.of_text(text[begin:begin + _count("MID$", args[2])])


BUILTINS: Dict[Function, BuiltinImpl] = {
    Function.ABS: _math("ABS", abs),
    Function.SIN: _math("SIN", math.sin),
    Function.COS: _math("COS", math.cos),
    Function.TAN: _math("TAN", math.tan),
    Function.SQR: _sqr,
    Function.INT: _int,
    Function.RND: _rnd,
    Function.LEN: _len,
    Function.VAL: _val,
    Function.STR: _str,
    Function.CHR: _chr,
    Function.ASC: _asc,
    Function.LEFT: _left,
    Function.RIGHT: _right,
    Function.MID: _mid,
}


def call_builtin(function: Function, args: List[Value], rng: random.Random) -> Value:
    """Apply a builtin to already-evaluated arguments."""
    impl = BUILTINS.get(function)
    if impl is None:
        raise BasicTypeError(f"Unknown function: {function.value}")
    return impl(args, rng)
