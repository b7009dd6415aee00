"""
linebasic Expression Evaluator

Evaluates a contiguous, inclusive token range [start, end] to a Value by
recursive range splitting. No tree is built: each call inspects its range
and either resolves it directly or recurses on sub-ranges.

Resolution order for a range:
- single token: literal, variable, or bare RND
- function call spanning the whole range: FN(arg, ...)
- range wrapped in one pair of parentheses: recurse on the interior
- lowest-precedence binary operator at depth 0 (rightmost on ties, leftmost
  for ^), unless a leading unary operator binds looser than every depth-0
  binary operator, in which case the unary applies to the remainder
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from linebasic.errors import (
    BasicError,
    BasicRangeError,
    BasicSyntaxError,
    BasicTypeError,
    LexError,
)
from linebasic.lexer.tokens import PRECEDENCE, Function, Operator, Token, TokenKind
from linebasic.runtime.builtins import call_builtin
from linebasic.runtime.environment import VariableStore
from linebasic.values import Value, from_bool

EPSILON = 1e-10

# Unary operators bind looser than any binary operator whose precedence is
# at or above theirs. Unary minus/plus sit between * / MOD and ^.
UNARY_PRECEDENCE: Dict[Operator, float] = {
    Operator.NOT: 3,
    Operator.MINUS: 6.5,
    Operator.PLUS: 6.5,
}


@dataclass
class EvaluatorResult:
    """Result of evaluating a whole token list."""
    success: bool
    value: Optional[Value] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "value": self.value.payload if self.value is not None else None,
            "kind": self.value.kind.value if self.value is not None else None,
            "error": self.error,
            "error_kind": self.error_kind,
        }


def matching_paren(tokens: Sequence[Token], open_pos: int, end: int) -> Optional[int]:
    """Index of the ')' closing the '(' at open_pos, searching up to end."""
    depth = 0
    for i in range(open_pos, end + 1):
        tok = tokens[i]
        if tok.is_delimiter("("):
            depth += 1
        elif tok.is_delimiter(")"):
            depth -= 1
            if depth == 0:
                return i
    return None


def split_top_level(tokens: Sequence[Token], start: int, end: int,
                    separators: str) -> List[int]:
    """Positions of depth-0 delimiters from separators within [start, end]."""
    positions = []
    depth = 0
    for i in range(start, end + 1):
        tok = tokens[i]
        if tok.is_delimiter("("):
            depth += 1
        elif tok.is_delimiter(")"):
            depth -= 1
        elif depth == 0 and tok.kind == TokenKind.DELIMITER and tok.lexeme in separators:
            positions.append(i)
    return positions


def apply_binary(left: Value, op: Operator, right: Value) -> Value:
    """Apply a binary operator to two evaluated operands."""
    if left.is_text or right.is_text:
        if not (left.is_text and right.is_text):
            raise BasicTypeError(f"Type mismatch: text and number with {op.value}")
        if op == Operator.PLUS:
            return Value.of_text(left.text + right.text)
        if op == Operator.EQUAL:
            return from_bool(left.text == right.text)
        if op == Operator.NOT_EQUAL:
            return from_bool(left.text != right.text)
        raise BasicTypeError(f"Invalid string operation: {op.value}")

    l = left.number
    r = right.number

    if op == Operator.PLUS:
        return Value.of_number(l + r)
    if op == Operator.MINUS:
        return Value.of_number(l - r)
    if op == Operator.MULTIPLY:
        return Value.of_number(l * r)
    if op == Operator.DIVIDE:
        if r == 0:
            raise BasicRangeError("Division by zero")
        return Value.of_number(l / r)
    if op == Operator.MOD:
        if r == 0:
            raise BasicRangeError("Division by zero in MOD")
        try:
            return Value.of_number(math.fmod(l, r))
        except ValueError as e:
            raise BasicRangeError("MOD operand out of range") from e
    if op == Operator.POWER:
        if l == 0 and r < 0:
            raise BasicRangeError("Zero to negative power")
        try:
            return Value.of_number(math.pow(l, r))
        except ValueError as e:
            raise BasicRangeError("Power has no real result") from e
        except OverflowError as e:
            raise BasicRangeError("Numeric overflow") from e
    if op == Operator.EQUAL:
        return from_bool(abs(l - r) < EPSILON)
    if op == Operator.NOT_EQUAL:
        return from_bool(not abs(l - r) < EPSILON)
    if op == Operator.LESS:
        return from_bool(l < r)
    if op == Operator.LESS_EQUAL:
        return from_bool(l <= r)
    if op == Operator.GREATER:
        return from_bool(l > r)
    if op == Operator.GREATER_EQUAL:
        return from_bool(l >= r)
    if op == Operator.AND:
        return from_bool(l != 0 and r != 0)
    if op == Operator.OR:
        return from_bool(l != 0 or r != 0)

    raise BasicSyntaxError(f"Unknown operator: {op.value}")


def apply_unary(op: Operator, operand: Value) -> Value:
    if not operand.is_number:
        raise BasicTypeError(f"Unary {op.value} requires numeric operand")
    if op == Operator.NOT:
        return from_bool(operand.number == 0)
    if op == Operator.MINUS:
        return Value.of_number(-operand.number)
    return operand


class ExpressionEvaluator:
    """
    Evaluates token ranges against a variable store.

    The evaluator never writes variables; it only reads them.
    """

    def __init__(self, variables: VariableStore, rng: random.Random = None):
        self.variables = variables
        self.rng = rng or random.Random()

    def evaluate(self, tokens: Sequence[Token], start: int, end: int) -> Value:
        """Evaluate tokens[start..end] inclusive."""
        if start < 0 or start > end or end >= len(tokens):
            raise BasicSyntaxError("Invalid expression range")

        if start == end:
            return self._eval_single(tokens[start])

        first = tokens[start]

        if first.kind == TokenKind.FUNCTION:
            result = self._eval_call(tokens, start, end)
            if result is not None:
                return result

        if first.is_delimiter("(") and matching_paren(tokens, start, end) == end:
            return self.evaluate(tokens, start + 1, end - 1)

        op_pos = self._find_split(tokens, start, end)

        if first.kind == TokenKind.OPERATOR and first.subkind in UNARY_PRECEDENCE:
            unary_prec = UNARY_PRECEDENCE[first.subkind]
            if op_pos is None or PRECEDENCE[tokens[op_pos].subkind] >= unary_prec:
                operand = self.evaluate(tokens, start + 1, end)
                return apply_unary(first.subkind, operand)

        if op_pos is not None:
            left = self.evaluate(tokens, start, op_pos - 1)
            right = self.evaluate(tokens, op_pos + 1, end)
            return apply_binary(left, tokens[op_pos].subkind, right)

        if first.kind == TokenKind.FUNCTION:
            raise BasicSyntaxError(f"{first.lexeme.upper()} call requires parentheses")
        raise BasicSyntaxError("Invalid expression")

    def evaluate_all(self, tokens: Sequence[Token]) -> Value:
        return self.evaluate(tokens, 0, len(tokens) - 1)

    def try_evaluate(self, tokens: Sequence[Token]) -> EvaluatorResult:
        """Evaluate a whole token list, reporting errors as a result."""
        try:
            return EvaluatorResult(success=True, value=self.evaluate_all(tokens))
        except BasicError as e:
            return EvaluatorResult(success=False, error=e.message, error_kind=e.kind.value)

    def _eval_single(self, token: Token) -> Value:
        if token.kind in (TokenKind.NUMBER, TokenKind.STRING):
            return token.literal
        if token.kind == TokenKind.VARIABLE:
            return self.variables.lookup(token.lexeme)
        if token.kind == TokenKind.FUNCTION:
            if token.subkind == Function.RND:
                return Value.of_number(self.rng.random())
            raise BasicSyntaxError(f"{token.lexeme.upper()} requires parentheses")
        if token.kind == TokenKind.ERROR:
            raise LexError(token.literal.text)
        raise BasicSyntaxError(f"Invalid expression token: {token.lexeme}")

    def _eval_call(self, tokens: Sequence[Token], start: int, end: int) -> Optional[Value]:
        """
        Evaluate FN(...) when the call spans the whole range.

        Returns None when the range is not a single call, so the caller can
        treat it as an operator expression.
        """
        if not tokens[start + 1].is_delimiter("("):
            return None

        close = matching_paren(tokens, start + 1, end)
        if close is None:
            raise BasicSyntaxError("Missing closing parenthesis in function call")
        if close != end:
            return None

        args: List[Value] = []
        if close > start + 2:
            arg_start = start + 2
            for comma in split_top_level(tokens, arg_start, close - 1, ","):
                args.append(self.evaluate(tokens, arg_start, comma - 1))
                arg_start = comma + 1
            args.append(self.evaluate(tokens, arg_start, close - 1))

        return call_builtin(tokens[start].subkind, args, self.rng)

    def _find_split(self, tokens: Sequence[Token], start: int, end: int) -> Optional[int]:
        """Position of the binary operator to split on, or None."""
        best: Optional[int] = None
        best_prec = None
        depth = 0

        for i in range(start, end + 1):
            tok = tokens[i]
            if tok.is_delimiter("("):
                depth += 1
                continue
            if tok.is_delimiter(")"):
                depth -= 1
                continue
            if depth != 0 or tok.kind != TokenKind.OPERATOR or tok.subkind == Operator.NOT:
                continue
            if not self._in_binary_position(tokens, start, i):
                continue

            prec = PRECEDENCE[tok.subkind]
            if best is None or prec < best_prec or (prec == best_prec and tok.subkind != Operator.POWER):
                best = i
                best_prec = prec

        return best

    @staticmethod
    def _in_binary_position(tokens: Sequence[Token], start: int, i: int) -> bool:
        if i == start:
            return False
        prev = tokens[i - 1]
        if prev.kind == TokenKind.OPERATOR:
            return False
        return not (prev.is_delimiter("(") or prev.is_delimiter(","))
