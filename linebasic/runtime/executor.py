"""
linebasic Statement Executor

Dispatches a statement on its leading token and runs the fetch/execute loop
over the program's line table.

Key classes:
- ExecutionConfig: Capacity and randomness configuration
- ExecutionResult: Outcome of a run or an immediate statement
- StatementExecutor: Statement dispatch and the run loop
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from linebasic.errors import (
    BasicError,
    BasicRangeError,
    BasicSyntaxError,
    BasicTypeError,
    LexError,
    StackError,
    UnsupportedStatementError,
)
from linebasic.lexer.tokens import Keyword, Operator, Token, TokenKind
from linebasic.runtime.builtins import parse_full_number
from linebasic.runtime.environment import VariableStore
from linebasic.runtime.evaluator import ExpressionEvaluator, split_top_level
from linebasic.runtime.program import ProgramStore
from linebasic.runtime.state import ControlStacks, ForFrame, GosubFrame, RunStatus
from linebasic.values import Value

logger = logging.getLogger(__name__)

UNSUPPORTED = {
    Keyword.DATA,
    Keyword.READ,
    Keyword.RESTORE,
    Keyword.DIM,
    Keyword.DEF,
    Keyword.ON,
    Keyword.ELSE,
}

DIRECT_COMMANDS = {Keyword.RUN, Keyword.LIST, Keyword.NEW, Keyword.CLEAR}


@dataclass
class ExecutionConfig:
    """Configuration for an interpreter instance."""
    max_lines: int = 10000
    max_variables: int = 1000
    max_for_depth: int = 100
    max_gosub_depth: int = 100
    max_line_length: int = 512
    random_seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_lines": self.max_lines,
            "max_variables": self.max_variables,
            "max_for_depth": self.max_for_depth,
            "max_gosub_depth": self.max_gosub_depth,
            "max_line_length": self.max_line_length,
            "random_seed": self.random_seed,
        }


@dataclass
class ExecutionResult:
    """Result of a program run or an immediate statement."""
    success: bool
    status: RunStatus = RunStatus.IDLE
    error: Optional[str] = None
    error_kind: Optional[str] = None
    line_number: Optional[int] = None
    steps: int = 0
    execution_time_ms: float = 0.0
    output: str = ""

    @classmethod
    def from_error(cls, error: BasicError, steps: int = 0) -> "ExecutionResult":
        return cls(
            success=False,
            status=RunStatus.HALTED_ERROR,
            error=error.message,
            error_kind=error.kind.value,
            line_number=error.line_number,
            steps=steps,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "status": self.status.value,
            "error": self.error,
            "error_kind": self.error_kind,
            "line_number": self.line_number,
            "steps": self.steps,
            "execution_time_ms": self.execution_time_ms,
            "output": self.output,
        }


class StatementExecutor:
    """
    Executes statements against the program, variables and control stacks.

    Handlers never advance the cursor themselves: before each statement the
    loop presets the next cursor to the following line, jump handlers
    overwrite it, and the loop stores it back after the statement.
    """

    def __init__(self,
                 program: ProgramStore,
                 variables: VariableStore,
                 stacks: ControlStacks,
                 evaluator: ExpressionEvaluator,
                 io):
        self.program = program
        self.variables = variables
        self.stacks = stacks
        self.evaluator = evaluator
        self.io = io
        self.status = RunStatus.IDLE
        self._next_cursor = 0
        self._immediate = False

        self._handlers: Dict[Keyword, Callable[[Sequence[Token], int], None]] = {
            Keyword.PRINT: self._exec_print,
            Keyword.LET: self._exec_let,
            Keyword.INPUT: self._exec_input,
            Keyword.IF: self._exec_if,
            Keyword.FOR: self._exec_for,
            Keyword.NEXT: self._exec_next,
            Keyword.GOTO: self._exec_goto,
            Keyword.GOSUB: self._exec_gosub,
            Keyword.RETURN: self._exec_return,
            Keyword.END: self._exec_end,
            Keyword.STOP: self._exec_end,
        }

    def run(self) -> ExecutionResult:
        """
        Run the stored program from its first line.

        Variables are kept; control stacks start empty. The run ends on
        END/STOP, when the cursor leaves the line table, or on the first
        error.
        """
        start = time.time()
        self.stacks.reset()
        self.program.cursor = 0
        self.status = RunStatus.RUNNING
        steps = 0

        logger.debug(f"Run started with {len(self.program)} lines")

        while self.status == RunStatus.RUNNING:
            line = self.program.current_line()
            if line is None:
                self.status = RunStatus.HALTED_NORMAL
                break

            self._next_cursor = self.program.cursor + 1
            try:
                self.execute_statement(line.tokens, 0)
            except BasicError as e:
                e.at_line(line.number)
                self.status = RunStatus.HALTED_ERROR
                logger.warning(f"Run halted: {e}")
                result = ExecutionResult.from_error(e, steps)
                result.execution_time_ms = (time.time() - start) * 1000
                return result

            steps += 1
            self.program.cursor = self._next_cursor

        logger.debug(f"Run finished after {steps} statements")
        return ExecutionResult(
            success=True,
            status=self.status,
            steps=steps,
            execution_time_ms=(time.time() - start) * 1000,
        )

    def execute_immediate(self, tokens: Sequence[Token]) -> ExecutionResult:
        """Run one statement outside the line table."""
        start = time.time()
        self._immediate = True
        try:
            self.execute_statement(tokens, 0)
        except BasicError as e:
            logger.debug(f"Immediate statement failed: {e}")
            result = ExecutionResult.from_error(e)
            result.execution_time_ms = (time.time() - start) * 1000
            return result
        finally:
            self._immediate = False

        return ExecutionResult(
            success=True,
            status=RunStatus.HALTED_NORMAL,
            steps=1,
            execution_time_ms=(time.time() - start) * 1000,
        )

    def execute_statement(self, tokens: Sequence[Token], start: int) -> None:
        """Execute the statement beginning at tokens[start]."""
        if start >= len(tokens):
            return

        head = tokens[start]
        if head.is_keyword(Keyword.REM):
            return

        for tok in tokens[start:]:
            if tok.kind == TokenKind.ERROR:
                raise LexError(tok.literal.text)

        if head.kind == TokenKind.VARIABLE:
            self._assign(tokens, start)
            return

        if head.kind != TokenKind.KEYWORD:
            raise BasicSyntaxError(f"Invalid statement: {head.lexeme}")

        handler = self._handlers.get(head.subkind)
        if handler is not None:
            handler(tokens, start + 1)
        elif head.subkind in UNSUPPORTED:
            raise UnsupportedStatementError(head.subkind.value)
        elif head.subkind in DIRECT_COMMANDS:
            raise BasicSyntaxError(f"{head.subkind.value} is a direct command")
        else:
            raise BasicSyntaxError(f"Unexpected keyword: {head.subkind.value}")

    def _require_program(self, keyword: Keyword) -> None:
        if self._immediate:
            raise BasicSyntaxError(f"{keyword.value} is not allowed in immediate mode")

    def _jump_to(self, line_number: int) -> None:
        self._next_cursor = self.program.resolve(line_number)
        logger.debug(f"Jump to line {line_number}")

    @staticmethod
    def _line_number(number: float) -> int:
        """Jump target as an int; infinities and NaN name no line."""
        if not math.isfinite(number):
            raise BasicRangeError(f"Line number out of range: {number}")
        return int(number)

    def _line_target(self, tokens: Sequence[Token], start: int, keyword: Keyword) -> int:
        if start >= len(tokens):
            raise BasicSyntaxError(f"{keyword.value} requires line number")
        target = self.evaluator.evaluate(tokens, start, len(tokens) - 1)
        if not target.is_number:
            raise BasicTypeError(f"{keyword.value} target must be numeric")
        return self._line_number(target.number)

    def _exec_print(self, tokens: Sequence[Token], start: int) -> None:
        end = len(tokens) - 1
        seg_start = start

        for sep in split_top_level(tokens, start, end, ",;") + [None]:
            seg_end = sep - 1 if sep is not None else end
            if seg_end >= seg_start:
                value = self.evaluator.evaluate(tokens, seg_start, seg_end)
                self.io.write(value.render())
            if sep is None:
                break
            if tokens[sep].lexeme == ",":
                self.io.write("\t")
            seg_start = sep + 1

        self.io.write("\n")

    def _exec_let(self, tokens: Sequence[Token], start: int) -> None:
        self._assign(tokens, start)

    def _assign(self, tokens: Sequence[Token], start: int) -> None:
        if (start + 2 >= len(tokens) or tokens[start].kind != TokenKind.VARIABLE
                or not tokens[start + 1].is_operator(Operator.EQUAL)):
            raise BasicSyntaxError("Invalid LET statement")

        value = self.evaluator.evaluate(tokens, start + 2, len(tokens) - 1)
        self.variables.set(tokens[start].lexeme, value)

    def _exec_input(self, tokens: Sequence[Token], start: int) -> None:
        pos = start
        prompt = None
        if pos < len(tokens) and tokens[pos].kind == TokenKind.STRING:
            prompt = tokens[pos].literal.text
            pos += 1
            if pos < len(tokens) and tokens[pos].is_delimiter(";"):
                pos += 1

        if pos >= len(tokens) or tokens[pos].kind != TokenKind.VARIABLE:
            raise BasicSyntaxError("INPUT requires a variable")
        if pos != len(tokens) - 1:
            raise BasicSyntaxError("Unexpected tokens after INPUT variable")

        if prompt is not None:
            self.io.write(prompt)

        line = self.io.read_line()
        if line is None:
            logger.debug("INPUT reached end of input")
            return

        number = parse_full_number(line)
        value = Value.of_number(number) if number is not None else Value.of_text(line)
        self.variables.set(tokens[pos].lexeme, value)

    def _exec_if(self, tokens: Sequence[Token], start: int) -> None:
        then_pos = None
        for i in range(start, len(tokens)):
            if tokens[i].is_keyword(Keyword.THEN):
                then_pos = i
                break

        if then_pos is None:
            raise BasicSyntaxError("IF without THEN")
        if then_pos == start:
            raise BasicSyntaxError("IF requires a condition")
        if any(t.is_keyword(Keyword.ELSE) for t in tokens[then_pos + 1:]):
            raise UnsupportedStatementError(Keyword.ELSE.value)

        condition = self.evaluator.evaluate(tokens, start, then_pos - 1)
        if not condition.is_truthy() or then_pos + 1 >= len(tokens):
            return

        branch = tokens[then_pos + 1]
        if branch.kind == TokenKind.NUMBER:
            if then_pos + 2 < len(tokens):
                raise BasicSyntaxError("Unexpected tokens after THEN line number")
            self._require_program(Keyword.GOTO)
            self._jump_to(self._line_number(branch.literal.number))
        else:
            self.execute_statement(tokens, then_pos + 1)

    def _exec_for(self, tokens: Sequence[Token], start: int) -> None:
        self._require_program(Keyword.FOR)
        count = len(tokens)
        if (start + 4 >= count or tokens[start].kind != TokenKind.VARIABLE
                or not tokens[start + 1].is_operator(Operator.EQUAL)):
            raise BasicSyntaxError("Invalid FOR statement")

        to_pos = None
        for i in range(start + 2, count):
            if tokens[i].is_keyword(Keyword.TO):
                to_pos = i
                break
        if to_pos is None:
            raise BasicSyntaxError("FOR without TO")

        step_pos = None
        for i in range(to_pos + 1, count):
            if tokens[i].is_keyword(Keyword.STEP):
                step_pos = i
                break

        initial = self.evaluator.evaluate(tokens, start + 2, to_pos - 1)
        if not initial.is_number:
            raise BasicTypeError("FOR start value must be numeric")

        limit_end = step_pos - 1 if step_pos is not None else count - 1
        limit = self.evaluator.evaluate(tokens, to_pos + 1, limit_end)
        if not limit.is_number:
            raise BasicTypeError("FOR end value must be numeric")

        step = 1.0
        if step_pos is not None:
            step_value = self.evaluator.evaluate(tokens, step_pos + 1, count - 1)
            if not step_value.is_number:
                raise BasicTypeError("FOR step value must be numeric")
            step = step_value.number

        name = tokens[start].lexeme
        self.variables.set(name, initial)
        self.stacks.push_for(ForFrame(name, limit.number, step, self.program.cursor + 1))
        logger.debug(f"FOR {name} pushed, depth {self.stacks.for_depth}")

    def _exec_next(self, tokens: Sequence[Token], start: int) -> None:
        self._require_program(Keyword.NEXT)
        frame = self.stacks.peek_for()

        if start < len(tokens):
            named = tokens[start]
            if named.kind != TokenKind.VARIABLE or start + 1 < len(tokens):
                raise BasicSyntaxError("Invalid NEXT statement")
            if named.lexeme.upper() != frame.variable.upper():
                raise StackError(f"NEXT {named.lexeme} does not match FOR {frame.variable}")

        current = self.variables.lookup(frame.variable)
        if not current.is_number:
            raise BasicTypeError(f"FOR variable {frame.variable} must be numeric")

        value = current.number + frame.step
        self.variables.set(frame.variable, Value.of_number(value))

        if frame.should_continue(value):
            self._next_cursor = frame.resume_line_index
        else:
            self.stacks.pop_for()
            logger.debug(f"FOR {frame.variable} finished, depth {self.stacks.for_depth}")

    def _exec_goto(self, tokens: Sequence[Token], start: int) -> None:
        self._require_program(Keyword.GOTO)
        self._jump_to(self._line_target(tokens, start, Keyword.GOTO))

    def _exec_gosub(self, tokens: Sequence[Token], start: int) -> None:
        self._require_program(Keyword.GOSUB)
        target = self._line_target(tokens, start, Keyword.GOSUB)
        self.stacks.push_gosub(GosubFrame(self.program.cursor + 1))
        logger.debug(f"GOSUB {target}, depth {self.stacks.gosub_depth}")
        self._jump_to(target)

    def _exec_return(self, tokens: Sequence[Token], start: int) -> None:
        self._require_program(Keyword.RETURN)
        frame = self.stacks.pop_gosub()
        self._next_cursor = frame.return_line_index

    def _exec_end(self, tokens: Sequence[Token], start: int) -> None:
        if not self._immediate:
            self.status = RunStatus.HALTED_NORMAL
