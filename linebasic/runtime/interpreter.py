"""
linebasic Interpreter

One interpreter instance owns all state for a session: the line table,
the variable table, the control stacks and the random generator. Shell,
loader and inspection tooling talk to it only through the entry points
below.

Key classes:
- Interpreter: Session state and entry points

Module-level entry points:
- init, reset, load_line, run_program, execute_immediate, get_variables
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from linebasic.errors import BasicError, BasicSyntaxError, LexError
from linebasic.lexer.tokenizer import tokenize
from linebasic.lexer.tokens import Token
from linebasic.runtime.environment import VariableStore
from linebasic.runtime.evaluator import ExpressionEvaluator
from linebasic.runtime.executor import ExecutionConfig, ExecutionResult, StatementExecutor
from linebasic.runtime.io import BufferedIO, ConsoleIO
from linebasic.runtime.program import Line, ProgramStore
from linebasic.runtime.state import ControlStacks, RunStatus
from linebasic.values import Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Line-numbered BASIC interpreter.

    Args:
        config: Capacities and random seed
        io: Print sink / input source; defaults to the console
    """

    def __init__(self, config: ExecutionConfig = None, io=None):
        self.config = config or ExecutionConfig()
        self.io = io if io is not None else ConsoleIO()
        self.rng = random.Random(self.config.random_seed)
        self.program = ProgramStore(self.config.max_lines)
        self.variables = VariableStore(self.config.max_variables)
        self.stacks = ControlStacks(self.config.max_for_depth, self.config.max_gosub_depth)
        self.evaluator = ExpressionEvaluator(self.variables, self.rng)
        self.executor = StatementExecutor(
            self.program, self.variables, self.stacks, self.evaluator, self.io
        )

    @property
    def status(self) -> RunStatus:
        return self.executor.status

    def reset(self) -> None:
        """Empty program, variables and stacks."""
        self.program.clear()
        self.variables.clear()
        self.stacks.reset()
        self.rng.seed(self.config.random_seed)
        self.executor.status = RunStatus.IDLE
        logger.debug("Interpreter reset")

    def load_line(self, line_number: Optional[int], text: str) -> Line:
        """
        Tokenize and store a line, replacing any line with the same number.

        A missing line number continues the program in steps of 10.
        """
        if len(text) > self.config.max_line_length:
            raise LexError("Line too long", line_number)

        number = self.program.next_number() if line_number is None else int(line_number)
        if number < 0:
            raise BasicSyntaxError("Line number must not be negative", number)

        line = Line(number, text, tuple(tokenize(text)))
        try:
            self.program.store(line)
        except BasicError as e:
            raise e.at_line(number)

        logger.debug(f"Stored line {number} ({len(line.tokens)} tokens)")
        return line

    def delete_line(self, line_number: int) -> bool:
        return self.program.delete(line_number)

    def list_lines(self) -> List[Tuple[int, str]]:
        return [(line.number, line.text) for line in self.program]

    def run_program(self) -> ExecutionResult:
        """Execute from the first line until END/STOP, the last line, or an error."""
        mark = self._output_mark()
        result = self.executor.run()
        result.output = self._output_since(mark)
        return result

    def execute_immediate(self, tokens: Union[str, Sequence[Token]]) -> ExecutionResult:
        """Run one statement without storing it. Errors end only this statement."""
        if isinstance(tokens, str):
            tokens = tokenize(tokens)
        mark = self._output_mark()
        result = self.executor.execute_immediate(tokens)
        result.output = self._output_since(mark)
        return result

    def evaluate(self, text: str) -> Value:
        """Evaluate a single expression against the current variables."""
        return self.evaluator.evaluate_all(tokenize(text))

    def get_variables(self) -> List[Tuple[str, Value]]:
        return self.variables.snapshot()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "lines": [{"number": n, "text": t} for n, t in self.list_lines()],
            "variables": self.variables.to_dict(),
            "stacks": self.stacks.to_dict(),
            "config": self.config.to_dict(),
        }

    def _output_mark(self) -> int:
        if isinstance(self.io, BufferedIO):
            return len(self.io.chunks)
        return 0

    def _output_since(self, mark: int) -> str:
        if isinstance(self.io, BufferedIO):
            return "".join(self.io.chunks[mark:])
        return ""


def init(config: ExecutionConfig = None, io=None) -> Interpreter:
    return Interpreter(config=config, io=io)


def reset(interpreter: Interpreter) -> None:
    interpreter.reset()


def load_line(interpreter: Interpreter, line_number: Optional[int], text: str) -> Line:
    return interpreter.load_line(line_number, text)


def run_program(interpreter: Interpreter) -> ExecutionResult:
    return interpreter.run_program()


def execute_immediate(interpreter: Interpreter,
                      tokens: Union[str, Sequence[Token]]) -> ExecutionResult:
    return interpreter.execute_immediate(tokens)


def get_variables(interpreter: Interpreter) -> List[Tuple[str, Value]]:
    return interpreter.get_variables()
