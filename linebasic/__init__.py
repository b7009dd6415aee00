"""
linebasic - Line-numbered BASIC engine

Tokenizes statement lines, evaluates expressions with operator precedence
and builtin functions, and executes line-numbered programs with GOTO,
IF/THEN, GOSUB/RETURN and FOR/NEXT control flow.

Exports:
- Interpreter and the entry points init/reset/load_line/run_program/
  execute_immediate/get_variables
- tokenize: Line tokenizer
- Value: Runtime datum
- BasicError and its subclasses
"""

from linebasic.values import Value, ValueKind
from linebasic.errors import (
    ErrorKind,
    BasicError,
    LexError,
    BasicSyntaxError,
    UnsupportedStatementError,
    BasicTypeError,
    BasicRangeError,
    BasicNameError,
    StackError,
    CapacityError,
)
from linebasic.lexer import tokenize, Token, TokenKind
from linebasic.runtime import (
    Interpreter,
    ExecutionConfig,
    ExecutionResult,
    RunStatus,
    BufferedIO,
    ConsoleIO,
    init,
    reset,
    load_line,
    run_program,
    execute_immediate,
    get_variables,
)
from linebasic.loader import load_source, load_file

__version__ = "1.0.0"

__all__ = [
    "Value",
    "ValueKind",
    "ErrorKind",
    "BasicError",
    "LexError",
    "BasicSyntaxError",
    "UnsupportedStatementError",
    "BasicTypeError",
    "BasicRangeError",
    "BasicNameError",
    "StackError",
    "CapacityError",
    "tokenize",
    "Token",
    "TokenKind",
    "Interpreter",
    "ExecutionConfig",
    "ExecutionResult",
    "RunStatus",
    "BufferedIO",
    "ConsoleIO",
    "init",
    "reset",
    "load_line",
    "run_program",
    "execute_immediate",
    "get_variables",
    "load_source",
    "load_file",
]
