"""
linebasic Runtime Engine

This package provides the core runtime for executing BASIC programs:
- Interpreter: Session state and entry points
- StatementExecutor: Statement dispatch and the fetch/execute loop
- ExpressionEvaluator: Recursive range-splitting expression evaluation
- ProgramStore: Sorted line table and execution cursor
- VariableStore: Case-insensitive variable table
- ControlStacks: Bounded FOR and GOSUB stacks
"""

from linebasic.runtime.state import RunStatus, ForFrame, GosubFrame, ControlStacks
from linebasic.runtime.environment import Variable, VariableStore
from linebasic.runtime.program import Line, ProgramStore
from linebasic.runtime.evaluator import ExpressionEvaluator, EvaluatorResult
from linebasic.runtime.executor import StatementExecutor, ExecutionConfig, ExecutionResult
from linebasic.runtime.io import ConsoleIO, BufferedIO
from linebasic.runtime.interpreter import (
    Interpreter,
    init,
    reset,
    load_line,
    run_program,
    execute_immediate,
    get_variables,
)

__all__ = [
    "RunStatus",
    "ForFrame",
    "GosubFrame",
    "ControlStacks",
    "Variable",
    "VariableStore",
    "Line",
    "ProgramStore",
    "ExpressionEvaluator",
    "EvaluatorResult",
    "StatementExecutor",
    "ExecutionConfig",
    "ExecutionResult",
    "ConsoleIO",
    "BufferedIO",
    "Interpreter",
    "init",
    "reset",
    "load_line",
    "run_program",
    "execute_immediate",
    "get_variables",
]
