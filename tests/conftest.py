"""Test fixtures for the linebasic test suite."""
import pytest
import sys
from pathlib import Path
from typing import List

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from linebasic.loader import load_source
from linebasic.runtime.executor import ExecutionConfig, ExecutionResult
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO


@pytest.fixture
def io() -> BufferedIO:
    """In-memory I/O handler."""
    return BufferedIO()


@pytest.fixture
def interp(io: BufferedIO) -> Interpreter:
    """Interpreter writing to an in-memory buffer, seeded for RND."""
    return Interpreter(config=ExecutionConfig(random_seed=1234), io=io)


@pytest.fixture
def run_source(interp: Interpreter, io: BufferedIO):
    """Load source text, optionally queue INPUT lines, and run it."""
    def _run(source: str, inputs: List[str] = ()) -> ExecutionResult:
        io.feed(*inputs)
        load_source(interp, source)
        return interp.run_program()
    return _run


@pytest.fixture
def sample_program() -> str:
    """Program exercising loops, subroutines and conditionals."""
    return "\n".join([
        '10 REM sum the squares of 1 to 5',
        '20 LET T = 0',
        '30 FOR I = 1 TO 5',
        '40 GOSUB 100',
        '50 NEXT I',
        '60 PRINT "TOTAL"; T',
        '70 IF T = 55 THEN PRINT "OK"',
        '80 END',
        '100 T = T + I * I',
        '110 RETURN',
    ])


@pytest.fixture
def program_file(tmp_path, sample_program: str) -> str:
    """Sample program written to a temporary .bas file."""
    path = tmp_path / "squares.bas"
    path.write_text(sample_program + "\n", encoding="utf-8")
    return str(path)
