"""
linebasic Program Loader

Reads BASIC source text into an interpreter. Each non-blank line is an
optional leading line number, whitespace, then one statement. Lines
without a number continue the program in steps of 10.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from linebasic.runtime.interpreter import Interpreter

logger = logging.getLogger(__name__)

_LINE_NUMBER = re.compile(r"\s*(\d+)\s*(.*)", re.DOTALL)


def split_line_number(text: str) -> Tuple[Optional[int], str]:
    """Split "10 PRINT X" into (10, "PRINT X"); unnumbered lines give None."""
    match = _LINE_NUMBER.fullmatch(text)
    if match is None:
        return None, text.strip()
    return int(match.group(1)), match.group(2).strip()


def parse_source(source: str) -> List[Tuple[Optional[int], str]]:
    """(number, statement) pairs for every non-blank line of source."""
    entries = []
    for raw in source.splitlines():
        if not raw.strip():
            continue
        entries.append(split_line_number(raw))
    return entries


def load_source(interpreter: Interpreter, source: str) -> int:
    """Store every line of source. Returns the number of lines loaded."""
    count = 0
    for number, statement in parse_source(source):
        interpreter.load_line(number, statement)
        count += 1
    logger.debug(f"Loaded {count} lines")
    return count


def load_file(interpreter: Interpreter, path: Union[str, Path]) -> int:
    """Load a program file (UTF-8)."""
    text = Path(path).read_text(encoding="utf-8")
    logger.debug(f"Loading program from {path}")
    return load_source(interpreter, text)
