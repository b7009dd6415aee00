"""
linebasic Runtime State

State tracks the control stacks and the run status of one interpreter.

Key classes:
- RunStatus: Lifecycle of a program run
- ForFrame: Active FOR loop record
- GosubFrame: Pending subroutine return address
- ControlStacks: Bounded FOR and GOSUB stacks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from linebasic.errors import StackError


class RunStatus(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    HALTED_NORMAL = "HALTED_NORMAL"
    HALTED_ERROR = "HALTED_ERROR"


@dataclass
class ForFrame:
    """
    Loop record pushed by FOR, advanced by NEXT.

    limit and step are fixed when the loop is entered.
    """
    variable: str
    limit: float
    step: float
    resume_line_index: int

    def should_continue(self, value: float) -> bool:
        if self.step > 0:
            return value <= self.limit
        return value >= self.limit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "variable": self.variable,
            "limit": self.limit,
            "step": self.step,
            "resume_line_index": self.resume_line_index,
        }


@dataclass
class GosubFrame:
    """Return address pushed by GOSUB."""
    return_line_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {"return_line_index": self.return_line_index}


@dataclass
class ControlStacks:
    """
    FOR and GOSUB stacks with fixed maximum depths.

    Pushing past capacity or popping an empty stack raises StackError.
    """
    max_for_depth: int = 100
    max_gosub_depth: int = 100
    for_frames: List[ForFrame] = field(default_factory=list)
    gosub_frames: List[GosubFrame] = field(default_factory=list)

    def push_for(self, frame: ForFrame) -> None:
        if len(self.for_frames) >= self.max_for_depth:
            raise StackError("FOR stack overflow")
        self.for_frames.append(frame)

    def peek_for(self) -> ForFrame:
        if not self.for_frames:
            raise StackError("NEXT without FOR")
        return self.for_frames[-1]

    def pop_for(self) -> ForFrame:
        if not self.for_frames:
            raise StackError("NEXT without FOR")
        return self.for_frames.pop()

    def push_gosub(self, frame: GosubFrame) -> None:
        if len(self.gosub_frames) >= self.max_gosub_depth:
            raise StackError("GOSUB stack overflow")
        self.gosub_frames.append(frame)

    def pop_gosub(self) -> GosubFrame:
        if not self.gosub_frames:
            raise StackError("RETURN without GOSUB")
        return self.gosub_frames.pop()

    @property
    def for_depth(self) -> int:
        return len(self.for_frames)

    @property
    def gosub_depth(self) -> int:
        return len(self.gosub_frames)

    def reset(self) -> None:
        """Clear both stacks for a new run."""
        self.for_frames.clear()
        self.gosub_frames.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "for_frames": [f.to_dict() for f in self.for_frames],
            "gosub_frames": [g.to_dict() for g in self.gosub_frames],
        }
