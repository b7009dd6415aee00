"""Run endpoint for program execution."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from linebasic.errors import BasicError
from linebasic.loader import load_source
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO

logger = logging.getLogger(__name__)

router = APIRouter()


class RunRequest(BaseModel):
    """Request body for program execution."""
    source: str
    input: List[str] = []
    seed: Optional[int] = None


class RunResponse(BaseModel):
    """Response body for program execution."""
    success: bool
    status: str
    output: str = ""
    variables: Dict[str, Any] = {}
    error: Optional[str] = None
    error_kind: Optional[str] = None
    line_number: Optional[int] = None
    steps: int = 0
    execution_time_ms: float = 0.0


@router.post("/run", response_model=RunResponse)
def run_program(request: RunRequest):
    """Load a BASIC program from source text and run it."""
    io = BufferedIO(request.input)
    interpreter = Interpreter(config=ExecutionConfig(random_seed=request.seed), io=io)

    try:
        load_source(interpreter, request.source)
    except BasicError as e:
        logger.info(f"Program rejected at load: {e}")
        return RunResponse(
            success=False,
            status="HALTED_ERROR",
            error=e.message,
            error_kind=e.kind.value,
            line_number=e.line_number,
        )

    try:
        result = interpreter.run_program()
    except Exception as e:
        logger.exception("Unexpected failure while running program")
        raise HTTPException(status_code=500, detail=str(e))

    return RunResponse(
        variables={name: value.payload for name, value in interpreter.get_variables()},
        **result.to_dict(),
    )
