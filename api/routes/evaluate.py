"""Evaluate endpoint for single expressions."""

from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from linebasic.errors import BasicError
from linebasic.lexer.tokenizer import tokenize
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO
from linebasic.values import Value

router = APIRouter()


class EvaluateRequest(BaseModel):
    """Request body for expression evaluation."""
    expression: str
    variables: Dict[str, Union[float, str]] = {}


class EvaluateResponse(BaseModel):
    """Response body for expression evaluation."""
    success: bool
    value: Optional[Any] = None
    kind: Optional[str] = None
    rendered: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate_expression(request: EvaluateRequest):
    """Evaluate one expression against an optional set of variables."""
    interpreter = Interpreter(io=BufferedIO())

    try:
        for name, raw in request.variables.items():
            value = Value.of_text(raw) if isinstance(raw, str) else Value.of_number(raw)
            interpreter.variables.set(name, value)
    except BasicError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = interpreter.evaluator.try_evaluate(tokenize(request.expression))
    response = EvaluateResponse(**result.to_dict())
    if result.value is not None:
        response.rendered = result.value.render()
    return response
