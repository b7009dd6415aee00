"""Tokenize endpoint."""

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel

from linebasic.lexer.tokenizer import tokenize

router = APIRouter()


class TokenizeRequest(BaseModel):
    """Request body for tokenization."""
    text: str


class TokenizeResponse(BaseModel):
    """Response body for tokenization."""
    count: int
    tokens: List[Dict[str, Any]]


@router.post("/tokenize", response_model=TokenizeResponse)
async def tokenize_text(request: TokenizeRequest):
    """Tokenize one statement line."""
    tokens = [token.to_dict() for token in tokenize(request.text)]
    return TokenizeResponse(count=len(tokens), tokens=tokens)
