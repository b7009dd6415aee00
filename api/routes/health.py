"""Health check endpoint."""

from fastapi import APIRouter

from linebasic import __version__
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "linebasic-api"
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness check: the engine can evaluate a trivial expression."""
    runtime_ok = Interpreter(io=BufferedIO()).evaluate("1 + 1").number == 2
    return {
        "ready": runtime_ok,
        "checks": {
            "runtime": runtime_ok,
        }
    }
