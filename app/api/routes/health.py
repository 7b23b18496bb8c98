"""Health check endpoint."""

from typing import Any, Dict

from fastapi import APIRouter

from app.config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check() -> Dict[str, Any]:
    """Readiness check: reports whether Gemini is configured."""
    return {
        "status": "ready",
        "dependencies": {
            "gemini": "configured" if settings.gemini_api_key else "missing_api_key",
        },
    }
