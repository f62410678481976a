"""
Health check endpoints.
"""

from fastapi import APIRouter

from formbridge import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns the service status and basic information.
    """
    return {
        "status": "healthy",
        "service": "formbridge",
        "version": __version__,
    }
