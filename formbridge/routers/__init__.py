"""
API routers for formbridge.
"""

from formbridge.routers.forms import router as forms_router
from formbridge.routers.health import router as health_router

__all__ = [
    "forms_router",
    "health_router",
]
