"""
Request guards for the HTTP surface.
"""

from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware that enforces request body size limits.

    Questionnaires are posted whole, so oversized bodies are rejected
    before they are parsed.
    """

    def __init__(self, app, max_body_size: int = 5 * 1024 * 1024) -> None:
        """
        Initialize the middleware.

        Args:
            app: The ASGI application
            max_body_size: Maximum allowed request body size in bytes (default 5MB)
        """
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                length = int(content_length)
            except ValueError:
                length = 0  # Invalid content-length, let the request proceed
            if length > self.max_body_size:
                return JSONResponse(
                    status_code=413,
                    content={
                        "detail": f"Request body too large. Maximum size is {self.max_body_size} bytes."
                    },
                )

        return await call_next(request)
