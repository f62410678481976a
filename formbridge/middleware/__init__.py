"""
Middleware for formbridge.
"""

from formbridge.middleware.security import RequestSizeLimitMiddleware

__all__ = ["RequestSizeLimitMiddleware"]
