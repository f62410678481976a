"""
Shared error handling for router endpoints.

Converts formbridge errors to appropriate HTTP exceptions.
"""

from typing import NoReturn

from fastapi import HTTPException

from formbridge.config.logging import get_logger
from formbridge.errors import ConversionError, FormBridgeError

logger = get_logger(__name__)


def handle_conversion_error(e: FormBridgeError, operation: str) -> NoReturn:
    """
    Convert a formbridge error to an HTTP exception.

    Raises:
        HTTPException: 422 for conversion errors, 500 for anything else
    """
    logger.warning(
        "Conversion failed",
        operation=operation,
        error=e.__class__.__name__,
        message=e.message,
    )
    if isinstance(e, ConversionError):
        raise HTTPException(status_code=422, detail=e.to_dict())
    raise HTTPException(status_code=500, detail=e.to_dict())
