"""
Global error handling middleware.

WHAT: Translate exceptions to appropriate HTTP responses
WHY: Consistent error responses with proper status codes
HOW: FastAPI exception handlers for the bridge taxonomy and request validation
"""

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from datetime import datetime

from ..utils.exceptions import BridgeException
from ..utils.logger import get_logger

logger = get_logger(__name__)


def error_response(exc: BridgeException) -> JSONResponse:
    """Render a BridgeException as the standard JSON error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": jsonable_encoder(exc.details),
            "timestamp": datetime.now().isoformat()
        }
    )


async def bridge_exception_handler(request: Request, exc: BridgeException):
    """
    Handle BridgeException and its subclasses.

    WHAT: Client, configuration, upstream, extraction and transport errors
    WHY: Each kind carries its own status (upstream errors keep the backend's)
    HOW: Return the exception's status with code/message/details
    """
    if exc.status_code < 500:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    else:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle FastAPI RequestValidationError.

    WHAT: Request body missing, not JSON, or wrong shape
    WHY: Malformed input is a client error, never a backend call
    HOW: Return 400 with field errors
    """
    logger.warning(f"Validation error: {exc.errors()}")

    # Clean up error details to be JSON serializable
    cleaned_errors = []
    for error in exc.errors():
        cleaned_error = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": error.get("input")
        }
        if "ctx" in error:
            cleaned_error["ctx"] = {
                k: str(v) if isinstance(v, Exception) else v
                for k, v in error["ctx"].items()
            }
        cleaned_errors.append(cleaned_error)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(cleaned_errors),
            "timestamp": datetime.now().isoformat()
        }
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(BridgeException, bridge_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    logger.info("Exception handlers registered")
