"""
Custom exceptions for the AI Interview Prep application.

Every failure a prep-guide request can end in has its own class, so the API
layer can answer with one human-readable message and a stable ``error_type``.
None of them are retried automatically; re-submitting is left to the user.
"""
import logging
from typing import Optional
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Custom Exception Classes
# ============================================================================

class AppError(Exception):
    """Base exception for all application errors."""
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def error_type(self) -> str:
        return type(self).__name__


class InvalidInputError(AppError):
    """Raised when the company name is empty or whitespace only."""
    status_code = 400


class ConfigurationError(AppError):
    """Exception raised when configuration is invalid or missing."""
    status_code = 500


class UpstreamError(AppError):
    """Raised when the generation service call fails (network, service, timeout)."""
    status_code = 502


class MalformedResponseError(AppError):
    """Raised when the generated text is not valid JSON after fence stripping."""
    status_code = 502


class SchemaViolationError(AppError):
    """Raised when well-formed JSON does not match the prep guide schema."""
    status_code = 502

    def __init__(self, message: str, path: str, details: Optional[dict] = None):
        self.path = path
        super().__init__(message, {"path": path, **(details or {})})


class ExportError(AppError):
    """Raised when the rendered report cannot be exported."""
    status_code = 500


class RequestInProgressError(AppError):
    """Raised when the same client already has an identical request in flight."""
    status_code = 409


# ============================================================================
# FastAPI Exception Handlers
# ============================================================================

async def app_error_handler(request: Request, exc: AppError):
    logger.warning(f"{exc.error_type}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": exc.error_type, **exc.details},
    )

async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error", "error": str(exc)},
    )

async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"HTTP exception: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )
