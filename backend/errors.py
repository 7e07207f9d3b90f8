"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CarbonApiError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class FetchError(CarbonApiError):
    """Upstream dataset unreachable or not a JSON array."""

    def __init__(self, message: str):
        super().__init__(f"Upstream fetch failed: {message}", status_code=500)


def error_response(error: str, exc: Exception, status_code: int = 500) -> JSONResponse:
    """Build the {success, error, message} failure envelope."""
    return JSONResponse(
        {"success": False, "error": error, "message": str(exc)},
        status_code=status_code,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(CarbonApiError)
    async def handle_carbon_api_error(_request: Request, exc: CarbonApiError):
        logger.error("Request failed: %s", exc)
        return error_response("Request failed", exc, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return error_response("Internal server error", exc)
