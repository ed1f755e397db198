"""Error Handlers — global exception handlers for the RoomLink API.

Invariants:
    - Every failure response carries the human-readable message under "error"
    - RoomLinkError → its own http_status and to_response() envelope
    - RequestValidationError → 400 with the first message plus field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - Only CRITICAL errors are logged as faults; client and contention
      outcomes are logged at info

Design Decisions:
    - Three-layer handler: domain (RoomLinkError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the app module small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from roomlink.core.errors import ErrorSeverity, RoomLinkError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_roomlink_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_roomlink_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RoomLinkError)
    async def roomlink_error_handler(request: Request, exc: RoomLinkError):
        """Handle all RoomLink domain/infrastructure errors."""
        level = (
            logging.ERROR if exc.severity is ErrorSeverity.CRITICAL
            else logging.INFO
        )
        logger.log(
            level,
            f"RoomLinkError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "user_id": exc.context.user_id,
                "room_code": exc.context.room_code,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        )


def _clean_message(msg: str) -> str:
    return msg.removeprefix("Value error, ")


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = exc.errors()
    return {
        "error": _clean_message(errors[0]["msg"]) if errors else "Invalid request data",
        "code": "VALIDATION_ERROR",
        "category": "validation",
        "severity": ErrorSeverity.ERROR.value,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": _clean_message(e["msg"]),
                "type": e["type"],
            }
            for e in errors
        ],
    }
