"""
deck_tracker/core/errors.py
Error taxonomy and the FastAPI handlers that turn it into responses.

Every error body has the same shape:
    {"error": "Human-readable description"}

Status discipline:
- 400: missing/blank field, malformed identifier, validation-gate rejection
- 401: missing or invalid admin credential
- 404: referenced event/player/deck/entry does not exist
- 500: configuration absent, or the store failed (message passed through);
  anything else unexpected is logged and reported as "Internal server error."
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DeckTrackerError(Exception):
    """Base class for errors reported to API callers."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(message)


class InputError(DeckTrackerError):
    """Missing or blank required field, malformed identifier."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DeckTrackerError):
    """A referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(DeckTrackerError):
    """Missing or invalid admin credential."""
    status_code = status.HTTP_401_UNAUTHORIZED


class GateRejectedError(AuthorizationError):
    """The player is not on the event's validation roster."""
    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(DeckTrackerError):
    """A required setting (e.g. the admin secret) is not configured."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamStoreError(DeckTrackerError):
    """The relational store failed or timed out."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    # loc looks like ("body", "player") or ("query", "event")
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
    if first.get("type") == "missing":
        return f"Missing required field: {field}"
    return f"Invalid value for {field}: {first.get('msg', 'invalid')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy to the application."""

    @app.exception_handler(DeckTrackerError)
    async def deck_tracker_error_handler(request: Request, exc: DeckTrackerError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info("Rejected request on %s: %s", request.url.path, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        # Surface the driver's own message, not SQLAlchemy's wrapper text
        message = str(getattr(exc, "orig", None) or exc)
        logger.error("Store error on %s: %s", request.url.path, message)
        return error_response(UpstreamStoreError.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")
