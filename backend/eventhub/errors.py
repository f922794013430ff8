"""Error taxonomy shared by the services and rendered by the HTTP layer.

Each error carries a stable ``kind`` string and the HTTP status the API
answers with. Services raise these; ``register_exception_handlers`` turns
them into ``{"detail": ..., "error": ...}`` JSON bodies.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class EventHubError(Exception):
    """Base class for every failure reported to a caller."""

    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EventHubError):
    """Missing or malformed input."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(EventHubError):
    """Missing, malformed or expired credential."""

    kind = "authentication_error"
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(EventHubError):
    """Authenticated, but the role or ownership does not allow the action."""

    kind = "authorization_error"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(EventHubError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(EventHubError):
    """A unique key is already taken (e.g. signup with a known email)."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class StorageError(EventHubError):
    """The record store failed; the caller decides whether to retry."""

    kind = "storage_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, kind: str, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "error": kind})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON renderers for the taxonomy above."""

    @app.exception_handler(EventHubError)
    async def handle_eventhub_error(request: Request, exc: EventHubError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
        return _error_response(
            status.HTTP_400_BAD_REQUEST, ValidationError.kind, "; ".join(messages) or "Invalid request",
        )
