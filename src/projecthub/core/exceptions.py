"""Domain error taxonomy and the handlers that serialize it.

Services raise ``AppError`` subclasses; they propagate unchanged to the
HTTP boundary where ``setup_exception_handlers`` turns them into the
standard ``{success, message, request_id}`` error body.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for typed failures carrying an HTTP-equivalent status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Referenced entity (project, owner, request, ...) does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ForbiddenError(AppError):
    """Authenticated, but not allowed to act on the entity."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class InvalidStateError(AppError):
    """Operation is not valid for the entity's current state."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid state for this operation"


class ConflictError(AppError):
    """Operation would violate a uniqueness invariant."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class UnauthorizedError(AppError):
    """Missing or invalid credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


def error_body(message: str, request_id: str | None) -> dict[str, object]:
    """Build the JSON body shared by every error response."""
    return {
        "success": False,
        "message": message,
        "request_id": request_id,
    }


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        request_id = correlation_id.get()
        logger.info(
            "Request failed",
            error=type(exc).__name__,
            status_code=exc.status_code,
            path=request.url.path,
            detail=exc.message,
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, request_id),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), correlation_id.get()),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), correlation_id.get()),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", request_id),
        )
