"""Domain errors and the handlers that turn them into JSON responses."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.portfolio.core.logging import get_logger

logger = get_logger(__name__)


class PortfolioError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None, error: Any = None):
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """Missing, blank or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please provide project name, description, and URL."


class NotFoundError(PortfolioError):
    """No record exists for the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Project not found"


class StorageError(PortfolioError):
    """The media store failed to store or release a file."""

    default_message = "Image storage failed"


class PersistenceError(PortfolioError):
    """A database operation failed."""

    default_message = "Database operation failed"


def error_body(message: str, error: Any = None) -> dict[str, Any]:
    """Build the JSON error envelope shared by every handler."""
    body: dict[str, Any] = {"message": message}
    if error is not None:
        body["error"] = error
    body["request_id"] = correlation_id.get()
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the `{message, error?}` envelope."""

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                error_type=type(exc).__name__,
                error=exc.message,
                cause=repr(exc.__cause__) if exc.__cause__ else None,
                path=request.url.path,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.error),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid request", errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
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
            content=error_body("Server Error", str(exc)),
        )
