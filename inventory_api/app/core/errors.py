"""
Error types and exception handlers for the inventory API.

Every failure a request can run into is expressed as an ``ApiError``
carrying the HTTP status, a short machine-checkable ``error`` tag and
either a human-readable ``message`` or a list of ``details``.  The
handlers installed by :func:`register_exception_handlers` render these
as JSON bodies such as::

    {"error": "Product not found", "message": "Product with ID 7 does not exist"}

Unknown routes (and known paths with an unsupported method) are
reported as ``Route not found`` so clients can tell them apart from a
missing product.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[List[str]] = None,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message or error or self.error)
        self.message = message
        self.details = details
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            payload["message"] = self.message
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidJSONError(ApiError):
    """Request body is not a well-formed JSON object."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid JSON"

    def __init__(self, message: str = "Request body contains invalid JSON") -> None:
        super().__init__(message)


class InvalidIdError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid ID"

    def __init__(self, message: str = "Product ID must be a valid number") -> None:
        super().__init__(message)


class ValidationFailedError(ApiError):
    """A create payload broke one or more field rules."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid product data"

    def __init__(self, violations: List[str]) -> None:
        super().__init__(details=list(violations))


class InvalidDataError(ApiError):
    """A field supplied in an update payload broke its rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid data"


class ProductNotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Product not found"

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} does not exist")
        self.product_id = product_id


class RouteNotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Route not found"

    def __init__(self, method: str, url: str) -> None:
        super().__init__(f"The route {method} {url} does not exist")


class InternalServerError(ApiError):
    """Persistence failure or unexpected condition inside a handler."""


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing failures raised by Starlette.

    404 and 405 both mean no handler exists for the verb/path pair.
    Any other HTTP exception keeps its status and detail.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        route_error = RouteNotFoundError(request.method, url)
        return await api_error_handler(request, route_error)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await api_error_handler(request, InternalServerError("An unexpected error occurred"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def internal_error_on_failure(message: str) -> Callable:
    """Decorate an async route so unexpected exceptions become a 500.

    ``ApiError`` instances pass through unchanged.  Anything else is
    logged with its traceback and replaced by ``InternalServerError``
    carrying ``message``.
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except ApiError:
                raise
            except Exception as exc:
                logger.exception("%s: %s", message, exc)
                raise InternalServerError(message) from exc

        return wrapper

    return decorator
