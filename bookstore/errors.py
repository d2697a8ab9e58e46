"""Catalog error taxonomy and its mapping onto HTTP responses."""

import logging
import math

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bookstore.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for errors raised by the catalog services.

    ``resource``, ``field`` and ``value`` identify what the error is about
    (e.g. ``Book``, ``isbn``, ``978-0``) and are echoed to the client.
    """

    status_code: int
    kind: str

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        field: str | None = None,
        value: str | int | float | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.resource = resource
        self.field = field
        self.value = value

    def to_response(self) -> ErrorResponse:
        value = self.value
        # JSON has no NaN or Infinity
        if isinstance(value, float) and not math.isfinite(value):
            value = str(value)
        return ErrorResponse(
            detail=self.message,
            error=self.kind,
            resource=self.resource,
            field=self.field,
            value=value,
        )


class InvalidArgument(CatalogError):
    status_code = 400
    kind = "InvalidArgument"


class NotFound(CatalogError):
    status_code = 404
    kind = "NotFound"

    def __init__(self, resource: str, field: str, value: str | int | float) -> None:
        super().__init__(f"{resource} not found with {field}: {value}", resource, field, value)


class Conflict(CatalogError):
    status_code = 409
    kind = "Conflict"


class Internal(CatalogError):
    status_code = 500
    kind = "Internal"


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response().model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc looks like ("body", "price") or ("query", "page")
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or None
    value = first.get("input")
    error = InvalidArgument(
        first.get("msg", "Invalid request"),
        field=field,
        value=value if isinstance(value, (str, int, float)) else None,
    )
    return await catalog_error_handler(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
