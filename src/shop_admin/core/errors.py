"""Application-wide exception handlers.

HTTPExceptions raised by the routes and services, rejected date ranges,
request validation failures and unhandled errors all leave the API in the
envelope the successful responses use: ``{"success": false, "error": ...}``.
Validation failures additionally list one ``{field: message}`` entry per
offending field. Tortoise's DoesNotExist and IntegrityError handlers are
installed as shipped and keep their ``{"detail": ...}`` body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from tortoise.contrib.fastapi import tortoise_exception_handlers

from ..features.analytics.ranges import InvalidRange

logger = logging.getLogger(__name__)


def validation_error_entries(exc: RequestValidationError) -> list[dict[str, str]]:
    entries = []
    for err in exc.errors():
        loc = [part for part in err.get("loc", ()) if part not in ("query", "body", "path")]
        field = str(loc[-1]) if loc else "request"
        entries.append({field: err.get("msg", "Invalid value")})
    return entries


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def invalid_range_handler(request: Request, exc: InvalidRange) -> JSONResponse:
    logger.info(f"Rejected date range on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": str(exc)},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = validation_error_entries(exc)
    logger.info(f"Validation failed on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"success": False, "error": "Validation failed", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"500 - {exc} - {request.url.path} - {request.method}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Installs the envelope handlers above plus Tortoise's DoesNotExist/IntegrityError ones."""
    for exc_class, handler in tortoise_exception_handlers().items():
        app.add_exception_handler(exc_class, handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(InvalidRange, invalid_range_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
