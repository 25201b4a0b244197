import json

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shop_admin.core.errors import (
    http_exception_handler,
    invalid_range_handler,
    register_exception_handlers,
    unhandled_exception_handler,
    validation_error_entries,
)
from shop_admin.features.analytics.ranges import InvalidRange


def _request(path: str = "/api/v1/analytics/dashboard") -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


def test_validation_entries_are_keyed_by_field():
    exc = RequestValidationError(
        [
            {"type": "value_error", "loc": ("query", "days"), "msg": "too large", "input": "400"},
            {"type": "missing", "loc": ("body", "user", "mobileNumber"), "msg": "Field required", "input": None},
            {"type": "value_error", "loc": (), "msg": "Broken", "input": None},
        ]
    )
    assert validation_error_entries(exc) == [
        {"days": "too large"},
        {"mobileNumber": "Field required"},
        {"request": "Broken"},
    ]


@pytest.mark.asyncio
async def test_invalid_range_is_a_bad_request():
    response = await invalid_range_handler(_request(), InvalidRange("startDate is required"))

    assert response.status_code == 400
    assert json.loads(response.body) == {"success": False, "error": "startDate is required"}


@pytest.mark.asyncio
async def test_unhandled_errors_hide_details(caplog):
    response = await unhandled_exception_handler(_request(), RuntimeError("database exploded"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"success": False, "error": "Server Error"}
    assert "database exploded" in caplog.text


def test_register_exception_handlers():
    app = FastAPI()
    register_exception_handlers(app)

    assert app.exception_handlers[InvalidRange] is invalid_range_handler
    assert app.exception_handlers[StarletteHTTPException] is http_exception_handler
    assert app.exception_handlers[Exception] is unhandled_exception_handler
    assert RequestValidationError in app.exception_handlers


@pytest.mark.asyncio
async def test_http_exceptions_use_the_error_envelope():
    exc = HTTPException(status_code=401, detail="Not authorized to access this route", headers={"WWW-Authenticate": "Bearer"})

    response = await http_exception_handler(_request(), exc)

    assert response.status_code == 401
    assert json.loads(response.body) == {"success": False, "error": "Not authorized to access this route"}
    assert response.headers["www-authenticate"] == "Bearer"
