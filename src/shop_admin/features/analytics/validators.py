"""Query-string validation for the analytics routes.

Failures are raised as a RequestValidationError so they reach the client
through the same 422 ``{"success": false, "errors": [{field: message}]}``
body as FastAPI's own parameter errors.
"""
from typing import Optional

from fastapi.exceptions import RequestValidationError

from .ranges import InvalidRange, RangeKeyword, parse_iso_date

RANGE_CHOICES = ", ".join(keyword.value for keyword in RangeKeyword)


def _error(field: str, message: str, value) -> dict:
    return {"type": "value_error", "loc": ("query", field), "msg": message, "input": value}


def _check_date(field: str, value: Optional[str], errors: list, required: bool = False):
    if value is None or not value.strip():
        if required:
            errors.append(_error(field, f"{field} is required when range is custom", value))
        return None
    try:
        return parse_iso_date(value, field)
    except InvalidRange:
        errors.append(_error(field, f"{field} must be a valid ISO 8601 date", value))
        return None


def _check_order(start, end, end_value: Optional[str], errors: list):
    if start is not None and end is not None and end < start:
        errors.append(_error("endDate", "endDate must be greater than or equal to startDate", end_value))


def validate_dashboard_query(range_: Optional[str], start_date: Optional[str], end_date: Optional[str]) -> None:
    errors: list = []
    if range_ is not None and range_ not in {keyword.value for keyword in RangeKeyword}:
        errors.append(_error("range", f"Invalid range parameter. Must be one of: {RANGE_CHOICES}", range_))
    if range_ == RangeKeyword.CUSTOM.value:
        start = _check_date("startDate", start_date, errors, required=True)
        end = _check_date("endDate", end_date, errors, required=True)
        _check_order(start, end, end_date, errors)
    if errors:
        raise RequestValidationError(errors)


def validate_sales_report_query(start_date: Optional[str], end_date: Optional[str]) -> None:
    errors: list = []
    start = _check_date("startDate", start_date, errors)
    end = _check_date("endDate", end_date, errors)
    _check_order(start, end, end_date, errors)
    if errors:
        raise RequestValidationError(errors)
