"""
Date window resolution for analytics reports.

A report window is a closed interval ``[start, end]`` of aware UTC
datetimes. Windows derived from a keyword or from calendar dates are
normalized to whole days: ``start`` at 00:00:00.000 and ``end`` at
23:59:59.999. Callers needing sub-day precision build a ``DateRange``
from raw timestamps themselves.
"""

import datetime
import enum
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

END_OF_DAY = datetime.time(23, 59, 59, 999000)


class InvalidRange(ValueError):
    """Unparseable or inverted date bounds."""


class RangeKeyword(str, enum.Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class RangePolicy(str, enum.Enum):
    # Legacy behaviour: anything unrecognised means "today".
    PERMISSIVE = "permissive"
    # Validated behaviour: only the exact RangeKeyword values are accepted.
    STRICT = "strict"


@dataclass(frozen=True)
class DateRange:
    start: datetime.datetime
    end: datetime.datetime
    label: Optional[str] = None

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRange("endDate must be greater than or equal to startDate")


def as_utc(moment: datetime.datetime) -> datetime.datetime:
    """Naive datetimes are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.timezone.utc)
    return moment.astimezone(datetime.timezone.utc)


def start_of_day(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.min, tzinfo=datetime.timezone.utc)


def end_of_day(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, END_OF_DAY, tzinfo=datetime.timezone.utc)


def day_range(first: datetime.date, last: datetime.date, label: Optional[str] = None) -> DateRange:
    return DateRange(start=start_of_day(first), end=end_of_day(last), label=label)


def parse_iso_date(value: Optional[str], field: str = "date") -> datetime.date:
    """
    Parses an ISO 8601 date or datetime string into its UTC calendar day.

    Raises:
        InvalidRange: if the value is missing or not ISO 8601.
    """
    if value is None or not str(value).strip():
        raise InvalidRange(f"{field} is required")
    text = str(value).strip()
    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        raise InvalidRange(f"{field} must be a valid ISO 8601 date") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(datetime.timezone.utc)
    return parsed.date()


def last_day_of_month(day: datetime.date) -> datetime.date:
    """Day zero of the following month, whatever the month length."""
    first_of_next = (day.replace(day=1) + datetime.timedelta(days=32)).replace(day=1)
    return first_of_next - datetime.timedelta(days=1)


def _keyword_for(keyword: Optional[str], policy: RangePolicy) -> RangeKeyword:
    if policy == RangePolicy.STRICT:
        try:
            return RangeKeyword(keyword if keyword is not None else RangeKeyword.TODAY.value)
        except ValueError:
            raise InvalidRange(
                "Invalid range parameter. Must be one of: today, yesterday, weekly, monthly, custom"
            ) from None

    normalized = (keyword or "").strip().lower()
    try:
        return RangeKeyword(normalized)
    except ValueError:
        if normalized:
            logger.debug(f"Unknown range keyword '{keyword}', falling back to today")
        return RangeKeyword.TODAY


def resolve_range(
    keyword: Optional[str],
    custom_start: Optional[str] = None,
    custom_end: Optional[str] = None,
    *,
    now: datetime.datetime,
    policy: RangePolicy = RangePolicy.PERMISSIVE,
) -> DateRange:
    """
    Turns a range keyword (or custom bounds) into a concrete day-aligned window.

    Args:
        keyword: One of the RangeKeyword values. How unknown values are
            treated depends on ``policy``.
        custom_start: ISO date string, only read for ``custom``.
        custom_end: ISO date string, only read for ``custom``.
        now: The reference instant; keyword windows are relative to its
            UTC calendar day.
        policy: PERMISSIVE falls back to ``today``, STRICT raises.

    Raises:
        InvalidRange: unparseable custom bounds, ``end < start``, or an
            unknown keyword under the STRICT policy.
    """
    resolved = _keyword_for(keyword, policy)
    today = as_utc(now).date()

    if resolved == RangeKeyword.YESTERDAY:
        yesterday = today - datetime.timedelta(days=1)
        date_range = day_range(yesterday, yesterday, resolved.value)
    elif resolved == RangeKeyword.WEEKLY:
        date_range = day_range(today - datetime.timedelta(days=7), today, resolved.value)
    elif resolved == RangeKeyword.MONTHLY:
        date_range = day_range(today.replace(day=1), last_day_of_month(today), resolved.value)
    elif resolved == RangeKeyword.CUSTOM:
        first = parse_iso_date(custom_start, "startDate")
        last = parse_iso_date(custom_end, "endDate")
        date_range = day_range(first, last, resolved.value)
    else:
        date_range = day_range(today, today, RangeKeyword.TODAY.value)

    logger.debug(f"Resolved range '{keyword}' ({policy.value}) to {date_range.start} .. {date_range.end}")
    return date_range
