"""Week number and week boundary calculations.

These are pure date math functions. Every input is normalized to a calendar
day in UTC before any arithmetic happens, so the week number and the week
range of one input always agree regardless of the caller's local time zone.
"""

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

from dateutil.parser import isoparse, parse

from .config import WeekflowConfig
from .errors import InvalidDateError
from .week_types import WeekInfo, WeekRange

logger = logging.getLogger(__name__)

DateLike = Union[datetime, date, str]

# Calendar days are pinned to midday so timedelta arithmetic can never cross a day boundary.
NORMALIZED_HOUR = 12

# Two lenient parses with different defaults agree only when the string names a full date.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

# Complete ISO calendar or week dates; reduced forms such as "2024" or "2024-03" are rejected.
_FULL_ISO_DATE = re.compile(r"\d{4}(?:-\d{2}-\d{2}|\d{4}|-?W\d{2}-?\d)(?![\d-])")


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        if value.tzinfo != timezone.utc:
            value = value.astimezone(timezone.utc)
        return value
    return value.replace(tzinfo=timezone.utc)


def _parse_date_string(value: str) -> datetime:
    text = value.strip()
    if not text:
        raise InvalidDateError(value, "empty string")

    if _FULL_ISO_DATE.match(text):
        try:
            return isoparse(text)
        except (ValueError, OverflowError):
            logger.debug("Not an ISO-8601 date, trying lenient parse: %r", text)

    try:
        first, second = (parse(text, default=default) for default in _PARSE_DEFAULTS)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(value, str(e)) from e

    if first.date() != second.date():
        raise InvalidDateError(value, "year, month or day is missing")
    return first


def normalize_date(value: Any) -> datetime:
    """Normalize a date-like value to its calendar day at 12:00 UTC.

    Args:
        value: A ``datetime``, ``date`` or date string (``YYYY-MM-DD`` or
            anything ``dateutil`` can parse). Naive datetimes are treated as
            UTC; aware datetimes are converted to UTC first.

    Returns:
        Timezone-aware UTC datetime at 12:00:00 on the input's calendar day.

    Raises:
        InvalidDateError: If the value is not a date or cannot be parsed.
    """
    if isinstance(value, str):
        parsed = _parse_date_string(value)
    elif isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day, NORMALIZED_HOUR, tzinfo=timezone.utc)
    else:
        raise InvalidDateError(value, f"unsupported type {type(value).__name__}")

    try:
        utc_value = _to_utc(parsed)
    except OverflowError as e:
        raise InvalidDateError(value, "outside the supported date range") from e
    return datetime(
        utc_value.year, utc_value.month, utc_value.day, NORMALIZED_HOUR, tzinfo=timezone.utc
    )


def _monday_of(normalized: datetime) -> datetime:
    # isoweekday: Monday=1 ... Sunday=7, so Sunday steps back six days
    return normalized - timedelta(days=normalized.isoweekday() - 1)


def _start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def first_monday_of_year(year: int) -> datetime:
    """Return the first Monday of ``year`` at 12:00 UTC."""
    start_of_year = datetime(year, 1, 1, NORMALIZED_HOUR, tzinfo=timezone.utc)
    return start_of_year + timedelta(days=(7 - start_of_year.weekday()) % 7)


def get_week_start(value: DateLike) -> datetime:
    """Get Monday 00:00:00 UTC of the week containing ``value``."""
    return _start_of_day(_monday_of(normalize_date(value)))


def get_week_end(value: DateLike) -> datetime:
    """Get Sunday 00:00:00 UTC of the week containing ``value``."""
    return get_week_range(value).end


def _week_number(normalized: datetime, depth: int = 0) -> int:
    if depth > 1:
        raise RuntimeError(f"Year boundary resolution did not settle for {normalized.date()}")

    monday = _monday_of(normalized)
    first_monday = first_monday_of_year(monday.year)

    if monday < first_monday:
        # The week is the tail of the previous year
        previous_year_end = datetime(monday.year - 1, 12, 31, NORMALIZED_HOUR, tzinfo=timezone.utc)
        logger.debug(
            "Week of %s precedes first Monday %s, resolving via %s",
            normalized.date(),
            first_monday.date(),
            previous_year_end.date(),
        )
        return _week_number(previous_year_end, depth + 1)

    return (monday - first_monday).days // 7 + 1


def get_week_by_date(value: DateLike) -> int:
    """Calculate the Monday-anchored week-of-year number for a date.

    Week 1 is the week starting on the first Monday of the year. Days before
    that Monday belong to the last week of the previous year, so the result is
    always >= 1 and may reach 53.

    Args:
        value: Input date (``datetime``, ``date`` or date string)

    Returns:
        1-based week number

    Raises:
        InvalidDateError: If the value cannot be normalized to a date.

    Example::

        >>> get_week_by_date("2024-01-01")
        1
        >>> get_week_by_date("2023-01-01")
        52
    """
    return _week_number(normalize_date(value))


def _week_range(normalized: datetime, value: Any) -> WeekRange:
    start = _start_of_day(_monday_of(normalized))
    try:
        end = start + timedelta(days=6)
    except OverflowError as e:
        # Only the final week of year 9999 ends past datetime.max
        raise InvalidDateError(value, "outside the supported date range") from e
    return WeekRange(start=start, end=end)


def get_week_range(value: DateLike) -> WeekRange:
    """Get the Monday-to-Sunday range of the week containing ``value``.

    Raises:
        InvalidDateError: If the value cannot be normalized to a date, or its
            week ends after the last representable day.
    """
    return _week_range(normalize_date(value), value)


def get_week_info(value: DateLike) -> WeekInfo:
    """Get the week number and range for ``value`` in one call.

    Both parts are derived from a single normalization of the input, so they
    always describe the same week.
    """
    normalized = normalize_date(value)
    week_range = _week_range(normalized, value)
    return WeekInfo(
        week_number=_week_number(normalized), start=week_range.start, end=week_range.end
    )


class WeekCalculator:
    """Week calculator that applies a configured policy to invalid input.

    With the default ``raise`` policy this behaves exactly like the module
    level functions. With ``fallback`` an invalid input is logged and the
    configured fallback date (or the current UTC date) is used instead.
    """

    def __init__(self, config: Optional[WeekflowConfig] = None) -> None:
        self.config = config or WeekflowConfig()
        self.config.validate()

    def _fallback_value(self, error: InvalidDateError, operation: str) -> DateLike:
        if self.config.on_invalid != "fallback":
            raise error
        fallback = self.config.fallback_date or datetime.now(timezone.utc)
        logger.warning("%s in %s, falling back to %s", error, operation, fallback)
        return fallback

    def week_number(self, value: Any) -> int:
        try:
            return get_week_by_date(value)
        except InvalidDateError as e:
            return get_week_by_date(self._fallback_value(e, "week_number"))

    def week_range(self, value: Any) -> WeekRange:
        try:
            return get_week_range(value)
        except InvalidDateError as e:
            return get_week_range(self._fallback_value(e, "week_range"))

    def week_info(self, value: Any) -> WeekInfo:
        try:
            return get_week_info(value)
        except InvalidDateError as e:
            return get_week_info(self._fallback_value(e, "week_info"))
