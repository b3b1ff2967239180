"""Date and time utilities."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from dateutil import parser as dateutil_parser

from sitepost.exceptions import DateTimeParsingError, InvalidDateTimeInputError


def parse_datetime_flexible(value: datetime | date | str | Any | None) -> datetime:
    """Parse a datetime value given on the command line and convert it to UTC.

    Accepts ``date`` and ``datetime`` objects or free-form strings such as
    ``2019-01-01`` or ``2019-01-01 10:00:00 +0100``. Naive values are taken
    to be UTC.

    Raises:
        InvalidDateTimeInputError: if the input is None or an empty string.
        DateTimeParsingError: if parsing fails.
    """
    return normalize_timezone(_to_datetime(value))


def _to_datetime(value: Any) -> datetime:
    """Convert a value to a datetime object without timezone normalization."""
    if value is None:
        raise InvalidDateTimeInputError("None", "Input value cannot be None")

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())

    raw = str(value).strip()
    if not raw:
        raise InvalidDateTimeInputError(
            str(value), "Input value cannot be an empty or whitespace-only string"
        )

    try:
        return dateutil_parser.parse(raw)
    except (TypeError, ValueError, OverflowError) as e:
        raise DateTimeParsingError(raw, e) from e


def normalize_timezone(dt: datetime) -> datetime:
    """Return ``dt`` in UTC, treating a naive value as already UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def coerce_datetime(value: datetime | date | str | Any) -> datetime:
    """Parse a datetime value, keeping its own UTC offset when it has one.

    Naive values are taken to be UTC. Unlike :func:`parse_datetime_flexible`,
    aware values are not converted, so the calendar day written in a file
    stays the calendar day of the parsed value.
    """
    dt = _to_datetime(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime without microseconds."""
    return datetime.now(UTC).replace(microsecond=0)


__all__ = ["coerce_datetime", "normalize_timezone", "parse_datetime_flexible", "utcnow"]
