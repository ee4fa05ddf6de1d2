from __future__ import annotations

import re
import typing as tp
from datetime import datetime, timezone
from email.utils import formatdate

HEADERS_ENCODING = "iso-8859-1"

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# IMF-fixdate, RFC 7231 Section 7.1.1.1
_IMF_FIXDATE = re.compile(
    r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun), "
    r"(?P<day>\d{2}) (?P<month>[A-Z][a-z]{2}) (?P<year>\d{4}) "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) GMT",
    re.ASCII,
)


def parse_http_date(date: str) -> tp.Optional[datetime]:
    """
    Parse an HTTP-date into an aware UTC datetime.

    Only the IMF-fixdate format is accepted. Malformed values return None
    instead of raising, since a recipient must ignore a conditional header
    whose value is not a valid HTTP-date.

    Examples:
        >>> parse_http_date("Sun, 06 Nov 1994 08:49:37 GMT")
        datetime.datetime(1994, 11, 6, 8, 49, 37, tzinfo=datetime.timezone.utc)
        >>> parse_http_date("yesterday") is None
        True
    """
    match = _IMF_FIXDATE.fullmatch(date.strip())
    if match is None:
        return None

    if match["month"] not in MONTHS:
        return None

    try:
        return datetime(
            int(match["year"]),
            MONTHS.index(match["month"]) + 1,
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            tzinfo=timezone.utc,
        )
    except ValueError:
        # Out of range fields, e.g. "31 Feb" or "25:00:00"
        return None


def to_utc(value: tp.Union[datetime, float, int]) -> datetime:
    """
    Normalize a resource timestamp for comparison with an HTTP-date.

    Naive datetimes are taken to be UTC, numbers are POSIX timestamps.
    Sub-second precision is dropped because HTTP-dates have one second resolution.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
    else:
        value = datetime.fromtimestamp(value, tz=timezone.utc)
    return value.replace(microsecond=0)


def generate_http_date(timestamp: tp.Union[datetime, float, int, None] = None) -> str:
    """
    Generate an HTTP-date header value (Date, Last-Modified).
    Returns date in RFC 1123 format (required by HTTP/1.1).

    Example output: 'Sun, 26 Oct 2025 12:34:56 GMT'
    """
    if timestamp is None:
        return formatdate(timeval=None, localtime=False, usegmt=True)
    return formatdate(timeval=to_utc(timestamp).timestamp(), localtime=False, usegmt=True)
