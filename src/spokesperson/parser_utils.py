"""Parsing utilities for record ingestion."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import List, Optional, Sequence, Union

from dateutil import parser as date_parser
from dateutil import tz


def utc_now() -> datetime:
    """Default clock: the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(
    value: Union[str, datetime],
    *,
    default_timezone: Union[str, tz.tzfile, None] = "UTC",
) -> datetime:
    """Parse a timestamp into an aware UTC datetime.

    Naive values are interpreted in ``default_timezone``. Raises ``ValueError``
    when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("empty timestamp")
        try:
            dt = date_parser.isoparse(text)
        except ValueError:
            try:
                dt = date_parser.parse(text)
            except (ValueError, OverflowError) as exc:
                raise ValueError(f"Unparseable timestamp: {value!r}") from exc

    if dt.tzinfo is None:
        zone = tz.gettz(default_timezone) if isinstance(default_timezone, str) else default_timezone
        if zone is None:
            zone = timezone.utc
        dt = dt.replace(tzinfo=zone)

    return dt.astimezone(timezone.utc)


def isoformat_utc(value: datetime) -> str:
    """Format an aware datetime as ISO8601 UTC with millisecond precision and Z suffix."""
    dt_utc = value.astimezone(timezone.utc)
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt_utc.microsecond // 1000:03d}Z"


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Return the tzinfo for ``name``; ``None`` means UTC."""
    if not name:
        return tz.UTC
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone: {name!r}")
    return zone


def ensure_list(value: Optional[Union[str, Sequence[str]]]) -> List[str]:
    """Ensure input is a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]
