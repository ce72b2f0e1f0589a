"""Display helpers shared by the KPI cards, report templates and CSV export."""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from typing import Optional, Union

from .models import ArticleStatus, JobStatus

Number = Union[int, float]

# Relative time thresholds, in seconds, with singular and plural phrasing.
_RELATIVE_STEPS = (
    (45, "a few seconds", None, 1),
    (90, "a minute", None, 60),
    (45 * 60, None, "minutes", 60),
    (90 * 60, "an hour", None, 3600),
    (22 * 3600, None, "hours", 3600),
    (36 * 3600, "a day", None, 86400),
    (26 * 86400, None, "days", 86400),
    (46 * 86400, "a month", None, 30.4375 * 86400),
    (320 * 86400, None, "months", 30.4375 * 86400),
    (548 * 86400, "a year", None, 365.25 * 86400),
)


def format_number(value: Optional[Number]) -> str:
    """Compact number formatting: ``1.2M``, ``12.5K`` or thousands separators."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "--"
    if abs(value) >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if abs(value) >= 10_000:
        return f"{value / 1_000:.1f}K"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


def format_date(value: datetime, zone: Optional[tzinfo] = None) -> str:
    return value.astimezone(zone or timezone.utc).strftime("%Y-%m-%d %H:%M")


def format_relative(value: datetime, now: datetime) -> str:
    """Humanised distance between ``value`` and ``now``, e.g. ``3 hours ago``."""
    seconds = (now - value).total_seconds()
    distance = abs(seconds)
    phrase = None
    for limit, singular, plural, unit in _RELATIVE_STEPS:
        if distance < limit:
            phrase = singular or f"{round(distance / unit)} {plural}"
            break
    if phrase is None:
        phrase = f"{round(distance / (365.25 * 86400))} years"
    return f"{phrase} ago" if seconds >= 0 else f"in {phrase}"


def delta_class(delta: Optional[float]) -> str:
    if delta is None:
        return "delta-neutral"
    if delta > 0:
        return "delta-up"
    if delta < 0:
        return "delta-down"
    return "delta-neutral"


def latency_class(latency: float) -> str:
    if latency <= 12:
        return "latency-good"
    if latency <= 22:
        return "latency-warn"
    return "latency-poor"


def status_pill_class(status: Union[ArticleStatus, str]) -> str:
    mapping = {
        ArticleStatus.COMPLETED.value: "status-active",
        ArticleStatus.IN_QUEUE.value: "status-queued",
        ArticleStatus.IMPROPER.value: "status-improper",
    }
    key = status.value if isinstance(status, ArticleStatus) else status
    return mapping.get(key, "status-paused")


def scheduler_status_pill(status: JobStatus, active: bool) -> str:
    if not active:
        return "status-paused"
    if status is JobStatus.HEALTHY:
        return "status-active"
    if status is JobStatus.WARNING:
        return "status-queued"
    return "status-paused"
