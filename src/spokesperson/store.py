"""In-memory record store.

Holds the immutable snapshot of channels, articles and scheduler jobs the
dashboard aggregates over. Documents are validated on ingestion and rejected
as a whole when a record is malformed, so the aggregation layer can assume
well-typed input. Both the camelCase field names of exported dashboard data
and snake_case names are accepted.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import yaml

from .channel_matching import ChannelResolver
from .logging_config import get_logger
from .models import (
    HOURS_PER_DAY,
    Article,
    ArticleStatus,
    Channel,
    ChannelStatus,
    Engagement,
    HourlySlot,
    JobStatus,
    ScheduleJob,
)
from .parser_utils import ensure_list, isoformat_utc, parse_timestamp
from .scheduler import derive_job_status

logger = get_logger("store")

_MISSING = object()


class RecordValidationError(ValueError):
    """Raised when a record cannot be ingested into the store."""


def _field(data: Dict[str, Any], *keys: str, default: Any = _MISSING, context: str = "record") -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    if default is _MISSING:
        raise RecordValidationError(f"{context}: missing required field {keys[0]!r}")
    return default


def _non_negative_int(value: Any, name: str, context: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise RecordValidationError(f"{context}: {name} must be an integer, got {value!r}") from exc
    if number < 0:
        raise RecordValidationError(f"{context}: {name} must be non-negative, got {number}")
    return number


def _number(value: Any, name: str, context: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RecordValidationError(f"{context}: {name} must be a number, got {value!r}") from exc


def parse_channel(data: Dict[str, Any]) -> Channel:
    context = f"channel {data.get('id')!r}"
    status_raw = _field(data, "status", default=ChannelStatus.ACTIVE.value)
    try:
        status = ChannelStatus(str(status_raw).lower())
    except ValueError as exc:
        raise RecordValidationError(f"{context}: unknown status {status_raw!r}") from exc

    latency = _number(
        _field(data, "avgLatencyMinutes", "avg_latency_minutes", default=1), "avgLatencyMinutes", context
    )
    if latency <= 0:
        raise RecordValidationError(f"{context}: avgLatencyMinutes must be positive")
    share = _number(_field(data, "audienceShare", "audience_share", default=0), "audienceShare", context)
    if not 0 <= share <= 1:
        raise RecordValidationError(f"{context}: audienceShare must lie in [0, 1]")

    return Channel(
        id=str(_field(data, "id", context=context)),
        name=str(_field(data, "name", context=context)),
        region=str(_field(data, "region", context=context)),
        categories=tuple(ensure_list(_field(data, "categories", default=[]))),
        status=status,
        avg_latency_minutes=latency,
        audience_share=share,
    )


def _mapping(value: Any, name: str, context: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise RecordValidationError(f"{context}: {name} must be a mapping, got {type(value).__name__}")
    return value


def parse_engagement(data: Dict[str, Any], context: str) -> Engagement:
    data = _mapping(data, "engagement", context)
    return Engagement(
        web_views=_non_negative_int(_field(data, "webViews", "web_views", default=0), "webViews", context),
        mobile_views=_non_negative_int(
            _field(data, "mobileViews", "mobile_views", default=0), "mobileViews", context
        ),
        shares=_non_negative_int(_field(data, "shares", default=0), "shares", context),
        dwell_seconds=_non_negative_int(
            _field(data, "dwellSeconds", "dwell_seconds", default=0), "dwellSeconds", context
        ),
    )


def parse_article(data: Dict[str, Any], channels: Dict[str, Channel]) -> Article:
    context = f"article {data.get('id')!r}"
    channel_id = str(_field(data, "channelId", "channel_id", context=context))
    channel = channels.get(channel_id)
    if channel is None:
        raise RecordValidationError(f"{context}: unknown channelId {channel_id!r}")

    try:
        status = ArticleStatus.parse(_field(data, "status", context=context))
        published_at = parse_timestamp(_field(data, "publishedAt", "published_at", context=context))
    except ValueError as exc:
        if isinstance(exc, RecordValidationError):
            raise
        raise RecordValidationError(f"{context}: {exc}") from exc

    return Article(
        id=str(_field(data, "id", context=context)),
        title=str(_field(data, "title", default="")),
        teaser=str(_field(data, "teaser", default="")),
        source=str(_field(data, "source", default=channel.name)),
        region=str(_field(data, "region", default=channel.region)),
        category=str(_field(data, "category", default="")),
        channel_id=channel_id,
        status=status,
        published_at=published_at,
        company_name=str(_field(data, "companyName", "company_name", default="")),
        sector=str(_field(data, "sector", default="")),
        engagement=parse_engagement(_field(data, "engagement", default={}), context),
    )


def parse_hourly_load(raw: Sequence[Dict[str, Any]], context: str) -> Tuple[HourlySlot, ...]:
    if not isinstance(raw, (list, tuple)):
        raise RecordValidationError(f"{context}: hourlyLoad must be a list")
    if len(raw) != HOURS_PER_DAY:
        raise RecordValidationError(f"{context}: hourlyLoad must have {HOURS_PER_DAY} entries, got {len(raw)}")
    slots: List[Optional[HourlySlot]] = [None] * HOURS_PER_DAY
    for index, entry in enumerate(raw):
        entry = _mapping(entry, "hourlyLoad entry", context)
        hour = _non_negative_int(_field(entry, "hour", default=index), "hour", context)
        if hour >= HOURS_PER_DAY or slots[hour] is not None:
            raise RecordValidationError(f"{context}: invalid or repeated hour {hour}")
        slots[hour] = HourlySlot(
            hour=hour,
            success=_non_negative_int(_field(entry, "success", default=0), "success", context),
            queued=_non_negative_int(_field(entry, "queued", default=0), "queued", context),
            failed=_non_negative_int(_field(entry, "failed", default=0), "failed", context),
        )
    return tuple(slot for slot in slots if slot is not None)


def parse_schedule_job(
    data: Dict[str, Any],
    channels: Dict[str, Channel],
    resolver: ChannelResolver,
) -> ScheduleJob:
    context = f"job {data.get('id')!r}"
    channel_ref = data.get("channelId", data.get("channel_id"))
    channel_name = data.get("channel")
    channel_id = resolver.resolve(channel_ref, channel_name)
    if channel_id is None:
        raise RecordValidationError(f"{context}: cannot resolve channel {channel_ref or channel_name!r}")

    latency = _number(_field(data, "latencyMinutes", "latency_minutes", context=context), "latencyMinutes", context)
    if latency < 0:
        raise RecordValidationError(f"{context}: latencyMinutes must be non-negative")
    success_rate = _number(_field(data, "successRate", "success_rate", context=context), "successRate", context)
    if not 0 <= success_rate <= 1:
        raise RecordValidationError(f"{context}: successRate must lie in [0, 1]")

    status_raw = data.get("status")
    if status_raw is None:
        status = derive_job_status(latency)
    else:
        try:
            status = JobStatus(str(status_raw).lower())
        except ValueError as exc:
            raise RecordValidationError(f"{context}: unknown status {status_raw!r}") from exc

    try:
        job_id = int(_field(data, "id", context=context))
    except (TypeError, ValueError) as exc:
        raise RecordValidationError(f"{context}: id must be an integer") from exc

    return ScheduleJob(
        id=job_id,
        name=str(_field(data, "name", default="")),
        channel_id=channel_id,
        channel=channels[channel_id].name,
        cron=str(_field(data, "cron", default="")),
        latency_minutes=latency,
        success_rate=success_rate,
        active=bool(_field(data, "active", default=True)),
        status=status,
        hourly_load=parse_hourly_load(_field(data, "hourlyLoad", "hourly_load", context=context), context),
    )


def _ensure_unique(ids: Iterable[Any], kind: str) -> None:
    seen = set()
    for record_id in ids:
        if record_id in seen:
            raise RecordValidationError(f"duplicate {kind} id {record_id!r}")
        seen.add(record_id)


class RecordStore:
    """Immutable snapshot of channels, articles and scheduler jobs."""

    def __init__(
        self,
        channels: Sequence[Channel],
        articles: Sequence[Article] = (),
        jobs: Sequence[ScheduleJob] = (),
    ) -> None:
        _ensure_unique((channel.id for channel in channels), "channel")
        _ensure_unique((article.id for article in articles), "article")
        _ensure_unique((job.id for job in jobs), "job")

        self.channels: Tuple[Channel, ...] = tuple(channels)
        self.articles: Tuple[Article, ...] = tuple(articles)
        self.jobs: Tuple[ScheduleJob, ...] = tuple(jobs)
        self.channel_by_id: Dict[str, Channel] = {channel.id: channel for channel in self.channels}

        for article in self.articles:
            if article.channel_id not in self.channel_by_id:
                raise RecordValidationError(f"article {article.id!r}: unknown channelId {article.channel_id!r}")
        for job in self.jobs:
            if job.channel_id not in self.channel_by_id:
                raise RecordValidationError(f"job {job.id!r}: unknown channelId {job.channel_id!r}")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordStore":
        """Build a store from a document with ``channels``, ``articles`` and ``scheduler``."""
        if not isinstance(data, dict):
            raise RecordValidationError("dataset document must be a mapping")

        channels = [parse_channel(_mapping(entry, "channel", "dataset")) for entry in data.get("channels", [])]
        channel_lookup = {channel.id: channel for channel in channels}
        resolver = ChannelResolver(channels)

        articles = [
            parse_article(_mapping(entry, "article", "dataset"), channel_lookup) for entry in data.get("articles", [])
        ]
        raw_jobs = data.get("scheduler", data.get("jobs", []))
        jobs = [
            parse_schedule_job(_mapping(entry, "job", "dataset"), channel_lookup, resolver) for entry in raw_jobs
        ]

        store = cls(channels, articles, jobs)
        logger.info(
            f"Loaded {len(store.channels)} channels, {len(store.articles)} articles, {len(store.jobs)} jobs"
        )
        return store

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RecordStore":
        """Load a JSON or YAML dataset file."""
        dataset_path = Path(path)
        if not dataset_path.exists():
            raise FileNotFoundError(f"Dataset not found: {dataset_path}")
        with open(dataset_path, "r", encoding="utf-8") as handle:
            try:
                if dataset_path.suffix.lower() == ".json":
                    data = json.load(handle)
                else:
                    data = yaml.safe_load(handle) or {}
            except (json.JSONDecodeError, yaml.YAMLError) as exc:
                raise RecordValidationError(f"{dataset_path}: invalid dataset document: {exc}") from exc
        logger.info(f"Reading dataset from {dataset_path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the snapshot back to the camelCase document format."""
        return {
            "channels": [
                {
                    "id": channel.id,
                    "name": channel.name,
                    "region": channel.region,
                    "categories": list(channel.categories),
                    "status": channel.status.value,
                    "avgLatencyMinutes": channel.avg_latency_minutes,
                    "audienceShare": channel.audience_share,
                }
                for channel in self.channels
            ],
            "articles": [
                {
                    "id": article.id,
                    "title": article.title,
                    "teaser": article.teaser,
                    "source": article.source,
                    "region": article.region,
                    "category": article.category,
                    "channelId": article.channel_id,
                    "status": article.status.value,
                    "publishedAt": isoformat_utc(article.published_at),
                    "companyName": article.company_name,
                    "sector": article.sector,
                    "engagement": {
                        "webViews": article.engagement.web_views,
                        "mobileViews": article.engagement.mobile_views,
                        "shares": article.engagement.shares,
                        "dwellSeconds": article.engagement.dwell_seconds,
                    },
                }
                for article in self.articles
            ],
            "scheduler": [
                {
                    "id": job.id,
                    "name": job.name,
                    "channel": job.channel,
                    "channelId": job.channel_id,
                    "cron": job.cron,
                    "latencyMinutes": job.latency_minutes,
                    "successRate": job.success_rate,
                    "active": job.active,
                    "status": job.status.value,
                    "hourlyLoad": [
                        {"hour": slot.hour, "success": slot.success, "queued": slot.queued, "failed": slot.failed}
                        for slot in job.hourly_load
                    ],
                }
                for job in self.jobs
            ],
        }

    # ------------------------------------------------------------------
    # Filter options
    # ------------------------------------------------------------------
    @property
    def regions(self) -> List[str]:
        return list(dict.fromkeys(channel.region for channel in self.channels))

    @property
    def company_options(self) -> List[str]:
        return sorted({article.company_name for article in self.articles if article.company_name})

    @property
    def sector_options(self) -> List[str]:
        return sorted({article.sector for article in self.articles if article.sector})

    @property
    def category_options(self) -> List[str]:
        return list(dict.fromkeys(article.category for article in self.articles if article.category))

    def channel_name(self, channel_id: str) -> str:
        channel = self.channel_by_id.get(channel_id)
        return channel.name if channel else channel_id


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Validate a Spokesperson dataset file")
    parser.add_argument("path", help="JSON or YAML dataset to validate")
    args = parser.parse_args(argv)

    store = RecordStore.from_file(args.path)
    print(
        json.dumps(
            {
                "channels": len(store.channels),
                "articles": len(store.articles),
                "jobs": len(store.jobs),
                "regions": store.regions,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
