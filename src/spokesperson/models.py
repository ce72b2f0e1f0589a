"""Data models for the Spokesperson monitoring dashboard.

Records supplied by the record store are frozen dataclasses; aggregation
results are small dataclasses with fixed fields so the presentation side never
has to guess at dictionary keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Tuple

ALL = "all"
NO_DATA_LABEL = "No data"
HOURS_PER_DAY = 24


class ChannelStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"


class ArticleStatus(str, Enum):
    COMPLETED = "Completed"
    IN_QUEUE = "In Queue"
    IMPROPER = "Improper"

    @classmethod
    def parse(cls, value: str) -> "ArticleStatus":
        """Accept both the display value and the compact ``InQueue`` form."""
        normalized = str(value).replace(" ", "").replace("_", "").lower()
        for member in cls:
            if member.value.replace(" ", "").lower() == normalized:
                return member
        raise ValueError(f"Unknown article status: {value!r}")


class JobStatus(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class RankingMetric(str, Enum):
    VIEWS = "views"
    SHARES = "shares"

    @property
    def label(self) -> str:
        return "Shares" if self is RankingMetric.SHARES else "Total Views"


@dataclass(frozen=True)
class Channel:
    """Publication source reference data."""

    id: str
    name: str
    region: str
    categories: Tuple[str, ...] = ()
    status: ChannelStatus = ChannelStatus.ACTIVE
    avg_latency_minutes: float = 1.0
    audience_share: float = 0.0


@dataclass(frozen=True)
class Engagement:
    web_views: int = 0
    mobile_views: int = 0
    shares: int = 0
    dwell_seconds: int = 0

    @property
    def total_views(self) -> int:
        return self.web_views + self.mobile_views


@dataclass(frozen=True)
class Article:
    """A single published item attributed to a channel."""

    id: str
    title: str
    source: str
    region: str
    category: str
    channel_id: str
    status: ArticleStatus
    published_at: datetime
    company_name: str
    sector: str
    engagement: Engagement = field(default_factory=Engagement)
    teaser: str = ""


@dataclass(frozen=True)
class HourlySlot:
    hour: int
    success: int = 0
    queued: int = 0
    failed: int = 0


@dataclass(frozen=True)
class ScheduleJob:
    """Recurring ingestion job tied to a channel.

    ``channel_id`` is always the canonical channel id; ``channel`` keeps the
    display name the job was registered with.
    """

    id: int
    name: str
    channel_id: str
    channel: str
    cron: str
    latency_minutes: float
    success_rate: float
    active: bool
    status: JobStatus
    hourly_load: Tuple[HourlySlot, ...]


@dataclass(frozen=True)
class ArticleFilter:
    """Criteria applied to the article collection."""

    channel_id: str = ALL
    category: Optional[str] = ALL
    company: Optional[str] = ALL
    sector: Optional[str] = ALL
    region: str = ALL
    range_days: int = 30

    def __post_init__(self) -> None:
        if int(self.range_days) <= 0:
            raise ValueError(f"range_days must be positive, got {self.range_days}")

    def to_dict(self) -> Dict[str, object]:
        return {
            "channel_id": self.channel_id,
            "category": self.category,
            "company": self.company,
            "sector": self.sector,
            "region": self.region,
            "range_days": self.range_days,
        }


@dataclass(frozen=True)
class StatusCounts:
    completed: int = 0
    in_queue: int = 0
    improper: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.in_queue + self.improper

    def get(self, status: ArticleStatus) -> int:
        if status is ArticleStatus.COMPLETED:
            return self.completed
        if status is ArticleStatus.IN_QUEUE:
            return self.in_queue
        return self.improper

    def incremented(self, status: ArticleStatus) -> "StatusCounts":
        return StatusCounts(
            completed=self.completed + (status is ArticleStatus.COMPLETED),
            in_queue=self.in_queue + (status is ArticleStatus.IN_QUEUE),
            improper=self.improper + (status is ArticleStatus.IMPROPER),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            ArticleStatus.COMPLETED.value: self.completed,
            ArticleStatus.IN_QUEUE.value: self.in_queue,
            ArticleStatus.IMPROPER.value: self.improper,
        }


@dataclass(frozen=True)
class KpiSummary:
    published_today: int
    total_articles: int
    active_channels: int
    average_dwell: float
    success_rate: float


@dataclass(frozen=True)
class Delta:
    """Comparison of a KPI against its baseline period.

    ``kind`` is ``change`` when a percentage could be computed, ``new`` when the
    baseline was zero but the current value is not, and ``no_prior_data`` when
    both are zero.
    """

    kind: str
    value: Optional[float] = None

    CHANGE = "change"
    NEW = "new"
    NO_PRIOR_DATA = "no_prior_data"

    @property
    def label(self) -> str:
        if self.kind == self.NEW:
            return "new"
        if self.kind == self.NO_PRIOR_DATA:
            return "no prior data"
        sign = "+" if self.value and self.value > 0 else ""
        return f"{sign}{self.value:.1f}% vs prev"


@dataclass(frozen=True)
class KpiCard:
    key: str
    label: str
    value: str
    delta: Delta
    meta: str


@dataclass(frozen=True)
class StatusSegment:
    key: str
    label: str
    count: int
    share: float
    caption: str


@dataclass(frozen=True)
class TrendBucket:
    label: str
    day: Optional[date]
    total: int
    per_channel: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ChannelShare:
    channel_id: str
    label: str
    count: int
    status: Optional[ChannelStatus]


@dataclass(frozen=True)
class StatusBreakdownEntry:
    channel_id: str
    label: str
    counts: StatusCounts


@dataclass(frozen=True)
class RankedArticle:
    label: str
    value: int
    article: Optional[Article] = None


@dataclass(frozen=True)
class HourlyMetric:
    hour: int
    success: int = 0
    queued: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.success + self.queued + self.failed

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:00"
