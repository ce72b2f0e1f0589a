"""Grouping and bucketing of filtered articles.

Each grouping returns a single zero-valued ``"No data"`` placeholder entry
when the filtered set is empty, so chart consumers always receive at least
one bucket.
"""

from __future__ import annotations

from datetime import date, timezone
from typing import Dict, List, Optional, Sequence, Union

from .models import (
    NO_DATA_LABEL,
    Article,
    Channel,
    ChannelShare,
    RankedArticle,
    RankingMetric,
    StatusBreakdownEntry,
    StatusCounts,
    TrendBucket,
)

DEFAULT_TOP_N = 5
NO_DATA_KEY = "no-data"


def aggregate_daily_trend(articles: Sequence[Article]) -> List[TrendBucket]:
    """Bucket articles by UTC publish date, oldest first.

    Dates without articles are omitted.
    """
    if not articles:
        return [TrendBucket(label=NO_DATA_LABEL, day=None, total=0)]

    buckets: Dict[date, Dict[str, int]] = {}
    for article in articles:
        day = article.published_at.astimezone(timezone.utc).date()
        per_channel = buckets.setdefault(day, {})
        per_channel[article.channel_id] = per_channel.get(article.channel_id, 0) + 1

    return [
        TrendBucket(
            label=day.isoformat(),
            day=day,
            total=sum(per_channel.values()),
            per_channel=per_channel,
        )
        for day, per_channel in sorted(buckets.items())
    ]


def distribution_by_channel(
    articles: Sequence[Article],
    channels: Sequence[Channel],
) -> List[ChannelShare]:
    """Article count for every known channel, in registration order."""
    if not articles or not channels:
        return [ChannelShare(channel_id=NO_DATA_KEY, label=NO_DATA_LABEL, count=0, status=None)]

    counts: Dict[str, int] = {}
    for article in articles:
        counts[article.channel_id] = counts.get(article.channel_id, 0) + 1

    return [
        ChannelShare(
            channel_id=channel.id,
            label=channel.name,
            count=counts.get(channel.id, 0),
            status=channel.status,
        )
        for channel in channels
    ]


def status_breakdown(
    articles: Sequence[Article],
    channels: Optional[Sequence[Channel]] = None,
) -> List[StatusBreakdownEntry]:
    """Status tallies per represented channel, in first-seen order."""
    if not articles:
        return [StatusBreakdownEntry(channel_id=NO_DATA_KEY, label=NO_DATA_LABEL, counts=StatusCounts())]

    names = {channel.id: channel.name for channel in channels or ()}
    grouped: Dict[str, StatusCounts] = {}
    for article in articles:
        current = grouped.get(article.channel_id, StatusCounts())
        grouped[article.channel_id] = current.incremented(article.status)

    return [
        StatusBreakdownEntry(channel_id=channel_id, label=names.get(channel_id, channel_id), counts=counts)
        for channel_id, counts in grouped.items()
    ]


def metric_value(article: Article, metric: RankingMetric) -> int:
    if metric is RankingMetric.SHARES:
        return article.engagement.shares
    return article.engagement.total_views


def top_ranking(
    articles: Sequence[Article],
    metric: Union[RankingMetric, str] = RankingMetric.VIEWS,
    n: int = DEFAULT_TOP_N,
) -> List[RankedArticle]:
    """The ``n`` articles with the highest metric, ties kept in input order."""
    metric = RankingMetric(metric)
    if not articles:
        return [RankedArticle(label=NO_DATA_LABEL, value=0)]

    ranked = sorted(articles, key=lambda article: metric_value(article, metric), reverse=True)
    return [
        RankedArticle(label=article.title, value=metric_value(article, metric), article=article)
        for article in ranked[: max(n, 0)]
    ]


def sort_by_published(articles: Sequence[Article]) -> List[Article]:
    """Newest first."""
    return sorted(articles, key=lambda article: article.published_at, reverse=True)
