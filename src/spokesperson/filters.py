"""Article filter engine.

All functions are pure and preserve the relative order of their input. The
time window is measured backward from an explicit ``now`` so callers control
the clock.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import List, Optional, Sequence

from .models import ALL, Article, ArticleFilter

SECONDS_PER_DAY = 24 * 60 * 60


def _is_wildcard(value: Optional[str]) -> bool:
    return value is None or value == ALL


def matches_attributes(article: Article, article_filter: ArticleFilter) -> bool:
    """Check every predicate except the time window."""
    if article_filter.channel_id != ALL and article.channel_id != article_filter.channel_id:
        return False
    if article_filter.region != ALL and article.region != article_filter.region:
        return False
    if not _is_wildcard(article_filter.company) and article.company_name != article_filter.company:
        return False
    if not _is_wildcard(article_filter.sector) and article.sector != article_filter.sector:
        return False
    if not _is_wildcard(article_filter.category) and article.category != article_filter.category:
        return False
    return True


def within_range(article: Article, range_days: int, now: datetime) -> bool:
    """True when the article was published at most ``range_days`` before ``now``.

    The comparison works in whole minutes truncated toward zero, so an article
    published less than a minute before the cutoff still counts.
    """
    cutoff = now - timedelta(days=range_days)
    minutes = int((article.published_at - cutoff).total_seconds() / 60)
    return minutes >= 0


def filter_articles(
    articles: Sequence[Article],
    article_filter: ArticleFilter,
    now: datetime,
) -> List[Article]:
    """Return the articles matching ``article_filter`` in their input order."""
    return [
        article
        for article in articles
        if matches_attributes(article, article_filter) and within_range(article, article_filter.range_days, now)
    ]


def baseline_articles(
    articles: Sequence[Article],
    article_filter: ArticleFilter,
    now: datetime,
) -> List[Article]:
    """Articles of the equal-length window immediately preceding the current one.

    The window covers ages in ``[range_days, 2 * range_days)`` days.
    """
    range_days = article_filter.range_days
    widened = filter_articles(articles, replace(article_filter, range_days=range_days * 2), now)
    baseline: List[Article] = []
    for article in widened:
        age_days = (now - article.published_at).total_seconds() / SECONDS_PER_DAY
        if range_days <= age_days < range_days * 2:
            baseline.append(article)
    return baseline


def local_day(moment: datetime, zone: Optional[tzinfo] = None) -> date:
    """Calendar date of ``moment`` in ``zone`` (UTC by default)."""
    return moment.astimezone(zone or timezone.utc).date()


def previous_day_count(
    articles: Sequence[Article],
    article_filter: ArticleFilter,
    now: datetime,
    zone: Optional[tzinfo] = None,
) -> int:
    """Count articles from the calendar day before ``now`` that match the filter attributes."""
    yesterday = local_day(now, zone) - timedelta(days=1)
    return sum(
        1
        for article in articles
        if local_day(article.published_at, zone) == yesterday and matches_attributes(article, article_filter)
    )
