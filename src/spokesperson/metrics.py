"""KPI aggregation and baseline comparison.

Scalar metrics are computed over an already filtered article set. Averages
floor their denominator at one so empty inputs degrade to zero instead of
raising.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from .filters import local_day
from .formatting import format_number
from .models import (
    Article,
    ArticleStatus,
    Delta,
    KpiCard,
    KpiSummary,
    ScheduleJob,
    StatusSegment,
)


def count_publications(articles: Sequence[Article]) -> int:
    """Number of distinct channels represented in ``articles``."""
    return len({article.channel_id for article in articles})


def count_configured_pages(articles: Sequence[Article]) -> int:
    """Number of distinct source pages represented in ``articles``."""
    return len({article.source for article in articles})


def calculate_kpis(
    articles: Sequence[Article],
    jobs: Sequence[ScheduleJob],
    now: datetime,
    zone: Optional[tzinfo] = None,
) -> KpiSummary:
    """Compute the headline KPIs.

    Args:
        articles: Filtered article set
        jobs: Scheduler jobs whose success rate is averaged
        now: Evaluation time, used for ``published_today``
        zone: Reference timezone for calendar days (UTC by default)

    Returns:
        KpiSummary with counts and averages
    """
    today = local_day(now, zone)
    total_articles = len(articles)
    published_today = sum(1 for article in articles if local_day(article.published_at, zone) == today)
    dwell_total = sum(article.engagement.dwell_seconds for article in articles)
    success_total = sum(job.success_rate for job in jobs)

    return KpiSummary(
        published_today=published_today,
        total_articles=total_articles,
        active_channels=count_publications(articles),
        average_dwell=dwell_total / max(total_articles, 1),
        success_rate=success_total / max(len(jobs), 1),
    )


def calc_delta(current: float, previous: float) -> Delta:
    """Percentage change of ``current`` against ``previous``, to one decimal."""
    if previous == 0:
        if current == 0:
            return Delta(kind=Delta.NO_PRIOR_DATA)
        return Delta(kind=Delta.NEW)
    percentage = (current - previous) / previous * 100
    # adding 0.0 turns a rounded -0.0 into 0.0
    return Delta(kind=Delta.CHANGE, value=round(percentage, 1) + 0.0)


def build_kpi_cards(
    current: Sequence[Article],
    baseline: Sequence[Article],
    jobs: Sequence[ScheduleJob],
    previous_day: int,
    range_days: int,
    now: datetime,
    zone: Optional[tzinfo] = None,
) -> List[KpiCard]:
    """Assemble the dashboard KPI cards with deltas against the baseline window."""
    current_kpis = calculate_kpis(current, jobs, now, zone)
    baseline_kpis = calculate_kpis(baseline, jobs, now, zone)
    publications = count_publications(current)
    configured_pages = count_configured_pages(current)

    return [
        KpiCard(
            key="totalArticles",
            label="Total Articles",
            value=format_number(current_kpis.total_articles),
            delta=calc_delta(current_kpis.total_articles, baseline_kpis.total_articles),
            meta=f"{range_days}-day window",
        ),
        KpiCard(
            key="publications",
            label="Active Publications",
            value=format_number(publications),
            delta=calc_delta(publications, count_publications(baseline)),
            meta="Unique feeds",
        ),
        KpiCard(
            key="configuredPages",
            label="Total Configured Pages",
            value=format_number(configured_pages),
            delta=calc_delta(configured_pages, count_configured_pages(baseline)),
            meta="Distinct source pages",
        ),
        KpiCard(
            key="completedToday",
            label="Completed Today",
            value=format_number(current_kpis.published_today),
            delta=calc_delta(current_kpis.published_today, previous_day),
            meta="vs previous day",
        ),
        KpiCard(
            key="activeChannels",
            label="Active Channels",
            value=format_number(current_kpis.active_channels),
            delta=calc_delta(current_kpis.active_channels, baseline_kpis.active_channels),
            meta="Unique sources",
        ),
        KpiCard(
            key="averageDwell",
            label="Avg Dwell Time",
            value=f"{round(current_kpis.average_dwell)}s",
            delta=calc_delta(current_kpis.average_dwell, baseline_kpis.average_dwell),
            meta="Reader engagement",
        ),
        KpiCard(
            key="successRate",
            label="Scheduler Success",
            value=f"{current_kpis.success_rate * 100:.1f}%",
            delta=calc_delta(current_kpis.success_rate, baseline_kpis.success_rate),
            meta="Execution reliability",
        ),
    ]


_SEGMENTS = (
    ("completed", ArticleStatus.COMPLETED, "Completed Articles", "Processed successfully"),
    ("queue", ArticleStatus.IN_QUEUE, "Articles In Queue", "Awaiting processing"),
    ("improper", ArticleStatus.IMPROPER, "Improper Articles", "Needs remediation"),
)


def status_segments(articles: Sequence[Article]) -> List[StatusSegment]:
    """Per-status counts with their share of the filtered set, in percent."""
    if not articles:
        return []
    total = len(articles)
    segments: List[StatusSegment] = []
    for key, status, label, caption in _SEGMENTS:
        count = sum(1 for article in articles if article.status is status)
        segments.append(
            StatusSegment(
                key=key,
                label=label,
                count=count,
                share=round(count / total * 100, 1),
                caption=caption,
            )
        )
    return segments
