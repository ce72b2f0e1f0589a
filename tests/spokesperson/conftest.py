"""Shared fixtures for the Spokesperson dashboard tests."""

from datetime import datetime, timedelta, timezone

import pytest

from src.spokesperson.models import (
    Article,
    ArticleStatus,
    Channel,
    ChannelStatus,
    Engagement,
    HourlySlot,
    JobStatus,
    ScheduleJob,
)

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def channels():
    return [
        Channel(id="financial-times", name="Financial Times", region="United Kingdom"),
        Channel(id="fortune", name="Fortune", region="United States"),
        Channel(id="bloomberg", name="Bloomberg", region="Global"),
        Channel(id="reuters", name="Reuters", region="Global", status=ChannelStatus.PAUSED),
        Channel(id="business-insider", name="Business Insider", region="United States"),
    ]


@pytest.fixture
def make_article():
    """Factory for articles with sensible defaults, published ``days_ago`` before NOW."""
    counter = {"value": 0}

    def _make(
        channel_id="financial-times",
        days_ago=0.0,
        *,
        status=ArticleStatus.COMPLETED,
        region="United Kingdom",
        category="Climate",
        company="GlobalBank plc",
        sector="Financial Services",
        source=None,
        web_views=1000,
        mobile_views=500,
        shares=10,
        dwell_seconds=100,
        published_at=None,
        title=None,
    ):
        counter["value"] += 1
        index = counter["value"]
        return Article(
            id=f"article-{index}",
            title=title or f"Story #{index}",
            source=source or channel_id,
            region=region,
            category=category,
            channel_id=channel_id,
            status=status,
            published_at=published_at or NOW - timedelta(days=days_ago),
            company_name=company,
            sector=sector,
            engagement=Engagement(
                web_views=web_views,
                mobile_views=mobile_views,
                shares=shares,
                dwell_seconds=dwell_seconds,
            ),
        )

    return _make


@pytest.fixture
def make_job():
    """Factory for schedule jobs with a flat hourly load."""

    def _make(job_id, channel_id="financial-times", channel="Financial Times", *, success_rate=0.9, load=(1, 0, 0)):
        success, queued, failed = load
        return ScheduleJob(
            id=job_id,
            name=f"Job {job_id}",
            channel_id=channel_id,
            channel=channel,
            cron="0 */2 * * *",
            latency_minutes=10,
            success_rate=success_rate,
            active=True,
            status=JobStatus.HEALTHY,
            hourly_load=tuple(
                HourlySlot(hour=hour, success=success, queued=queued, failed=failed) for hour in range(24)
            ),
        )

    return _make
