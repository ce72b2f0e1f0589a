"""Synthetic dataset generator.

Produces a plausible snapshot of channels, articles and scheduler jobs for
demos and tests. The output is a camelCase document accepted by
``RecordStore.from_dict``; pass a seed for reproducible data.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from .parser_utils import isoformat_utc
from .scheduler import derive_job_status

CHANNELS: List[Dict[str, Any]] = [
    {
        "id": "financial-times",
        "name": "Financial Times",
        "region": "United Kingdom",
        "categories": ["Climate", "Companies", "Technology"],
        "status": "active",
        "avgLatencyMinutes": 6,
        "audienceShare": 0.28,
    },
    {
        "id": "fortune",
        "name": "Fortune",
        "region": "United States",
        "categories": ["Finance", "Economy", "Leadership"],
        "status": "active",
        "avgLatencyMinutes": 12,
        "audienceShare": 0.23,
    },
    {
        "id": "bloomberg",
        "name": "Bloomberg",
        "region": "Global",
        "categories": ["Markets", "Technology", "Energy"],
        "status": "active",
        "avgLatencyMinutes": 9,
        "audienceShare": 0.19,
    },
    {
        "id": "reuters",
        "name": "Reuters",
        "region": "Global",
        "categories": ["World", "Politics", "Markets"],
        "status": "paused",
        "avgLatencyMinutes": 21,
        "audienceShare": 0.16,
    },
    {
        "id": "business-insider",
        "name": "Business Insider",
        "region": "United States",
        "categories": ["Technology", "Markets", "Lifestyle"],
        "status": "active",
        "avgLatencyMinutes": 15,
        "audienceShare": 0.14,
    },
]

COMPANIES_CATALOG = [
    ("GlobalBank plc", "Financial Services"),
    ("EcoPower Group", "Energy & Utilities"),
    ("Nordic Tech Systems", "Technology"),
    ("Continental Metals", "Industrials"),
    ("Apex Healthcare", "Healthcare"),
    ("Green Logistics", "Transportation"),
    ("Future Foods", "Consumer Staples"),
    ("Skyline Media", "Media & Entertainment"),
]

STATUSES = ["Completed", "In Queue", "Improper"]
CATEGORIES = ["Climate", "Finance", "Technology", "Companies", "Politics", "Energy", "Media"]

ARTICLE_COUNT = 120
JOB_COUNT = 12
MAX_DAYS_AGO = 58


def _hourly_load(rng: random.Random) -> List[Dict[str, int]]:
    peak_hour = rng.randint(6, 20)
    slots = []
    for hour in range(24):
        intensity = max(0, 12 - abs(hour - peak_hour))
        base_runs = max(0, round(intensity * (0.4 + rng.random())))
        failures = min(base_runs, rng.randint(0, 2))
        queued = min(base_runs - failures, rng.randint(0, 3))
        success = max(base_runs - failures - queued, 0)
        slots.append({"hour": hour, "success": success, "queued": queued, "failed": failures})
    return slots


def generate_dataset(now: datetime, seed: Optional[int] = None) -> Dict[str, Any]:
    """Generate a dataset document anchored at ``now``."""
    rng = random.Random(seed)

    articles = []
    for index in range(ARTICLE_COUNT):
        channel = rng.choice(CHANNELS)
        company, sector = rng.choice(COMPANIES_CATALOG)
        published_at = now - timedelta(days=rng.randint(0, MAX_DAYS_AGO), hours=rng.randint(0, 18))
        articles.append(
            {
                "id": f"article-{index + 1}",
                "title": f"{channel['name']} feature #{index + 1}",
                "teaser": "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
                "source": channel["name"],
                "region": channel["region"],
                "category": rng.choice(CATEGORIES),
                "channelId": channel["id"],
                "status": rng.choice(STATUSES),
                "publishedAt": isoformat_utc(published_at),
                "companyName": company,
                "sector": sector,
                "engagement": {
                    "webViews": rng.randint(2400, 11800),
                    "mobileViews": rng.randint(1200, 5600),
                    "shares": rng.randint(35, 420),
                    "dwellSeconds": rng.randint(70, 320),
                },
            }
        )

    scheduler = []
    for index in range(JOB_COUNT):
        channel = CHANNELS[index % len(CHANNELS)]
        latency = channel["avgLatencyMinutes"] + rng.randint(-4, 9)
        scheduler.append(
            {
                "id": 100 + index,
                "name": f"{channel['name']} {channel['categories'][index % len(channel['categories'])]}",
                "channel": channel["name"],
                "channelId": channel["id"],
                "cron": f"{rng.randint(0, 59)} */{rng.randint(2, 4)} * * *",
                "latencyMinutes": max(latency, 3),
                "successRate": 0.82 + rng.random() * 0.15,
                "active": index % 5 != 3,
                "status": derive_job_status(latency).value,
                "hourlyLoad": _hourly_load(rng),
            }
        )

    return {
        "channels": [dict(channel, categories=list(channel["categories"])) for channel in CHANNELS],
        "articles": articles,
        "scheduler": scheduler,
    }
