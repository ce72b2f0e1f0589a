"""Dashboard snapshot builder.

Runs the whole aggregation pipeline for one filter state against the record
store and returns plain data ready for rendering. HTML and plaintext reports
are rendered with Jinja2 templates, JSON dumps the snapshot as is, and CSV
exports the filtered article table.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import DashboardConfig
from .export import export_articles_csv
from .filters import baseline_articles, filter_articles, previous_day_count
from .formatting import (
    delta_class,
    format_date,
    format_number,
    format_relative,
    scheduler_status_pill,
    status_pill_class,
)
from .grouping import (
    aggregate_daily_trend,
    distribution_by_channel,
    sort_by_published,
    status_breakdown,
    top_ranking,
)
from .logging_config import get_logger
from .metrics import build_kpi_cards, status_segments
from .models import ArticleFilter, RankingMetric
from .parser_utils import isoformat_utc, utc_now
from .scheduler import jobs_for_channel, scheduler_hourly_metrics
from .store import RecordStore

logger = get_logger("dashboard")

Clock = Callable[[], datetime]

OUTPUT_FORMATS = ("html", "text", "csv", "json")


class DashboardBuilder:
    """Builds dashboard snapshots from a record store."""

    def __init__(
        self,
        store: RecordStore,
        config: Optional[DashboardConfig] = None,
        *,
        clock: Clock = utc_now,
        template_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        self.store = store
        self.config = config or DashboardConfig()
        self.clock = clock

        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        else:
            template_dir = Path(template_dir)

        self.template_dir = template_dir
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def default_filter(self) -> ArticleFilter:
        return ArticleFilter(range_days=self.config.default_range_days)

    def build_snapshot(
        self,
        article_filter: Optional[ArticleFilter] = None,
        metric: Union[RankingMetric, str] = RankingMetric.VIEWS,
    ) -> Dict[str, Any]:
        """Compute every dashboard widget for one filter state.

        Args:
            article_filter: Filter to apply (defaults to the configured range)
            metric: Ranking metric for the top stories widget

        Returns:
            Dictionary of plain values, safe to serialise as JSON
        """
        article_filter = article_filter or self.default_filter()
        metric = RankingMetric(metric)
        now = self.clock()
        zone = self.config.zone
        store = self.store

        filtered = filter_articles(store.articles, article_filter, now)
        baseline = baseline_articles(store.articles, article_filter, now)
        previous_day = previous_day_count(store.articles, article_filter, now, zone)
        jobs = jobs_for_channel(store.jobs, article_filter.channel_id)
        logger.debug(
            f"Snapshot for {article_filter.to_dict()}: {len(filtered)} articles, "
            f"{len(baseline)} baseline, {len(jobs)} jobs"
        )

        cards = build_kpi_cards(filtered, baseline, jobs, previous_day, article_filter.range_days, now, zone)
        recent = sort_by_published(filtered)[: self.config.recent_limit]

        return {
            "title": self.config.title,
            "generated_at": isoformat_utc(now),
            "generated_label": f"{format_date(now, zone)} ({format_relative(now, now)})",
            "filters": article_filter.to_dict(),
            "range_label": f"Last {article_filter.range_days} days",
            "metric": metric.value,
            "metric_label": metric.label,
            "article_count": len(filtered),
            "kpi_cards": [
                {
                    "key": card.key,
                    "label": card.label,
                    "value": card.value,
                    "delta": card.delta.value,
                    "delta_kind": card.delta.kind,
                    "delta_label": card.delta.label,
                    "delta_class": delta_class(card.delta.value),
                    "meta": card.meta,
                }
                for card in cards
            ],
            "segments": [
                {
                    "key": segment.key,
                    "label": segment.label,
                    "count": segment.count,
                    "share": segment.share,
                    "caption": segment.caption,
                }
                for segment in status_segments(filtered)
            ],
            "daily_trend": [
                {
                    "date": bucket.label,
                    "total": bucket.total,
                    "per_channel": {
                        store.channel_name(channel_id): count for channel_id, count in bucket.per_channel.items()
                    },
                }
                for bucket in aggregate_daily_trend(filtered)
            ],
            "channel_distribution": [
                {
                    "channel_id": share.channel_id,
                    "label": share.label,
                    "count": share.count,
                    "status": share.status.value if share.status else None,
                }
                for share in distribution_by_channel(filtered, store.channels)
            ],
            "status_breakdown": [
                {
                    "channel_id": entry.channel_id,
                    "label": entry.label,
                    "counts": entry.counts.to_dict(),
                    "total": entry.counts.total,
                }
                for entry in status_breakdown(filtered, store.channels)
            ],
            "hourly_metrics": [
                {
                    "hour": slot.hour,
                    "label": slot.label,
                    "success": slot.success,
                    "queued": slot.queued,
                    "failed": slot.failed,
                }
                for slot in scheduler_hourly_metrics(store.jobs, article_filter.channel_id)
            ],
            "schedules": [
                {
                    "id": job.id,
                    "name": job.name,
                    "channel": job.channel,
                    "cron": job.cron,
                    "latency_minutes": job.latency_minutes,
                    "success_rate": round(job.success_rate * 100, 1),
                    "status": job.status.value,
                    "pill_class": scheduler_status_pill(job.status, job.active),
                    "active": job.active,
                }
                for job in jobs
            ],
            "top_articles": [
                {
                    "label": ranked.label,
                    "value": ranked.value,
                    "display_value": format_number(ranked.value),
                    "article_id": ranked.article.id if ranked.article else None,
                }
                for ranked in top_ranking(filtered, metric, self.config.top_n)
            ],
            "recent_articles": [
                {
                    "id": article.id,
                    "title": article.title,
                    "source": article.source,
                    "company": article.company_name,
                    "sector": article.sector,
                    "region": article.region,
                    "published": format_date(article.published_at, zone),
                    "published_relative": format_relative(article.published_at, now),
                    "status": article.status.value,
                    "pill_class": status_pill_class(article.status),
                }
                for article in recent
            ],
        }

    def render_html(self, snapshot: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template("dashboard.html")
        return template.render(**snapshot)

    def render_text(self, snapshot: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template("dashboard.txt")
        return template.render(**snapshot)

    def render_csv(self, article_filter: Optional[ArticleFilter] = None) -> str:
        """Export the filtered articles, newest first."""
        article_filter = article_filter or self.default_filter()
        filtered = filter_articles(self.store.articles, article_filter, self.clock())
        return export_articles_csv(filtered, self.config.zone)

    def preview(
        self,
        article_filter: Optional[ArticleFilter] = None,
        *,
        metric: Union[RankingMetric, str] = RankingMetric.VIEWS,
        output_format: str = "html",
    ) -> str:
        """Render the dashboard in ``html``, ``text``, ``csv`` or ``json``."""
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format!r}")
        if output_format == "csv":
            return self.render_csv(article_filter)
        snapshot = self.build_snapshot(article_filter, metric)
        if output_format == "json":
            return json.dumps(snapshot, indent=2, ensure_ascii=False)
        if output_format == "text":
            return self.render_text(snapshot)
        return self.render_html(snapshot)

    def filter_options(self) -> Dict[str, List[Any]]:
        """Values offered by the dashboard filter controls."""
        return {
            "channels": [{"id": channel.id, "name": channel.name} for channel in self.store.channels],
            "categories": self.store.category_options,
            "companies": self.store.company_options,
            "sectors": self.store.sector_options,
            "regions": self.store.regions,
            "range_days": list(self.config.range_options),
        }
