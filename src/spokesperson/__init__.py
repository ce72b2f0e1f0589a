"""Spokesperson monitoring dashboard package namespace."""

from importlib import import_module
from typing import Any

__all__ = [
    "RecordStore",
    "RecordValidationError",
    "ArticleFilter",
    "DashboardBuilder",
    "DashboardConfig",
    "filter_articles",
    "calculate_kpis",
    "calc_delta",
    "aggregate_daily_trend",
    "distribution_by_channel",
    "status_breakdown",
    "top_ranking",
    "scheduler_hourly_metrics",
    "build_csv",
]

_EXPORTS = {
    "RecordStore": "store",
    "RecordValidationError": "store",
    "ArticleFilter": "models",
    "DashboardBuilder": "dashboard",
    "DashboardConfig": "config",
    "filter_articles": "filters",
    "calculate_kpis": "metrics",
    "calc_delta": "metrics",
    "aggregate_daily_trend": "grouping",
    "distribution_by_channel": "grouping",
    "status_breakdown": "grouping",
    "top_ranking": "grouping",
    "scheduler_hourly_metrics": "scheduler",
    "build_csv": "export",
}


def __getattr__(name: str) -> Any:
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(f"{__name__}.{module_name}")
    return getattr(module, name)


def __dir__() -> list[str]:
    return sorted(__all__)
