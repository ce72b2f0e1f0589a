"""Configuration loader for the Spokesperson dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .parser_utils import resolve_timezone

DEFAULT_RANGE_OPTIONS = [7, 30, 90, 365]


@dataclass
class DashboardConfig:
    """Settings shared by the snapshot builder and the command line runner."""

    title: str = "Spokesperson Monitoring Dashboard"
    default_range_days: int = 30
    range_options: List[int] = field(default_factory=lambda: list(DEFAULT_RANGE_OPTIONS))
    top_n: int = 5
    recent_limit: int = 12
    timezone: str = "UTC"

    DEFAULT_CONFIG_PATH = Path("config/spokesperson.yaml")

    def __post_init__(self) -> None:
        self.range_options = [int(value) for value in self.range_options]
        if any(value <= 0 for value in self.range_options):
            raise ValueError("range_options must contain positive day counts")
        if self.default_range_days <= 0:
            raise ValueError("default_range_days must be positive")
        if self.top_n < 0 or self.recent_limit < 0:
            raise ValueError("top_n and recent_limit must be non-negative")
        # fail early on an unknown timezone name
        resolve_timezone(self.timezone)

    @property
    def zone(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardConfig":
        settings = data.get("dashboard", data) or {}
        defaults = cls()
        return cls(
            title=settings.get("title", defaults.title),
            default_range_days=int(settings.get("default_range_days", defaults.default_range_days)),
            range_options=settings.get("range_options", defaults.range_options),
            top_n=int(settings.get("top_n", defaults.top_n)),
            recent_limit=int(settings.get("recent_limit", defaults.recent_limit)),
            timezone=settings.get("timezone", defaults.timezone),
        )

    @classmethod
    def from_file(cls, config_path: Optional[Path | str] = None) -> "DashboardConfig":
        """Load configuration from YAML; a missing file yields the defaults."""
        path = Path(config_path) if config_path else cls.DEFAULT_CONFIG_PATH
        if not path.is_absolute():
            path = Path.cwd() / path
        if not path.exists():
            return cls()
        with open(path, "r", encoding="utf-8") as handle:
            return cls.from_dict(yaml.safe_load(handle) or {})

    @classmethod
    def from_env(cls, base: Optional["DashboardConfig"] = None) -> "DashboardConfig":
        """Overlay ``SPOKESPERSON_*`` environment variables on ``base``."""
        base = base or cls()
        options_raw = os.environ.get("SPOKESPERSON_RANGE_OPTIONS")
        if options_raw:
            range_options = [int(part.strip()) for part in options_raw.split(",") if part.strip()]
        else:
            range_options = list(base.range_options)

        return cls(
            title=os.environ.get("SPOKESPERSON_TITLE", base.title),
            default_range_days=int(os.environ.get("SPOKESPERSON_RANGE_DAYS", base.default_range_days)),
            range_options=range_options,
            top_n=int(os.environ.get("SPOKESPERSON_TOP_N", base.top_n)),
            recent_limit=int(os.environ.get("SPOKESPERSON_RECENT_LIMIT", base.recent_limit)),
            timezone=os.environ.get("SPOKESPERSON_TIMEZONE", base.timezone),
        )
