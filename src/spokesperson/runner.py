"""Spokesperson dashboard command line runner.

Loads a dataset (or generates a seeded mock one), applies the filter given on
the command line and writes the dashboard in the requested format.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import DashboardConfig
from .dashboard import OUTPUT_FORMATS, DashboardBuilder
from .logging_config import get_logger, setup_logging
from .mock_data import generate_dataset
from .models import ALL, ArticleFilter, RankingMetric
from .parser_utils import utc_now
from .store import RecordStore

logger = get_logger("runner")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render the Spokesperson monitoring dashboard")
    parser.add_argument("--data", help="JSON or YAML dataset file (defaults to generated mock data)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated mock data")
    parser.add_argument("--config", help="Path to dashboard YAML configuration")
    parser.add_argument("--channel", default=ALL, help="Channel id to filter on")
    parser.add_argument("--category", default=ALL, help="Category to filter on")
    parser.add_argument("--company", default=ALL, help="Company to filter on")
    parser.add_argument("--sector", default=ALL, help="Sector to filter on")
    parser.add_argument("--region", default=ALL, help="Region to filter on")
    parser.add_argument("--range-days", type=int, default=None, help="Window size in days")
    parser.add_argument(
        "--metric",
        choices=[metric.value for metric in RankingMetric],
        default=RankingMetric.VIEWS.value,
        help="Ranking metric for top stories",
    )
    parser.add_argument("--format", choices=list(OUTPUT_FORMATS), default="text", help="Output format")
    parser.add_argument("--output", "-o", help="Output file path (defaults to stdout)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def load_store(data_path: Optional[str], seed: Optional[int]) -> RecordStore:
    if data_path:
        return RecordStore.from_file(data_path)
    logger.info(f"Generating mock dataset (seed={seed})")
    return RecordStore.from_dict(generate_dataset(utc_now(), seed=seed))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = getattr(logging, str(args.log_level).upper(), logging.WARNING)
    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(log_file=log_file, level=level, file_output=log_file is not None)

    try:
        config = DashboardConfig.from_env(DashboardConfig.from_file(args.config))
        store = load_store(args.data, args.seed)
        article_filter = ArticleFilter(
            channel_id=args.channel,
            category=args.category,
            company=args.company,
            sector=args.sector,
            region=args.region,
            range_days=args.range_days or config.default_range_days,
        )
        builder = DashboardBuilder(store, config)
        content = builder.preview(article_filter, metric=args.metric, output_format=args.format)
    except (OSError, ValueError) as exc:
        logger.error(f"Error rendering dashboard: {exc}")
        print(f"Error rendering dashboard: {exc}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(content, encoding="utf-8")
        print(f"Dashboard written to {output_path}", file=sys.stderr)
    else:
        print(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
