"""CSV export of dashboard rows."""

from __future__ import annotations

import csv
import io
from datetime import tzinfo
from typing import Any, Iterable, List, Optional, Sequence

from .formatting import format_date
from .grouping import sort_by_published
from .models import Article

ARTICLE_EXPORT_HEADER = ["Title", "Source", "Company", "Sector", "Region", "Published", "Status"]
LINE_TERMINATOR = "\n"


def build_csv(rows: Iterable[Sequence[Any]], header: Optional[Sequence[str]] = None) -> str:
    """Serialise rows as comma separated text.

    Fields containing a comma, a quote or a newline are quoted, with embedded
    quotes doubled. ``None`` becomes an empty field. Rows are separated by a
    newline and the output carries no trailing terminator.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator=LINE_TERMINATOR)
    if header is not None:
        writer.writerow(header)
    for row in rows:
        writer.writerow(row)
    content = output.getvalue()
    if content.endswith(LINE_TERMINATOR):
        content = content[: -len(LINE_TERMINATOR)]
    return content


def article_export_rows(articles: Sequence[Article], zone: Optional[tzinfo] = None) -> List[List[str]]:
    """Export rows for the article table, newest first."""
    return [
        [
            article.title,
            article.source,
            article.company_name,
            article.sector,
            article.region,
            format_date(article.published_at, zone),
            article.status.value,
        ]
        for article in sort_by_published(articles)
    ]


def export_articles_csv(articles: Sequence[Article], zone: Optional[tzinfo] = None) -> str:
    return build_csv(article_export_rows(articles, zone), header=ARTICLE_EXPORT_HEADER)
