"""Tests for the article filter engine."""

from datetime import timedelta

import pytest

from src.spokesperson.filters import baseline_articles, filter_articles, previous_day_count
from src.spokesperson.models import ArticleFilter


def test_range_excludes_old_articles(make_article, now):
    """Only articles inside the window survive a channel-agnostic filter."""
    recent = make_article("a", days_ago=0)
    stale = make_article("b", days_ago=40)

    result = filter_articles([recent, stale], ArticleFilter(range_days=30), now)

    assert result == [recent]


def test_channel_filter_keeps_only_matching_channel(make_article, now):
    articles = [make_article("a"), make_article("b"), make_article("a", days_ago=3)]

    result = filter_articles(articles, ArticleFilter(channel_id="a"), now)

    assert len(result) == 2
    assert all(article.channel_id == "a" for article in result)


def test_filter_preserves_input_order(make_article, now):
    articles = [make_article(days_ago=5), make_article(days_ago=1), make_article(days_ago=3)]

    assert filter_articles(articles, ArticleFilter(), now) == articles


def test_filter_is_idempotent(make_article, now):
    articles = [
        make_article("a", days_ago=2, company="Apex Healthcare"),
        make_article("b", days_ago=8, company="Apex Healthcare"),
        make_article("a", days_ago=12, company="Future Foods"),
        make_article("a", days_ago=45, company="Apex Healthcare"),
    ]
    article_filter = ArticleFilter(channel_id="a", company="Apex Healthcare", range_days=30)

    once = filter_articles(articles, article_filter, now)
    twice = filter_articles(once, article_filter, now)

    assert once == twice


@pytest.mark.parametrize(
    "field, value, kwargs",
    [
        ("region", "Global", {"region": "Global"}),
        ("company", "Future Foods", {"company": "Future Foods"}),
        ("sector", "Healthcare", {"sector": "Healthcare"}),
        ("category", "Energy", {"category": "Energy"}),
    ],
)
def test_attribute_filters(make_article, now, field, value, kwargs):
    matching = make_article(**kwargs)
    other = make_article()

    result = filter_articles([matching, other], ArticleFilter(**{field: value}), now)

    assert result == [matching]


def test_none_and_all_are_wildcards(make_article, now):
    articles = [make_article(company="A"), make_article(company="B")]

    assert filter_articles(articles, ArticleFilter(company=None, sector=None, category=None), now) == articles
    assert filter_articles(articles, ArticleFilter(company="all"), now) == articles


def test_unknown_channel_yields_empty_result(make_article, now):
    articles = [make_article("a"), make_article("b")]

    assert filter_articles(articles, ArticleFilter(channel_id="missing"), now) == []


def test_empty_input_is_not_an_error(now):
    assert filter_articles([], ArticleFilter(), now) == []


def test_window_boundary_is_inclusive_at_minute_precision(make_article, now):
    """An article exactly range_days old, or less than a minute older, is still included."""
    exact = make_article(published_at=now - timedelta(days=30))
    within_minute = make_article(published_at=now - timedelta(days=30, seconds=30))
    past_minute = make_article(published_at=now - timedelta(days=30, seconds=61))

    result = filter_articles([exact, within_minute, past_minute], ArticleFilter(range_days=30), now)

    assert result == [exact, within_minute]


def test_future_articles_are_included(make_article, now):
    upcoming = make_article(published_at=now + timedelta(hours=2))

    assert filter_articles([upcoming], ArticleFilter(range_days=7), now) == [upcoming]


def test_range_days_must_be_positive():
    with pytest.raises(ValueError):
        ArticleFilter(range_days=0)


def test_baseline_is_preceding_window_of_equal_length(make_article, now):
    current = make_article(days_ago=3)
    boundary = make_article(days_ago=7)
    inside = make_article(days_ago=10)
    edge = make_article(days_ago=14)
    too_old = make_article(days_ago=20)

    result = baseline_articles([current, boundary, inside, edge, too_old], ArticleFilter(range_days=7), now)

    assert result == [boundary, inside]


def test_baseline_respects_attribute_filters(make_article, now):
    match = make_article("a", days_ago=40)
    other = make_article("b", days_ago=40)

    result = baseline_articles([match, other], ArticleFilter(channel_id="a", range_days=30), now)

    assert result == [match]


def test_previous_day_count(make_article, now):
    yesterday_morning = make_article("a", published_at=now.replace(hour=1) - timedelta(days=1))
    yesterday_late = make_article("a", published_at=now.replace(hour=23) - timedelta(days=1))
    today = make_article("a", published_at=now)
    other_channel = make_article("b", published_at=now - timedelta(days=1))

    articles = [yesterday_morning, yesterday_late, today, other_channel]

    assert previous_day_count(articles, ArticleFilter(), now) == 3
    assert previous_day_count(articles, ArticleFilter(channel_id="a"), now) == 2
