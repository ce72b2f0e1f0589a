"""Tests for parser utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from src.spokesperson.parser_utils import (
    ensure_list,
    isoformat_utc,
    parse_timestamp,
    resolve_timezone,
)


def test_parse_timestamp_iso8601_z():
    result = parse_timestamp("2024-01-15T08:00:00.000Z")
    assert result == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)


def test_parse_timestamp_converts_offsets_to_utc():
    result = parse_timestamp("2024-01-15T10:00:00+02:00")
    assert result == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
    assert result.utcoffset() == timedelta(0)


def test_parse_timestamp_naive_is_utc():
    result = parse_timestamp("2024-01-15 08:00:00")
    assert result == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)


def test_parse_timestamp_datetime_object():
    dt = datetime(2024, 1, 15, 8, 0)
    assert parse_timestamp(dt) == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["", "not a date", "2024-13-45"])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_timestamp(value)


def test_isoformat_utc():
    dt = datetime(2024, 1, 15, 8, 0, 5, 123456, tzinfo=timezone.utc)
    assert isoformat_utc(dt) == "2024-01-15T08:00:05.123Z"


def test_resolve_timezone():
    assert resolve_timezone(None).utcoffset(datetime(2024, 1, 1)) == timedelta(0)
    assert resolve_timezone("Asia/Tokyo").utcoffset(datetime(2024, 1, 1)) == timedelta(hours=9)
    with pytest.raises(ValueError):
        resolve_timezone("Mars/Olympus_Mons")


def test_ensure_list():
    assert ensure_list("item") == ["item"]
    assert ensure_list(["item1", "item2"]) == ["item1", "item2"]
    assert ensure_list(None) == []
