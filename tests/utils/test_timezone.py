"""Tests for timezone utilities."""

from datetime import datetime, timedelta, timezone

from neo_resumable.utils import ensure_utc, seconds_between, to_utc_string, utc_now


def test_utc_now_is_aware():
    assert utc_now().tzinfo == timezone.utc


def test_ensure_utc():
    naive = datetime(2024, 1, 15, 10, 30)
    offset = datetime(2024, 1, 15, 12, 30, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_utc(naive) == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert ensure_utc(offset).hour == 10


def test_to_utc_string():
    assert to_utc_string(datetime(2024, 1, 15, 10, 30, 45)) == "2024-01-15T10:30:45Z"


def test_seconds_between():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert seconds_between(start, start + timedelta(minutes=2)) == 120
    assert seconds_between(utc_now() - timedelta(seconds=5)) >= 5
