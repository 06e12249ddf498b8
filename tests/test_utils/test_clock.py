"""Tests for elapsed-time helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from gh_triage.utils.clock import (
    elapsed_days,
    elapsed_hours,
    elapsed_months,
    ensure_utc,
    parse_timestamp,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestElapsed:
    """Test elapsed time conversions."""

    def test_elapsed_hours(self) -> None:
        assert elapsed_hours(NOW - timedelta(hours=5), NOW) == pytest.approx(5)

    def test_elapsed_days(self) -> None:
        assert elapsed_days(NOW - timedelta(days=14, hours=12), NOW) == pytest.approx(
            14.5
        )

    def test_elapsed_months_uses_thirty_day_months(self) -> None:
        assert elapsed_months(NOW - timedelta(days=45), NOW) == pytest.approx(1.5)

    def test_naive_timestamps_are_treated_as_utc(self) -> None:
        naive = datetime(2024, 5, 31, 12, 0, 0)
        assert elapsed_days(naive, NOW) == pytest.approx(1)

    def test_other_timezones_are_converted(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        since = datetime(2024, 6, 1, 12, 0, 0, tzinfo=plus_two)
        assert elapsed_hours(since, NOW) == pytest.approx(2)

    def test_ensure_utc_keeps_instant(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2024, 6, 1, 14, 0, 0, tzinfo=plus_two)
        assert ensure_utc(value) == NOW
        assert ensure_utc(value).tzinfo == timezone.utc


class TestParseTimestamp:
    """Test date input parsing."""

    def test_parse_iso_date(self) -> None:
        assert parse_timestamp("2024-01-15") == datetime(
            2024, 1, 15, tzinfo=timezone.utc
        )

    def test_parse_iso_datetime(self) -> None:
        assert parse_timestamp("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc
        )

    def test_invalid_date_format(self) -> None:
        with pytest.raises(ValueError, match="Unable to parse date"):
            parse_timestamp("January 15")
