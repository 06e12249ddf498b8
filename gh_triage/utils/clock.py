"""Elapsed-time helpers used for threshold comparisons."""

from datetime import datetime, timezone

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
DAYS_PER_MONTH = 30


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(timestamp: datetime) -> datetime:
    """Return an aware datetime, treating naive values as UTC.

    Older PyGitHub releases return naive UTC timestamps while newer ones
    return aware ones; comparisons must not mix the two.
    """
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def elapsed_seconds(since: datetime, now: datetime | None = None) -> float:
    now = ensure_utc(now) if now is not None else utc_now()
    return (now - ensure_utc(since)).total_seconds()


def elapsed_hours(since: datetime, now: datetime | None = None) -> float:
    return elapsed_seconds(since, now) / SECONDS_PER_HOUR


def elapsed_days(since: datetime, now: datetime | None = None) -> float:
    return elapsed_seconds(since, now) / SECONDS_PER_DAY


def elapsed_months(since: datetime, now: datetime | None = None) -> float:
    """Elapsed time in 30 day months."""
    return elapsed_days(since, now) / DAYS_PER_MONTH


def parse_timestamp(date_str: str) -> datetime:
    """Parse a date or datetime string into an aware UTC datetime.

    Supports:
    - ISO dates: 2024-01-01
    - ISO datetimes: 2024-01-01T10:00:00Z, 2024-01-01T10:00:00

    Raises:
        ValueError: If the format is not recognized
    """
    formats = [
        "%Y-%m-%d",  # 2024-01-01
        "%Y-%m-%dT%H:%M:%SZ",  # 2024-01-01T10:00:00Z
        "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T10:00:00
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ"
    )
