"""UTC time helpers.

The control core never reads the clock itself: ``now`` is always passed in.
Only the periodic tasks and the entry point call ``utc_now``.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def floor_to_hour(value: datetime) -> datetime:
    """Truncate a timestamp to the start of its UTC hour."""
    return as_utc(value).replace(minute=0, second=0, microsecond=0)


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO 8601 timestamp into aware UTC.

    Raises:
        ValueError: If ``raw`` is not a string or not ISO 8601.
    """
    if not isinstance(raw, str):
        raise ValueError(f"timestamp must be a string, got {type(raw).__name__}")
    return as_utc(datetime.fromisoformat(raw))


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO 8601 with an explicit UTC offset."""
    return as_utc(value).isoformat()
