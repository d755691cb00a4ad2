"""Clock helpers. Every timestamp the engine records is timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_timestamp() -> str:
    """ISO-8601 string stamped on every ApiResponse envelope."""
    return utc_now().isoformat()
