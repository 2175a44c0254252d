from datetime import UTC, datetime, timedelta
from uuid import uuid4


def now() -> datetime:
    return datetime.now(UTC)


def days_from_now(days: int) -> datetime:
    return now() + timedelta(days=days)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes returned by drivers that drop the offset (SQLite)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def new_id() -> str:
    return str(uuid4())
