from datetime import date, datetime, timezone
from typing import Any, Union

# Fixed width so that lexical order of stored values equals chronological order
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be server local time, like the month boundaries."""
    return value.astimezone(timezone.utc)


def date_only_as_utc(value: Any) -> Any:
    """A bare YYYY-MM-DD string means midnight UTC of that day."""
    if isinstance(value, str) and len(value) == 10:
        try:
            day = date.fromisoformat(value)
        except ValueError:
            return value
        return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return value


def format_timestamp(value: datetime) -> str:
    return as_utc(value).strftime(TIMESTAMP_FORMAT)


def encode_value(value: Any) -> Any:
    """Encode a Python value the way the stores persist it."""
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse a stored timestamp into an aware UTC datetime."""
    if isinstance(value, datetime):
        return as_utc(value)
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    return as_utc(datetime.fromisoformat(text))
