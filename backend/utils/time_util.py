"""
Time helpers shared by models and services.

All instants are kept as naive UTC datetimes (the way SQLite hands them back)
and serialized as ISO 8601 strings with a trailing 'Z'.
"""
from datetime import datetime, timedelta, timezone


def utc_now():
    """Current instant as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value):
    """
    Parse an ISO 8601 string (or datetime) into a naive UTC datetime.

    Aware values are converted to UTC; naive values are taken as UTC already.

    Raises:
        ValueError: if the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError('empty timestamp')
        parsed = datetime.fromisoformat(text.replace('Z', '+00:00').replace('z', '+00:00'))
    else:
        raise ValueError(f'unsupported timestamp value: {value!r}')

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat_utc(value):
    """Serialize a naive UTC datetime, or return None."""
    if value is None:
        return None
    return value.isoformat() + 'Z'


def window_start(hours, now=None):
    """
    Start of a trailing window of `hours` hours ending at `now`.

    Windows reaching past the earliest representable instant start at
    datetime.min.
    """
    now = now or utc_now()
    try:
        return now - timedelta(hours=hours)
    except OverflowError:
        return datetime.min


def window_end(hours, now=None):
    """
    End of a forward window of `hours` hours starting at `now`.

    Windows reaching past the latest representable instant end at
    datetime.max.
    """
    now = now or utc_now()
    try:
        return now + timedelta(hours=hours)
    except OverflowError:
        return datetime.max
