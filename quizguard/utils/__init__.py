# Utils package

from datetime import datetime, timezone

UTC_TZ = timezone.utc


def utc_now():
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC_TZ)


def to_utc(dt):
    """Convert a datetime to UTC.

    Args:
        dt: A datetime object (assumed to be UTC if naive)

    Returns:
        An aware datetime in UTC, or None
    """
    if dt is None:
        return None

    # If naive datetime, assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC_TZ)

    return dt.astimezone(UTC_TZ)


def parse_timestamp(value):
    """Parse an ISO-8601 string or epoch milliseconds into a UTC datetime.

    Unparseable values return None instead of raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, UTC_TZ)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            return to_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def format_timestamp(dt):
    """Format a datetime as an ISO-8601 UTC string ('...Z')."""
    dt = to_utc(dt)
    if dt is None:
        return None
    return dt.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def to_epoch_ms(dt):
    """Milliseconds since the epoch for a datetime (naive = UTC)."""
    return to_utc(dt).timestamp() * 1000
