from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_timestamp(value: datetime) -> str:
    """Render a datetime the way browsers render ``Date.toISOString()``."""
    value = ensure_utc(value)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_timestamp() -> str:
    return to_timestamp(utc_now())


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    value_text = str(value).strip()
    if not value_text:
        return None
    if value_text.endswith("Z"):
        value_text = value_text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(value_text))
    except ValueError:
        return None


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.strip().upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name.strip())


__all__ = [
    "ensure_utc",
    "now_timestamp",
    "parse_timestamp",
    "resolve_timezone",
    "to_timestamp",
    "utc_now",
]
