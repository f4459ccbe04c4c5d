"""Display formatting for timestamps in the viewer's local time."""

from datetime import datetime, tzinfo

from .tasks import utcnow

PLACEHOLDER = "—"


def _local(value: datetime, tz: tzinfo | None) -> datetime:
    return value.astimezone(tz)


def _date_part(value: datetime, now: datetime) -> str:
    # Year only shown when it differs from the current one
    text = f"{value.strftime('%b')} {value.day}"
    if value.year != now.year:
        text += f", {value.year}"
    return text


def format_time(value: datetime | None, tz: tzinfo | None = None) -> str:
    """'3:45 PM'"""
    if value is None:
        return PLACEHOLDER
    local = _local(value, tz)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def format_date(value: datetime | None, tz: tzinfo | None = None, now: datetime | None = None) -> str:
    """'Feb 21' this year, 'Feb 21, 2025' otherwise."""
    if value is None:
        return PLACEHOLDER
    now = _local(now or utcnow(), tz)
    return _date_part(_local(value, tz), now)


def format_timestamp(value: datetime | None, tz: tzinfo | None = None, now: datetime | None = None) -> str:
    """'Feb 21, 2025 — 3:45 PM'"""
    if value is None:
        return PLACEHOLDER
    return f"{format_date(value, tz, now)} — {format_time(value, tz)}"


def format_due(value: datetime | None, tz: tzinfo | None = None, now: datetime | None = None) -> str:
    """'Feb 21 at 3:45 PM', or 'No due date'."""
    if value is None:
        return "No due date"
    return f"{format_date(value, tz, now)} at {format_time(value, tz)}"


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'s' if n > 1 else ''}"


def relative_time(value: datetime | None, now: datetime | None = None) -> str:
    """'2 hours ago', 'in 3 days', 'just now'."""
    if value is None:
        return PLACEHOLDER
    now = now or utcnow()
    diff = (now - value).total_seconds()
    seconds = abs(diff)
    days, hours, mins = int(seconds // 86400), int(seconds // 3600), int(seconds // 60)

    if days > 0:
        amount = _plural(days, "day")
    elif hours > 0:
        amount = _plural(hours, "hour")
    elif mins > 0:
        amount = _plural(mins, "min")
    else:
        return "just now"
    return f"in {amount}" if diff < 0 else f"{amount} ago"
