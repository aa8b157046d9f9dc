"""Calendar helpers for billing periods and the daily usage window."""

import calendar as cal
from datetime import date, datetime

from creditdesk.models.shared import as_utc, utc_now


def add_months(dt: datetime, months: int) -> datetime:
    """Add months to a datetime, clamping to last day of month."""
    month = dt.month - 1 + months
    year = dt.year + month // 12
    month = month % 12 + 1
    max_day = cal.monthrange(year, month)[1]
    day = min(dt.day, max_day)
    return dt.replace(year=year, month=month, day=day)


def resolve_now(now: datetime | None = None) -> datetime:
    return as_utc(now) if now is not None else utc_now()


def usage_day(now: datetime) -> date:
    """The calendar day daily quotas are counted against (UTC)."""
    return as_utc(now).date()


def to_iso(dt: datetime) -> str:
    """Render a timestamp as ISO 8601 in UTC with millisecond precision."""
    return as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")
