"""Human-readable labels for timestamps and amounts.

The literal strings produced here are what clients key off, so the
boundaries are fixed:

- due dates: "No due date", "Overdue by N day(s)", "Due today",
  "Due tomorrow", "Due in N days" (2..30), "Due <date>" (beyond 30)
- relative times: "Just now", "N minute(s) ago", "N hour(s) ago",
  "N day(s) ago" (under 7 days), "<date>" otherwise
"""

import math
from zoneinfo import ZoneInfo

from workforce_api.utils.clock import (
    MILLIS_PER_DAY,
    MILLIS_PER_HOUR,
    MILLIS_PER_MINUTE,
    to_local_date,
    to_local_datetime,
)

UTC = ZoneInfo("UTC")

DATE_FORMAT = "%b %d, %Y"
MONTH_FORMAT = "%b"
MONTH_YEAR_FORMAT = "%b %Y"

# Due dates further out than this render as an absolute date
DUE_SOON_HORIZON_DAYS = 30


def pluralize(count: int, unit: str) -> str:
    """Render ``count`` with ``unit``, singular exactly when count is 1."""
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_date(epoch_millis: int, tz: ZoneInfo = UTC, empty: str = "N/A") -> str:
    """Format a timestamp as e.g. "Mar 07, 2026".

    Args:
        epoch_millis: Timestamp in epoch milliseconds
        tz: Zone the calendar date is taken in
        empty: Text returned for unset (non-positive) timestamps

    Returns:
        Formatted date
    """
    if epoch_millis <= 0:
        return empty
    return to_local_datetime(epoch_millis, tz).strftime(DATE_FORMAT)


def days_until(epoch_millis: int, now: int, tz: ZoneInfo = UTC) -> int:
    """Whole calendar days from ``now``'s local date to the timestamp's local date."""
    return (to_local_date(epoch_millis, tz) - to_local_date(now, tz)).days


def due_date_label(end_date_millis: int, now: int, tz: ZoneInfo = UTC) -> str:
    """Describe a due date relative to today.

    Args:
        end_date_millis: Due date in epoch milliseconds (<= 0 means unset)
        now: Reference time in epoch milliseconds
        tz: Zone the calendar days are counted in

    Returns:
        Due-date label
    """
    if end_date_millis <= 0:
        return "No due date"

    days = days_until(end_date_millis, now, tz)
    if days < 0:
        return f"Overdue by {pluralize(abs(days), 'day')}"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    if days <= DUE_SOON_HORIZON_DAYS:
        return f"Due in {days} days"
    return f"Due {format_date(end_date_millis, tz)}"


def relative_time_label(epoch_millis: int, now: int, tz: ZoneInfo = UTC) -> str:
    """Describe how long ago a timestamp was.

    Future and unset timestamps read as "Just now".

    Args:
        epoch_millis: Timestamp in epoch milliseconds
        now: Reference time in epoch milliseconds
        tz: Zone used for the absolute date fallback

    Returns:
        Relative-time label
    """
    if epoch_millis <= 0:
        return "Just now"

    elapsed = max(0, now - epoch_millis)
    minutes = elapsed // MILLIS_PER_MINUTE
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{pluralize(minutes, 'minute')} ago"

    hours = elapsed // MILLIS_PER_HOUR
    if hours < 24:
        return f"{pluralize(hours, 'hour')} ago"

    days = elapsed // MILLIS_PER_DAY
    if days < 7:
        return f"{pluralize(days, 'day')} ago"

    return format_date(epoch_millis, tz)


def format_currency(amount: float) -> str:
    """Format an amount as US dollars, e.g. "$1,234.50" or "-$3.00"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def format_percent(value: int) -> str:
    """Format a whole-number percentage, e.g. "42%"."""
    return f"{value}%"
