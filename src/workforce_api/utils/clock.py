"""Epoch-millisecond time helpers.

Records store timestamps as epoch milliseconds, with 0 meaning "unset".
Services take a ``Clock`` so tests can pin "now".
"""

import time
from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

Clock = Callable[[], int]

MILLIS_PER_MINUTE = 60_000
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE
MILLIS_PER_DAY = 24 * MILLIS_PER_HOUR


def now_millis() -> int:
    """Get the current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def to_local_datetime(epoch_millis: int, tz: ZoneInfo) -> datetime:
    """Convert epoch milliseconds to an aware datetime in ``tz``."""
    return datetime.fromtimestamp(epoch_millis / 1000, tz=tz)


def to_local_date(epoch_millis: int, tz: ZoneInfo) -> date:
    """Convert epoch milliseconds to the calendar date in ``tz``."""
    return to_local_datetime(epoch_millis, tz).date()
