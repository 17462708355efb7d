"""Calendar helpers for journal dates and entry times.

Journal dates are plain ``YYYY-MM-DD`` strings with no time-zone
semantics.  Weekday indices follow the journal UI convention
(0=Sunday .. 6=Saturday), not Python's ``date.weekday()``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

SUNDAY = 0
MONDAY = 1
FRIDAY = 5
SATURDAY = 6

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def parse_trade_date(value: str | date | None) -> date | None:
    """Parse a journal date, returning ``None`` if it is malformed.

    Accepts ``date`` objects, ``YYYY-MM-DD`` strings and full ISO
    datetime strings (the date part is used).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def journal_weekday(d: date) -> int:
    """Day-of-week index with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def week_start(d: date) -> date:
    """Monday of the week containing ``d`` (Sunday belongs to the previous week)."""
    return d - timedelta(days=d.weekday())


def parse_hour(time_of_day: str | None) -> int | None:
    """Hour component of an ``HH:MM`` string, or ``None`` if invalid."""
    if not time_of_day:
        return None
    head = time_of_day.strip().split(":", 1)[0].strip()
    if not (head.isascii() and head.isdecimal()):
        return None
    hour = int(head)
    if hour > 23:
        return None
    return hour
