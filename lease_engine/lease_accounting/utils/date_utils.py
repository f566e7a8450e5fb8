"""
Date utilities for lease accounting
Whole-month calendar arithmetic used by the schedule generators
"""

from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import Iterator, Optional, Tuple, Union


DateLike = Union[date, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse a calendar-day value into a date
    Accepts date objects or 'YYYY-MM-DD' strings, no timezone handling

    Returns:
        date, or None when the value is empty or unparseable
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except (ValueError, TypeError):
        return None


def month_start(d: date) -> date:
    """First day of the month containing d"""
    return date(d.year, d.month, 1)


def add_months(d: date, months: int) -> date:
    """
    Add months to a date - similar to EDATE in Excel
    Day of month is clamped to the target month's length
    """
    return d + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """
    Whole calendar months from start's month to end's month
    Days are ignored: 2024-01-31 -> 2024-02-01 is 1
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def iter_months(start: date, end: date) -> Iterator[Tuple[int, int]]:
    """
    Yield (year, month) for every calendar month from start through end inclusive
    """
    cursor = month_start(start)
    last = month_start(end)
    while cursor <= last:
        yield cursor.year, cursor.month
        cursor = add_months(cursor, 1)


def period_date(year: int, month: int) -> date:
    """Posting date for an accounting period (first of the month)"""
    return date(year, month, 1)
