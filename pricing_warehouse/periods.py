"""Calendar helpers shared by generators and aggregations.

Elapsed months follow the 30-day convention used throughout the
portfolio: ``months = floor(days / 30)``.
"""

import calendar
from datetime import date

DAYS_PER_MONTH = 30


def elapsed_days(start: date, as_of: date) -> int:
    """Whole days from ``start`` to ``as_of`` (negative if in the future)."""
    return (as_of - start).days


def elapsed_months(start: date, as_of: date) -> int:
    """Whole 30-day months from ``start`` to ``as_of``."""
    return elapsed_days(start, as_of) // DAYS_PER_MONTH


def add_months(start: date, months: int) -> date:
    """Shift a date by calendar months, clamping the day to the month length."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
