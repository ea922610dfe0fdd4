"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List, Optional
from dateutil.relativedelta import relativedelta


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def add_months(from_date: date, months: int, day_of_month: Optional[int] = None) -> date:
    """
    Shift a date by whole months, optionally pinning the day of month.

    The pinned day is clamped to the length of the target month
    (day 31 in February lands on the 28th or 29th).
    """
    shifted = from_date + relativedelta(months=months)
    if day_of_month is None:
        return shifted
    last_day = calendar.monthrange(shifted.year, shifted.month)[1]
    return shifted.replace(day=min(max(day_of_month, 1), last_day))
