"""
Month to date-range conversion.
"""

import datetime
import re

from .models import DateRange

MONTH_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})$")


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def month_range(month: str) -> DateRange:
    """
    Convert ``YYYY-MM`` into the inclusive range first..last day of that month.

    Raises:
        ValueError: If ``month`` is not a valid ``YYYY-MM`` string
    """
    m = MONTH_RE.match(month.strip()) if month else None
    if not m:
        raise ValueError(f"Invalid month {month!r}, expected YYYY-MM (e.g. 2025-10)")

    year, month_num = int(m.group("year")), int(m.group("month"))
    if not 1 <= month_num <= 12:
        raise ValueError(f"Invalid month {month!r}, month must be between 01 and 12")

    return DateRange(
        start=datetime.date(year, month_num, 1),
        end=datetime.date(year, month_num, days_in_month(year, month_num)),
    )
