"""
Month calendar generation for GET /calendar.
"""
from __future__ import annotations

import calendar
from typing import Any, Dict

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
# Sunday-first, matching the order used by the calendar UI.
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MIN_YEAR = 1900
MAX_YEAR = 2100


class CalendarRangeError(ValueError):
    """Raised when the requested month or year is outside the supported range."""


def _day_name(year: int, month: int, day: int) -> str:
    # calendar.weekday is Monday=0; shift to the Sunday-first table.
    return DAY_NAMES[(calendar.weekday(year, month, day) + 1) % 7]


def get_calendar(month: int, year: int) -> Dict[str, Any]:
    if month < 1 or month > 12:
        raise CalendarRangeError("Month must be between 1 and 12")
    if year < MIN_YEAR or year > MAX_YEAR:
        raise CalendarRangeError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")

    _, days_in_month = calendar.monthrange(year, month)
    days = [{"date": day, "day_of_week": _day_name(year, month, day)} for day in range(1, days_in_month + 1)]
    return {
        "month": month,
        "year": year,
        "month_name": MONTH_NAMES[month - 1],
        "first_day_of_week": days[0]["day_of_week"],
        "days_in_month": days_in_month,
        "days": days,
    }
