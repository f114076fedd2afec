from typing import List

from .common import ApiModel


class CalendarDay(ApiModel):
    date: int
    day_of_week: str


class CalendarMonth(ApiModel):
    month: int
    year: int
    month_name: str
    first_day_of_week: str
    days_in_month: int
    days: List[CalendarDay]
