"""Week arithmetic for the Monday-based weekly planner."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from youtubefit.db.models import PLAN_DAYS


def week_start(day: date) -> date:
    """Monday of the week containing day (Sunday belongs to the preceding Monday)."""
    return day - timedelta(days=day.weekday())


def month_week_range(year: int, month: int) -> tuple[date, date]:
    """Week starts covering a month: Monday of its first day's week and of its last day's week."""
    last_day = calendar.monthrange(year, month)[1]
    return week_start(date(year, month, 1)), week_start(date(year, month, last_day))


def day_order(day_of_week: str) -> int:
    return PLAN_DAYS.index(day_of_week) if day_of_week in PLAN_DAYS else len(PLAN_DAYS)
