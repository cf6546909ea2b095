"""Restrict category date lists to a single calendar month."""

from datetime import date
from typing import Iterable, Optional

from slide_calendar.schemas.calendar_schema import CalendarInfo, DateCategory, MonthSpec


def filter_dates(dates: Optional[Iterable[date]], year: int, month: int) -> Optional[list[date]]:
    """Keep the dates falling in ``year``/``month`` (1-based), in input order.

    Returns None when ``dates`` is None, so an absent list stays
    distinguishable from an empty one.
    """
    if dates is None:
        return None
    return [d for d in dates if d.year == year and d.month == month]


def classify_month(info: CalendarInfo, year: int, month: int) -> dict[DateCategory, list[date]]:
    """Every category's dates for one month, keyed by category."""
    return {
        category: filter_dates(info.dates_for(category), year, month) or []
        for category in DateCategory
    }


def month_spec(info: CalendarInfo, month: int) -> MonthSpec:
    """Build the MonthSpec for one month of the semester described by ``info``."""
    return MonthSpec(
        year=info.year,
        month=month,
        dates=classify_month(info, info.year, month),
    )
