"""Calendar grid math shared by every element placed on a day cell.

A month occupies up to WEEKS_IN_MONTH rows of DAYS_IN_WEEK columns. Column 0
is the theme's first weekday. Both the day grid and the quiz markers turn a
(week, column) cell into EMU through cell_origin(), so the two always agree.
"""

import calendar
from datetime import date
from typing import Iterator, NamedTuple

from slide_calendar.schemas.theme import CalendarTheme

DAYS_IN_WEEK = 7
WEEKS_IN_MONTH = 6  # Maximum number of weeks a month can touch


class GridCell(NamedTuple):
    week: int
    column: int
    day: date


def weekday_column(day: date, first_weekday: int) -> int:
    """Column of a date, given the weekday (0=Monday) shown in column 0."""
    return (day.weekday() - first_weekday) % DAYS_IN_WEEK


def first_day_column(year: int, month: int, first_weekday: int) -> int:
    """Column holding the first of the month."""
    return weekday_column(date(year, month, 1), first_weekday)


def cell_for_date(day: date, first_weekday: int) -> GridCell:
    """Week row and column of a date, computed arithmetically."""
    offset = day.day + first_day_column(day.year, day.month, first_weekday) - 1
    return GridCell(offset // DAYS_IN_WEEK, offset % DAYS_IN_WEEK, day)


def iter_month_cells(year: int, month: int, first_weekday: int) -> Iterator[GridCell]:
    """Walk the 6x7 grid and yield the populated cells, day 1 first.

    Cells before the first of the month in week 0 are skipped, and the walk
    stops on the last day of the month.
    """
    first_column = first_day_column(year, month, first_weekday)
    days_in_month = calendar.monthrange(year, month)[1]
    day = 1
    for week in range(WEEKS_IN_MONTH):
        for column in range(DAYS_IN_WEEK):
            if week == 0 and column < first_column:
                continue
            yield GridCell(week, column, date(year, month, day))
            if day == days_in_month:
                return
            day += 1


def cell_origin(theme: CalendarTheme, week: int, column: int) -> tuple[float, float]:
    """Top-left corner of a day cell in EMU."""
    translate_x = theme.margins.left + theme.shift_x * column
    translate_y = theme.margins.day_elements_top + theme.shift_y * week
    return translate_x, translate_y
