"""Tests for the calendar grid math and date classification."""

import calendar
from datetime import date

import pytest

from slide_calendar.schemas.calendar_schema import CalendarInfo, DateCategory
from slide_calendar.schemas.theme import CalendarTheme, LayoutConfig
from slide_calendar.slides_engine.classification import classify_month, filter_dates, month_spec
from slide_calendar.slides_engine.grid import (
    DAYS_IN_WEEK,
    WEEKS_IN_MONTH,
    cell_for_date,
    cell_origin,
    first_day_column,
    iter_month_cells,
    weekday_column,
)

MONTHS = [(2024, m) for m in range(1, 13)] + [(2023, 2), (2021, 2), (2026, 8)]


class TestColumns:
    def test_january_2024(self):
        # 2024-01-01 is a Monday
        assert first_day_column(2024, 1, calendar.SUNDAY) == 1
        assert first_day_column(2024, 1, calendar.MONDAY) == 0

    def test_weekday_column_covers_week(self):
        week = [date(2024, 1, d) for d in range(1, 8)]
        for first_weekday in range(7):
            assert sorted(weekday_column(d, first_weekday) for d in week) == list(range(7))

    def test_every_first_column_occurs(self):
        # Over a year, each of the 7 first-of-month columns is hit at least once
        seen = {first_day_column(y, m, calendar.SUNDAY) for y in (2023, 2024) for m in range(1, 13)}
        assert seen == set(range(7))


class TestGridCoverage:
    @pytest.mark.parametrize("first_weekday", range(7))
    @pytest.mark.parametrize("year,month", MONTHS)
    def test_cells_are_exactly_the_month(self, year, month, first_weekday):
        cells = list(iter_month_cells(year, month, first_weekday))
        days_in_month = calendar.monthrange(year, month)[1]

        assert [c.day.day for c in cells] == list(range(1, days_in_month + 1))
        assert all(c.day.month == month and c.day.year == year for c in cells)
        assert all(0 <= c.week < WEEKS_IN_MONTH and 0 <= c.column < DAYS_IN_WEEK for c in cells)
        assert cells[0].column == first_day_column(year, month, first_weekday)

    @pytest.mark.parametrize("first_weekday", range(7))
    @pytest.mark.parametrize("year,month", MONTHS)
    def test_walk_matches_arithmetic(self, year, month, first_weekday):
        for cell in iter_month_cells(year, month, first_weekday):
            assert cell_for_date(cell.day, first_weekday) == cell
            assert cell.column == weekday_column(cell.day, first_weekday)

    def test_six_week_month(self):
        # March 2024 starts on a Friday and has 31 days
        cells = list(iter_month_cells(2024, 3, calendar.SUNDAY))
        assert cells[-1].week == 5

    def test_four_week_month(self):
        # February 2026 starts on a Sunday and has 28 days
        cells = list(iter_month_cells(2026, 2, calendar.SUNDAY))
        assert cells[0].column == 0
        assert cells[-1].week == 3

    @pytest.mark.parametrize("first_weekday", range(7))
    def test_last_representable_month(self, first_weekday):
        cells = list(iter_month_cells(9999, 12, first_weekday))
        assert len(cells) == 31
        assert cells[-1].day == date(9999, 12, 31)


class TestCellOrigin:
    def test_origin(self):
        theme = CalendarTheme()
        x, y = cell_origin(theme, 2, 3)
        assert x == pytest.approx(theme.margins.left + 3 * theme.shift_x)
        assert y == pytest.approx(theme.margins.day_elements_top + 2 * theme.shift_y)

    def test_custom_first_weekday(self):
        theme = CalendarTheme(layout=LayoutConfig(first_weekday=calendar.MONDAY))
        cell = cell_for_date(date(2024, 1, 1), theme.layout.first_weekday)
        assert (cell.week, cell.column) == (0, 0)


class TestClassification:
    def test_filter_by_year_and_month(self):
        dates = [date(2024, 1, 10), date(2024, 2, 1), date(2023, 1, 10), date(2024, 1, 3)]
        assert filter_dates(dates, 2024, 1) == [date(2024, 1, 10), date(2024, 1, 3)]

    def test_absent_input_stays_absent(self):
        assert filter_dates(None, 2024, 1) is None
        assert filter_dates([], 2024, 1) == []

    def test_classify_month(self):
        info = CalendarInfo(
            semester="W",
            year=2024,
            classes="2024-01-10, 2024-02-07",
            quizzes="2024-02-14",
        )
        january = classify_month(info, 2024, 1)
        assert set(january) == set(DateCategory)
        assert january[DateCategory.CLASS] == [date(2024, 1, 10)]
        assert january[DateCategory.QUIZ] == []

    def test_month_spec(self):
        info = CalendarInfo(semester="W", year=2024, labs="2024-03-05", holidays="2024-04-01")
        spec = month_spec(info, 3)
        assert (spec.year, spec.month) == (2024, 3)
        assert spec.present_categories == {DateCategory.LAB}
        assert spec.day_element_ids == []
