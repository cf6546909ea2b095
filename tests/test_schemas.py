"""Tests for Pydantic schema models."""

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from slide_calendar.schemas.calendar_schema import (
    LEGEND_ORDER,
    CalendarBuildResult,
    CalendarInfo,
    DateCategory,
    MonthLayout,
    MonthResult,
    MonthSpec,
    MonthStatus,
    Semester,
)
from slide_calendar.schemas.theme import (
    CalendarTheme,
    ElementScale,
    LabelConfig,
    LayoutConfig,
    MarginConfig,
    OutlineStyle,
    ShapeStyle,
    StyleConfig,
)

THEMES_DIR = Path(__file__).resolve().parent.parent / "themes"


class TestSemester:
    def test_month_ranges(self):
        assert Semester.WINTER.months == [1, 2, 3, 4]
        assert Semester.SPRING.months == [5, 6, 7, 8]
        assert Semester.FALL.months == [9, 10, 11, 12]

    def test_lookup_by_key_or_name(self):
        assert Semester("W") == Semester.WINTER
        assert Semester("s") == Semester.SPRING
        assert Semester("Fall") == Semester.FALL

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            Semester("X")


class TestCalendarInfo:
    def test_delimited_strings(self):
        info = CalendarInfo(
            semester="W",
            year=2024,
            classes="2024-01-10, 2024-01-17",
            holidays="2024-01-01",
        )
        assert info.semester == Semester.WINTER
        assert info.classes == [date(2024, 1, 10), date(2024, 1, 17)]
        assert info.holidays == [date(2024, 1, 1)]
        assert info.labs == []

    def test_lists_and_numeric_year_string(self):
        info = CalendarInfo(semester="fall", year="2023", exams=["2023-12-15", date(2023, 12, 18)])
        assert info.year == 2023
        assert info.exams == [date(2023, 12, 15), date(2023, 12, 18)]

    def test_unknown_semester(self):
        with pytest.raises(ValidationError, match="Unknown semester"):
            CalendarInfo(semester="Q", year=2024)

    def test_malformed_date(self):
        with pytest.raises(ValidationError, match="expected YYYY-MM-DD"):
            CalendarInfo(semester="W", year=2024, classes="2024-13-40")

    def test_non_numeric_year(self):
        with pytest.raises(ValidationError):
            CalendarInfo(semester="W", year="next year")

    def test_dates_for(self):
        info = CalendarInfo(semester="W", year=2024, quizzes="2024-01-15")
        assert info.dates_for(DateCategory.QUIZ) == [date(2024, 1, 15)]
        assert info.dates_for(DateCategory.LAB) == []

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "calendar.yaml"
        path.write_text(
            "semester: S\nyear: 2025\nlabs: 2025-05-06, 2025-05-13\n",
            encoding="utf-8",
        )
        info = CalendarInfo.from_yaml(path)
        assert info.semester == Semester.SPRING
        assert info.labs == [date(2025, 5, 6), date(2025, 5, 13)]

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Calendar file not found"):
            CalendarInfo.from_yaml(tmp_path / "nope.yaml")


class TestMonthModels:
    def test_present_categories(self):
        spec = MonthSpec(
            year=2024,
            month=1,
            dates={
                DateCategory.CLASS: [date(2024, 1, 10)],
                DateCategory.LAB: [],
                DateCategory.QUIZ: [date(2024, 1, 15)],
            },
        )
        assert spec.present_categories == {DateCategory.CLASS, DateCategory.QUIZ}
        assert spec.dates_of(DateCategory.EXAM) == []

    def test_month_bounds(self):
        with pytest.raises(ValidationError):
            MonthSpec(year=2024, month=13)

    def test_layout_lookup_by_day(self):
        layout = MonthLayout(day_element_ids=["a", "b", "c"])
        assert layout.element_id_for(date(2024, 1, 3)) == "c"

    def test_legend_order(self):
        assert LEGEND_ORDER == (
            DateCategory.CLASS,
            DateCategory.LAB,
            DateCategory.EXAM,
            DateCategory.HOLIDAY,
            DateCategory.QUIZ,
        )


class TestBuildResult:
    def _result(self, *statuses):
        return CalendarBuildResult(
            semester=Semester.WINTER,
            year=2024,
            months=[
                MonthResult(year=2024, month=i + 1, status=status)
                for i, status in enumerate(statuses)
            ],
        )

    def test_all_rendered(self):
        result = self._result(*[MonthStatus.RENDERED] * 4)
        assert result.ok
        assert result.failed == []
        assert result.summary() == "4/4 month slides rendered (Winter 2024)"

    def test_failures(self):
        result = self._result(
            MonthStatus.RENDERED, MonthStatus.PARTIAL, MonthStatus.NOT_CREATED, MonthStatus.RENDERED
        )
        assert not result.ok
        assert [m.month for m in result.failed] == [2, 3]

    def test_empty_is_not_ok(self):
        assert not self._result().ok


class TestCalendarTheme:
    def test_defaults(self):
        theme = CalendarTheme()
        assert theme.magnitude == 3_000_000
        assert theme.scales.day_shape == ElementScale(scale_x=0.85, scale_y=0.2766)
        assert theme.margins.year_box_left == pytest.approx(4634893.87)
        assert theme.styles.default_shape == "FLOW_CHART_TERMINATOR"
        assert theme.styles.month_year_text.font_size == 48
        assert theme.styles.exam_day.outline.weight_emu == 76200
        assert theme.styles.quiz_marker.shape_type == "ELLIPSE"
        assert theme.labels.weekday_names[0] == "Dimanche"

    def test_shift(self):
        theme = CalendarTheme()
        assert theme.shift_x == pytest.approx(0.85 * 3_000_000 + 0.16 * 3_000_000)
        assert theme.shift_y == pytest.approx(0.2766 * 3_000_000 + 0.16 * 3_000_000)

    def test_day_style_lookup(self):
        theme = CalendarTheme()
        assert theme.day_style(DateCategory.HOLIDAY).fill_color == "#BEE0B0"
        assert theme.legend_style(DateCategory.QUIZ) == theme.styles.quiz_marker
        with pytest.raises(ValueError):
            theme.day_style(DateCategory.QUIZ)

    def test_month_name_is_one_based(self):
        theme = CalendarTheme()
        assert theme.month_name(1) == "Janvier"
        assert theme.month_name(12) == "Décembre"

    def test_immutable(self):
        theme = CalendarTheme()
        with pytest.raises(ValidationError):
            theme.magnitude = 1

    def test_bad_hex_color(self):
        with pytest.raises(ValidationError):
            ShapeStyle(fill_color="red")

    def test_outline_without_color(self):
        assert OutlineStyle(color=None).color is None

    def test_label_counts(self):
        with pytest.raises(ValidationError, match="12 month names"):
            LabelConfig(month_names=["Jan"])
        with pytest.raises(ValidationError, match="7 weekday names"):
            LabelConfig(weekday_names=["Mon", "Tue"])

    def test_overlay_order_rules(self):
        with pytest.raises(ValidationError, match="Quizzes"):
            LayoutConfig(overlay_order=[DateCategory.CLASS, DateCategory.QUIZ])
        with pytest.raises(ValidationError, match="duplicates"):
            LayoutConfig(overlay_order=[DateCategory.LAB, DateCategory.LAB])

    def test_page_size_holds_grid_and_legend(self):
        theme = CalendarTheme()
        width, height = theme.page_size()
        grid_right = theme.margins.left + 7 * theme.shift_x
        legend_bottom = theme.margins.legend_top + 2 * theme.legend_slot_height
        assert width > grid_right - theme.margins.column_gap
        assert height > legend_bottom

    def test_yaml_round_trip(self, tmp_path):
        theme = CalendarTheme(
            name="Custom",
            layout=LayoutConfig(first_weekday=0, slots_per_row=2),
        )
        path = tmp_path / "theme.yaml"
        theme.to_yaml(path)
        loaded = CalendarTheme.from_yaml(path)
        assert loaded == theme
        assert "Congé férié" in path.read_text(encoding="utf-8")


class TestShippedThemes:
    def test_default_theme_matches_builtin(self):
        theme = CalendarTheme.from_yaml(THEMES_DIR / "default.yaml")
        builtin = CalendarTheme()
        assert theme.name == "Default"
        assert theme.scales == builtin.scales
        assert theme.styles == builtin.styles
        assert theme.labels == builtin.labels
        assert theme.layout == builtin.layout
        for field in MarginConfig.model_fields:
            assert getattr(theme.margins, field) == pytest.approx(getattr(builtin.margins, field))

    def test_english_theme(self):
        theme = CalendarTheme.from_yaml(THEMES_DIR / "english.yaml")
        assert theme.layout.first_weekday == 0
        assert theme.labels.weekday_names[0] == "Monday"
        assert theme.legend_label(DateCategory.HOLIDAY) == "Holiday"
        assert theme.styles == StyleConfig()
