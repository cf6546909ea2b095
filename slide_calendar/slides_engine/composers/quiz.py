"""Quiz marker composer.

Quizzes do not recolor their day cell: a small marker is drawn inside the
cell instead, against its right edge and vertically centered.
"""

from datetime import date

from slide_calendar.schemas.calendar_schema import DateCategory, MonthSpec
from slide_calendar.slides_engine.composers.base import BaseComposer
from slide_calendar.slides_engine.grid import cell_for_date, cell_origin
from slide_calendar.slides_engine.requests import Request


class QuizComposer(BaseComposer):
    """Compose the quiz markers of a month."""

    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        requests: list[Request] = []
        for day in spec.dates_of(DateCategory.QUIZ):
            if (day.year, day.month) != (spec.year, spec.month):
                raise ValueError(
                    f"{DateCategory.QUIZ.value} date {day.isoformat()} is outside "
                    f"{spec.year}-{spec.month:02d}"
                )
            translate_x, translate_y = self.marker_origin(day)
            requests.extend(
                self.shape(
                    page_id,
                    self.theme.scales.quiz_shape,
                    translate_x,
                    translate_y,
                    self.theme.styles.quiz_marker,
                )
            )
        return requests

    def marker_origin(self, day: date) -> tuple[float, float]:
        """Top-left corner of the marker for a quiz date, in EMU."""
        theme = self.theme
        day_scale = theme.scales.day_shape
        quiz_scale = theme.scales.quiz_shape

        inset_x = (day_scale.scale_x - quiz_scale.scale_x - theme.layout.quiz_inset) * theme.magnitude
        inset_y = (day_scale.scale_y - quiz_scale.scale_y) / 2 * theme.magnitude

        cell = cell_for_date(day, theme.layout.first_weekday)
        cell_x, cell_y = cell_origin(theme, cell.week, cell.column)
        return cell_x + inset_x, cell_y + inset_y
