"""Month header composer.

Draws the month-name and year boxes at the top of the slide and the row of
weekday labels above the day grid.
"""

from slide_calendar.schemas.calendar_schema import MonthSpec
from slide_calendar.slides_engine.composers.base import BaseComposer
from slide_calendar.slides_engine.requests import Request


class MonthHeaderComposer(BaseComposer):
    """Compose the month/year boxes and the weekday header."""

    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        return self.month_year_boxes(page_id, spec) + self.weekday_labels(page_id)

    def month_year_boxes(self, page_id: str, spec: MonthSpec) -> list[Request]:
        theme = self.theme
        box_style = theme.styles.month_year_box
        text_style = theme.styles.month_year_text

        _, month_requests = self.text_element(
            page_id,
            theme.month_name(spec.month),
            theme.scales.month_box,
            theme.margins.left,
            theme.margins.top,
            box_style,
            text_style,
        )
        _, year_requests = self.text_element(
            page_id,
            str(spec.year),
            theme.scales.year_box,
            theme.margins.year_box_left,
            theme.margins.top,
            box_style,
            text_style,
        )
        return month_requests + year_requests

    def weekday_labels(self, page_id: str) -> list[Request]:
        """One centered label per weekday name, evenly spaced along the top."""
        theme = self.theme
        scale = theme.scales.weekday_label
        step = scale.scale_x * theme.magnitude + theme.margins.column_gap

        requests: list[Request] = []
        translate_x = theme.margins.left
        for name in theme.labels.weekday_names:
            requests.extend(
                self.label(page_id, name, scale, translate_x, theme.margins.day_labels_top)
            )
            translate_x += step
        return requests
