"""Day grid composer.

Draws one cell per day of the month, aligned under its weekday column, and
records each cell's object id by day of month.
"""

import logging

from slide_calendar.schemas.calendar_schema import MonthLayout, MonthSpec
from slide_calendar.slides_engine.composers.base import BaseComposer
from slide_calendar.slides_engine.grid import cell_origin, iter_month_cells
from slide_calendar.slides_engine.requests import Request

logger = logging.getLogger(__name__)


class DayGridComposer(BaseComposer):
    """Compose the day cells of a month."""

    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        return self.layout(page_id, spec).requests

    def layout(self, page_id: str, spec: MonthSpec) -> MonthLayout:
        """Requests for every day cell plus the ids, index 0 holding day 1."""
        theme = self.theme
        requests: list[Request] = []
        day_element_ids: list[str] = []

        for cell in iter_month_cells(spec.year, spec.month, theme.layout.first_weekday):
            translate_x, translate_y = cell_origin(theme, cell.week, cell.column)
            element_id, cell_requests = self.text_element(
                page_id,
                f"{cell.day.day:02d}",
                theme.scales.day_shape,
                translate_x,
                translate_y,
                theme.styles.normal_day,
                theme.styles.day_text,
            )
            requests.extend(cell_requests)
            day_element_ids.append(element_id)

        logger.debug(
            f"Day grid {spec.year}-{spec.month:02d}: {len(day_element_ids)} cells, "
            f"{len(requests)} requests"
        )
        return MonthLayout(requests=requests, day_element_ids=day_element_ids)
