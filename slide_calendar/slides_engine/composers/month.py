"""Month slide composer.

Runs the part composers in drawing order and flattens their output into
the single ordered request list submitted for one month slide:

1. month and year boxes, weekday header
2. day grid
3. category overlays on the day cells
4. quiz markers
5. legend
"""

import logging
from typing import Optional

from slide_calendar.schemas.calendar_schema import MonthLayout, MonthSpec
from slide_calendar.schemas.theme import CalendarTheme
from slide_calendar.slides_engine.composers.base import BaseComposer, IdFactory
from slide_calendar.slides_engine.composers.day_grid import DayGridComposer
from slide_calendar.slides_engine.composers.header import MonthHeaderComposer
from slide_calendar.slides_engine.composers.legend import LegendComposer
from slide_calendar.slides_engine.composers.overlay import DayOverlayComposer
from slide_calendar.slides_engine.composers.quiz import QuizComposer
from slide_calendar.slides_engine.requests import Request

logger = logging.getLogger(__name__)


class MonthSlideComposer(BaseComposer):
    """Compose a complete month slide."""

    def __init__(self, theme: Optional[CalendarTheme] = None, id_factory: Optional[IdFactory] = None):
        super().__init__(theme, id_factory)
        self.header = MonthHeaderComposer(self.theme, self.id_factory)
        self.day_grid = DayGridComposer(self.theme, self.id_factory)
        self.overlay = DayOverlayComposer(self.theme, self.id_factory)
        self.quiz = QuizComposer(self.theme, self.id_factory)
        self.legend = LegendComposer(self.theme, self.id_factory)

    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        return self.compose_month(page_id, spec).requests

    def compose_month(self, page_id: str, spec: MonthSpec) -> MonthLayout:
        """All requests of the slide, plus the day cell ids they create."""
        requests = self.header.compose(page_id, spec)

        grid = self.day_grid.layout(page_id, spec)
        requests.extend(grid.requests)

        laid_out = spec.model_copy(update={"day_element_ids": grid.day_element_ids})
        requests.extend(self.overlay.compose(page_id, laid_out))
        requests.extend(self.quiz.compose(page_id, laid_out))
        requests.extend(self.legend.compose(page_id, laid_out))

        logger.debug(
            f"Composed {spec.year}-{spec.month:02d} on page {page_id}: "
            f"{len(requests)} requests, categories "
            f"{sorted(c.value for c in spec.present_categories)}"
        )
        return MonthLayout(requests=requests, day_element_ids=grid.day_element_ids)
