"""Day overlay composer.

Recolors existing day cells with the style of the categories their dates
belong to. Categories are applied in the theme's overlay order, so when a
date is in several categories the last one applied decides its look.
"""

from slide_calendar.schemas.calendar_schema import MonthSpec
from slide_calendar.slides_engine.composers.base import BaseComposer
from slide_calendar.slides_engine.requests import Request, update_shape_request


class DayOverlayComposer(BaseComposer):
    """Compose the category style updates of the day cells."""

    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        requests: list[Request] = []
        for category in self.theme.layout.overlay_order:
            style = self.theme.day_style(category)
            for day in spec.dates_of(category):
                if (day.year, day.month) != (spec.year, spec.month):
                    raise ValueError(
                        f"{category.value} date {day.isoformat()} is outside "
                        f"{spec.year}-{spec.month:02d}"
                    )
                if day.day > len(spec.day_element_ids):
                    raise ValueError(
                        f"No day cell for {day.isoformat()}: "
                        f"{len(spec.day_element_ids)} cells laid out"
                    )
                element_id = spec.day_element_ids[day.day - 1]
                requests.append(update_shape_request(element_id, style))
        return requests
