"""Legend composer.

Builds one legend entry (a sample shape and its label) for every category
present in the month. Entries fill slots left to right, top to bottom, in
the fixed legend order; absent categories leave no gap.
"""

from typing import Iterable, NamedTuple

from slide_calendar.schemas.calendar_schema import LEGEND_ORDER, DateCategory, MonthSpec
from slide_calendar.slides_engine.composers.base import BaseComposer
from slide_calendar.slides_engine.requests import Request


class LegendSlot(NamedTuple):
    category: DateCategory
    slot: int
    row: int
    column: int


def legend_slots(present: Iterable[DateCategory], slots_per_row: int = 3) -> list[LegendSlot]:
    """Assign consecutive slots to the present categories, in legend order."""
    present = set(present)
    slots: list[LegendSlot] = []
    for category in LEGEND_ORDER:
        if category not in present:
            continue
        slot = len(slots)
        slots.append(LegendSlot(category, slot, slot // slots_per_row, slot % slots_per_row))
    return slots


class LegendComposer(BaseComposer):
    """Compose the legend of a month slide."""

    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        # Only categories that were actually drawn get an entry
        drawn = set(self.theme.layout.overlay_order) | {DateCategory.QUIZ}
        present = spec.present_categories & drawn

        requests: list[Request] = []
        for entry in legend_slots(present, self.theme.layout.slots_per_row):
            slot_x, slot_y = self.slot_origin(entry.row, entry.column)
            requests.extend(self.entry(page_id, entry.category, slot_x, slot_y))
        return requests

    def slot_origin(self, row: int, column: int) -> tuple[float, float]:
        theme = self.theme
        return (
            theme.margins.legend_left + column * theme.legend_slot_width,
            theme.margins.legend_top + row * theme.legend_slot_height,
        )

    def entry(self, page_id: str, category: DateCategory, slot_x: float, slot_y: float) -> list[Request]:
        """Sample shape plus label for one category.

        The quiz sample is the (smaller) marker shape, right-aligned and
        vertically centered within the slot's sample area.
        """
        theme = self.theme
        item_scale = theme.scales.legend_item
        style = theme.legend_style(category)

        sample_x, sample_y = slot_x, slot_y
        if category == DateCategory.QUIZ:
            quiz_scale = theme.scales.quiz_shape
            sample_x += (item_scale.scale_x - quiz_scale.scale_x) * theme.magnitude
            sample_y += (item_scale.scale_y - quiz_scale.scale_y) / 2 * theme.magnitude
            item_scale = quiz_scale

        label_scale = theme.scales.legend_label
        label_x = sample_x + (item_scale.scale_x + theme.layout.label_gap) * theme.magnitude
        label_y = sample_y - label_scale.scale_y * theme.magnitude * theme.layout.label_rise

        return self.shape(page_id, item_scale, sample_x, sample_y, style) + self.label(
            page_id,
            theme.legend_label(category),
            label_scale,
            label_x,
            label_y,
            alignment="START",
        )
