"""Month slide composers.

Each composer emits the requests for one part of a month slide;
MonthSlideComposer runs them all in drawing order.
"""

from .base import BaseComposer, new_uuid
from .day_grid import DayGridComposer
from .header import MonthHeaderComposer
from .legend import LegendComposer, LegendSlot, legend_slots
from .month import MonthSlideComposer
from .overlay import DayOverlayComposer
from .quiz import QuizComposer

__all__ = [
    "BaseComposer",
    "DayGridComposer",
    "DayOverlayComposer",
    "LegendComposer",
    "LegendSlot",
    "MonthHeaderComposer",
    "MonthSlideComposer",
    "QuizComposer",
    "legend_slots",
    "new_uuid",
]
