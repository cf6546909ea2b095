from .calendar_schema import (
    LEGEND_ORDER, OVERLAY_CATEGORIES, BatchResult, CalendarBuildResult,
    CalendarInfo, DateCategory, MonthLayout, MonthResult, MonthSpec,
    MonthStatus, Semester,
)
from .theme import (
    DEFAULT_MAGNITUDE, CalendarTheme, ElementScale, LabelConfig, LayoutConfig,
    MarginConfig, OutlineStyle, ScaleConfig, ShapeStyle, StyleConfig, TextStyle,
)

__all__ = [
    "LEGEND_ORDER",
    "OVERLAY_CATEGORIES",
    "BatchResult",
    "CalendarBuildResult",
    "CalendarInfo",
    "DateCategory",
    "MonthLayout",
    "MonthResult",
    "MonthSpec",
    "MonthStatus",
    "Semester",
    "DEFAULT_MAGNITUDE",
    "CalendarTheme",
    "ElementScale",
    "LabelConfig",
    "LayoutConfig",
    "MarginConfig",
    "OutlineStyle",
    "ScaleConfig",
    "ShapeStyle",
    "StyleConfig",
    "TextStyle",
]
