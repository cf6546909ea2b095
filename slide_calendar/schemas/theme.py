"""Pydantic models for calendar theme configuration.

The CalendarTheme captures every geometric and visual constant used to lay
out a month slide: the EMU magnitude all shapes are scaled from, element
scales, margins and gaps, shape/text styles for each kind of day, the
labels (month, weekday and legend names) and a few layout options.

Themes are immutable. Load alternates from YAML and pass them to the
composers instead of editing defaults in place.
"""

import calendar
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from slide_calendar.utils.file_utils import load_yaml

from .calendar_schema import LEGEND_ORDER, DateCategory

DEFAULT_MAGNITUDE = 3_000_000  # EMU

_HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

DashStyle = Literal["SOLID", "DOT", "DASH", "DASH_DOT", "LONG_DASH", "LONG_DASH_DOT"]
ContentAlignment = Literal["TOP", "MIDDLE", "BOTTOM"]


def _m(fraction: float) -> float:
    return fraction * DEFAULT_MAGNITUDE


# ---------------------------------------------------------------------------
# Element scales
# ---------------------------------------------------------------------------

class ElementScale(BaseModel):
    """Scale factors applied to the magnitude-sized base shape."""

    model_config = ConfigDict(frozen=True)

    scale_x: float = Field(gt=0)
    scale_y: float = Field(gt=0)


class ScaleConfig(BaseModel):
    """Scale of every kind of element drawn on a month slide."""

    model_config = ConfigDict(frozen=True)

    weekday_label: ElementScale = ElementScale(scale_x=0.85, scale_y=0.2766)
    day_shape: ElementScale = ElementScale(scale_x=0.85, scale_y=0.2766)
    quiz_shape: ElementScale = ElementScale(scale_x=0.17, scale_y=0.17)
    legend_item: ElementScale = ElementScale(scale_x=0.5774, scale_y=0.1548)
    legend_label: ElementScale = ElementScale(scale_x=0.9, scale_y=0.2)
    month_box: ElementScale = ElementScale(scale_x=1.1099, scale_y=0.3376)
    year_box: ElementScale = ElementScale(scale_x=0.8817, scale_y=0.3376)


# ---------------------------------------------------------------------------
# Margins
# ---------------------------------------------------------------------------

class MarginConfig(BaseModel):
    """Margins, gaps and fixed offsets, all in EMU."""

    model_config = ConfigDict(frozen=True)

    top: float = Field(default=_m(0.25), ge=0)
    left: float = Field(default=_m(0.25), ge=0)
    column_gap: float = Field(default=_m(0.16), ge=0)
    line_gap: float = Field(default=_m(0.16), ge=0)
    day_labels_top: float = Field(default=_m(0.9), ge=0)
    day_elements_top: float = Field(default=_m(1.25), ge=0)
    legend_left: float = Field(default=_m(1.03), ge=0)
    legend_top: float = Field(default=_m(3.84), ge=0)
    legend_line_gap: float = Field(default=_m(0.05), ge=0)
    year_box_left: float = Field(default=4634893.87, ge=0)


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------

class TextStyle(BaseModel):
    """Character style applied to the whole text of an element."""

    model_config = ConfigDict(frozen=True)

    font_family: str = "Oswald"
    font_size: float = Field(default=37, gt=0, description="Font size in points")
    color: str = Field(default="#000000", pattern=_HEX_COLOR)
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False


class OutlineStyle(BaseModel):
    """Shape outline. A missing color means no outline is rendered."""

    model_config = ConfigDict(frozen=True)

    color: Optional[str] = Field(default="#000000", pattern=_HEX_COLOR)
    weight_emu: float = Field(default=38100, gt=0)
    dash_style: DashStyle = "SOLID"


class ShapeStyle(BaseModel):
    """Fill, outline and text placement of a shape.

    ``fill_color`` None leaves the background unrendered. ``shape_type``
    None means the theme's default cell shape.
    """

    model_config = ConfigDict(frozen=True)

    fill_color: Optional[str] = Field(default=None, pattern=_HEX_COLOR)
    outline: OutlineStyle = Field(default_factory=OutlineStyle)
    content_alignment: ContentAlignment = "MIDDLE"
    text_color: str = Field(default="#000000", pattern=_HEX_COLOR)
    shape_type: Optional[str] = None


def _day_style(fill: str, weight: float, dash: str) -> ShapeStyle:
    return ShapeStyle(
        fill_color=fill,
        outline=OutlineStyle(color="#000000", weight_emu=weight, dash_style=dash),
    )


class StyleConfig(BaseModel):
    """Shape and text styles for every element kind."""

    model_config = ConfigDict(frozen=True)

    default_shape: str = "FLOW_CHART_TERMINATOR"

    day_text: TextStyle = TextStyle(font_family="Oswald", font_size=37)
    month_year_text: TextStyle = TextStyle(font_family="Oswald", font_size=48)
    label_text: TextStyle = TextStyle(font_family="Oswald", font_size=37)

    normal_day: ShapeStyle = ShapeStyle(
        fill_color="#E0E0E0",
        outline=OutlineStyle(color="#E0E0E0", weight_emu=9525, dash_style="SOLID"),
    )
    class_day: ShapeStyle = _day_style("#F0B3B5", 38100, "DASH")
    lab_day: ShapeStyle = _day_style("#FFE7A2", 38100, "DOT")
    exam_day: ShapeStyle = _day_style("#99B3DB", 76200, "SOLID")
    holiday_day: ShapeStyle = _day_style("#BEE0B0", 38100, "LONG_DASH_DOT")

    month_year_box: ShapeStyle = ShapeStyle(
        fill_color=None,
        outline=OutlineStyle(color="#666666", weight_emu=38100, dash_style="SOLID"),
    )
    quiz_marker: ShapeStyle = ShapeStyle(
        fill_color="#D82333",
        outline=OutlineStyle(color="#000000", weight_emu=28575, dash_style="SOLID"),
        shape_type="ELLIPSE",
    )


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

class LabelConfig(BaseModel):
    """Month, weekday and legend names shown on the slides."""

    model_config = ConfigDict(frozen=True)

    month_names: list[str] = Field(
        default_factory=lambda: [
            "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
            "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
        ],
    )
    weekday_names: list[str] = Field(
        default_factory=lambda: [
            "Dimanche", "Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi",
        ],
        description="Header names in column order, starting at layout.first_weekday",
    )
    legend: dict[DateCategory, str] = Field(
        default_factory=lambda: {
            DateCategory.CLASS: "Cours",
            DateCategory.LAB: "Laboratoire",
            DateCategory.EXAM: "Examen",
            DateCategory.HOLIDAY: "Congé férié",
            DateCategory.QUIZ: "Quiz",
        },
    )

    @field_validator("month_names")
    @classmethod
    def _twelve_months(cls, value: list[str]) -> list[str]:
        if len(value) != 12:
            raise ValueError(f"Expected 12 month names, got {len(value)}")
        return value

    @field_validator("weekday_names")
    @classmethod
    def _seven_weekdays(cls, value: list[str]) -> list[str]:
        if len(value) != 7:
            raise ValueError(f"Expected 7 weekday names, got {len(value)}")
        return value

    @field_validator("legend")
    @classmethod
    def _every_category(cls, value: dict[DateCategory, str]) -> dict[DateCategory, str]:
        missing = [c.value for c in DateCategory if c not in value]
        if missing:
            raise ValueError(f"Missing legend labels for: {', '.join(missing)}")
        return value


# ---------------------------------------------------------------------------
# Layout options
# ---------------------------------------------------------------------------

class LayoutConfig(BaseModel):
    """Grid and legend options."""

    model_config = ConfigDict(frozen=True)

    first_weekday: int = Field(
        default=calendar.SUNDAY,
        ge=0,
        le=6,
        description="Weekday of column 0 (0=Monday ... 6=Sunday, as in the calendar module)",
    )
    overlay_order: list[DateCategory] = Field(
        default_factory=lambda: [
            DateCategory.CLASS,
            DateCategory.LAB,
            DateCategory.EXAM,
            DateCategory.HOLIDAY,
        ],
        description="Order day-cell overlays are applied in; the last one wins",
    )
    slots_per_row: int = Field(default=3, ge=1, description="Legend entries per row")
    quiz_inset: float = Field(
        default=0.05,
        description="Gap between a quiz marker and the right edge of its day cell (magnitude units)",
    )
    label_gap: float = Field(
        default=0.05,
        description="Gap between a legend sample and its label (magnitude units)",
    )
    label_rise: float = Field(
        default=0.25,
        description="Fraction of the legend label height the label is raised by",
    )

    @field_validator("overlay_order")
    @classmethod
    def _valid_overlays(cls, value: list[DateCategory]) -> list[DateCategory]:
        if DateCategory.QUIZ in value:
            raise ValueError("Quizzes are drawn as markers and cannot be a day overlay")
        if len(set(value)) != len(value):
            raise ValueError("Overlay order contains duplicates")
        return value


# ---------------------------------------------------------------------------
# Top-level theme
# ---------------------------------------------------------------------------

class CalendarTheme(BaseModel):
    """Complete calendar theme configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = "Default"
    magnitude: float = Field(default=DEFAULT_MAGNITUDE, gt=0, description="Base shape size in EMU")
    scales: ScaleConfig = Field(default_factory=ScaleConfig)
    margins: MarginConfig = Field(default_factory=MarginConfig)
    styles: StyleConfig = Field(default_factory=StyleConfig)
    labels: LabelConfig = Field(default_factory=LabelConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    # --- Grid steps ---

    @property
    def shift_x(self) -> float:
        """Horizontal distance between two day columns."""
        return self.scales.day_shape.scale_x * self.magnitude + self.margins.column_gap

    @property
    def shift_y(self) -> float:
        """Vertical distance between two week rows."""
        return self.scales.day_shape.scale_y * self.magnitude + self.margins.line_gap

    @property
    def legend_slot_width(self) -> float:
        scales = self.scales
        return (
            (scales.legend_item.scale_x + scales.legend_label.scale_x) * self.magnitude
            + self.margins.column_gap
        )

    @property
    def legend_slot_height(self) -> float:
        return self.scales.legend_label.scale_y * self.magnitude + self.margins.legend_line_gap

    def page_size(self) -> tuple[int, int]:
        """Width and height in EMU of a page that holds the whole month slide.

        The left and top margins are mirrored on the right and bottom.
        """
        margins = self.margins
        legend_rows = -(-len(LEGEND_ORDER) // self.layout.slots_per_row)
        right = max(
            margins.left + 7 * self.shift_x - margins.column_gap,
            margins.legend_left + self.layout.slots_per_row * self.legend_slot_width - margins.column_gap,
            margins.year_box_left + self.scales.year_box.scale_x * self.magnitude,
        )
        bottom = max(
            margins.day_elements_top + 6 * self.shift_y - margins.line_gap,
            margins.legend_top + legend_rows * self.legend_slot_height,
        )
        return int(round(right + margins.left)), int(round(bottom + margins.top))

    # --- Category lookups ---

    def day_style(self, category: DateCategory) -> ShapeStyle:
        styles = {
            DateCategory.CLASS: self.styles.class_day,
            DateCategory.LAB: self.styles.lab_day,
            DateCategory.EXAM: self.styles.exam_day,
            DateCategory.HOLIDAY: self.styles.holiday_day,
        }
        if category not in styles:
            raise ValueError(f"No day style for category {category.value!r}")
        return styles[category]

    def legend_style(self, category: DateCategory) -> ShapeStyle:
        if category == DateCategory.QUIZ:
            return self.styles.quiz_marker
        return self.day_style(category)

    def legend_label(self, category: DateCategory) -> str:
        return self.labels.legend[category]

    def month_name(self, month: int) -> str:
        """Name of a 1-based calendar month."""
        return self.labels.month_names[month - 1]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CalendarTheme":
        """Load a theme from a YAML configuration file."""
        return cls.model_validate(load_yaml(path, "Theme"))

    def to_yaml(self, path: str | Path) -> None:
        """Save the theme to a YAML configuration file."""
        path = Path(path)
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
