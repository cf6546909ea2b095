"""Pydantic models for calendar input, month plans and build results."""

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slide_calendar.parsers.date_parser import parse_date_list
from slide_calendar.utils.file_utils import load_yaml


class DateCategory(str, Enum):
    """Kinds of dates a calendar day can carry."""

    CLASS = "class"
    LAB = "lab"
    QUIZ = "quiz"
    EXAM = "exam"
    HOLIDAY = "holiday"


# Categories that recolor an existing day cell (QUIZ draws a marker instead)
OVERLAY_CATEGORIES: tuple[DateCategory, ...] = (
    DateCategory.CLASS,
    DateCategory.LAB,
    DateCategory.EXAM,
    DateCategory.HOLIDAY,
)

# Fixed left-to-right, top-to-bottom order of legend entries
LEGEND_ORDER: tuple[DateCategory, ...] = OVERLAY_CATEGORIES + (DateCategory.QUIZ,)


class Semester(str, Enum):
    """Four-month teaching periods, keyed by their initial."""

    WINTER = "W"
    SPRING = "S"
    FALL = "F"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value.lower(), member.name.lower()):
                    return member
        return None

    @property
    def month_range(self) -> tuple[int, int]:
        """First and last calendar month (1-based, inclusive)."""
        return _SEMESTER_MONTHS[self]

    @property
    def months(self) -> list[int]:
        first, last = self.month_range
        return list(range(first, last + 1))


_SEMESTER_MONTHS: dict[Semester, tuple[int, int]] = {
    Semester.WINTER: (1, 4),
    Semester.SPRING: (5, 8),
    Semester.FALL: (9, 12),
}


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class CalendarInfo(BaseModel):
    """Everything needed to generate the calendar slides of one semester.

    Date lists may be given as a delimited string ("2024-01-10, 2024-01-17"),
    a list of ISO strings, or a list of ``date`` values.
    """

    semester: Semester
    year: int = Field(ge=1, le=9999)
    classes: list[date] = Field(default_factory=list)
    labs: list[date] = Field(default_factory=list)
    exams: list[date] = Field(default_factory=list)
    quizzes: list[date] = Field(default_factory=list)
    holidays: list[date] = Field(default_factory=list)

    @field_validator("semester", mode="before")
    @classmethod
    def _parse_semester(cls, value: Any) -> Semester:
        if isinstance(value, Semester):
            return value
        try:
            return Semester(value)
        except ValueError:
            keys = ", ".join(f"{s.value} ({s.name.lower()})" for s in Semester)
            raise ValueError(f"Unknown semester {value!r}. Use one of: {keys}") from None

    @field_validator("classes", "labs", "exams", "quizzes", "holidays", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> list[date]:
        return parse_date_list(value)

    def dates_for(self, category: DateCategory) -> list[date]:
        return {
            DateCategory.CLASS: self.classes,
            DateCategory.LAB: self.labs,
            DateCategory.EXAM: self.exams,
            DateCategory.QUIZ: self.quizzes,
            DateCategory.HOLIDAY: self.holidays,
        }[category]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CalendarInfo":
        """Load a calendar description from a YAML file."""
        return cls.model_validate(load_yaml(path, "Calendar"))


# ---------------------------------------------------------------------------
# Per-month plan and layout
# ---------------------------------------------------------------------------

class MonthSpec(BaseModel):
    """One month to render, with its dates already restricted to that month."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    dates: dict[DateCategory, list[date]] = Field(default_factory=dict)
    day_element_ids: list[str] = Field(
        default_factory=list,
        description="Day cell object ids, index 0 holds day 1",
    )

    def dates_of(self, category: DateCategory) -> list[date]:
        return self.dates.get(category) or []

    @property
    def present_categories(self) -> set[DateCategory]:
        """Categories with at least one date in this month."""
        return {category for category, dates in self.dates.items() if dates}


class MonthLayout(BaseModel):
    """Requests that draw the day grid, plus the id of every day cell."""

    requests: list[dict[str, Any]] = Field(default_factory=list)
    day_element_ids: list[str] = Field(default_factory=list)

    def element_id_for(self, day: date) -> str:
        return self.day_element_ids[day.day - 1]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class BatchResult(BaseModel):
    """Outcome of submitting one batch of requests."""

    ok: bool
    error: Optional[str] = None
    replies: list[dict[str, Any]] = Field(default_factory=list)


class MonthStatus(str, Enum):
    RENDERED = "rendered"        # page created and batch applied
    PARTIAL = "partial"          # page created, batch rejected
    NOT_CREATED = "not_created"  # page creation failed


class MonthResult(BaseModel):
    year: int
    month: int
    status: MonthStatus
    page_id: Optional[str] = None
    request_count: int = 0
    error: Optional[str] = None


class CalendarBuildResult(BaseModel):
    semester: Semester
    year: int
    months: list[MonthResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.months) and all(
            m.status == MonthStatus.RENDERED for m in self.months
        )

    @property
    def failed(self) -> list[MonthResult]:
        return [m for m in self.months if m.status != MonthStatus.RENDERED]

    def summary(self) -> str:
        rendered = len(self.months) - len(self.failed)
        return (
            f"{rendered}/{len(self.months)} month slides rendered "
            f"({self.semester.name.title()} {self.year})"
        )
