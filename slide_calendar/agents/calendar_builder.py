"""Calendar Builder Agent.

Drives a SlidesBackend through one semester: for every month it creates a
slide, composes the month's requests and submits them as a single batch.
Months are processed strictly one after another; a month that fails is
recorded in the result and the run moves on to the next one.
"""

import logging
from typing import Optional

from slide_calendar.backends.base import SlidesBackend
from slide_calendar.errors import BackendError
from slide_calendar.schemas.calendar_schema import (
    CalendarBuildResult,
    CalendarInfo,
    MonthResult,
    MonthStatus,
)
from slide_calendar.schemas.theme import CalendarTheme
from slide_calendar.slides_engine.classification import month_spec
from slide_calendar.slides_engine.composers import MonthSlideComposer

logger = logging.getLogger(__name__)


class CalendarBuilderAgent:
    """Build one calendar slide per month of a semester.

    Args:
        backend: Presentation to add the month slides to.
        theme: Geometry, styles and labels. Defaults to the built-in theme.
    """

    DEFAULT_LAYOUT = "Blank"

    def __init__(self, backend: SlidesBackend, theme: Optional[CalendarTheme] = None):
        self.backend = backend
        self.theme = theme or CalendarTheme()
        self.composer = MonthSlideComposer(self.theme, backend.new_unique_id)

    def build(self, info: CalendarInfo, layout_name: str = DEFAULT_LAYOUT) -> CalendarBuildResult:
        """Render every month of ``info.semester``.

        Raises:
            LayoutNotFoundError: if ``layout_name`` is not in the presentation.
                Checked before any slide is created.
        """
        self.backend.resolve_layout(layout_name)

        result = CalendarBuildResult(semester=info.semester, year=info.year)
        for month in info.semester.months:
            month_result = self._build_month(info, month, layout_name)
            result.months.append(month_result)

        logger.info(result.summary())
        return result

    def _build_month(self, info: CalendarInfo, month: int, layout_name: str) -> MonthResult:
        label = f"{info.year}-{month:02d}"
        try:
            page_id = self.backend.new_page(layout_name)
        except BackendError as e:
            logger.warning(f"{label}: slide not created ({e})")
            return MonthResult(
                year=info.year, month=month, status=MonthStatus.NOT_CREATED, error=str(e)
            )

        spec = month_spec(info, month)
        requests = self.composer.compose(page_id, spec)
        logger.debug(f"{label}: submitting {len(requests)} requests to page {page_id}")

        batch = self.backend.submit_batch(requests)
        if not batch.ok:
            logger.warning(f"{label}: slide {page_id} left partially rendered")
            return MonthResult(
                year=info.year,
                month=month,
                status=MonthStatus.PARTIAL,
                page_id=page_id,
                request_count=len(requests),
                error=batch.error,
            )

        logger.info(f"{label}: rendered {self.theme.month_name(month)} ({len(requests)} requests)")
        return MonthResult(
            year=info.year,
            month=month,
            status=MonthStatus.RENDERED,
            page_id=page_id,
            request_count=len(requests),
        )
