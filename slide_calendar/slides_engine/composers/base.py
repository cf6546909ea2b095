"""Base composer providing shared element helpers.

All composers inherit from BaseComposer and implement compose() to emit
the requests for one part of a month slide. Composers hold no state
besides the injected theme and id factory, so the same instance can
compose any number of months.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Callable, Optional

from slide_calendar.schemas.calendar_schema import MonthSpec
from slide_calendar.schemas.theme import CalendarTheme, ElementScale, ShapeStyle, TextStyle
from slide_calendar.slides_engine.requests import (
    Request,
    create_shape_request,
    label_requests,
    text_element_requests,
    update_shape_request,
)

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_uuid() -> str:
    return str(uuid.uuid4())


class BaseComposer(ABC):
    """Abstract base for all month-slide composers.

    Args:
        theme: Geometry, styles and labels to lay out with.
        id_factory: Returns a fresh, unique object id per call. Defaults
            to UUID4 strings.
    """

    def __init__(self, theme: Optional[CalendarTheme] = None, id_factory: Optional[IdFactory] = None):
        self.theme = theme or CalendarTheme()
        self.id_factory = id_factory or new_uuid

    @abstractmethod
    def compose(self, page_id: str, spec: MonthSpec) -> list[Request]:
        """Build the requests for this composer's part of the slide.

        Args:
            page_id: The (already created) slide to draw on.
            spec: The month being drawn, with dates restricted to it.
        """
        ...

    # ------------------------------------------------------------------
    # Element helpers
    # ------------------------------------------------------------------

    def new_id(self) -> str:
        return self.id_factory()

    def text_element(
        self,
        page_id: str,
        text: str,
        scale: ElementScale,
        translate_x: float,
        translate_y: float,
        shape_style: ShapeStyle,
        text_style: TextStyle,
    ) -> tuple[str, list[Request]]:
        """A styled shape with centered text. Returns (element id, requests)."""
        element_id = self.new_id()
        requests = text_element_requests(
            page_id,
            element_id,
            text,
            shape_style.shape_type or self.theme.styles.default_shape,
            scale.scale_x,
            scale.scale_y,
            translate_x,
            translate_y,
            shape_style,
            text_style,
            magnitude=self.theme.magnitude,
        )
        return element_id, requests

    def shape(
        self,
        page_id: str,
        scale: ElementScale,
        translate_x: float,
        translate_y: float,
        style: ShapeStyle,
    ) -> list[Request]:
        """A styled shape without text."""
        element_id = self.new_id()
        return [
            create_shape_request(
                page_id,
                element_id,
                style.shape_type or self.theme.styles.default_shape,
                scale.scale_x,
                scale.scale_y,
                translate_x,
                translate_y,
                magnitude=self.theme.magnitude,
            ),
            update_shape_request(element_id, style),
        ]

    def label(
        self,
        page_id: str,
        text: str,
        scale: ElementScale,
        translate_x: float,
        translate_y: float,
        alignment: str = "CENTER",
    ) -> list[Request]:
        """A text box in the theme's label style."""
        return label_requests(
            page_id,
            self.new_id(),
            text,
            scale.scale_x,
            scale.scale_y,
            translate_x,
            translate_y,
            self.theme.styles.label_text,
            alignment=alignment,
            magnitude=self.theme.magnitude,
        )
