"""Contract between the calendar builder and a presentation document."""

import uuid
from abc import ABC, abstractmethod

from slide_calendar.schemas.calendar_schema import BatchResult
from slide_calendar.slides_engine.requests import Request


class SlidesBackend(ABC):
    """A presentation that slides can be added to and mutated in batches.

    Implementations apply requests in the Slides batchUpdate format. Access
    is strictly sequential: callers never submit two batches concurrently.
    """

    @abstractmethod
    def resolve_layout(self, layout_name: str) -> str:
        """Return the id of the named layout.

        Raises:
            LayoutNotFoundError: if no layout has that name.
        """
        ...

    @abstractmethod
    def new_page(self, layout_name: str) -> str:
        """Create a slide from the named layout and return its page id.

        Raises:
            LayoutNotFoundError: if no layout has that name.
            BackendError: if the slide could not be created.
        """
        ...

    @abstractmethod
    def submit_batch(self, requests: list[Request]) -> BatchResult:
        """Apply an ordered list of requests as one batch.

        Failures are reported in the returned result, never raised.
        """
        ...

    def new_unique_id(self) -> str:
        """A globally unique object id for a new element."""
        return str(uuid.uuid4())
