"""Google Slides backend.

Talks to the Slides v1 API through ``googleapiclient``. Layouts are looked
up by their name or display name in the presentation's layouts; requests
are sent with ``presentations().batchUpdate``, which Google applies
atomically. HTTP errors and transport failures (timeouts, dropped
connections) surface as ``BackendError`` or as a failed ``BatchResult``.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from google.auth.exceptions import TransportError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from slide_calendar.backends.base import SlidesBackend
from slide_calendar.errors import BackendError, LayoutNotFoundError
from slide_calendar.schemas.calendar_schema import BatchResult
from slide_calendar.slides_engine.requests import Request, create_slide_request

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/presentations"]


class GoogleSlidesBackend(SlidesBackend):
    """Slides backend for one Google Slides presentation.

    Args:
        service: A Slides v1 service resource (``build("slides", "v1", ...)``).
        presentation_id: Id of the presentation to add calendar slides to.
    """

    def __init__(self, service: Any, presentation_id: str):
        self.service = service
        self.presentation_id = presentation_id
        self._layouts: Optional[dict[str, str]] = None

    @classmethod
    def from_service_account_file(
        cls,
        credentials_path: str | Path,
        presentation_id: str,
    ) -> "GoogleSlidesBackend":
        """Authenticate with a service-account key file."""
        credentials_path = Path(credentials_path)
        if not credentials_path.exists():
            raise FileNotFoundError(f"Credentials file not found: {credentials_path}")
        creds = service_account.Credentials.from_service_account_file(
            str(credentials_path), scopes=SCOPES
        )
        service = build("slides", "v1", credentials=creds, cache_discovery=False)
        return cls(service, presentation_id)

    # ------------------------------------------------------------------
    # Layouts
    # ------------------------------------------------------------------

    def layouts(self) -> dict[str, str]:
        """Map of lower-cased layout names and display names to layout ids."""
        if self._layouts is None:
            try:
                presentation = self.service.presentations().get(
                    presentationId=self.presentation_id,
                    fields="layouts(objectId,layoutProperties)",
                ).execute()
            except (HttpError, TransportError, OSError) as e:
                raise BackendError(f"Could not read layouts of {self.presentation_id}: {e}") from e

            layouts: dict[str, str] = {}
            for layout in presentation.get("layouts", []):
                props = layout.get("layoutProperties", {})
                for key in (props.get("name"), props.get("displayName")):
                    if key:
                        layouts.setdefault(key.lower(), layout["objectId"])
            self._layouts = layouts
            logger.debug(f"Found {len(layouts)} layout names in {self.presentation_id}")
        return self._layouts

    def resolve_layout(self, layout_name: str) -> str:
        layouts = self.layouts()
        layout_id = layouts.get(layout_name.lower())
        if layout_id is None:
            raise LayoutNotFoundError(layout_name, sorted(layouts))
        return layout_id

    # ------------------------------------------------------------------
    # Pages and batches
    # ------------------------------------------------------------------

    def new_page(self, layout_name: str) -> str:
        layout_id = self.resolve_layout(layout_name)
        page_id = self.new_unique_id()
        try:
            response = self.service.presentations().batchUpdate(
                presentationId=self.presentation_id,
                body={"requests": [create_slide_request(page_id, layout_id)]},
            ).execute()
        except (HttpError, TransportError, OSError) as e:
            raise BackendError(f"Could not create slide from layout {layout_name!r}: {e}") from e
        return response["replies"][0]["createSlide"]["objectId"]

    def submit_batch(self, requests: list[Request]) -> BatchResult:
        if not requests:
            return BatchResult(ok=True)
        try:
            response = self.service.presentations().batchUpdate(
                presentationId=self.presentation_id,
                body={"requests": requests},
            ).execute()
        except (HttpError, TransportError, OSError) as e:
            logger.error(f"Batch of {len(requests)} requests failed: {e}")
            return BatchResult(ok=False, error=str(e))
        return BatchResult(ok=True, replies=response.get("replies", []))
