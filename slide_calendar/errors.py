"""Custom exceptions for calendar generation."""

from __future__ import annotations


class CalendarError(Exception):
    """Base class for calendar generation errors."""


class LayoutNotFoundError(CalendarError, LookupError):
    """Raised when the requested slide layout does not exist in the deck."""

    def __init__(self, layout_name: str, available: list[str] | None = None):
        self.layout_name = layout_name
        self.available = list(available or [])
        message = f"Layout not found: {layout_name!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class BackendError(CalendarError):
    """Raised when the presentation backend cannot complete an operation."""


class InvalidBatchError(BackendError, ValueError):
    """Raised when a request batch is rejected before being applied."""

    def __init__(self, issues: list[str]):
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid request batch"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = ["Request batch rejected:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)
