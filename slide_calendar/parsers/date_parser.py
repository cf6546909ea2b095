"""Parser for the delimited date lists entered by users."""

import re
from datetime import date, datetime
from typing import Any

# Lists are normally ", "-separated; semicolons and newlines work too
_SEPARATORS = re.compile(r"[,;\n]+")


def parse_date(value: str | date) -> date:
    """Parse one ISO date (YYYY-MM-DD) into a calendar date.

    Datetimes are truncated to their date, so no time zone ever shifts
    the day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO date string, got: {value!r}")
    text = value.strip()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"Invalid date {text!r}: expected YYYY-MM-DD") from exc


def parse_date_list(value: Any) -> list[date]:
    """Parse a delimited string or a sequence into a list of dates.

    ``None`` and blank strings give an empty list. Order and duplicates
    are preserved.
    """
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        items = [part.strip() for part in _SEPARATORS.split(value)]
        return [parse_date(item) for item in items if item]
    if isinstance(value, (date, datetime)):
        return [parse_date(value)]
    try:
        items = list(value)
    except TypeError:
        raise ValueError(f"Expected a date list, got: {value!r}") from None
    return [parse_date(item) for item in items]
