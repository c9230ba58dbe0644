"""CSV, iCalendar and plain-text export helpers."""

from .csv_export import to_csv
from .ics import CalendarEvent, build_ics, format_ics_datetime, resolve_timezone
from .text import format_script_as_text

__all__ = [
    "CalendarEvent",
    "build_ics",
    "format_ics_datetime",
    "format_script_as_text",
    "resolve_timezone",
    "to_csv",
]
