# -*- coding: utf-8 -*-
"""iCalendar (RFC 5545) document builder."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import uuid4
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import HTTPException

UID_DOMAIN = "redeemedstrength.com"
DEFAULT_PRODID = "-//Redeemed Strength//Calendar//EN"


@dataclass
class CalendarEvent:
    title: str
    start: datetime
    end: datetime
    description: str = ""
    location: Optional[str] = None
    id: Optional[str] = None


def escape_text(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def format_ics_datetime(value: datetime) -> str:
    # Naive datetimes are taken as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def resolve_timezone(name: str) -> ZoneInfo:
    """IANA zone name (``America/Chicago``) -> tzinfo; 400 when unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {name}")


def _event_uid(event: CalendarEvent) -> str:
    if event.id:
        return f"{event.id}-{format_ics_datetime(event.start)}@{UID_DOMAIN}"
    return f"{uuid4()}@{UID_DOMAIN}"


def build_ics(
    events: Iterable[CalendarEvent],
    prodid: str = DEFAULT_PRODID,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Build a VCALENDAR document with one VEVENT per event, CRLF terminated."""
    stamp = format_ics_datetime(now or datetime.now(timezone.utc))
    lines: List[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{prodid}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for event in events:
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:{_event_uid(event)}",
                f"DTSTAMP:{stamp}",
                f"DTSTART:{format_ics_datetime(event.start)}",
                f"DTEND:{format_ics_datetime(event.end)}",
                f"SUMMARY:{escape_text(event.title)}",
                f"DESCRIPTION:{escape_text(event.description or '')}",
            ]
        )
        if event.location:
            lines.append(f"LOCATION:{escape_text(event.location)}")
        lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines) + "\r\n"
