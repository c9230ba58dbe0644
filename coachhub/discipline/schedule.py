# -*- coding: utf-8 -*-
"""Sequential routine scheduling and calendar export."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Sequence, Tuple

from ..exports import CalendarEvent, build_ics

DEFAULT_DURATION_MINUTES = 5
DEFAULT_START = (8, 0)

_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)?", re.IGNORECASE)

PROTOCOL_NAMES = {"morning": "Lights On", "evening": "Lights Out"}


def parse_time_string(value: str) -> Tuple[int, int]:
    """``"5:30 AM"`` -> ``(5, 30)``; anything unparsable is 8:00."""
    match = _TIME_RE.search(value or "")
    if not match:
        return DEFAULT_START
    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = (match.group(3) or "").upper()
    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0
    if hours > 23 or minutes > 59:
        return DEFAULT_START
    return hours, minutes


def complete_link(routine_id: str, routine_type: str, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/dashboard/discipline?complete={routine_id}&type={routine_type}"


def sequential_events(
    routines: Sequence[Dict[str, Any]],
    start: datetime,
    *,
    base_url: str,
) -> List[CalendarEvent]:
    events: List[CalendarEvent] = []
    current = start
    for routine in routines:
        duration = routine.get("duration_minutes") or DEFAULT_DURATION_MINUTES
        end = current + timedelta(minutes=duration)
        protocol = PROTOCOL_NAMES.get(routine["routine_type"], "Discipline")
        description = "\n".join(
            part
            for part in (
                routine.get("description") or "",
                "---",
                f"Mark Complete: {complete_link(routine['id'], routine['routine_type'], base_url)}",
                f"Redeemed Strength - {protocol} Protocol",
            )
            if part
        )
        events.append(
            CalendarEvent(id=routine["id"], title=routine["action_text"], start=current, end=end, description=description)
        )
        current = end
    return events


def routines_ics(
    routines: Sequence[Dict[str, Any]],
    *,
    day: date,
    start_time: str | None,
    base_url: str,
    tz: tzinfo = timezone.utc,
) -> str:
    """Lay the routines out back to back from a wall-clock start in ``tz``."""
    if start_time:
        hours, minutes = parse_time_string(start_time)
    elif routines:
        hours, minutes = parse_time_string(routines[0]["time_slot"])
    else:
        hours, minutes = DEFAULT_START
    start = datetime.combine(day, time(hours, minutes), tzinfo=tz)
    return build_ics(
        sequential_events(routines, start, base_url=base_url),
        "-//Redeemed Strength//Discipline//EN",
    )
