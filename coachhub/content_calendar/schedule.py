# -*- coding: utf-8 -*-
"""Week arithmetic, slot statistics and calendar export shaping."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exports import CalendarEvent

TIME_SLOT_ORDER = {"morning": 0, "afternoon": 1, "evening": 2}
TIME_SLOT_START = {"morning": time(9, 0), "afternoon": time(13, 0), "evening": time(18, 0)}
SLOT_EVENT_MINUTES = 30

OPEN_STATUSES = ("planned", "drafted", "recorded")
CLOSED_STATUSES = ("posted", "skipped")


def day_of_week(value: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (value.weekday() + 1) % 7


def week_range(today: date, offset: int = 0) -> Tuple[date, date]:
    start = today - timedelta(days=day_of_week(today)) + timedelta(weeks=offset)
    return start, start + timedelta(days=6)


def week_dates(start: date) -> List[date]:
    return [start + timedelta(days=i) for i in range(7)]


def sort_slots(slots: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(
        slots,
        key=lambda s: (s["scheduled_date"], TIME_SLOT_ORDER.get(s["time_slot"], 99), s.get("created_at") or ""),
    )


def week_stats(slots: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    slots = list(slots)
    counts = {status: 0 for status in ("posted", "planned", "drafted", "recorded")}
    for slot in slots:
        if slot["status"] in counts:
            counts[slot["status"]] += 1
    return {
        "total": len(slots),
        **counts,
        "remaining": sum(counts[s] for s in OPEN_STATUSES),
    }


def upcoming(slots: Iterable[Dict[str, Any]], today: date, limit: int = 5) -> List[Dict[str, Any]]:
    today_s = today.isoformat()
    pending = [s for s in slots if s["scheduled_date"] >= today_s and s["status"] not in CLOSED_STATUSES]
    return sort_slots(pending)[:limit]


def _slot_description(slot: Dict[str, Any]) -> str:
    parts: List[str] = []
    if slot.get("strategy_type"):
        parts.append(f"Strategy: {slot['strategy_type']}")
    if slot.get("category"):
        parts.append(f"Category: {slot['category']}")
    if slot.get("content_type"):
        parts.append(f"Format: {slot['content_type']}")
    if slot.get("hook"):
        parts.append(f"Hook: {slot['hook']}")
    points = slot.get("talking_points") or []
    if points:
        parts.append("Talking points:")
        parts.extend(f"- {p}" for p in points)
    if slot.get("filming_tips"):
        parts.append(f"Filming tips: {slot['filming_tips']}")
    if slot.get("cta"):
        parts.append(f"CTA: {slot['cta']}")
    if slot.get("notes"):
        parts.append(f"Notes: {slot['notes']}")
    return "\n".join(parts)


def slot_to_event(slot: Dict[str, Any], tz: tzinfo = timezone.utc) -> CalendarEvent:
    day = date.fromisoformat(slot["scheduled_date"])
    slot_time = TIME_SLOT_START.get(slot["time_slot"], TIME_SLOT_START["morning"])
    start = datetime.combine(day, slot_time, tzinfo=tz)
    return CalendarEvent(
        id=slot.get("id"),
        title=f"[{slot['platform'].upper()}] {slot['title']}",
        start=start,
        end=start + timedelta(minutes=SLOT_EVENT_MINUTES),
        description=_slot_description(slot),
    )


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None
