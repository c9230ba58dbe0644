# -*- coding: utf-8 -*-
"""Content calendar: API endpoints."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_admin
from ..config import settings
from ..exports import build_ics, resolve_timezone, to_csv
from ..exports.responses import csv_download, ics_download
from .models import (
    BulkCreateRequest,
    CalendarSlot,
    CalendarSlotInput,
    CalendarSlotUpdate,
    CalendarSuggestRequest,
    CalendarSuggestResponse,
    WeekView,
)
from .schedule import slot_to_event, upcoming, week_dates, week_range, week_stats
from .storage import bulk_create_slots, create_slot, delete_slot, get_slot, list_slots, update_slot
from .suggest import suggest_week

router = APIRouter(prefix="/api/calendar", tags=["Calendar"])
functions_router = APIRouter(prefix="/api/functions", tags=["Functions"])

_CSV_COLUMNS = [
    ("scheduled_date", "Date"),
    ("time_slot", "Time Slot"),
    ("platform", "Platform"),
    ("content_type", "Content Type"),
    ("title", "Title"),
    ("status", "Status"),
    ("strategy_type", "Strategy"),
    ("category", "Category"),
    ("hook", "Hook"),
    ("talking_points", "Talking Points"),
    ("cta", "CTA"),
    ("notes", "Notes"),
]


def _range(start: Optional[date], end: Optional[date], offset: int):
    if start and end:
        if end < start:
            raise HTTPException(status_code=400, detail="end must not be before start")
        return start, end
    return week_range(date.today(), offset)


@router.get("/week", response_model=WeekView, summary="Slots, stats and upcoming items for a week")
def week_view(
    offset: int = Query(default=0, description="Weeks relative to the current one"),
    user: dict = Depends(get_current_admin),
):
    today = date.today()
    start, end = week_range(today, offset)
    slots = list_slots(start, end)
    return WeekView(
        week_start=start.isoformat(),
        week_end=end.isoformat(),
        week_dates=[d.isoformat() for d in week_dates(start)],
        slots=slots,
        stats=week_stats(slots),
        upcoming=upcoming(slots, today),
    )


@router.get("/slots", response_model=List[CalendarSlot], summary="List slots in a date range")
def list_slots_api(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    offset: int = Query(default=0),
    user: dict = Depends(get_current_admin),
):
    return list_slots(*_range(start, end, offset))


@router.post("/slots", response_model=CalendarSlot, summary="Add a slot")
def create_slot_api(request: CalendarSlotInput, user: dict = Depends(get_current_admin)):
    return create_slot(request.model_dump())


@router.post("/slots/bulk", response_model=List[CalendarSlot], summary="Add several slots at once")
def bulk_create_api(request: BulkCreateRequest, user: dict = Depends(get_current_admin)):
    return bulk_create_slots([s.model_dump() for s in request.slots])


@router.get("/export.csv", summary="Export slots as CSV")
def export_csv(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    offset: int = Query(default=0),
    user: dict = Depends(get_current_admin),
):
    slots = list_slots(*_range(start, end, offset))
    return csv_download(to_csv(slots, _CSV_COLUMNS), "content-calendar")


@router.get("/export.ics", summary="Export slots as an iCalendar file")
def export_ics(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    offset: int = Query(default=0),
    tz: Optional[str] = Query(default=None, description="IANA timezone the slot times are in, e.g. America/Chicago"),
    user: dict = Depends(get_current_admin),
):
    zone = resolve_timezone(tz or settings.timezone)
    slots = list_slots(*_range(start, end, offset))
    content = build_ics([slot_to_event(s, zone) for s in slots], "-//Redeemed Strength//Content Calendar//EN")
    return ics_download(content, "content-calendar")


@router.get("/slots/{slot_id}", response_model=CalendarSlot, summary="Get a slot")
def get_slot_api(slot_id: str, user: dict = Depends(get_current_admin)):
    return get_slot(slot_id)


@router.patch("/slots/{slot_id}", response_model=CalendarSlot, summary="Update a slot")
def update_slot_api(slot_id: str, request: CalendarSlotUpdate, user: dict = Depends(get_current_admin)):
    return update_slot(slot_id, request.model_dump(exclude_unset=True))


@router.delete("/slots/{slot_id}", summary="Remove a slot")
def delete_slot_api(slot_id: str, user: dict = Depends(get_current_admin)):
    delete_slot(slot_id)
    return {"status": "ok"}


@functions_router.post(
    "/social-calendar-suggest",
    response_model=CalendarSuggestResponse,
    summary="Suggest a week of content slots via the LLM",
)
def social_calendar_suggest(request: CalendarSuggestRequest, user: dict = Depends(get_current_admin)):
    suggestions = suggest_week(
        week_start=request.week_start,
        active_platforms=request.active_platforms,
        posting_cadence=request.posting_cadence,
        content_pillars=request.content_pillars,
    )
    saved = bulk_create_slots(suggestions) if request.save and suggestions else []
    return CalendarSuggestResponse(
        suggestions=[{**s, "scheduled_date": s["scheduled_date"].isoformat()} for s in suggestions],
        saved=saved,
    )
