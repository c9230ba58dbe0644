# -*- coding: utf-8 -*-
"""Content calendar: Pydantic models."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

SlotStatus = Literal["planned", "drafted", "recorded", "posted", "skipped"]
Platform = Literal["instagram", "tiktok", "youtube", "twitter"]
TimeSlot = Literal["morning", "afternoon", "evening"]


class CalendarSlotInput(BaseModel):
    scheduled_date: date
    time_slot: TimeSlot
    platform: Platform
    content_type: Optional[str] = None
    content_post_id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    notes: Optional[str] = None
    hook: Optional[str] = None
    talking_points: List[str] = Field(default_factory=list)
    filming_tips: Optional[str] = None
    cta: Optional[str] = None
    strategy_type: Optional[str] = None
    category: Optional[str] = None
    status: SlotStatus = "planned"


class CalendarSlotUpdate(BaseModel):
    scheduled_date: Optional[date] = None
    time_slot: Optional[TimeSlot] = None
    platform: Optional[Platform] = None
    content_type: Optional[str] = None
    content_post_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    notes: Optional[str] = None
    hook: Optional[str] = None
    talking_points: Optional[List[str]] = None
    filming_tips: Optional[str] = None
    cta: Optional[str] = None
    strategy_type: Optional[str] = None
    category: Optional[str] = None
    status: Optional[SlotStatus] = None


class CalendarSlot(BaseModel):
    id: str
    scheduled_date: str
    day_of_week: int
    time_slot: TimeSlot
    platform: Platform
    content_type: Optional[str] = None
    content_post_id: Optional[str] = None
    title: str
    notes: Optional[str] = None
    hook: Optional[str] = None
    talking_points: List[str] = Field(default_factory=list)
    filming_tips: Optional[str] = None
    cta: Optional[str] = None
    strategy_type: Optional[str] = None
    category: Optional[str] = None
    status: SlotStatus
    created_at: str
    updated_at: str


class WeekStats(BaseModel):
    total: int
    posted: int
    planned: int
    drafted: int
    recorded: int
    remaining: int


class WeekView(BaseModel):
    week_start: str
    week_end: str
    week_dates: List[str]
    slots: List[CalendarSlot]
    stats: WeekStats
    upcoming: List[CalendarSlot]


class BulkCreateRequest(BaseModel):
    slots: List[CalendarSlotInput] = Field(..., min_length=1)


class CalendarSuggestRequest(BaseModel):
    week_start: date
    active_platforms: List[Platform] = Field(default_factory=lambda: ["instagram", "tiktok"])
    posting_cadence: Dict[str, int] = Field(default_factory=dict, description="Posts per week per platform")
    content_pillars: List[str] = Field(default_factory=list)
    save: bool = False


class CalendarSuggestResponse(BaseModel):
    suggestions: List[Dict] = Field(default_factory=list)
    saved: List[CalendarSlot] = Field(default_factory=list)
