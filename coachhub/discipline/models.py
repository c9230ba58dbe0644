# -*- coding: utf-8 -*-
"""Discipline: Pydantic models."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

RoutineType = Literal["morning", "evening"]
TemplateCategory = Literal["general", "beginner", "advanced", "military", "faith_focused"]


class RoutineInput(BaseModel):
    routine_type: RoutineType
    time_slot: str = Field(..., min_length=1, max_length=40, description="Display time, e.g. '5:30 AM'")
    action_text: str = Field(..., min_length=1, max_length=300)
    display_order: Optional[int] = Field(default=None, ge=0, description="Appended at the end when omitted")
    is_active: bool = True
    duration_minutes: int = Field(default=5, ge=1, le=600)
    description: Optional[str] = None


class RoutineUpdate(BaseModel):
    routine_type: Optional[RoutineType] = None
    time_slot: Optional[str] = Field(default=None, min_length=1, max_length=40)
    action_text: Optional[str] = Field(default=None, min_length=1, max_length=300)
    display_order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=600)
    description: Optional[str] = None


class Routine(BaseModel):
    id: str
    routine_type: RoutineType
    time_slot: str
    action_text: str
    display_order: int
    is_active: bool
    duration_minutes: int
    description: Optional[str] = None
    created_at: str
    updated_at: str


class ReorderRequest(BaseModel):
    routine_type: RoutineType
    routine_ids: List[str] = Field(..., min_length=1)


class CompletionToggleRequest(BaseModel):
    routine_id: str
    completion_date: Optional[date] = None


class CompletionToggleResponse(BaseModel):
    routine_id: str
    completion_date: str
    completed: bool


class Compliance(BaseModel):
    date: str
    completed: int
    total: int
    percent: int
    completed_routine_ids: List[str] = Field(default_factory=list)


class RoutineItem(BaseModel):
    routine_type: RoutineType
    time_slot: str
    action_text: str
    display_order: int = 0
    duration_minutes: Optional[int] = None


class TemplateInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    category: TemplateCategory = "general"
    routines: List[RoutineItem] = Field(default_factory=list)
    is_active: bool = True
    display_order: int = 0


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    category: Optional[TemplateCategory] = None
    routines: Optional[List[RoutineItem]] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class Template(TemplateInput):
    id: str
    created_at: str
    updated_at: str


class ApplyTemplateRequest(BaseModel):
    replace: bool = Field(default=True, description="Replace existing routines of the same types")


class SubStepInput(BaseModel):
    template_id: str
    routine_index: int = Field(..., ge=0)
    action_text: str = Field(..., min_length=1, max_length=300)
    duration_seconds: Optional[int] = Field(default=None, ge=0)


class SubStepUpdate(BaseModel):
    action_text: Optional[str] = Field(default=None, min_length=1, max_length=300)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    step_order: Optional[int] = Field(default=None, ge=0)


class SubStep(BaseModel):
    id: str
    template_id: str
    routine_index: int
    step_order: int
    action_text: str
    duration_seconds: Optional[int] = None
    created_at: str


class SubStepGroups(BaseModel):
    template_id: str
    groups: Dict[int, List[SubStep]]
