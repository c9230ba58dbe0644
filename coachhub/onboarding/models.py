# -*- coding: utf-8 -*-
"""Onboarding: Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class IntakeRequest(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=80)
    last_name: Optional[str] = Field(default=None, max_length=80)
    goal: Optional[str] = Field(default=None, description="fat_loss | muscle_gain | recomposition, or the wizard label")
    activity_level: Optional[str] = Field(default=None, description="sedentary | light | moderate | active | very_active (lightly_active and moderately_active accepted)")
    weight: Optional[str] = Field(default=None, description="Pounds, e.g. '185' or '185 lbs'")
    height: Optional[str] = Field(default=None, description="Feet and inches, e.g. 5'10\"")
    age: Optional[int] = Field(default=None, ge=13, le=120)
    experience: Optional[str] = None
    body_fat_estimate: Optional[str] = None
    training_days_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    injuries: Optional[str] = None
    dietary_restrictions: Optional[str] = Field(default=None, description="Comma separated")


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    goal: Optional[str] = None
    activity_level: Optional[str] = None
    weight: Optional[str] = None
    height: Optional[str] = None
    age: Optional[int] = None
    experience: Optional[str] = None
    body_fat_estimate: Optional[str] = None
    training_days_per_week: Optional[int] = None
    injuries: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    intake_completed_at: Optional[str] = None
    created_at: str
    updated_at: str
