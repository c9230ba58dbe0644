# -*- coding: utf-8 -*-
"""Training programs: Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Phase = Literal["foundation", "build", "peak"]
SectionType = Literal["warmup", "main", "finisher", "cooldown"]
DayOfWeek = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class TrackInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    goal_match: Optional[str] = None


class Track(TrackInput):
    id: str
    created_at: str


class WeekInput(BaseModel):
    week_number: int = Field(..., ge=1)
    phase: Phase = "foundation"
    title: Optional[str] = None


class Week(WeekInput):
    id: str
    track_id: str
    created_at: str


class DayWorkoutInput(BaseModel):
    day_of_week: DayOfWeek
    workout_name: str = Field(..., min_length=1, max_length=160)
    workout_description: Optional[str] = None
    is_rest_day: bool = False
    display_order: Optional[int] = None


class DayWorkoutUpdate(BaseModel):
    workout_name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    workout_description: Optional[str] = None
    is_rest_day: Optional[bool] = None
    display_order: Optional[int] = None


class ExerciseInput(BaseModel):
    section_type: SectionType = "main"
    exercise_name: str = Field(..., min_length=1, max_length=160)
    sets: Optional[str] = None
    reps_or_time: Optional[str] = None
    rest: Optional[str] = None
    notes: Optional[str] = None
    scaling_options: Optional[str] = None
    display_order: Optional[int] = None


class ExerciseUpdate(BaseModel):
    section_type: Optional[SectionType] = None
    exercise_name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    sets: Optional[str] = None
    reps_or_time: Optional[str] = None
    rest: Optional[str] = None
    notes: Optional[str] = None
    scaling_options: Optional[str] = None
    display_order: Optional[int] = None


class Exercise(BaseModel):
    id: str
    day_workout_id: str
    section_type: SectionType
    exercise_name: str
    sets: Optional[str] = None
    reps_or_time: Optional[str] = None
    rest: Optional[str] = None
    notes: Optional[str] = None
    scaling_options: Optional[str] = None
    display_order: int = 0
    created_at: str
    updated_at: str


class DayWorkout(BaseModel):
    id: str
    week_id: str
    day_of_week: DayOfWeek
    workout_name: str
    workout_description: Optional[str] = None
    is_rest_day: bool = False
    display_order: int = 0
    created_at: str
    updated_at: str
    exercises: List[Exercise] = Field(default_factory=list)


class WeekDetail(Week):
    track_name: str
    days: List[DayWorkout] = Field(default_factory=list)


class PopulateResult(BaseModel):
    day_workouts_created: int
    exercises_created: int
    message: str


class SuggestProfile(BaseModel):
    experience: Optional[str] = None
    body_fat_estimate: Optional[str] = None
    activity_level: Optional[str] = None
    training_days_per_week: Optional[int] = Field(default=None, ge=0, le=7)
    injuries: Optional[str] = None
    goal: Optional[str] = None


class SuggestRequest(BaseModel):
    profile: Optional[SuggestProfile] = Field(
        default=None, description="Falls back to the caller's saved intake profile"
    )


class CategoryScore(BaseModel):
    category: str
    score: int
    reasons: List[str]
    match_quality: str


class CategorySuggestion(BaseModel):
    recommended: Optional[CategoryScore] = None
    scored_categories: List[CategoryScore]
