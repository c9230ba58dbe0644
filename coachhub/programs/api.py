# -*- coding: utf-8 -*-
"""Training programs: API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..auth.security import get_current_admin, get_current_user
from ..onboarding.storage import get_profile
from .models import (
    CategorySuggestion,
    DayWorkout,
    DayWorkoutInput,
    DayWorkoutUpdate,
    Exercise,
    ExerciseInput,
    ExerciseUpdate,
    PopulateResult,
    SuggestRequest,
    Track,
    TrackInput,
    Week,
    WeekDetail,
    WeekInput,
)
from .seed import populate_workouts
from .storage import (
    create_day_workout,
    create_exercise,
    create_track,
    create_week,
    delete_day_workout,
    delete_exercise,
    get_day_workout,
    get_week_detail,
    list_tracks,
    list_weeks,
    update_day_workout,
    update_exercise,
)
from .suggest import suggest_categories

router = APIRouter(prefix="/api/programs", tags=["Programs"])
functions_router = APIRouter(prefix="/api/functions", tags=["Functions"])


@router.get("/tracks", response_model=List[Track], summary="List program tracks")
def list_tracks_api(user: dict = Depends(get_current_user)):
    return list_tracks()


@router.post("/tracks", response_model=Track, summary="Create a program track")
def create_track_api(request: TrackInput, user: dict = Depends(get_current_admin)):
    return create_track(request.model_dump())


@router.get("/tracks/{track_id}/weeks", response_model=List[Week], summary="List a track's weeks")
def list_weeks_api(track_id: str, user: dict = Depends(get_current_user)):
    return list_weeks(track_id)


@router.post("/tracks/{track_id}/weeks", response_model=Week, summary="Add a week to a track")
def create_week_api(track_id: str, request: WeekInput, user: dict = Depends(get_current_admin)):
    return create_week(track_id, request.model_dump())


@router.get("/weeks/{week_id}", response_model=WeekDetail, summary="Week with day workouts and exercises")
def get_week_api(week_id: str, user: dict = Depends(get_current_user)):
    return get_week_detail(week_id)


@router.post("/weeks/{week_id}/days", response_model=DayWorkout, summary="Add a day workout")
def create_day_api(week_id: str, request: DayWorkoutInput, user: dict = Depends(get_current_admin)):
    return create_day_workout(week_id, request.model_dump())


@router.get("/days/{workout_id}", response_model=DayWorkout, summary="Day workout with exercises")
def get_day_api(workout_id: str, user: dict = Depends(get_current_user)):
    return get_day_workout(workout_id)


@router.patch("/days/{workout_id}", response_model=DayWorkout, summary="Update a day workout")
def update_day_api(workout_id: str, request: DayWorkoutUpdate, user: dict = Depends(get_current_admin)):
    return update_day_workout(workout_id, request.model_dump(exclude_unset=True))


@router.delete("/days/{workout_id}", summary="Delete a day workout and its exercises")
def delete_day_api(workout_id: str, user: dict = Depends(get_current_admin)):
    delete_day_workout(workout_id)
    return {"status": "ok"}


@router.post("/days/{workout_id}/exercises", response_model=Exercise, summary="Add an exercise")
def create_exercise_api(workout_id: str, request: ExerciseInput, user: dict = Depends(get_current_admin)):
    return create_exercise(workout_id, request.model_dump())


@router.patch("/exercises/{exercise_id}", response_model=Exercise, summary="Update an exercise")
def update_exercise_api(exercise_id: str, request: ExerciseUpdate, user: dict = Depends(get_current_admin)):
    return update_exercise(exercise_id, request.model_dump(exclude_unset=True))


@router.delete("/exercises/{exercise_id}", summary="Delete an exercise")
def delete_exercise_api(exercise_id: str, user: dict = Depends(get_current_admin)):
    delete_exercise(exercise_id)
    return {"status": "ok"}


@router.post("/suggest-category", response_model=CategorySuggestion, summary="Rank program categories for a profile")
def suggest_category_api(request: SuggestRequest, user: dict = Depends(get_current_user)):
    if request.profile is not None:
        profile = request.profile.model_dump()
    else:
        profile = get_profile(user["id"]) or {}
    return suggest_categories(profile)


@functions_router.post("/populate-workouts", response_model=PopulateResult, summary="Seed day workouts and exercises")
def populate_workouts_api(user: dict = Depends(get_current_admin)):
    return populate_workouts()
