# -*- coding: utf-8 -*-
"""Onboarding: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import IntakeRequest, ProfileResponse
from .storage import require_profile, save_intake

router = APIRouter(prefix="/api/onboarding", tags=["Onboarding"])


@router.get("/profile", response_model=ProfileResponse, summary="Get my intake profile")
def get_my_profile(user: dict = Depends(get_current_user)):
    return ProfileResponse.model_validate(require_profile(user["id"]))


@router.put("/intake", response_model=ProfileResponse, summary="Save intake answers")
def submit_intake(request: IntakeRequest, user: dict = Depends(get_current_user)):
    profile = save_intake(user["id"], user["email"], request.model_dump())
    return ProfileResponse.model_validate(profile)
