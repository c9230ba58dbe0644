# -*- coding: utf-8 -*-
"""Onboarding: profile storage."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, update_columns, utc_now
from ..config import settings

logger = logging.getLogger(__name__)

INTAKE_FIELDS = (
    "first_name",
    "last_name",
    "goal",
    "activity_level",
    "weight",
    "height",
    "age",
    "experience",
    "body_fat_estimate",
    "training_days_per_week",
    "injuries",
    "dietary_restrictions",
)


def insert_profile(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    email: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    intake_completed: bool = False,
) -> str:
    profile_id = str(uuid4())
    now = utc_now()
    conn.execute(
        """
        INSERT INTO profiles (
            id, user_id, email, first_name, last_name, intake_completed_at, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (profile_id, user_id, email, first_name, last_name, now if intake_completed else None, now, now),
    )
    return profile_id


def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def save_intake(user_id: str, email: str, answers: Dict[str, Any]) -> Dict[str, Any]:
    """Store the wizard answers on the member's profile and stamp completion."""
    changes = {k: answers[k] for k in INTAKE_FIELDS if answers.get(k) is not None}
    changes["intake_completed_at"] = utc_now()
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT id FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        profile_id = row["id"] if row else insert_profile(conn, user_id=user_id, email=email)
        update_columns(conn, "profiles", profile_id, changes)
        saved = conn.execute("SELECT * FROM profiles WHERE id = ?", (profile_id,)).fetchone()
    logger.info("Saved intake for user %s", user_id)
    return dict(saved)


def require_profile(user_id: str) -> Dict[str, Any]:
    profile = get_profile(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
