# -*- coding: utf-8 -*-
"""Training programs: tracks, weeks, day workouts and exercises (SQLite)."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, row_to_dict, update_columns, utc_now
from ..config import settings

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_SECTION_ORDER = """
    CASE section_type
        WHEN 'warmup' THEN 0 WHEN 'main' THEN 1 WHEN 'finisher' THEN 2 WHEN 'cooldown' THEN 3 ELSE 4
    END
"""
_WORKOUT_REQUIRED = ("workout_name", "is_rest_day", "display_order")
_EXERCISE_REQUIRED = ("section_type", "exercise_name", "display_order")


def _workout(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, bool_fields=("is_rest_day",))


# ---------- Tracks and weeks ----------


def list_tracks() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT * FROM program_tracks ORDER BY name").fetchall()
    return [dict(r) for r in rows]


def create_track(item: Dict[str, Any]) -> Dict[str, Any]:
    track_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO program_tracks (id, name, goal_match, created_at) VALUES (?, ?, ?, ?)",
            (track_id, item["name"], item.get("goal_match"), utc_now()),
        )
        row = conn.execute("SELECT * FROM program_tracks WHERE id = ?", (track_id,)).fetchone()
    logger.info("Created program track %s", item["name"])
    return dict(row)


def list_weeks(track_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM program_tracks WHERE id = ?", (track_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Program track not found")
        rows = conn.execute(
            "SELECT * FROM program_weeks WHERE track_id = ? ORDER BY week_number", (track_id,)
        ).fetchall()
    return [dict(r) for r in rows]


def create_week(track_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
    week_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM program_tracks WHERE id = ?", (track_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Program track not found")
        conn.execute(
            """
            INSERT INTO program_weeks (id, track_id, week_number, phase, title, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (week_id, track_id, item["week_number"], item.get("phase") or "foundation", item.get("title"), utc_now()),
        )
        row = conn.execute("SELECT * FROM program_weeks WHERE id = ?", (week_id,)).fetchone()
    return dict(row)


def get_week_detail(week_id: str) -> Dict[str, Any]:
    """A week with its day workouts and each day's exercises, in display order."""
    with db_conn(settings.app_db_path) as conn:
        week = conn.execute(
            """
            SELECT w.*, t.name AS track_name
            FROM program_weeks w JOIN program_tracks t ON t.id = w.track_id
            WHERE w.id = ?
            """,
            (week_id,),
        ).fetchone()
        if not week:
            raise HTTPException(status_code=404, detail="Program week not found")
        days = [
            _workout(r)
            for r in conn.execute(
                "SELECT * FROM program_day_workouts WHERE week_id = ? ORDER BY display_order, created_at",
                (week_id,),
            ).fetchall()
        ]
        for day in days:
            day["exercises"] = _exercises(conn, day["id"])
    detail = dict(week)
    detail["days"] = days
    return detail


# ---------- Day workouts ----------


def _exercises(conn: sqlite3.Connection, day_workout_id: str) -> List[Dict[str, Any]]:
    rows = conn.execute(
        f"SELECT * FROM program_day_exercises WHERE day_workout_id = ? ORDER BY {_SECTION_ORDER}, display_order",
        (day_workout_id,),
    ).fetchall()
    return [dict(r) for r in rows]


def insert_day_workout(conn: sqlite3.Connection, week_id: str, item: Dict[str, Any]) -> str:
    workout_id = str(uuid4())
    now = utc_now()
    display_order = item.get("display_order")
    if display_order is None:
        display_order = DAYS_OF_WEEK.index(item["day_of_week"])
    conn.execute(
        """
        INSERT INTO program_day_workouts (
            id, week_id, day_of_week, workout_name, workout_description, is_rest_day,
            display_order, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            workout_id,
            week_id,
            item["day_of_week"],
            item["workout_name"],
            item.get("workout_description"),
            int(bool(item.get("is_rest_day"))),
            display_order,
            now,
            now,
        ),
    )
    return workout_id


def get_day_workout(workout_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM program_day_workouts WHERE id = ?", (workout_id,)).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Day workout not found")
        workout = _workout(row)
        workout["exercises"] = _exercises(conn, workout_id)
    return workout


def create_day_workout(week_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM program_weeks WHERE id = ?", (week_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Program week not found")
        try:
            workout_id = insert_day_workout(conn, week_id, item)
        except sqlite3.IntegrityError as exc:
            raise HTTPException(status_code=409, detail="That day already has a workout") from exc
    logger.info("Created %s workout for week %s", item["day_of_week"], week_id)
    return get_day_workout(workout_id)


def update_day_workout(workout_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = {k: v for k, v in changes.items() if v is not None or k not in _WORKOUT_REQUIRED}
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "program_day_workouts", workout_id, changes)
    if not count:
        raise HTTPException(status_code=404, detail="Day workout not found")
    return get_day_workout(workout_id)


def delete_day_workout(workout_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM program_day_workouts WHERE id = ?", (workout_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Day workout not found")
    logger.info("Deleted day workout %s", workout_id)


# ---------- Exercises ----------


def insert_exercise(conn: sqlite3.Connection, day_workout_id: str, item: Dict[str, Any]) -> str:
    exercise_id = str(uuid4())
    now = utc_now()
    display_order = item.get("display_order")
    if display_order is None:
        row = conn.execute(
            "SELECT COALESCE(MAX(display_order), -1) + 1 AS next FROM program_day_exercises WHERE day_workout_id = ?",
            (day_workout_id,),
        ).fetchone()
        display_order = row["next"]
    conn.execute(
        """
        INSERT INTO program_day_exercises (
            id, day_workout_id, section_type, exercise_name, sets, reps_or_time, rest,
            notes, scaling_options, display_order, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            exercise_id,
            day_workout_id,
            item.get("section_type") or "main",
            item["exercise_name"],
            item.get("sets"),
            item.get("reps_or_time"),
            item.get("rest"),
            item.get("notes"),
            item.get("scaling_options"),
            display_order,
            now,
            now,
        ),
    )
    return exercise_id


def get_exercise(exercise_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM program_day_exercises WHERE id = ?", (exercise_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return dict(row)


def create_exercise(day_workout_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM program_day_workouts WHERE id = ?", (day_workout_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Day workout not found")
        exercise_id = insert_exercise(conn, day_workout_id, item)
    return get_exercise(exercise_id)


def update_exercise(exercise_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = {k: v for k, v in changes.items() if v is not None or k not in _EXERCISE_REQUIRED}
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "program_day_exercises", exercise_id, changes)
    if not count:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return get_exercise(exercise_id)


def delete_exercise(exercise_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM program_day_exercises WHERE id = ?", (exercise_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Exercise not found")
