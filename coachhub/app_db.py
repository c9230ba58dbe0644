# -*- coding: utf-8 -*-
"""App database: SQLite schema and connection helpers."""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL UNIQUE,
        email TEXT,
        first_name TEXT,
        last_name TEXT,
        goal TEXT,
        activity_level TEXT,
        weight TEXT,
        height TEXT,
        age INTEGER,
        experience TEXT,
        body_fat_estimate TEXT,
        training_days_per_week INTEGER,
        injuries TEXT,
        dietary_restrictions TEXT,
        intake_completed_at TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS subscriptions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        plan_type TEXT NOT NULL,
        status TEXT NOT NULL,
        started_at TEXT NOT NULL,
        expires_at TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS user_roles (
        user_id TEXT NOT NULL,
        role TEXT NOT NULL,
        created_at TEXT NOT NULL,
        PRIMARY KEY (user_id, role),
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS content_posts (
        id TEXT PRIMARY KEY,
        category TEXT NOT NULL,
        mode TEXT NOT NULL,
        title TEXT NOT NULL,
        platforms TEXT NOT NULL,
        format TEXT,
        hook TEXT NOT NULL,
        talking_points TEXT NOT NULL,
        filming_tips TEXT,
        cta TEXT,
        status TEXT NOT NULL,
        strategy_type TEXT,
        hashtags TEXT,
        why_it_works TEXT,
        used_at TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_content_posts_filters ON content_posts(category, mode, status, created_at DESC);",
    """
    CREATE TABLE IF NOT EXISTS calendar_slots (
        id TEXT PRIMARY KEY,
        scheduled_date TEXT NOT NULL,
        day_of_week INTEGER NOT NULL,
        time_slot TEXT NOT NULL,
        platform TEXT NOT NULL,
        content_type TEXT,
        content_post_id TEXT,
        title TEXT NOT NULL,
        notes TEXT,
        hook TEXT,
        talking_points TEXT NOT NULL,
        filming_tips TEXT,
        cta TEXT,
        strategy_type TEXT,
        category TEXT,
        status TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY(content_post_id) REFERENCES content_posts(id) ON DELETE SET NULL
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_calendar_slots_date ON calendar_slots(scheduled_date);",
    """
    CREATE TABLE IF NOT EXISTS discipline_routines (
        id TEXT PRIMARY KEY,
        routine_type TEXT NOT NULL,
        time_slot TEXT NOT NULL,
        action_text TEXT NOT NULL,
        display_order INTEGER NOT NULL DEFAULT 0,
        is_active INTEGER NOT NULL DEFAULT 1,
        duration_minutes INTEGER NOT NULL DEFAULT 5,
        description TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS routine_completions (
        user_id TEXT NOT NULL,
        routine_id TEXT NOT NULL,
        completion_date TEXT NOT NULL,
        completed_at TEXT NOT NULL,
        PRIMARY KEY (user_id, routine_id, completion_date),
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY(routine_id) REFERENCES discipline_routines(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS discipline_templates (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        category TEXT NOT NULL,
        routines TEXT NOT NULL,
        is_active INTEGER NOT NULL DEFAULT 1,
        display_order INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS routine_substeps (
        id TEXT PRIMARY KEY,
        template_id TEXT NOT NULL,
        routine_index INTEGER NOT NULL,
        step_order INTEGER NOT NULL,
        action_text TEXT NOT NULL,
        duration_seconds INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY(template_id) REFERENCES discipline_templates(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS nutrition_categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        description TEXT,
        target_profile TEXT,
        display_order INTEGER NOT NULL DEFAULT 0,
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS nutrition_templates (
        id TEXT PRIMARY KEY,
        category_id TEXT,
        name TEXT NOT NULL,
        description TEXT,
        goal_type TEXT NOT NULL,
        calorie_range_min INTEGER NOT NULL,
        calorie_range_max INTEGER NOT NULL,
        daily_protein_g INTEGER NOT NULL DEFAULT 0,
        daily_carbs_g INTEGER NOT NULL DEFAULT 0,
        daily_fats_g INTEGER NOT NULL DEFAULT 0,
        difficulty TEXT,
        dietary_tags TEXT NOT NULL DEFAULT '[]',
        display_order INTEGER NOT NULL DEFAULT 0,
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY(category_id) REFERENCES nutrition_categories(id) ON DELETE SET NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS nutrition_days (
        id TEXT PRIMARY KEY,
        template_id TEXT NOT NULL,
        day_number INTEGER NOT NULL,
        day_name TEXT NOT NULL,
        week_number INTEGER NOT NULL DEFAULT 1,
        FOREIGN KEY(template_id) REFERENCES nutrition_templates(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS nutrition_meals (
        id TEXT PRIMARY KEY,
        day_id TEXT NOT NULL,
        meal_type TEXT NOT NULL,
        meal_name TEXT NOT NULL,
        calories INTEGER NOT NULL DEFAULT 0,
        protein_g INTEGER NOT NULL DEFAULT 0,
        carbs_g INTEGER NOT NULL DEFAULT 0,
        fats_g INTEGER NOT NULL DEFAULT 0,
        prep_time_min INTEGER,
        cook_time_min INTEGER,
        servings INTEGER,
        instructions TEXT,
        notes TEXT,
        ingredients TEXT NOT NULL DEFAULT '[]',
        display_order INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY(day_id) REFERENCES nutrition_days(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS program_tracks (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        goal_match TEXT,
        created_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS program_weeks (
        id TEXT PRIMARY KEY,
        track_id TEXT NOT NULL,
        week_number INTEGER NOT NULL,
        phase TEXT NOT NULL,
        title TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY(track_id) REFERENCES program_tracks(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS program_day_workouts (
        id TEXT PRIMARY KEY,
        week_id TEXT NOT NULL,
        day_of_week TEXT NOT NULL,
        workout_name TEXT NOT NULL,
        workout_description TEXT,
        is_rest_day INTEGER NOT NULL DEFAULT 0,
        display_order INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        UNIQUE (week_id, day_of_week),
        FOREIGN KEY(week_id) REFERENCES program_weeks(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS program_day_exercises (
        id TEXT PRIMARY KEY,
        day_workout_id TEXT NOT NULL,
        section_type TEXT NOT NULL,
        exercise_name TEXT NOT NULL,
        sets TEXT,
        reps_or_time TEXT,
        rest TEXT,
        notes TEXT,
        scaling_options TEXT,
        display_order INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY(day_workout_id) REFERENCES program_day_workouts(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS collab_prospects (
        id TEXT PRIMARY KEY,
        handle TEXT NOT NULL,
        name TEXT,
        platform TEXT NOT NULL,
        follower_count INTEGER,
        niche TEXT,
        status TEXT NOT NULL,
        outreach_dm TEXT,
        collab_idea TEXT,
        notes TEXT,
        last_contacted_at TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS profile_audits (
        id TEXT PRIMARY KEY,
        platform TEXT NOT NULL,
        audit_data TEXT NOT NULL,
        score INTEGER NOT NULL DEFAULT 0,
        recommendations TEXT NOT NULL DEFAULT '[]',
        completed_items TEXT NOT NULL DEFAULT '[]',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS competitor_analyses (
        id TEXT PRIMARY KEY,
        competitor_handle TEXT NOT NULL,
        platform TEXT NOT NULL,
        analysis_data TEXT NOT NULL,
        pasted_content TEXT,
        notes TEXT,
        created_at TEXT NOT NULL
    );
    """,
)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        for statement in _SCHEMA:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def loads(raw: Optional[str], default: Any) -> Any:
    """Decode a JSON column, falling back to ``default`` on empty or corrupt values."""
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        return default


def row_to_dict(
    row: sqlite3.Row | None,
    *,
    json_fields: Iterable[str] = (),
    bool_fields: Iterable[str] = (),
    list_default: Dict[str, Any] | None = None,
) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    data = dict(row)
    defaults = list_default or {}
    for field in json_fields:
        if field in data:
            data[field] = loads(data[field], defaults.get(field, []))
    for field in bool_fields:
        if field in data and data[field] is not None:
            data[field] = bool(data[field])
    return data


def update_columns(
    conn: sqlite3.Connection,
    table: str,
    row_id: str,
    changes: Dict[str, Any],
    *,
    json_fields: Iterable[str] = (),
    touch: bool = True,
) -> int:
    """Apply a partial update; returns the number of rows changed."""
    json_set = set(json_fields)
    values: Dict[str, Any] = {}
    for key, value in changes.items():
        if key in json_set:
            value = dumps(value)
        elif isinstance(value, bool):
            value = int(value)
        values[key] = value
    if touch:
        values["updated_at"] = utc_now()
    if not values:
        return 0
    assignments = ", ".join(f"{col} = ?" for col in values)
    cur = conn.execute(
        f"UPDATE {table} SET {assignments} WHERE id = ?",
        (*values.values(), row_id),
    )
    return cur.rowcount
