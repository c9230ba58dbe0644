# -*- coding: utf-8 -*-
"""Content calendar: slot storage (SQLite)."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dumps, row_to_dict, update_columns, utc_now
from ..config import settings
from .schedule import day_of_week, sort_slots

logger = logging.getLogger(__name__)

_JSON_FIELDS = ("talking_points",)
_REQUIRED = ("scheduled_date", "time_slot", "platform", "title", "status")


def _slot(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, json_fields=_JSON_FIELDS)


def _check_post(conn, post_id: Optional[str]) -> None:
    if post_id and not conn.execute("SELECT 1 FROM content_posts WHERE id = ?", (post_id,)).fetchone():
        raise HTTPException(status_code=400, detail="Unknown content_post_id")


def list_slots(start: date, end: date) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM calendar_slots WHERE scheduled_date >= ? AND scheduled_date <= ?",
            (start.isoformat(), end.isoformat()),
        ).fetchall()
    return sort_slots(_slot(r) for r in rows)


def get_slot(slot_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM calendar_slots WHERE id = ?", (slot_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Calendar slot not found")
    return _slot(row)


def bulk_create_slots(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    now = utc_now()
    ids: List[str] = []
    with db_conn(settings.app_db_path) as conn:
        for item in items:
            scheduled: date = item["scheduled_date"]
            _check_post(conn, item.get("content_post_id"))
            slot_id = str(uuid4())
            conn.execute(
                """
                INSERT INTO calendar_slots (
                    id, scheduled_date, day_of_week, time_slot, platform, content_type,
                    content_post_id, title, notes, hook, talking_points, filming_tips, cta,
                    strategy_type, category, status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    slot_id,
                    scheduled.isoformat(),
                    day_of_week(scheduled),
                    item["time_slot"],
                    item["platform"],
                    item.get("content_type"),
                    item.get("content_post_id"),
                    item["title"],
                    item.get("notes"),
                    item.get("hook"),
                    dumps(item.get("talking_points") or []),
                    item.get("filming_tips"),
                    item.get("cta"),
                    item.get("strategy_type"),
                    item.get("category"),
                    item.get("status") or "planned",
                    now,
                    now,
                ),
            )
            ids.append(slot_id)
        rows = [conn.execute("SELECT * FROM calendar_slots WHERE id = ?", (i,)).fetchone() for i in ids]
    logger.info("Created %d calendar slot(s)", len(ids))
    return [_slot(r) for r in rows]


def create_slot(item: Dict[str, Any]) -> Dict[str, Any]:
    return bulk_create_slots([item])[0]


def update_slot(slot_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    for column in _REQUIRED:
        if column in changes and changes[column] is None:
            changes.pop(column)
    if "scheduled_date" in changes:
        scheduled: date = changes["scheduled_date"]
        changes["scheduled_date"] = scheduled.isoformat()
        changes["day_of_week"] = day_of_week(scheduled)
    if "talking_points" in changes and changes["talking_points"] is None:
        changes["talking_points"] = []
    with db_conn(settings.app_db_path) as conn:
        _check_post(conn, changes.get("content_post_id"))
        count = update_columns(conn, "calendar_slots", slot_id, changes, json_fields=_JSON_FIELDS)
    if not count:
        raise HTTPException(status_code=404, detail="Calendar slot not found")
    return get_slot(slot_id)


def delete_slot(slot_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM calendar_slots WHERE id = ?", (slot_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Calendar slot not found")
    logger.info("Deleted calendar slot %s", slot_id)
