# -*- coding: utf-8 -*-
"""Content engine: post storage (SQLite)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dumps, row_to_dict, update_columns, utc_now
from ..config import settings

logger = logging.getLogger(__name__)

_JSON_FIELDS = ("platforms", "talking_points", "hashtags")
_REQUIRED = ("category", "mode", "title", "hook", "status") + _JSON_FIELDS


def _post(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, json_fields=_JSON_FIELDS)


def list_posts(
    *,
    category: Optional[str] = None,
    mode: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    clauses: List[str] = []
    params: List[Any] = []
    for column, value in (("category", category), ("mode", mode), ("status", status)):
        if value and value != "all":
            clauses.append(f"{column} = ?")
            params.append(value)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM content_posts {where} ORDER BY created_at DESC, rowid DESC",
            params,
        ).fetchall()
    return [_post(r) for r in rows]


def get_post(post_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM content_posts WHERE id = ?", (post_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Content post not found")
    return _post(row)


def create_posts(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Insert posts with status ``fresh``; returns them in input order."""
    created: List[Dict[str, Any]] = []
    now = utc_now()
    with db_conn(settings.app_db_path) as conn:
        for item in items:
            post_id = str(uuid4())
            conn.execute(
                """
                INSERT INTO content_posts (
                    id, category, mode, title, platforms, format, hook, talking_points,
                    filming_tips, cta, status, strategy_type, hashtags, why_it_works,
                    used_at, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 'fresh', ?, ?, ?, NULL, ?, ?)
                """,
                (
                    post_id,
                    item["category"],
                    item["mode"],
                    item["title"],
                    dumps(item.get("platforms") or []),
                    item.get("format") or None,
                    item["hook"],
                    dumps(item.get("talking_points") or []),
                    item.get("filming_tips") or None,
                    item.get("cta") or None,
                    item.get("strategy_type") or None,
                    dumps(item.get("hashtags") or []),
                    item.get("why_it_works") or None,
                    now,
                    now,
                ),
            )
            row = conn.execute("SELECT * FROM content_posts WHERE id = ?", (post_id,)).fetchone()
            created.append(_post(row))
    logger.info("Saved %d content post(s)", len(created))
    return created


def create_post(item: Dict[str, Any]) -> Dict[str, Any]:
    return create_posts([item])[0]


def update_post(post_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = {k: v for k, v in changes.items() if v is not None or k not in _REQUIRED}
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "content_posts", post_id, changes, json_fields=_JSON_FIELDS)
    if not count:
        raise HTTPException(status_code=404, detail="Content post not found")
    return get_post(post_id)


def update_status(post_id: str, status: str) -> Dict[str, Any]:
    changes: Dict[str, Any] = {"status": status}
    if status == "used":
        changes["used_at"] = utc_now()
    elif status == "fresh":
        changes["used_at"] = None
    return update_post(post_id, changes)


def delete_post(post_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM content_posts WHERE id = ?", (post_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Content post not found")
    logger.info("Deleted content post %s", post_id)
