# -*- coding: utf-8 -*-
"""Discipline: routines, completions, templates and sub-steps (SQLite)."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Set
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dumps, row_to_dict, update_columns, utc_now
from ..config import settings
from .schedule import DEFAULT_DURATION_MINUTES

logger = logging.getLogger(__name__)

_ROUTINE_BOOLS = ("is_active",)
_TEMPLATE_JSON = ("routines",)


def _routine(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, bool_fields=_ROUTINE_BOOLS)


def _template(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, json_fields=_TEMPLATE_JSON, bool_fields=("is_active",))


def _drop_nulls(changes: Dict[str, Any], keep: tuple = ()) -> Dict[str, Any]:
    return {k: v for k, v in changes.items() if v is not None or k in keep}


# ---------- Routines ----------


def list_routines(*, routine_type: Optional[str] = None, active_only: bool = False) -> List[Dict[str, Any]]:
    clauses: List[str] = []
    params: List[Any] = []
    if routine_type:
        clauses.append("routine_type = ?")
        params.append(routine_type)
    if active_only:
        clauses.append("is_active = 1")
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM discipline_routines {where} ORDER BY routine_type DESC, display_order, created_at",
            params,
        ).fetchall()
    return [_routine(r) for r in rows]


def get_routine(routine_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM discipline_routines WHERE id = ?", (routine_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Routine not found")
    return _routine(row)


def _next_order(conn, routine_type: str) -> int:
    row = conn.execute(
        "SELECT MAX(display_order) FROM discipline_routines WHERE routine_type = ?", (routine_type,)
    ).fetchone()
    return 0 if row[0] is None else int(row[0]) + 1


def _insert_routine(conn, item: Dict[str, Any]) -> str:
    routine_id = str(uuid4())
    now = utc_now()
    order = item.get("display_order")
    conn.execute(
        """
        INSERT INTO discipline_routines (
            id, routine_type, time_slot, action_text, display_order, is_active,
            duration_minutes, description, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            routine_id,
            item["routine_type"],
            item["time_slot"],
            item["action_text"],
            _next_order(conn, item["routine_type"]) if order is None else order,
            int(item.get("is_active", True)),
            item.get("duration_minutes") or DEFAULT_DURATION_MINUTES,
            item.get("description"),
            now,
            now,
        ),
    )
    return routine_id


def create_routine(item: Dict[str, Any]) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        routine_id = _insert_routine(conn, item)
    logger.info("Created %s routine %s", item["routine_type"], routine_id)
    return get_routine(routine_id)


def update_routine(routine_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = _drop_nulls(changes, keep=("description",))
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "discipline_routines", routine_id, changes)
    if not count:
        raise HTTPException(status_code=404, detail="Routine not found")
    return get_routine(routine_id)


def toggle_active(routine_id: str) -> Dict[str, Any]:
    """Flip ``is_active`` on exactly this routine."""
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            "UPDATE discipline_routines SET is_active = 1 - is_active, updated_at = ? WHERE id = ?",
            (utc_now(), routine_id),
        )
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Routine not found")
    return get_routine(routine_id)


def delete_routine(routine_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM discipline_routines WHERE id = ?", (routine_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Routine not found")
    logger.info("Deleted routine %s", routine_id)


def reorder_routines(routine_type: str, routine_ids: List[str]) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT id FROM discipline_routines WHERE routine_type = ?", (routine_type,)
        ).fetchall()
        known = {r["id"] for r in rows}
        if len(set(routine_ids)) != len(routine_ids) or set(routine_ids) != known:
            raise HTTPException(status_code=400, detail=f"routine_ids must list every {routine_type} routine once")
        now = utc_now()
        for order, routine_id in enumerate(routine_ids):
            conn.execute(
                "UPDATE discipline_routines SET display_order = ?, updated_at = ? WHERE id = ?",
                (order, now, routine_id),
            )
    return list_routines(routine_type=routine_type)


# ---------- Completions ----------


def completed_ids(user_id: str, completion_date: str) -> Set[str]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT routine_id FROM routine_completions WHERE user_id = ? AND completion_date = ?",
            (user_id, completion_date),
        ).fetchall()
    return {r["routine_id"] for r in rows}


def toggle_completion(user_id: str, routine_id: str, completion_date: str) -> bool:
    """Mark the routine done for that day, or undo it; returns the new state."""
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM discipline_routines WHERE id = ?", (routine_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Routine not found")
        cur = conn.execute(
            "DELETE FROM routine_completions WHERE user_id = ? AND routine_id = ? AND completion_date = ?",
            (user_id, routine_id, completion_date),
        )
        if cur.rowcount:
            return False
        conn.execute(
            "INSERT INTO routine_completions (user_id, routine_id, completion_date, completed_at) VALUES (?, ?, ?, ?)",
            (user_id, routine_id, completion_date, utc_now()),
        )
    return True


# ---------- Templates ----------


def list_templates(*, active_only: bool = False) -> List[Dict[str, Any]]:
    where = "WHERE is_active = 1" if active_only else ""
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM discipline_templates {where} ORDER BY display_order, created_at"
        ).fetchall()
    return [_template(r) for r in rows]


def get_template(template_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM discipline_templates WHERE id = ?", (template_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Template not found")
    return _template(row)


def create_template(item: Dict[str, Any]) -> Dict[str, Any]:
    template_id = str(uuid4())
    now = utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO discipline_templates (
                id, name, description, category, routines, is_active, display_order, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                template_id,
                item["name"],
                item.get("description"),
                item.get("category") or "general",
                dumps(item.get("routines") or []),
                int(item.get("is_active", True)),
                item.get("display_order") or 0,
                now,
                now,
            ),
        )
    logger.info("Created discipline template %s", template_id)
    return get_template(template_id)


def update_template(template_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = _drop_nulls(changes, keep=("description",))
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "discipline_templates", template_id, changes, json_fields=_TEMPLATE_JSON)
    if not count:
        raise HTTPException(status_code=404, detail="Template not found")
    return get_template(template_id)


def delete_template(template_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM discipline_templates WHERE id = ?", (template_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Template not found")
    logger.info("Deleted discipline template %s", template_id)


def apply_template(template_id: str, *, replace: bool = True) -> List[Dict[str, Any]]:
    """Copy a template's routine items into the live routine list."""
    template = get_template(template_id)
    items = template["routines"]
    if not items:
        raise HTTPException(status_code=400, detail="Template has no routines")
    types = sorted({item["routine_type"] for item in items})
    with db_conn(settings.app_db_path) as conn:
        if replace:
            conn.execute(
                f"DELETE FROM discipline_routines WHERE routine_type IN ({','.join('?' * len(types))})",
                types,
            )
        for item in sorted(items, key=lambda i: (i["routine_type"], i.get("display_order") or 0)):
            _insert_routine(
                conn,
                {
                    "routine_type": item["routine_type"],
                    "time_slot": item["time_slot"],
                    "action_text": item["action_text"],
                    "duration_minutes": item.get("duration_minutes"),
                    "display_order": None,
                },
            )
    logger.info("Applied template %s (%d routines, replace=%s)", template_id, len(items), replace)
    return list_routines()


# ---------- Sub-steps ----------


def list_substeps(template_id: str) -> Dict[int, List[Dict[str, Any]]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM routine_substeps WHERE template_id = ? ORDER BY routine_index, step_order",
            (template_id,),
        ).fetchall()
    groups: Dict[int, List[Dict[str, Any]]] = defaultdict(list)
    for row in rows:
        groups[row["routine_index"]].append(dict(row))
    return dict(groups)


def get_substep(step_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM routine_substeps WHERE id = ?", (step_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Sub-step not found")
    return dict(row)


def create_substep(item: Dict[str, Any]) -> Dict[str, Any]:
    step_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM discipline_templates WHERE id = ?", (item["template_id"],)).fetchone():
            raise HTTPException(status_code=404, detail="Template not found")
        row = conn.execute(
            "SELECT MAX(step_order) FROM routine_substeps WHERE template_id = ? AND routine_index = ?",
            (item["template_id"], item["routine_index"]),
        ).fetchone()
        next_order = 0 if row[0] is None else int(row[0]) + 1
        conn.execute(
            """
            INSERT INTO routine_substeps (
                id, template_id, routine_index, step_order, action_text, duration_seconds, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                step_id,
                item["template_id"],
                item["routine_index"],
                next_order,
                item["action_text"],
                item.get("duration_seconds"),
                utc_now(),
            ),
        )
    return get_substep(step_id)


def update_substep(step_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = _drop_nulls(changes, keep=("duration_seconds",))
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "routine_substeps", step_id, changes, touch=False)
        if not count and not conn.execute("SELECT 1 FROM routine_substeps WHERE id = ?", (step_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Sub-step not found")
    return get_substep(step_id)


def delete_substep(step_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM routine_substeps WHERE id = ?", (step_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Sub-step not found")
