# -*- coding: utf-8 -*-
"""Social command: competitor analyses, profile audits and collab prospects (SQLite)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dumps, row_to_dict, update_columns, utc_now
from ..config import settings

logger = logging.getLogger(__name__)

PROSPECT_STATUSES = ("prospect", "researching", "reached_out", "responded", "confirmed", "completed", "passed")
_PROSPECT_REQUIRED = ("handle", "platform", "status")


def _analysis(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(
        row,
        json_fields=("analysis_data", "pasted_content"),
        list_default={"analysis_data": {}},
    )


def _audit(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(
        row,
        json_fields=("audit_data", "recommendations", "completed_items"),
        list_default={"audit_data": {}},
    )


def _prospect(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, json_fields=("outreach_dm",), list_default={"outreach_dm": None})


def clean_handle(handle: str) -> str:
    return handle.strip().replace("@", "")


# ---------- Competitor analyses ----------


def save_analysis(
    *,
    competitor_handle: str,
    platform: str,
    analysis: Dict[str, Any],
    pasted_content: Optional[List[str]] = None,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    analysis_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO competitor_analyses (
                id, competitor_handle, platform, analysis_data, pasted_content, notes, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                analysis_id,
                clean_handle(competitor_handle),
                platform,
                dumps(analysis),
                dumps(pasted_content or []),
                notes,
                utc_now(),
            ),
        )
        row = conn.execute("SELECT * FROM competitor_analyses WHERE id = ?", (analysis_id,)).fetchone()
    logger.info("Stored competitor analysis for @%s on %s", competitor_handle, platform)
    return _analysis(row)


def list_analyses(*, platform: Optional[str] = None) -> List[Dict[str, Any]]:
    where, params = ("WHERE platform = ?", (platform,)) if platform else ("", ())
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM competitor_analyses {where} ORDER BY created_at DESC, rowid DESC", params
        ).fetchall()
    return [_analysis(r) for r in rows]


def delete_analysis(analysis_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM competitor_analyses WHERE id = ?", (analysis_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Competitor analysis not found")


# ---------- Profile audits ----------


def save_audit(platform: str, audit: Dict[str, Any]) -> Dict[str, Any]:
    audit_id = str(uuid4())
    now = utc_now()
    recommendations = audit.get("recommendations") or []
    try:
        score = int(audit.get("score") or 0)
    except (TypeError, ValueError):
        score = 0
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO profile_audits (
                id, platform, audit_data, score, recommendations, completed_items, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, '[]', ?, ?)
            """,
            (audit_id, platform, dumps(audit), score, dumps(recommendations), now, now),
        )
        row = conn.execute("SELECT * FROM profile_audits WHERE id = ?", (audit_id,)).fetchone()
    logger.info("Stored %s profile audit (score %d)", platform, score)
    return _audit(row)


def list_audits(*, platform: Optional[str] = None) -> List[Dict[str, Any]]:
    where, params = ("WHERE platform = ?", (platform,)) if platform else ("", ())
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM profile_audits {where} ORDER BY created_at DESC, rowid DESC", params
        ).fetchall()
    return [_audit(r) for r in rows]


def get_audit(audit_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM profile_audits WHERE id = ?", (audit_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Profile audit not found")
    return _audit(row)


def toggle_audit_item(audit_id: str, item_id: str) -> Dict[str, Any]:
    """Flip one checklist item and rescore the audit by completion."""
    audit = get_audit(audit_id)
    known = [r["id"] for r in audit["recommendations"]]
    if item_id not in known:
        raise HTTPException(status_code=400, detail="Unknown checklist item")
    completed = [i for i in audit["completed_items"] if i in known]
    if item_id in completed:
        completed.remove(item_id)
    else:
        completed.append(item_id)
    score = round(len(completed) / len(known) * 100)
    with db_conn(settings.app_db_path) as conn:
        update_columns(
            conn,
            "profile_audits",
            audit_id,
            {"completed_items": completed, "score": score},
            json_fields=("completed_items",),
        )
    return get_audit(audit_id)


def delete_audit(audit_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM profile_audits WHERE id = ?", (audit_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Profile audit not found")


# ---------- Collab prospects ----------


def list_prospects(*, status: Optional[str] = None) -> List[Dict[str, Any]]:
    where, params = ("WHERE status = ?", (status,)) if status and status != "all" else ("", ())
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM collab_prospects {where} ORDER BY created_at DESC, rowid DESC", params
        ).fetchall()
    return [_prospect(r) for r in rows]


def get_prospect(prospect_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM collab_prospects WHERE id = ?", (prospect_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Collab prospect not found")
    return _prospect(row)


def create_prospect(item: Dict[str, Any]) -> Dict[str, Any]:
    prospect_id = str(uuid4())
    now = utc_now()
    status = item.get("status") or "prospect"
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO collab_prospects (
                id, handle, name, platform, follower_count, niche, status, outreach_dm,
                collab_idea, notes, last_contacted_at, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, NULL, ?, ?, ?, ?, ?)
            """,
            (
                prospect_id,
                clean_handle(item["handle"]),
                item.get("name") or None,
                item.get("platform") or "instagram",
                item.get("follower_count"),
                item.get("niche"),
                status,
                item.get("collab_idea") or None,
                item.get("notes") or None,
                now if status == "reached_out" else None,
                now,
                now,
            ),
        )
        row = conn.execute("SELECT * FROM collab_prospects WHERE id = ?", (prospect_id,)).fetchone()
    logger.info("Added collab prospect @%s", row["handle"])
    return _prospect(row)


def update_prospect(prospect_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = {k: v for k, v in changes.items() if v is not None or k not in _PROSPECT_REQUIRED}
    if changes.get("handle"):
        changes["handle"] = clean_handle(changes["handle"])
    with db_conn(settings.app_db_path) as conn:
        count = update_columns(conn, "collab_prospects", prospect_id, changes, json_fields=("outreach_dm",))
    if not count:
        raise HTTPException(status_code=404, detail="Collab prospect not found")
    return get_prospect(prospect_id)


def update_prospect_status(prospect_id: str, status: str) -> Dict[str, Any]:
    changes: Dict[str, Any] = {"status": status}
    if status == "reached_out":
        changes["last_contacted_at"] = utc_now()
    return update_prospect(prospect_id, changes)


def save_outreach_dm(prospect_id: str, result: Dict[str, Any]) -> Dict[str, Any]:
    return update_prospect(prospect_id, {"outreach_dm": result})


def delete_prospect(prospect_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM collab_prospects WHERE id = ?", (prospect_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Collab prospect not found")
    logger.info("Deleted collab prospect %s", prospect_id)


def status_counts(prospects: List[Dict[str, Any]]) -> Dict[str, int]:
    counts = {status: 0 for status in PROSPECT_STATUSES}
    for prospect in prospects:
        counts[prospect["status"]] = counts.get(prospect["status"], 0) + 1
    counts["all"] = len(prospects)
    return counts
