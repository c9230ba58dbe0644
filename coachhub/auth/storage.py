# -*- coding: utf-8 -*-
"""Auth: DB storage helpers (users, roles)."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, utc_now
from ..config import settings

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
KNOWN_ROLES = {"admin", "coach", "member"}


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if not row:
            return None
        user = dict(row)
        user["roles"] = _roles(conn, user_id)
        return user


def insert_user(conn: sqlite3.Connection, *, email: str, password_hash: str) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = utc_now()
    email_norm = email.lower().strip()
    try:
        conn.execute(
            "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
            (user_id, email_norm, password_hash, now),
        )
    except sqlite3.IntegrityError:
        # Lost a race with a concurrent registration for the same address.
        raise HTTPException(status_code=400, detail="Email already registered")
    return {"id": user_id, "email": email_norm, "password_hash": password_hash, "created_at": now, "roles": []}


def _roles(conn: sqlite3.Connection, user_id: str) -> List[str]:
    rows = conn.execute(
        "SELECT role FROM user_roles WHERE user_id = ? ORDER BY role", (user_id,)
    ).fetchall()
    return [r["role"] for r in rows]


def insert_role(conn: sqlite3.Connection, user_id: str, role: str) -> None:
    conn.execute(
        "INSERT OR IGNORE INTO user_roles (user_id, role, created_at) VALUES (?, ?, ?)",
        (user_id, role, utc_now()),
    )


def grant_role(user_id: str, role: str) -> List[str]:
    with db_conn(settings.app_db_path) as conn:
        insert_role(conn, user_id, role)
        logger.info("Granted role %s to user %s", role, user_id)
        return _roles(conn, user_id)


def revoke_role(user_id: str, role: str) -> List[str]:
    with db_conn(settings.app_db_path) as conn:
        conn.execute("DELETE FROM user_roles WHERE user_id = ? AND role = ?", (user_id, role))
        logger.info("Revoked role %s from user %s", role, user_id)
        return _roles(conn, user_id)


def list_roles(user_id: str) -> List[str]:
    with db_conn(settings.app_db_path) as conn:
        return _roles(conn, user_id)
