# -*- coding: utf-8 -*-
"""Account administration: create and delete member accounts, roles and subscriptions."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, utc_now
from ..auth.security import hash_password
from ..auth.storage import ADMIN_ROLE, KNOWN_ROLES, get_user_by_email, grant_role, insert_role, insert_user, revoke_role
from ..config import settings
from ..onboarding.storage import insert_profile

logger = logging.getLogger(__name__)

TRANSFORMATION_DAYS = 84


def subscription_expiry(plan_type: str, started: datetime) -> Optional[str]:
    """Transformation is a fixed 12-week program; the other plans run until cancelled."""
    if plan_type != "transformation":
        return None
    return (started + timedelta(days=TRANSFORMATION_DAYS)).isoformat().replace("+00:00", "Z")


def insert_subscription(conn: sqlite3.Connection, user_id: str, plan_type: str) -> str:
    subscription_id = str(uuid4())
    started = datetime.now(timezone.utc)
    conn.execute(
        """
        INSERT INTO subscriptions (id, user_id, plan_type, status, started_at, expires_at, created_at)
        VALUES (?, ?, ?, 'active', ?, ?, ?)
        """,
        (
            subscription_id,
            user_id,
            plan_type,
            started.isoformat().replace("+00:00", "Z"),
            subscription_expiry(plan_type, started),
            utc_now(),
        ),
    )
    return subscription_id


def _latest_subscription(conn: sqlite3.Connection, user_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        "SELECT * FROM subscriptions WHERE user_id = ? ORDER BY created_at DESC, rowid DESC LIMIT 1",
        (user_id,),
    ).fetchone()
    return dict(row) if row else None


def create_account(
    *,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    plan_type: str = "membership",
    is_admin: bool = False,
) -> Dict[str, Any]:
    """Create a ready-to-use account: user, completed profile, active subscription and optional admin role."""
    if get_user_by_email(email):
        raise HTTPException(status_code=400, detail="A user with this email address has already been registered")
    password_hash = hash_password(password)
    with db_conn(settings.app_db_path) as conn:
        user = insert_user(conn, email=email, password_hash=password_hash)
        insert_profile(
            conn,
            user_id=user["id"],
            email=user["email"],
            first_name=first_name,
            last_name=last_name,
            intake_completed=True,
        )
        insert_subscription(conn, user["id"], plan_type)
        if is_admin:
            insert_role(conn, user["id"], ADMIN_ROLE)
    logger.info("Created account %s with %s subscription (admin=%s)", user["id"], plan_type, is_admin)
    suffix = " and admin role" if is_admin else ""
    return {
        "user_id": user["id"],
        "message": f"Account created for {user['email']} with {plan_type} subscription{suffix}",
    }


def ensure_subscription(user_id: str, plan_type: str) -> Dict[str, Any]:
    """Give an existing user an active subscription unless they already have one."""
    with db_conn(settings.app_db_path) as conn:
        user = conn.execute("SELECT id, email FROM users WHERE id = ?", (user_id,)).fetchone()
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        existing = _latest_subscription(conn, user_id)
        if existing:
            return {"created": False, "subscription": existing, "message": "Subscription already exists"}
        insert_subscription(conn, user_id, plan_type)
        if not conn.execute("SELECT 1 FROM profiles WHERE user_id = ?", (user_id,)).fetchone():
            insert_profile(conn, user_id=user_id, email=user["email"])
        subscription = _latest_subscription(conn, user_id)
    logger.info("Created %s subscription for user %s", plan_type, user_id)
    return {
        "created": True,
        "subscription": subscription,
        "message": f"{plan_type} subscription created successfully",
    }


def delete_account(user_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Deleted account %s", user_id)


def _require_user(user_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone():
            raise HTTPException(status_code=404, detail="User not found")


def assign_role(user_id: str, role: str) -> List[str]:
    if role not in KNOWN_ROLES:
        raise HTTPException(status_code=400, detail=f"Unknown role: {role}")
    _require_user(user_id)
    return grant_role(user_id, role)


def remove_role(user_id: str, role: str) -> List[str]:
    _require_user(user_id)
    return revoke_role(user_id, role)


def list_accounts() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT u.id, u.email, u.created_at, p.first_name, p.last_name, p.intake_completed_at
            FROM users u LEFT JOIN profiles p ON p.user_id = u.id
            ORDER BY u.created_at DESC, u.rowid DESC
            """
        ).fetchall()
        roles: Dict[str, List[str]] = {}
        for r in conn.execute("SELECT user_id, role FROM user_roles ORDER BY role").fetchall():
            roles.setdefault(r["user_id"], []).append(r["role"])
        accounts = []
        for row in rows:
            account = dict(row)
            account["roles"] = roles.get(account["id"], [])
            account["subscription"] = _latest_subscription(conn, account["id"])
            accounts.append(account)
    return accounts
