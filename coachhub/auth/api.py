# -*- coding: utf-8 -*-
"""Auth: API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..app_db import db_conn
from ..config import settings
from ..onboarding.storage import insert_profile
from .models import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from .security import TOKEN_COOKIE_NAME, create_access_token, get_current_user, hash_password, verify_password
from .storage import ADMIN_ROLE, get_user_by_email, insert_role, insert_user, list_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_public(row: dict) -> UserPublic:
    return UserPublic(id=row["id"], email=row["email"], created_at=row["created_at"], roles=row.get("roles") or [])


def _set_auth_cookie(resp: Response, token: str) -> None:
    max_age = int(settings.token_ttl_days) * 24 * 60 * 60
    resp.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=max_age,
        path="/",
    )


@router.post("/register", response_model=AuthResponse, summary="Register a new member")
def register(request: RegisterRequest, response: Response):
    if get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    password_hash = hash_password(request.password)
    with db_conn(settings.app_db_path) as conn:
        # The very first account bootstraps the admin console.
        first_account = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 0
        user = insert_user(conn, email=request.email, password_hash=password_hash)
        insert_profile(
            conn,
            user_id=user["id"],
            email=user["email"],
            first_name=request.first_name,
            last_name=request.last_name,
        )
        if first_account:
            insert_role(conn, user["id"], ADMIN_ROLE)
    user["roles"] = list_roles(user["id"])
    logger.info("Registered user %s (admin=%s)", user["id"], first_account)

    token = create_access_token(user_id=user["id"], email=user["email"])
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/login", response_model=AuthResponse, summary="Login")
def login(request: LoginRequest, response: Response):
    user = get_user_by_email(request.email)
    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user["roles"] = list_roles(user["id"])
    token = create_access_token(user_id=user["id"], email=user["email"])
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/logout", summary="Logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Get current user")
def me(user: dict = Depends(get_current_user)):
    return _user_public(user)
