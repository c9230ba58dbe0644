# -*- coding: utf-8 -*-
"""Auth: password hashing, signed session tokens and role-gated FastAPI dependencies.

Tokens are compact HS256 JWTs carrying only the user id and email; roles are
re-read from ``user_roles`` on every request so a revoked admin loses access
immediately.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, Request

from ..config import settings
from .storage import ADMIN_ROLE, get_user_by_id

TOKEN_COOKIE_NAME = "coachhub_token"

PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 200_000
_TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = _pbkdf2(password, salt, PASSWORD_ITERATIONS)
    return "$".join((PASSWORD_SCHEME, str(PASSWORD_ITERATIONS), _b64(salt), _b64(digest)))


def verify_password(password: str, password_hash: str) -> bool:
    parts = (password_hash or "").split("$")
    if len(parts) != 4 or parts[0] != PASSWORD_SCHEME:
        return False
    try:
        iterations = int(parts[1])
        salt, expected = _unb64(parts[2]), _unb64(parts[3])
        return hmac.compare_digest(_pbkdf2(password, salt, iterations), expected)
    except ValueError:
        return False


# ---------- Session tokens ----------


def _signature(signing_input: str) -> str:
    mac = hmac.new(settings.jwt_secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256)
    return _b64(mac.digest())


def _segment(obj: Dict[str, Any]) -> str:
    return _b64(json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def create_access_token(*, user_id: str, email: str, now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    expires = issued + timedelta(days=int(settings.token_ttl_days))
    claims = {"sub": user_id, "email": email, "iat": int(issued.timestamp()), "exp": int(expires.timestamp())}
    signing_input = f"{_segment(_TOKEN_HEADER)}.{_segment(claims)}"
    return f"{signing_input}.{_signature(signing_input)}"


def decode_token(token: str) -> Dict[str, Any]:
    """Verify signature, algorithm and expiry; any failure is a 401."""
    try:
        header_b64, claims_b64, signature = token.split(".")
        header = json.loads(_unb64(header_b64))
        claims = json.loads(_unb64(claims_b64))
    except ValueError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    if not isinstance(header, dict) or header.get("alg") != _TOKEN_HEADER["alg"]:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not hmac.compare_digest(_signature(f"{header_b64}.{claims_b64}"), signature):
        raise HTTPException(status_code=401, detail="Invalid token")
    if not isinstance(claims, dict) or not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or exp < datetime.now(timezone.utc).timestamp():
        raise HTTPException(status_code=401, detail="Token expired")
    return claims


# ---------- Request helpers ----------


def get_token_from_request(request: Request) -> Optional[str]:
    scheme, _, credentials = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    user = get_user_by_id(str(decode_token(token)["sub"]))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user


def has_role(user: Dict[str, Any], role: str) -> bool:
    return role in (user.get("roles") or [])


def require_role(role: str) -> Callable[..., Dict[str, Any]]:
    """Build a dependency that lets through only users holding ``role``."""

    def dependency(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
        if not has_role(user, role):
            raise HTTPException(status_code=403, detail=f"{role.capitalize()} role required")
        return user

    return dependency


get_current_admin = require_role(ADMIN_ROLE)
