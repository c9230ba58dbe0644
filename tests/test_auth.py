# -*- coding: utf-8 -*-

from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient

from support import ADMIN_EMAIL, MEMBER_EMAIL, PASSWORD, AppTestCase


class TestAuth(AppTestCase):
    def test_auth_required(self) -> None:
        unauth = TestClient(self.app)
        resp = unauth.get("/api/content/posts")
        self.assertEqual(resp.status_code, 401)
        resp = unauth.get("/api/auth/me")
        self.assertEqual(resp.status_code, 401)
        unauth.close()

    def test_health_is_public(self) -> None:
        unauth = TestClient(self.app)
        resp = unauth.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertEqual(payload["status"], "ok")
        self.assertFalse(payload["llm_configured"])
        unauth.close()

    def test_first_account_is_admin(self) -> None:
        self.assertIn("admin", self.admin_user["roles"])
        self.assertNotIn("admin", self.member_user["roles"])

    def test_duplicate_registration_rejected(self) -> None:
        client = TestClient(self.app)
        resp = client.post("/api/auth/register", json={"email": MEMBER_EMAIL, "password": PASSWORD})
        self.assertEqual(resp.status_code, 400)
        client.close()

    def test_concurrent_duplicate_registration_rejected(self) -> None:
        before = len(self.admin.get("/api/admin/users").json())
        client = TestClient(self.app)
        # Both requests passed the existence check before either inserted.
        with patch("coachhub.auth.api.get_user_by_email", return_value=None):
            resp = client.post("/api/auth/register", json={"email": MEMBER_EMAIL, "password": PASSWORD})
        client.close()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Email already registered")
        self.assertEqual(len(self.admin.get("/api/admin/users").json()), before)

    def test_login_and_bearer_token(self) -> None:
        client = TestClient(self.app)
        resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"})
        self.assertEqual(resp.status_code, 401)

        resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": PASSWORD})
        self.assertEqual(resp.status_code, 200)
        token = resp.json()["token"]
        client.close()

        bearer = TestClient(self.app)
        resp = bearer.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], ADMIN_EMAIL)
        bearer.close()

    def test_forged_and_expired_tokens_rejected(self) -> None:
        from coachhub.auth.security import create_access_token

        user_id = self.admin_user["id"]
        token = create_access_token(user_id=user_id, email=ADMIN_EMAIL)
        header, claims, _ = token.split(".")
        unsigned = base64.urlsafe_b64encode(b'{"alg":"none","typ":"JWT"}').decode("ascii").rstrip("=")
        expired = create_access_token(user_id=user_id, email=ADMIN_EMAIL, now=datetime.now(timezone.utc) - timedelta(days=30))

        client = TestClient(self.app)
        cases = {
            f"{header}.{claims}.bad-signature": "Invalid token",
            f"{unsigned}.{claims}.": "Invalid token",
            "not-a-token": "Invalid token",
            expired: "Token expired",
        }
        for value, detail in cases.items():
            resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {value}"})
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.json()["detail"], detail)
        self.assertEqual(client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code, 200)
        client.close()

    def test_member_cannot_reach_admin_routes(self) -> None:
        resp = self.member.get("/api/content/posts")
        self.assertEqual(resp.status_code, 403)
        resp = self.member.get("/api/admin/users")
        self.assertEqual(resp.status_code, 403)
        resp = self.member.get("/api/auth/me")
        self.assertEqual(resp.status_code, 200)

    def test_logout_clears_cookie(self) -> None:
        client = TestClient(self.app)
        client.post("/api/auth/login", json={"email": MEMBER_EMAIL, "password": PASSWORD})
        self.assertEqual(client.get("/api/auth/me").status_code, 200)
        client.post("/api/auth/logout")
        self.assertEqual(client.get("/api/auth/me").status_code, 401)
        client.close()
