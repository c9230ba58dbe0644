# -*- coding: utf-8 -*-

from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient

from support import AppTestCase


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestAdminUsers(AppTestCase):
    def _accounts(self) -> dict:
        resp = self.admin.get("/api/admin/users")
        self.assertEqual(resp.status_code, 200)
        return {a["email"]: a for a in resp.json()}

    def test_create_account_ready_to_log_in(self) -> None:
        resp = self.admin.post(
            "/api/functions/create-admin-user",
            json={
                "email": "coach.tony@example.com",
                "password": "strongpass1",
                "first_name": "Tony",
                "plan_type": "coaching",
                "is_admin": True,
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(
            resp.json()["message"],
            "Account created for coach.tony@example.com with coaching subscription and admin role",
        )

        account = self._accounts()["coach.tony@example.com"]
        self.assertEqual(account["roles"], ["admin"])
        self.assertEqual(account["first_name"], "Tony")
        self.assertTrue(account["intake_completed_at"])
        self.assertEqual(account["subscription"]["plan_type"], "coaching")
        self.assertEqual(account["subscription"]["status"], "active")
        self.assertIsNone(account["subscription"]["expires_at"])

        client = TestClient(self.app)
        resp = client.post("/api/auth/login", json={"email": "coach.tony@example.com", "password": "strongpass1"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(client.get("/api/admin/users").status_code, 200)
        client.close()

    def test_duplicate_account(self) -> None:
        body = {"email": "twice@example.com", "password": "strongpass1"}
        self.assertEqual(self.admin.post("/api/functions/create-admin-user", json=body).status_code, 200)
        resp = self.admin.post("/api/functions/create-admin-user", json=body)
        self.assertEqual(resp.status_code, 400)

    def test_concurrent_duplicate_account(self) -> None:
        body = {"email": "race.com", "password": "strongpass1"}
        self.assertEqual(self.admin.post("/api/functions/create-admin-user", json=body).status_code, 200)
        with patch("coachhub.admin_users.storage.get_user_by_email", return_value=None):
            resp = self.admin.post("/api/functions/create-admin-user", json=body)
        self.assertEqual(resp.status_code, 400)

    def test_transformation_runs_twelve_weeks(self) -> None:
        resp = self.admin.post(
            "/api/functions/create-admin-user",
            json={"email": "transform@example.com", "password": "strongpass1", "plan_type": "transformation"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        subscription = self._accounts()["transform@example.com"]["subscription"]
        self.assertEqual(_parse(subscription["expires_at"]) - _parse(subscription["started_at"]), timedelta(days=84))

    def test_create_subscription_is_idempotent(self) -> None:
        member_id = self.member_user["id"]
        resp = self.admin.post(
            "/api/functions/create-user-subscription",
            json={"user_id": member_id, "plan_type": "membership"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["created"])
        self.assertEqual(resp.json()["subscription"]["plan_type"], "membership")

        resp = self.admin.post(
            "/api/functions/create-user-subscription",
            json={"user_id": member_id, "plan_type": "transformation"},
        )
        self.assertFalse(resp.json()["created"])
        self.assertEqual(resp.json()["subscription"]["plan_type"], "membership")

        resp = self.admin.post(
            "/api/functions/create-user-subscription",
            json={"user_id": "missing", "plan_type": "membership"},
        )
        self.assertEqual(resp.status_code, 404)

    def test_roles(self) -> None:
        target = self.admin.post(
            "/api/functions/create-admin-user",
            json={"email": "roles@example.com", "password": "strongpass1"},
        ).json()["user_id"]
        resp = self.admin.post(f"/api/admin/users/{target}/roles", json={"role": "coach"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertIn("coach", resp.json())
        self.assertEqual(self.admin.post(f"/api/admin/users/{target}/roles", json={"role": "wizard"}).status_code, 400)
        self.assertEqual(self.admin.post("/api/admin/users/missing/roles", json={"role": "coach"}).status_code, 404)

        resp = self.admin.delete(f"/api/admin/users/{target}/roles/coach")
        self.assertNotIn("coach", resp.json())

    def test_delete_account(self) -> None:
        target = self.admin.post(
            "/api/functions/create-admin-user",
            json={"email": "leaving@example.com", "password": "strongpass1", "plan_type": "transformation"},
        ).json()["user_id"]
        self.assertEqual(self.admin.delete(f"/api/admin/users/{target}").status_code, 200)
        self.assertNotIn("leaving@example.com", self._accounts())
        self.assertEqual(self.admin.delete(f"/api/admin/users/{target}").status_code, 404)

        resp = self.admin.delete(f"/api/admin/users/{self.admin_user['id']}")
        self.assertEqual(resp.status_code, 400)

    def test_member_cannot_create_accounts(self) -> None:
        resp = self.member.post(
            "/api/functions/create-admin-user",
            json={"email": "sneaky@example.com", "password": "strongpass1", "is_admin": True},
        )
        self.assertEqual(resp.status_code, 403)
