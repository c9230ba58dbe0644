# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Optional

from fastapi.testclient import TestClient

ADMIN_EMAIL = "dom@example.com"
MEMBER_EMAIL = "member@example.com"
PASSWORD = "password123"


def llm_reply(content: str) -> dict:
    """Chat-completions body as the gateway returns it."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class AppTestCase(unittest.TestCase):
    """Fresh data dir per class; the first account registered becomes the admin."""

    llm_api_key: Optional[str] = None
    with_member = True

    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="coachhub-test-"))
        data_root = cls._tmp / "data"
        os.environ["COACHHUB_DATA_ROOT"] = str(data_root)
        os.environ["COACHHUB_DB_PATH"] = str(data_root / "coachhub.db")
        os.environ["COACHHUB_JWT_SECRET"] = "test-secret"
        if cls.llm_api_key:
            os.environ["LLM_API_KEY"] = cls.llm_api_key
        else:
            os.environ.pop("LLM_API_KEY", None)

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name.startswith("coachhub."):
                sys.modules.pop(name, None)

        from coachhub.api import app  # noqa: WPS433 (import inside test for env control)

        cls.app = app
        cls.admin = TestClient(app)
        resp = cls.admin.post("/api/auth/register", json={"email": ADMIN_EMAIL, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        cls.admin_user = resp.json()["user"]

        cls.member = None
        cls.member_user = None
        if cls.with_member:
            cls.member = TestClient(app)
            resp = cls.member.post(
                "/api/auth/register",
                json={"email": MEMBER_EMAIL, "password": PASSWORD, "first_name": "Marcus"},
            )
            assert resp.status_code == 200, resp.text
            cls.member_user = resp.json()["user"]

    @classmethod
    def tearDownClass(cls) -> None:
        for client in (cls.admin, cls.member):
            if client is None:
                continue
            try:
                client.close()
            except Exception:
                pass
        shutil.rmtree(cls._tmp, ignore_errors=True)
        os.environ.pop("LLM_API_KEY", None)
