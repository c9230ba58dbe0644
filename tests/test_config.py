# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from coachhub.config import Settings

from support import AppTestCase


class TestSettings(unittest.TestCase):
    def test_server_address_from_environment(self) -> None:
        with patch.dict(os.environ, {"COACHHUB_HOST": "0.0.0.0", "COACHHUB_PORT": "9001"}):
            settings = Settings()
        self.assertEqual(settings.host, "0.0.0.0")
        self.assertEqual(settings.port, 9001)

    def test_server_address_defaults(self) -> None:
        with patch.dict(os.environ, {"COACHHUB_PORT": "not-a-port"}):
            for name in ("COACHHUB_HOST", "HOST", "COACHHUB_TIMEZONE"):
                os.environ.pop(name, None)
            settings = Settings()
        self.assertEqual(settings.host, "127.0.0.1")
        self.assertEqual(settings.port, 8000)
        self.assertEqual(settings.timezone, "UTC")


class TestRunEntryPoint(AppTestCase):
    with_member = False

    def test_run_uses_configured_address(self) -> None:
        from coachhub import api

        with patch.multiple(api.settings, host="0.0.0.0", port=9100), patch("uvicorn.run") as serve:
            api.run()
        serve.assert_called_once_with("coachhub.api:app", host="0.0.0.0", port=9100, reload=False)
