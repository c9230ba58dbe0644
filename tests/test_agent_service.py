# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest.mock import patch

import httpx
from fastapi import HTTPException

from coachhub import agent_service


def _response(status_code: int, **kwargs) -> httpx.Response:
    request = httpx.Request("POST", "https://llm.example.com/v1/chat/completions")
    return httpx.Response(status_code, request=request, **kwargs)


class TestExtractJson(unittest.TestCase):
    def test_plain_object(self) -> None:
        self.assertEqual(agent_service.extract_json('{"a": 1}'), {"a": 1})

    def test_fenced_array(self) -> None:
        text = 'Sure! Here are your ideas:\n```json\n[{"title": "x"}, {"title": "y"}]\n```\nEnjoy.'
        self.assertEqual(agent_service.extract_json(text, expect="array"), [{"title": "x"}, {"title": "y"}])

    def test_no_json(self) -> None:
        with self.assertRaises(ValueError):
            agent_service.extract_json("no json here")


class TestCompleteJson(unittest.TestCase):
    def test_missing_key(self) -> None:
        with patch.object(agent_service.settings, "llm_api_key", None):
            with self.assertRaises(HTTPException) as ctx:
                agent_service.call_agent([{"role": "user", "content": "hi"}])
        self.assertEqual(ctx.exception.status_code, 503)

    def test_wrong_shape(self) -> None:
        reply = {"choices": [{"message": {"content": "[1, 2]"}}]}
        with patch.object(agent_service, "call_agent", return_value=reply):
            with self.assertRaises(HTTPException) as ctx:
                agent_service.complete_json("sys", "user", expect="object")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_empty_content(self) -> None:
        with patch.object(agent_service, "call_agent", return_value={"choices": []}):
            with self.assertRaises(HTTPException) as ctx:
                agent_service.complete_json("sys", "user")
        self.assertEqual(ctx.exception.detail, "No content in AI response")


class TestCallAgent(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch.multiple(
            agent_service.settings,
            llm_api_key="test-key",
            llm_base_url="https://llm.example.com/v1/",
            llm_model="test-model",
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_posts_openai_payload(self) -> None:
        body = {"choices": [{"message": {"content": "{}"}}]}
        with patch.object(httpx.Client, "post", return_value=_response(200, json=body)) as post:
            data = agent_service.call_agent([{"role": "user", "content": "hi"}], max_tokens=123, temperature=0.2)
        self.assertEqual(data, body)
        url = post.call_args[0][0]
        kwargs = post.call_args[1]
        self.assertEqual(url, "https://llm.example.com/v1/chat/completions")
        self.assertEqual(kwargs["json"]["model"], "test-model")
        self.assertEqual(kwargs["json"]["max_tokens"], 123)
        self.assertEqual(kwargs["json"]["temperature"], 0.2)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer test-key")

    def test_gateway_error(self) -> None:
        with patch.object(httpx.Client, "post", return_value=_response(429, text="rate limited")):
            with self.assertRaises(HTTPException) as ctx:
                agent_service.call_agent([{"role": "user", "content": "hi"}])
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertIn("429", ctx.exception.detail)

    def test_gateway_unreachable(self) -> None:
        with patch.object(httpx.Client, "post", side_effect=httpx.ConnectError("refused")):
            with self.assertRaises(HTTPException) as ctx:
                agent_service.call_agent([{"role": "user", "content": "hi"}])
        self.assertEqual(ctx.exception.status_code, 502)
