# -*- coding: utf-8 -*-
"""LLM calling service (OpenAI-compatible chat/completions).

Every prompt-driven function (content ideas, calendar suggestions, social audits,
collab DMs) goes through ``call_agent`` so tests only need to patch one symbol.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx
from fastapi import HTTPException

from .config import settings

logger = logging.getLogger(__name__)


def resolve_agent_settings() -> Dict[str, Any]:
    if not settings.llm_api_key:
        raise HTTPException(status_code=503, detail="LLM_API_KEY not configured")
    return {
        "model": settings.llm_model,
        "base_url": settings.llm_base_url,
        "api_key": settings.llm_api_key,
        "timeout": settings.llm_timeout,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }


def call_agent(
    messages: List[Dict[str, str]],
    *,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
) -> Dict[str, Any]:
    cfg = resolve_agent_settings()
    base_url = cfg["base_url"].rstrip("/")
    if base_url.endswith("/chat/completions"):
        url = base_url
    else:
        url = f"{base_url}/chat/completions"
    payload = {
        "model": cfg["model"],
        "messages": messages,
        "temperature": cfg["temperature"] if temperature is None else temperature,
        "max_tokens": cfg["max_tokens"] if max_tokens is None else max_tokens,
    }
    headers = {"Authorization": f"Bearer {cfg['api_key']}"}
    try:
        with httpx.Client(timeout=cfg["timeout"]) as client:
            resp = client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
            return resp.json()
    except httpx.HTTPStatusError as exc:
        logger.error("LLM gateway returned %s: %s", exc.response.status_code, exc.response.text[:500])
        raise HTTPException(status_code=502, detail=f"AI gateway returned {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        logger.error("LLM gateway unreachable: %s", exc)
        raise HTTPException(status_code=502, detail=f"AI gateway unreachable: {exc}") from exc
    except ValueError as exc:
        logger.error("LLM gateway returned a non-JSON body: %s", exc)
        raise HTTPException(status_code=502, detail="AI gateway returned invalid JSON") from exc


def response_text(data: Dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not content or not isinstance(content, str):
        raise HTTPException(status_code=502, detail="No content in AI response")
    return content


def extract_json(text: str, expect: str = "object") -> Any:
    """Pull the first JSON object (or array) out of an LLM reply.

    Models wrap JSON in markdown fences or add a sentence before it; the greedy
    match spans from the first opening bracket to the last closing one.
    """
    text = text.strip()
    opener, closer = ("[", "]") if expect == "array" else ("{", "}")
    if text.startswith(opener) and text.endswith(closer):
        return json.loads(text)
    pattern = r"\[[\s\S]*\]" if expect == "array" else r"\{[\s\S]*\}"
    match = re.search(pattern, text)
    if not match:
        raise ValueError(f"No JSON {expect} found")
    return json.loads(match.group(0))


def complete_json(
    system: str,
    user: str,
    *,
    expect: str = "object",
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
) -> Any:
    messages = [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
    data = call_agent(messages, max_tokens=max_tokens, temperature=temperature)
    text = response_text(data)
    try:
        parsed = extract_json(text, expect=expect)
    except ValueError as exc:
        logger.error("Failed to parse AI response: %s", text[:500])
        raise HTTPException(status_code=502, detail="Failed to parse AI response") from exc
    if expect == "array" and not isinstance(parsed, list):
        raise HTTPException(status_code=502, detail="AI response was not a list")
    if expect == "object" and not isinstance(parsed, dict):
        raise HTTPException(status_code=502, detail="AI response was not an object")
    return parsed
