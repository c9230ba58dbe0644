# -*- coding: utf-8 -*-
"""LLM filming scripts for a content idea or a live situation."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from ..agent_service import complete_json
from ..app_db import utc_now
from ..brand_voice import BRAND_VOICE_SYSTEM_PROMPT, CATEGORY_DESCRIPTIONS, PLATFORM_FORMAT_RULES

logger = logging.getLogger(__name__)

_REQUIREMENTS = """SCRIPT REQUIREMENTS:
1. Write exactly what Dom should say, word for word. Not bullet points.
2. Dom's real voice: street, raw, confident, "bro" energy.
3. The hook must stop the scroll in under 2 seconds.
4. Every section needs camera and delivery notes simple enough to follow with zero guesswork.
5. Specific b-roll ideas, not "show workout footage".
6. The CTA invites, it never begs."""

_OUTPUT_SCHEMA = """Return a JSON object with this structure:
{{
  "title": "Script title (5-8 words)",
  "platform": "{platform}",
  "content_type": "{content_type}",
  "category": "{category}",
  "script": {{
    "approach": "One line on the angle",
    "hook": {{"what_to_say": "", "how_to_say_it": "", "camera_notes": "", "duration": "3-5 seconds"}},
    "body": [{{"section": "", "what_to_say": "", "how_to_say_it": "", "b_roll_notes": ""}}],
    "cta": {{"what_to_say": "", "on_screen_text": ""}},
    "caption": "",
    "hashtags": [],
    "thumbnail_idea": "",
    "filming_checklist": [],
    "total_duration": "",
    "equipment_needed": ""
  }}
}}

The body should have 2-4 sections. Each "what_to_say" is 2-5 sentences of exact script.

Return ONLY valid JSON. No markdown, no explanation."""


def build_prompt(
    *,
    platform: str,
    content_type: str,
    category: str,
    title: Optional[str] = None,
    situation: Optional[str] = None,
    hook_idea: Optional[str] = None,
    talking_points: Optional[List[str]] = None,
) -> str:
    rules = PLATFORM_FORMAT_RULES.get(platform, "")
    rules_line = f"PLATFORM RULES: {rules}" if rules else ""
    if situation:
        head = f"""Dom just told you what he's doing right now. Turn it into a script built around that moment:

"{situation}"

Use the actual setting, connect the moment to a bigger lesson, and contrast his past with where he is now.

PLATFORM: {platform}
CONTENT TYPE: {content_type}
{rules_line}"""
    else:
        hook_line = f"HOOK IDEA TO BUILD FROM: {hook_idea}" if hook_idea else ""
        points_line = f"EXISTING TALKING POINTS: {json.dumps(talking_points)}" if talking_points else ""
        head = f"""Generate a detailed, step-by-step content script Dom can follow with zero guesswork.

TITLE: {title or "Untitled"}
PLATFORM: {platform}
CONTENT TYPE: {content_type}
CATEGORY: {CATEGORY_DESCRIPTIONS.get(category, CATEGORY_DESCRIPTIONS["discipline"])}
{rules_line}
{hook_line}
{points_line}"""
    schema = _OUTPUT_SCHEMA.format(platform=platform, content_type=content_type, category=category)
    return f"{head}\n\n{_REQUIREMENTS}\n\n{schema}"


def generate_script(
    *,
    platform: str,
    content_type: str,
    category: Optional[str],
    title: Optional[str] = None,
    situation: Optional[str] = None,
    hook_idea: Optional[str] = None,
    talking_points: Optional[List[str]] = None,
    content_post_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Ask the LLM for a filming script; returns it in the shape ``format_script_as_text`` reads."""
    category = category or "discipline"
    raw = complete_json(
        BRAND_VOICE_SYSTEM_PROMPT,
        build_prompt(
            platform=platform,
            content_type=content_type,
            category=category,
            title=title,
            situation=situation,
            hook_idea=hook_idea,
            talking_points=talking_points,
        ),
        expect="object",
        max_tokens=6000,
        temperature=0.85,
    )
    script_data = raw.get("script") if isinstance(raw.get("script"), dict) else raw
    logger.info("Generated %s script for %s", content_type, platform)
    return {
        "title": raw.get("title") or title or "Untitled Script",
        "platform": platform,
        "content_type": content_type,
        "category": category,
        "content_post_id": content_post_id,
        "created_at": utc_now(),
        "script_data": script_data,
    }
