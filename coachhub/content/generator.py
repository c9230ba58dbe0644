# -*- coding: utf-8 -*-
"""LLM-driven content idea generation."""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from ..agent_service import complete_json
from ..brand_voice import (
    BRAND_VOICE_SYSTEM_PROMPT,
    CATEGORY_DESCRIPTIONS,
    STRATEGY_TYPE_DESCRIPTIONS,
    STRATEGY_WEIGHTS,
)

logger = logging.getLogger(__name__)

IDEA_COUNT = 3

_OUTPUT_REQUIREMENTS = """

OUTPUT REQUIREMENTS:
- Content must be immediately filmable with just a phone
- Hooks must grab attention in the first 1-2 seconds
- Every piece should feel authentic to Dom's actual voice
- Include specific filming instructions so Dom knows exactly what to do
- Platform recommendations should be strategic, not random"""

_DONE_FOR_YOU = """Generate COMPLETE, READY-TO-RECORD content with:
- Exact hook written out word-for-word (must stop the scroll)
- Full talking points written in Dom's actual voice
- Specific filming instructions: camera angle, location, what to wear, props
- Text overlay suggestions for key moments
- Hashtag recommendations (5-8 relevant hashtags)
- A CTA that fits naturally (not always "link in bio")"""

_FREESTYLE = """Generate FREESTYLE FRAMEWORKS with:
- Hook formula (fill-in-the-blank, e.g. "Most people [problem]. Here's why [solution]...")
- Prompt questions to spark Dom's own ideas
- Flexible talking point structure Dom can riff on
- Multiple angle suggestions
- CTA guidance (direction, not exact wording)"""


def mode_instructions(mode: str) -> str:
    return _DONE_FOR_YOU if mode == "done_for_you" else _FREESTYLE


def resolve_choices(
    category: str,
    strategy_type: Optional[str],
    rng: Optional[random.Random] = None,
) -> Tuple[str, str]:
    """Resolve ``surprise`` picks; unknown values fall back to faith/value."""
    rng = rng or random.Random()
    if category == "surprise":
        category = rng.choice(sorted(CATEGORY_DESCRIPTIONS))
    if strategy_type == "surprise":
        strategy_type = rng.choice(STRATEGY_WEIGHTS)
    strategy_type = strategy_type or "value"
    if category not in CATEGORY_DESCRIPTIONS:
        category = "faith"
    if strategy_type not in STRATEGY_TYPE_DESCRIPTIONS:
        strategy_type = "value"
    return category, strategy_type


def build_prompt(category: str, mode: str, strategy_type: str) -> str:
    return f"""Generate {IDEA_COUNT} unique content ideas for the "{category}" category using the "{strategy_type}" content strategy.

CATEGORY FOCUS: {CATEGORY_DESCRIPTIONS[category]}

CONTENT STRATEGY TYPE: {STRATEGY_TYPE_DESCRIPTIONS[strategy_type]}

{mode_instructions(mode)}

IMPORTANT RULES:
- Vary the angles, hooks and approaches
- At least one idea should feel like it could go viral
- Content should feel natural coming from Dom, not from a marketing team
- NEVER use the word "journey"

For each idea, provide a JSON object with these exact fields:
- category: "{category}"
- mode: "{mode}"
- strategy_type: "{strategy_type}"
- title: clear, compelling post title (5-8 words)
- platforms: array chosen from "Instagram", "TikTok", "YouTube", "Twitter"
- format: how to film it (e.g. "Talking to camera", "Voiceover with B-roll", "POV style")
- hook: the exact opening line(s)
- talking_points: array of 3-5 bullet points in Dom's voice
- filming_tips: camera angle, setting, energy level
- cta: the call-to-action to end with
- hashtags: array of 5-8 hashtags
- why_it_works: one sentence on why this will perform

Return ONLY a valid JSON array of {IDEA_COUNT} content idea objects."""


def _as_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(v) for v in value if v]
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    return []


def normalize_idea(raw: Any, *, category: str, mode: str, strategy_type: str) -> Optional[Dict[str, Any]]:
    if not isinstance(raw, dict):
        return None
    title = str(raw.get("title") or "").strip()
    hook = str(raw.get("hook") or "").strip()
    if not title or not hook:
        return None
    return {
        "category": category,
        "mode": mode,
        "strategy_type": strategy_type,
        "title": title,
        "platforms": _as_list(raw.get("platforms")),
        "format": raw.get("format") or None,
        "hook": hook,
        "talking_points": _as_list(raw.get("talking_points")),
        "filming_tips": raw.get("filming_tips") or None,
        "cta": raw.get("cta") or None,
        "hashtags": _as_list(raw.get("hashtags")),
        "why_it_works": raw.get("why_it_works") or None,
    }


def generate_ideas(
    *,
    category: str,
    mode: str,
    strategy_type: Optional[str],
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    final_category, final_strategy = resolve_choices(category, strategy_type, rng)
    raw_ideas = complete_json(
        BRAND_VOICE_SYSTEM_PROMPT + _OUTPUT_REQUIREMENTS,
        build_prompt(final_category, mode, final_strategy),
        expect="array",
        temperature=0.9,
        max_tokens=6000,
    )
    ideas = []
    for raw in raw_ideas:
        idea = normalize_idea(raw, category=final_category, mode=mode, strategy_type=final_strategy)
        if idea:
            ideas.append(idea)
    if len(ideas) != len(raw_ideas):
        logger.warning("Dropped %d malformed content idea(s)", len(raw_ideas) - len(ideas))
    return {"category": final_category, "strategy_type": final_strategy, "ideas": ideas}
