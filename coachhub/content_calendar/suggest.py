# -*- coding: utf-8 -*-
"""LLM weekly calendar suggestions."""

from __future__ import annotations

import json
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from ..agent_service import complete_json
from ..brand_voice import BRAND_VOICE_SYSTEM_PROMPT, CATEGORY_DESCRIPTIONS, PLATFORM_CONTENT_TYPES
from .schedule import TIME_SLOT_ORDER, day_of_week, parse_iso_date

logger = logging.getLogger(__name__)

_PLATFORMS = set(PLATFORM_CONTENT_TYPES)


def build_prompt(
    week_start: date,
    active_platforms: Sequence[str],
    posting_cadence: Dict[str, int],
    content_pillars: Sequence[str],
) -> str:
    types = "\n".join(
        f"- {p}: {', '.join(t)}" for p, t in PLATFORM_CONTENT_TYPES.items() if p in active_platforms
    )
    return f"""Generate a complete week of content calendar suggestions starting from {week_start.isoformat()}.

ACTIVE PLATFORMS: {json.dumps(list(active_platforms))}
POSTING CADENCE: {json.dumps(posting_cadence)}
CONTENT PILLARS: {json.dumps(list(content_pillars))}

AVAILABLE CONTENT TYPES PER PLATFORM:
{types}

AVAILABLE CATEGORIES: {', '.join(CATEGORY_DESCRIPTIONS)}

RULES:
- Spread content evenly across the week
- Follow the 80/20 rule (max 1 promo post per week)
- Vary categories and strategy types day to day
- Morning slots (9-11am) for educational/value content
- Afternoon slots (1-3pm) for engagement/trending
- Evening slots (6-8pm) for stories/personal

For each suggested slot, return a JSON object:
- scheduled_date: YYYY-MM-DD
- day_of_week: number 0-6 (0=Sunday)
- time_slot: "morning" | "afternoon" | "evening"
- platform: platform name (lowercase)
- content_type: specific content type for that platform
- title: suggested content title (5-8 words)
- notes: brief note on angle/approach
- strategy_type: "hot_take" | "trending" | "story" | "value" | "engagement" | "promo"
- category: content category

Return ONLY a valid JSON array."""


def normalize_suggestion(raw: Any, week_start: date, active_platforms: Sequence[str]) -> Optional[Dict[str, Any]]:
    if not isinstance(raw, dict):
        return None
    scheduled = parse_iso_date(raw.get("scheduled_date"))
    if scheduled is None and isinstance(raw.get("day_of_week"), int) and 0 <= raw["day_of_week"] <= 6:
        scheduled = week_start + timedelta(days=raw["day_of_week"])
    platform = str(raw.get("platform") or "").lower()
    time_slot = str(raw.get("time_slot") or "").lower()
    title = str(raw.get("title") or "").strip()
    if scheduled is None or not title or time_slot not in TIME_SLOT_ORDER:
        return None
    if platform not in _PLATFORMS or (active_platforms and platform not in active_platforms):
        return None
    return {
        "scheduled_date": scheduled,
        "day_of_week": day_of_week(scheduled),
        "time_slot": time_slot,
        "platform": platform,
        "content_type": raw.get("content_type") or None,
        "title": title,
        "notes": raw.get("notes") or None,
        "strategy_type": raw.get("strategy_type") or None,
        "category": raw.get("category") or None,
        "status": "planned",
    }


def suggest_week(
    *,
    week_start: date,
    active_platforms: Sequence[str],
    posting_cadence: Dict[str, int],
    content_pillars: Sequence[str],
) -> List[Dict[str, Any]]:
    raw = complete_json(
        BRAND_VOICE_SYSTEM_PROMPT,
        build_prompt(week_start, active_platforms, posting_cadence, content_pillars),
        expect="array",
        temperature=0.8,
    )
    suggestions = [s for s in (normalize_suggestion(r, week_start, active_platforms) for r in raw) if s]
    if len(suggestions) != len(raw):
        logger.warning("Dropped %d unusable calendar suggestion(s)", len(raw) - len(suggestions))
    return suggestions
