# -*- coding: utf-8 -*-
"""Social command: LLM prompts for competitor analysis, profile audits and engagement coaching."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from ..agent_service import complete_json
from ..brand_voice import BRAND_VOICE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

PLATFORM_AUDIT_CHECKLISTS: Dict[str, str] = {
    "instagram": """Audit Instagram profile for:
- Bio optimization (150 chars, clear value prop, emoji usage, line breaks)
- Profile picture (clear face, good lighting, on-brand)
- Highlights (organized, cover images, key categories: Workouts, Faith, Testimonials, About)
- Link in bio (multiple destinations)
- Pinned posts (best-performing or most important)
- Content grid aesthetic (first 9 posts tell a story)
- Reel covers consistency
- Username clarity and searchability""",
    "tiktok": """Audit TikTok profile for:
- Bio optimization (80 chars, clear niche, CTA)
- Profile picture and video
- Pinned videos (3 best-performing or most representative)
- Content consistency (niche clarity from first scroll)
- Engagement patterns
- Use of trending sounds and formats""",
    "youtube": """Audit YouTube channel for:
- Channel description and keywords
- Channel art / banner
- Profile picture
- Shorts strategy
- Playlist organization
- Subscribe CTA in every video
- Community tab usage
- End screens and cards""",
    "twitter": """Audit Twitter/X profile for:
- Bio (160 chars, clear positioning)
- Header image
- Pinned tweet (best hook or thread)
- Thread game (educational threads)
- Engagement style (replies, quote tweets)
- Posting frequency""",
}


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


# ---------- Competitor analysis ----------


def competitor_prompt(handle: str, platform: str, pasted_content: List[str], notes: Optional[str]) -> str:
    if pasted_content:
        samples = "\n\n".join(f"--- Post {i} ---\n{c}" for i, c in enumerate(pasted_content, start=1))
        content = f"=== THEIR CONTENT (pasted samples) ===\n{samples}"
    else:
        content = "No content samples provided. Analyze based on what you know about this type of creator in this niche."
    notes_line = f"NOTES ABOUT THEM: {notes}" if notes else ""
    return f"""Analyze the following competitor in the faith/fitness/discipline/transformation space and generate actionable intelligence for Dom.

COMPETITOR: @{handle} on {platform}
{notes_line}

{content}

Analyze and return a JSON object with:

- competitor_summary: object with name, platform ("{platform}"), niche, estimated_following
  (or "unknown"), strengths (3-5), weaknesses (3-5)
- hook_patterns: array of objects with pattern, example, effectiveness ("high" | "medium" | "low"),
  dom_adaptation
- content_strategy: object with posting_frequency, content_mix, engagement_tactics,
  monetization_approach
- steal_worthy_ideas: array of 3-5 objects with idea, why_it_works, dom_version,
  priority ("high" | "medium" | "low")
- differentiation: object with what_dom_has_they_dont (array), content_gaps (array),
  positioning_advice (2-3 sentences)

Return ONLY valid JSON. No markdown, no explanation."""


def analyze_competitor(
    *,
    competitor_handle: Optional[str],
    platform: Optional[str],
    pasted_content: Optional[List[str]] = None,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    if not competitor_handle or not platform:
        raise HTTPException(status_code=400, detail="competitor_handle and platform are required")
    handle = competitor_handle.strip().lstrip("@")
    prompt = competitor_prompt(handle, platform, [c for c in (pasted_content or []) if c.strip()], notes)
    return complete_json(BRAND_VOICE_SYSTEM_PROMPT, prompt, expect="object", max_tokens=5000, temperature=0.7)


# ---------- Profile audit ----------


def audit_prompt(
    platform: str,
    *,
    handle: Optional[str] = None,
    current_bio: Optional[str] = None,
    has_highlights: bool = False,
    has_pinned_post: bool = False,
    has_link_in_bio: bool = False,
    extra_context: Optional[str] = None,
) -> str:
    extra = f"- Additional context: {extra_context}" if extra_context else ""
    return f"""Audit Dom's {platform} profile and provide actionable improvements.

CURRENT PROFILE:
- Handle: {handle or "not provided"}
- Bio: "{current_bio or "not provided"}"
- Has Highlights: {_yes_no(has_highlights)}
- Has Pinned Post: {_yes_no(has_pinned_post)}
- Has Link in Bio: {_yes_no(has_link_in_bio)}
{extra}

{PLATFORM_AUDIT_CHECKLISTS.get(platform, "General profile audit")}

Return a JSON object with:
- score: number 0-100 (current profile score)
- optimized_bio: suggested improved bio text
- recommendations: array of objects, each with id (unique string), title, description,
  priority ("high" | "medium" | "low") and category ("bio" | "visual" | "content" | "engagement" | "technical")
- quick_wins: array of 3 things Dom can fix in under 5 minutes
- advanced_tips: array of 2-3 longer-term optimization strategies

Speak in Dom's voice: direct, no-BS, actionable. Don't sugarcoat weak areas.

Return ONLY valid JSON. No markdown, no explanation."""


def normalize_recommendations(raw: Any) -> List[Dict[str, Any]]:
    """Keep dict recommendations and make sure each has a string id for the checklist."""
    recommendations: List[Dict[str, Any]] = []
    for index, item in enumerate(raw if isinstance(raw, list) else []):
        if not isinstance(item, dict):
            continue
        rec = dict(item)
        rec["id"] = str(rec.get("id") or f"rec-{index + 1}")
        recommendations.append(rec)
    return recommendations


def audit_profile(platform: str, **profile: Any) -> Dict[str, Any]:
    audit = complete_json(
        BRAND_VOICE_SYSTEM_PROMPT,
        audit_prompt(platform, **profile),
        expect="object",
        max_tokens=3000,
        temperature=0.7,
    )
    audit["recommendations"] = normalize_recommendations(audit.get("recommendations"))
    return audit


# ---------- Engagement coach ----------


def comment_reply_prompt(comment: str, context: Optional[str], comment_type: Optional[str]) -> str:
    context_line = f"CONTEXT (what the post was about): {context}" if context else ""
    type_line = f"COMMENT TYPE: {comment_type}" if comment_type else ""
    return f"""You are Dom's social media engagement coach. A comment was left on Dom's content. Generate the perfect reply.

THE COMMENT: "{comment}"
{context_line}
{type_line}

Every reply should extend the conversation, show personality, build community, handle haters with
class, or plant seeds about the program without being salesy.

RESPONSE RULES:
- 1-3 sentences max
- Sound like Dom talking, not a brand manager
- Emojis sparingly (💪🔥💯)
- Never defensive, never corporate
- Leave the door open for more engagement

Return JSON:
{{
  "reply": "The exact reply Dom should post",
  "strategy": "1-2 sentences on why this reply works",
  "engagement_tip": "Tip for this type of comment in the future",
  "alternative": "A second reply option with a different tone"
}}

Return ONLY valid JSON."""


def collab_dm_prompt(
    handle: Optional[str],
    name: Optional[str],
    niche: Optional[str],
    followers: Optional[int],
    collab_idea: Optional[str],
) -> str:
    idea_line = f"COLLAB IDEA: {collab_idea}" if collab_idea else ""
    return f"""You are Dom's social media strategist. Dom wants to reach out to a potential collaborator. Generate a perfect outreach DM.

TARGET CREATOR:
- Handle: @{handle or "unknown"}
- Name: {name or "Unknown"}
- Niche: {niche or "fitness/lifestyle"}
- Followers: {followers if followers is not None else "unknown"}
{idea_line}

DM OUTREACH RULES:
1. Never beg. Dom brings value to the table
2. Open with a genuine compliment about their specific content
3. Establish what Dom brings: unique story, engaged audience, real content
4. Propose a specific collab idea
5. 3-5 sentences max for a first message
6. Casual, confident, real
7. End with something easy to reply to

Generate 3 DM options: direct, relationship builder, value proposition.

Return JSON:
{{
  "dm_direct": "...",
  "dm_relationship": "...",
  "dm_value": "...",
  "follow_up": "Follow-up to send if they don't reply in 3-5 days",
  "collab_ideas": ["idea 1", "idea 2", "idea 3"],
  "strategy_notes": "Notes on approaching this specific creator"
}}

Return ONLY valid JSON."""


def engagement_strategy_prompt(
    current_followers: Optional[str], engagement_rate: Optional[str], posting_frequency: Optional[str]
) -> str:
    return f"""You are Dom's growth strategist. Generate a specific, actionable engagement strategy for today.

CURRENT STATS:
- Followers: {current_followers or "~50,000"}
- Engagement Rate: {engagement_rate or "unknown"}
- Posting Frequency: {posting_frequency or "unknown"}

Think about exactly what Dom should do today to grow: comments to leave, DMs to send, stories,
replies on his own posts, hashtags, best posting times and trending sounds.

Return JSON:
{{
  "daily_actions": [{{"action": "", "when": "", "time_needed": "", "why": "", "how": ""}}],
  "posting_schedule": {{"best_times": [], "why": ""}},
  "engagement_targets": {{"comments_to_leave": 20, "dms_to_send": 5, "stories_to_post": 3, "replies_to_own_comments": ""}},
  "creators_to_engage": [{{"handle": "", "why": "", "what_to_comment": ""}}],
  "todays_hashtag_sets": [[]],
  "growth_tip": ""
}}

Return ONLY valid JSON."""


def coach(mode: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    if mode == "comment_reply":
        if not fields.get("comment"):
            raise HTTPException(status_code=400, detail="comment is required for comment_reply")
        prompt = comment_reply_prompt(fields["comment"], fields.get("context"), fields.get("comment_type"))
    elif mode == "collab_dm":
        prompt = collab_dm_prompt(
            fields.get("target_handle"),
            fields.get("target_name"),
            fields.get("target_niche"),
            fields.get("target_followers"),
            fields.get("collab_idea"),
        )
    elif mode == "engagement_strategy":
        prompt = engagement_strategy_prompt(
            fields.get("current_followers"), fields.get("engagement_rate"), fields.get("posting_frequency")
        )
    else:
        raise HTTPException(status_code=400, detail="Invalid mode. Use: comment_reply, collab_dm, or engagement_strategy")
    logger.info("Engagement coach request (%s)", mode)
    return complete_json(BRAND_VOICE_SYSTEM_PROMPT, prompt, expect="object", max_tokens=4000, temperature=0.8)
