# -*- coding: utf-8 -*-
"""Shared brand identity prompt and content taxonomies for the LLM functions."""

from __future__ import annotations

from typing import Dict, List

BRAND_VOICE_SYSTEM_PROMPT = """You are the content strategist for Dom Different (Redeemed Strength), a faith-based fitness and discipline coaching platform.

=== WHO DOM IS ===
Dom is an ex-convict who found God, discipline, and physical transformation while serving two years in prison. He is not a typical fitness influencer. He built his entire program using nothing but bodyweight exercises in a prison cell, and now helps men and women break free from their own chains through faith, fitness, and discipline.

=== DOM'S VOICE ===
- Real talk, not scripted influencer content
- Direct, confident, no-BS
- Faith woven in naturally, never preachy
- Prison experience is his credential, not a gimmick
- Tough love with genuine care
- "Iron sharpens iron" mentality
- Inclusive: anyone willing to put in the work

=== DOM'S STORY ===
- Got caught up with the wrong crowd in high school
- Felony conviction, served two years in prison
- Found God in his cell and started reading the Bible daily
- Built his body with bodyweight exercises only
- Developed daily discipline routines (prayer, workouts, journaling)
- Released and built his coaching business from scratch
- Based in New Jersey (Hamilton area)

=== THE PLATFORM ===
- Three tiers: Solitary Confinement ($49.99/mo), General Population ($379.99 one-time, 12 weeks), Free World 1:1 Coaching ($999.99/mo, limited to 10)
- Prison-themed branding (cell blocks, yard, chapel)
- Bodyweight-focused training, faith integration, community (The Yard), AI assistant (The Warden)

=== CONTENT PHILOSOPHY ===
The 80/20 rule is non-negotiable:
- 80% of content is value, stories, engagement, education, trending formats
- 20% max is promotional
- Every post should make someone stop scrolling

=== PLATFORM NOTES ===
- Instagram Reels: 15-60 seconds, hook in the first 1.5 seconds, 20-30 hashtags
- TikTok: raw beats polished, 15-45 seconds, 3-5 hashtags
- YouTube Shorts: up to 60s, title and description for search, subscribe CTA
- Twitter/X: 280 characters, threads for value, no hashtags in the body"""

CATEGORY_DESCRIPTIONS: Dict[str, str] = {
    "faith": "Faith & Redemption - prison mindset, faith as discipline, who you were vs who you're becoming, forgiveness, purpose, scripture applied to real life",
    "discipline": "Discipline & Structure - daily routines, accountability, consistency over motivation, morning routines, cold showers, no-excuse mentality",
    "training": "Workout & Training - bodyweight exercises, prison-style conditioning, follow-along workouts, progressive overload with no equipment",
    "transformations": "Transformations & Testimonials - member wins, mindset shifts, physical changes, before/after stories, client spotlights",
    "authority": "Education & Authority - teaching concepts, common mistakes, nutrition basics, training science simplified",
    "platform": "Platform-Led Content - inside the system, what members get, feature walkthroughs, app demos",
    "story": "Dom's Story & Personal - raw stories from prison, family, faith, day-in-the-life, behind the scenes of building the brand",
    "culture": "Culture & Lifestyle - living disciplined, faith in everyday life, relationships, fatherhood, identity, purpose beyond fitness",
}

STRATEGY_TYPE_DESCRIPTIONS: Dict[str, str] = {
    "hot_take": (
        "CONTROVERSIAL / HOT TAKE - open with a bold, polarizing statement, back it up with logic "
        "or personal experience, end with a mic-drop line. Goal: comments, shares, saves."
    ),
    "trending": (
        "TRENDING FORMAT - adapt a trending audio, meme format or video style to Dom's niche and "
        "name the trend so Dom knows what to search for. Goal: views, reach, new followers."
    ),
    "story": (
        "STORY / VULNERABILITY - share a specific moment, paint the scene, the more specific the "
        "better. Goal: trust and connection."
    ),
    "value": (
        "VALUE DROP / EDUCATION - teach something actionable in 30-60 seconds that people save "
        "or send to a friend. Goal: saves, shares, authority."
    ),
    "engagement": (
        "ENGAGEMENT BAIT - questions, polls, this-or-that, 7-day challenges, duet invitations. "
        "Goal: comments and engagement rate."
    ),
    "promo": (
        "PROMOTIONAL / CONVERSION - direct sell content, max 15-20% of output, framed as what is "
        "available rather than buy now. Goal: sign-ups, link clicks, DMs."
    ),
}

# "surprise" picks are drawn from this list, so promo comes up 1 time in 12.
STRATEGY_WEIGHTS: List[str] = [
    "hot_take", "hot_take",
    "trending", "trending",
    "story", "story",
    "value", "value", "value",
    "engagement", "engagement",
    "promo",
]

PLATFORM_CONTENT_TYPES: Dict[str, List[str]] = {
    "instagram": ["Reel", "Carousel", "Story", "Live", "Post"],
    "tiktok": ["Short Video", "Duet", "Stitch", "Live", "Photo Mode"],
    "youtube": ["Short", "Long-form", "Community Post", "Live"],
    "twitter": ["Tweet", "Thread", "Poll", "Spaces"],
}

PLATFORM_FORMAT_RULES: Dict[str, str] = {
    "instagram": "Instagram Reel: 15-60s, hook in 1.5s, text overlays, 20-30 hashtags. Carousels: 5-10 slides, hook on slide 1, CTA on the last slide.",
    "tiktok": "TikTok: 15-45s, raw style, works without sound, 3-5 hashtags, trend adaptation.",
    "youtube": "YouTube Short: up to 60s, title and description optimized for search, subscribe CTA. Long-form: 8-15min, strong intro, chapters.",
    "twitter": "Tweet: 280 char limit, no hashtags in body. Thread: numbered, hook in tweet 1, each tweet stands alone.",
}
