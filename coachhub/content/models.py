# -*- coding: utf-8 -*-
"""Content engine: Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

ContentCategory = Literal[
    "faith",
    "discipline",
    "training",
    "hustle",
    "transformations",
    "authority",
    "platform",
    "story",
    "culture",
    "controversy",
]
ContentMode = Literal["done_for_you", "freestyle"]
ContentStatus = Literal["fresh", "used", "favorite"]
StrategyType = Literal["hot_take", "trending", "story", "value", "engagement", "promo"]


class ContentPostInput(BaseModel):
    category: ContentCategory
    mode: ContentMode
    title: str = Field(..., min_length=1, max_length=200)
    platforms: List[str] = Field(default_factory=list)
    format: Optional[str] = None
    hook: str = Field(..., min_length=1)
    talking_points: List[str] = Field(default_factory=list)
    filming_tips: Optional[str] = None
    cta: Optional[str] = None
    strategy_type: Optional[StrategyType] = None
    hashtags: List[str] = Field(default_factory=list)
    why_it_works: Optional[str] = None


class ContentPostUpdate(BaseModel):
    category: Optional[ContentCategory] = None
    mode: Optional[ContentMode] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    platforms: Optional[List[str]] = None
    format: Optional[str] = None
    hook: Optional[str] = Field(default=None, min_length=1)
    talking_points: Optional[List[str]] = None
    filming_tips: Optional[str] = None
    cta: Optional[str] = None
    strategy_type: Optional[StrategyType] = None
    hashtags: Optional[List[str]] = None
    why_it_works: Optional[str] = None


class ContentPost(ContentPostInput):
    id: str
    status: ContentStatus
    used_at: Optional[str] = None
    created_at: str
    updated_at: str


class StatusUpdateRequest(BaseModel):
    status: ContentStatus


class StrategyMix(BaseModel):
    total: int
    counts: Dict[str, int]
    promo_rate: int
    strategy_score: int


class GenerateIdeasRequest(BaseModel):
    category: str = Field(default="surprise", description="A content category or 'surprise'")
    mode: ContentMode = "done_for_you"
    strategy_type: str = Field(default="surprise", description="A strategy type or 'surprise'")
    save: bool = Field(default=False, description="Persist the ideas as fresh posts")


class GenerateIdeasResponse(BaseModel):
    category: str
    strategy_type: str
    ideas: List[Dict] = Field(default_factory=list)
    saved: List[ContentPost] = Field(default_factory=list)


class ScriptRequest(BaseModel):
    content_post_id: Optional[str] = Field(default=None, description="Build the script from a saved post")
    title: Optional[str] = None
    topic: Optional[str] = None
    situation: Optional[str] = Field(default=None, description="What Dom is doing right now; switches to quick-script mode")
    platform: str = "instagram"
    content_type: str = "Reel"
    category: Optional[str] = None
    hook_idea: Optional[str] = None
    talking_points: List[str] = Field(default_factory=list)


class ContentScript(BaseModel):
    title: str
    platform: Optional[str] = None
    content_type: Optional[str] = None
    category: Optional[str] = None
    content_post_id: Optional[str] = None
    created_at: Optional[str] = None
    script_data: Dict = Field(default_factory=dict)
