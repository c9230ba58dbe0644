# -*- coding: utf-8 -*-
"""Social command: Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Platform = Literal["instagram", "tiktok", "youtube", "twitter"]
ProspectStatus = Literal["prospect", "researching", "reached_out", "responded", "confirmed", "completed", "passed"]
CoachMode = Literal["comment_reply", "collab_dm", "engagement_strategy"]


# ---------- Competitor analyses ----------


class CompetitorAnalyzeRequest(BaseModel):
    competitor_handle: Optional[str] = None
    platform: Optional[str] = None
    pasted_content: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class CompetitorAnalysis(BaseModel):
    id: str
    competitor_handle: str
    platform: str
    analysis_data: Dict[str, Any]
    pasted_content: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: str


# ---------- Profile audits ----------


class ProfileAuditRequest(BaseModel):
    platform: Platform
    handle: Optional[str] = None
    current_bio: Optional[str] = None
    has_highlights: bool = False
    has_pinned_post: bool = False
    has_link_in_bio: bool = False
    extra_context: Optional[str] = None


class ProfileAudit(BaseModel):
    id: str
    platform: str
    audit_data: Dict[str, Any]
    score: int
    recommendations: List[Dict[str, Any]] = Field(default_factory=list)
    completed_items: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str


class AuditItemToggle(BaseModel):
    item_id: str = Field(..., min_length=1)


# ---------- Collab prospects ----------


class ProspectInput(BaseModel):
    handle: str = Field(..., min_length=1, max_length=120)
    name: Optional[str] = None
    platform: Platform = "instagram"
    follower_count: Optional[int] = Field(default=None, ge=0)
    niche: Optional[str] = None
    status: ProspectStatus = "prospect"
    collab_idea: Optional[str] = None
    notes: Optional[str] = None


class ProspectUpdate(BaseModel):
    handle: Optional[str] = Field(default=None, min_length=1, max_length=120)
    name: Optional[str] = None
    platform: Optional[Platform] = None
    follower_count: Optional[int] = Field(default=None, ge=0)
    niche: Optional[str] = None
    collab_idea: Optional[str] = None
    notes: Optional[str] = None


class ProspectStatusRequest(BaseModel):
    status: ProspectStatus


class Prospect(BaseModel):
    id: str
    handle: str
    name: Optional[str] = None
    platform: str
    follower_count: Optional[int] = None
    niche: Optional[str] = None
    status: ProspectStatus
    outreach_dm: Optional[Dict[str, Any]] = None
    collab_idea: Optional[str] = None
    notes: Optional[str] = None
    last_contacted_at: Optional[str] = None
    created_at: str
    updated_at: str


# ---------- Engagement coach ----------


class EngagementCoachRequest(BaseModel):
    mode: CoachMode
    # comment_reply
    comment: Optional[str] = None
    context: Optional[str] = None
    comment_type: Optional[str] = None
    # collab_dm; prospect_id fills the target fields and receives the generated DMs
    prospect_id: Optional[str] = None
    target_handle: Optional[str] = None
    target_name: Optional[str] = None
    target_niche: Optional[str] = None
    target_followers: Optional[int] = None
    collab_idea: Optional[str] = None
    # engagement_strategy
    current_followers: Optional[str] = None
    engagement_rate: Optional[str] = None
    posting_frequency: Optional[str] = None


class EngagementCoachResponse(BaseModel):
    mode: CoachMode
    result: Dict[str, Any]
    prospect: Optional[Prospect] = None
