# -*- coding: utf-8 -*-
"""Account administration: Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

PlanType = Literal["membership", "transformation", "coaching"]


class CreateAccountRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    first_name: Optional[str] = Field(default=None, max_length=80)
    last_name: Optional[str] = Field(default=None, max_length=80)
    plan_type: PlanType = "membership"
    is_admin: bool = False


class CreateAccountResponse(BaseModel):
    user_id: str
    message: str


class SubscriptionRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    plan_type: PlanType


class Subscription(BaseModel):
    id: str
    user_id: str
    plan_type: PlanType
    status: str
    started_at: str
    expires_at: Optional[str] = None
    created_at: str


class SubscriptionResponse(BaseModel):
    created: bool
    subscription: Subscription
    message: str


class RoleRequest(BaseModel):
    role: str = Field(..., min_length=1, max_length=40)


class Account(BaseModel):
    id: str
    email: str
    created_at: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    intake_completed_at: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    subscription: Optional[Subscription] = None
