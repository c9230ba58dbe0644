# -*- coding: utf-8 -*-
"""Account administration: API endpoints (admin only)."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_admin
from .models import (
    Account,
    CreateAccountRequest,
    CreateAccountResponse,
    RoleRequest,
    SubscriptionRequest,
    SubscriptionResponse,
)
from .storage import assign_role, create_account, delete_account, ensure_subscription, list_accounts, remove_role

router = APIRouter(prefix="/api/admin/users", tags=["Admin Users"])
functions_router = APIRouter(prefix="/api/functions", tags=["Functions"])


@router.get("", response_model=List[Account], summary="List accounts with roles and subscription")
def list_accounts_api(user: dict = Depends(get_current_admin)):
    return list_accounts()


@router.delete("/{user_id}", summary="Delete an account")
def delete_account_api(user_id: str, user: dict = Depends(get_current_admin)):
    if user_id == user["id"]:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    delete_account(user_id)
    return {"status": "ok", "message": f"User {user_id} deleted"}


@router.post("/{user_id}/roles", response_model=List[str], summary="Assign a role")
def assign_role_api(user_id: str, request: RoleRequest, user: dict = Depends(get_current_admin)):
    return assign_role(user_id, request.role)


@router.delete("/{user_id}/roles/{role}", response_model=List[str], summary="Revoke a role")
def revoke_role_api(user_id: str, role: str, user: dict = Depends(get_current_admin)):
    return remove_role(user_id, role)


@functions_router.post("/create-admin-user", response_model=CreateAccountResponse, summary="Create a ready-to-use account")
def create_account_api(request: CreateAccountRequest, user: dict = Depends(get_current_admin)):
    return create_account(**request.model_dump())


@functions_router.post(
    "/create-user-subscription",
    response_model=SubscriptionResponse,
    summary="Give an existing user an active subscription",
)
def create_subscription_api(request: SubscriptionRequest, user: dict = Depends(get_current_admin)):
    return ensure_subscription(request.user_id, request.plan_type)
