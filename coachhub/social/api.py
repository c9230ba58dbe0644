# -*- coding: utf-8 -*-
"""Social command: API endpoints."""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_admin
from ..exports import to_csv
from ..exports.responses import csv_download
from .coach import analyze_competitor, audit_profile, coach
from .models import (
    AuditItemToggle,
    CompetitorAnalysis,
    CompetitorAnalyzeRequest,
    EngagementCoachRequest,
    EngagementCoachResponse,
    ProfileAudit,
    ProfileAuditRequest,
    Prospect,
    ProspectInput,
    ProspectStatusRequest,
    ProspectUpdate,
)
from .storage import (
    create_prospect,
    delete_analysis,
    delete_audit,
    delete_prospect,
    get_audit,
    get_prospect,
    list_analyses,
    list_audits,
    list_prospects,
    save_analysis,
    save_audit,
    save_outreach_dm,
    status_counts,
    toggle_audit_item,
    update_prospect,
    update_prospect_status,
)

router = APIRouter(prefix="/api/social", tags=["Social"])
functions_router = APIRouter(prefix="/api/functions", tags=["Functions"])

_PROSPECT_CSV_COLUMNS = [
    ("handle", "Handle"),
    ("name", "Name"),
    ("platform", "Platform"),
    ("follower_count", "Followers"),
    ("niche", "Niche"),
    ("status", "Status"),
    ("collab_idea", "Collab Idea"),
    ("notes", "Notes"),
    ("last_contacted_at", "Last Contacted"),
    ("created_at", "Added"),
]


# ---------- Competitor analyses ----------


@router.get("/competitors", response_model=List[CompetitorAnalysis], summary="List competitor analyses")
def list_competitors_api(
    platform: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_admin),
):
    return list_analyses(platform=platform)


@router.delete("/competitors/{analysis_id}", summary="Delete a competitor analysis")
def delete_competitor_api(analysis_id: str, user: dict = Depends(get_current_admin)):
    delete_analysis(analysis_id)
    return {"status": "ok"}


@functions_router.post(
    "/social-competitor-analyze",
    response_model=CompetitorAnalysis,
    summary="Analyze a competitor with the LLM and store the result",
)
def competitor_analyze_api(request: CompetitorAnalyzeRequest, user: dict = Depends(get_current_admin)):
    analysis = analyze_competitor(
        competitor_handle=request.competitor_handle,
        platform=request.platform,
        pasted_content=request.pasted_content,
        notes=request.notes,
    )
    return save_analysis(
        competitor_handle=request.competitor_handle,
        platform=request.platform,
        analysis=analysis,
        pasted_content=request.pasted_content,
        notes=request.notes,
    )


# ---------- Profile audits ----------


@router.get("/audits", response_model=List[ProfileAudit], summary="List profile audits, newest first")
def list_audits_api(
    platform: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_admin),
):
    return list_audits(platform=platform)


@router.get("/audits/{audit_id}", response_model=ProfileAudit, summary="Get a profile audit")
def get_audit_api(audit_id: str, user: dict = Depends(get_current_admin)):
    return get_audit(audit_id)


@router.post("/audits/{audit_id}/toggle-item", response_model=ProfileAudit, summary="Tick or untick a checklist item")
def toggle_audit_item_api(audit_id: str, request: AuditItemToggle, user: dict = Depends(get_current_admin)):
    return toggle_audit_item(audit_id, request.item_id)


@router.delete("/audits/{audit_id}", summary="Delete a profile audit")
def delete_audit_api(audit_id: str, user: dict = Depends(get_current_admin)):
    delete_audit(audit_id)
    return {"status": "ok"}


@functions_router.post(
    "/social-profile-audit",
    response_model=ProfileAudit,
    summary="Audit a social profile with the LLM and store the checklist",
)
def profile_audit_api(request: ProfileAuditRequest, user: dict = Depends(get_current_admin)):
    fields = request.model_dump()
    platform = fields.pop("platform")
    return save_audit(platform, audit_profile(platform, **fields))


# ---------- Collab prospects ----------


@router.get("/prospects", response_model=List[Prospect], summary="List collab prospects")
def list_prospects_api(
    status: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_admin),
):
    return list_prospects(status=status)


@router.post("/prospects", response_model=Prospect, summary="Add a collab prospect")
def create_prospect_api(request: ProspectInput, user: dict = Depends(get_current_admin)):
    return create_prospect(request.model_dump())


@router.get("/prospects/export.csv", summary="Export collab prospects as CSV")
def export_prospects(
    status: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_admin),
):
    return csv_download(to_csv(list_prospects(status=status), _PROSPECT_CSV_COLUMNS), "collab-prospects")


@router.get("/prospects/status-counts", response_model=Dict[str, int], summary="Prospects per status")
def prospect_counts_api(user: dict = Depends(get_current_admin)):
    return status_counts(list_prospects())


@router.get("/prospects/{prospect_id}", response_model=Prospect, summary="Get a collab prospect")
def get_prospect_api(prospect_id: str, user: dict = Depends(get_current_admin)):
    return get_prospect(prospect_id)


@router.patch("/prospects/{prospect_id}", response_model=Prospect, summary="Update a collab prospect")
def update_prospect_api(prospect_id: str, request: ProspectUpdate, user: dict = Depends(get_current_admin)):
    return update_prospect(prospect_id, request.model_dump(exclude_unset=True))


@router.put("/prospects/{prospect_id}/status", response_model=Prospect, summary="Move a prospect through the pipeline")
def prospect_status_api(prospect_id: str, request: ProspectStatusRequest, user: dict = Depends(get_current_admin)):
    return update_prospect_status(prospect_id, request.status)


@router.delete("/prospects/{prospect_id}", summary="Delete a collab prospect")
def delete_prospect_api(prospect_id: str, user: dict = Depends(get_current_admin)):
    delete_prospect(prospect_id)
    return {"status": "ok"}


# ---------- Engagement coach ----------


@functions_router.post(
    "/social-engagement-coach",
    response_model=EngagementCoachResponse,
    summary="Comment replies, collab DMs and daily engagement plans",
)
def engagement_coach_api(request: EngagementCoachRequest, user: dict = Depends(get_current_admin)):
    fields = request.model_dump()
    prospect = None
    if request.mode == "collab_dm" and request.prospect_id:
        prospect = get_prospect(request.prospect_id)
        fields["target_handle"] = fields["target_handle"] or prospect["handle"]
        fields["target_name"] = fields["target_name"] or prospect["name"]
        fields["target_niche"] = fields["target_niche"] or prospect["niche"]
        if fields["target_followers"] is None:
            fields["target_followers"] = prospect["follower_count"]
        fields["collab_idea"] = fields["collab_idea"] or prospect["collab_idea"]
    result = coach(request.mode, fields)
    if prospect is not None:
        prospect = save_outreach_dm(prospect["id"], result)
    return {"mode": request.mode, "result": result, "prospect": prospect}
