# -*- coding: utf-8 -*-
"""Discipline: API endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_admin, get_current_user
from ..config import settings
from ..exports import resolve_timezone
from ..exports.responses import ics_download
from .compliance import compliance
from .models import (
    ApplyTemplateRequest,
    Compliance,
    CompletionToggleRequest,
    CompletionToggleResponse,
    ReorderRequest,
    Routine,
    RoutineInput,
    RoutineType,
    RoutineUpdate,
    SubStep,
    SubStepGroups,
    SubStepInput,
    SubStepUpdate,
    Template,
    TemplateInput,
    TemplateUpdate,
)
from .schedule import routines_ics
from .storage import (
    apply_template,
    completed_ids,
    create_routine,
    create_substep,
    create_template,
    delete_routine,
    delete_substep,
    delete_template,
    get_template,
    list_routines,
    list_substeps,
    list_templates,
    reorder_routines,
    toggle_active,
    toggle_completion,
    update_routine,
    update_substep,
    update_template,
)

router = APIRouter(prefix="/api/discipline", tags=["Discipline"])


# ---------- Routines ----------


@router.get("/routines", response_model=List[Routine], summary="List routines")
def list_routines_api(
    routine_type: Optional[RoutineType] = Query(default=None),
    active_only: bool = Query(default=False),
    user: dict = Depends(get_current_user),
):
    return list_routines(routine_type=routine_type, active_only=active_only)


@router.post("/routines", response_model=Routine, summary="Create a routine")
def create_routine_api(request: RoutineInput, user: dict = Depends(get_current_admin)):
    return create_routine(request.model_dump())


@router.put("/routines/reorder", response_model=List[Routine], summary="Rewrite display order")
def reorder_api(request: ReorderRequest, user: dict = Depends(get_current_admin)):
    return reorder_routines(request.routine_type, request.routine_ids)


@router.patch("/routines/{routine_id}", response_model=Routine, summary="Update a routine")
def update_routine_api(routine_id: str, request: RoutineUpdate, user: dict = Depends(get_current_admin)):
    return update_routine(routine_id, request.model_dump(exclude_unset=True))


@router.post("/routines/{routine_id}/toggle-active", response_model=Routine, summary="Activate or deactivate a routine")
def toggle_active_api(routine_id: str, user: dict = Depends(get_current_admin)):
    return toggle_active(routine_id)


@router.delete("/routines/{routine_id}", summary="Delete a routine")
def delete_routine_api(routine_id: str, user: dict = Depends(get_current_admin)):
    delete_routine(routine_id)
    return {"status": "ok"}


# ---------- Completions ----------


@router.post("/completions/toggle", response_model=CompletionToggleResponse, summary="Check or uncheck a routine")
def toggle_completion_api(request: CompletionToggleRequest, user: dict = Depends(get_current_user)):
    day = (request.completion_date or date.today()).isoformat()
    done = toggle_completion(user["id"], request.routine_id, day)
    return CompletionToggleResponse(routine_id=request.routine_id, completion_date=day, completed=done)


@router.get("/compliance", response_model=Compliance, summary="Today's compliance")
def compliance_api(
    day: Optional[date] = Query(default=None, alias="date"),
    user: dict = Depends(get_current_user),
):
    day_s = (day or date.today()).isoformat()
    done = completed_ids(user["id"], day_s)
    stats = compliance(list_routines(active_only=True), done)
    return Compliance(date=day_s, completed_routine_ids=sorted(done), **stats)


@router.get("/export.ics", summary="Routines as a sequential iCalendar schedule")
def export_ics(
    routine_type: RoutineType = Query(...),
    day: Optional[date] = Query(default=None, alias="date"),
    start_time: Optional[str] = Query(default=None, description="e.g. '5:30 AM'; defaults to the first routine's slot"),
    tz: Optional[str] = Query(default=None, description="IANA timezone of the member, e.g. America/Chicago"),
    user: dict = Depends(get_current_user),
):
    zone = resolve_timezone(tz or settings.timezone)
    routines = list_routines(routine_type=routine_type, active_only=True)
    content = routines_ics(
        routines,
        day=day or datetime.now(zone).date(),
        start_time=start_time,
        base_url=settings.site_url,
        tz=zone,
    )
    return ics_download(content, f"{routine_type}-discipline-schedule")


# ---------- Templates ----------


@router.get("/templates", response_model=List[Template], summary="List templates")
def list_templates_api(
    active_only: bool = Query(default=False),
    user: dict = Depends(get_current_admin),
):
    return list_templates(active_only=active_only)


@router.post("/templates", response_model=Template, summary="Create a template")
def create_template_api(request: TemplateInput, user: dict = Depends(get_current_admin)):
    return create_template(request.model_dump())


@router.get("/templates/{template_id}", response_model=Template, summary="Get a template")
def get_template_api(template_id: str, user: dict = Depends(get_current_admin)):
    return get_template(template_id)


@router.patch("/templates/{template_id}", response_model=Template, summary="Update a template")
def update_template_api(template_id: str, request: TemplateUpdate, user: dict = Depends(get_current_admin)):
    return update_template(template_id, request.model_dump(exclude_unset=True))


@router.delete("/templates/{template_id}", summary="Delete a template")
def delete_template_api(template_id: str, user: dict = Depends(get_current_admin)):
    delete_template(template_id)
    return {"status": "ok"}


@router.post("/templates/{template_id}/apply", response_model=List[Routine], summary="Load a template into routines")
def apply_template_api(template_id: str, request: ApplyTemplateRequest, user: dict = Depends(get_current_admin)):
    return apply_template(template_id, replace=request.replace)


# ---------- Sub-steps ----------


@router.get("/templates/{template_id}/substeps", response_model=SubStepGroups, summary="Sub-steps grouped by routine")
def list_substeps_api(template_id: str, user: dict = Depends(get_current_admin)):
    get_template(template_id)
    return SubStepGroups(template_id=template_id, groups=list_substeps(template_id))


@router.post("/substeps", response_model=SubStep, summary="Append a sub-step")
def create_substep_api(request: SubStepInput, user: dict = Depends(get_current_admin)):
    return create_substep(request.model_dump())


@router.patch("/substeps/{step_id}", response_model=SubStep, summary="Update a sub-step")
def update_substep_api(step_id: str, request: SubStepUpdate, user: dict = Depends(get_current_admin)):
    return update_substep(step_id, request.model_dump(exclude_unset=True))


@router.delete("/substeps/{step_id}", summary="Delete a sub-step")
def delete_substep_api(step_id: str, user: dict = Depends(get_current_admin)):
    delete_substep(step_id)
    return {"status": "ok"}
