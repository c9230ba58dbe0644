# -*- coding: utf-8 -*-
"""Content engine: API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_admin
from ..exports import format_script_as_text, to_csv
from ..exports.responses import csv_download, text_download
from .generator import generate_ideas
from .models import (
    ContentPost,
    ContentPostInput,
    ContentPostUpdate,
    ContentScript,
    GenerateIdeasRequest,
    GenerateIdeasResponse,
    ScriptRequest,
    StatusUpdateRequest,
    StrategyMix,
)
from .script import generate_script
from .storage import create_post, create_posts, delete_post, get_post, list_posts, update_post, update_status
from .strategy import strategy_mix

router = APIRouter(prefix="/api/content", tags=["Content"])
functions_router = APIRouter(prefix="/api/functions", tags=["Functions"])

_CSV_COLUMNS = [
    ("title", "Title"),
    ("category", "Category"),
    ("mode", "Mode"),
    ("strategy_type", "Strategy"),
    ("status", "Status"),
    ("platforms", "Platforms"),
    ("format", "Format"),
    ("hook", "Hook"),
    ("talking_points", "Talking Points"),
    ("filming_tips", "Filming Tips"),
    ("cta", "CTA"),
    ("hashtags", "Hashtags"),
    ("created_at", "Created"),
]


@router.get("/posts", response_model=List[ContentPost], summary="List content posts")
def list_posts_api(
    category: Optional[str] = Query(default=None, description="Category or 'all'"),
    mode: Optional[str] = Query(default=None, description="Mode or 'all'"),
    status: Optional[str] = Query(default=None, description="Status or 'all'"),
    user: dict = Depends(get_current_admin),
):
    return list_posts(category=category, mode=mode, status=status)


@router.post("/posts", response_model=ContentPost, summary="Save a content post")
def create_post_api(request: ContentPostInput, user: dict = Depends(get_current_admin)):
    return create_post(request.model_dump())


@router.get("/posts/export.csv", summary="Export content posts as CSV")
def export_posts_csv(
    category: Optional[str] = Query(default=None),
    mode: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_admin),
):
    posts = list_posts(category=category, mode=mode, status=status)
    return csv_download(to_csv(posts, _CSV_COLUMNS), "content-posts")


@router.get("/strategy-mix", response_model=StrategyMix, summary="Strategy mix and promo rate")
def strategy_mix_api(user: dict = Depends(get_current_admin)):
    return strategy_mix(list_posts())


@router.get("/posts/{post_id}", response_model=ContentPost, summary="Get a content post")
def get_post_api(post_id: str, user: dict = Depends(get_current_admin)):
    return get_post(post_id)


@router.patch("/posts/{post_id}", response_model=ContentPost, summary="Update a content post")
def update_post_api(post_id: str, request: ContentPostUpdate, user: dict = Depends(get_current_admin)):
    return update_post(post_id, request.model_dump(exclude_unset=True))


@router.put("/posts/{post_id}/status", response_model=ContentPost, summary="Mark fresh, used or favorite")
def update_status_api(post_id: str, request: StatusUpdateRequest, user: dict = Depends(get_current_admin)):
    return update_status(post_id, request.status)


@router.delete("/posts/{post_id}", summary="Delete a content post")
def delete_post_api(post_id: str, user: dict = Depends(get_current_admin)):
    delete_post(post_id)
    return {"status": "ok"}


@functions_router.post(
    "/generate-content-ideas",
    response_model=GenerateIdeasResponse,
    summary="Generate content ideas via the LLM",
)
def generate_content_ideas(request: GenerateIdeasRequest, user: dict = Depends(get_current_admin)):
    result = generate_ideas(category=request.category, mode=request.mode, strategy_type=request.strategy_type)
    saved = create_posts(result["ideas"]) if request.save and result["ideas"] else []
    return GenerateIdeasResponse(
        category=result["category"],
        strategy_type=result["strategy_type"],
        ideas=result["ideas"],
        saved=saved,
    )


@router.post("/scripts/export.txt", summary="Download a filming script as plain text")
def export_script_text(request: ContentScript, user: dict = Depends(get_current_admin)):
    name = "".join(c if c.isalnum() else "-" for c in request.title.lower()).strip("-") or "script"
    return text_download(format_script_as_text(request.model_dump()), name)


@functions_router.post(
    "/generate-content-script",
    response_model=ContentScript,
    summary="Generate a filming script via the LLM",
)
def generate_content_script(request: ScriptRequest, user: dict = Depends(get_current_admin)):
    fields = request.model_dump()
    if request.content_post_id:
        post = get_post(request.content_post_id)
        fields["title"] = fields["title"] or post["title"]
        fields["category"] = fields["category"] or post["category"]
        fields["hook_idea"] = fields["hook_idea"] or post["hook"]
        fields["talking_points"] = fields["talking_points"] or post["talking_points"]
    return generate_script(
        platform=fields["platform"],
        content_type=fields["content_type"],
        category=fields["category"],
        title=fields["title"] or fields["topic"],
        situation=fields["situation"],
        hook_idea=fields["hook_idea"],
        talking_points=fields["talking_points"],
        content_post_id=request.content_post_id,
    )
