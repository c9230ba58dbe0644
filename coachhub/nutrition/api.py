# -*- coding: utf-8 -*-
"""Nutrition domain: API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_admin, get_current_user
from ..exports.responses import text_download
from ..onboarding.storage import get_profile
from .grocery import grocery_list, render_text
from .models import (
    Category,
    CategoryInput,
    Day,
    DayInput,
    DayUpdate,
    GroceryList,
    Meal,
    MealInput,
    MealUpdate,
    Recommendation,
    RecommendRequest,
    Template,
    TemplateDetail,
    TemplateInput,
    TemplateUpdate,
)
from .recommend import recommend
from .storage import (
    create_category,
    create_day,
    create_meal,
    create_template,
    delete_day,
    delete_meal,
    delete_template,
    get_template_detail,
    list_categories,
    list_templates,
    update_day,
    update_meal,
    update_template,
)

router = APIRouter(prefix="/api/nutrition", tags=["Nutrition"])


def _week_grocery(template_id: str, week_number: int) -> dict:
    detail = get_template_detail(template_id, week_number=week_number)
    meals = [meal for day in detail["days"] for meal in day["meals"]]
    grouped = grocery_list(meals)
    return {
        "template_id": template_id,
        "week_number": week_number,
        "categories": grouped,
        "total_items": sum(len(items) for items in grouped.values()),
        "text": render_text(grouped, week_number),
    }


@router.get("/categories", response_model=List[Category], summary="List nutrition categories")
def list_categories_api(user: dict = Depends(get_current_user)):
    return list_categories()


@router.post("/categories", response_model=Category, summary="Create a nutrition category")
def create_category_api(request: CategoryInput, user: dict = Depends(get_current_admin)):
    return create_category(request.model_dump())


@router.get("/templates", response_model=List[Template], summary="List active templates")
def list_templates_api(
    category_id: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_user),
):
    return list_templates(category_id=category_id)


@router.post("/templates", response_model=Template, summary="Create a template")
def create_template_api(request: TemplateInput, user: dict = Depends(get_current_admin)):
    return create_template(request.model_dump())


@router.get("/templates/{template_id}", response_model=TemplateDetail, summary="Template with days and meals")
def get_template_api(template_id: str, user: dict = Depends(get_current_user)):
    return get_template_detail(template_id)


@router.patch("/templates/{template_id}", response_model=Template, summary="Update a template")
def update_template_api(template_id: str, request: TemplateUpdate, user: dict = Depends(get_current_admin)):
    return update_template(template_id, request.model_dump(exclude_unset=True))


@router.delete("/templates/{template_id}", summary="Delete a template and its days")
def delete_template_api(template_id: str, user: dict = Depends(get_current_admin)):
    delete_template(template_id)
    return {"status": "ok"}


@router.get("/templates/{template_id}/grocery-list", response_model=GroceryList, summary="Grocery list for a week")
def grocery_list_api(
    template_id: str,
    week: int = Query(default=1, ge=1),
    user: dict = Depends(get_current_user),
):
    return _week_grocery(template_id, week)


@router.get("/templates/{template_id}/grocery-list.txt", summary="Grocery list as plain text")
def grocery_list_text(
    template_id: str,
    week: int = Query(default=1, ge=1),
    user: dict = Depends(get_current_user),
):
    data = _week_grocery(template_id, week)
    return text_download(data["text"], f"week-{week}-grocery-list")


@router.post("/templates/{template_id}/days", response_model=Day, summary="Add a day")
def create_day_api(template_id: str, request: DayInput, user: dict = Depends(get_current_admin)):
    return create_day(template_id, request.model_dump())


@router.patch("/days/{day_id}", response_model=Day, summary="Update a day")
def update_day_api(day_id: str, request: DayUpdate, user: dict = Depends(get_current_admin)):
    return update_day(day_id, request.model_dump(exclude_unset=True))


@router.delete("/days/{day_id}", summary="Delete a day and its meals")
def delete_day_api(day_id: str, user: dict = Depends(get_current_admin)):
    delete_day(day_id)
    return {"status": "ok"}


@router.post("/days/{day_id}/meals", response_model=Meal, summary="Add a meal")
def create_meal_api(day_id: str, request: MealInput, user: dict = Depends(get_current_admin)):
    return create_meal(day_id, request.model_dump())


@router.patch("/meals/{meal_id}", response_model=Meal, summary="Update a meal")
def update_meal_api(meal_id: str, request: MealUpdate, user: dict = Depends(get_current_admin)):
    return update_meal(meal_id, request.model_dump(exclude_unset=True))


@router.delete("/meals/{meal_id}", summary="Delete a meal")
def delete_meal_api(meal_id: str, user: dict = Depends(get_current_admin)):
    delete_meal(meal_id)
    return {"status": "ok"}


@router.post("/recommend", response_model=Recommendation, summary="Recommend a template for a profile")
def recommend_api(request: RecommendRequest, user: dict = Depends(get_current_user)):
    if request.profile is not None:
        profile = request.profile.model_dump()
    else:
        profile = get_profile(user["id"]) or {}
    return recommend(list_templates(), list_categories(), profile)
