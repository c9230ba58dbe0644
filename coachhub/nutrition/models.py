# -*- coding: utf-8 -*-
"""Nutrition domain: Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Ingredient(BaseModel):
    item: str = Field(..., min_length=1)
    amount: str = ""
    notes: Optional[str] = None


class CategoryInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    target_profile: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class Category(CategoryInput):
    id: str
    created_at: str


class TemplateInput(BaseModel):
    category_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=160)
    description: Optional[str] = None
    goal_type: str = Field(..., description="fat_loss | muscle_gain | recomposition")
    calorie_range_min: int = Field(..., ge=0)
    calorie_range_max: int = Field(..., ge=0)
    daily_protein_g: int = Field(default=0, ge=0)
    daily_carbs_g: int = Field(default=0, ge=0)
    daily_fats_g: int = Field(default=0, ge=0)
    difficulty: Optional[str] = None
    dietary_tags: List[str] = Field(default_factory=list)
    display_order: int = 0
    is_active: bool = True


class TemplateUpdate(BaseModel):
    category_id: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    description: Optional[str] = None
    goal_type: Optional[str] = None
    calorie_range_min: Optional[int] = Field(default=None, ge=0)
    calorie_range_max: Optional[int] = Field(default=None, ge=0)
    daily_protein_g: Optional[int] = Field(default=None, ge=0)
    daily_carbs_g: Optional[int] = Field(default=None, ge=0)
    daily_fats_g: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[str] = None
    dietary_tags: Optional[List[str]] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class Template(TemplateInput):
    id: str
    category_name: Optional[str] = None
    created_at: str
    updated_at: str


class MealInput(BaseModel):
    meal_type: str = Field(..., min_length=1, description="breakfast | lunch | dinner | snack")
    meal_name: str = Field(..., min_length=1, max_length=200)
    calories: int = Field(default=0, ge=0)
    protein_g: int = Field(default=0, ge=0)
    carbs_g: int = Field(default=0, ge=0)
    fats_g: int = Field(default=0, ge=0)
    prep_time_min: Optional[int] = Field(default=None, ge=0)
    cook_time_min: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=1)
    instructions: Optional[str] = None
    notes: Optional[str] = None
    ingredients: List[Ingredient] = Field(default_factory=list)
    display_order: int = 0


class MealUpdate(BaseModel):
    meal_type: Optional[str] = None
    meal_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    calories: Optional[int] = Field(default=None, ge=0)
    protein_g: Optional[int] = Field(default=None, ge=0)
    carbs_g: Optional[int] = Field(default=None, ge=0)
    fats_g: Optional[int] = Field(default=None, ge=0)
    prep_time_min: Optional[int] = Field(default=None, ge=0)
    cook_time_min: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=1)
    instructions: Optional[str] = None
    notes: Optional[str] = None
    ingredients: Optional[List[Ingredient]] = None
    display_order: Optional[int] = None


class Meal(MealInput):
    id: str
    day_id: str


class DayInput(BaseModel):
    day_number: int = Field(..., ge=1)
    day_name: str = Field(..., min_length=1, max_length=40)
    week_number: int = Field(default=1, ge=1)


class DayUpdate(BaseModel):
    day_number: Optional[int] = Field(default=None, ge=1)
    day_name: Optional[str] = Field(default=None, min_length=1, max_length=40)
    week_number: Optional[int] = Field(default=None, ge=1)


class Day(DayInput):
    id: str
    template_id: str
    meals: List[Meal] = Field(default_factory=list)


class TemplateDetail(Template):
    days: List[Day] = Field(default_factory=list)


class GroceryItem(BaseModel):
    item: str
    amounts: List[str]
    category: str


class GroceryList(BaseModel):
    template_id: str
    week_number: int
    categories: Dict[str, List[GroceryItem]]
    total_items: int
    text: str


class ProfileInput(BaseModel):
    goal: Optional[str] = None
    activity_level: Optional[str] = None
    weight: Optional[str] = None
    height: Optional[str] = None
    age: Optional[int] = None
    dietary_restrictions: Optional[str] = None


class RecommendRequest(BaseModel):
    profile: Optional[ProfileInput] = Field(
        default=None, description="Defaults to the caller's saved intake profile"
    )


class CalorieTargets(BaseModel):
    recommended_category: str
    bmr: int
    tdee: int
    target_calories: int


class ScoredTemplate(BaseModel):
    template: Template
    score: int
    reasons: List[str]
    calorie_distance: float
    match_quality: str


class Recommendation(BaseModel):
    targets: CalorieTargets
    category: Optional[Category] = None
    template: Optional[Template] = None
    score: Optional[int] = None
    match_quality: Optional[str] = None
    reasons: List[str] = Field(default_factory=list)
    scored_templates: List[ScoredTemplate] = Field(default_factory=list)
