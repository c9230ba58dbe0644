# -*- coding: utf-8 -*-
"""Calorie targets and nutrition template recommendation."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

from ..onboarding.activity import normalize_activity

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

# Intake wizard labels and stored goal values -> canonical goal.
GOAL_ALIASES = {
    "Lose fat": "fat_loss",
    "Build muscle": "muscle_gain",
    "Both - lose fat and build muscle": "recomposition",
    "lose_fat": "fat_loss",
    "fat_loss": "fat_loss",
    "build_muscle": "muscle_gain",
    "muscle_gain": "muscle_gain",
    "recomposition": "recomposition",
    "maintain": "recomposition",
}

RESTRICTION_TAGS = {
    "gluten-free": "gluten-free",
    "gluten free": "gluten-free",
    "dairy-free": "dairy-free",
    "dairy free": "dairy-free",
    "vegetarian": "vegetarian",
    "keto": "keto",
    "keto/low-carb": "keto",
    "low-carb": "keto",
}

DEFAULT_WEIGHT_LBS = 180.0
DEFAULT_HEIGHT_INCHES = 70
DEFAULT_AGE = 30

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_HEIGHT_RE = re.compile(r"(\d+)'\s*(\d+)")


def parse_weight(value: Optional[str]) -> float:
    match = _NUMBER_RE.search(value or "")
    return float(match.group(0)) if match else DEFAULT_WEIGHT_LBS


def parse_height_inches(value: Optional[str]) -> int:
    match = _HEIGHT_RE.search(value or "")
    if not match:
        return DEFAULT_HEIGHT_INCHES
    return int(match.group(1)) * 12 + int(match.group(2))


def canonical_goal(goal: Optional[str]) -> str:
    return GOAL_ALIASES.get((goal or "").strip(), "recomposition")


def calculate_targets(profile: Dict[str, Any]) -> Dict[str, Any]:
    """Mifflin-St Jeor BMR, activity-adjusted TDEE and a goal-driven target."""
    weight_kg = parse_weight(profile.get("weight")) * 0.453592
    height_cm = parse_height_inches(profile.get("height")) * 2.54
    age = profile.get("age") or DEFAULT_AGE
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age + 5

    activity = normalize_activity(profile.get("activity_level"))
    tdee = round(bmr * ACTIVITY_MULTIPLIERS.get(activity, ACTIVITY_MULTIPLIERS["moderate"]))

    goal = canonical_goal(profile.get("goal"))
    if goal == "fat_loss":
        if tdee > 2500:
            category, target = "Fat Loss - Aggressive", tdee - 750
        else:
            category, target = "Fat Loss - Moderate", tdee - 500
    elif goal == "muscle_gain":
        if activity in ("active", "very_active"):
            category, target = "Muscle Building - Mass", tdee + 500
        else:
            category, target = "Muscle Building - Lean", tdee + 300
    else:
        category, target = "Recomposition", tdee

    return {
        "recommended_category": category,
        "bmr": round(bmr),
        "tdee": tdee,
        "target_calories": target,
    }


def dietary_tags(restrictions: Optional[str]) -> List[str]:
    tags: List[str] = []
    for raw in (restrictions or "").split(","):
        tag = RESTRICTION_TAGS.get(raw.strip().lower())
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def distance_to_range(target: float, low: float, high: float) -> float:
    if target < low:
        return low - target
    if target > high:
        return target - high
    return 0.0


def midpoint_distance(template: Dict[str, Any], target: float) -> float:
    midpoint = (template["calorie_range_min"] + template["calorie_range_max"]) / 2
    return abs(target - midpoint)


def score_template(template: Dict[str, Any], target: float, tdee: Optional[int] = None) -> Dict[str, Any]:
    """Score a template's calorie range against the client's target.

    A range that contains the target scores 100; outside it every 10 calories of
    distance to the nearest bound costs one point. A containing template therefore
    never ranks below one whose range misses the target.
    """
    low, high = template["calorie_range_min"], template["calorie_range_max"]
    distance = distance_to_range(target, low, high)
    score = round(max(0.0, 100 - distance / 10))

    reasons: List[str] = []
    if distance == 0:
        reasons.append(f"Target falls inside the calorie range ({low}-{high} cal)")
    elif distance <= 150:
        reasons.append(f"Good calorie range ({low}-{high} cal)")
    else:
        reasons.append(f"Calorie range: {low}-{high} cal")
    reasons.append(f"Target: {round(target)} cal/day")
    if tdee is not None:
        reasons.append(f"TDEE: {tdee} cal")

    return {
        "template": template,
        "score": score,
        "reasons": reasons,
        "calorie_distance": distance,
        "match_quality": match_quality(score),
    }


def match_quality(score: float) -> str:
    if score >= 90:
        return "Excellent Match"
    if score >= 75:
        return "Good Match"
    if score >= 50:
        return "Fair Match"
    return "Possible Fit"


def recommend(
    templates: Iterable[Dict[str, Any]],
    categories: Iterable[Dict[str, Any]],
    profile: Dict[str, Any],
) -> Dict[str, Any]:
    targets = calculate_targets(profile)
    result: Dict[str, Any] = {
        "targets": targets,
        "category": None,
        "template": None,
        "score": None,
        "match_quality": None,
        "reasons": [],
        "scored_templates": [],
    }
    category = next((c for c in categories if c["name"] == targets["recommended_category"]), None)
    if category is None:
        return result
    result["category"] = category

    candidates = [t for t in templates if t.get("category_id") == category["id"]]
    wanted = dietary_tags(profile.get("dietary_restrictions"))
    if wanted:
        matching = [t for t in candidates if any(tag in (t.get("dietary_tags") or []) for tag in wanted)]
        if matching:
            candidates = matching
    if not candidates:
        return result

    target = targets["target_calories"]
    scored = [score_template(t, target, targets["tdee"]) for t in candidates]
    scored.sort(key=lambda s: (-s["score"], midpoint_distance(s["template"], target)))
    best = scored[0]
    result.update(
        template=best["template"],
        score=best["score"],
        match_quality=best["match_quality"],
        reasons=best["reasons"],
        scored_templates=scored,
    )
    return result
