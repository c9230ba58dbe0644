# -*- coding: utf-8 -*-
"""Training programs: suggest a program category from an intake profile."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..onboarding.activity import normalize_activity

WEIGHTS = {
    "experience": 0.35,
    "body_fat": 0.20,
    "activity_level": 0.20,
    "training_days": 0.15,
    "injuries": 0.10,
}

CATEGORY_MAPPINGS: Dict[str, Dict[str, Any]] = {
    "Beginner Basics": {
        "experience": ("beginner", "none"),
        "body_fat": ("obese", "overweight", "average"),
        "activity_level": ("sedentary", "light"),
        "min_days": 3,
        "max_days": 4,
        "injury_friendly": True,
    },
    "Foundation Builder": {
        "experience": ("beginner", "intermediate"),
        "body_fat": ("overweight", "average"),
        "activity_level": ("light", "moderate"),
        "min_days": 3,
        "max_days": 5,
        "injury_friendly": True,
    },
    "Intermediate Growth": {
        "experience": ("intermediate",),
        "body_fat": ("average", "lean"),
        "activity_level": ("moderate", "active", "very_active"),
        "min_days": 4,
        "max_days": 6,
        "injury_friendly": False,
    },
    "Advanced Performance": {
        "experience": ("advanced",),
        "body_fat": ("lean", "average"),
        "activity_level": ("active", "very_active"),
        "min_days": 5,
        "max_days": 7,
        "injury_friendly": False,
    },
    "Athletic Conditioning": {
        "experience": ("beginner", "intermediate", "advanced"),
        "body_fat": ("lean", "average", "overweight"),
        "activity_level": ("moderate", "active", "very_active"),
        "min_days": 3,
        "max_days": 6,
        "injury_friendly": False,
    },
}


def normalize_experience(experience: Optional[str]) -> str:
    if not experience:
        return "beginner"
    lower = experience.lower()
    if any(k in lower for k in ("never", "0-1", "beginner")):
        return "beginner"
    if any(k in lower for k in ("1-3", "intermediate", "some")):
        return "intermediate"
    if any(k in lower for k in ("3+", "advanced", "expert")):
        return "advanced"
    return "beginner"


def match_quality(score: int) -> str:
    if score >= 85:
        return "Excellent Match"
    if score >= 70:
        return "Good Match"
    if score >= 50:
        return "Fair Match"
    return "Possible Fit"


def score_category(name: str, profile: Dict[str, Any]) -> Dict[str, Any]:
    mapping = CATEGORY_MAPPINGS.get(name)
    if not mapping:
        return {"category": name, "score": 0, "reasons": ["Unknown category"], "match_quality": match_quality(0)}

    reasons: List[str] = []
    total = 0.0

    experience = normalize_experience(profile.get("experience"))
    matched = experience in mapping["experience"]
    total += (100 if matched else 30) * WEIGHTS["experience"]
    if matched:
        reasons.append(f"Experience level matches ({experience})")

    body_fat = (profile.get("body_fat_estimate") or "average").lower()
    matched = body_fat in mapping["body_fat"]
    total += (100 if matched else 40) * WEIGHTS["body_fat"]
    if matched:
        reasons.append(f"Body composition aligns ({body_fat})")

    activity = normalize_activity(profile.get("activity_level"), default="sedentary")
    matched = activity in mapping["activity_level"]
    total += (100 if matched else 35) * WEIGHTS["activity_level"]
    if matched:
        reasons.append(f"Activity level compatible ({activity.replace('_', ' ')})")

    days = profile.get("training_days_per_week") or 3
    if mapping["min_days"] <= days <= mapping["max_days"]:
        days_score = 100
        reasons.append(f"{days} training days fits well")
    else:
        days_score = max(0, 100 - abs(days - mapping["min_days"]) * 20)
    total += days_score * WEIGHTS["training_days"]

    injury_score = 100
    if (profile.get("injuries") or "").strip():
        if mapping["injury_friendly"]:
            reasons.append("Injury-friendly programming")
        else:
            injury_score = 50
    total += injury_score * WEIGHTS["injuries"]

    score = round(total)
    return {"category": name, "score": score, "reasons": reasons, "match_quality": match_quality(score)}


def suggest_categories(profile: Dict[str, Any], categories: Optional[List[str]] = None) -> Dict[str, Any]:
    """Score every category against the profile, best first."""
    names = categories if categories is not None else list(CATEGORY_MAPPINGS)
    scored = sorted((score_category(n, profile) for n in names), key=lambda s: s["score"], reverse=True)
    return {"recommended": scored[0] if scored else None, "scored_categories": scored}
