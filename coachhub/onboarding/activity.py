# -*- coding: utf-8 -*-
"""Activity level vocabulary shared by nutrition targets and program suggestion."""

from __future__ import annotations

from typing import Optional

# Intake wizard values and labels -> stored activity level.
ACTIVITY_ALIASES = {
    "lightly_active": "light",
    "moderately_active": "moderate",
    "extremely_active": "very_active",
}


def normalize_activity(value: Optional[str], default: str = "moderate") -> str:
    """Map ``Lightly Active`` / ``lightly_active`` / ``light`` onto one spelling.

    Unrecognised values come back cleaned but otherwise unchanged, so callers
    treat them as matching nothing.
    """
    if not value or not value.strip():
        return default
    key = value.strip().lower().replace("-", "_").replace(" ", "_")
    return ACTIVITY_ALIASES.get(key, key)
