# -*- coding: utf-8 -*-
"""80/20 content mix scoring."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable

STRATEGY_TYPES = ("hot_take", "trending", "story", "value", "engagement", "promo")

# Above this promo share the score drops 5 points per percent.
PROMO_CEILING = 20


def strategy_mix(posts: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    posts = list(posts)
    counts = Counter(p.get("strategy_type") for p in posts if p.get("strategy_type"))
    total = len(posts)
    promo_rate = round(counts.get("promo", 0) / total * 100) if total else 0
    if promo_rate <= PROMO_CEILING:
        score = 100
    else:
        score = max(0, 100 - (promo_rate - PROMO_CEILING) * 5)
    return {
        "total": total,
        "counts": {s: counts.get(s, 0) for s in STRATEGY_TYPES},
        "promo_rate": promo_rate,
        "strategy_score": score,
    }
