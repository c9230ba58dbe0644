# -*- coding: utf-8 -*-
"""Daily routine compliance."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Set


def compliance(routines: Iterable[Dict[str, Any]], completed_ids: Set[str]) -> Dict[str, int]:
    """Completed share of the active routines, as a whole percent (0 when none)."""
    active = [r for r in routines if r.get("is_active")]
    done = sum(1 for r in active if r["id"] in completed_ids)
    total = len(active)
    percent = round(done / total * 100) if total else 0
    return {"completed": done, "total": total, "percent": percent}
