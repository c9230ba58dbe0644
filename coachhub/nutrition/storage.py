# -*- coding: utf-8 -*-
"""Nutrition domain: categories, templates, days and meals (SQLite)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dumps, row_to_dict, update_columns, utc_now
from ..config import settings

logger = logging.getLogger(__name__)

_TEMPLATE_SELECT = """
    SELECT t.*, c.name AS category_name
    FROM nutrition_templates t
    LEFT JOIN nutrition_categories c ON c.id = t.category_id
"""


def _category(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, bool_fields=("is_active",))


def _template(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, json_fields=("dietary_tags",), bool_fields=("is_active",))


def _meal(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, json_fields=("ingredients",))


def _check_range(low: Optional[int], high: Optional[int]) -> None:
    if low is not None and high is not None and low > high:
        raise HTTPException(status_code=400, detail="calorie_range_min must not exceed calorie_range_max")


# ---------- Categories ----------


def list_categories(*, active_only: bool = True) -> List[Dict[str, Any]]:
    where = "WHERE is_active = 1" if active_only else ""
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(f"SELECT * FROM nutrition_categories {where} ORDER BY display_order, name").fetchall()
    return [_category(r) for r in rows]


def create_category(item: Dict[str, Any]) -> Dict[str, Any]:
    category_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        if conn.execute("SELECT 1 FROM nutrition_categories WHERE name = ?", (item["name"],)).fetchone():
            raise HTTPException(status_code=409, detail="Category name already exists")
        conn.execute(
            """
            INSERT INTO nutrition_categories (id, name, description, target_profile, display_order, is_active, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                category_id,
                item["name"],
                item.get("description"),
                item.get("target_profile"),
                item.get("display_order") or 0,
                int(item.get("is_active", True)),
                utc_now(),
            ),
        )
        row = conn.execute("SELECT * FROM nutrition_categories WHERE id = ?", (category_id,)).fetchone()
    logger.info("Created nutrition category %s", item["name"])
    return _category(row)


# ---------- Templates ----------


def list_templates(*, category_id: Optional[str] = None, active_only: bool = True) -> List[Dict[str, Any]]:
    clauses: List[str] = []
    params: List[Any] = []
    if active_only:
        clauses.append("t.is_active = 1")
    if category_id:
        clauses.append("t.category_id = ?")
        params.append(category_id)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(f"{_TEMPLATE_SELECT} {where} ORDER BY t.display_order, t.name", params).fetchall()
    return [_template(r) for r in rows]


def get_template(template_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(f"{_TEMPLATE_SELECT} WHERE t.id = ?", (template_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Nutrition template not found")
    return _template(row)


def get_template_detail(template_id: str, *, week_number: Optional[int] = None) -> Dict[str, Any]:
    """Template plus its days (by day_number) each carrying meals (by display_order)."""
    template = get_template(template_id)
    day_sql = "SELECT * FROM nutrition_days WHERE template_id = ?"
    params: List[Any] = [template_id]
    if week_number is not None:
        day_sql += " AND week_number = ?"
        params.append(week_number)
    with db_conn(settings.app_db_path) as conn:
        days = [dict(r) for r in conn.execute(f"{day_sql} ORDER BY week_number, day_number", params).fetchall()]
        for day in days:
            day["meals"] = [
                _meal(r)
                for r in conn.execute(
                    "SELECT * FROM nutrition_meals WHERE day_id = ? ORDER BY display_order, meal_name",
                    (day["id"],),
                ).fetchall()
            ]
    template["days"] = days
    return template


def _check_category(conn, category_id: Optional[str]) -> None:
    if category_id and not conn.execute("SELECT 1 FROM nutrition_categories WHERE id = ?", (category_id,)).fetchone():
        raise HTTPException(status_code=400, detail="Unknown category_id")


def create_template(item: Dict[str, Any]) -> Dict[str, Any]:
    _check_range(item["calorie_range_min"], item["calorie_range_max"])
    template_id = str(uuid4())
    now = utc_now()
    with db_conn(settings.app_db_path) as conn:
        _check_category(conn, item.get("category_id"))
        conn.execute(
            """
            INSERT INTO nutrition_templates (
                id, category_id, name, description, goal_type, calorie_range_min, calorie_range_max,
                daily_protein_g, daily_carbs_g, daily_fats_g, difficulty, dietary_tags,
                display_order, is_active, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                template_id,
                item.get("category_id"),
                item["name"],
                item.get("description"),
                item["goal_type"],
                item["calorie_range_min"],
                item["calorie_range_max"],
                item.get("daily_protein_g") or 0,
                item.get("daily_carbs_g") or 0,
                item.get("daily_fats_g") or 0,
                item.get("difficulty"),
                dumps(item.get("dietary_tags") or []),
                item.get("display_order") or 0,
                int(item.get("is_active", True)),
                now,
                now,
            ),
        )
    logger.info("Created nutrition template %s", template_id)
    return get_template(template_id)


def update_template(template_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    nullable = ("category_id", "description", "difficulty")
    changes = {k: v for k, v in changes.items() if v is not None or k in nullable}
    current = get_template(template_id)
    _check_range(
        changes.get("calorie_range_min", current["calorie_range_min"]),
        changes.get("calorie_range_max", current["calorie_range_max"]),
    )
    with db_conn(settings.app_db_path) as conn:
        if "category_id" in changes:
            _check_category(conn, changes["category_id"])
        update_columns(conn, "nutrition_templates", template_id, changes, json_fields=("dietary_tags",))
    return get_template(template_id)


def delete_template(template_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM nutrition_templates WHERE id = ?", (template_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Nutrition template not found")
    logger.info("Deleted nutrition template %s", template_id)


# ---------- Days ----------


def get_day(day_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM nutrition_days WHERE id = ?", (day_id,)).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Day not found")
        day = dict(row)
        day["meals"] = [
            _meal(r)
            for r in conn.execute(
                "SELECT * FROM nutrition_meals WHERE day_id = ? ORDER BY display_order, meal_name", (day_id,)
            ).fetchall()
        ]
    return day


def create_day(template_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
    get_template(template_id)
    day_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO nutrition_days (id, template_id, day_number, day_name, week_number) VALUES (?, ?, ?, ?, ?)",
            (day_id, template_id, item["day_number"], item["day_name"], item.get("week_number") or 1),
        )
    return get_day(day_id)


def update_day(day_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes = {k: v for k, v in changes.items() if v is not None}
    with db_conn(settings.app_db_path) as conn:
        exists = conn.execute("SELECT 1 FROM nutrition_days WHERE id = ?", (day_id,)).fetchone()
        if not exists:
            raise HTTPException(status_code=404, detail="Day not found")
        update_columns(conn, "nutrition_days", day_id, changes, touch=False)
    return get_day(day_id)


def delete_day(day_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM nutrition_days WHERE id = ?", (day_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Day not found")


# ---------- Meals ----------


def get_meal(meal_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM nutrition_meals WHERE id = ?", (meal_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Meal not found")
    return _meal(row)


def create_meal(day_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
    meal_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM nutrition_days WHERE id = ?", (day_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Day not found")
        conn.execute(
            """
            INSERT INTO nutrition_meals (
                id, day_id, meal_type, meal_name, calories, protein_g, carbs_g, fats_g,
                prep_time_min, cook_time_min, servings, instructions, notes, ingredients, display_order
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                meal_id,
                day_id,
                item["meal_type"],
                item["meal_name"],
                item.get("calories") or 0,
                item.get("protein_g") or 0,
                item.get("carbs_g") or 0,
                item.get("fats_g") or 0,
                item.get("prep_time_min"),
                item.get("cook_time_min"),
                item.get("servings"),
                item.get("instructions"),
                item.get("notes"),
                dumps(item.get("ingredients") or []),
                item.get("display_order") or 0,
            ),
        )
    return get_meal(meal_id)


def update_meal(meal_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    nullable = ("prep_time_min", "cook_time_min", "servings", "instructions", "notes")
    changes = {k: v for k, v in changes.items() if v is not None or k in nullable}
    with db_conn(settings.app_db_path) as conn:
        if not conn.execute("SELECT 1 FROM nutrition_meals WHERE id = ?", (meal_id,)).fetchone():
            raise HTTPException(status_code=404, detail="Meal not found")
        update_columns(conn, "nutrition_meals", meal_id, changes, json_fields=("ingredients",), touch=False)
    return get_meal(meal_id)


def delete_meal(meal_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM nutrition_meals WHERE id = ?", (meal_id,))
    if not cur.rowcount:
        raise HTTPException(status_code=404, detail="Meal not found")
