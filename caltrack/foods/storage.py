# -*- coding: utf-8 -*-
"""Foods — entry and item storage (SQLite)."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..errors import NotFoundError, ValidationError
from .models import (
    FoodEntry,
    FoodEntryCreateRequest,
    FoodEntryUpdateRequest,
    FoodItem,
    FoodItemCreateRequest,
    FoodItemUpdateRequest,
)

SEARCH_LIMIT = 50
_MACROS = ("protein_g", "carbs_g", "fat_g", "fiber_g")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


# ---- food items ----


def get_item(conn: sqlite3.Connection, item_id: str) -> Optional[FoodItem]:
    row = conn.execute("SELECT * FROM food_items WHERE id = ?", (item_id,)).fetchone()
    return FoodItem.model_validate(dict(row)) if row else None


def search_items(conn: sqlite3.Connection, query: str) -> List[FoodItem]:
    q = (query or "").strip()
    if len(q) < 2:
        return []
    pattern = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    rows = conn.execute(
        "SELECT * FROM food_items WHERE name LIKE ? ESCAPE '\\' ORDER BY name LIMIT ?",
        (f"%{pattern}%", SEARCH_LIMIT),
    ).fetchall()
    return [FoodItem.model_validate(dict(r)) for r in rows]


def create_item(conn: sqlite3.Connection, user_id: str, request: FoodItemCreateRequest) -> tuple[FoodItem, bool]:
    """Insert a food item; an item already known by ``source_id`` is returned as-is.

    Returns ``(item, created)``.
    """
    item_id = str(uuid4())
    cur = conn.execute(
        """
        INSERT INTO food_items (
            id, name, brand, calories_per_100g, protein_g, carbs_g, fat_g, fiber_g,
            serving_size_g, serving_size_unit, source_id, user_id, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(source_id) DO NOTHING
        """,
        (
            item_id,
            request.name.strip(),
            request.brand,
            request.calories_per_100g,
            request.protein_g,
            request.carbs_g,
            request.fat_g,
            request.fiber_g,
            request.serving_size_g,
            request.serving_size_unit,
            request.source_id,
            user_id,
            _utc_now(),
        ),
    )
    if cur.rowcount == 0:
        row = conn.execute("SELECT * FROM food_items WHERE source_id = ?", (request.source_id,)).fetchone()
        return FoodItem.model_validate(dict(row)), False
    item = get_item(conn, item_id)
    assert item is not None
    return item, True


def update_item_macros(
    conn: sqlite3.Connection, user_id: str, item_id: str, patch: FoodItemUpdateRequest
) -> FoodItem:
    cur = conn.execute(
        """
        UPDATE food_items
        SET calories_per_100g = COALESCE(?, calories_per_100g),
            protein_g = COALESCE(?, protein_g),
            carbs_g = COALESCE(?, carbs_g),
            fat_g = COALESCE(?, fat_g),
            fiber_g = COALESCE(?, fiber_g)
        WHERE id = ? AND user_id = ?
        """,
        (patch.calories_per_100g, patch.protein_g, patch.carbs_g, patch.fat_g, patch.fiber_g, item_id, user_id),
    )
    if cur.rowcount == 0:
        raise NotFoundError("Food item not found")
    item = get_item(conn, item_id)
    assert item is not None
    return item


# ---- food entries ----


def get_entry(conn: sqlite3.Connection, user_id: str, entry_id: str) -> Optional[FoodEntry]:
    row = conn.execute(
        "SELECT * FROM food_entries WHERE id = ? AND user_id = ?",
        (entry_id, user_id),
    ).fetchone()
    return FoodEntry.model_validate(dict(row)) if row else None


def list_entries_for_date(conn: sqlite3.Connection, user_id: str, date: str) -> List[FoodEntry]:
    rows = conn.execute(
        """
        SELECT * FROM food_entries
        WHERE user_id = ? AND date = ?
        ORDER BY time DESC, created_at DESC
        """,
        (user_id, date),
    ).fetchall()
    return [FoodEntry.model_validate(dict(r)) for r in rows]


def _derive_nutrients(request: FoodEntryCreateRequest, item: Optional[FoodItem]) -> Dict[str, float]:
    """Explicit values win; missing ones are scaled from the linked item's per-100g figures."""
    factor = request.quantity_g / 100.0
    out: Dict[str, float] = {}
    if request.calories is not None:
        out["calories"] = request.calories
    elif item is not None:
        out["calories"] = round(item.calories_per_100g * factor, 1)
    else:
        raise ValidationError.for_field("calories", "calories is required when food_item_id is not given")

    for name in _MACROS:
        explicit = getattr(request, name)
        if explicit is not None:
            out[name] = explicit
        elif item is not None and request.calories is None:
            out[name] = round(getattr(item, name) * factor, 1)
        else:
            out[name] = 0.0
    return out


def create_entry(conn: sqlite3.Connection, user_id: str, request: FoodEntryCreateRequest) -> FoodEntry:
    item: Optional[FoodItem] = None
    if request.food_item_id is not None:
        item = get_item(conn, request.food_item_id)
        if item is None:
            raise NotFoundError("Food item not found")
    nutrients = _derive_nutrients(request, item)

    entry_id = str(uuid4())
    conn.execute(
        """
        INSERT INTO food_entries (
            id, user_id, food_item_id, food_name, quantity_g, calories,
            protein_g, carbs_g, fat_g, fiber_g, meal_type, date, time, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            entry_id,
            user_id,
            request.food_item_id,
            request.food_name.strip(),
            request.quantity_g,
            nutrients["calories"],
            nutrients["protein_g"],
            nutrients["carbs_g"],
            nutrients["fat_g"],
            nutrients["fiber_g"],
            _enum_value(request.meal_type),
            request.date.isoformat(),
            request.time,
            _utc_now(),
        ),
    )
    entry = get_entry(conn, user_id, entry_id)
    assert entry is not None
    return entry


def update_entry(conn: sqlite3.Connection, user_id: str, entry_id: str, patch: FoodEntryUpdateRequest) -> FoodEntry:
    cur = conn.execute(
        """
        UPDATE food_entries
        SET quantity_g = COALESCE(?, quantity_g),
            calories = COALESCE(?, calories),
            protein_g = COALESCE(?, protein_g),
            carbs_g = COALESCE(?, carbs_g),
            fat_g = COALESCE(?, fat_g),
            fiber_g = COALESCE(?, fiber_g),
            meal_type = COALESCE(?, meal_type)
        WHERE id = ? AND user_id = ?
        """,
        (
            patch.quantity_g,
            patch.calories,
            patch.protein_g,
            patch.carbs_g,
            patch.fat_g,
            patch.fiber_g,
            _enum_value(patch.meal_type),
            entry_id,
            user_id,
        ),
    )
    if cur.rowcount == 0:
        raise NotFoundError("Food entry not found")
    entry = get_entry(conn, user_id, entry_id)
    assert entry is not None
    return entry


def delete_entry(conn: sqlite3.Connection, user_id: str, entry_id: str) -> None:
    cur = conn.execute("DELETE FROM food_entries WHERE id = ? AND user_id = ?", (entry_id, user_id))
    if cur.rowcount == 0:
        raise NotFoundError("Food entry not found")
