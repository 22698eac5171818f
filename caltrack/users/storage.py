# -*- coding: utf-8 -*-
"""Users — profile storage (SQLite)."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, Optional

from ..errors import NotFoundError
from .models import DailyGoals, ProfileUpdateRequest, UserProfile

_PROFILE_COLUMNS = (
    "id, username, email, height_cm, birth_date, gender, activity_level, "
    "daily_calorie_goal, daily_protein_goal, daily_carbs_goal, daily_fat_goal, daily_burn_goal, created_at"
)

_UPDATABLE = (
    "daily_calorie_goal",
    "daily_protein_goal",
    "daily_carbs_goal",
    "daily_fat_goal",
    "daily_burn_goal",
    "height_cm",
    "birth_date",
    "gender",
    "activity_level",
)


def get_profile(conn: sqlite3.Connection, user_id: str) -> UserProfile:
    row = conn.execute(f"SELECT {_PROFILE_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
    if not row:
        raise NotFoundError("User not found")
    return UserProfile.model_validate(dict(row))


def get_daily_goals(conn: sqlite3.Connection, user_id: str) -> DailyGoals:
    row = conn.execute(
        """
        SELECT daily_calorie_goal, daily_protein_goal, daily_carbs_goal, daily_fat_goal, daily_burn_goal
        FROM users WHERE id = ?
        """,
        (user_id,),
    ).fetchone()
    if not row:
        raise NotFoundError("User not found")
    return DailyGoals.model_validate(dict(row))


def _to_db(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value


def update_profile(conn: sqlite3.Connection, user_id: str, patch: ProfileUpdateRequest) -> UserProfile:
    values: Dict[str, Optional[Any]] = {name: _to_db(getattr(patch, name)) for name in _UPDATABLE}
    assignments = ", ".join(f"{name} = COALESCE(?, {name})" for name in _UPDATABLE)
    cur = conn.execute(
        f"UPDATE users SET {assignments} WHERE id = ?",
        (*values.values(), user_id),
    )
    if cur.rowcount == 0:
        raise NotFoundError("User not found")
    return get_profile(conn, user_id)
