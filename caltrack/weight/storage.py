# -*- coding: utf-8 -*-
"""Weight — entries and goals (SQLite).

A user has at most one weight entry per calendar date. Writing the same date twice
overwrites in a single ``INSERT ... ON CONFLICT`` statement, so concurrent submissions
cannot produce duplicates.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import uuid4

from ..errors import NotFoundError
from .models import WeightEntry, WeightEntryCreateRequest, WeightGoal, WeightGoalCreateRequest


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def upsert_entry(conn: sqlite3.Connection, user_id: str, request: WeightEntryCreateRequest) -> Tuple[WeightEntry, bool]:
    """Returns ``(entry, created)``; ``created`` is False when an existing date was overwritten."""
    now = _utc_now()
    day = request.date.isoformat()
    conn.execute(
        """
        INSERT INTO weight_entries (id, user_id, weight_kg, date, notes, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, NULL)
        ON CONFLICT(user_id, date) DO UPDATE SET
            weight_kg = excluded.weight_kg,
            notes = excluded.notes,
            updated_at = ?
        """,
        (str(uuid4()), user_id, request.weight_kg, day, request.notes, now, now),
    )
    row = conn.execute(
        "SELECT * FROM weight_entries WHERE user_id = ? AND date = ?",
        (user_id, day),
    ).fetchone()
    entry = WeightEntry.model_validate(dict(row))
    return entry, entry.updated_at is None


def list_entries(
    conn: sqlite3.Connection,
    user_id: str,
    *,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[WeightEntry]:
    query = "SELECT * FROM weight_entries WHERE user_id = ?"
    params: list = [user_id]
    if start_date:
        query += " AND date >= ?"
        params.append(start_date)
    if end_date:
        query += " AND date <= ?"
        params.append(end_date)
    query += " ORDER BY date DESC"
    if limit:
        query += " LIMIT ?"
        params.append(int(limit))
    rows = conn.execute(query, params).fetchall()
    return [WeightEntry.model_validate(dict(r)) for r in rows]


def latest_entry(conn: sqlite3.Connection, user_id: str) -> Optional[WeightEntry]:
    entries = list_entries(conn, user_id, limit=1)
    return entries[0] if entries else None


def delete_entry(conn: sqlite3.Connection, user_id: str, entry_id: str) -> None:
    cur = conn.execute("DELETE FROM weight_entries WHERE id = ? AND user_id = ?", (entry_id, user_id))
    if cur.rowcount == 0:
        raise NotFoundError("Weight entry not found")


def create_goal(conn: sqlite3.Connection, user_id: str, request: WeightGoalCreateRequest) -> WeightGoal:
    goal_id = str(uuid4())
    conn.execute(
        "INSERT INTO weight_goals (id, user_id, target_weight_kg, target_date, created_at) VALUES (?, ?, ?, ?, ?)",
        (
            goal_id,
            user_id,
            request.target_weight_kg,
            request.target_date.isoformat() if request.target_date else None,
            _utc_now(),
        ),
    )
    row = conn.execute("SELECT * FROM weight_goals WHERE id = ?", (goal_id,)).fetchone()
    return WeightGoal.model_validate(dict(row))


def active_goal(conn: sqlite3.Connection, user_id: str) -> Optional[WeightGoal]:
    """Most recently created goal; rowid breaks ties within the same timestamp."""
    row = conn.execute(
        "SELECT * FROM weight_goals WHERE user_id = ? ORDER BY created_at DESC, rowid DESC LIMIT 1",
        (user_id,),
    ).fetchone()
    return WeightGoal.model_validate(dict(row)) if row else None
