# -*- coding: utf-8 -*-
"""Activities — catalog and entry storage (SQLite)."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from ..errors import NotFoundError
from .models import Activity, ActivityEntry, ActivityEntryCreateRequest, ActivityEntryUpdateRequest

_ENTRY_SELECT = """
    SELECT ae.*, a.name AS activity_name, a.unit
    FROM activity_entries ae
    JOIN activities a ON ae.activity_id = a.id
"""


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def list_activities(conn: sqlite3.Connection) -> List[Activity]:
    rows = conn.execute("SELECT * FROM activities ORDER BY name").fetchall()
    return [Activity.model_validate(dict(r)) for r in rows]


def get_activity(conn: sqlite3.Connection, activity_id: int) -> Optional[Activity]:
    row = conn.execute("SELECT * FROM activities WHERE id = ?", (activity_id,)).fetchone()
    return Activity.model_validate(dict(row)) if row else None


def get_entry(conn: sqlite3.Connection, user_id: str, entry_id: str) -> Optional[ActivityEntry]:
    row = conn.execute(f"{_ENTRY_SELECT} WHERE ae.id = ? AND ae.user_id = ?", (entry_id, user_id)).fetchone()
    return ActivityEntry.model_validate(dict(row)) if row else None


def list_entries_for_date(conn: sqlite3.Connection, user_id: str, date: str) -> List[ActivityEntry]:
    rows = conn.execute(
        f"{_ENTRY_SELECT} WHERE ae.user_id = ? AND ae.date = ? ORDER BY ae.time DESC, ae.created_at DESC",
        (user_id, date),
    ).fetchall()
    return [ActivityEntry.model_validate(dict(r)) for r in rows]


def create_entry(conn: sqlite3.Connection, user_id: str, request: ActivityEntryCreateRequest) -> ActivityEntry:
    activity = get_activity(conn, request.activity_id)
    if activity is None:
        raise NotFoundError("Activity not found")

    calories_burned = request.calories_burned
    if calories_burned is None:
        calories_burned = round(request.quantity * activity.calories_per_unit, 1)

    entry_id = str(uuid4())
    conn.execute(
        """
        INSERT INTO activity_entries (id, user_id, activity_id, quantity, calories_burned, date, time, notes, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            entry_id,
            user_id,
            activity.id,
            request.quantity,
            calories_burned,
            request.date.isoformat(),
            request.time,
            request.notes,
            _utc_now(),
        ),
    )
    entry = get_entry(conn, user_id, entry_id)
    assert entry is not None
    return entry


def update_entry(
    conn: sqlite3.Connection, user_id: str, entry_id: str, patch: ActivityEntryUpdateRequest
) -> ActivityEntry:
    cur = conn.execute(
        """
        UPDATE activity_entries
        SET quantity = COALESCE(?, quantity),
            calories_burned = COALESCE(?, calories_burned),
            notes = COALESCE(?, notes)
        WHERE id = ? AND user_id = ?
        """,
        (patch.quantity, patch.calories_burned, patch.notes, entry_id, user_id),
    )
    if cur.rowcount == 0:
        raise NotFoundError("Activity entry not found")
    entry = get_entry(conn, user_id, entry_id)
    assert entry is not None
    return entry


def delete_entry(conn: sqlite3.Connection, user_id: str, entry_id: str) -> None:
    cur = conn.execute("DELETE FROM activity_entries WHERE id = ? AND user_id = ?", (entry_id, user_id))
    if cur.rowcount == 0:
        raise NotFoundError("Activity entry not found")
