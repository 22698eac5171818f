# -*- coding: utf-8 -*-
"""Auth — DB storage helpers."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from ..config import settings
from ..errors import ConflictError


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def get_user_by_email(conn: sqlite3.Connection, email: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),)).fetchone()
    return dict(row) if row else None


def get_user_by_id(conn: sqlite3.Connection, user_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return dict(row) if row else None


def user_exists(conn: sqlite3.Connection, *, email: str, username: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM users WHERE email = ? OR username = ?",
        (email.lower().strip(), username.strip()),
    ).fetchone()
    return row is not None


def create_user(conn: sqlite3.Connection, *, username: str, email: str, password_hash: str) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = _utc_now()
    email_norm = email.lower().strip()
    username_norm = username.strip()
    try:
        conn.execute(
            """
            INSERT INTO users (id, username, email, password_hash, daily_calorie_goal, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (user_id, username_norm, email_norm, password_hash, settings.default_calorie_goal, now),
        )
    except sqlite3.IntegrityError as exc:
        raise ConflictError("User already exists") from exc
    return get_user_by_id(conn, user_id) or {}
