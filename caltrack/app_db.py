# -*- coding: utf-8 -*-
"""App database — SQLite schema and connection helpers."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)

# (name, calories_per_unit, unit, description)
DEFAULT_ACTIVITIES = (
    ("Walking", 0.04, "steps", "Calories burned per step"),
    ("Running", 100.0, "mile", "Calories burned per mile"),
    ("Swimming", 50.0, "lap", "Calories burned per lap (25m pool)"),
    ("Cycling", 8.0, "minute", "Calories burned per minute"),
)


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def create_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            height_cm REAL,
            birth_date TEXT,
            gender TEXT CHECK(gender IN ('male', 'female', 'other')),
            activity_level TEXT CHECK(activity_level IN (
                'sedentary', 'lightly_active', 'moderately_active', 'very_active', 'extra_active'
            )),
            daily_calorie_goal INTEGER NOT NULL DEFAULT 2000,
            daily_protein_goal REAL,
            daily_carbs_goal REAL,
            daily_fat_goal REAL,
            daily_burn_goal REAL,
            created_at TEXT NOT NULL
        );
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS food_items (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            brand TEXT,
            calories_per_100g REAL NOT NULL CHECK(calories_per_100g >= 0),
            protein_g REAL NOT NULL DEFAULT 0 CHECK(protein_g >= 0),
            carbs_g REAL NOT NULL DEFAULT 0 CHECK(carbs_g >= 0),
            fat_g REAL NOT NULL DEFAULT 0 CHECK(fat_g >= 0),
            fiber_g REAL NOT NULL DEFAULT 0 CHECK(fiber_g >= 0),
            serving_size_g REAL,
            serving_size_unit TEXT,
            source_id TEXT UNIQUE,
            user_id TEXT,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE SET NULL
        );
        """
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_food_items_name ON food_items(name);")
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS food_entries (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            food_item_id TEXT,
            food_name TEXT NOT NULL,
            quantity_g REAL NOT NULL CHECK(quantity_g >= 0),
            calories REAL NOT NULL CHECK(calories >= 0),
            protein_g REAL NOT NULL DEFAULT 0 CHECK(protein_g >= 0),
            carbs_g REAL NOT NULL DEFAULT 0 CHECK(carbs_g >= 0),
            fat_g REAL NOT NULL DEFAULT 0 CHECK(fat_g >= 0),
            fiber_g REAL NOT NULL DEFAULT 0 CHECK(fiber_g >= 0),
            meal_type TEXT CHECK(meal_type IN ('breakfast', 'lunch', 'dinner', 'snack')),
            date TEXT NOT NULL,
            time TEXT,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(food_item_id) REFERENCES food_items(id) ON DELETE SET NULL
        );
        """
    )
    cur.execute(
        "CREATE INDEX IF NOT EXISTS idx_food_entries_user_date ON food_entries(user_id, date);"
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            calories_per_unit REAL NOT NULL,
            unit TEXT NOT NULL,
            description TEXT
        );
        """
    )
    cur.executemany(
        "INSERT OR IGNORE INTO activities (name, calories_per_unit, unit, description) VALUES (?, ?, ?, ?)",
        DEFAULT_ACTIVITIES,
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS activity_entries (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            activity_id INTEGER NOT NULL,
            quantity REAL NOT NULL CHECK(quantity >= 0),
            calories_burned REAL NOT NULL CHECK(calories_burned >= 0),
            date TEXT NOT NULL,
            time TEXT,
            notes TEXT,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(activity_id) REFERENCES activities(id) ON DELETE CASCADE
        );
        """
    )
    cur.execute(
        "CREATE INDEX IF NOT EXISTS idx_activity_entries_user_date ON activity_entries(user_id, date);"
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS weight_entries (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            weight_kg REAL NOT NULL CHECK(weight_kg >= 0),
            date TEXT NOT NULL,
            notes TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT,
            UNIQUE(user_id, date),
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS weight_goals (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            target_weight_kg REAL NOT NULL CHECK(target_weight_kg >= 0),
            target_date TEXT,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );
        """
    )
    cur.execute(
        "CREATE INDEX IF NOT EXISTS idx_weight_goals_user_created ON weight_goals(user_id, created_at DESC);"
    )


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        create_schema(conn)
        conn.commit()
    finally:
        conn.close()
    logger.info("Database ready at %s", db_path)


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency: one connection per request, committed when the handler returns."""
    with db_conn(settings.app_db_path) as conn:
        yield conn
