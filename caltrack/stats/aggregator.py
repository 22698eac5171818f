# -*- coding: utf-8 -*-
"""Nutrition/activity aggregation over the entry tables.

Dates are compared exactly as stored (``YYYY-MM-DD``); there is no timezone
conversion. Every figure is rounded to 0.1.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from ..errors import ValidationError
from ..weight.storage import active_goal, list_entries
from .goals import weight_progress
from .models import (
    DailySummary,
    Macros,
    ProgressResponse,
    WeeklyAverages,
    WeeklyDay,
    WeeklySummaryResponse,
    WeeklyTotals,
    WeightPoint,
)

DEFAULT_PROGRESS_LIMIT = 30
MAX_PROGRESS_LIMIT = 365


class InvalidRange(ValidationError):
    default_message = "start_date and end_date are required"


def _r(value: float) -> float:
    return round(float(value or 0.0), 1)


def _avg(total: float, count: int) -> float:
    return _r(total / count) if count else 0.0


def _parse_day(value: Optional[str], field: str) -> date:
    if not value:
        raise InvalidRange(details=[{"field": field, "message": f"{field} is required"}])
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidRange(
            f"{field} must be YYYY-MM-DD",
            details=[{"field": field, "message": "invalid date"}],
        ) from exc


def daily_summary(conn: sqlite3.Connection, user_id: str, day: str) -> DailySummary:
    food = conn.execute(
        """
        SELECT
            COALESCE(SUM(calories), 0) AS calories,
            COALESCE(SUM(protein_g), 0) AS protein_g,
            COALESCE(SUM(carbs_g), 0) AS carbs_g,
            COALESCE(SUM(fat_g), 0) AS fat_g,
            COALESCE(SUM(fiber_g), 0) AS fiber_g,
            COUNT(*) AS food_count
        FROM food_entries
        WHERE user_id = ? AND date = ?
        """,
        (user_id, day),
    ).fetchone()
    activity = conn.execute(
        """
        SELECT COALESCE(SUM(calories_burned), 0) AS calories_burned, COUNT(*) AS activity_count
        FROM activity_entries
        WHERE user_id = ? AND date = ?
        """,
        (user_id, day),
    ).fetchone()

    consumed = _r(food["calories"])
    burned = _r(activity["calories_burned"])
    return DailySummary(
        date=day,
        calories_consumed=consumed,
        calories_burned=burned,
        net_calories=_r(consumed - burned),
        macros=Macros(
            protein_g=_r(food["protein_g"]),
            carbs_g=_r(food["carbs_g"]),
            fat_g=_r(food["fat_g"]),
            fiber_g=_r(food["fiber_g"]),
        ),
        food_count=int(food["food_count"]),
        activity_count=int(activity["activity_count"]),
    )


@dataclass
class _DayAgg:
    calories_consumed: float = 0.0
    calories_burned: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    weight_kg: Optional[float] = None
    has_food: bool = False
    has_activity: bool = False


def weekly_summary(
    conn: sqlite3.Connection,
    user_id: str,
    start_date: Optional[str],
    end_date: Optional[str],
) -> WeeklySummaryResponse:
    """Per-day rows for every date in range with any logged entry, plus totals and averages.

    A day appears when it has food, activity or a weight entry; missing metrics are
    zero (or null for weight). Consumption averages divide by days with food and the
    burn average by days with activity.
    """
    start = _parse_day(start_date, "start_date")
    end = _parse_day(end_date, "end_date")
    if start > end:
        raise InvalidRange(
            "start_date must not be after end_date",
            details=[{"field": "start_date", "message": "must be on or before end_date"}],
        )
    params = (user_id, start.isoformat(), end.isoformat())
    per_day: Dict[str, _DayAgg] = {}

    for row in conn.execute(
        """
        SELECT date,
               SUM(calories) AS calories,
               SUM(protein_g) AS protein_g,
               SUM(carbs_g) AS carbs_g,
               SUM(fat_g) AS fat_g,
               SUM(fiber_g) AS fiber_g
        FROM food_entries
        WHERE user_id = ? AND date BETWEEN ? AND ?
        GROUP BY date
        """,
        params,
    ):
        agg = per_day.setdefault(row["date"], _DayAgg())
        agg.has_food = True
        agg.calories_consumed = _r(row["calories"])
        agg.protein_g = _r(row["protein_g"])
        agg.carbs_g = _r(row["carbs_g"])
        agg.fat_g = _r(row["fat_g"])
        agg.fiber_g = _r(row["fiber_g"])

    for row in conn.execute(
        """
        SELECT date, SUM(calories_burned) AS calories_burned
        FROM activity_entries
        WHERE user_id = ? AND date BETWEEN ? AND ?
        GROUP BY date
        """,
        params,
    ):
        agg = per_day.setdefault(row["date"], _DayAgg())
        agg.has_activity = True
        agg.calories_burned = _r(row["calories_burned"])

    for row in conn.execute(
        "SELECT date, weight_kg FROM weight_entries WHERE user_id = ? AND date BETWEEN ? AND ?",
        params,
    ):
        per_day.setdefault(row["date"], _DayAgg()).weight_kg = row["weight_kg"]

    daily: List[WeeklyDay] = []
    totals = WeeklyTotals()
    food_days = 0
    activity_days = 0
    for day in sorted(per_day.keys()):
        agg = per_day[day]
        daily.append(
            WeeklyDay(
                date=day,
                calories_consumed=agg.calories_consumed,
                calories_burned=agg.calories_burned,
                net_calories=_r(agg.calories_consumed - agg.calories_burned),
                weight_kg=agg.weight_kg,
                macros=Macros(protein_g=agg.protein_g, carbs_g=agg.carbs_g, fat_g=agg.fat_g, fiber_g=agg.fiber_g),
            )
        )
        totals.calories_consumed += agg.calories_consumed
        totals.calories_burned += agg.calories_burned
        totals.protein_g += agg.protein_g
        totals.carbs_g += agg.carbs_g
        totals.fat_g += agg.fat_g
        totals.fiber_g += agg.fiber_g
        food_days += int(agg.has_food)
        activity_days += int(agg.has_activity)

    totals = WeeklyTotals(
        calories_consumed=_r(totals.calories_consumed),
        calories_burned=_r(totals.calories_burned),
        net_calories=_r(totals.calories_consumed - totals.calories_burned),
        protein_g=_r(totals.protein_g),
        carbs_g=_r(totals.carbs_g),
        fat_g=_r(totals.fat_g),
        fiber_g=_r(totals.fiber_g),
    )
    averages = WeeklyAverages(
        calories_consumed=_avg(totals.calories_consumed, food_days),
        calories_burned=_avg(totals.calories_burned, activity_days),
        protein_g=_avg(totals.protein_g, food_days),
        carbs_g=_avg(totals.carbs_g, food_days),
        fat_g=_avg(totals.fat_g, food_days),
        fiber_g=_avg(totals.fiber_g, food_days),
        days_with_food=food_days,
        days_with_activity=activity_days,
    )
    return WeeklySummaryResponse(
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        daily=daily,
        totals=totals,
        averages=averages,
    )


def progress(conn: sqlite3.Connection, user_id: str, limit: Optional[int] = None) -> ProgressResponse:
    """Latest ``limit`` weight entries (returned oldest first) and progress toward the active goal."""
    if limit is None:
        limit = DEFAULT_PROGRESS_LIMIT
    if limit < 1 or limit > MAX_PROGRESS_LIMIT:
        raise ValidationError.for_field("days", f"days must be between 1 and {MAX_PROGRESS_LIMIT}")

    recent = list_entries(conn, user_id, limit=limit)
    points = [WeightPoint(date=e.date, weight_kg=e.weight_kg) for e in reversed(recent)]
    return ProgressResponse(
        weight_entries=points,
        progress=weight_progress(points, active_goal(conn, user_id)),
    )
