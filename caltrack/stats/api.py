# -*- coding: utf-8 -*-
"""Stats — API endpoints."""

from __future__ import annotations

import sqlite3
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..app_db import get_db
from ..auth.models import AuthenticatedUser
from ..auth.security import get_current_user
from ..users.storage import get_daily_goals
from .aggregator import daily_summary, progress, weekly_summary
from .goals import evaluate_daily
from .models import DailySummaryResponse, ProgressResponse, WeeklySummaryResponse

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("/daily/{summary_date}", response_model=DailySummaryResponse, summary="Daily totals against goals")
def daily(
    summary_date: date,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    summary = daily_summary(conn, user.id, summary_date.isoformat())
    return DailySummaryResponse(summary=evaluate_daily(summary, get_daily_goals(conn, user.id)))


@router.get("/weekly", response_model=WeeklySummaryResponse, summary="Per-day rollup with totals and averages")
def weekly(
    start_date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return weekly_summary(conn, user.id, start_date, end_date)


@router.get("/progress", response_model=ProgressResponse, summary="Weight history and goal progress")
def weight_progress(
    days: Optional[int] = Query(default=None, description="Number of most recent entries (default 30)"),
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return progress(conn, user.id, days)
