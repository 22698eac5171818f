# -*- coding: utf-8 -*-
"""Weight — API endpoints."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ..app_db import get_db
from ..auth.models import AuthenticatedUser
from ..auth.security import get_current_user
from .models import (
    WeightEntriesResponse,
    WeightEntryCreateRequest,
    WeightEntryResponse,
    WeightGoalCreateRequest,
    WeightGoalResponse,
)
from .storage import active_goal, create_goal, delete_entry, latest_entry, list_entries, upsert_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/weight", tags=["Weight"])


@router.get("/entries", response_model=WeightEntriesResponse, summary="Weight entries, newest first")
def read_entries(
    start_date: Optional[date] = Query(default=None, description="YYYY-MM-DD"),
    end_date: Optional[date] = Query(default=None, description="YYYY-MM-DD"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    entries = list_entries(
        conn,
        user.id,
        start_date=start_date.isoformat() if start_date else None,
        end_date=end_date.isoformat() if end_date else None,
        limit=limit,
    )
    return WeightEntriesResponse(entries=entries)


@router.get("/entries/latest", response_model=WeightEntryResponse, summary="Latest weight entry")
def read_latest(
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return WeightEntryResponse(entry=latest_entry(conn, user.id))


@router.post("/entries", response_model=WeightEntryResponse, status_code=201, summary="Record weight for a date")
def record_weight(
    request: WeightEntryCreateRequest,
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    entry, created = upsert_entry(conn, user.id, request)
    if not created:
        response.status_code = 200
    logger.info("Weight for user %s on %s %s", user.id, entry.date, "recorded" if created else "overwritten")
    return WeightEntryResponse(entry=entry)


@router.delete("/entries/{entry_id}", summary="Delete a weight entry")
def remove_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    delete_entry(conn, user.id, entry_id)
    return {"message": "Weight entry deleted successfully"}


@router.get("/goal", response_model=WeightGoalResponse, summary="Active weight goal")
def read_goal(
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return WeightGoalResponse(goal=active_goal(conn, user.id))


@router.post("/goal", response_model=WeightGoalResponse, status_code=201, summary="Set a new weight goal")
def set_goal(
    request: WeightGoalCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    goal = create_goal(conn, user.id, request)
    logger.info("Weight goal %s set for user %s", goal.id, user.id)
    return WeightGoalResponse(goal=goal)
