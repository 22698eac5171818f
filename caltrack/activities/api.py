# -*- coding: utf-8 -*-
"""Activities — API endpoints."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date

from fastapi import APIRouter, Depends

from ..app_db import get_db
from ..auth.models import AuthenticatedUser
from ..auth.security import get_current_user
from .models import (
    ActivitiesResponse,
    ActivityEntriesResponse,
    ActivityEntryCreateRequest,
    ActivityEntryResponse,
    ActivityEntryUpdateRequest,
)
from .storage import create_entry, delete_entry, list_activities, list_entries_for_date, update_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/activities", tags=["Activities"])


@router.get("", response_model=ActivitiesResponse, summary="Activity catalog")
def catalog(
    user: AuthenticatedUser = Depends(get_current_user),  # noqa: ARG001
    conn: sqlite3.Connection = Depends(get_db),
):
    return ActivitiesResponse(activities=list_activities(conn))


@router.get("/entries/{entry_date}", response_model=ActivityEntriesResponse, summary="Activity entries for a date")
def list_entries(
    entry_date: date,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return ActivityEntriesResponse(entries=list_entries_for_date(conn, user.id, entry_date.isoformat()))


@router.post("/entries", response_model=ActivityEntryResponse, status_code=201, summary="Log an activity")
def add_entry(
    request: ActivityEntryCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    entry = create_entry(conn, user.id, request)
    logger.info("Activity entry %s logged for user %s on %s", entry.id, user.id, entry.date)
    return ActivityEntryResponse(entry=entry)


@router.put("/entries/{entry_id}", response_model=ActivityEntryResponse, summary="Patch an activity entry")
def patch_entry(
    entry_id: str,
    request: ActivityEntryUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return ActivityEntryResponse(entry=update_entry(conn, user.id, entry_id, request))


@router.delete("/entries/{entry_id}", summary="Delete an activity entry")
def remove_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    delete_entry(conn, user.id, entry_id)
    logger.info("Activity entry %s deleted for user %s", entry_id, user.id)
    return {"message": "Activity entry deleted successfully"}
