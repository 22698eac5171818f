# -*- coding: utf-8 -*-
"""Foods — API endpoints."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date

from fastapi import APIRouter, Depends, Query, Response

from ..app_db import get_db
from ..auth.models import AuthenticatedUser
from ..auth.security import get_current_user
from .models import (
    FoodEntriesResponse,
    FoodEntryCreateRequest,
    FoodEntryResponse,
    FoodEntryUpdateRequest,
    FoodItemCreateRequest,
    FoodItemResponse,
    FoodItemsResponse,
    FoodItemUpdateRequest,
)
from .storage import (
    create_entry,
    create_item,
    delete_entry,
    list_entries_for_date,
    search_items,
    update_entry,
    update_item_macros,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/foods", tags=["Foods"])


@router.get("/entries/{entry_date}", response_model=FoodEntriesResponse, summary="Food entries for a date")
def list_entries(
    entry_date: date,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return FoodEntriesResponse(entries=list_entries_for_date(conn, user.id, entry_date.isoformat()))


@router.post("/entries", response_model=FoodEntryResponse, status_code=201, summary="Log a food entry")
def add_entry(
    request: FoodEntryCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    entry = create_entry(conn, user.id, request)
    logger.info("Food entry %s logged for user %s on %s", entry.id, user.id, entry.date)
    return FoodEntryResponse(entry=entry)


@router.put("/entries/{entry_id}", response_model=FoodEntryResponse, summary="Patch a food entry")
def patch_entry(
    entry_id: str,
    request: FoodEntryUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return FoodEntryResponse(entry=update_entry(conn, user.id, entry_id, request))


@router.delete("/entries/{entry_id}", summary="Delete a food entry")
def remove_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    delete_entry(conn, user.id, entry_id)
    logger.info("Food entry %s deleted for user %s", entry_id, user.id)
    return {"message": "Food entry deleted successfully"}


@router.get("/search", response_model=FoodItemsResponse, summary="Search the local food catalog")
def search(
    q: str = Query(default="", max_length=100),
    user: AuthenticatedUser = Depends(get_current_user),  # noqa: ARG001
    conn: sqlite3.Connection = Depends(get_db),
):
    return FoodItemsResponse(items=search_items(conn, q))


@router.post("/items", response_model=FoodItemResponse, status_code=201, summary="Add a custom food item")
def add_item(
    request: FoodItemCreateRequest,
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    item, created = create_item(conn, user.id, request)
    if not created:
        response.status_code = 200
    return FoodItemResponse(item=item)


@router.put("/items/{item_id}", response_model=FoodItemResponse, summary="Correct a food item's macros")
def correct_item(
    item_id: str,
    request: FoodItemUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return FoodItemResponse(item=update_item_macros(conn, user.id, item_id, request))
