# -*- coding: utf-8 -*-
"""Users — API endpoints."""

from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, Depends

from ..app_db import get_db
from ..auth.models import AuthenticatedUser
from ..auth.security import get_current_user
from .models import ProfileUpdateRequest, UserProfileResponse
from .storage import get_profile, update_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/me", response_model=UserProfileResponse, summary="Current user profile and goals")
def read_me(
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    return UserProfileResponse(user=get_profile(conn, user.id))


@router.put("/me", response_model=UserProfileResponse, summary="Update profile and daily goals")
def update_me(
    request: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    profile = update_profile(conn, user.id, request)
    logger.info("Updated profile for user %s", user.id)
    return UserProfileResponse(user=profile)
