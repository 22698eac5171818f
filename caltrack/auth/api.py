# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, Depends, Response

from ..app_db import get_db
from ..config import settings
from ..errors import AuthError, ConflictError
from .models import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from .security import TOKEN_COOKIE_NAME, create_access_token, hash_password, to_authenticated_user, verify_password
from .storage import create_user, get_user_by_email, user_exists

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_public(row: dict) -> UserPublic:
    return UserPublic(id=row["id"], username=row["username"], email=row["email"], created_at=row["created_at"])


def _set_auth_cookie(resp: Response, token: str) -> None:
    resp.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=int(settings.token_ttl_days) * 24 * 60 * 60,
        path="/",
    )


@router.post("/register", response_model=AuthResponse, status_code=201, summary="Register a new user")
def register(request: RegisterRequest, response: Response, conn: sqlite3.Connection = Depends(get_db)):
    if user_exists(conn, email=request.email, username=request.username):
        raise ConflictError("User already exists")

    row = create_user(
        conn,
        username=request.username,
        email=request.email,
        password_hash=hash_password(request.password),
    )
    logger.info("Registered user %s", row["id"])
    token = create_access_token(to_authenticated_user(row))
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(row), token=token)


@router.post("/login", response_model=AuthResponse, summary="Login")
def login(request: LoginRequest, response: Response, conn: sqlite3.Connection = Depends(get_db)):
    row = get_user_by_email(conn, request.email)
    if not row or not verify_password(request.password, row["password_hash"]):
        raise AuthError("Invalid credentials")

    token = create_access_token(to_authenticated_user(row))
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(row), token=token)


@router.post("/logout", summary="Logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}
