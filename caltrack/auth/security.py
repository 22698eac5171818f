# -*- coding: utf-8 -*-
"""Auth — password hashing, HS256 tokens and the current-user dependency."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from ..app_db import get_db
from ..config import settings
from ..errors import AuthError
from .models import AuthenticatedUser
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "caltrack_token"

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64url_encode(salt)}${_b64url_encode(dk)}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iter_s, salt_b64, dk_b64 = password_hash.split("$", 3)
    except ValueError:
        return False
    if not scheme.startswith("pbkdf2_"):
        return False
    alg = scheme.split("_", 1)[1]
    actual = hashlib.pbkdf2_hmac(alg, password.encode("utf-8"), _b64url_decode(salt_b64), int(iter_s))
    return hmac.compare_digest(actual, _b64url_decode(dk_b64))


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def _segment(obj: Dict[str, Any]) -> str:
    return _b64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def create_access_token(user: AuthenticatedUser) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(days=int(settings.token_ttl_days))
    payload = {
        "sub": user.id,
        "username": user.username,
        "email": user.email,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    signing_input = f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(payload)}"
    sig = _sign(signing_input.encode("ascii"), settings.jwt_secret)
    return f"{signing_input}.{_b64url_encode(sig)}"


def decode_token(token: str) -> Dict[str, Any]:
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthError("Invalid token")
    header_b64, payload_b64, sig_b64 = parts
    try:
        expected = _sign(f"{header_b64}.{payload_b64}".encode("ascii"), settings.jwt_secret)
        if not hmac.compare_digest(expected, _b64url_decode(sig_b64)):
            raise AuthError("Invalid token")
        payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeError) as exc:
        raise AuthError("Invalid token") from exc
    if not isinstance(payload, dict):
        raise AuthError("Invalid token")
    exp = int(payload.get("exp") or 0)
    if exp and exp < int(datetime.now(timezone.utc).timestamp()):
        raise AuthError("Token expired")
    return payload


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def to_authenticated_user(row: Dict[str, Any]) -> AuthenticatedUser:
    return AuthenticatedUser(id=row["id"], username=row["username"], email=row["email"])


def get_current_user(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> AuthenticatedUser:
    cached = getattr(request.state, "user", None)
    if isinstance(cached, AuthenticatedUser):
        return cached

    token = get_token_from_request(request)
    if not token:
        raise AuthError("Not authenticated")

    payload = decode_token(token)
    user_id = str(payload.get("sub") or "")
    if not user_id:
        raise AuthError("Invalid token")

    row = get_user_by_id(conn, user_id)
    if not row:
        raise AuthError("User not found")

    user = to_authenticated_user(row)
    request.state.user = user
    return user
