# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AuthenticatedUser(BaseModel):
    """Identity of the caller, resolved once per request and passed to every operation."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    email: str


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserPublic(BaseModel):
    id: str
    username: str
    email: str
    created_at: str


class AuthResponse(BaseModel):
    user: UserPublic
    token: str
