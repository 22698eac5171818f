# -*- coding: utf-8 -*-
"""Users — profile and daily goal models."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    lightly_active = "lightly_active"
    moderately_active = "moderately_active"
    very_active = "very_active"
    extra_active = "extra_active"


class DailyGoals(BaseModel):
    daily_calorie_goal: int = Field(2000, ge=0)
    daily_protein_goal: Optional[float] = Field(None, ge=0)
    daily_carbs_goal: Optional[float] = Field(None, ge=0)
    daily_fat_goal: Optional[float] = Field(None, ge=0)
    daily_burn_goal: Optional[float] = Field(None, ge=0)


class UserProfile(DailyGoals):
    id: str
    username: str
    email: str
    height_cm: Optional[float] = None
    birth_date: Optional[str] = None
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    created_at: str


class UserProfileResponse(BaseModel):
    user: UserProfile


class ProfileUpdateRequest(BaseModel):
    """Partial update; omitted or null fields keep their stored value."""

    daily_calorie_goal: Optional[int] = Field(None, ge=0, le=10000)
    daily_protein_goal: Optional[float] = Field(None, ge=0, le=1000)
    daily_carbs_goal: Optional[float] = Field(None, ge=0, le=2000)
    daily_fat_goal: Optional[float] = Field(None, ge=0, le=1000)
    daily_burn_goal: Optional[float] = Field(None, ge=0, le=10000)
    height_cm: Optional[float] = Field(None, ge=0, le=300)
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
