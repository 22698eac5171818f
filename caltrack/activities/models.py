# -*- coding: utf-8 -*-
"""Activities — Pydantic models."""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, Field

from ..foods.models import TIME_PATTERN


class Activity(BaseModel):
    id: int
    name: str
    calories_per_unit: float
    unit: str = Field(..., description="steps | mile | lap | minute")
    description: Optional[str] = None


class ActivitiesResponse(BaseModel):
    activities: List[Activity]


class ActivityEntry(BaseModel):
    id: str
    user_id: str
    activity_id: int
    activity_name: str
    unit: str
    quantity: float
    calories_burned: float
    date: str
    time: Optional[str] = None
    notes: Optional[str] = None
    created_at: str


class ActivityEntryCreateRequest(BaseModel):
    activity_id: int = Field(..., ge=1)
    quantity: float = Field(..., ge=0)
    calories_burned: Optional[float] = Field(None, ge=0, description="Defaults to quantity x calories_per_unit")
    date: Date
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    notes: Optional[str] = Field(None, max_length=2000)


class ActivityEntryUpdateRequest(BaseModel):
    quantity: Optional[float] = Field(None, ge=0)
    calories_burned: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)


class ActivityEntryResponse(BaseModel):
    entry: ActivityEntry


class ActivityEntriesResponse(BaseModel):
    entries: List[ActivityEntry]
