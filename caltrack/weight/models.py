# -*- coding: utf-8 -*-
"""Weight — Pydantic models."""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, Field


class WeightEntry(BaseModel):
    id: str
    user_id: str
    weight_kg: float
    date: str
    notes: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None


class WeightEntryCreateRequest(BaseModel):
    weight_kg: float = Field(..., ge=0, le=500)
    date: Date
    notes: Optional[str] = Field(None, max_length=2000)


class WeightEntryResponse(BaseModel):
    entry: Optional[WeightEntry] = None


class WeightEntriesResponse(BaseModel):
    entries: List[WeightEntry]


class WeightGoal(BaseModel):
    id: str
    user_id: str
    target_weight_kg: float
    target_date: Optional[str] = None
    created_at: str


class WeightGoalCreateRequest(BaseModel):
    target_weight_kg: float = Field(..., ge=0, le=500)
    target_date: Optional[Date] = None


class WeightGoalResponse(BaseModel):
    goal: Optional[WeightGoal] = None
