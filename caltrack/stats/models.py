# -*- coding: utf-8 -*-
"""Stats — Pydantic models for daily/weekly rollups and weight progress."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Macros(BaseModel):
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0


class MacroGoals(BaseModel):
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None


class DailySummary(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    calories_consumed: float = 0.0
    calories_burned: float = 0.0
    net_calories: float = 0.0
    macros: Macros = Field(default_factory=Macros)
    food_count: int = Field(0, ge=0)
    activity_count: int = Field(0, ge=0)


class DailyGoalReport(DailySummary):
    daily_goal: int
    calories_remaining: float = Field(..., description="Negative when the goal is exceeded")
    macro_goals: MacroGoals = Field(default_factory=MacroGoals)
    burn_goal: Optional[float] = None


class DailySummaryResponse(BaseModel):
    summary: DailyGoalReport


class WeeklyDay(BaseModel):
    date: str
    calories_consumed: float = 0.0
    calories_burned: float = 0.0
    net_calories: float = 0.0
    weight_kg: Optional[float] = None
    macros: Macros = Field(default_factory=Macros)


class WeeklyTotals(BaseModel):
    calories_consumed: float = 0.0
    calories_burned: float = 0.0
    net_calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0


class WeeklyAverages(BaseModel):
    calories_consumed: float = 0.0
    calories_burned: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    days_with_food: int = 0
    days_with_activity: int = 0


class WeeklySummaryResponse(BaseModel):
    start_date: str
    end_date: str
    daily: List[WeeklyDay]
    totals: WeeklyTotals
    averages: WeeklyAverages


class WeightPoint(BaseModel):
    date: str
    weight_kg: float


class WeightProgress(BaseModel):
    current_weight: float
    start_weight: float
    target_weight: float
    weight_change: float
    goal_remaining: float
    target_date: Optional[str] = None


class ProgressResponse(BaseModel):
    weight_entries: List[WeightPoint]
    progress: Optional[WeightProgress] = None
