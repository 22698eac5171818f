# -*- coding: utf-8 -*-
"""Foods — Pydantic models."""

from __future__ import annotations

from datetime import date as Date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class FoodItem(BaseModel):
    id: str
    name: str
    brand: Optional[str] = None
    calories_per_100g: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    serving_size_g: Optional[float] = None
    serving_size_unit: Optional[str] = None
    source_id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: str


class FoodItemCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    brand: Optional[str] = Field(None, max_length=200)
    calories_per_100g: float = Field(..., ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)
    fiber_g: float = Field(0.0, ge=0)
    serving_size_g: Optional[float] = Field(None, ge=0)
    serving_size_unit: Optional[str] = Field(None, max_length=32)
    source_id: Optional[str] = Field(None, min_length=1, max_length=64, description="External food database id")


class FoodItemUpdateRequest(BaseModel):
    """Macro corrections only; name and source stay fixed."""

    calories_per_100g: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    fiber_g: Optional[float] = Field(None, ge=0)


class FoodItemResponse(BaseModel):
    item: FoodItem


class FoodItemsResponse(BaseModel):
    items: List[FoodItem]


class FoodEntry(BaseModel):
    id: str
    user_id: str
    food_item_id: Optional[str] = None
    food_name: str
    quantity_g: float
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    meal_type: Optional[MealType] = None
    date: str
    time: Optional[str] = None
    created_at: str


class FoodEntryCreateRequest(BaseModel):
    food_item_id: Optional[str] = Field(None, min_length=1)
    food_name: str = Field(..., min_length=1, max_length=200)
    quantity_g: float = Field(..., ge=0)
    calories: Optional[float] = Field(None, ge=0, description="Derived from food_item_id when omitted")
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    fiber_g: Optional[float] = Field(None, ge=0)
    meal_type: Optional[MealType] = None
    date: Date
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)


class FoodEntryUpdateRequest(BaseModel):
    quantity_g: Optional[float] = Field(None, ge=0)
    calories: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    fiber_g: Optional[float] = Field(None, ge=0)
    meal_type: Optional[MealType] = None


class FoodEntryResponse(BaseModel):
    entry: FoodEntry


class FoodEntriesResponse(BaseModel):
    entries: List[FoodEntry]
