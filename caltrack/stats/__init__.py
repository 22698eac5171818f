# -*- coding: utf-8 -*-
"""Stats domain: daily/weekly rollups and goal evaluation."""

from .aggregator import InvalidRange, daily_summary, progress, weekly_summary
from .goals import calories_remaining, evaluate_daily, weight_progress

__all__ = [
    "InvalidRange",
    "calories_remaining",
    "daily_summary",
    "evaluate_daily",
    "progress",
    "weekly_summary",
    "weight_progress",
]
