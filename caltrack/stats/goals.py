# -*- coding: utf-8 -*-
"""Goal evaluation: compares aggregated figures with a user's stored goals.

Everything here is descriptive. Exceeding a goal yields a negative remainder,
never an error, and weight goals are not closed when reached.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..users.models import DailyGoals
from ..weight.models import WeightGoal
from .models import DailyGoalReport, DailySummary, MacroGoals, WeightPoint, WeightProgress


def calories_remaining(daily_calorie_goal: float, net_calories: float) -> float:
    return round(daily_calorie_goal - net_calories, 1)


def evaluate_daily(summary: DailySummary, goals: DailyGoals) -> DailyGoalReport:
    return DailyGoalReport(
        **summary.model_dump(),
        daily_goal=goals.daily_calorie_goal,
        calories_remaining=calories_remaining(goals.daily_calorie_goal, summary.net_calories),
        macro_goals=MacroGoals(
            protein_g=goals.daily_protein_goal,
            carbs_g=goals.daily_carbs_goal,
            fat_g=goals.daily_fat_goal,
        ),
        burn_goal=goals.daily_burn_goal,
    )


def weight_progress(points: Sequence[WeightPoint], goal: Optional[WeightGoal]) -> Optional[WeightProgress]:
    """``points`` must be ordered oldest to newest."""
    if not points or goal is None:
        return None
    current = points[-1].weight_kg
    start = points[0].weight_kg
    return WeightProgress(
        current_weight=current,
        start_weight=start,
        target_weight=goal.target_weight_kg,
        weight_change=round(current - start, 2),
        goal_remaining=round(current - goal.target_weight_kg, 2),
        target_date=goal.target_date,
    )
