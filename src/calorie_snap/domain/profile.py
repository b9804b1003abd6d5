"""User profile domain models."""

from dataclasses import dataclass
from typing import Literal

Gender = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active"]
Goal = Literal["lose", "maintain", "gain"]


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    calorie_target: int
    protein_target: int
    fat_target: int
    carbs_target: int


@dataclass(frozen=True)
class UserProfile:
    """Profile captured during onboarding."""

    name: str
    age: int
    weight: float
    height: float
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    calorie_target: float
    protein_target: float
    fat_target: float
    carbs_target: float
    onboarding_complete: bool = False
