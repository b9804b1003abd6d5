"""Onboarding and daily target computation."""

import logging
from dataclasses import dataclass

from calorie_snap.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
)
from calorie_snap.services.estimation import round_half_up

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
}
GOAL_ADJUSTMENTS_KCAL: dict[str, float] = {
    "lose": -500,
    "maintain": 0,
    "gain": 500,
}
PROTEIN_SHARE = 0.30
FAT_SHARE = 0.35
CARBS_SHARE = 0.35
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_FAT = 9
KCAL_PER_GRAM_CARBS = 4

_logger = logging.getLogger(__name__)


def compute_targets(  # noqa: PLR0913
    weight: float,
    height: float,
    age: int,
    gender: Gender,
    activity_level: ActivityLevel,
    goal: Goal,
) -> NutritionTargets:
    """Compute daily targets with the Mifflin-St Jeor equation."""
    bmr = 10 * weight + 6.25 * height - 5 * age
    bmr += 5 if gender == "male" else -161
    tdee = bmr * ACTIVITY_MULTIPLIERS[activity_level] + GOAL_ADJUSTMENTS_KCAL[goal]
    calories = round_half_up(tdee)
    return NutritionTargets(
        calorie_target=calories,
        protein_target=round_half_up(
            calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN
        ),
        fat_target=round_half_up(calories * FAT_SHARE / KCAL_PER_GRAM_FAT),
        carbs_target=round_half_up(calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
    )


@dataclass
class ProfileService:
    """Holds the single user profile."""

    profile: UserProfile | None = None

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if onboarding happened."""
        return self.profile

    def complete_onboarding(  # noqa: PLR0913
        self,
        *,
        name: str,
        age: int,
        weight: float,
        height: float,
        gender: Gender,
        activity_level: ActivityLevel,
        goal: Goal,
    ) -> UserProfile:
        """Compute targets and store a completed profile."""
        targets = compute_targets(weight, height, age, gender, activity_level, goal)
        self.profile = UserProfile(
            name=name,
            age=age,
            weight=weight,
            height=height,
            gender=gender,
            activity_level=activity_level,
            goal=goal,
            calorie_target=targets.calorie_target,
            protein_target=targets.protein_target,
            fat_target=targets.fat_target,
            carbs_target=targets.carbs_target,
            onboarding_complete=True,
        )
        _logger.info("Onboarding complete: %s kcal target", targets.calorie_target)
        return self.profile
