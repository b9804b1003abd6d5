"""Nutrition domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile for one reference serving."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class FoodItem:
    """Single food detected in a meal description."""

    name: str
    portion_size: str
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class NutritionAnalysis:
    """Estimated nutrition for one meal.

    Totals are always the sum of the matching fields of ``food_items``;
    use :func:`build_analysis` to keep them in sync.
    """

    id: str
    timestamp: datetime
    food_items: list[FoodItem]
    total_calories: float
    total_protein_g: float
    total_fat_g: float
    total_carbs_g: float
    health_tips: str
    dietary_tags: list[str] = field(default_factory=list)
    meal_type: MealType | None = None


def sum_items(items: list[FoodItem]) -> MacroProfile:
    """Return the summed macros of food items."""
    total = MacroProfile(0, 0, 0, 0)
    for item in items:
        total = MacroProfile(
            calories=total.calories + item.calories,
            protein_g=total.protein_g + item.protein_g,
            fat_g=total.fat_g + item.fat_g,
            carbs_g=total.carbs_g + item.carbs_g,
        )
    return total


def build_analysis(  # noqa: PLR0913
    *,
    analysis_id: str,
    timestamp: datetime,
    food_items: list[FoodItem],
    health_tips: str,
    dietary_tags: list[str],
    meal_type: MealType | None = None,
) -> NutritionAnalysis:
    """Create an analysis whose totals are derived from its items."""
    totals = sum_items(food_items)
    return NutritionAnalysis(
        id=analysis_id,
        timestamp=timestamp,
        food_items=list(food_items),
        total_calories=totals.calories,
        total_protein_g=totals.protein_g,
        total_fat_g=totals.fat_g,
        total_carbs_g=totals.carbs_g,
        health_tips=health_tips,
        dietary_tags=list(dietary_tags),
        meal_type=meal_type,
    )
