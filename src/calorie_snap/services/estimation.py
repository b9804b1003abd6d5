"""Local heuristic nutrition estimation from meal descriptions."""

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from calorie_snap.domain.foods import FOOD_KNOWLEDGE_BASE
from calorie_snap.domain.nutrition import (
    FoodItem,
    MacroProfile,
    MealType,
    NutritionAnalysis,
    build_analysis,
    sum_items,
)
from calorie_snap.services.quantities import extract_multiplier

IMAGE_PLACEHOLDER = FoodItem(
    name="Detected Balanced Meal",
    portion_size="1 plate",
    calories=450,
    protein_g=25,
    fat_g=15,
    carbs_g=50,
)
UNKNOWN_MEAL_NAME = "Unknown Meal"
UNKNOWN_MEAL_MACROS = MacroProfile(calories=300, protein_g=15, fat_g=10, carbs_g=35)

HIGH_PROTEIN_GRAMS = 20
LOW_CARB_GRAMS = 10
LIGHT_MEAL_CALORIES = 300

HIGH_PROTEIN_TIP = (
    "Great protein content! This meal supports muscle repair and keeps you "
    "full for longer."
)
VOLUME_TIP = (
    "Consider adding vegetables or a lean protein to boost volume and "
    "micronutrients."
)

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]

_logger = logging.getLogger(__name__)


def new_id() -> str:
    """Return a random unique identifier."""
    return str(uuid4())


def utc_now() -> datetime:
    """Return the current UTC time at millisecond precision."""
    now = datetime.now(tz=UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass
class NutritionEstimator:
    """Keyword-based estimator over a fixed food knowledge base."""

    knowledge_base: Mapping[str, MacroProfile] = field(
        default_factory=lambda: FOOD_KNOWLEDGE_BASE
    )
    id_generator: IdGenerator = new_id
    clock: Clock = utc_now

    def estimate(
        self,
        description: str,
        *,
        has_image: bool = False,
        mime_type: str | None = None,
        context: str = "",
        meal_type: MealType | None = None,
    ) -> NutritionAnalysis:
        """Estimate macros for a meal description.

        ``context`` and ``mime_type`` are only meaningful to remote
        estimators and are ignored here.
        """
        if not isinstance(description, str):
            raise TypeError("description must be a string")

        if has_image and not description:
            items = [IMAGE_PLACEHOLDER]
        else:
            items = self._match_items(description)
            if not items:
                items = [_unknown_item(description)]

        totals = sum_items(items)
        _logger.debug("Estimated %s item(s), %s kcal", len(items), totals.calories)
        return build_analysis(
            analysis_id=self.id_generator(),
            timestamp=self.clock(),
            food_items=items,
            health_tips=derive_health_tips(totals),
            dietary_tags=derive_dietary_tags(totals),
            meal_type=meal_type,
        )

    def _match_items(self, description: str) -> list[FoodItem]:
        text = description.lower()
        items: list[FoodItem] = []
        for keyword, reference in self.knowledge_base.items():
            if keyword not in text:
                continue
            multiplier = extract_multiplier(text, keyword)
            items.append(
                FoodItem(
                    name=keyword.capitalize(),
                    portion_size=(
                        f"{multiplier:g} units" if multiplier > 1 else "1 serving"
                    ),
                    calories=round_half_up(reference.calories * multiplier),
                    protein_g=round_half_up(reference.protein_g * multiplier),
                    fat_g=round_half_up(reference.fat_g * multiplier),
                    carbs_g=round_half_up(reference.carbs_g * multiplier),
                )
            )
        return items


def derive_dietary_tags(totals: MacroProfile) -> list[str]:
    """Return descriptive tags for meal totals."""
    tags: list[str] = []
    if totals.protein_g > HIGH_PROTEIN_GRAMS:
        tags.append("High Protein")
    if totals.carbs_g < LOW_CARB_GRAMS:
        tags.append("Low Carb")
    if totals.calories < LIGHT_MEAL_CALORIES:
        tags.append("Light Meal")
    return tags or ["Balanced"]


def derive_health_tips(totals: MacroProfile) -> str:
    """Return the health tip for meal totals."""
    if totals.protein_g > HIGH_PROTEIN_GRAMS:
        return HIGH_PROTEIN_TIP
    return VOLUME_TIP


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves rounded up."""
    return int(math.floor(value + 0.5))


def _unknown_item(description: str) -> FoodItem:
    return FoodItem(
        name=description or UNKNOWN_MEAL_NAME,
        portion_size="1 serving",
        calories=UNKNOWN_MEAL_MACROS.calories,
        protein_g=UNKNOWN_MEAL_MACROS.protein_g,
        fat_g=UNKNOWN_MEAL_MACROS.fat_g,
        carbs_g=UNKNOWN_MEAL_MACROS.carbs_g,
    )
