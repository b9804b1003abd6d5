"""Meal analysis with an optional remote model and local fallback."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_snap.domain.analysis import RemoteAnalysis
from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.nutrition import FoodItem, NutritionAnalysis, build_analysis
from calorie_snap.domain.profile import UserProfile
from calorie_snap.services.estimation import NutritionEstimator

_FOOD_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Name of the food item"},
        "portionSize": {
            "type": "string",
            "description": "Estimated portion size (e.g., 1 cup, 200g)",
        },
        "calories": {"type": "number", "description": "Estimated calories"},
        "protein": {"type": "number", "description": "Protein in grams"},
        "fat": {"type": "number", "description": "Fat in grams"},
        "carbs": {"type": "number", "description": "Carbohydrates in grams"},
    },
    "required": ["name", "portionSize", "calories", "protein", "fat", "carbs"],
    "additionalProperties": False,
}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodItems": {"type": "array", "items": _FOOD_ITEM_SCHEMA},
        "healthTips": {
            "type": "string",
            "description": "Brief, actionable advice based on the meal and goal.",
        },
        "dietaryTags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "2-4 tags such as 'High Protein' or 'Vegan'",
        },
    },
    "required": ["foodItems", "healthTips", "dietaryTags"],
    "additionalProperties": False,
}

SYSTEM_PROMPT = (
    "You are an expert nutritionist. Analyze the provided food image or text "
    "description. Be realistic with portion sizes. If exact values are "
    "impossible, provide your best educated estimate. Always assign "
    "appropriate dietary tags."
)

_logger = logging.getLogger(__name__)


class NutritionClient(Protocol):
    """Interface for model-backed meal analysis."""

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return structured analysis data."""


@dataclass
class AnalysisService:
    """Produces a meal analysis preview.

    Uses the remote client when one is configured and falls back to the
    local estimator when it is missing or fails.
    """

    estimator: NutritionEstimator
    client: NutritionClient | None = None
    model: str = "gpt-5.2"
    reasoning_effort: str | None = None
    store: bool = False

    async def analyze(
        self,
        description: str,
        *,
        image_base64: str | None = None,
        mime_type: str | None = None,
        context: str = "",
    ) -> NutritionAnalysis:
        """Analyze a meal description and optional image."""
        if not isinstance(description, str):
            raise TypeError("description must be a string")
        has_image = bool(image_base64)
        if self.client is not None:
            try:
                return await self._analyze_remote(
                    description, image_base64, mime_type, context
                )
            except Exception as exc:  # noqa: BLE001
                _logger.warning("Remote analysis failed, using local estimate: %s", exc)
        return self.estimator.estimate(
            description, has_image=has_image, mime_type=mime_type, context=context
        )

    async def _analyze_remote(
        self,
        description: str,
        image_base64: str | None,
        mime_type: str | None,
        context: str,
    ) -> NutritionAnalysis:
        if self.client is None:
            raise RuntimeError("No remote nutrition client configured")
        prompt = (
            f'Analyze this meal: "{description}". Estimate calories and macros.'
            if description
            else "Analyze this food image. Identify items, estimate portion "
            "sizes, calories, and macronutrients."
        )
        if context:
            prompt = f"{prompt}\nUser Context: {context}"
        image_data_url = None
        if image_base64:
            image_data_url = f"data:{mime_type or 'image/jpeg'};base64,{image_base64}"
        raw = await self.client.analyze(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=SYSTEM_PROMPT,
            prompt=prompt,
            image_data_url=image_data_url,
            schema=ANALYSIS_SCHEMA,
        )
        result = RemoteAnalysis.model_validate(raw)
        if not result.food_items:
            raise ValueError("Remote analysis returned no food items")
        return build_analysis(
            analysis_id=self.estimator.id_generator(),
            timestamp=self.estimator.clock(),
            food_items=[
                FoodItem(
                    name=item.name,
                    portion_size=item.portion_size,
                    calories=item.calories,
                    protein_g=item.protein,
                    fat_g=item.fat,
                    carbs_g=item.carbs,
                )
                for item in result.food_items
            ],
            health_tips=result.health_tips,
            dietary_tags=result.dietary_tags,
        )


def build_context(profile: UserProfile | None, today_log: DailyLog) -> str:
    """Describe the user's goal and today's intake for the analysis prompt."""
    consumed = today_log.totals().calories
    goal = profile.goal if profile else "maintain"
    return f"User wants to {goal} weight. Consumed today: {consumed:.0f} kcal."
