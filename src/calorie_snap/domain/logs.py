"""Domain models for daily logs."""

from dataclasses import dataclass, field

from calorie_snap.domain.nutrition import MacroProfile, NutritionAnalysis


@dataclass(frozen=True)
class DailyLog:
    """All meals and water logged on one calendar day.

    ``meals`` is ordered most recent first.
    """

    date: str
    meals: list[NutritionAnalysis] = field(default_factory=list)
    water_intake_ml: float = 0

    def totals(self) -> MacroProfile:
        """Return macros summed over the current meals."""
        total = MacroProfile(0, 0, 0, 0)
        for meal in self.meals:
            total = MacroProfile(
                calories=total.calories + meal.total_calories,
                protein_g=total.protein_g + meal.total_protein_g,
                fat_g=total.fat_g + meal.total_fat_g,
                carbs_g=total.carbs_g + meal.total_carbs_g,
            )
        return total
