"""Per-day meal and water log store."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from zoneinfo import ZoneInfo

from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.nutrition import NutritionAnalysis

DATE_KEY_FORMAT = "%Y-%m-%d"


class DuplicateMealError(ValueError):
    """Raised when a meal id is already logged for the day."""


def date_key(day: date | str) -> str:
    """Return the ``YYYY-MM-DD`` key for a calendar day."""
    if isinstance(day, str):
        return date.fromisoformat(day).strftime(DATE_KEY_FORMAT)
    return day.strftime(DATE_KEY_FORMAT)


def today_key(timezone_name: str = "UTC") -> str:
    """Return today's key in the given timezone."""
    return date_key(datetime.now(tz=ZoneInfo(timezone_name)).date())


@dataclass
class DailyLogStore:
    """Mapping from date key to daily log bucket.

    Buckets are immutable; every mutation swaps in a new bucket, so readers
    never observe a partial update. Buckets are created on first write and
    never deleted.
    """

    logs: dict[str, DailyLog] = field(default_factory=dict)

    def get_or_create(self, day: date | str) -> DailyLog:
        """Return the bucket for a day, or an empty unsaved one."""
        key = date_key(day)
        return self.logs.get(key) or DailyLog(date=key)

    def add_meal(self, day: date | str, analysis: NutritionAnalysis) -> DailyLog:
        """Prepend a meal to the day's log; meal ids are unique per day."""
        current = self.get_or_create(day)
        if any(meal.id == analysis.id for meal in current.meals):
            raise DuplicateMealError(f"Meal {analysis.id} is already logged")
        updated = replace(current, meals=[analysis, *current.meals])
        self.logs[current.date] = updated
        return updated

    def remove_meal(self, day: date | str, meal_id: str) -> DailyLog:
        """Remove a meal by id; unknown ids are ignored."""
        current = self.get_or_create(day)
        remaining = [meal for meal in current.meals if meal.id != meal_id]
        if len(remaining) == len(current.meals):
            return current
        updated = replace(current, meals=remaining)
        self.logs[current.date] = updated
        return updated

    def add_water(self, day: date | str, amount_ml: float) -> DailyLog:
        """Add water to the day's running total."""
        if amount_ml <= 0:
            raise ValueError("Water amount must be positive")
        current = self.get_or_create(day)
        updated = replace(current, water_intake_ml=current.water_intake_ml + amount_ml)
        self.logs[current.date] = updated
        return updated

    def snapshot(self) -> dict[str, DailyLog]:
        """Return a shallow copy of all buckets."""
        return dict(self.logs)
