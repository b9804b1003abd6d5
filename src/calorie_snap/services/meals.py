"""Meal diary service for today's log."""

import logging
from dataclasses import dataclass

from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.nutrition import MacroProfile, NutritionAnalysis
from calorie_snap.services.logs import DailyLogStore, today_key
from calorie_snap.services.undo import UndoCoordinator

_logger = logging.getLogger(__name__)


@dataclass
class MealLogService:
    """Adds, deletes and undoes meals in the daily log."""

    store: DailyLogStore
    undo_coordinator: UndoCoordinator
    timezone: str = "UTC"

    def today_key(self) -> str:
        """Return today's date key in the configured timezone."""
        return today_key(self.timezone)

    def today(self) -> DailyLog:
        """Return today's log."""
        return self.store.get_or_create(self.today_key())

    def get_day(self, day: str) -> DailyLog:
        """Return the log for a given date key."""
        return self.store.get_or_create(day)

    def add_meal(self, analysis: NutritionAnalysis) -> DailyLog:
        """Log a meal for today and make it undoable.

        Raises ``DuplicateMealError`` without touching the pending undo when
        the meal id is already in today's log.
        """
        day = self.today_key()
        log = self.store.add_meal(day, analysis)
        self.undo_coordinator.arm(day, analysis.id)
        _logger.info("Logged meal %s (%s kcal)", analysis.id, analysis.total_calories)
        return log

    def delete_meal(self, meal_id: str, day: str | None = None) -> DailyLog:
        """Delete a meal; the pending undo is left alone."""
        return self.store.remove_meal(day or self.today_key(), meal_id)

    def undo(self) -> DailyLog | None:
        """Undo the most recent add, if still possible."""
        pending = self.undo_coordinator.undo()
        if pending is None:
            return None
        return self.store.get_or_create(pending.day)

    def add_water(self, amount_ml: float) -> DailyLog:
        """Add water to today's log."""
        return self.store.add_water(self.today_key(), amount_ml)

    def daily_totals(self, day: str | None = None) -> MacroProfile:
        """Return macros summed from the day's current meals."""
        return self.store.get_or_create(day or self.today_key()).totals()
