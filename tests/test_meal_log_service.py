"""Tests for meal log service."""

import pytest

from calorie_snap.services.estimation import NutritionEstimator
from calorie_snap.services.logs import DailyLogStore, DuplicateMealError, today_key
from calorie_snap.services.meals import MealLogService
from calorie_snap.services.undo import UndoCoordinator
from tests.conftest import ManualScheduler


def _service(
    store: DailyLogStore, undo_coordinator: UndoCoordinator
) -> MealLogService:
    return MealLogService(store=store, undo_coordinator=undo_coordinator)


def test_add_meal_logs_today_and_arms_undo(
    store: DailyLogStore,
    undo_coordinator: UndoCoordinator,
    estimator: NutritionEstimator,
) -> None:
    service = _service(store, undo_coordinator)
    meal = estimator.estimate("2 eggs")

    log = service.add_meal(meal)

    assert log.date == today_key("UTC")
    assert log.meals == [meal]
    assert undo_coordinator.pending is not None
    assert undo_coordinator.pending.meal_id == meal.id


def test_undo_returns_restored_log(
    store: DailyLogStore,
    undo_coordinator: UndoCoordinator,
    estimator: NutritionEstimator,
) -> None:
    service = _service(store, undo_coordinator)
    kept = estimator.estimate("apple")
    service.add_meal(kept)
    service.add_meal(estimator.estimate("pizza"))

    log = service.undo()

    assert log is not None
    assert log.meals == [kept]
    assert service.undo() is None


def test_undo_after_window_keeps_meal(
    store: DailyLogStore,
    undo_coordinator: UndoCoordinator,
    estimator: NutritionEstimator,
    scheduler: ManualScheduler,
) -> None:
    service = _service(store, undo_coordinator)
    meal = estimator.estimate("pizza")
    service.add_meal(meal)

    scheduler.advance(6)

    assert service.undo() is None
    assert service.today().meals == [meal]


def test_delete_meal_and_totals(
    store: DailyLogStore,
    undo_coordinator: UndoCoordinator,
    estimator: NutritionEstimator,
) -> None:
    service = _service(store, undo_coordinator)
    eggs = estimator.estimate("2 eggs")
    steak = estimator.estimate("steak")
    service.add_meal(eggs)
    service.add_meal(steak)

    assert service.daily_totals().calories == 410
    service.delete_meal(eggs.id)

    assert service.daily_totals().calories == 270
    assert undo_coordinator.pending is not None
    assert undo_coordinator.pending.meal_id == steak.id


def test_add_water_updates_today(
    store: DailyLogStore, undo_coordinator: UndoCoordinator
) -> None:
    service = _service(store, undo_coordinator)

    service.add_water(250)
    log = service.add_water(250)

    assert log.water_intake_ml == 500
    assert service.get_day(service.today_key()).water_intake_ml == 500


def test_duplicate_add_keeps_pending_undo(
    store: DailyLogStore,
    undo_coordinator: UndoCoordinator,
    estimator: NutritionEstimator,
) -> None:
    service = _service(store, undo_coordinator)
    first = estimator.estimate("apple")
    second = estimator.estimate("pizza")
    service.add_meal(first)
    service.add_meal(second)

    with pytest.raises(DuplicateMealError):
        service.add_meal(first)

    assert undo_coordinator.pending is not None
    assert undo_coordinator.pending.meal_id == second.id
    log = service.undo()
    assert log is not None
    assert log.meals == [first]
