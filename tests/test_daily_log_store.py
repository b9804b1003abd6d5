"""Tests for the daily log store."""

from datetime import date

import pytest

from calorie_snap.services.estimation import NutritionEstimator
from calorie_snap.services.logs import DailyLogStore, DuplicateMealError, date_key

DAY = "2024-05-01"


def test_get_or_create_returns_empty_unsaved_bucket(store: DailyLogStore) -> None:
    log = store.get_or_create(DAY)

    assert log.date == DAY
    assert log.meals == []
    assert log.water_intake_ml == 0
    assert store.snapshot() == {}


def test_get_or_create_is_idempotent(
    store: DailyLogStore, estimator: NutritionEstimator
) -> None:
    store.add_meal(DAY, estimator.estimate("apple"))

    assert store.get_or_create(DAY) == store.get_or_create(DAY)


def test_add_meal_prepends(
    store: DailyLogStore, estimator: NutritionEstimator
) -> None:
    first = estimator.estimate("apple")
    second = estimator.estimate("banana")

    store.add_meal(DAY, first)
    log = store.add_meal(DAY, second)

    assert [meal.id for meal in log.meals] == [second.id, first.id]


def test_add_meal_rejects_logged_id(
    store: DailyLogStore, estimator: NutritionEstimator
) -> None:
    meal = estimator.estimate("apple")
    before = store.add_meal(DAY, meal)

    with pytest.raises(DuplicateMealError):
        store.add_meal(DAY, meal)

    assert store.get_or_create(DAY) == before
    assert store.add_meal("2024-05-02", meal).meals == [meal]


def test_remove_meal(store: DailyLogStore, estimator: NutritionEstimator) -> None:
    meal = estimator.estimate("steak")
    store.add_meal(DAY, meal)

    log = store.remove_meal(DAY, meal.id)

    assert log.meals == []


def test_remove_unknown_meal_is_noop(
    store: DailyLogStore, estimator: NutritionEstimator
) -> None:
    meal = estimator.estimate("steak")
    before = store.add_meal(DAY, meal)

    after = store.remove_meal(DAY, "missing")

    assert after == before
    assert store.remove_meal("2024-06-01", "missing").meals == []


def test_add_water_accumulates(store: DailyLogStore) -> None:
    store.add_water(DAY, 250)
    log = store.add_water(DAY, 500)

    assert log.water_intake_ml == 750


def test_add_water_rejects_non_positive(store: DailyLogStore) -> None:
    with pytest.raises(ValueError):
        store.add_water(DAY, 0)


def test_totals_follow_current_meals(
    store: DailyLogStore, estimator: NutritionEstimator
) -> None:
    egg = estimator.estimate("2 eggs")
    rice = estimator.estimate("rice")
    store.add_meal(DAY, egg)
    store.add_meal(DAY, rice)

    assert store.get_or_create(DAY).totals().calories == 340
    store.remove_meal(DAY, rice.id)
    assert store.get_or_create(DAY).totals().calories == 140


def test_buckets_are_separate_per_day(
    store: DailyLogStore, estimator: NutritionEstimator
) -> None:
    store.add_meal(DAY, estimator.estimate("apple"))

    assert store.get_or_create("2024-05-02").meals == []
    assert set(store.snapshot()) == {DAY}


def test_date_key_accepts_dates_and_strings() -> None:
    assert date_key(date(2024, 1, 5)) == "2024-01-05"
    assert date_key("2024-01-05") == "2024-01-05"
