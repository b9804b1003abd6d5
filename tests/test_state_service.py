"""Tests for persisted state serialization."""

import json
from datetime import UTC, datetime

import pytest

from calorie_snap.domain.chat import ChatMessage
from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.profile import UserProfile
from calorie_snap.services.estimation import NutritionEstimator
from calorie_snap.services.state import AppState, StateLoadError, StateService
from tests.conftest import InMemoryStateRepository

KEY = "caloriesnap_data_v2"
LEGACY_BLOB = {
    "profile": {
        "name": "Sam",
        "age": 30,
        "weight": 80,
        "height": 180,
        "gender": "male",
        "activityLevel": "moderate",
        "goal": "lose",
        "calorieTarget": 2259,
        "proteinTarget": 169,
        "fatTarget": 88,
        "carbsTarget": 198,
        "onboardingComplete": True,
    },
    "dailyLogs": {
        "2024-05-01": {
            "date": "2024-05-01",
            "meals": [
                {
                    "id": "4f1c",
                    "timestamp": 1714564800000,
                    "foodItems": [
                        {
                            "name": "Oatmeal",
                            "portionSize": "1 cup",
                            "calories": 150,
                            "protein": 5,
                            "fat": 3,
                            "carbs": 27,
                        }
                    ],
                    "totalCalories": 150,
                    "totalProtein": 5,
                    "totalFat": 3,
                    "totalCarbs": 27,
                    "healthTips": "Add fruit.",
                    "dietaryTags": ["Vegan"],
                }
            ],
            "waterIntake": 500,
        }
    },
    "chatHistory": [
        {"id": "m1", "role": "user", "text": "hi", "timestamp": 1714564800000}
    ],
}


def _state(estimator: NutritionEstimator, profile: UserProfile) -> AppState:
    meal = estimator.estimate("2 eggs and toast", meal_type="breakfast")
    return AppState(
        profile=profile,
        daily_logs={
            "2024-05-01": DailyLog(
                date="2024-05-01", meals=[meal], water_intake_ml=750
            )
        },
        chat_history=[
            ChatMessage(
                id="c1",
                role="user",
                text="status",
                timestamp=datetime(2024, 5, 1, 9, 30, 0, 123000, tzinfo=UTC),
            )
        ],
    )


def test_save_then_load_is_lossless(
    estimator: NutritionEstimator, profile: UserProfile
) -> None:
    repository = InMemoryStateRepository()
    service = StateService(repository)
    state = _state(estimator, profile)

    service.save(state)
    loaded = service.load()

    assert loaded == state


def test_saved_blob_uses_camel_case_shape(
    estimator: NutritionEstimator, profile: UserProfile
) -> None:
    repository = InMemoryStateRepository()
    StateService(repository, key="k").save(_state(estimator, profile))

    blob = json.loads(repository.blobs["k"])

    assert set(blob) == {"profile", "dailyLogs", "chatHistory"}
    log = blob["dailyLogs"]["2024-05-01"]
    assert log["waterIntake"] == 750
    meal = log["meals"][0]
    assert meal["foodItems"][0]["portionSize"] == "2 units"
    assert meal["totalCalories"] == 220
    assert meal["mealType"] == "breakfast"
    assert isinstance(meal["timestamp"], int)
    assert blob["chatHistory"][0]["timestamp"] == 1714555800123
    assert blob["profile"]["activityLevel"] == "moderate"


def test_load_legacy_blob() -> None:
    repository = InMemoryStateRepository({KEY: json.dumps(LEGACY_BLOB)})

    state = StateService(repository).load()

    assert state.profile is not None
    assert state.profile.calorie_target == 2259
    log = state.daily_logs["2024-05-01"]
    assert log.water_intake_ml == 500
    assert log.meals[0].food_items[0].portion_size == "1 cup"
    assert log.meals[0].timestamp == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    assert log.meals[0].meal_type is None
    assert state.chat_history[0].role == "user"


def test_legacy_blob_round_trips() -> None:
    repository = InMemoryStateRepository({KEY: json.dumps(LEGACY_BLOB)})
    service = StateService(repository)

    service.save(service.load())
    blob = json.loads(repository.blobs[KEY])

    legacy_log = LEGACY_BLOB["dailyLogs"]["2024-05-01"]
    saved_log = blob["dailyLogs"]["2024-05-01"]
    assert saved_log["date"] == legacy_log["date"]
    assert saved_log["waterIntake"] == legacy_log["waterIntake"]
    assert saved_log["meals"] == [{**legacy_log["meals"][0], "mealType": None}]
    assert blob["chatHistory"] == LEGACY_BLOB["chatHistory"]
    assert blob["profile"] == LEGACY_BLOB["profile"]


def test_load_empty_repository() -> None:
    state = StateService(InMemoryStateRepository()).load()

    assert state == AppState()


def test_load_invalid_blob_raises() -> None:
    repository = InMemoryStateRepository({KEY: "{not json"})

    with pytest.raises(StateLoadError):
        StateService(repository).load()
