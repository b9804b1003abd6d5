"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from calorie_snap.config import Settings
from calorie_snap.containers import AppContainer, build_container
from calorie_snap.domain.profile import UserProfile
from calorie_snap.services.analysis import NutritionClient
from calorie_snap.services.coach import CoachClient
from calorie_snap.services.estimation import NutritionEstimator
from calorie_snap.services.logs import DailyLogStore
from calorie_snap.services.state import StateRepository
from calorie_snap.services.undo import Cancellable, Scheduler, UndoCoordinator


@dataclass
class InMemoryStateRepository(StateRepository):
    """In-memory blob store for tests."""

    blobs: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self.blobs[key] = value


@dataclass
class _ManualHandle(Cancellable):
    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler(Scheduler):
    """Scheduler driven by explicit ``advance`` calls."""

    now: float = 0.0
    handles: list[_ManualHandle] = field(default_factory=list)

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> Cancellable:
        handle = _ManualHandle(due=self.now + delay_seconds, callback=callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in list(self.handles):
            if handle.cancelled or handle.fired or handle.due > self.now:
                continue
            handle.fired = True
            handle.callback()


@dataclass
class SequentialIds:
    """Deterministic id generator."""

    prefix: str = "id"
    count: int = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


@dataclass
class FixedClock:
    """Clock that advances one second per call."""

    current: datetime = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@dataclass
class FakeNutritionClient(NutritionClient):
    """Fake remote analysis client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foodItems": [
                {
                    "name": "Grilled chicken",
                    "portionSize": "150g",
                    "calories": 250,
                    "protein": 45,
                    "fat": 6,
                    "carbs": 0,
                },
                {
                    "name": "Brown rice",
                    "portionSize": "1 cup",
                    "calories": 215,
                    "protein": 5,
                    "fat": 2,
                    "carbs": 45,
                },
            ],
            "totalCalories": 9999,
            "healthTips": "Solid post-workout meal.",
            "dietaryTags": ["High Protein", "Gluten Free"],
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append({"prompt": prompt, "image_data_url": image_data_url})
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeCoachClient(CoachClient):
    """Fake remote coach client."""

    answer: str = "Drink a glass of water before dinner."
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def reply(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


def make_profile(**overrides: object) -> UserProfile:
    values: dict[str, object] = {
        "name": "Sam",
        "age": 30,
        "weight": 80,
        "height": 180,
        "gender": "male",
        "activity_level": "moderate",
        "goal": "lose",
        "calorie_target": 2000,
        "protein_target": 150,
        "fat_target": 78,
        "carbs_target": 175,
        "onboarding_complete": True,
    }
    values.update(overrides)
    return UserProfile(**values)  # type: ignore[arg-type]


@pytest.fixture
def estimator() -> NutritionEstimator:
    return NutritionEstimator(id_generator=SequentialIds("meal"), clock=FixedClock())


@pytest.fixture
def store() -> DailyLogStore:
    return DailyLogStore()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def undo_coordinator(
    store: DailyLogStore, scheduler: ManualScheduler
) -> UndoCoordinator:
    return UndoCoordinator(store=store, scheduler=scheduler, window_seconds=5)


@pytest.fixture
def profile() -> UserProfile:
    return make_profile()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key=None,
        remote_estimation=False,
        remote_coach=False,
        state_backend="file",
        timezone="UTC",
    )


@pytest.fixture
def state_repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture
def container(
    settings: Settings, state_repository: InMemoryStateRepository
) -> AppContainer:
    return build_container(settings, state_repository=state_repository)
