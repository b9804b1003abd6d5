"""Loading and saving the application state blob."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from calorie_snap.domain.chat import ChatMessage
from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.nutrition import FoodItem, NutritionAnalysis
from calorie_snap.domain.profile import UserProfile
from calorie_snap.domain.state import (
    ChatMessageModel,
    DailyLogModel,
    FoodItemModel,
    NutritionAnalysisModel,
    PersistedState,
    UserProfileModel,
)

DEFAULT_STATE_KEY = "caloriesnap_data_v2"

_logger = logging.getLogger(__name__)


class StateRepository(Protocol):
    """Key-value blob store for persisted state."""

    def get(self, key: str) -> str | None:
        """Return the stored blob for a key."""

    def set(self, key: str, value: str) -> None:
        """Store a blob under a key."""


class StateLoadError(Exception):
    """Raised when a stored state blob cannot be parsed."""


@dataclass
class AppState:
    """Everything persisted between runs."""

    profile: UserProfile | None = None
    daily_logs: dict[str, DailyLog] = field(default_factory=dict)
    chat_history: list[ChatMessage] = field(default_factory=list)


@dataclass
class StateService:
    """Serializes application state to a blob repository."""

    repository: StateRepository
    key: str = DEFAULT_STATE_KEY

    def load(self) -> AppState:
        """Load state, returning an empty state when nothing is stored."""
        raw = self.repository.get(self.key)
        if not raw:
            return AppState()
        try:
            persisted = PersistedState.model_validate_json(raw)
        except ValidationError as exc:
            raise StateLoadError(
                f"Stored state under {self.key!r} is invalid"
            ) from exc
        state = from_persisted(persisted)
        _logger.info("Loaded state with %s daily log(s)", len(state.daily_logs))
        return state

    def save(self, state: AppState) -> None:
        """Persist the full state."""
        payload = to_persisted(state).model_dump_json(by_alias=True)
        self.repository.set(self.key, payload)
        _logger.debug("Saved state (%s bytes)", len(payload))


def to_persisted(state: AppState) -> PersistedState:
    """Convert domain state to the persisted model."""
    return PersistedState(
        profile=profile_model(state.profile) if state.profile else None,
        daily_logs={
            key: DailyLogModel(
                date=log.date,
                meals=[analysis_model(meal) for meal in log.meals],
                water_intake=log.water_intake_ml,
            )
            for key, log in state.daily_logs.items()
        },
        chat_history=[message_model(message) for message in state.chat_history],
    )


def from_persisted(persisted: PersistedState) -> AppState:
    """Convert the persisted model to domain state."""
    profile = None
    if persisted.profile is not None:
        profile = UserProfile(**persisted.profile.model_dump())
    return AppState(
        profile=profile,
        daily_logs={
            key: DailyLog(
                date=log.date,
                meals=[analysis_from_model(meal) for meal in log.meals],
                water_intake_ml=log.water_intake,
            )
            for key, log in persisted.daily_logs.items()
        },
        chat_history=[
            ChatMessage(
                id=message.id,
                role=message.role,
                text=message.text,
                timestamp=message.timestamp,
            )
            for message in persisted.chat_history
        ],
    )


def analysis_model(analysis: NutritionAnalysis) -> NutritionAnalysisModel:
    """Convert an analysis to its persisted/API model."""
    return NutritionAnalysisModel(
        id=analysis.id,
        timestamp=analysis.timestamp,
        food_items=[
            FoodItemModel(
                name=item.name,
                portion_size=item.portion_size,
                calories=item.calories,
                protein=item.protein_g,
                fat=item.fat_g,
                carbs=item.carbs_g,
            )
            for item in analysis.food_items
        ],
        total_calories=analysis.total_calories,
        total_protein=analysis.total_protein_g,
        total_fat=analysis.total_fat_g,
        total_carbs=analysis.total_carbs_g,
        health_tips=analysis.health_tips,
        dietary_tags=list(analysis.dietary_tags),
        meal_type=analysis.meal_type,
    )


def analysis_from_model(model: NutritionAnalysisModel) -> NutritionAnalysis:
    """Convert a persisted/API model back to an analysis."""
    return NutritionAnalysis(
        id=model.id,
        timestamp=model.timestamp,
        food_items=[
            FoodItem(
                name=item.name,
                portion_size=item.portion_size,
                calories=item.calories,
                protein_g=item.protein,
                fat_g=item.fat,
                carbs_g=item.carbs,
            )
            for item in model.food_items
        ],
        total_calories=model.total_calories,
        total_protein_g=model.total_protein,
        total_fat_g=model.total_fat,
        total_carbs_g=model.total_carbs,
        health_tips=model.health_tips,
        dietary_tags=list(model.dietary_tags),
        meal_type=model.meal_type,
    )


def profile_model(profile: UserProfile) -> UserProfileModel:
    """Convert a profile to its persisted/API model."""
    return UserProfileModel(
        name=profile.name,
        age=profile.age,
        weight=profile.weight,
        height=profile.height,
        gender=profile.gender,
        activity_level=profile.activity_level,
        goal=profile.goal,
        calorie_target=profile.calorie_target,
        protein_target=profile.protein_target,
        fat_target=profile.fat_target,
        carbs_target=profile.carbs_target,
        onboarding_complete=profile.onboarding_complete,
    )


def message_model(message: ChatMessage) -> ChatMessageModel:
    """Convert a chat message to its persisted/API model."""
    return ChatMessageModel(
        id=message.id,
        role=message.role,
        text=message.text,
        timestamp=message.timestamp,
    )
