"""Pydantic models for the persisted application state blob."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from calorie_snap.domain.chat import ChatRole
from calorie_snap.domain.nutrition import MealType
from calorie_snap.domain.profile import ActivityLevel, Gender, Goal


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FoodItemModel(_CamelModel):
    """Persisted food item."""

    name: str
    portion_size: str = ""
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)


class NutritionAnalysisModel(_CamelModel):
    """Persisted nutrition analysis."""

    id: str
    timestamp: datetime
    food_items: list[FoodItemModel]
    total_calories: float
    total_protein: float
    total_fat: float
    total_carbs: float
    health_tips: str = ""
    dietary_tags: list[str] = Field(default_factory=list)
    meal_type: MealType | None = None

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> int:
        return _to_epoch_ms(value)


class DailyLogModel(_CamelModel):
    """Persisted daily log bucket."""

    date: str
    meals: list[NutritionAnalysisModel] = Field(default_factory=list)
    water_intake: float = Field(default=0, ge=0)


class UserProfileModel(_CamelModel):
    """Persisted user profile."""

    name: str
    age: int
    weight: float
    height: float
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    calorie_target: float
    protein_target: float
    fat_target: float
    carbs_target: float
    onboarding_complete: bool = False


class ChatMessageModel(_CamelModel):
    """Persisted chat message."""

    id: str
    role: ChatRole
    text: str
    timestamp: datetime

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> int:
        return _to_epoch_ms(value)


class PersistedState(_CamelModel):
    """Top-level persisted blob: profile, daily logs and chat history."""

    profile: UserProfileModel | None = None
    daily_logs: dict[str, DailyLogModel] = Field(default_factory=dict)
    chat_history: list[ChatMessageModel] = Field(default_factory=list)


def _to_epoch_ms(value: datetime) -> int:
    return round(value.timestamp() * 1000)
