"""Pydantic request and response models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from calorie_snap.domain.profile import ActivityLevel, Gender, Goal
from calorie_snap.domain.state import DailyLogModel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OnboardingRequest(_CamelModel):
    """Profile fields collected during onboarding."""

    name: str = Field(min_length=1)
    age: int = Field(gt=0)
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal


class AnalyzeRequest(_CamelModel):
    """Meal description and optional base64-encoded image."""

    description: str = ""
    image: str | None = None
    mime_type: str | None = None


class WaterRequest(_CamelModel):
    """Water to add to today's log."""

    amount: float = Field(gt=0)


class ChatRequest(_CamelModel):
    """User message for the coach."""

    text: str = Field(min_length=1)


class MacroTotalsModel(_CamelModel):
    """Macros summed over a day's meals."""

    calories: float
    protein: float
    fat: float
    carbs: float


class DailyLogResponse(DailyLogModel):
    """Daily log with totals recomputed from its meals."""

    totals: MacroTotalsModel
