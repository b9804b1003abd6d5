"""Models for remote meal analysis results."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RemoteFoodItem(BaseModel):
    """Single food item returned by the model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    portion_size: str = "1 serving"
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)


class RemoteAnalysis(BaseModel):
    """Structured output for a remote meal analysis."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    food_items: list[RemoteFoodItem]
    health_tips: str = ""
    dietary_tags: list[str] = Field(default_factory=list)
