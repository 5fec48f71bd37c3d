"""Pydantic request models for the HTTP API."""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from health_tracker.domain.food_analysis import FoodAnalysis

ActivityType = Literal[
    "walking", "running", "cycling", "gym", "yoga", "swimming", "hiit", "stretching"
]
Intensity = Literal["low", "moderate", "high"]
MealType = Literal["breakfast", "lunch", "snack", "dinner"]


class ProfileCreate(BaseModel):
    """Account setup payload."""

    full_name: str | None = None


class ProfileUpdate(BaseModel):
    """Partial profile edit; only fields sent are applied."""

    full_name: str | None = None
    age: int | None = Field(default=None, ge=1, le=120)
    gender: Literal["male", "female", "other"] | None = None
    height_cm: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    activity_level: (
        Literal["sedentary", "light", "moderate", "active", "very_active"] | None
    ) = None
    fitness_goal: Literal["weight_loss", "maintenance", "muscle_gain"] | None = None
    dietary_preference: Literal["non_vegetarian", "vegetarian", "vegan"] | None = None


class ActivityCreate(BaseModel):
    activity_type: ActivityType
    duration_minutes: int = Field(gt=0)
    intensity: Intensity = "moderate"
    activity_date: date | None = None
    notes: str | None = None


class MealCreate(BaseModel):
    meal_type: MealType
    food_name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fats_g: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)
    meal_date: date | None = None


class MealFromFood(BaseModel):
    """Log a catalog food scaled to a portion weight."""

    food_id: str
    weight_grams: float | str | None = None
    meal_type: MealType
    meal_date: date | None = None


class CheckinSubmit(BaseModel):
    energy_level: int = Field(default=3, ge=1, le=5)
    sleep_quality: int = Field(default=3, ge=1, le=5)
    stress_level: int = Field(default=2, ge=1, le=5)
    symptoms: list[str] = Field(default_factory=list)
    notes: str | None = None


class ChatMessageCreate(BaseModel):
    content: str = Field(min_length=1)


class FoodContribution(FoodAnalysis):
    """An AI estimate to save to the shared catalog."""

    category: str = "Custom"


class ChatTurnPayload(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class HealthChatRequest(BaseModel):
    """Body of the health-chat function."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatTurnPayload]
    user_id: UUID | None = Field(default=None, alias="userId")


class AnalyzeFoodRequest(BaseModel):
    """Body of the analyze-food function."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str | None = Field(default=None, alias="foodName")
    weight_grams: float | str | None = Field(default=None, alias="weightGrams")
