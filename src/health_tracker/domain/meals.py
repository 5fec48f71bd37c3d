"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

MEAL_TYPES = ("breakfast", "lunch", "snack", "dinner")


@dataclass(frozen=True)
class MealEntry:
    """Values for a meal that has not been persisted yet."""

    meal_type: str
    food_name: str
    calories: int
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fats_g: float = 0.0
    fiber_g: float = 0.0


@dataclass(frozen=True)
class Meal:
    """A logged food intake event."""

    id: UUID
    user_id: UUID
    meal_date: date
    meal_type: str
    food_name: str
    calories: int
    protein_g: float
    carbs_g: float
    fats_g: float
    fiber_g: float
    created_at: datetime | None = None
