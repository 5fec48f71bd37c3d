"""Domain models for user profiles."""

from dataclasses import dataclass
from uuid import UUID

ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very_active")
FITNESS_GOALS = ("weight_loss", "maintenance", "muscle_gain")
DIETARY_PREFERENCES = ("non_vegetarian", "vegetarian", "vegan")


@dataclass(frozen=True)
class Profile:
    """Demographic and goal attributes for a single user."""

    user_id: UUID
    full_name: str | None = None
    age: int | None = None
    gender: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: str | None = None
    fitness_goal: str | None = None
    dietary_preference: str | None = None
