"""Meal logging service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.meals import MEAL_TYPES, Meal, MealEntry
from health_tracker.domain.sessions import UserSession
from health_tracker.services.foods import FoodService
from health_tracker.services.nutrition import coerce_weight, scale_nutrition


class UnknownMealTypeError(ValueError):
    """The meal slot is not one of the known meal types."""


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(self, user_id: UUID, payload: dict[str, object]) -> Meal:
        """Create and return a meal."""

    def list_meals(self, user_id: UUID, meal_date: date) -> list[Meal]:
        """Return meals for a date, newest first."""

    def list_meals_since(self, user_id: UUID, start: date) -> list[Meal]:
        """Return meals on or after a date, newest first."""

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal owned by the user."""


@dataclass
class MealService:
    """Application service for meal logging."""

    repository: MealRepository
    food_service: FoodService

    def log_meal(
        self, session: UserSession, entry: MealEntry, meal_date: date
    ) -> Meal:
        """Persist a meal with explicit macro values."""
        if entry.meal_type not in MEAL_TYPES:
            raise UnknownMealTypeError(f"Unknown meal type: {entry.meal_type}")
        return self.repository.create_meal(
            session.user_id,
            {
                "meal_type": entry.meal_type,
                "food_name": entry.food_name,
                "calories": entry.calories,
                "protein_g": entry.protein_g,
                "carbs_g": entry.carbs_g,
                "fats_g": entry.fats_g,
                "fiber_g": entry.fiber_g,
                "meal_date": meal_date.isoformat(),
            },
        )

    def log_food_portion(  # noqa: PLR0913
        self,
        session: UserSession,
        food_id: str,
        weight_grams: object,
        meal_type: str,
        meal_date: date,
    ) -> Meal | None:
        """Scale a reference food to a portion and log it; None if unknown."""
        food = self.food_service.get_food(food_id)
        if food is None:
            return None
        grams = coerce_weight(weight_grams)
        nutrition = scale_nutrition(food, grams)
        entry = MealEntry(
            meal_type=meal_type,
            food_name=f"{food.name} ({grams:g}g)",
            calories=nutrition.calories,
            protein_g=nutrition.protein_g,
            carbs_g=nutrition.carbs_g,
            fats_g=nutrition.fats_g,
            fiber_g=nutrition.fiber_g,
        )
        return self.log_meal(session, entry, meal_date)

    def list_meals(self, session: UserSession, day: date) -> list[Meal]:
        """Return the caller's meals for a date."""
        return self.repository.list_meals(session.user_id, day)

    def delete_meal(self, session: UserSession, meal_id: UUID) -> None:
        """Delete one of the caller's meals."""
        self.repository.delete_meal(session.user_id, meal_id)
