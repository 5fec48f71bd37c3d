"""Supabase-backed meal repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_rows import parse_date, parse_timestamp
from health_tracker.domain.meals import Meal
from health_tracker.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(self, user_id: UUID, payload: dict[str, object]) -> Meal:
        """Create a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: UUID, meal_date: date) -> list[Meal]:
        """Return meals for a date, newest first."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("meal_date", meal_date.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_meals_since(self, user_id: UUID, start: date) -> list[Meal]:
        """Return meals on or after a date, newest first."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("meal_date", start.isoformat())
            .order("meal_date", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal owned by the user."""
        self.client.table("meals").delete().eq("id", str(meal_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_date=parse_date(row["meal_date"]),
        meal_type=str(row.get("meal_type", "")),
        food_name=str(row.get("food_name", "")),
        calories=int(row.get("calories") or 0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fats_g=float(row.get("fats_g") or 0.0),
        fiber_g=float(row.get("fiber_g") or 0.0),
        created_at=parse_timestamp(row.get("created_at")),
    )
