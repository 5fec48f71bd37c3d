"""Supabase-backed shared food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from health_tracker.domain.foods import FoodReferenceItem
from health_tracker.services.foods import FoodCatalogRepository


@dataclass
class SupabaseFoodRepository(FoodCatalogRepository):
    """Supabase implementation for the shared ``foods`` table."""

    client: Client

    def search_foods(
        self, query: str | None, category: str | None, limit: int
    ) -> list[FoodReferenceItem]:
        """Search foods by name substring and category."""
        request = self.client.table("foods").select("*")
        if query:
            request = request.ilike("name", f"%{query}%")
        if category:
            request = request.eq("category", category)
        response = request.order("name").limit(limit).execute()
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: str) -> FoodReferenceItem | None:
        """Return a catalog food by id, if present."""
        try:
            UUID(food_id)
        except ValueError:
            return None
        response = (
            self.client.table("foods").select("*").eq("id", food_id).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def upsert_food(
        self, payload: dict[str, object], created_by: UUID
    ) -> FoodReferenceItem:
        """Insert unless the unique name exists, then return the stored row."""
        self.client.table("foods").upsert(
            {**payload, "created_by": str(created_by)},
            on_conflict="name",
            ignore_duplicates=True,
        ).execute()
        response = (
            self.client.table("foods")
            .select("*")
            .eq("name", payload["name"])
            .limit(1)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save food to catalog")
        return _parse_food(response.data[0])


def _parse_food(row: dict[str, object]) -> FoodReferenceItem:
    created_by = row.get("created_by")
    return FoodReferenceItem(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        calories=float(row.get("calories_per_100g") or 0.0),
        protein_g=float(row.get("protein_per_100g") or 0.0),
        carbs_g=float(row.get("carbs_per_100g") or 0.0),
        fats_g=float(row.get("fats_per_100g") or 0.0),
        fiber_g=float(row.get("fiber_per_100g") or 0.0),
        created_by=UUID(str(created_by)) if created_by else None,
    )
