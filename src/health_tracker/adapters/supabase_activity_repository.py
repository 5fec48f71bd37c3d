"""Supabase-backed activity repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_rows import parse_date, parse_timestamp
from health_tracker.domain.activities import Activity
from health_tracker.services.activities import ActivityRepository


@dataclass
class SupabaseActivityRepository(ActivityRepository):
    """Supabase implementation for activities."""

    client: Client

    def create_activity(self, user_id: UUID, payload: dict[str, object]) -> Activity:
        """Create an activity row and return it."""
        response = (
            self.client.table("activities")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create activity")
        return _parse_activity(response.data[0])

    def list_activities(self, user_id: UUID, activity_date: date) -> list[Activity]:
        """Return activities for a date, newest first."""
        response = (
            self.client.table("activities")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("activity_date", activity_date.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_activity(row) for row in response.data or []]

    def list_activities_since(self, user_id: UUID, start: date) -> list[Activity]:
        """Return activities on or after a date, newest first."""
        response = (
            self.client.table("activities")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("activity_date", start.isoformat())
            .order("activity_date", desc=True)
            .execute()
        )
        return [_parse_activity(row) for row in response.data or []]

    def delete_activity(self, user_id: UUID, activity_id: UUID) -> None:
        """Delete an activity owned by the user."""
        self.client.table("activities").delete().eq("id", str(activity_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_activity(row: dict[str, object]) -> Activity:
    return Activity(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        activity_date=parse_date(row["activity_date"]),
        activity_type=str(row.get("activity_type", "")),
        duration_minutes=int(row.get("duration_minutes") or 0),
        intensity=row.get("intensity"),
        calories_burned=int(row.get("calories_burned") or 0),
        notes=row.get("notes"),
        created_at=parse_timestamp(row.get("created_at")),
    )
