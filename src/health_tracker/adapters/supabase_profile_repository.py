"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_rows import optional_float, optional_int
from health_tracker.domain.profiles import Profile
from health_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create a profile row and return it."""
        response = (
            self.client.table("profiles")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile")
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Update the user's profile row and return it."""
        response = (
            self.client.table("profiles")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> Profile:
    return Profile(
        user_id=UUID(str(row["user_id"])),
        full_name=row.get("full_name"),
        age=optional_int(row.get("age")),
        gender=row.get("gender"),
        height_cm=optional_float(row.get("height_cm")),
        weight_kg=optional_float(row.get("weight_kg")),
        activity_level=row.get("activity_level"),
        fitness_goal=row.get("fitness_goal"),
        dietary_preference=row.get("dietary_preference"),
    )
