"""Supabase-backed health check-in repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_rows import optional_int, parse_date
from health_tracker.domain.checkins import HealthCheckin
from health_tracker.services.checkins import CheckinRepository


@dataclass
class SupabaseCheckinRepository(CheckinRepository):
    """Supabase implementation for health check-ins."""

    client: Client

    def get_checkin(self, user_id: UUID, checkin_date: date) -> HealthCheckin | None:
        """Return the check-in for a user and date, if present."""
        response = (
            self.client.table("health_checkins")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("checkin_date", checkin_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_checkin(response.data[0])

    def create_checkin(
        self, user_id: UUID, checkin_date: date, payload: dict[str, object]
    ) -> HealthCheckin:
        """Create a check-in row and return it."""
        response = (
            self.client.table("health_checkins")
            .insert(
                {
                    "user_id": str(user_id),
                    "checkin_date": checkin_date.isoformat(),
                    **payload,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create health check-in")
        return _parse_checkin(response.data[0])

    def update_checkin(
        self, checkin_id: UUID, payload: dict[str, object]
    ) -> HealthCheckin:
        """Update a check-in row and return it."""
        response = (
            self.client.table("health_checkins")
            .update(payload)
            .eq("id", str(checkin_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update health check-in")
        return _parse_checkin(response.data[0])

    def list_checkins_since(self, user_id: UUID, start: date) -> list[HealthCheckin]:
        """Return check-ins on or after a date, newest first."""
        response = (
            self.client.table("health_checkins")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("checkin_date", start.isoformat())
            .order("checkin_date", desc=True)
            .execute()
        )
        return [_parse_checkin(row) for row in response.data or []]


def _parse_checkin(row: dict[str, object]) -> HealthCheckin:
    return HealthCheckin(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        checkin_date=parse_date(row["checkin_date"]),
        energy_level=optional_int(row.get("energy_level")),
        sleep_quality=optional_int(row.get("sleep_quality")),
        stress_level=optional_int(row.get("stress_level")),
        symptoms=list(row.get("symptoms") or []),
        notes=row.get("notes"),
    )
