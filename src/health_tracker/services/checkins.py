"""Daily wellness check-in service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.checkins import CheckinValues, HealthCheckin
from health_tracker.domain.sessions import UserSession


class CheckinRepository(Protocol):
    """Persistence interface for health check-ins."""

    def get_checkin(self, user_id: UUID, checkin_date: date) -> HealthCheckin | None:
        """Return the check-in for a user and date, if present."""

    def create_checkin(
        self, user_id: UUID, checkin_date: date, payload: dict[str, object]
    ) -> HealthCheckin:
        """Create and return a check-in."""

    def update_checkin(
        self, checkin_id: UUID, payload: dict[str, object]
    ) -> HealthCheckin:
        """Update and return a check-in."""

    def list_checkins_since(self, user_id: UUID, start: date) -> list[HealthCheckin]:
        """Return check-ins on or after a date, newest first."""


@dataclass
class CheckinService:
    """Upserts one check-in per user per date."""

    repository: CheckinRepository

    def get_checkin(self, session: UserSession, day: date) -> HealthCheckin | None:
        """Return the caller's check-in for a date."""
        return self.repository.get_checkin(session.user_id, day)

    def submit_checkin(
        self, session: UserSession, day: date, values: CheckinValues
    ) -> HealthCheckin:
        """Update the existing check-in for the date, or create one."""
        payload: dict[str, object] = {
            "energy_level": values.energy_level,
            "sleep_quality": values.sleep_quality,
            "stress_level": values.stress_level,
            "symptoms": list(values.symptoms),
            "notes": values.notes or None,
        }
        existing = self.repository.get_checkin(session.user_id, day)
        if existing:
            return self.repository.update_checkin(existing.id, payload)
        return self.repository.create_checkin(session.user_id, day, payload)

    def list_checkins(self, session: UserSession, start: date) -> list[HealthCheckin]:
        """Return the caller's check-ins since a date."""
        return self.repository.list_checkins_since(session.user_id, start)
