"""Activity logging service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.activities import Activity
from health_tracker.domain.sessions import UserSession
from health_tracker.services.energy import (
    ACTIVITY_METS,
    INTENSITY_MULTIPLIERS,
    estimate_calories_burned,
)
from health_tracker.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


class UnknownActivityTypeError(ValueError):
    """The activity type has no MET value."""


class ProfileIncompleteError(ValueError):
    """A profile attribute needed for a calculation is missing."""


class ActivityRepository(Protocol):
    """Persistence interface for activities."""

    def create_activity(self, user_id: UUID, payload: dict[str, object]) -> Activity:
        """Create and return an activity."""

    def list_activities(self, user_id: UUID, activity_date: date) -> list[Activity]:
        """Return activities for a date, newest first."""

    def list_activities_since(self, user_id: UUID, start: date) -> list[Activity]:
        """Return activities on or after a date, newest first."""

    def delete_activity(self, user_id: UUID, activity_id: UUID) -> None:
        """Delete an activity owned by the user."""


@dataclass
class ActivityService:
    """Logs activities with MET-based calorie estimates."""

    repository: ActivityRepository
    profiles: ProfileRepository

    def estimate(
        self,
        session: UserSession,
        activity_type: str,
        duration_minutes: int,
        intensity: str = "moderate",
    ) -> int:
        """Preview calories burned; 0 when the estimate can't be made."""
        profile = self.profiles.get_profile(session.user_id)
        weight_kg = profile.weight_kg if profile else None
        return estimate_calories_burned(
            activity_type, duration_minutes, intensity, weight_kg
        )

    def log_activity(  # noqa: PLR0913
        self,
        session: UserSession,
        activity_type: str,
        duration_minutes: int,
        intensity: str,
        activity_date: date,
        notes: str | None = None,
    ) -> Activity:
        """Estimate calories burned and persist the activity."""
        if activity_type not in ACTIVITY_METS:
            raise UnknownActivityTypeError(f"Unknown activity type: {activity_type}")
        if intensity not in INTENSITY_MULTIPLIERS:
            raise UnknownActivityTypeError(f"Unknown intensity: {intensity}")
        profile = self.profiles.get_profile(session.user_id)
        if profile is None or not profile.weight_kg:
            raise ProfileIncompleteError(
                "Add your weight to your profile to log activities"
            )

        calories = estimate_calories_burned(
            activity_type, duration_minutes, intensity, profile.weight_kg
        )
        activity = self.repository.create_activity(
            session.user_id,
            {
                "activity_type": activity_type,
                "duration_minutes": duration_minutes,
                "intensity": intensity,
                "calories_burned": calories,
                "notes": notes or None,
                "activity_date": activity_date.isoformat(),
            },
        )
        _logger.info(
            "Activity logged: type=%s minutes=%s calories=%s",
            activity_type,
            duration_minutes,
            calories,
        )
        return activity

    def list_activities(self, session: UserSession, day: date) -> list[Activity]:
        """Return the caller's activities for a date."""
        return self.repository.list_activities(session.user_id, day)

    def delete_activity(self, session: UserSession, activity_id: UUID) -> None:
        """Delete one of the caller's activities."""
        self.repository.delete_activity(session.user_id, activity_id)
