"""Profile business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from health_tracker.domain.profiles import Profile
from health_tracker.domain.sessions import UserSession


class ProfileNotFoundError(LookupError):
    """The caller has no profile yet."""


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create and return a profile."""

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Apply a partial update and return the profile."""


@dataclass
class ProfileService:
    """Application service for profile reads and edits."""

    repository: ProfileRepository

    def get_profile(self, session: UserSession) -> Profile | None:
        """Return the caller's profile."""
        return self.repository.get_profile(session.user_id)

    def ensure_profile(
        self, session: UserSession, full_name: str | None = None
    ) -> Profile:
        """Create the caller's profile at account setup if it doesn't exist."""
        existing = self.repository.get_profile(session.user_id)
        if existing:
            return existing
        return self.repository.create_profile(
            session.user_id, {"full_name": full_name}
        )

    def update_profile(
        self, session: UserSession, changes: dict[str, object]
    ) -> Profile:
        """Apply explicit user edits to the caller's existing profile."""
        if self.repository.get_profile(session.user_id) is None:
            raise ProfileNotFoundError("Profile not found")
        return self.repository.update_profile(session.user_id, changes)
