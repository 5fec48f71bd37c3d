"""Resolve bearer tokens to user sessions with Supabase Auth."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import AuthError, Client

from health_tracker.domain.sessions import UserSession

_logger = logging.getLogger(__name__)


class SessionResolver(Protocol):
    """Interface for turning an access token into a session."""

    def resolve(self, access_token: str) -> UserSession | None:
        """Return the session for a valid token, else None."""


@dataclass
class SupabaseSessionResolver(SessionResolver):
    """Validates access tokens against Supabase Auth."""

    client: Client

    def resolve(self, access_token: str) -> UserSession | None:
        """Return the session for a valid token, else None."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            _logger.info("Rejected access token: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return UserSession(user_id=UUID(response.user.id), access_token=access_token)
