"""Request-scoped user session."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserSession:
    """Authenticated caller passed explicitly into every service call."""

    user_id: UUID
    access_token: str
