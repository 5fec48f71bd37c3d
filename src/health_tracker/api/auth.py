"""Bearer-token authentication for user-scoped endpoints."""

from fastapi import Depends, Header, HTTPException, Request, status

from health_tracker.adapters.supabase_session_resolver import SessionResolver
from health_tracker.domain.sessions import UserSession

_BEARER_PREFIX = "bearer "


def _get_session_resolver(request: Request) -> SessionResolver:
    return request.app.state.container.session_resolver


def parse_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    if not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None


async def require_session(
    authorization: str | None = Header(default=None),
    resolver: SessionResolver = Depends(_get_session_resolver),
) -> UserSession:
    """Resolve the caller's session or reject the request."""
    token = parse_bearer_token(authorization)
    session = resolver.resolve(token) if token else None
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
