"""
auth/dependencies.py -- FastAPI Depends() helper for authentication.

The token travels in the Authorization header. Both forms are accepted:
  Authorization: <token>          -- what the login response header returns
  Authorization: Bearer <token>   -- conventional API clients

get_current_identity() is a pure gate. It verifies the token and hands back
the user id it carries. It never reads the user or notice tables, so a token
for a user that no longer exists still resolves to that id.

Layer rule: no imports from api/ or notices/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.tokens import TokenService
from core.exceptions import UnauthenticatedError

_BEARER_PREFIX = "Bearer "


def _extract_token(request: Request) -> str:
    """Return the raw token from the Authorization header, or "" if none was sent."""
    header = request.headers.get("Authorization", "").strip()
    if header.startswith(_BEARER_PREFIX):
        return header[len(_BEARER_PREFIX) :].strip()
    return header


def get_current_identity(request: Request) -> int:
    """Require a valid token. Returns the authenticated user id.

    Raises UnauthenticatedError (401) when no token is present and
    InvalidTokenError (400) when the token does not verify. On success the
    id is also attached to request.state.user_id for downstream handlers and
    logging.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user_id: int = Depends(get_current_identity)): ...
    """
    token = _extract_token(request)
    if not token:
        raise UnauthenticatedError()
    token_service: TokenService = request.app.state.token_service
    user_id = token_service.verify(token)
    request.state.user_id = user_id
    return user_id
