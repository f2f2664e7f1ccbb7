"""
core/exceptions.py -- Domain error taxonomy for the notice board.

Stores and services raise these; api/main.py owns the single exception
handler that turns them into the JSON error envelope. Nothing below the API
layer builds HTTP responses or raises HTTPException.

Layer rule: core/ is the kernel. No imports from api/, auth/, or notices/.
"""

from typing import Optional


class NoticeBoardError(Exception):
    """Base class for every recoverable, request-scoped failure.

    status_code is the HTTP status the API layer reports; code is the
    machine-readable error code placed in the envelope.
    """

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(NoticeBoardError):
    """No token was presented on a protected route."""

    status_code = 401
    code = "unauthenticated"
    default_message = "Access denied."


class InvalidTokenError(NoticeBoardError):
    """The token is malformed, expired, or its signature does not verify."""

    status_code = 400
    code = "invalid_token"
    default_message = "Invalid token."


class UserNotFoundError(NoticeBoardError):
    status_code = 404
    code = "user_not_found"
    default_message = "User not found."


class InvalidPasswordError(NoticeBoardError):
    status_code = 401
    code = "invalid_password"
    default_message = "Invalid password."


class NotFoundError(NoticeBoardError):
    """The notice does not exist or belongs to someone else.

    The two cases look the same to the caller.
    """

    status_code = 404
    code = "not_found"
    default_message = "Notice not found."


class ConflictError(NoticeBoardError):
    status_code = 409
    code = "conflict"
    default_message = "A user with that email already exists."
