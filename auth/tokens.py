"""
auth/tokens.py -- Password hashing, bearer token signing, and the login check.

Security design decisions:
  Passwords: bcrypt with a fixed work factor of 10 rounds. The salt is
       generated per hash and embedded in the hash string, so two users with
       the same password get different stored values.

  Tokens: python-jose with HS256. The payload is exactly {"sub": "<user id>"}.
       No role, no username, no permissions. Possession of a valid token for
       user U authorizes every action scoped to U.
       An "exp" claim is only added when TokenService is built with
       expire_seconds > 0. The default (0) issues tokens that never expire.

  Signing key: passed to TokenService at construction. api/main.py builds the
       one instance in its lifespan from core.config.get_settings(); tests
       build their own with a throwaway key. Nothing in this module reads
       configuration on import.

  Login: authenticate_user() raises on a wrong password before any token is
       issued. Callers must not reach TokenService.issue() unless it returned.

Layer rule: no imports from api/ or notices/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from core.exceptions import InvalidPasswordError, InvalidTokenError, UserNotFoundError

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("noticeboard.auth")

_ALGORITHM = "HS256"
_BCRYPT_ROUNDS = 10

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    bcrypt only looks at the first 72 bytes of input. The API layer caps
    password length well below that.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    A stored value that is not a bcrypt hash at all counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# JWT issue / verify
# ---------------------------------------------------------------------------


class TokenService:
    """Issues and verifies signed bearer tokens that carry a user id.

    Usage:
        tokens = TokenService(settings.secret_key, settings.token_expire_seconds)
        token = tokens.issue(42)
        tokens.verify(token)  # -> 42
    """

    def __init__(self, secret_key: str, expire_seconds: int = 0) -> None:
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key.")
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def issue(self, user_id: int) -> str:
        """Sign a token whose subject is user_id.

        JWT requires "sub" to be a string, so the id is stringified here and
        converted back in verify().
        """
        payload: dict = {"sub": str(user_id)}
        if self.expire_seconds > 0:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=self.expire_seconds)
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str | None) -> int:
        """Return the user id carried by token.

        Raises InvalidTokenError when the token is absent, the signature does
        not match, the token has expired, or the payload has no integer
        subject.
        """
        if not token:
            raise InvalidTokenError()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWTError as exc:
            raise InvalidTokenError() from exc
        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc


# ---------------------------------------------------------------------------
# Login check
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, email: str, password: str) -> User:
    """Return the user registered under email if password matches.

    Raises UserNotFoundError when no user has that email and
    InvalidPasswordError when the password does not match. Both are raised
    before the caller gets a User, so no token can be issued for a failed
    login.
    """
    user = store.get_by_email(email)
    if user is None:
        logger.info("Login rejected: unknown email")
        raise UserNotFoundError()
    if not verify_password(password, user.hashed_password):
        logger.info("Login rejected: wrong password for user_id=%s", user.id)
        raise InvalidPasswordError()
    return user
