"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in notices/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or notices/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered notice board user.

    email is the login lookup key. It is not unique unless the store was
    created with enforce_unique_email=True.

    hashed_password is the bcrypt hash. The plaintext is never stored and the
    hash is never serialized into an API response.

    id is None before the record is written to the database.
    """

    name: str
    email: str
    hashed_password: str
    phone_number: str = ""
    department: str = ""
    id: int | None = None
    created_at: str | None = None
