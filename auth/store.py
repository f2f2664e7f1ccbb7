"""
auth/store.py -- SQLAlchemy Core persistence layer for users (the credential store).

Pattern: Repository + Data Mapper (same as notices/store.py).
UserStore is the repository; _row_to_user is the mapper.
Route and dependency code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

Email uniqueness:
  The users table has no UNIQUE constraint on email, so databases created
  before the switch was turned on keep loading. When enforce_unique_email is
  set, create_user() checks for an existing record first and raises
  ConflictError. The check and the insert are two statements; two concurrent
  registrations for the same email can both pass it.

Users are never updated or deleted through the API. The store only exposes
inserts and lookups.

Layer rule: no imports from api/ or notices/. Import from core/ is allowed.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, event, select, text
from sqlalchemy.engine import Engine

from auth.models import User
from core.exceptions import ConflictError

_DEFAULT_DB_URL = "sqlite:///noticeboard.db"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, index=True),
    Column("hashed_password", Text, nullable=False),
    Column("phone_number", String(50), nullable=False, server_default=""),
    Column("department", String(255), nullable=False, server_default=""),
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore()
        uid = store.create_user(User(name="Ada", email="ada@example.com", hashed_password=hash_password("s3cret")))
        user = store.get_by_email("ada@example.com")
        store.close()
    """

    def __init__(self, db_url: str = _DEFAULT_DB_URL, enforce_unique_email: bool = False) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        self.enforce_unique_email = enforce_unique_email
        _metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> int:
        """Insert a new user and return its assigned database ID.

        Raises ConflictError if enforce_unique_email is set and a user with
        the same email already exists. The record is stored exactly as given;
        the caller is responsible for hashing the password first.
        """
        if self.enforce_unique_email and self.get_by_email(user.email) is not None:
            raise ConflictError()
        with self.engine.connect() as conn:
            result = conn.execute(
                _users.insert().values(
                    name=user.name,
                    email=user.email,
                    hashed_password=user.hashed_password,
                    phone_number=user.phone_number,
                    department=user.department,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found.

        When several records share the email, the earliest registration wins.
        """
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.email == email).order_by(_users.c.id).limit(1)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_many_by_id(self, user_ids: Iterable[int]) -> dict[int, User]:
        """Return {id: User} for every id that exists. Missing ids are simply absent.

        Used to expand notice owners in one query instead of one per notice.
        """
        ids = set(user_ids)
        if not ids:
            return {}
        with self.engine.connect() as conn:
            rows = conn.execute(select(_users).where(_users.c.id.in_(ids))).fetchall()
        return {row.id: _row_to_user(row) for row in rows}

    def ping(self) -> bool:
        """Return True if the database answers a trivial query. Used by /health."""
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        hashed_password=row.hashed_password,
        phone_number=row.phone_number,
        department=row.department,
        created_at=row.created_at,
    )
