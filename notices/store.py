"""
notices/store.py -- SQLAlchemy-backed persistence layer for notices.

Uses SQLAlchemy Core (not ORM) so the domain dataclasses in notices/models.py
remain the authoritative domain representation.

Pattern: Repository + Data Mapper. NoticeStore is the repository, _row_to_notice
is the mapper. Route handlers never touch SQL directly.

Ownership:
  update_notice() and delete_notice() take the caller's user id and put it in
  the WHERE clause next to the notice id. One statement both checks ownership
  and applies the change, so there is no window between a lookup and the
  write. A rowcount of 0 means "no such notice for this owner" -- the store
  cannot tell, and does not try to tell, a missing notice from someone else's.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = NoticeStore()                               # SQLite default
    store = NoticeStore("postgresql://user:pw@host/db") # PostgreSQL
    notice_id = store.create_notice(Notice(title="T", body="B", category="C", owner_id=1))
    store.list_notices(category="C")
    store.update_notice(notice_id, owner_id=1, title="T2", body="B", category="C")
    store.delete_notice(notice_id, owner_id=1)
    store.close()
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, event
from sqlalchemy.engine import Engine

from notices.models import Notice

_DEFAULT_DB_URL = "sqlite:///noticeboard.db"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

# owner_id is not a foreign key. Users live in auth/store.py with their own
# metadata, and a notice may outlive its owner's record.
_notices = Table(
    "notices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("body", Text, nullable=False),
    Column("category", String(100), nullable=False, index=True),
    Column("created_at", String(32), nullable=False),
    Column("owner_id", Integer, nullable=False, index=True),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so list requests are not blocked by inserts."""
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class NoticeStore:
    """Repository for Notice entities."""

    def __init__(self, db_url: str = _DEFAULT_DB_URL) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        metadata.create_all(self.engine)

    def create_notice(self, notice: Notice) -> int:
        """Insert a notice and return its ID.

        created_at is always stamped here. Any value on the dataclass is
        ignored so a caller cannot backdate a notice.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _notices.insert().values(
                    title=notice.title,
                    body=notice.body,
                    category=notice.category,
                    created_at=_now_iso(),
                    owner_id=notice.owner_id,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def list_notices(self, category: Optional[str] = None) -> list[Notice]:
        """Return every notice, oldest first, optionally restricted to one category.

        category is matched exactly. None (or "") means no filter.
        """
        query = _notices.select()
        if category:
            query = query.where(_notices.c.category == category)
        with self.engine.connect() as conn:
            rows = conn.execute(query.order_by(_notices.c.id)).fetchall()
        return [_row_to_notice(r) for r in rows]

    def update_notice(self, notice_id: int, owner_id: int, title: str, body: str, category: str) -> bool:
        """Overwrite title, body and category of a notice the caller owns.

        id, owner_id and created_at are never part of the SET clause.
        Returns True if a row was updated, False if not found or wrong owner.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _notices.update()
                .where((_notices.c.id == notice_id) & (_notices.c.owner_id == owner_id))
                .values(title=title, body=body, category=category)
            )
            conn.commit()
        return result.rowcount > 0

    def delete_notice(self, notice_id: int, owner_id: int) -> bool:
        """Permanently delete a notice the caller owns.

        Returns True if deleted, False if not found or wrong owner.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _notices.delete().where((_notices.c.id == notice_id) & (_notices.c.owner_id == owner_id))
            )
            conn.commit()
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern -- DB row -> domain dataclass)
# ---------------------------------------------------------------------------


def _row_to_notice(row) -> Notice:
    return Notice(
        id=row.id,
        title=row.title,
        body=row.body,
        category=row.category,
        created_at=row.created_at,
        owner_id=row.owner_id,
    )
