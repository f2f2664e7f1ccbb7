"""
notices/models.py -- Domain dataclasses for notice board entries.

These are pure data containers with zero logic. The ownership rules live in
notices/service.py and the owner-filtered SQL lives in notices/store.py.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Notice:
    """A single entry on the notice board.

    owner_id is the id of the user who created the notice. It is set once at
    insert and no store method ever writes it again.

    created_at is stamped by the store at insert (ISO 8601 UTC) and is not
    touched by updates.

    id is None before the record is written to the database.
    """

    title: str
    body: str
    category: str
    owner_id: int
    id: Optional[int] = None
    created_at: str = ""


@dataclass
class NoticeOwner:
    """The public view of a notice's owner. Name and email only."""

    id: int
    name: str
    email: str


@dataclass
class NoticeView:
    """A notice with its owner expanded for listing.

    owner is None when the owning user record no longer exists.
    """

    notice: Notice
    owner: Optional[NoticeOwner]
