"""
notices/service.py -- Ownership-scoped notice operations.

NoticeService sits between the routes and NoticeStore. Every method takes the
identity resolved by the auth gate as an explicit argument; the service never
looks at tokens or requests.

Rules enforced here:
  - create: owner is always the caller. The request body cannot name another owner.
  - list:   any authenticated caller sees every notice. Owners are expanded to
            name and email through the credential store, never the password hash.
  - update/delete: succeed only for the owner. Missing and not-yours both raise
            NotFoundError with the same message.
"""

import logging
from typing import Optional

from auth.store import UserStore
from core.exceptions import NotFoundError
from notices.models import Notice, NoticeOwner, NoticeView
from notices.store import NoticeStore

logger = logging.getLogger("noticeboard.notices")


class NoticeService:
    def __init__(self, store: NoticeStore, user_store: UserStore) -> None:
        self.store = store
        self.user_store = user_store

    def create(self, user_id: int, title: str, body: str, category: str) -> int:
        """Persist a new notice owned by user_id and return its id.

        The owner's existence is not checked. A token for a deleted user still
        creates a notice, which then lists with owner=None.
        """
        notice_id = self.store.create_notice(Notice(title=title, body=body, category=category, owner_id=user_id))
        logger.info("Notice created (id=%d, owner_id=%d)", notice_id, user_id)
        return notice_id

    def list_notices(self, category: Optional[str] = None) -> list[NoticeView]:
        """Return all notices (optionally one category) with owners expanded."""
        notices = self.store.list_notices(category=category)
        owners = self.user_store.get_many_by_id(n.owner_id for n in notices)
        views = []
        for notice in notices:
            user = owners.get(notice.owner_id)
            owner = NoticeOwner(id=user.id, name=user.name, email=user.email) if user is not None else None
            views.append(NoticeView(notice=notice, owner=owner))
        return views

    def update(self, user_id: int, notice_id: int, title: str, body: str, category: str) -> None:
        """Overwrite title, body and category. Raises NotFoundError unless user_id owns the notice."""
        if not self.store.update_notice(notice_id, user_id, title=title, body=body, category=category):
            logger.info("Notice update refused (id=%d, caller=%d)", notice_id, user_id)
            raise NotFoundError()
        logger.info("Notice updated (id=%d)", notice_id)

    def delete(self, user_id: int, notice_id: int) -> None:
        """Remove the notice permanently. Raises NotFoundError unless user_id owns it."""
        if not self.store.delete_notice(notice_id, user_id):
            logger.info("Notice delete refused (id=%d, caller=%d)", notice_id, user_id)
            raise NotFoundError()
        logger.info("Notice deleted (id=%d)", notice_id)
