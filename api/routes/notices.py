"""
api/routes/notices.py -- Notice CRUD routes.

Routes:
  POST   /notices              -- create a notice owned by the caller
  GET    /notices              -- list all notices, optional ?category=
  PUT    /notices/{notice_id}  -- overwrite title/body/category (owner only)
  DELETE /notices/{notice_id}  -- delete (owner only)

Every route goes through get_current_identity, which resolves the caller's
user id or fails with 401/400 before the handler body runs. The handlers pass
that id to NoticeService; ownership is decided there and in the store, not
here. A notice owned by someone else answers 404 exactly like a missing one.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from api.models import MessageResponse, NoticeResponse, NoticeWrite
from auth.dependencies import get_current_identity
from notices.service import NoticeService

router = APIRouter()


def _service(request: Request) -> NoticeService:
    return request.app.state.notice_service


@router.post("/notices", response_model=MessageResponse, status_code=201)
def create_notice(
    request: Request,
    body: NoticeWrite,
    user_id: int = Depends(get_current_identity),
) -> MessageResponse:
    """Create a notice. The owner is the authenticated caller."""
    _service(request).create(user_id, title=body.title, body=body.body, category=body.category)
    return MessageResponse(msg="Notice Created Successfully")


@router.get("/notices", response_model=list[NoticeResponse])
def list_notices(
    request: Request,
    category: Optional[str] = None,
    user_id: int = Depends(get_current_identity),
) -> list[NoticeResponse]:
    """List every notice with its owner's name and email.

    Not filtered by owner: any authenticated user sees the whole board.
    """
    views = _service(request).list_notices(category=category)
    return [NoticeResponse.from_view(v) for v in views]


@router.put("/notices/{notice_id}", response_model=MessageResponse)
def update_notice(
    request: Request,
    notice_id: int,
    body: NoticeWrite,
    user_id: int = Depends(get_current_identity),
) -> MessageResponse:
    _service(request).update(user_id, notice_id, title=body.title, body=body.body, category=body.category)
    return MessageResponse(msg="Notice Updated")


@router.delete("/notices/{notice_id}", response_model=MessageResponse)
def delete_notice(
    request: Request,
    notice_id: int,
    user_id: int = Depends(get_current_identity),
) -> MessageResponse:
    _service(request).delete(user_id, notice_id)
    return MessageResponse(msg="Notice Deleted")
