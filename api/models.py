"""
API request and response models for the notice board REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
notices/models.py, which own the internal domain representation. Route
handlers map between the two.

No response model has a password field. The User dataclass carries the hash;
nothing here can serialize it.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from notices.models import NoticeView

# ---------------------------------------------------------------------------
# Auth -- request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /register. Values are stored as given."""

    name: str
    email: str
    password: str
    phone_number: str
    department: str

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        """bcrypt only accepts 72 bytes of input. Multi-byte characters count per byte."""
        if len(value.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes when UTF-8 encoded")
        return value


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    email: str
    # No length cap: an over-long wrong password is a 401 like any other mismatch.
    password: str


# ---------------------------------------------------------------------------
# Auth -- response models
# ---------------------------------------------------------------------------


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str


class MessageResponse(BaseModel):
    """Confirmation body for register, create, update and delete."""

    model_config = ConfigDict(frozen=True)

    msg: str


# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------


class NoticeWrite(BaseModel):
    """Request body for POST /notices and PUT /notices/{id}.

    There is no owner field. The owner is always the authenticated caller.
    """

    title: str
    body: str
    category: str


class OwnerResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str


class NoticeResponse(BaseModel):
    """One row of GET /notices with the owner expanded to name and email."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    body: str
    category: str
    created_at: str
    owner: Optional[OwnerResponse]

    @classmethod
    def from_view(cls, view: NoticeView) -> "NoticeResponse":
        """Build a NoticeResponse from a service-layer NoticeView."""
        owner = None
        if view.owner is not None:
            owner = OwnerResponse(id=view.owner.id, name=view.owner.name, email=view.owner.email)
        return cls(
            id=view.notice.id,
            title=view.notice.title,
            body=view.notice.body,
            category=view.notice.category,
            created_at=view.notice.created_at,
            owner=owner,
        )


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
    components: dict[str, str]
