"""
api/routes/auth.py -- Registration and login endpoints.

Both routes are public. They talk to the credential store, the password
hasher and the token service directly and never pass through the auth gate.

Routes:
  POST /register  -- hash the password, store the user, 201 {msg}
  POST /login     -- check credentials, 200 {token} + Authorization header

Login failure order:
  unknown email  -> 404 user_not_found
  wrong password -> 401 invalid_password, returned before any token is signed
  Both come from authenticate_user() as exceptions, so the token line below
  is unreachable on failure.

Security:
  Cache-Control: no-store on every login response, success or failure.
  Login is rate limited per client address (LOGIN_RATE_LIMIT).
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import ErrorDetail, ErrorResponse, LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from auth.models import User
from auth.store import UserStore
from auth.tokens import TokenService, authenticate_user, hash_password
from core.config import get_settings
from core.exceptions import NoticeBoardError

logger = logging.getLogger("noticeboard.api.auth")

_settings = get_settings()

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(request: Request, body: RegisterRequest) -> MessageResponse:
    """Create a user account.

    No duplicate-email check unless ENFORCE_UNIQUE_EMAIL is set (409 then).
    Any other store failure falls through to the generic 500 handler.
    """
    user_store: UserStore = request.app.state.user_store
    user = User(
        name=body.name,
        email=body.email,
        hashed_password=hash_password(body.password),
        phone_number=body.phone_number,
        department=body.department,
    )
    user_id = user_store.create_user(user)
    logger.info("User registered (id=%d)", user_id)
    return MessageResponse(msg="Registered Successfully")


@router.post("/login", response_model=LoginResponse)
@limiter.limit(_settings.login_rate_limit)  # under @router.post so the registered endpoint is the limited wrapper
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Verify email and password and return a bearer token.

    The token is returned twice: as "token" in the body and as the
    Authorization response header, ready to be sent back verbatim.
    """
    user_store: UserStore = request.app.state.user_store
    token_service: TokenService = request.app.state.token_service
    try:
        user = authenticate_user(user_store, body.email, body.password)
    except NoticeBoardError as exc:
        resp = JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=ErrorDetail(code=exc.code, message=exc.message)).model_dump(),
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    token = token_service.issue(user.id)
    logger.info("Login succeeded (user_id=%d)", user.id)
    resp = JSONResponse(status_code=200, content=LoginResponse(token=token).model_dump())
    resp.headers["Authorization"] = token
    resp.headers["Cache-Control"] = "no-store"
    return resp
