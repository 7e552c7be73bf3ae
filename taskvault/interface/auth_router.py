"""Registration, login and current-user routes."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from taskvault.domain.create_models import LoginRequest, RegisterRequest
from taskvault.interface.auth_gate import AuthContext, require_user
from taskvault.interface.responses import success
from taskvault.services import session_service, user_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register")
async def post_register(body: RegisterRequest) -> JSONResponse:
    """Create an account and return a session token for it."""
    session = await session_service.register(name=body.name, email=body.email, password=body.password)
    return success(
        status.HTTP_201_CREATED,
        token=session.token,
        user=session.user.model_dump(include={"id", "name", "email"}),
    )


@router.post("/login")
async def post_login(body: LoginRequest) -> JSONResponse:
    """Exchange email and password for a session token."""
    session = await session_service.login(email=body.email, password=body.password)
    return success(token=session.token, user=session.user.model_dump(include={"id", "name", "email"}))


@router.get("/me")
async def get_me(auth: AuthContext = Depends(require_user)) -> JSONResponse:
    """Return the caller's user record."""
    user = await user_service.get_public_user(user_id=auth.user_id)
    return success(data=user.model_dump(by_alias=True))
