"""Bearer-token guard for protected routes."""

import logging

from fastapi import Request
from pydantic import BaseModel, ConfigDict

from taskvault.core.config import constants
from taskvault.core.errors import Unauthenticated
from taskvault.services import session_service


logger = logging.getLogger(__name__)


class AuthContext(BaseModel):
    """Identity resolved from a verified session token, passed explicitly to services."""

    model_config = ConfigDict(frozen=True)

    user_id: str


def extract_bearer_token(authorization: str | None) -> str:
    """Pull the token out of an Authorization header value.

    Raises:
        Unauthenticated: If the header is absent or not a bearer credential
    """
    if not authorization:
        raise Unauthenticated
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != constants.AUTH_SCHEME.lower() or not token.strip():
        raise Unauthenticated
    return token.strip()


async def require_user(request: Request) -> AuthContext:
    """Check for a valid session token and resolve the caller's identity."""
    try:
        token = extract_bearer_token(request.headers.get("Authorization"))
        user_id = session_service.verify(token)
    except Unauthenticated as err:
        logger.warning("auth_rejected", extra={"path": request.url.path, "reason": err.code})
        raise

    return AuthContext(user_id=user_id)
