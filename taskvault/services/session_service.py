"""Session token issuance, verification and password login."""

import logging

from itsdangerous import BadPayload, BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import BaseModel

from taskvault.core.config import constants, settings
from taskvault.core.errors import ExpiredToken, InvalidCredentials, InvalidToken, MalformedToken, ValidationFailed
from taskvault.core.logging import log_with_user_context, span
from taskvault.core.passwords import burn_verification, verify_password
from taskvault.domain.user import PublicUser, validate_login_fields
from taskvault.services import user_service


logger = logging.getLogger(__name__)

# payload.timestamp.signature
_MIN_TOKEN_SEGMENTS = 3


class Session(BaseModel):
    """A freshly issued token and the user it belongs to."""

    token: str
    user: PublicUser


def _serializer() -> URLSafeTimedSerializer:
    secret = settings.require_credential("secret_key", "Session signing")
    return URLSafeTimedSerializer(secret, salt=constants.SESSION_SALT)


def issue(user_id: str) -> str:
    """Sign a session token for the user; it expires SESSION_MAX_AGE_SECONDS after issue."""
    return _serializer().dumps({"user_id": user_id})


def verify(token: str | None) -> str:
    """Validate a session token and return the user ID it carries.

    Raises:
        MalformedToken: If the token is empty or not shaped like a session token
        InvalidToken: If the signature does not match the server secret
        ExpiredToken: If the token is older than the session lifetime
    """
    if not token or len(token.split(".")) < _MIN_TOKEN_SEGMENTS:
        raise MalformedToken

    try:
        payload = _serializer().loads(token, max_age=settings.session_max_age_seconds)
    except SignatureExpired as err:
        logger.info("session_token_expired")
        raise ExpiredToken from err
    except BadSignature as err:
        logger.warning("session_token_bad_signature")
        raise InvalidToken from err
    except BadPayload as err:
        logger.warning("session_token_bad_payload")
        raise MalformedToken from err

    user_id = payload.get("user_id") if isinstance(payload, dict) else None
    if not isinstance(user_id, str) or not user_id:
        raise MalformedToken
    return user_id


async def login(*, email: str, password: str | None) -> Session:
    """Check credentials and issue a session.

    Unknown email and wrong password raise the same error after the same amount
    of hashing work.

    Raises:
        ValidationFailed: If the email is malformed or the password is missing
        InvalidCredentials: If the email is unknown or the password does not match
    """
    with span("session_service.login"):
        errors = validate_login_fields(email=email, password=password)
        if errors or password is None:
            raise ValidationFailed(errors)

        user = await user_service.get_credentials(email)
        if user is None:
            await burn_verification(password)
            logger.info("login_failed")
            raise InvalidCredentials

        if not await verify_password(user.password_hash, password):
            log_with_user_context(logger, "info", "login_failed", user_id=user.id)
            raise InvalidCredentials

        log_with_user_context(logger, "info", "login_succeeded", user_id=user.id)
        return Session(token=issue(user.id), user=user.public())


async def register(*, name: str, email: str, password: str) -> Session:
    """Register a user and log them straight in."""
    user = await user_service.register(name=name, email=email, password=password)
    return Session(token=issue(user.id), user=user)
