"""User service for registration, lookup and profile edits."""

import logging

from taskvault.core import db_client
from taskvault.core.errors import DuplicateIdentity, NotFound, ValidationFailed
from taskvault.core.logging import log_with_user_context, span
from taskvault.core.passwords import hash_password
from taskvault.domain.user import PublicUser, User, normalize_email, validate_user_fields


logger = logging.getLogger(__name__)

COLLECTION = "users"


async def register(*, name: str, email: str, password: str) -> PublicUser:
    """Create a new user account.

    Args:
        name: Display name
        email: Email address; stored trimmed and lower-cased
        password: Plain-text password, hashed before storage

    Returns:
        Public fields of the created user

    Raises:
        ValidationFailed: If any field is missing or invalid
        DuplicateIdentity: If the email is already registered
        db_client.DatabaseError: If database operation fails
    """
    with span("user_service.register"):
        errors = validate_user_fields(name=name, email=email, password=password, check_password=True)
        if errors:
            raise ValidationFailed(errors)

        normalized = normalize_email(email)

        # Guard: Check if user already exists
        if await find_by_email(normalized) is not None:
            logger.warning("register_duplicate_email")
            raise DuplicateIdentity

        user_data = {
            "name": name.strip(),
            "email": normalized,
            "password_hash": await hash_password(password),
        }
        try:
            record = await db_client.create_record(collection=COLLECTION, data=user_data)
        except db_client.DuplicateRecordError as e:
            # Lost a race against a concurrent registration of the same email
            logger.warning("register_duplicate_email_race")
            raise DuplicateIdentity from e

        user = User(**record)
        log_with_user_context(logger, "info", "user_registered", user_id=user.id)
        return user.public()


async def get_credentials(email: str) -> User | None:
    """Get the stored user, password hash included, for a login attempt.

    Only the login path reads the hash; every other lookup returns PublicUser.
    """
    record = await db_client.get_first_record(
        collection=COLLECTION,
        where=db_client.eq("email", normalize_email(email)),
    )
    return User(**record) if record else None


async def find_by_email(email: str) -> PublicUser | None:
    """Get user by email, or None if no user has it."""
    user = await get_credentials(email)
    return user.public() if user else None


async def find_by_id(user_id: str) -> PublicUser | None:
    """Get user by ID, or None if not found."""
    try:
        record = await db_client.get_record(collection=COLLECTION, record_id=user_id)
    except db_client.RecordNotFoundError:
        return None
    return User(**record).public()


async def get_public_user(*, user_id: str) -> PublicUser:
    """Public fields of a user.

    Raises:
        NotFound: If the user no longer exists
    """
    user = await find_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def update_profile(*, user_id: str, name: str, email: str) -> PublicUser:
    """Replace a user's name and email.

    Raises:
        ValidationFailed: If name or email is invalid
        DuplicateIdentity: If the email belongs to another user
        NotFound: If the user does not exist
    """
    with span("user_service.update_profile"):
        errors = validate_user_fields(name=name, email=email)
        if errors:
            raise ValidationFailed(errors)

        normalized = normalize_email(email)
        holder = await find_by_email(normalized)
        if holder is not None and holder.id != user_id:
            log_with_user_context(logger, "warning", "profile_email_taken", user_id=user_id)
            raise DuplicateIdentity

        try:
            record = await db_client.update_record(
                collection=COLLECTION,
                record_id=user_id,
                data={"name": name.strip(), "email": normalized},
            )
        except db_client.RecordNotFoundError as e:
            raise NotFound("User not found") from e
        except db_client.DuplicateRecordError as e:
            raise DuplicateIdentity from e

        log_with_user_context(logger, "info", "profile_updated", user_id=user_id)
        return User(**record).public()
