"""User domain models and validation."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError

from taskvault.core.config import constants
from taskvault.core.errors import FieldError


_email_adapter: TypeAdapter[EmailStr] = TypeAdapter(EmailStr)


class User(BaseModel):
    """User record as stored, including the password hash."""

    id: str = Field(..., description="Opaque user ID")
    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="Normalized (lower-case) email address")
    password_hash: str = Field(..., repr=False, description="argon2id hash; never serialized")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")

    def public(self) -> "PublicUser":
        return PublicUser(id=self.id, name=self.name, email=self.email, created_at=self.created)


class PublicUser(BaseModel):
    """User fields safe to return to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    created_at: str = Field(..., alias="createdAt")


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address for storage and lookup."""
    return email.strip().lower()


def validate_name(name: str | None) -> list[FieldError]:
    if name is None or not name.strip():
        return [FieldError(field="name", message="Name is required")]
    if len(name.strip()) > constants.MAX_NAME_LENGTH:
        return [FieldError(field="name", message=f"Name too long (max {constants.MAX_NAME_LENGTH} characters)")]
    return []


def validate_email(email: str | None) -> list[FieldError]:
    if email is None or not email.strip():
        return [FieldError(field="email", message="Please include a valid email")]
    try:
        _email_adapter.validate_python(email.strip())
    except ValidationError:
        return [FieldError(field="email", message="Please include a valid email")]
    return []


def validate_user_fields(
    *,
    name: str | None,
    email: str | None,
    password: str | None = None,
    check_password: bool = False,
) -> list[FieldError]:
    """Validate user input, returning every field error found.

    Args:
        name: Display name
        email: Email address
        password: Plain-text password (only checked when check_password is set)
        check_password: Whether the password length rule applies

    Returns:
        List of field errors, empty when the input is valid
    """
    errors = [*validate_name(name), *validate_email(email)]
    if check_password and (password is None or len(password) < constants.MIN_PASSWORD_LENGTH):
        errors.append(
            FieldError(
                field="password",
                message=f"Please enter a password with {constants.MIN_PASSWORD_LENGTH} or more characters",
            )
        )
    return errors


def validate_login_fields(*, email: str | None, password: str | None) -> list[FieldError]:
    """Shape check for a login attempt; says nothing about whether the credentials are right."""
    errors = validate_email(email)
    if password is None:
        errors.append(FieldError(field="password", message="Password is required"))
    return errors
