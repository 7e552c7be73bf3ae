"""Error taxonomy shared by services and the HTTP layer."""

from typing import Any

from pydantic import BaseModel


class ErrorCode:
    """Error codes for specific error conditions."""

    # Input errors
    ERR_VALIDATION_FAILED = "ERR_VALIDATION_FAILED"
    ERR_INVALID_PAGINATION = "ERR_INVALID_PAGINATION"

    # Identity errors
    ERR_USER_ALREADY_EXISTS = "ERR_USER_ALREADY_EXISTS"
    ERR_INVALID_CREDENTIALS = "ERR_INVALID_CREDENTIALS"

    # Session errors
    ERR_UNAUTHENTICATED = "ERR_UNAUTHENTICATED"
    ERR_INVALID_TOKEN = "ERR_INVALID_TOKEN"
    ERR_EXPIRED_TOKEN = "ERR_EXPIRED_TOKEN"
    ERR_MALFORMED_TOKEN = "ERR_MALFORMED_TOKEN"

    # Resource errors
    ERR_NOT_FOUND = "ERR_NOT_FOUND"
    ERR_NOT_OWNER = "ERR_NOT_OWNER"

    # Generic errors
    ERR_INTERNAL = "ERR_INTERNAL"


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str
    message: str


class AppError(Exception):
    """Base class for every expected failure the API reports to callers."""

    status_code: int = 500
    code: str = ErrorCode.ERR_INTERNAL
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        return {"success": False, "message": self.message}


class ValidationFailed(AppError):
    """Malformed or missing input fields."""

    status_code = 400
    code = ErrorCode.ERR_VALIDATION_FAILED
    default_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        body["errors"] = [error.model_dump() for error in self.errors]
        return body


class InvalidPagination(ValidationFailed):
    """Page or limit did not resolve to a usable positive integer."""

    code = ErrorCode.ERR_INVALID_PAGINATION


class DuplicateIdentity(AppError):
    """Email already registered to another user."""

    status_code = 400
    code = ErrorCode.ERR_USER_ALREADY_EXISTS
    default_message = "User already exists"


class InvalidCredentials(AppError):
    """Login failed; identical for unknown email and wrong password."""

    status_code = 401
    code = ErrorCode.ERR_INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class Unauthenticated(AppError):
    """No usable session token on the request."""

    status_code = 401
    code = ErrorCode.ERR_UNAUTHENTICATED
    default_message = "Not authorized, no token"


class InvalidToken(Unauthenticated):
    """Token signature does not match the server secret."""

    code = ErrorCode.ERR_INVALID_TOKEN
    default_message = "Not authorized, token failed"


class ExpiredToken(Unauthenticated):
    """Token signature is valid but the token is past its lifetime."""

    code = ErrorCode.ERR_EXPIRED_TOKEN
    default_message = "Not authorized, token expired"


class MalformedToken(Unauthenticated):
    """Token cannot be parsed as a session token."""

    code = ErrorCode.ERR_MALFORMED_TOKEN
    default_message = "Not authorized, token failed"


class NotFound(AppError):
    """Requested task or user does not exist."""

    status_code = 404
    code = ErrorCode.ERR_NOT_FOUND
    default_message = "Task not found"


class NotOwner(AppError):
    """Task exists but belongs to another user.

    Reported as 401 like any other authorization failure so the status code
    does not reveal more than the message.
    """

    status_code = 401
    code = ErrorCode.ERR_NOT_OWNER
    default_message = "Not authorized"


class Internal(AppError):
    """Unexpected store or infrastructure failure; details stay in the logs."""
