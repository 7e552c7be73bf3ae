"""Tests for the error taxonomy."""

import pytest

from taskvault.core.errors import (
    DuplicateIdentity,
    ExpiredToken,
    FieldError,
    Internal,
    InvalidCredentials,
    InvalidPagination,
    InvalidToken,
    MalformedToken,
    NotFound,
    NotOwner,
    Unauthenticated,
    ValidationFailed,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (ValidationFailed([]), 400),
        (InvalidPagination([]), 400),
        (DuplicateIdentity(), 400),
        (InvalidCredentials(), 401),
        (Unauthenticated(), 401),
        (InvalidToken(), 401),
        (ExpiredToken(), 401),
        (MalformedToken(), 401),
        (NotFound(), 404),
        (NotOwner(), 401),
        (Internal(), 500),
    ],
)
def test_status_codes(error, status_code):
    assert error.status_code == status_code


@pytest.mark.unit
def test_token_failures_are_unauthenticated():
    for error_type in (InvalidToken, ExpiredToken, MalformedToken):
        assert issubclass(error_type, Unauthenticated)


@pytest.mark.unit
def test_validation_body_lists_fields():
    error = ValidationFailed([FieldError(field="title", message="Title is required")])

    assert error.to_body() == {
        "success": False,
        "message": "Validation failed",
        "errors": [{"field": "title", "message": "Title is required"}],
    }


@pytest.mark.unit
def test_not_owner_message_differs_from_missing_token():
    assert NotOwner().to_body()["message"] != Unauthenticated().to_body()["message"]
    assert NotOwner().status_code == Unauthenticated().status_code


@pytest.mark.unit
def test_internal_hides_details():
    assert Internal().to_body() == {"success": False, "message": "Server error"}
