"""Unit tests for the domain error hierarchy."""

import pytest

from glimmer.errors import (
    AuthenticationError,
    GlimmerError,
    InvalidMoveError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


def test_not_found_detail_names_the_resource():
    assert NotFoundError("Pet").detail == "Pet not found"
    assert NotFoundError("User", "u1").detail == "User not found: 'u1'"
    assert NotFoundError("User", "u1").status_code == 404


def test_code_override_is_per_instance():
    custom = PermissionDeniedError("Not friends", code="not_friends")
    assert custom.code == "not_friends"
    assert PermissionDeniedError("x").code == "permission_denied"
    assert PermissionDeniedError.code == "permission_denied"


@pytest.mark.parametrize(
    "error_type, status",
    [(ValidationError, 400), (InvalidMoveError, 400), (PermissionDeniedError, 403), (AuthenticationError, 401)],
)
def test_status_codes(error_type, status):
    error = error_type("detail")
    assert isinstance(error, GlimmerError)
    assert error.status_code == status
    assert str(error) == "detail"
