"""
Tests for the checks run before the client sends anything.
"""
import pytest

from medapp.client.validation import validate_role, validate_signup
from medapp.exceptions import ValidationError
from medapp.users.models import UserRole

VALID = {"first_name": "Ana", "last_name": "Lee", "email": "ana@x.com", "password": "p1"}


def test_valid_form_passes():
    validate_signup(VALID)


@pytest.mark.parametrize("field", ["first_name", "last_name", "email", "password"])
def test_empty_field_is_rejected(field):
    with pytest.raises(ValidationError) as exc_info:
        validate_signup({**VALID, field: ""})
    assert exc_info.value.message == "All fields are required!"
    assert exc_info.value.fields == [field]


@pytest.mark.parametrize("email", ["ana", "ana@x", "@x.com", "ana@.com", "ana x@com"])
def test_bad_email_is_rejected(email):
    with pytest.raises(ValidationError) as exc_info:
        validate_signup({**VALID, "email": email})
    assert exc_info.value.message == "Please enter a valid email address!"


def test_role_must_be_chosen():
    with pytest.raises(ValidationError):
        validate_role(None)
    assert validate_role(UserRole.PATIENT) is UserRole.PATIENT
