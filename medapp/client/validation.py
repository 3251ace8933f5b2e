"""
Client-side checks run before any signup or role request is sent.
"""
import re
from typing import Mapping, Optional

from ..exceptions import ValidationError
from ..users.models import UserRole

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

SIGNUP_FIELDS = ("first_name", "last_name", "email", "password")

ROLE_FIELDS = {
    UserRole.DOCTOR: ("specialty", "license_number"),
    UserRole.PATIENT: ("date_of_birth", "insurance_provider"),
}


def validate_signup(form: Mapping[str, str]) -> None:
    """
    Check the signup form.

    Raises:
        ValidationError: If a field is empty or the email does not look like one
    """
    missing = [name for name in SIGNUP_FIELDS if not (form.get(name) or "").strip()]
    if missing:
        raise ValidationError("All fields are required!", fields=missing)

    if not EMAIL_PATTERN.search(form["email"]):
        raise ValidationError("Please enter a valid email address!", fields=["email"])


def validate_role(role: Optional[UserRole]) -> UserRole:
    """
    Check that a role has been chosen.

    Raises:
        ValidationError: If no role is selected
    """
    if role not in ROLE_FIELDS:
        raise ValidationError("Please select whether you are a doctor or a patient!", fields=["role"])
    return role
