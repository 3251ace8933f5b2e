"""
User factory - validates signup fields and hashes the password before anything
is persisted.
"""
from pydantic import BaseModel

from ..core.security import hash_password, verify_password
from ..exceptions import ValidationError

REQUIRED_FIELDS = ("first_name", "last_name", "email", "password")


class NewUser(BaseModel):
    """
    A validated user ready to be inserted.

    Fields:
    - first_name: User's first name
    - last_name: User's last name
    - email: Login identifier
    - password: bcrypt hash of the submitted password
    """
    first_name: str
    last_name: str
    email: str
    password: str

    class Config:
        frozen = True

    @classmethod
    def create(cls, first_name: str, last_name: str, email: str, password: str) -> "NewUser":
        """
        Build a user from raw signup fields.

        Names and email are stripped of surrounding whitespace; the password is
        hashed as given.

        Raises:
            ValidationError: If any field is empty
        """
        values = {
            "first_name": (first_name or "").strip(),
            "last_name": (last_name or "").strip(),
            "email": (email or "").strip(),
            "password": password or "",
        }
        missing = [name for name in REQUIRED_FIELDS if not values[name].strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)

        values["password"] = hash_password(values["password"])
        return cls(**values)

    def verify(self, password: str) -> bool:
        """Check a plain text password against the stored hash."""
        return verify_password(password, self.password)
