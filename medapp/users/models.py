"""
User Model - Stores the account created at signup.
"""
from sqlalchemy import Column, Integer, String
import enum
from ..database import Base


class UserRole(str, enum.Enum):
    """
    Enumeration for the roles a user can take after signup.

    Roles:
    - DOCTOR: Medical practitioner, stored in the doctors table
    - PATIENT: Patient, stored in the patients table
    """
    DOCTOR = "doctor"
    PATIENT = "patient"


class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key assigned by the database
    - first_name: User's first name
    - last_name: User's last name
    - email: Unique email address, used as the login identifier
    - password: bcrypt hash of the password (never the raw password)
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}')>"
