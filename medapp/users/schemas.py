"""
User Schemas - Pydantic models for signup requests and user responses.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from .models import UserRole


class UserCreate(BaseModel):
    """
    User Creation Schema - Body of POST /api/users

    Fields:
    - first_name: User's first name
    - last_name: User's last name
    - email: User's email address
    - password: Plain text password (hashed before storage)
    """
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data

    The password hash is never part of a response.
    """
    id: int
    first_name: str
    last_name: str
    email: str

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True


class UserCreatedResponse(BaseModel):
    """Response of a successful signup."""
    message: str
    user: UserResponse


class UserDetailResponse(UserResponse):
    """User with the role picked after signup, if any."""
    role: Optional[UserRole] = None
