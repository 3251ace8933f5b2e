"""
User routes - signup and user lookup endpoints.
"""
import logging

from fastapi import APIRouter, Depends, status

from ..database import Database, get_db
from ..exceptions import RecordNotFoundError
from .factory import NewUser
from .schemas import UserCreate, UserCreatedResponse, UserDetailResponse
from .service import create_user, find_user_role, get_user

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED, summary="User Signup")
def create_user_route(user_data: UserCreate, db: Database = Depends(get_db)):
    """
    Create a user from the signup form.

    The password is hashed before it reaches the database. The response carries
    the new user's id, which the client sends back when it submits a role.

    Raises:
        ValidationError: If a field is empty (400)
        DuplicateRecordError: If the email is already registered (409)
        StorageError: If the database fails (500)
    """
    user = NewUser.create(
        user_data.first_name,
        user_data.last_name,
        user_data.email,
        user_data.password,
    )
    created = create_user(db, user)
    logger.info(f"Signup completed for user {created['id']}")
    return {"message": "Your profile has been created!", "user": created}


@router.get("/{user_id}", response_model=UserDetailResponse, summary="Get User")
def get_user_route(user_id: int, db: Database = Depends(get_db)):
    """Get a user by ID together with the role they picked, if any."""
    user = get_user(db, user_id)
    if user is None:
        raise RecordNotFoundError(f"User {user_id} not found")
    return {**user, "role": find_user_role(db, user_id)}
