"""
User Service - Data access for the users table.

Every statement is built with SQLAlchemy Core so values are always bound as
parameters, never formatted into the SQL text.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..database import Database
from ..doctors.models import Doctor
from ..exceptions import DuplicateRecordError, RecordNotFoundError, StorageError
from ..patients.models import Patient
from .factory import NewUser
from .models import User, UserRole

# Set up logging
logger = logging.getLogger(__name__)

users = User.__table__


def create_user(db: Database, user: NewUser) -> Dict[str, Any]:
    """
    Insert a new user row.

    Args:
        db: Database handle
        user: Validated user with an already hashed password

    Returns:
        Dict with the stored columns, including the generated id

    Raises:
        DuplicateRecordError: If the email is already registered
        StorageError: If the database cannot be reached or rejects the insert
    """
    logger.info(f"Creating user for email: {user.email}")
    try:
        with db.connect() as conn:
            existing = conn.execute(
                select(users.c.id).where(users.c.email == user.email)
            ).first()
            if existing is not None:
                raise DuplicateRecordError(f"Email {user.email} is already registered")

            result = conn.execute(
                insert(users).values(
                    first_name=user.first_name,
                    last_name=user.last_name,
                    email=user.email,
                    password=user.password,
                )
            )
            user_id = result.inserted_primary_key[0]
            row = conn.execute(select(users).where(users.c.id == user_id)).mappings().one()
    except DuplicateRecordError:
        logger.warning(f"Error creating user: email {user.email} already registered")
        raise
    except IntegrityError as e:
        # Another request inserted the same email between the check and the insert
        logger.error(f"Error creating user: {str(e.orig)}")
        raise DuplicateRecordError(f"Email {user.email} is already registered") from e
    except SQLAlchemyError as e:
        logger.error(f"Error creating user: {str(e)}")
        raise StorageError("Could not save your profile. Please try again later.") from e

    logger.info(f"User account created: {user_id}")
    return dict(row)


def get_user(db: Database, user_id: int) -> Optional[Dict[str, Any]]:
    """
    Fetch a user by id.

    Returns:
        Dict with the user's columns, or None if no such user exists
    """
    try:
        with db.connect() as conn:
            row = conn.execute(select(users).where(users.c.id == user_id)).mappings().first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching user {user_id}: {str(e)}")
        raise StorageError("Could not load the user. Please try again later.") from e
    return dict(row) if row is not None else None


def get_user_role(conn: Connection, user_id: int) -> Optional[UserRole]:
    """
    Find which role table already holds a row for the user.

    Args:
        conn: Open connection, so the lookup shares the caller's transaction
        user_id: ID of the user

    Returns:
        The user's role, or None if no role has been recorded yet
    """
    doctors = Doctor.__table__
    patients = Patient.__table__
    if conn.execute(select(doctors.c.id).where(doctors.c.user_id == user_id)).first() is not None:
        return UserRole.DOCTOR
    if conn.execute(select(patients.c.id).where(patients.c.user_id == user_id)).first() is not None:
        return UserRole.PATIENT
    return None


def select_user_for_update(user_id: int):
    """
    Statement that reads the user row and locks it until the transaction ends.

    Role inserts for the same user queue up behind this lock, so the second one
    sees the role recorded by the first. SQLite has no row locks and leaves the
    FOR UPDATE clause out; its writers are serialized anyway.
    """
    return select(users.c.id).where(users.c.id == user_id).with_for_update()


def ensure_user_can_take_role(conn: Connection, user_id: int) -> None:
    """
    Check that the user exists and has no role yet, holding a lock on the user
    row for the rest of the caller's transaction.

    Raises:
        RecordNotFoundError: If the user does not exist
        DuplicateRecordError: If the user is already a doctor or a patient
    """
    if conn.execute(select_user_for_update(user_id)).first() is None:
        raise RecordNotFoundError(f"User {user_id} does not exist")

    role = get_user_role(conn, user_id)
    if role is not None:
        raise DuplicateRecordError(f"User {user_id} is already registered as a {role.value}")


def find_user_role(db: Database, user_id: int) -> Optional[UserRole]:
    """Look up the role recorded for a user, or None if there is none yet."""
    try:
        with db.connect() as conn:
            return get_user_role(conn, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching role for user {user_id}: {str(e)}")
        raise StorageError("Could not load the user. Please try again later.") from e
