"""
Doctor Service - Data access for the doctors table.

A doctor row is the role a user picks after signup. A user may hold the doctor
role or the patient role, never both, and never twice.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..database import Database
from ..exceptions import AppException, DuplicateRecordError, StorageError
from ..users.service import ensure_user_can_take_role
from .models import Doctor
from .schemas import DoctorCreate

# Set up logging
logger = logging.getLogger(__name__)

doctors = Doctor.__table__


def create_doctor(db: Database, doctor_data: DoctorCreate) -> Dict[str, Any]:
    """
    Insert a doctor row for an existing user.

    Args:
        db: Database handle
        doctor_data: User id plus doctor-specific fields

    Returns:
        Dict with the stored columns, including the generated id

    Raises:
        RecordNotFoundError: If the user does not exist
        DuplicateRecordError: If the user already has a role
        StorageError: If the database cannot be reached or rejects the insert
    """
    user_id = doctor_data.user_id
    logger.info(f"Creating doctor profile for user {user_id}")
    try:
        with db.connect() as conn:
            ensure_user_can_take_role(conn, user_id)
            result = conn.execute(
                insert(doctors).values(
                    user_id=user_id,
                    specialty=doctor_data.specialty,
                    license_number=doctor_data.license_number,
                )
            )
            doctor_id = result.inserted_primary_key[0]
            row = conn.execute(select(doctors).where(doctors.c.id == doctor_id)).mappings().one()
    except AppException as e:
        logger.warning(f"Error creating doctor profile for user {user_id}: {e.message}")
        raise
    except IntegrityError as e:
        logger.error(f"Error creating doctor profile for user {user_id}: {str(e.orig)}")
        raise DuplicateRecordError(f"User {user_id} is already registered as a doctor") from e
    except SQLAlchemyError as e:
        logger.error(f"Error creating doctor profile for user {user_id}: {str(e)}")
        raise StorageError("Could not save the doctor profile. Please try again later.") from e

    logger.info(f"Created doctor profile {doctor_id} for user {user_id}")
    return dict(row)


def get_doctor_list(db: Database) -> List[Dict[str, Any]]:
    """
    Fetch every doctor row. No particular order is guaranteed.
    """
    try:
        with db.connect() as conn:
            rows = conn.execute(select(doctors)).mappings().all()
    except SQLAlchemyError as e:
        logger.error(f"Error listing doctors: {str(e)}")
        raise StorageError("Could not load doctors. Please try again later.") from e
    return [dict(row) for row in rows]


def get_doctor(db: Database, doctor_id: int) -> Optional[Dict[str, Any]]:
    """
    Fetch a doctor by its own id.

    Returns:
        Dict with the doctor's columns, or None if no such doctor exists
    """
    try:
        with db.connect() as conn:
            row = conn.execute(select(doctors).where(doctors.c.id == doctor_id)).mappings().first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching doctor {doctor_id}: {str(e)}")
        raise StorageError("Could not load the doctor. Please try again later.") from e
    return dict(row) if row is not None else None


def get_doctor_by_user(db: Database, user_id: int) -> Optional[Dict[str, Any]]:
    """Fetch the doctor row belonging to a user, or None."""
    try:
        with db.connect() as conn:
            row = conn.execute(select(doctors).where(doctors.c.user_id == user_id)).mappings().first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching doctor for user {user_id}: {str(e)}")
        raise StorageError("Could not load the doctor. Please try again later.") from e
    return dict(row) if row is not None else None
