"""
Patient Service - Data access for the patients table.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..database import Database
from ..exceptions import AppException, DuplicateRecordError, StorageError
from ..users.service import ensure_user_can_take_role
from .models import Patient
from .schemas import PatientCreate

# Set up logging
logger = logging.getLogger(__name__)

patients = Patient.__table__


def create_patient(db: Database, patient_data: PatientCreate) -> Dict[str, Any]:
    """
    Insert a patient row for an existing user.

    Args:
        db: Database handle
        patient_data: User id plus patient-specific fields

    Returns:
        Dict with the stored columns, including the generated id

    Raises:
        RecordNotFoundError: If the user does not exist
        DuplicateRecordError: If the user already has a role
        StorageError: If the database cannot be reached or rejects the insert
    """
    user_id = patient_data.user_id
    logger.info(f"Creating patient profile for user {user_id}")
    try:
        with db.connect() as conn:
            ensure_user_can_take_role(conn, user_id)
            result = conn.execute(
                insert(patients).values(
                    user_id=user_id,
                    date_of_birth=patient_data.date_of_birth,
                    insurance_provider=patient_data.insurance_provider,
                )
            )
            patient_id = result.inserted_primary_key[0]
            row = conn.execute(select(patients).where(patients.c.id == patient_id)).mappings().one()
    except AppException as e:
        logger.warning(f"Error creating patient profile for user {user_id}: {e.message}")
        raise
    except IntegrityError as e:
        logger.error(f"Error creating patient profile for user {user_id}: {str(e.orig)}")
        raise DuplicateRecordError(f"User {user_id} is already registered as a patient") from e
    except SQLAlchemyError as e:
        logger.error(f"Error creating patient profile for user {user_id}: {str(e)}")
        raise StorageError("Could not save the patient profile. Please try again later.") from e

    logger.info(f"Created patient profile {patient_id} for user {user_id}")
    return dict(row)


def get_patient_list(db: Database) -> List[Dict[str, Any]]:
    """Fetch every patient row. No particular order is guaranteed."""
    try:
        with db.connect() as conn:
            rows = conn.execute(select(patients)).mappings().all()
    except SQLAlchemyError as e:
        logger.error(f"Error listing patients: {str(e)}")
        raise StorageError("Could not load patients. Please try again later.") from e
    return [dict(row) for row in rows]


def get_patient(db: Database, patient_id: int) -> Optional[Dict[str, Any]]:
    """
    Fetch a patient by its own id.

    Returns:
        Dict with the patient's columns, or None if no such patient exists
    """
    try:
        with db.connect() as conn:
            row = conn.execute(select(patients).where(patients.c.id == patient_id)).mappings().first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching patient {patient_id}: {str(e)}")
        raise StorageError("Could not load the patient. Please try again later.") from e
    return dict(row) if row is not None else None


def get_patient_by_user(db: Database, user_id: int) -> Optional[Dict[str, Any]]:
    """Fetch the patient row belonging to a user, or None."""
    try:
        with db.connect() as conn:
            row = conn.execute(select(patients).where(patients.c.user_id == user_id)).mappings().first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching patient for user {user_id}: {str(e)}")
        raise StorageError("Could not load the patient. Please try again later.") from e
    return dict(row) if row is not None else None
