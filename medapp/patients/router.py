"""
Patient Router - API endpoints for the patient role.
"""
from fastapi import APIRouter, Depends, status

from ..database import Database, get_db
from ..exceptions import RecordNotFoundError
from .schemas import PatientCreate, PatientCreatedResponse, PatientListResponse, PatientResponse
from .service import create_patient, get_patient, get_patient_list

router = APIRouter()


@router.post("", response_model=PatientCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_patient_route(patient_data: PatientCreate, db: Database = Depends(get_db)):
    """
    Record the patient role for a user who has just signed up.

    The body carries the user id returned by POST /api/users.
    """
    patient = create_patient(db, patient_data)
    return {"message": "You are registered as a patient!", "patient": patient}


@router.get("", response_model=PatientListResponse)
def list_patients(db: Database = Depends(get_db)):
    """Get every patient."""
    patients = get_patient_list(db)
    return {"patients": patients, "total": len(patients)}


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient_route(patient_id: int, db: Database = Depends(get_db)):
    """Get a patient by ID."""
    patient = get_patient(db, patient_id)
    if patient is None:
        raise RecordNotFoundError(f"Patient {patient_id} not found")
    return patient
