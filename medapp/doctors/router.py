"""
Doctor Router - API endpoints for the doctor role.
"""
from fastapi import APIRouter, Depends, status

from ..database import Database, get_db
from ..exceptions import RecordNotFoundError
from .schemas import DoctorCreate, DoctorCreatedResponse, DoctorListResponse, DoctorResponse
from .service import create_doctor, get_doctor, get_doctor_list

router = APIRouter()


@router.post("", response_model=DoctorCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_doctor_route(doctor_data: DoctorCreate, db: Database = Depends(get_db)):
    """
    Record the doctor role for a user who has just signed up.

    The body carries the user id returned by POST /api/users.
    """
    doctor = create_doctor(db, doctor_data)
    return {"message": "You are registered as a doctor!", "doctor": doctor}


@router.get("", response_model=DoctorListResponse)
def list_doctors(db: Database = Depends(get_db)):
    """Get every doctor."""
    doctors = get_doctor_list(db)
    return {"doctors": doctors, "total": len(doctors)}


@router.get("/{doctor_id}", response_model=DoctorResponse)
def get_doctor_route(doctor_id: int, db: Database = Depends(get_db)):
    """Get a doctor by ID."""
    doctor = get_doctor(db, doctor_id)
    if doctor is None:
        raise RecordNotFoundError(f"Doctor {doctor_id} not found")
    return doctor
