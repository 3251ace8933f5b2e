"""
Patient Schemas - Pydantic models for patient role creation and responses.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class PatientCreate(BaseModel):
    """
    Patient Creation Schema - Body of POST /api/patients

    Fields:
    - user_id: ID returned by the signup response
    - date_of_birth: Patient's date of birth, YYYY-MM-DD (optional)
    - insurance_provider: Name of the patient's insurer (optional)
    """
    user_id: int = Field(..., ge=1, description="ID of the user taking the patient role")
    date_of_birth: Optional[date] = Field(None, description="Patient's date of birth")
    insurance_provider: Optional[str] = Field(None, max_length=100, description="Insurance provider")

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v):
        """A date of birth cannot lie in the future"""
        if v is not None and v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v


class PatientResponse(BaseModel):
    """Patient Response Schema - Used when returning patient data"""
    id: int
    user_id: int
    date_of_birth: Optional[date] = None
    insurance_provider: Optional[str] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True


class PatientCreatedResponse(BaseModel):
    """Response of a successful patient role submission."""
    message: str
    patient: PatientResponse


class PatientListResponse(BaseModel):
    """Patient List Response Schema - Used when returning every patient"""
    patients: List[PatientResponse]
    total: int
