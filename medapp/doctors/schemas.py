"""
Doctor Schemas - Pydantic models for doctor role creation and responses.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class DoctorCreate(BaseModel):
    """
    Doctor Creation Schema - Body of POST /api/doctors

    Fields:
    - user_id: ID returned by the signup response
    - specialty: Doctor's medical specialty (optional)
    - license_number: Medical license number (optional)
    """
    user_id: int = Field(..., ge=1, description="ID of the user taking the doctor role")
    specialty: Optional[str] = Field(None, max_length=100, description="Doctor's medical specialty")
    license_number: Optional[str] = Field(None, max_length=50, description="Medical license number")

    class Config:
        """Configuration for Pydantic model"""
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "specialty": "Cardiology",
                "license_number": "MD-12345"
            }
        }


class DoctorResponse(BaseModel):
    """Doctor Response Schema - Used when returning doctor data"""
    id: int
    user_id: int
    specialty: Optional[str] = None
    license_number: Optional[str] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True


class DoctorCreatedResponse(BaseModel):
    """Response of a successful doctor role submission."""
    message: str
    doctor: DoctorResponse


class DoctorListResponse(BaseModel):
    """Doctor List Response Schema - Used when returning every doctor"""
    doctors: List[DoctorResponse]
    total: int
