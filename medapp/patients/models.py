"""
Patient Model - Stores patient-specific information for a registered user.
"""
from sqlalchemy import Column, Date, ForeignKey, Integer, String
from ..database import Base


class Patient(Base):
    """
    Patient Model - Stores patient-specific information

    Fields:
    - id: Primary key for patient profile
    - user_id: Foreign key to User model, at most one patient row per user
    - date_of_birth: Patient's date of birth
    - insurance_provider: Name of the patient's insurer
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    date_of_birth = Column(Date, nullable=True)
    insurance_provider = Column(String(100), nullable=True)

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, user_id={self.user_id})>"
