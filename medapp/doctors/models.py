"""
Doctor Model - Stores doctor-specific information for a registered user.
"""
from sqlalchemy import Column, ForeignKey, Integer, String
from ..database import Base


class Doctor(Base):
    """
    Doctor Model - Stores doctor-specific information

    Fields:
    - id: Primary key for doctor profile
    - user_id: Foreign key to User model, at most one doctor row per user
    - specialty: Doctor's medical specialty
    - license_number: Medical license number
    """
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    specialty = Column(String(100), nullable=True)
    license_number = Column(String(50), nullable=True)

    def __repr__(self):
        """String representation of the Doctor model"""
        return f"<Doctor(id={self.id}, user_id={self.user_id}, specialty='{self.specialty}')>"
