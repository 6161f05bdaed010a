"""
Schemas for appointments.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    """
    Request schema for booking an appointment.

    Attributes:
        procedure: Name of one of the professional's procedures
        scheduled_at: Start time; timezone-naive values are read in the
            business timezone
    """
    client_id: str = Field(..., min_length=1)
    professional_id: str = Field(..., min_length=1)
    establishment_id: str = ""
    procedure: str = Field(..., min_length=1)
    scheduled_at: datetime


class AppointmentResponse(AppointmentCreate):
    id: str


class ProfessionalAppointmentResponse(AppointmentResponse):
    client_name: str = ""
