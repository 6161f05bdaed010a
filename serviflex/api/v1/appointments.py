"""
Appointment booking endpoint.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.exceptions import SlotValidationError
from serviflex.schemas.appointments import AppointmentCreate, AppointmentResponse
from serviflex.services.scheduling import AppointmentScheduler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["appointments"])


@router.post(
    "/appointments",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    description="Book a procedure with a professional, within the professional's working hours.",
)
async def create_appointment(request: AppointmentCreate, db: Database) -> AppointmentResponse:
    """
    Book an appointment.

    The procedure is looked up by name among the professional's
    procedures. The slot [scheduled_at, scheduled_at + duration) must
    fit inside one of the professional's windows for that weekday,
    in the business timezone.

    Raises:
        HTTPException 400: If the procedure is unknown or the slot does
            not fit the professional's working hours
    """
    try:
        appointment = await AppointmentScheduler(db).book(request.model_dump())
    except SlotValidationError as e:
        logger.info(
            f"Appointment rejected: {e}",
            extra={"professional_id": request.professional_id},
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AppointmentResponse(**appointment)
