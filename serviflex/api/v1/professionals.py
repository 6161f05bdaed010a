"""
Professional endpoints.

Provides professional listing and lookup, the professional's agenda,
pending establishment invitations and the professional's reports.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.collections import CLIENTS, PROFESSIONALS
from serviflex.repositories.appointments import AppointmentRepository
from serviflex.repositories.establishments import NotificationRepository
from serviflex.repositories.users import UserRepository
from serviflex.schemas.appointments import ProfessionalAppointmentResponse
from serviflex.schemas.establishments import NotificationResponse
from serviflex.schemas.reports import (
    ProfessionalMonthlyReport,
    ProfessionalRatingsReport,
    ProfessionalRevenueReport,
)
from serviflex.schemas.users import UserResponse
from serviflex.services.reports import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["professionals"])


@router.get(
    "/professionals",
    response_model=List[UserResponse],
    summary="List professionals",
)
async def list_professionals(db: Database) -> List[UserResponse]:
    professionals = await UserRepository(db, PROFESSIONALS).list_all()
    return [UserResponse(**{**p, "type": PROFESSIONALS}) for p in professionals]


@router.get(
    "/professionals/{uid}",
    response_model=UserResponse,
    summary="Get professional by ID",
)
async def get_professional(uid: str, db: Database) -> UserResponse:
    """
    Get a single professional.

    Raises:
        HTTPException 404: If the professional does not exist
    """
    professional = await UserRepository(db, PROFESSIONALS).get(uid)
    if professional is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Professional not found: {uid}"
        )
    return UserResponse(**{**professional, "type": PROFESSIONALS})


@router.get(
    "/appointments/professional/{professional_id}",
    response_model=List[ProfessionalAppointmentResponse],
    summary="List a professional's appointments",
    description="Appointments of a professional, earliest first, with the client's name.",
)
async def list_professional_appointments(
    professional_id: str,
    db: Database,
) -> List[ProfessionalAppointmentResponse]:
    """
    List a professional's agenda.

    Each appointment carries `client_name`; it is empty when the client
    document no longer exists. Client lookups are shared between
    appointments of the same client.
    """
    appointments = await AppointmentRepository(db).for_professional(professional_id)
    clients = UserRepository(db, CLIENTS)

    names = {}
    result = []
    for appointment in appointments:
        client_id = appointment.get("client_id", "")
        if client_id not in names:
            client = await clients.get(client_id) if client_id else None
            names[client_id] = client.get("name", "") if client else ""
        result.append(ProfessionalAppointmentResponse(**appointment, client_name=names[client_id]))
    return result


@router.get(
    "/professionals/{uid}/pending-invitations",
    response_model=List[NotificationResponse],
    summary="List pending invitations",
    description="Establishment invitations addressed to the professional that have not been answered.",
)
async def list_pending_invitations(uid: str, db: Database) -> List[NotificationResponse]:
    invites = await NotificationRepository(db).pending_invites(uid)
    return [NotificationResponse(**n) for n in invites]


@router.get(
    "/reports/professional/revenue/{professional_id}",
    response_model=ProfessionalRevenueReport,
    summary="Professional revenue",
)
async def professional_revenue(professional_id: str, db: Database) -> ProfessionalRevenueReport:
    """
    Count a professional's appointments and sum their procedure prices.

    Appointments whose procedure no longer exists count with price 0.
    """
    report = await ReportService(db).professional_revenue(professional_id)
    return ProfessionalRevenueReport(**report)


@router.get(
    "/reports/ratings/professional/{professional_id}",
    response_model=ProfessionalRatingsReport,
    summary="Professional ratings",
)
async def professional_ratings(professional_id: str, db: Database) -> ProfessionalRatingsReport:
    report = await ReportService(db).professional_ratings(professional_id)
    return ProfessionalRatingsReport(**report)


@router.get(
    "/reports/appointments/professional/{professional_id}",
    response_model=ProfessionalMonthlyReport,
    summary="Professional appointments per month",
    description="Appointment counts for each of the last 12 months, keyed YYYY-MM.",
)
async def professional_monthly(professional_id: str, db: Database) -> ProfessionalMonthlyReport:
    report = await ReportService(db).professional_monthly(professional_id)
    return ProfessionalMonthlyReport(**report)
