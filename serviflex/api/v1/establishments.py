"""
Establishment endpoints.

Provides establishment CRUD, the invitation workflow that links
professionals to an establishment, member management and the
establishment's reports.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database, OptionalUser
from serviflex.core.exceptions import DocumentNotFoundError
from serviflex.repositories.establishments import (
    EstablishmentRepository,
    InvalidAnswerError,
    NotificationRepository,
)
from serviflex.schemas.common import CreatedResponse, MessageResponse
from serviflex.schemas.establishments import (
    EstablishmentInput,
    EstablishmentResponse,
    InviteAnswer,
    InviteRequest,
    InviteResponse,
    MemberResponse,
)
from serviflex.schemas.reports import (
    EstablishmentMonthlyReport,
    EstablishmentRatingsReport,
    EstablishmentRevenueReport,
)
from serviflex.services.reports import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["establishments"])


@router.post(
    "/establishments",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an establishment",
)
async def create_establishment(
    request: EstablishmentInput,
    db: Database,
    current_user: OptionalUser,
) -> CreatedResponse:
    """
    Create a new establishment.

    When the request carries a valid bearer token, the caller becomes
    the establishment's owner (`owner_uid`).

    Returns:
        CreatedResponse with the new establishment id
    """
    owner_uid = current_user.user_id if current_user else None
    establishment = await EstablishmentRepository(db).create_establishment(
        request.model_dump(),
        owner_uid=owner_uid,
    )
    return CreatedResponse(id=establishment["id"])


@router.put(
    "/establishments/{establishment_id}",
    response_model=MessageResponse,
    summary="Update an establishment",
)
async def update_establishment(
    establishment_id: str,
    request: EstablishmentInput,
    db: Database,
) -> MessageResponse:
    """
    Overwrite an establishment. Creation time and owner are kept.

    Raises:
        HTTPException 404: If the establishment does not exist
    """
    try:
        await EstablishmentRepository(db).update_establishment(establishment_id, request.model_dump())
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Establishment updated successfully")


@router.get(
    "/establishments",
    response_model=List[EstablishmentResponse],
    summary="List establishments",
)
async def list_establishments(db: Database) -> List[EstablishmentResponse]:
    establishments = await EstablishmentRepository(db).list_all()
    return [EstablishmentResponse(**e) for e in establishments]


@router.get(
    "/establishments/{establishment_id}",
    response_model=EstablishmentResponse,
    summary="Get establishment by ID",
)
async def get_establishment(establishment_id: str, db: Database) -> EstablishmentResponse:
    establishment = await EstablishmentRepository(db).get(establishment_id)
    if establishment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Establishment not found: {establishment_id}"
        )
    return EstablishmentResponse(**establishment)


@router.post(
    "/establishments/professionals/invite",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a professional",
    description="Send an establishment invitation notification to a professional.",
)
async def invite_professional(request: InviteRequest, db: Database) -> InviteResponse:
    """
    Invite a professional to join an establishment.

    Raises:
        HTTPException 404: If the establishment or professional does not exist
    """
    try:
        notification = await NotificationRepository(db).create_invite(
            request.establishment_id,
            request.professional_uid,
        )
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return InviteResponse(message="Invitation sent", id=notification["id"])


@router.post(
    "/establishments/professionals/notifications/{notification_id}",
    response_model=MessageResponse,
    summary="Answer an invitation",
    description="Accept or decline an establishment invitation.",
)
async def answer_invitation(
    notification_id: str,
    request: InviteAnswer,
    db: Database,
) -> MessageResponse:
    """
    Answer an establishment invitation.

    Accepting adds the professional to the establishment's members with
    status "active" and sets the professional's `establishment_id`.

    Raises:
        HTTPException 400: If the answer is not accepted/declined or the
            invitation was already answered
        HTTPException 404: If the invitation does not exist
    """
    try:
        notification = await NotificationRepository(db).answer_invite(notification_id, request.answer)
    except InvalidAnswerError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info(
        f"Invitation {notification['answer']}",
        extra={"collection": "notifications", "document_id": notification_id},
    )
    return MessageResponse(message=f"Invitation {notification['answer']}")


@router.delete(
    "/establishments/{establishment_id}/professionals/{professional_id}",
    response_model=MessageResponse,
    summary="Remove a professional",
)
async def remove_professional(
    establishment_id: str,
    professional_id: str,
    db: Database,
) -> MessageResponse:
    """
    Remove a professional from an establishment and clear their
    `establishment_id`.

    Raises:
        HTTPException 404: If the professional is not a member
    """
    try:
        await EstablishmentRepository(db).remove_member(establishment_id, professional_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Professional removed from establishment")


@router.get(
    "/establishments/{establishment_id}/professionals",
    response_model=List[MemberResponse],
    summary="List establishment professionals",
)
async def list_members(establishment_id: str, db: Database) -> List[MemberResponse]:
    members = await EstablishmentRepository(db).list_members(establishment_id)
    return [MemberResponse(**m) for m in members]


@router.get(
    "/reports/establishment/revenue/{establishment_id}",
    response_model=EstablishmentRevenueReport,
    summary="Establishment revenue",
)
async def establishment_revenue(establishment_id: str, db: Database) -> EstablishmentRevenueReport:
    """
    Count the establishment's appointments and sum their prices.

    Each appointment is priced by its own professional's procedure of
    that name.
    """
    report = await ReportService(db).establishment_revenue(establishment_id)
    return EstablishmentRevenueReport(**report)


@router.get(
    "/reports/ratings/establishment/{establishment_id}",
    response_model=EstablishmentRatingsReport,
    summary="Establishment ratings",
)
async def establishment_ratings(establishment_id: str, db: Database) -> EstablishmentRatingsReport:
    report = await ReportService(db).establishment_ratings(establishment_id)
    return EstablishmentRatingsReport(**report)


@router.get(
    "/reports/appointments/establishment/{establishment_id}",
    response_model=EstablishmentMonthlyReport,
    summary="Establishment appointments per month",
)
async def establishment_monthly(establishment_id: str, db: Database) -> EstablishmentMonthlyReport:
    report = await ReportService(db).establishment_monthly(establishment_id)
    return EstablishmentMonthlyReport(**report)
