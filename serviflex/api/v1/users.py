"""
User profile endpoints shared by all account types, and the client's
appointment list.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from serviflex.api.dependencies import Database
from serviflex.api.v1.auth import invalid_user_type
from serviflex.core.collections import ADMINS, CLIENTS, PROFESSIONALS, USER_COLLECTIONS
from serviflex.core.exceptions import DocumentNotFoundError, DuplicateEmailError
from serviflex.repositories.appointments import AppointmentRepository
from serviflex.repositories.users import UserRepository
from serviflex.schemas.appointments import AppointmentResponse
from serviflex.schemas.common import MessageResponse
from serviflex.schemas.users import UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# Profile fields stored per user collection, besides name/email/password
PROFILE_FIELDS = {
    CLIENTS: ("phone", "photo_url"),
    PROFESSIONALS: ("phone", "image_url", "establishment_id"),
    ADMINS: (),
}


@router.put(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Update a user",
    description="Overwrite the profile of a client, professional or admin.",
)
async def update_user(
    user_id: str,
    request: UserUpdate,
    db: Database,
    user_type: Optional[str] = Query(default=None, alias="type", description="clients | professionals | admins"),
) -> MessageResponse:
    """
    Overwrite a user's profile.

    The id and creation time are preserved. The password is re-hashed
    when given and kept otherwise; likewise a professional's
    establishment_id.

    Raises:
        HTTPException 400: If `type` is missing or invalid
        HTTPException 404: If the user does not exist in that collection
        HTTPException 409: If the new email belongs to another user
    """
    if not user_type or user_type not in USER_COLLECTIONS:
        raise invalid_user_type(user_type or "")

    data = {"name": request.name, "email": request.email}
    for field in PROFILE_FIELDS[user_type]:
        value = getattr(request, field)
        if value is not None:
            data[field] = value

    repo = UserRepository(db, user_type)
    try:
        await repo.update_profile(user_id, data, password=request.password)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info("User updated", extra={"collection": user_type, "document_id": user_id})
    return MessageResponse(message="User updated successfully")


@router.get(
    "/appointments/client/{client_id}",
    response_model=List[AppointmentResponse],
    summary="List a client's appointments",
)
async def list_client_appointments(client_id: str, db: Database) -> List[AppointmentResponse]:
    """Appointments booked by a client, earliest first."""
    appointments = await AppointmentRepository(db).for_client(client_id)
    return [AppointmentResponse(**a) for a in appointments]
