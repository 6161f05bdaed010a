"""
Admin account endpoints.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.collections import ADMINS
from serviflex.core.exceptions import DocumentNotFoundError, DuplicateEmailError
from serviflex.repositories.users import UserRepository
from serviflex.schemas.common import MessageResponse
from serviflex.schemas.users import AdminCreate, AdminUpdate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admins"])


def admin_repository(db) -> UserRepository:
    return UserRepository(db, ADMINS)


@router.get(
    "/admins",
    response_model=List[UserResponse],
    summary="List admins",
)
async def list_admins(db: Database) -> List[UserResponse]:
    admins = await admin_repository(db).list_all()
    return [UserResponse(**a) for a in admins]


@router.get(
    "/admins/{admin_id}",
    response_model=UserResponse,
    summary="Get admin by ID",
)
async def get_admin(admin_id: str, db: Database) -> UserResponse:
    admin = await admin_repository(db).get(admin_id)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Admin not found: {admin_id}"
        )
    return UserResponse(**admin)


@router.post(
    "/admins",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an admin",
)
async def create_admin(request: AdminCreate, db: Database) -> UserResponse:
    """
    Create an admin account.

    Raises:
        HTTPException 409: If an admin with this email already exists
    """
    try:
        admin = await admin_repository(db).create_user(request.model_dump())
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse(**admin)


@router.put(
    "/admins/{admin_id}",
    response_model=UserResponse,
    summary="Update an admin",
)
async def update_admin(admin_id: str, request: AdminUpdate, db: Database) -> UserResponse:
    """
    Overwrite an admin. The password is kept when omitted.

    Raises:
        HTTPException 404: If the admin does not exist
        HTTPException 409: If the new email belongs to another admin
    """
    try:
        admin = await admin_repository(db).update_profile(
            admin_id,
            {"name": request.name, "email": request.email},
            password=request.password,
        )
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse(**admin)


@router.delete(
    "/admins/{admin_id}",
    response_model=MessageResponse,
    summary="Delete an admin",
)
async def delete_admin(admin_id: str, db: Database) -> MessageResponse:
    try:
        await admin_repository(db).delete(admin_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Admin deleted successfully")
