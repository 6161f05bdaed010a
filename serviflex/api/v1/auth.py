"""
Authentication endpoints: login and self-registration.

Accounts live in three collections (clients, professionals, admins).
Login searches all of them; registration writes to the one named by
the request's `type`.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.collections import CLIENTS, PROFESSIONALS, USER_COLLECTIONS
from serviflex.core.exceptions import DuplicateEmailError
from serviflex.core.security import create_access_token
from serviflex.repositories.users import UserRepository, authenticate
from serviflex.schemas.users import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def invalid_user_type(user_type: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Invalid user type '{user_type}'. Expected one of: {', '.join(USER_COLLECTIONS)}",
    )


def registration_document(request: RegisterRequest) -> Dict[str, Any]:
    """Build the stored fields for a new account of the requested type."""
    document: Dict[str, Any] = {
        "name": request.name,
        "email": request.email,
        "password": request.password,
    }
    if request.type == CLIENTS:
        document.update(phone=request.phone, photo_url=request.photo_url)
    elif request.type == PROFESSIONALS:
        document.update(phone=request.phone, image_url=request.photo_url, establishment_id="")
    return document


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Authenticate with email and password and receive an access token.",
)
async def login(request: LoginRequest, db: Database) -> LoginResponse:
    """
    Authenticate a client, professional or admin.

    Collections are searched in the order clients, professionals, admins.

    Returns:
        LoginResponse with the user (its `type` is the collection it was
        found in) and a bearer token

    Raises:
        HTTPException 401: If no account matches the email and password
    """
    user = await authenticate(db, request.email, request.password)
    if user is None:
        logger.info("Login failed", extra={"email": request.email})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token({"sub": user["id"], "type": user["type"]})

    logger.info("Login succeeded", extra={"collection": user["type"], "document_id": user["id"]})
    return LoginResponse(
        message="Login successful",
        user=UserResponse(**user),
        access_token=access_token,
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    description="Create a client, professional or admin account.",
)
async def register(request: RegisterRequest, db: Database) -> RegisterResponse:
    """
    Register a new account.

    Raises:
        HTTPException 400: If `type` is not clients, professionals or admins
        HTTPException 409: If the email is already registered for that type
    """
    if request.type not in USER_COLLECTIONS:
        raise invalid_user_type(request.type)

    repo = UserRepository(db, request.type)
    try:
        user = await repo.create_user(registration_document(request))
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    user["type"] = request.type
    return RegisterResponse(message="User registered successfully", user=UserResponse(**user))
