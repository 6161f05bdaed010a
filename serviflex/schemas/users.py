"""
Schemas for user accounts: clients, professionals and admins.

Passwords only ever appear on request models; response models have no
password field, so FastAPI's response filtering drops the stored hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """
    Request schema for self-registration.

    Attributes:
        type: Target collection: "clients", "professionals" or "admins".
            Kept as a plain string so an unknown value is reported as 400
            by the route instead of a schema error.
    """
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    phone: str = Field(default="", max_length=32)
    photo_url: str = Field(default="", description="Profile photo URL")
    type: str = Field(..., description="clients | professionals | admins")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Maria Silva",
                "email": "maria@example.com",
                "password": "s3cret-pass",
                "phone": "(34) 99999-9999",
                "type": "professionals",
            }
        }


class UserResponse(BaseModel):
    """
    Public view of a user document from any of the user collections.

    Fields that only exist for one kind of user stay None for the others.
    """
    id: str
    name: str
    email: str
    type: Optional[str] = None
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    image_url: Optional[str] = None
    establishment_id: Optional[str] = None
    created_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    message: str
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class UserUpdate(BaseModel):
    """
    Request schema for overwriting a user profile.

    Which optional fields are stored depends on the user type: clients keep
    phone and photo_url, professionals keep phone, image_url and
    establishment_id, admins keep neither.
    """
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Optional[str] = Field(
        default=None,
        min_length=6,
        max_length=128,
        description="New password; omit to keep the current one"
    )
    phone: str = ""
    photo_url: str = ""
    image_url: str = ""
    establishment_id: Optional[str] = Field(
        default=None,
        description="Linked establishment; omit to keep the current link"
    )


class AdminCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class AdminUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
