"""
Schemas for establishments, their member professionals and invitations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Address(BaseModel):
    street: str = ""
    city: str = ""
    state: str = Field(default="", description="State code, e.g. \"MG\"")


class EstablishmentInput(BaseModel):
    """
    Request schema for creating or replacing an establishment.

    Attributes:
        name: Display name (required)
        description: Free text description
        photo_url: Cover photo URL
        category: Business category, e.g. "Beauty"
        location: Embedded address (required)
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    photo_url: str = ""
    category: str = ""
    location: Address

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Studio da Beleza",
                "description": "Beauty and wellness studio",
                "category": "Beauty",
                "location": {"street": "Rua das Flores, 123", "city": "Uberlandia", "state": "MG"},
            }
        }


class EstablishmentResponse(EstablishmentInput):
    id: str
    created_at: Optional[datetime] = None
    owner_uid: Optional[str] = None


class InviteRequest(BaseModel):
    establishment_id: str = Field(..., min_length=1)
    professional_uid: str = Field(..., min_length=1)


class InviteResponse(BaseModel):
    message: str
    id: str


class InviteAnswer(BaseModel):
    answer: str = Field(..., description="accepted | declined")


class MemberResponse(BaseModel):
    """A professional linked to an establishment."""
    uid: str
    name: str = ""
    status: str
    added_at: Optional[datetime] = None


class NotificationResponse(BaseModel):
    id: str
    to_uid: str
    type: str
    message: str
    establishment_id: str
    answered: bool
    answer: Optional[str] = None
    created_at: Optional[datetime] = None
