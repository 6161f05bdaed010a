"""
Schemas for ratings left by clients.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    professional_id: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    establishment_id: str = ""
    score: float = Field(..., ge=0, le=5)
    comment: str = ""


class RatingResponse(RatingCreate):
    id: str
    created_at: Optional[datetime] = None
