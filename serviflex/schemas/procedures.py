"""
Schemas for procedures (priced, timed services offered by a professional).
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProcedureInput(BaseModel):
    professional_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: float = Field(..., ge=0, description="Price charged per appointment")
    duration_minutes: int = Field(..., gt=0, le=24 * 60, description="Duration in minutes")
    image_url: Optional[str] = None


class ProcedureResponse(ProcedureInput):
    id: str


class ImageUpdate(BaseModel):
    image_url: str = ""


class ImageResponse(BaseModel):
    image_url: str
