"""
Rating endpoint. Ratings feed the professional and establishment reports.
"""

import logging

from fastapi import APIRouter, status

from serviflex.api.dependencies import Database
from serviflex.repositories.appointments import RatingRepository
from serviflex.schemas.ratings import RatingCreate, RatingResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ratings"])


@router.post(
    "/ratings",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Rate a professional",
    description="Record a client's score (0-5) and comment for a professional.",
)
async def create_rating(request: RatingCreate, db: Database) -> RatingResponse:
    rating = await RatingRepository(db).create_rating(request.model_dump())
    return RatingResponse(**rating)
