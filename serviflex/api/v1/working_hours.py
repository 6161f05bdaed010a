"""
Working-hours endpoints.

Professionals declare weekly windows per weekday; appointment booking
checks requested slots against them.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.exceptions import DocumentNotFoundError
from serviflex.repositories.working_hours import WorkingHoursRepository
from serviflex.schemas.common import MessageResponse
from serviflex.schemas.working_hours import (
    WorkingHoursBatchResponse,
    WorkingHoursCreate,
    WorkingHoursResponse,
    WorkingHoursUpdate,
)
from serviflex.services.scheduling import WEEKDAYS, normalize_weekday, parse_clock

logger = logging.getLogger(__name__)

router = APIRouter(tags=["working-hours"])


def validate_window(start_time: str, end_time: str) -> None:
    """
    Check a window's clock times.

    Raises:
        HTTPException 400: If a time is not HH:MM or start is not before end
    """
    try:
        start = parse_clock(start_time)
        end = parse_clock(end_time)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if start >= end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_time must be before end_time"
        )


def validate_weekday(value: str) -> str:
    weekday = normalize_weekday(value)
    if weekday is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid weekday '{value}'. Expected one of: {', '.join(WEEKDAYS)}"
        )
    return weekday


@router.post(
    "/working-hours",
    response_model=WorkingHoursBatchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register working hours",
    description="Register the same window on several weekdays. Weekdays already registered are skipped.",
)
async def create_working_hours(request: WorkingHoursCreate, db: Database) -> WorkingHoursBatchResponse:
    """
    Register working hours for a professional.

    Returns:
        The windows created and the weekdays skipped because the
        professional already had a window on them

    Raises:
        HTTPException 400: If a weekday or time is invalid
    """
    validate_window(request.start_time, request.end_time)
    weekdays = [validate_weekday(day) for day in request.weekdays]

    created, skipped = await WorkingHoursRepository(db).create_many(
        request.professional_id,
        weekdays,
        request.start_time,
        request.end_time,
    )

    logger.info(
        "Working hours registered",
        extra={
            "professional_id": request.professional_id,
            "created_count": len(created),
            "skipped_count": len(skipped),
        },
    )
    return WorkingHoursBatchResponse(
        created=[WorkingHoursResponse(**w) for w in created],
        skipped=skipped,
    )


@router.get(
    "/working-hours/{professional_id}",
    response_model=List[WorkingHoursResponse],
    summary="List a professional's working hours",
)
async def list_working_hours(professional_id: str, db: Database) -> List[WorkingHoursResponse]:
    windows = await WorkingHoursRepository(db).for_professional(professional_id)
    return [WorkingHoursResponse(**w) for w in windows]


@router.put(
    "/working-hours/{window_id}",
    response_model=WorkingHoursResponse,
    summary="Update working hours",
)
async def update_working_hours(
    window_id: str,
    request: WorkingHoursUpdate,
    db: Database,
) -> WorkingHoursResponse:
    """
    Overwrite one window's weekday, times and availability.

    Raises:
        HTTPException 400: If the weekday or times are invalid
        HTTPException 404: If the window does not exist
    """
    validate_window(request.start_time, request.end_time)
    data = request.model_dump()
    data["weekday"] = validate_weekday(request.weekday)

    try:
        window = await WorkingHoursRepository(db).update_window(window_id, data)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return WorkingHoursResponse(**window)


@router.delete(
    "/working-hours/{window_id}",
    response_model=MessageResponse,
    summary="Delete working hours",
)
async def delete_working_hours(window_id: str, db: Database) -> MessageResponse:
    try:
        await WorkingHoursRepository(db).delete(window_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Working hours deleted successfully")
