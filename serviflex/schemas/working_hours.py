"""
Schemas for professionals' weekly working hours.

Times are "HH:MM" strings; weekdays are English day names
("Monday" ... "Sunday"). Both are checked by the routes so that bad values
come back as 400.
"""

from typing import List

from pydantic import BaseModel, Field


class WorkingHoursCreate(BaseModel):
    professional_id: str = Field(..., min_length=1)
    weekdays: List[str] = Field(..., min_length=1)
    start_time: str = Field(..., examples=["09:00"])
    end_time: str = Field(..., examples=["18:00"])


class WorkingHoursUpdate(BaseModel):
    weekday: str
    start_time: str
    end_time: str
    available: bool = True


class WorkingHoursResponse(BaseModel):
    id: str
    professional_id: str
    weekday: str
    start_time: str
    end_time: str
    available: bool = True


class WorkingHoursBatchResponse(BaseModel):
    """
    Result of a bulk working-hours registration.

    Attributes:
        created: Windows written by this request
        skipped: Weekdays the professional already had registered
    """
    created: List[WorkingHoursResponse]
    skipped: List[str]
