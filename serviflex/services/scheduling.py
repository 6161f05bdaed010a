"""
Appointment slot validation.

A professional declares weekly windows ("Monday", "09:00" - "18:00").
A requested appointment fits when the whole slot [start, start + duration)
lies inside one available window for the appointment's weekday, in the
business timezone.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, Optional
from zoneinfo import ZoneInfo

from google.cloud.firestore import AsyncClient

from serviflex.core.config import settings
from serviflex.core.exceptions import SlotValidationError
from serviflex.core.logging_config import get_logger
from serviflex.repositories.appointments import AppointmentRepository
from serviflex.repositories.procedures import ProcedureRepository
from serviflex.repositories.working_hours import WorkingHoursRepository

logger = get_logger(__name__)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

MINUTES_PER_DAY = 24 * 60


def normalize_weekday(value: str) -> Optional[str]:
    """Return the canonical weekday name for `value`, or None if it is not one."""
    name = value.strip().capitalize()
    return name if name in WEEKDAYS else None


def weekday_name(moment: datetime) -> str:
    return WEEKDAYS[moment.weekday()]


def parse_clock(value: str) -> int:
    """
    Parse an "HH:MM" clock time into minutes after midnight.

    Single-digit hours ("9:30") are accepted.

    Raises:
        ValueError: If the value is not a valid 24h clock time
    """
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit() or len(minutes) != 2 or len(hours) > 2:
        raise ValueError(f"Invalid time (expected HH:MM): {value!r}")

    h, m = int(hours), int(minutes)
    if h >= 24 or m >= 60:
        raise ValueError(f"Invalid time (expected HH:MM): {value!r}")
    return h * 60 + m


def fits_working_hours(
    start_minutes: int,
    duration_minutes: int,
    windows: Iterable[Dict[str, Any]],
) -> bool:
    """
    Check whether a slot fits inside any of the given windows.

    Args:
        start_minutes: Slot start, minutes after midnight
        duration_minutes: Slot length
        windows: Working-hours documents with start_time, end_time and
            optionally available

    Returns:
        True if some available window contains the whole slot. Windows
        with malformed times are ignored.
    """
    end_minutes = start_minutes + duration_minutes
    if end_minutes > MINUTES_PER_DAY:
        return False

    for window in windows:
        if not window.get("available", True):
            continue
        try:
            window_start = parse_clock(window.get("start_time", ""))
            window_end = parse_clock(window.get("end_time", ""))
        except ValueError:
            logger.warning(
                "Skipping malformed working-hours window",
                extra={"document_id": window.get("id")},
            )
            continue
        if start_minutes >= window_start and end_minutes <= window_end:
            return True
    return False


def to_business_time(moment: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Express `moment` in the business timezone.

    Naive datetimes are taken to already be business-local time.
    """
    tz = tz or settings.tz
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


class AppointmentScheduler:
    """
    Books appointments after checking them against the professional's
    procedures and working hours.

    Attributes:
        db: Firestore client
        tz: Timezone working hours are expressed in
    """

    def __init__(self, db: AsyncClient, tz: Optional[ZoneInfo] = None):
        self.db = db
        self.tz = tz or settings.tz

    async def book(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and store an appointment.

        Args:
            data: Appointment fields; `procedure` is the procedure name and
                `scheduled_at` a datetime

        Returns:
            Stored appointment with "id"

        Raises:
            SlotValidationError: If the procedure is unknown or has no
                positive duration, the professional does not work that day,
                or the slot falls outside every window
        """
        professional_id = data["professional_id"]

        procedure = await ProcedureRepository(self.db).find_by_name(professional_id, data["procedure"])
        if procedure is None:
            raise SlotValidationError(f"Procedure not found for this professional: {data['procedure']}")

        local_start = to_business_time(data["scheduled_at"], self.tz)
        weekday = weekday_name(local_start)

        windows = await WorkingHoursRepository(self.db).for_weekday(professional_id, weekday)
        if not windows:
            raise SlotValidationError(f"Professional does not work on {weekday}")

        duration = int(procedure.get("duration_minutes") or 0)
        if duration <= 0:
            raise SlotValidationError(f"Procedure has no duration: {data['procedure']}")

        start_minutes = local_start.hour * 60 + local_start.minute
        if not fits_working_hours(start_minutes, duration, windows):
            raise SlotValidationError("Requested time is outside the professional's working hours")

        document = dict(data)
        document["scheduled_at"] = local_start
        appointment = await AppointmentRepository(self.db).create(document)

        logger.info(
            "Appointment booked",
            extra={"collection": AppointmentRepository.collection_name, "document_id": appointment["id"]},
        )
        return appointment
