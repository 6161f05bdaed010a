"""
Revenue, ratings and appointment-volume reports for professionals and
establishments.

Reports are computed on request from the underlying documents; nothing is
cached or pre-aggregated.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from google.cloud.firestore import AsyncClient

from serviflex.core.config import settings
from serviflex.repositories.appointments import AppointmentRepository, RatingRepository
from serviflex.repositories.procedures import ProcedureRepository

REPORT_MONTHS = 12


def first_month_start(now: datetime, months: int = REPORT_MONTHS) -> datetime:
    """First instant of the earliest month in a `months`-long window ending with `now`'s month."""
    index = now.year * 12 + (now.month - 1) - (months - 1)
    year, month = divmod(index, 12)
    return now.replace(year=year, month=month + 1, day=1, hour=0, minute=0, second=0, microsecond=0)


def month_keys(now: datetime, months: int = REPORT_MONTHS) -> List[str]:
    """
    "YYYY-MM" keys for the `months` calendar months ending with `now`'s month.

    Example:
        >>> month_keys(datetime(2024, 3, 15), months=3)
        ['2024-01', '2024-02', '2024-03']
    """
    start = first_month_start(now, months)
    keys = []
    for offset in range(months):
        year, month = divmod(start.year * 12 + start.month - 1 + offset, 12)
        keys.append(f"{year:04d}-{month + 1:02d}")
    return keys


def count_by_month(
    scheduled: Iterable[datetime],
    now: datetime,
    tz: ZoneInfo,
    months: int = REPORT_MONTHS,
) -> Dict[str, int]:
    """Count datetimes per "YYYY-MM" bucket; values outside the window are dropped."""
    counts = {key: 0 for key in month_keys(now, months)}
    for moment in scheduled:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=tz)
        key = moment.astimezone(tz).strftime("%Y-%m")
        if key in counts:
            counts[key] += 1
    return counts


def sum_revenue(
    appointments: Iterable[Dict[str, Any]],
    prices: Dict[Any, float],
    key_fields: Tuple[str, ...] = ("procedure",),
) -> Tuple[int, float]:
    """
    Count appointments and add up their procedure prices.

    Args:
        appointments: Appointment documents
        prices: Price lookup keyed by the values of `key_fields`
        key_fields: Appointment fields forming the lookup key; a single
            field is looked up by its bare value

    Returns:
        (appointment count, total revenue). Unknown procedures add 0.
    """
    count = 0
    total = 0.0
    for appointment in appointments:
        values = tuple(appointment.get(field) for field in key_fields)
        key = values[0] if len(values) == 1 else values
        total += float(prices.get(key, 0.0))
        count += 1
    return count, total


def summarize_ratings(ratings: List[Dict[str, Any]]) -> Dict[str, Any]:
    if not ratings:
        return {"rating_count": 0, "average_score": 0.0, "ratings": []}

    total = sum(float(r.get("score", 0)) for r in ratings)
    return {
        "rating_count": len(ratings),
        "average_score": total / len(ratings),
        "ratings": ratings,
    }


class ReportService:
    """
    Builds reports from Firestore data.

    Attributes:
        db: Firestore client
        tz: Timezone month buckets are computed in
    """

    def __init__(self, db: AsyncClient, tz: Optional[ZoneInfo] = None):
        self.db = db
        self.tz = tz or settings.tz
        self.appointments = AppointmentRepository(db)
        self.procedures = ProcedureRepository(db)
        self.ratings = RatingRepository(db)

    async def professional_revenue(self, professional_id: str) -> Dict[str, Any]:
        appointments = await self.appointments.for_professional(professional_id)
        procedures = await self.procedures.for_professional(professional_id)

        prices = {p.get("name"): p.get("price", 0.0) for p in procedures}
        count, total = sum_revenue(appointments, prices)

        return {
            "professional_id": professional_id,
            "appointment_count": count,
            "total_revenue": total,
        }

    async def establishment_revenue(self, establishment_id: str) -> Dict[str, Any]:
        """
        Revenue of all appointments booked at an establishment.

        Prices come from each appointment's own professional, since two
        professionals may charge differently for a procedure with the same name.
        """
        appointments = await self.appointments.for_establishment(establishment_id)

        prices: Dict[Tuple[str, str], float] = {}
        for professional_id in {a.get("professional_id") for a in appointments}:
            for procedure in await self.procedures.for_professional(professional_id):
                prices[(professional_id, procedure.get("name"))] = procedure.get("price", 0.0)

        count, total = sum_revenue(appointments, prices, key_fields=("professional_id", "procedure"))

        return {
            "establishment_id": establishment_id,
            "appointment_count": count,
            "total_revenue": total,
        }

    async def professional_ratings(self, professional_id: str) -> Dict[str, Any]:
        ratings = await self.ratings.for_professional(professional_id)
        return {"professional_id": professional_id, **summarize_ratings(ratings)}

    async def establishment_ratings(self, establishment_id: str) -> Dict[str, Any]:
        ratings = await self.ratings.for_establishment(establishment_id)
        return {"establishment_id": establishment_id, **summarize_ratings(ratings)}

    async def _monthly(self, field: str, owner_id: str, now: Optional[datetime] = None) -> Dict[str, int]:
        now = (now or datetime.now(timezone.utc)).astimezone(self.tz)
        start = first_month_start(now)
        appointments = await self.appointments.in_range(field, owner_id, start, now)
        return count_by_month(
            (a["scheduled_at"] for a in appointments if a.get("scheduled_at")),
            now,
            self.tz,
        )

    async def professional_monthly(self, professional_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        return {
            "professional_id": professional_id,
            "appointments_per_month": await self._monthly("professional_id", professional_id, now),
        }

    async def establishment_monthly(self, establishment_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        return {
            "establishment_id": establishment_id,
            "appointments_per_month": await self._monthly("establishment_id", establishment_id, now),
        }
