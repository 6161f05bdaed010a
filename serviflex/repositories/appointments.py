"""
Appointment and rating repositories.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from serviflex.core.collections import APPOINTMENTS, RATINGS
from serviflex.repositories.base import FirestoreRepository


class AppointmentRepository(FirestoreRepository):
    """
    Repository for appointments.

    Listings are ordered by `scheduled_at` ascending. Combining an equality
    filter with `order_by` on another field needs a composite index in
    Firestore (see firestore.indexes.json).
    """

    collection_name = APPOINTMENTS

    async def for_client(self, client_id: str) -> List[Dict[str, Any]]:
        return await self.find([("client_id", "==", client_id)], order_by="scheduled_at")

    async def for_professional(self, professional_id: str) -> List[Dict[str, Any]]:
        return await self.find([("professional_id", "==", professional_id)], order_by="scheduled_at")

    async def for_establishment(self, establishment_id: str) -> List[Dict[str, Any]]:
        return await self.find([("establishment_id", "==", establishment_id)], order_by="scheduled_at")

    async def in_range(
        self,
        field: str,
        value: str,
        start: datetime,
        end: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Appointments where `field == value` scheduled between start and end.

        Args:
            field: "professional_id" or "establishment_id"
            value: Owner id to match
            start: Inclusive lower bound
            end: Inclusive upper bound, defaults to now
        """
        end = end or datetime.now(timezone.utc)
        return await self.find([
            (field, "==", value),
            ("scheduled_at", ">=", start),
            ("scheduled_at", "<=", end),
        ])


class RatingRepository(FirestoreRepository):
    collection_name = RATINGS

    async def create_rating(self, data: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(data)
        document["created_at"] = datetime.now(timezone.utc)
        return await self.create(document)

    async def for_professional(self, professional_id: str) -> List[Dict[str, Any]]:
        return await self.find([("professional_id", "==", professional_id)])

    async def for_establishment(self, establishment_id: str) -> List[Dict[str, Any]]:
        return await self.find([("establishment_id", "==", establishment_id)])
