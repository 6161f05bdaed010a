"""
Working-hours repository.

Each document is one weekly window for one professional and weekday.
"""

from typing import Any, Dict, List, Sequence, Tuple

from serviflex.core.collections import WORKING_HOURS
from serviflex.repositories.base import FirestoreRepository


class WorkingHoursRepository(FirestoreRepository):
    collection_name = WORKING_HOURS

    async def for_professional(self, professional_id: str) -> List[Dict[str, Any]]:
        return await self.find([("professional_id", "==", professional_id)])

    async def for_weekday(self, professional_id: str, weekday: str) -> List[Dict[str, Any]]:
        return await self.find([
            ("professional_id", "==", professional_id),
            ("weekday", "==", weekday),
        ])

    async def create_many(
        self,
        professional_id: str,
        weekdays: Sequence[str],
        start_time: str,
        end_time: str,
    ) -> Tuple[List[Dict[str, Any]], List[str]]:
        """
        Register the same window on several weekdays.

        Weekdays the professional already has a window for are skipped,
        as are repeats within `weekdays`.

        Returns:
            (created documents, skipped weekdays)
        """
        existing = {doc.get("weekday") for doc in await self.for_professional(professional_id)}

        created: List[Dict[str, Any]] = []
        skipped: List[str] = []
        for weekday in weekdays:
            if weekday in existing:
                skipped.append(weekday)
                continue
            document = await self.create({
                "professional_id": professional_id,
                "weekday": weekday,
                "start_time": start_time,
                "end_time": end_time,
                "available": True,
            })
            existing.add(weekday)
            created.append(document)

        return created, skipped

    async def update_window(self, window_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite a window's weekday, times and availability.

        Raises:
            DocumentNotFoundError: If the window does not exist
        """
        current = await self.require(window_id)
        document = dict(data)
        document["professional_id"] = current.get("professional_id", "")
        return await self.replace(window_id, document)
