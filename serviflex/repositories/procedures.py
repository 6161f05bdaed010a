"""
Procedure repository.
"""

from typing import Any, Dict, List, Optional

from serviflex.core.collections import PROCEDURES
from serviflex.repositories.base import FirestoreRepository


class ProcedureRepository(FirestoreRepository):
    collection_name = PROCEDURES

    async def for_professional(self, professional_id: str) -> List[Dict[str, Any]]:
        return await self.find([("professional_id", "==", professional_id)])

    async def find_by_name(self, professional_id: str, name: str) -> Optional[Dict[str, Any]]:
        """
        Look up one of a professional's procedures by its exact name.

        Appointments reference procedures by name, so this is how booking
        and revenue reports find duration and price.
        """
        return await self.find_one([
            ("professional_id", "==", professional_id),
            ("name", "==", name),
        ])
