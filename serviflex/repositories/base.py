"""
Base repository for Firestore collections.

Wraps the handful of document operations every resource needs (point
reads, equality/range queries, create, overwrite, partial update, delete)
and returns plain dicts with the document id under "id".
"""

import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from google.cloud.firestore import AsyncClient
from google.cloud.firestore_v1.base_query import FieldFilter

from serviflex.core.exceptions import DocumentNotFoundError
from serviflex.core.logging_config import get_logger

logger = get_logger(__name__)

Filter = Tuple[str, str, Any]


def snapshot_to_dict(snapshot) -> Dict[str, Any]:
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


class FirestoreRepository:
    """
    Repository for one top-level Firestore collection.

    Subclasses set `collection_name` and add resource-specific queries.

    Attributes:
        db: Firestore AsyncClient for the current request
    """

    collection_name: str = ""

    def __init__(self, db: AsyncClient):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a document by id.

        Returns:
            Document data with "id", or None if it does not exist
        """
        snapshot = await self.collection.document(doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot_to_dict(snapshot)

    async def require(self, doc_id: str) -> Dict[str, Any]:
        """
        Retrieve a document by id, raising if it does not exist.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        document = await self.get(doc_id)
        if document is None:
            raise DocumentNotFoundError(self.collection_name, doc_id)
        return document

    async def exists(self, doc_id: str) -> bool:
        snapshot = await self.collection.document(doc_id).get()
        return snapshot.exists

    async def list_all(self) -> List[Dict[str, Any]]:
        snapshots = await self.collection.get()
        return [snapshot_to_dict(s) for s in snapshots]

    async def find(
        self,
        filters: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a query against the collection.

        Args:
            filters: (field, operator, value) triples, e.g. ("email", "==", email)
            order_by: Field to sort ascending by
            limit: Maximum number of documents

        Example:
            >>> await repo.find([("professional_id", "==", pid)], order_by="scheduled_at")
        """
        query = self.collection
        for field, op, value in filters:
            query = query.where(filter=FieldFilter(field, op, value))
        if order_by:
            query = query.order_by(order_by)
        if limit:
            query = query.limit(limit)

        snapshots = await query.get()
        return [snapshot_to_dict(s) for s in snapshots]

    async def find_one(self, filters: Sequence[Filter]) -> Optional[Dict[str, Any]]:
        documents = await self.find(filters, limit=1)
        return documents[0] if documents else None

    async def create(self, data: Dict[str, Any], doc_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Write a new document.

        Args:
            data: Document fields (any "id" key is not stored)
            doc_id: Explicit id; a UUID4 is generated when omitted

        Returns:
            Stored data with "id"
        """
        doc_id = doc_id or self.new_id()
        payload = {k: v for k, v in data.items() if k != "id"}

        await self.collection.document(doc_id).set(payload)

        logger.info(
            "Document created",
            extra={"collection": self.collection_name, "document_id": doc_id},
        )
        return {**payload, "id": doc_id}

    async def replace(self, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite an existing document with `data`.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        if not await self.exists(doc_id):
            raise DocumentNotFoundError(self.collection_name, doc_id)

        payload = {k: v for k, v in data.items() if k != "id"}
        await self.collection.document(doc_id).set(payload)

        logger.info(
            "Document replaced",
            extra={"collection": self.collection_name, "document_id": doc_id},
        )
        return {**payload, "id": doc_id}

    async def update_fields(self, doc_id: str, fields: Dict[str, Any]) -> None:
        """
        Update selected fields of an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        if not await self.exists(doc_id):
            raise DocumentNotFoundError(self.collection_name, doc_id)

        await self.collection.document(doc_id).update(fields)

    async def delete(self, doc_id: str) -> None:
        """
        Delete an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        if not await self.exists(doc_id):
            raise DocumentNotFoundError(self.collection_name, doc_id)

        await self.collection.document(doc_id).delete()

        logger.info(
            "Document deleted",
            extra={"collection": self.collection_name, "document_id": doc_id},
        )
