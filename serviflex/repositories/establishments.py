"""
Establishment repository, including the member subcollection and the
invitation workflow that links professionals to an establishment.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from serviflex.core.collections import (
    ESTABLISHMENT_MEMBERS,
    ESTABLISHMENTS,
    NOTIFICATIONS,
    PROFESSIONALS,
)
from serviflex.core.exceptions import DocumentNotFoundError, ServiflexError
from serviflex.core.logging_config import get_logger
from serviflex.repositories.base import FirestoreRepository, snapshot_to_dict

logger = get_logger(__name__)

INVITE_TYPE = "establishment_invite"
MEMBER_ACTIVE = "active"
ANSWER_ACCEPTED = "accepted"
ANSWER_DECLINED = "declined"
VALID_ANSWERS = (ANSWER_ACCEPTED, ANSWER_DECLINED)


class InvalidAnswerError(ServiflexError):
    """Raised for an unknown answer or an invitation that was already answered (400)."""


class EstablishmentRepository(FirestoreRepository):
    """
    Repository for establishments and their member professionals.

    Members live in the `establishments/{id}/professionals` subcollection,
    keyed by the professional's id.
    """

    collection_name = ESTABLISHMENTS

    def members(self, establishment_id: str):
        return self.collection.document(establishment_id).collection(ESTABLISHMENT_MEMBERS)

    async def create_establishment(
        self,
        data: Dict[str, Any],
        owner_uid: Optional[str] = None,
    ) -> Dict[str, Any]:
        document = dict(data)
        document["created_at"] = datetime.now(timezone.utc)
        document["owner_uid"] = owner_uid
        return await self.create(document)

    async def update_establishment(self, establishment_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite an establishment, keeping its creation time and owner.

        Raises:
            DocumentNotFoundError: If the establishment does not exist
        """
        current = await self.require(establishment_id)
        document = dict(data)
        document["created_at"] = current.get("created_at")
        document["owner_uid"] = current.get("owner_uid")
        return await self.replace(establishment_id, document)

    async def add_member(self, establishment_id: str, professional_uid: str, name: str = "") -> Dict[str, Any]:
        member = {
            "uid": professional_uid,
            "name": name,
            "status": MEMBER_ACTIVE,
            "added_at": datetime.now(timezone.utc),
        }
        await self.members(establishment_id).document(professional_uid).set(member)
        logger.info(
            "Professional added to establishment",
            extra={"collection": ESTABLISHMENTS, "document_id": establishment_id},
        )
        return member

    async def remove_member(self, establishment_id: str, professional_uid: str) -> None:
        """
        Unlink a professional from an establishment.

        Deletes the member document and clears the professional's
        `establishment_id`. A professional document that no longer exists
        is left alone.

        Raises:
            DocumentNotFoundError: If the establishment has no such member
        """
        member_ref = self.members(establishment_id).document(professional_uid)
        snapshot = await member_ref.get()
        if not snapshot.exists:
            raise DocumentNotFoundError(
                f"{ESTABLISHMENTS}/{establishment_id}/{ESTABLISHMENT_MEMBERS}",
                professional_uid,
            )
        await member_ref.delete()

        professional_ref = self.db.collection(PROFESSIONALS).document(professional_uid)
        if (await professional_ref.get()).exists:
            await professional_ref.update({"establishment_id": ""})

        logger.info(
            "Professional removed from establishment",
            extra={"collection": ESTABLISHMENTS, "document_id": establishment_id},
        )

    async def list_members(self, establishment_id: str) -> List[Dict[str, Any]]:
        snapshots = await self.members(establishment_id).get()
        members = []
        for snapshot in snapshots:
            member = snapshot.to_dict() or {}
            member.setdefault("uid", snapshot.id)
            members.append(member)
        return members


class NotificationRepository(FirestoreRepository):
    """Repository for notifications, currently only establishment invitations."""

    collection_name = NOTIFICATIONS

    async def create_invite(self, establishment_id: str, professional_uid: str) -> Dict[str, Any]:
        """
        Invite a professional to join an establishment.

        Raises:
            DocumentNotFoundError: If the establishment or professional does not exist
        """
        establishment = await EstablishmentRepository(self.db).require(establishment_id)

        professional = await self.db.collection(PROFESSIONALS).document(professional_uid).get()
        if not professional.exists:
            raise DocumentNotFoundError(PROFESSIONALS, professional_uid)

        notification = {
            "to_uid": professional_uid,
            "type": INVITE_TYPE,
            "message": f"You have been invited to join {establishment.get('name', 'an establishment')}",
            "establishment_id": establishment_id,
            "answered": False,
            "answer": None,
            "created_at": datetime.now(timezone.utc),
        }
        return await self.create(notification)

    async def pending_invites(self, professional_uid: str) -> List[Dict[str, Any]]:
        return await self.find([
            ("to_uid", "==", professional_uid),
            ("type", "==", INVITE_TYPE),
            ("answered", "==", False),
        ])

    async def answer_invite(self, notification_id: str, answer: str) -> Dict[str, Any]:
        """
        Record a professional's answer to an invitation.

        When accepted, the professional becomes an active member of the
        establishment and their `establishment_id` points to it.

        Args:
            notification_id: Invitation notification id
            answer: "accepted" or "declined"

        Returns:
            Updated notification data

        Raises:
            InvalidAnswerError: If the answer is unknown or the invite was already answered
            DocumentNotFoundError: If the notification does not exist
        """
        if answer not in VALID_ANSWERS:
            raise InvalidAnswerError(f"Answer must be one of: {', '.join(VALID_ANSWERS)}")

        notification = await self.require(notification_id)
        if notification.get("answered"):
            raise InvalidAnswerError("Invitation has already been answered")

        await self.update_fields(notification_id, {"answered": True, "answer": answer})
        notification.update({"answered": True, "answer": answer})

        if answer == ANSWER_ACCEPTED:
            establishment_id = notification["establishment_id"]
            professional_uid = notification["to_uid"]

            professional_ref = self.db.collection(PROFESSIONALS).document(professional_uid)
            professional = await professional_ref.get()
            name = ""
            if professional.exists:
                name = snapshot_to_dict(professional).get("name", "")

            await EstablishmentRepository(self.db).add_member(establishment_id, professional_uid, name)
            if professional.exists:
                await professional_ref.update({"establishment_id": establishment_id})

        return notification
