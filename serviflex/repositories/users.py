"""
User repository for clients, professionals and admins.

The three kinds of account live in separate collections but share the
same email/password handling, so one repository class is bound to a
collection at construction time.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from google.cloud.firestore import AsyncClient

from serviflex.core.collections import ADMINS, USER_COLLECTIONS
from serviflex.core.exceptions import DocumentNotFoundError, DuplicateEmailError
from serviflex.core.security import get_password_hash, verify_password
from serviflex.repositories.base import FirestoreRepository

# Set by invitation answers and member removal; a profile overwrite keeps them unless given
LINK_FIELDS = ("establishment_id",)


class UserRepository(FirestoreRepository):
    """
    Repository for one user collection.

    Attributes:
        db: Firestore client
        collection_name: One of USER_COLLECTIONS
    """

    def __init__(self, db: AsyncClient, collection_name: str):
        if collection_name not in USER_COLLECTIONS:
            raise ValueError(f"Unknown user collection: {collection_name}")
        super().__init__(db)
        self.collection_name = collection_name

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.find_one([("email", "==", email)])

    async def email_exists(self, email: str) -> bool:
        """
        Check if an email is already registered in this collection.

        Note:
            Uniqueness is per collection: the same email may hold a client
            and a professional account.
        """
        return await self.find_by_email(email) is not None

    async def create_user(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new user document.

        Args:
            data: User fields including a plaintext "password"

        Returns:
            Stored user data (password field holds the bcrypt hash)

        Raises:
            DuplicateEmailError: If the email is already registered here
        """
        if await self.email_exists(data["email"]):
            raise DuplicateEmailError(data["email"])

        document = dict(data)
        document["password"] = get_password_hash(data["password"])
        document["created_at"] = datetime.now(timezone.utc)
        if self.collection_name == ADMINS:
            document["type"] = "admin"

        return await self.create(document)

    async def update_profile(
        self,
        user_id: str,
        data: Dict[str, Any],
        password: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Overwrite a user's profile.

        The document is replaced with `data`; the id and creation time are
        preserved, and the stored password hash and LINK_FIELDS are kept
        unless new values are given.

        Raises:
            DocumentNotFoundError: If the user does not exist
            DuplicateEmailError: If the new email belongs to another user
        """
        current = await self.get(user_id)
        if current is None:
            raise DocumentNotFoundError(self.collection_name, user_id)

        if data.get("email") and data["email"] != current.get("email"):
            other = await self.find_by_email(data["email"])
            if other is not None and other["id"] != user_id:
                raise DuplicateEmailError(data["email"])

        document = {field: current[field] for field in LINK_FIELDS if field in current}
        document.update(data)
        document["password"] = (
            get_password_hash(password) if password else current.get("password", "")
        )
        document["created_at"] = current.get("created_at")
        if self.collection_name == ADMINS:
            document["type"] = "admin"

        return await self.replace(user_id, document)


async def authenticate(db: AsyncClient, email: str, password: str) -> Optional[Dict[str, Any]]:
    """
    Authenticate a user by email and password across all user collections.

    Collections are searched in USER_COLLECTIONS order; the first account
    with this email and a matching password wins.

    Returns:
        User data with "type" set to the collection name, or None
    """
    for collection_name in USER_COLLECTIONS:
        repo = UserRepository(db, collection_name)
        user = await repo.find_by_email(email)
        if user and verify_password(password, user.get("password", "")):
            user["type"] = collection_name
            return user
    return None
