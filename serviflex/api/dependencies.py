"""
FastAPI dependency functions.

Provides reusable dependency injection functions for FastAPI routes:
the request-scoped Firestore client and the optional bearer-token user.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from google.cloud.firestore import AsyncClient

from serviflex.core.firebase import get_db
from serviflex.core.security import TokenData, decode_access_token


# Bearer scheme that lets anonymous requests through
optional_security = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(optional_security)],
) -> Optional[TokenData]:
    """
    Dependency to identify the caller when a bearer token is sent.

    Routes stay public: a missing, malformed or expired token yields None
    rather than a 401.

    Returns:
        TokenData for a valid token, otherwise None

    Example:
        @router.post("/establishments")
        async def create(user: OptionalUser):
            owner = user.user_id if user else None
    """
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


# Type aliases for dependency injection
Database = Annotated[AsyncClient, Depends(get_db)]
OptionalUser = Annotated[Optional[TokenData], Depends(get_optional_user)]
