"""
Security module for password hashing and access tokens.

Provides bcrypt password hashing and JWT token handling
(python-jose) for the login flow.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel

from serviflex.core.config import settings

# JWT Algorithm
ALGORITHM = "HS256"


class TokenData(BaseModel):
    """
    JWT token payload data model.

    Attributes:
        user_id: Document id of the authenticated user (`sub` claim)
        user_type: Collection the user lives in (clients, professionals, admins)
    """
    user_id: str
    user_type: Optional[str] = None
    exp: Optional[datetime] = None


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    Returns False (never raises) for hashes that are not valid bcrypt strings,
    e.g. legacy plaintext passwords.
    """
    if isinstance(hashed_password, str):
        hashed_bytes = hashed_password.encode("utf-8")
    else:
        hashed_bytes = hashed_password

    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_bytes)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Returns:
        Hashed password as a utf-8 string, ready to store in Firestore
    """
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode; `sub` should hold the user id
        expires_delta: Optional custom expiration time

    Example:
        >>> token = create_access_token({"sub": user_id, "type": "clients"})
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM
    )


def decode_access_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT access token.

    Returns:
        TokenData if valid, None if invalid, expired or missing `sub`
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM]
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    return TokenData(
        user_id=user_id,
        user_type=payload.get("type"),
        exp=payload.get("exp"),
    )
