"""
Centralized configuration management using Pydantic Settings.

This module provides type-safe configuration management with validation,
loading settings from environment variables and .env files.
"""

import json
import logging
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Secrets should never be committed to code - use .env file (gitignored).
    """

    # API Configuration
    api_prefix: str = Field(
        default="/api",
        description="Prefix for all resource endpoints"
    )
    project_name: str = Field(
        default="Serviflex API",
        description="Project name displayed in API docs"
    )

    # Firebase / Firestore
    firebase_project_id: str = Field(
        ...,
        description="Google Cloud project hosting the Firestore database"
    )
    firebase_credentials_path: Optional[str] = Field(
        default=None,
        description=(
            "Path to a service-account JSON file. When unset, application "
            "default credentials are used."
        )
    )

    # Scheduling
    business_timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone used to interpret appointment times and monthly reports"
    )

    # Security Configuration
    secret_key: str = Field(
        ...,
        description="Secret key for JWT token signing (generate with: openssl rand -hex 32)"
    )
    access_token_expire_minutes: int = Field(
        default=60,
        ge=1,
        description="JWT access token expiration time in minutes"
    )

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins (frontend URLs)"
    )
    cors_allow_credentials: bool = Field(
        default=False,
        description="Allow cookies/credentials in CORS requests"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    log_json: bool = Field(
        default=True,
        description="Emit single-line JSON logs (False for human-readable output)"
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """
        Parse cors_origins from JSON string or list.

        Supports comma-separated origins for easier .env configuration.
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is properly configured.

        Raises ValueError if still using placeholder value or too short.
        """
        if not v or v.strip() == "":
            raise ValueError(
                "SECRET_KEY is required and cannot be empty. "
                "Generate one with: openssl rand -hex 32"
            )
        if v in ["generate-with-openssl-rand-hex-32", "CHANGE_ME_32_CHARS_MIN", "your-secret-key-here"]:
            raise ValueError(
                "SECRET_KEY must be set to a secure random value (not placeholder). "
                "Generate one with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError(
                f"SECRET_KEY must be at least 32 characters long for security. "
                f"Current length: {len(v)}. Generate with: openssl rand -hex 32"
            )
        return v

    @field_validator("firebase_project_id")
    @classmethod
    def validate_project_id(cls, v: str) -> str:
        """Reject empty and placeholder project ids."""
        if not v or v.strip() == "":
            raise ValueError("FIREBASE_PROJECT_ID is required and cannot be empty")
        if "your-project" in v.lower() or "change_me" in v.lower():
            raise ValueError(
                "FIREBASE_PROJECT_ID contains placeholder value. "
                "Use the project id shown in the Firebase console."
            )
        return v.strip()

    @field_validator("business_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"BUSINESS_TIMEZONE is not a valid IANA timezone: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got: {v}")
        return level

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.business_timezone)


# Global settings instance
# Import this instance throughout the application
settings = Settings()
