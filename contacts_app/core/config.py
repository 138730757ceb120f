# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration: all env-driven.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "contacts-app")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8080"))

    DB_FILE: str = os.getenv("CONTACTS_DB_FILE", "contacts.json")
    PAGE_SIZE: int = int(os.getenv("CONTACTS_PAGE_SIZE", "100"))

    SESSION_SECRET: str = os.getenv("CONTACTS_SESSION_KEY", "")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "mysession")

    ARCHIVE_STEPS: int = int(os.getenv("ARCHIVE_STEPS", "10"))
    ARCHIVE_TIME_UNIT: float = float(os.getenv("ARCHIVE_TIME_UNIT", "1.0"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
