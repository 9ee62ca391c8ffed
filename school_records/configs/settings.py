import os
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Core database settings (required)
    DB_USER: str
    DB_PASSWORD: str
    DB_HOST: str
    DB_PORT: str
    DB_NAME: str

    # Full SQLAlchemy URL, overrides the DB_* parts when set (e.g. sqlite:// for tests)
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False
    DB_POOL_TIMEOUT_SECONDS: int = 10
    DB_CONNECT_TIMEOUT_SECONDS: int = 10
    DB_STATEMENT_TIMEOUT_MS: int = 15000

    # Storage settings (required)
    STORAGE_ENDPOINT: str
    STORAGE_ACCESS_KEY: str
    STORAGE_SECRET_KEY: str

    STORAGE_SECURE: bool = False
    STORAGE_PUBLIC_URL: Optional[str] = None
    STORAGE_PHOTO_BUCKET: str = "student-photos"
    STORAGE_TIMEOUT_SECONDS: float = 30.0

    # JWT settings (required)
    JWT_ACCESS_SECRET: str
    JWT_REFRESH_SECRET: str

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    # Optional development settings
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    class Config:
        # Look for env file in project root, even when running from subdirectories
        env_file = os.getenv("ENV_FILE") or str(Path(__file__).parent.parent.parent / "local.env")
        # Allow case-insensitive environment variable names
        case_sensitive = False

settings = Settings()
