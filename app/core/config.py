# app/core/config.py

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Finance Tracker API"
    DEBUG: bool = False
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 8000

    # Database Configuration
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    # Apply Alembic migrations on startup; when disabled tables are created from the models
    RUN_MIGRATIONS: bool = True

    # JWT / Security Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    BCRYPT_ROUNDS: int = 12

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    # Plaid Configuration
    PLAID_CLIENT_ID: str = ""
    PLAID_SECRET: str = ""
    PLAID_ENV: str = "sandbox"
    PLAID_CLIENT_NAME: str = "Finance Budget App"
    PLAID_TIMEOUT_SECONDS: float = 10.0
    PLAID_SYNC_DAYS: int = 30

    @property
    def is_sqlite(self) -> bool:
        """Check if we're running against SQLite (local runs and tests)"""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def plaid_configured(self) -> bool:
        return bool(self.PLAID_CLIENT_ID and self.PLAID_SECRET)

# Create a global settings instance
settings = Settings()
