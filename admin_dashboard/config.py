"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env
file as a fallback. Secrets (the JWT signing key, SMTP password, admin password
hashes) never live in source code; .env.example provides a safe template.

Pydantic Settings automatically:
  1. Reads from environment variables (highest priority)
  2. Falls back to .env file values
  3. Uses defaults defined here (lowest priority)

Complex fields such as ADMIN_ACCOUNTS are parsed from JSON, e.g.:

    ADMIN_ACCOUNTS='[{"id": "admin-1", "email": "ops@example.com",
                      "name": "Ops", "password_hash": "$argon2id$..."}]'

Usage:
    from admin_dashboard.config import settings
    print(settings.SECRET_KEY)
"""

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminAccount(BaseModel):
    """
    One operator identity permitted to use the dashboard.

    The list of admin accounts is static for the lifetime of the process.
    Only the Argon2 hash of the password is configured; generate one with
    ``python demo/hash_password.py``.
    """
    id: str
    email: str
    name: str
    role: str = "admin"
    password_hash: str


class Settings(BaseSettings):
    """
    Central configuration for the Admin API.

    Required fields (no defaults) MUST be set in .env or environment:
      - SECRET_KEY: Used to sign JWT tokens
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Application ---
    APP_NAME: str = "DocAvailable Admin API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Database ---
    # SQLite for local development; use postgresql+asyncpg://... in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./admin_dashboard.db"

    # --- Authentication ---
    # REQUIRED: no default, the operator must set a real secret
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # The fixed set of dashboard operators
    ADMIN_ACCOUNTS: list[AdminAccount] = []

    # --- CORS ---
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]

    # --- Email (SMTP) ---
    # Leaving SMTP_HOST unset disables delivery; messages are logged instead.
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_USE_TLS: bool = True
    EMAIL_FROM: str = "DocAvailable <noreply@docavailable.com>"
    MAIN_APP_URL: str = "http://localhost:8081"

    # --- Reporting ---
    # Plan prices in USD are reported in MWK at this fixed rate
    USD_TO_MWK_RATE: int = 1800


# Singleton: import this instance everywhere instead of creating new Settings()
settings = Settings()
