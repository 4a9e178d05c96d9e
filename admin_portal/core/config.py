# admin_portal/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string; sqlite:// works locally)
      - JWT_SECRET (signing secret for session tokens)

    Optional:
      - SMTP_* (only needed when invitations are actually mailed)
      - INVITE_LINK_BASE_URL (page that reads ?email=&code= and calls verify-otp)
    """

    PROJECT_NAME: str = "Admin Portal API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str

    # Session tokens
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    # Used for tokens minted by verify-otp and login. Refresh is fixed at 1h.
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Onboarding
    OTP_EXPIRE_MINUTES: int = 10
    MIN_PASSWORD_LENGTH: int = 6
    BCRYPT_ROUNDS: int = 12
    INVITE_LINK_BASE_URL: str = "http://127.0.0.1:5500/otp-flow.html"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Outbound mail
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_FROM_NAME: str = "Admin Portal"
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
