"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "Employee Attendance Tracker"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 10000

    # API
    ALLOWED_ORIGINS: list[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./employee_tracker.db"

    # JWT
    JWT_SECRET_KEY: str = "your-default-dev-secret-key"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8  # 8 hours

    # Kiosks
    KIOSK_API_KEY_HEADER: str = "X-API-Key"
    DEFAULT_KIOSK_NAME: str = "Main Kiosk"
    TAP_COOLDOWN_MINUTES: int = 0  # 0 disables the cooldown window

    # Attendance
    ATTENDANCE_LOG_LIMIT: int = 100

    # Stripe
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_WEBHOOK_SECRET: Optional[str] = None
    STRIPE_PRICE_TIER2: Optional[str] = None
    STRIPE_PRICE_TIER3: Optional[str] = None
    CHECKOUT_SUCCESS_URL: str = "http://localhost:3000/billing/success?session_id={CHECKOUT_SESSION_ID}"
    CHECKOUT_CANCEL_URL: str = "http://localhost:3000/billing/cancel"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
