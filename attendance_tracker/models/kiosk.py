"""
Kiosk model - check-in terminals authenticated by API key
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime
from datetime import datetime
from typing import Optional
import secrets

from attendance_tracker.core.clock import utc_now


def generate_api_key() -> str:
    """Random 128-bit key rendered as hex"""
    return secrets.token_hex(16)


class Kiosk(SQLModel, table=True):
    """Physical or software terminal submitting taps for one company"""

    __tablename__ = "kiosks"

    id: Optional[int] = Field(default=None, primary_key=True)
    company_id: int = Field(foreign_key="companies.id", index=True, description="Tenant ID for multi-tenant isolation")
    name: str = Field(nullable=False, max_length=255)
    api_key: str = Field(default_factory=generate_api_key, unique=True, index=True, nullable=False)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
