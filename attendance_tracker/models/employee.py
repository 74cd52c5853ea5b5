"""
Employee model - per-company roster keyed by NFC card
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime, UniqueConstraint
from datetime import datetime
from typing import Optional

from attendance_tracker.core.clock import utc_now


class Employee(SQLModel, table=True):
    """Trackable worker; card ids are unique within a company only"""

    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("company_id", "nfc_card_id", name="uq_employees_company_card"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    company_id: int = Field(foreign_key="companies.id", index=True, description="Tenant ID for multi-tenant isolation")
    name: str = Field(nullable=False, max_length=255)
    nfc_card_id: str = Field(nullable=False, max_length=255)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
