"""
Attendance log model - append-only ledger of clock events
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime
from datetime import datetime
from typing import Optional
from enum import Enum

from attendance_tracker.core.clock import utc_now


class AttendanceEvent(str, Enum):
    """Clock event types"""
    CLOCK_IN = "clock-in"
    CLOCK_OUT = "clock-out"

    @property
    def label(self) -> str:
        return "Clocked In" if self is AttendanceEvent.CLOCK_IN else "Clocked Out"


class AttendanceLog(SQLModel, table=True):
    """Immutable clock event recorded by a kiosk tap"""

    __tablename__ = "attendance_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    company_id: int = Field(foreign_key="companies.id", index=True, description="Tenant ID for multi-tenant isolation")
    # Not a foreign key: log rows outlive the employee they describe
    employee_id: int = Field(index=True, nullable=False)
    kiosk_id: Optional[int] = Field(default=None, foreign_key="kiosks.id", nullable=True)
    nfc_card_id: str = Field(nullable=False, max_length=255, description="Card id as presented at the kiosk")
    event_type: str = Field(nullable=False, max_length=20)

    timestamp: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
