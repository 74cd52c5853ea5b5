"""
Company model - the tenant root
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime
from datetime import datetime
from typing import Optional
from enum import Enum

from attendance_tracker.core.clock import utc_now


class SubscriptionStatus(str, Enum):
    """Subscription states mirrored from the payment provider"""
    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    UNPAID = "unpaid"
    INCOMPLETE = "incomplete"
    CANCELED = "canceled"


class Company(SQLModel, table=True):
    """Company owning users, kiosks, employees and attendance logs"""

    __tablename__ = "companies"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, nullable=False, max_length=255)

    # Subscription
    subscription_plan: str = Field(default="tier1", max_length=50, description="Plan key from the plan catalog")
    max_employees: int = Field(default=5, description="Seat capacity of subscription_plan when last synced")
    subscription_status: str = Field(default=SubscriptionStatus.ACTIVE.value, max_length=50)
    stripe_customer_id: Optional[str] = Field(default=None, index=True, max_length=255)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def is_subscription_active(self) -> bool:
        return self.subscription_status == SubscriptionStatus.ACTIVE.value
