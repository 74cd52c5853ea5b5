"""
User model - login identities scoped to a company
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime
from datetime import datetime
from typing import Optional

from attendance_tracker.core.clock import utc_now


class User(SQLModel, table=True):
    """Credential holder belonging to exactly one company"""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    company_id: int = Field(foreign_key="companies.id", index=True, description="Tenant ID for multi-tenant isolation")

    # Authentication
    email: str = Field(unique=True, index=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
