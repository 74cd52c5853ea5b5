"""
Pydantic schemas for kiosks
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class KioskCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)


class KioskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    name: str
    api_key: str
    created_at: datetime
