"""
Pydantic schemas for employees
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class EmployeeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    nfc_card_id: str = Field(..., min_length=1, max_length=255)


class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    name: str
    nfc_card_id: str
    created_at: datetime


class EmployeeCreated(BaseModel):
    message: str = "Employee added successfully."
    employee: EmployeeRead
