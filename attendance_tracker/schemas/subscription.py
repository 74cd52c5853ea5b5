"""
Pydantic schemas for subscription status and checkout
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SubscriptionStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan: str
    plan_name: str = Field(..., serialization_alias="planName")
    status: str
    employee_count: int = Field(..., serialization_alias="employeeCount")
    max_employees: int = Field(..., serialization_alias="maxEmployees")


class PlanRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: str
    name: str
    max_employees: int = Field(..., serialization_alias="maxEmployees")
    price_id: Optional[str] = Field(None, serialization_alias="priceId")


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    price_id: str = Field(..., alias="priceId", min_length=1)


class CheckoutResponse(BaseModel):
    id: str
    url: Optional[str] = None
