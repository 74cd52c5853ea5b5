"""
Schemas for API responses and requests
"""

from attendance_tracker.schemas.token import TokenResponse
from attendance_tracker.schemas.user import LoginRequest, RegisterRequest, RegisterResponse
from attendance_tracker.schemas.employee import EmployeeCreate, EmployeeCreated, EmployeeRead
from attendance_tracker.schemas.kiosk import KioskCreate, KioskRead
from attendance_tracker.schemas.attendance import AttendanceLogRead, TapRequest, TapResponse
from attendance_tracker.schemas.subscription import (
    CheckoutRequest,
    CheckoutResponse,
    PlanRead,
    SubscriptionStatusResponse,
)

__all__ = [
    "TokenResponse",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    "EmployeeCreate",
    "EmployeeCreated",
    "EmployeeRead",
    "KioskCreate",
    "KioskRead",
    "AttendanceLogRead",
    "TapRequest",
    "TapResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "PlanRead",
    "SubscriptionStatusResponse",
]
