"""
Pydantic schemas for kiosk taps and attendance logs
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from attendance_tracker.models.attendance_log import AttendanceEvent


class TapRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    nfc_card_id: str = Field(..., min_length=1, max_length=255)


class TapResponse(BaseModel):
    """Feedback shown on the kiosk display"""
    success: bool = True
    message: str
    employee_name: str
    action: AttendanceEvent


class AttendanceLogRead(BaseModel):
    id: int
    employee_id: int
    employee_name: Optional[str] = None
    kiosk_id: Optional[int] = None
    nfc_card_id: str
    event_type: AttendanceEvent
    timestamp: datetime
