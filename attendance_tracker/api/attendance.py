"""
Attendance API endpoints - kiosk taps and log retrieval
"""

from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from typing import List
import structlog

from attendance_tracker.core.clock import as_utc
from attendance_tracker.core.config import Settings, get_settings
from attendance_tracker.core.database import get_session
from attendance_tracker.core.dependencies import get_company_id, get_current_kiosk
from attendance_tracker.core.exceptions import CardNotRecognized, TapCooldownActive
from attendance_tracker.models import Kiosk
from attendance_tracker.repositories import AttendanceRepository
from attendance_tracker.schemas import AttendanceLogRead, TapRequest, TapResponse
from attendance_tracker.services.attendance import record_tap

logger = structlog.get_logger(__name__)
router = APIRouter()
kiosk_router = APIRouter()


@router.get("", response_model=List[AttendanceLogRead])
def list_logs(
    company_id: int = Depends(get_company_id),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Most recent attendance events for the company, newest first"""
    try:
        rows = AttendanceRepository(session).recent(company_id, limit=settings.ATTENDANCE_LOG_LIMIT)
    except Exception:
        logger.exception("Error fetching attendance logs")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch attendance logs."
        )

    return [
        AttendanceLogRead(
            id=log.id,
            employee_id=log.employee_id,
            employee_name=employee_name,
            kiosk_id=log.kiosk_id,
            nfc_card_id=log.nfc_card_id,
            event_type=log.event_type,
            timestamp=as_utc(log.timestamp),
        )
        for log, employee_name in rows
    ]


@kiosk_router.post("/tap", response_model=TapResponse)
def tap(
    data: TapRequest,
    kiosk: Kiosk = Depends(get_current_kiosk),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Toggle the presented card's employee between clocked in and clocked out"""
    try:
        result = record_tap(
            session,
            kiosk,
            data.nfc_card_id,
            cooldown=timedelta(minutes=settings.TAP_COOLDOWN_MINUTES),
        )
    except CardNotRecognized as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TapCooldownActive as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(e),
            headers={"Retry-After": str(e.retry_after_seconds)},
        )
    except Exception:
        logger.exception("Error recording tap")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record attendance."
        )

    return TapResponse(
        message=result.event.label,
        employee_name=result.employee.name,
        action=result.event,
    )
