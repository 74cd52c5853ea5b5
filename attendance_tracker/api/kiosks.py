"""
Kiosk registry API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from typing import List
import structlog

from attendance_tracker.core.database import get_session
from attendance_tracker.core.dependencies import get_company_id
from attendance_tracker.repositories import KioskRepository
from attendance_tracker.schemas import KioskCreate, KioskRead

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[KioskRead])
def list_kiosks(
    company_id: int = Depends(get_company_id),
    session: Session = Depends(get_session)
):
    """List the company's kiosks with their API keys"""
    try:
        return KioskRepository(session).list(company_id)
    except Exception:
        logger.exception("Error fetching kiosks")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch kiosk list."
        )


@router.post("", response_model=KioskRead, status_code=status.HTTP_201_CREATED)
def create_kiosk(
    data: KioskCreate,
    company_id: int = Depends(get_company_id),
    session: Session = Depends(get_session)
):
    """Register an additional kiosk and issue its API key"""
    try:
        kiosk = KioskRepository(session).add(company_id, data.name)
        session.commit()
        session.refresh(kiosk)
    except Exception:
        session.rollback()
        logger.exception("Error creating kiosk")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create kiosk."
        )

    logger.info(f"Kiosk {kiosk.id} created", company_id=company_id)
    return kiosk
