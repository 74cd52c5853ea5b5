"""
Authentication and application-context dependencies for FastAPI
"""

from dataclasses import dataclass
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session
from typing import Optional
import structlog

from attendance_tracker.core.auth import decode_access_token
from attendance_tracker.core.config import Settings, get_settings
from attendance_tracker.core.database import get_session
from attendance_tracker.models import Kiosk
from attendance_tracker.repositories import KioskRepository
from attendance_tracker.services.stripe_billing import StripeBillingService

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Claims carried by a validated access token"""
    id: int
    email: str
    company_id: int


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """Missing token is 401, an invalid or expired one 403"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )

    return CurrentUser(
        id=int(payload["sub"]),
        email=payload.get("email", ""),
        company_id=int(payload["company_id"]),
    )


async def get_company_id(current_user: CurrentUser = Depends(get_current_user)) -> int:
    """Tenant of the authenticated user"""
    return current_user.company_id


def get_current_kiosk(
    request: Request,
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
) -> Kiosk:
    """Resolve the calling kiosk from its API key header"""
    api_key = request.headers.get(settings.KIOSK_API_KEY_HEADER)
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Kiosk API key required",
        )

    kiosk = KioskRepository(session).get_by_api_key(api_key)
    if kiosk is None:
        logger.info("Rejected unknown kiosk API key")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid kiosk API key",
        )
    return kiosk


def get_billing_service(settings: Settings = Depends(get_settings)) -> StripeBillingService:
    return StripeBillingService(settings)
