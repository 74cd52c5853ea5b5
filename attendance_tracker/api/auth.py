"""
Auth API endpoints - company registration and login
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
import structlog

from attendance_tracker.core.config import Settings, get_settings
from attendance_tracker.core.database import get_session
from attendance_tracker.core.exceptions import InvalidCredentials, RegistrationConflict
from attendance_tracker.core.plans import PlanCatalog, get_plan_catalog
from attendance_tracker.schemas import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from attendance_tracker.services.registration import authenticate, register_company

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    session: Session = Depends(get_session),
    catalog: PlanCatalog = Depends(get_plan_catalog),
    settings: Settings = Depends(get_settings),
):
    """Register a company with its first user and a default kiosk"""
    try:
        company, _, _ = register_company(
            session,
            catalog,
            company_name=data.company_name,
            email=data.email,
            password=data.password,
            kiosk_name=settings.DEFAULT_KIOSK_NAME,
        )
    except RegistrationConflict as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception:
        logger.exception("Registration error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register."
        )

    return RegisterResponse(
        message="Company, user, and kiosk registered successfully.",
        company_id=company.id,
    )


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    session: Session = Depends(get_session),
):
    """Exchange email and password for a bearer token"""
    try:
        _, token = authenticate(session, data.email, data.password)
    except InvalidCredentials as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    except Exception:
        logger.exception("Login error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal server error occurred."
        )

    return TokenResponse(token=token)
