"""
Tenant onboarding and login
"""

from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
import structlog

from attendance_tracker.core.auth import create_access_token, hash_password, verify_password
from attendance_tracker.core.exceptions import InvalidCredentials, RegistrationConflict
from attendance_tracker.core.plans import PlanCatalog
from attendance_tracker.models import Company, Kiosk, User
from attendance_tracker.repositories import CompanyRepository, KioskRepository, UserRepository

logger = structlog.get_logger(__name__)


def register_company(
    session: Session,
    catalog: PlanCatalog,
    company_name: str,
    email: str,
    password: str,
    kiosk_name: str,
) -> Tuple[Company, User, Kiosk]:
    """
    Create a company on the default plan together with its first user and a
    default kiosk. All three rows commit together or not at all.
    """
    password_hash = hash_password(password)
    try:
        company = CompanyRepository(session).add(company_name, catalog.default)
        user = UserRepository(session).add(company.id, email, password_hash)
        kiosk = KioskRepository(session).add(company.id, kiosk_name)
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.info(f"Registration rejected, company or email taken: {company_name}")
        raise RegistrationConflict() from exc
    except Exception:
        session.rollback()
        raise

    session.refresh(company)
    logger.info(f"Company registered: {company.id}", plan=company.subscription_plan)
    return company, user, kiosk


def authenticate(session: Session, email: str, password: str) -> Tuple[User, str]:
    """Verify credentials and issue an access token"""
    user = UserRepository(session).get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials()

    token = create_access_token(user_id=user.id, email=user.email, company_id=user.company_id)
    logger.info(f"User logged in: {user.id}")
    return user, token
