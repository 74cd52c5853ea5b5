"""
Seat-limit gate for employee inserts

Counting a company's employees and inserting a new one happen inside one
exclusive scope for that company: an in-process lock keyed by company id,
plus a row lock on the company (SELECT ... FOR UPDATE) for stores that
support it. Inserts for different companies proceed independently.
"""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
import structlog

from attendance_tracker.core.exceptions import (
    CardAlreadyInUse,
    CompanyNotFound,
    SeatLimitReached,
    SubscriptionInactive,
)
from attendance_tracker.core.locks import KeyedLock, company_locks
from attendance_tracker.models import Company, Employee
from attendance_tracker.repositories import CompanyRepository, EmployeeRepository

logger = structlog.get_logger(__name__)


def check_capacity(company: Company, employee_count: int) -> None:
    """Raise when the company may not take on another employee"""
    if not company.is_subscription_active:
        raise SubscriptionInactive(company.subscription_status)
    if employee_count >= company.max_employees:
        raise SeatLimitReached(company.max_employees)


def add_employee(
    session: Session,
    company_id: int,
    name: str,
    nfc_card_id: str,
    locks: KeyedLock = company_locks,
) -> Employee:
    """
    Insert an employee if the company's plan has a free seat.

    On any rejection nothing is written.
    """
    with locks.hold(company_id):
        employees = EmployeeRepository(session)
        try:
            company = CompanyRepository(session).get_for_update(company_id)
            if company is None:
                raise CompanyNotFound(company_id)

            check_capacity(company, employees.count(company_id))

            employee = employees.add(company_id, name, nfc_card_id)
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise CardAlreadyInUse(nfc_card_id) from exc
        except Exception:
            session.rollback()
            raise

    session.refresh(employee)
    logger.info(f"Employee {employee.id} added", company_id=company_id)
    return employee


def remove_employee(session: Session, company_id: int, employee_id: int) -> bool:
    """Delete an employee of this company; False when no such employee exists for it"""
    try:
        deleted = EmployeeRepository(session).delete(company_id, employee_id)
        session.commit()
    except Exception:
        session.rollback()
        raise

    if deleted:
        logger.info(f"Employee {employee_id} removed", company_id=company_id)
    return deleted
