"""
Employee roster API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from typing import List
import structlog

from attendance_tracker.core.database import get_session
from attendance_tracker.core.dependencies import get_company_id
from attendance_tracker.core.exceptions import (
    CardAlreadyInUse,
    CompanyNotFound,
    SeatLimitReached,
    SubscriptionInactive,
)
from attendance_tracker.repositories import EmployeeRepository
from attendance_tracker.schemas import EmployeeCreate, EmployeeCreated, EmployeeRead
from attendance_tracker.services.seat_limit import add_employee, remove_employee

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[EmployeeRead])
def list_employees(
    company_id: int = Depends(get_company_id),
    session: Session = Depends(get_session)
):
    """List the company's employees ordered by name"""
    try:
        return EmployeeRepository(session).list(company_id)
    except Exception:
        logger.exception("Error fetching employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch employee list."
        )


@router.post("", response_model=EmployeeCreated, status_code=status.HTTP_201_CREATED)
def create_employee(
    data: EmployeeCreate,
    company_id: int = Depends(get_company_id),
    session: Session = Depends(get_session)
):
    """Add an employee if the subscription has a free seat"""
    try:
        employee = add_employee(session, company_id, data.name, data.nfc_card_id)
    except (SeatLimitReached, SubscriptionInactive) as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except CardAlreadyInUse as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except CompanyNotFound as e:
        logger.error(f"Token references missing company {e.company_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")
    except Exception:
        logger.exception("Error adding employee")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A server error occurred while adding the employee."
        )

    return EmployeeCreated(employee=EmployeeRead.model_validate(employee))


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int,
    company_id: int = Depends(get_company_id),
    session: Session = Depends(get_session)
):
    """Remove an employee; only employees of the caller's company are visible"""
    try:
        deleted = remove_employee(session, company_id, employee_id)
    except Exception:
        logger.exception("Error deleting employee")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete employee."
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found.")
    return {"message": "Employee successfully removed."}
