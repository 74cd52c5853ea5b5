from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from attendance_tracker.models.employee import Employee


class EmployeeRepository:
    def __init__(self, session: Session):
        self.session = session

    def list(self, company_id: int) -> List[Employee]:
        return list(self.session.exec(
            select(Employee).where(Employee.company_id == company_id).order_by(Employee.name)
        ).all())

    def get(self, company_id: int, employee_id: int) -> Optional[Employee]:
        return self.session.exec(
            select(Employee).where(
                Employee.company_id == company_id,
                Employee.id == employee_id,
            )
        ).first()

    def get_by_card(self, company_id: int, nfc_card_id: str) -> Optional[Employee]:
        return self.session.exec(
            select(Employee).where(
                Employee.company_id == company_id,
                Employee.nfc_card_id == nfc_card_id,
            )
        ).first()

    def count(self, company_id: int) -> int:
        return self.session.exec(
            select(func.count()).select_from(Employee).where(Employee.company_id == company_id)
        ).one()

    def add(self, company_id: int, name: str, nfc_card_id: str) -> Employee:
        employee = Employee(company_id=company_id, name=name, nfc_card_id=nfc_card_id)
        self.session.add(employee)
        self.session.flush()
        return employee

    def delete(self, company_id: int, employee_id: int) -> bool:
        employee = self.get(company_id, employee_id)
        if employee is None:
            return False
        self.session.delete(employee)
        self.session.flush()
        return True
