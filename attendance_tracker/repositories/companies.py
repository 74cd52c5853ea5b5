from typing import Optional

from sqlmodel import Session, select

from attendance_tracker.core.plans import Plan
from attendance_tracker.models.company import Company


class CompanyRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, company_id: int) -> Optional[Company]:
        return self.session.get(Company, company_id)

    def get_for_update(self, company_id: int) -> Optional[Company]:
        """Load the company row under a write lock (no-op on SQLite)"""
        return self.session.exec(
            select(Company).where(Company.id == company_id).with_for_update()
        ).first()

    def get_by_customer(self, stripe_customer_id: str) -> Optional[Company]:
        return self.session.exec(
            select(Company).where(Company.stripe_customer_id == stripe_customer_id)
        ).first()

    def add(self, name: str, plan: Plan) -> Company:
        company = Company(
            name=name,
            subscription_plan=plan.key,
            max_employees=plan.max_employees,
        )
        self.session.add(company)
        self.session.flush()
        return company

    def apply_plan(self, company: Company, plan: Plan, status: str) -> Company:
        """Plan key and seat cap always change together"""
        company.subscription_plan = plan.key
        company.max_employees = plan.max_employees
        company.subscription_status = status
        self.session.add(company)
        return company

    def set_customer(self, company: Company, stripe_customer_id: str) -> Company:
        company.stripe_customer_id = stripe_customer_id
        self.session.add(company)
        return company
