"""
Re-derive each company's seat cap from its plan

max_employees is copied from the plan catalog whenever a plan changes. This
job repairs rows whose cap drifted from the catalog, e.g. after the catalog
itself was revised.
"""

import sys

from sqlmodel import Session, select
import structlog

from attendance_tracker.core.database import engine
from attendance_tracker.core.plans import PlanCatalog, get_plan_catalog
from attendance_tracker.models import Company

logger = structlog.get_logger(__name__)


def resync_plan_caps(session: Session, catalog: PlanCatalog) -> dict:
    """Align max_employees with the catalog; unknown plan keys fall back to the default plan"""
    try:
        companies = session.exec(select(Company)).all()
        updated = 0
        unknown = 0

        for company in companies:
            plan = catalog.get(company.subscription_plan)
            if plan is None:
                unknown += 1
                logger.warning(f"Company {company.id} has unknown plan {company.subscription_plan!r}")
                plan = catalog.default

            if (company.subscription_plan, company.max_employees) != (plan.key, plan.max_employees):
                company.subscription_plan = plan.key
                company.max_employees = plan.max_employees
                session.add(company)
                updated += 1

        session.commit()
        return {"checked": len(companies), "updated": updated, "unknown_plans": unknown}

    except Exception as e:
        session.rollback()
        logger.error(f"Error resyncing plan caps: {e}")
        raise


def main():
    """Main entry point for the resync job"""
    try:
        with Session(engine) as session:
            results = resync_plan_caps(session, get_plan_catalog())
            logger.info(f"Plan cap resync complete: {results}")
    except Exception as e:
        logger.error(f"Fatal error in plan cap resync: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
