"""
Subscription state: status reporting, checkout, and webhook-driven plan sync

Webhook handlers are pure upserts keyed by the Stripe customer id, so a
redelivered event leaves the company exactly as the first delivery did.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from sqlmodel import Session
import structlog

from attendance_tracker.core.exceptions import CompanyNotFound, UnknownPrice
from attendance_tracker.core.plans import PlanCatalog
from attendance_tracker.models import Company, SubscriptionStatus
from attendance_tracker.repositories import CompanyRepository, EmployeeRepository
from attendance_tracker.services.stripe_billing import StripeBillingService

logger = structlog.get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
SUBSCRIPTION_UPDATED = "customer.subscription.updated"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"


def subscription_summary(session: Session, catalog: PlanCatalog, company_id: int) -> Dict[str, Any]:
    company = CompanyRepository(session).get(company_id)
    if company is None:
        raise CompanyNotFound(company_id)

    plan = catalog.get(company.subscription_plan)
    return {
        "plan": company.subscription_plan,
        "plan_name": plan.name if plan else company.subscription_plan,
        "status": company.subscription_status,
        "employee_count": EmployeeRepository(session).count(company_id),
        "max_employees": company.max_employees,
    }


def start_checkout(
    session: Session,
    catalog: PlanCatalog,
    billing: StripeBillingService,
    company_id: int,
    price_id: str,
    email: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a Checkout Session, creating and storing the company's Stripe customer on first use"""
    if catalog.by_price(price_id) is None:
        raise UnknownPrice(price_id)

    companies = CompanyRepository(session)
    company = companies.get(company_id)
    if company is None:
        raise CompanyNotFound(company_id)

    if not company.stripe_customer_id:
        customer_id = billing.create_customer(company.id, company.name, email)
        try:
            companies.set_customer(company, customer_id)
            session.commit()
        except Exception:
            session.rollback()
            raise

    return billing.create_checkout_session(company.stripe_customer_id, price_id, company.id)


def _company_for_customer(session: Session, customer_id: Optional[str]) -> Optional[Company]:
    if not customer_id:
        logger.warning("Webhook object carries no customer id")
        return None
    company = CompanyRepository(session).get_by_customer(customer_id)
    if company is None:
        logger.warning(f"No company for Stripe customer {customer_id}")
    return company


def _warn_if_over_capacity(session: Session, company: Company) -> None:
    """
    A downgrade never removes employees. An active company left above its new
    cap keeps its roster, and the seat gate blocks inserts until it is back
    under the cap.
    """
    if not company.is_subscription_active:
        return
    employee_count = EmployeeRepository(session).count(company.id)
    if employee_count > company.max_employees:
        logger.warning(
            f"Company {company.id} holds {employee_count} employees, above the "
            f"{company.max_employees} seats of {company.subscription_plan}",
            company_id=company.id,
        )


def _subscription_price(subscription: Mapping[str, Any]) -> Optional[str]:
    items = subscription.get("items") or {}
    for item in items.get("data") or []:
        price = item.get("price")
        if price:
            return price.get("id")
    return None


def handle_checkout_completed(
    session: Session,
    catalog: PlanCatalog,
    billing: StripeBillingService,
    checkout: Mapping[str, Any],
) -> Optional[Company]:
    if checkout.get("mode") != "subscription":
        logger.info(f"Ignoring checkout session in {checkout.get('mode')} mode")
        return None

    metadata = checkout.get("metadata") or {}
    price_id = metadata.get("price_id") or billing.list_line_item_price(checkout["id"])
    plan = catalog.by_price(price_id)
    if plan is None:
        logger.warning(f"Checkout completed for unknown price {price_id}; no plan change")
        return None

    company = _company_for_customer(session, checkout.get("customer"))
    if company is None:
        return None

    CompanyRepository(session).apply_plan(company, plan, SubscriptionStatus.ACTIVE.value)
    session.commit()
    logger.info(f"Company {company.id} upgraded to {plan.key}")
    _warn_if_over_capacity(session, company)
    return company


def handle_subscription_updated(
    session: Session,
    catalog: PlanCatalog,
    billing: StripeBillingService,
    subscription: Mapping[str, Any],
) -> Optional[Company]:
    price_id = _subscription_price(subscription)
    plan = catalog.by_price(price_id)
    if plan is None:
        logger.warning(f"Subscription updated with unknown price {price_id}; no plan change")
        return None

    company = _company_for_customer(session, subscription.get("customer"))
    if company is None:
        return None

    status = subscription.get("status") or SubscriptionStatus.ACTIVE.value
    CompanyRepository(session).apply_plan(company, plan, status)
    session.commit()
    logger.info(f"Company {company.id} synced to {plan.key} ({status})")
    _warn_if_over_capacity(session, company)
    return company


def handle_subscription_deleted(
    session: Session,
    catalog: PlanCatalog,
    billing: StripeBillingService,
    subscription: Mapping[str, Any],
) -> Optional[Company]:
    company = _company_for_customer(session, subscription.get("customer"))
    if company is None:
        return None

    CompanyRepository(session).apply_plan(company, catalog.default, SubscriptionStatus.CANCELED.value)
    session.commit()
    logger.info(f"Company {company.id} downgraded to {catalog.default_key}, subscription canceled")
    return company


EVENT_HANDLERS: Dict[str, Callable[..., Optional[Company]]] = {
    CHECKOUT_COMPLETED: handle_checkout_completed,
    SUBSCRIPTION_UPDATED: handle_subscription_updated,
    SUBSCRIPTION_DELETED: handle_subscription_deleted,
}


def apply_event(
    session: Session,
    catalog: PlanCatalog,
    billing: StripeBillingService,
    event: Mapping[str, Any],
) -> Optional[Company]:
    """Dispatch a verified webhook event; unhandled types are ignored"""
    event_type = event["type"]
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.debug(f"Unhandled webhook event type {event_type}")
        return None

    try:
        return handler(session, catalog, billing, event["data"]["object"])
    except Exception:
        session.rollback()
        raise
