"""
Subscription API endpoints - plan status, Stripe checkout and webhooks
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool
from typing import List
import stripe
import structlog

from attendance_tracker.core.database import get_session
from attendance_tracker.core.dependencies import CurrentUser, get_billing_service, get_current_user
from attendance_tracker.core.exceptions import (
    BillingNotConfigured,
    CompanyNotFound,
    UnknownPrice,
    WebhookSignatureError,
)
from attendance_tracker.core.plans import PlanCatalog, get_plan_catalog
from attendance_tracker.schemas import CheckoutRequest, CheckoutResponse, PlanRead, SubscriptionStatusResponse
from attendance_tracker.services.stripe_billing import StripeBillingService
from attendance_tracker.services.subscriptions import apply_event, start_checkout, subscription_summary

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/status", response_model=SubscriptionStatusResponse)
def get_subscription_status(
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
    catalog: PlanCatalog = Depends(get_plan_catalog),
):
    """Current plan, seat usage and capacity"""
    try:
        summary = subscription_summary(session, catalog, current_user.company_id)
    except CompanyNotFound as e:
        logger.error(f"Token references missing company {e.company_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")
    except Exception:
        logger.exception("Error fetching subscription status")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch subscription status."
        )

    return SubscriptionStatusResponse(**summary)


@router.get("/plans", response_model=List[PlanRead])
def list_plans(
    current_user: CurrentUser = Depends(get_current_user),
    catalog: PlanCatalog = Depends(get_plan_catalog),
):
    """Plan catalog for the upgrade page"""
    return [
        PlanRead(key=plan.key, name=plan.name, max_employees=plan.max_employees, price_id=plan.price_id)
        for plan in catalog
    ]


@router.post("/create-checkout-session", response_model=CheckoutResponse)
def create_checkout_session(
    data: CheckoutRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
    catalog: PlanCatalog = Depends(get_plan_catalog),
    billing: StripeBillingService = Depends(get_billing_service),
):
    """Start a Stripe Checkout for the selected plan"""
    try:
        checkout = start_checkout(
            session,
            catalog,
            billing,
            company_id=current_user.company_id,
            price_id=data.price_id,
            email=current_user.email,
        )
    except UnknownPrice as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CompanyNotFound as e:
        logger.error(f"Token references missing company {e.company_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")
    except (stripe.StripeError, BillingNotConfigured):
        logger.exception("Stripe checkout session creation failed", company_id=current_user.company_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create checkout session."
        )

    return CheckoutResponse(**checkout)


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    session: Session = Depends(get_session),
    catalog: PlanCatalog = Depends(get_plan_catalog),
    billing: StripeBillingService = Depends(get_billing_service),
):
    """
    Handle Stripe subscription webhooks

    The signature is checked against the body bytes exactly as received, so
    this route takes the raw Request instead of a parsed model. Once the
    signature verifies the event is always acknowledged; sync failures are
    logged rather than returned, to avoid provider redelivery storms.
    """
    payload = await request.body()
    signature = request.headers.get("Stripe-Signature")

    try:
        event = billing.construct_event(payload, signature)
    except WebhookSignatureError as e:
        logger.warning(f"Webhook verification failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BillingNotConfigured:
        logger.error("Webhook received but STRIPE_WEBHOOK_SECRET is not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook handling is not configured."
        )

    logger.info(f"Received Stripe webhook: {event['type']}", event_id=event["id"])
    try:
        await run_in_threadpool(apply_event, session, catalog, billing, event)
    except Exception:
        logger.exception("Subscription sync from webhook failed", event_id=event["id"])

    return {"received": True}
