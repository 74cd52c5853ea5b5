"""
Stripe billing service
Wraps the Stripe API calls used for subscription checkout and webhooks
"""

from typing import Any, Dict, Optional

import stripe
import structlog

from attendance_tracker.core.config import Settings
from attendance_tracker.core.exceptions import BillingNotConfigured, WebhookSignatureError

logger = structlog.get_logger(__name__)


class StripeBillingService:
    """Stripe customer, checkout and webhook operations"""

    def __init__(self, settings: Settings):
        """
        Initialize Stripe service

        Args:
            settings: application settings carrying the API key, webhook
                secret and checkout redirect URLs
        """
        self.api_key = settings.STRIPE_SECRET_KEY
        self.webhook_secret = settings.STRIPE_WEBHOOK_SECRET
        self.success_url = settings.CHECKOUT_SUCCESS_URL
        self.cancel_url = settings.CHECKOUT_CANCEL_URL

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise BillingNotConfigured("STRIPE_SECRET_KEY")
        return self.api_key

    def create_customer(self, company_id: int, company_name: str, email: Optional[str] = None) -> str:
        """Create a Stripe customer for a company and return its id"""
        customer = stripe.Customer.create(
            api_key=self._require_api_key(),
            name=company_name,
            email=email,
            metadata={"company_id": str(company_id)},
            idempotency_key=f"company-customer-{company_id}",
        )
        logger.info(f"Stripe customer created for company {company_id}", customer_id=customer.id)
        return customer.id

    def create_checkout_session(self, customer_id: str, price_id: str, company_id: int) -> Dict[str, Any]:
        """
        Create a subscription-mode Checkout Session

        Returns:
            Dict with the session id and its redirect url
        """
        session = stripe.checkout.Session.create(
            api_key=self._require_api_key(),
            customer=customer_id,
            mode="subscription",
            line_items=[{"price": price_id, "quantity": 1}],
            success_url=self.success_url,
            cancel_url=self.cancel_url,
            client_reference_id=str(company_id),
            metadata={"company_id": str(company_id), "price_id": price_id},
        )
        logger.info(f"Checkout session created for company {company_id}", session_id=session.id, price_id=price_id)
        return {"id": session.id, "url": session.url}

    def list_line_item_price(self, session_id: str) -> Optional[str]:
        """Price id of the first line item of a Checkout Session"""
        line_items = stripe.checkout.Session.list_line_items(
            session_id,
            api_key=self._require_api_key(),
            limit=1,
        )
        for item in line_items.data:
            price = getattr(item, "price", None)
            if price is not None:
                return price.id
        return None

    def construct_event(self, payload: bytes, signature: Optional[str]) -> stripe.Event:
        """
        Verify a webhook against the raw request body and parse it

        Raises:
            WebhookSignatureError: missing header, bad signature, or unparsable payload
        """
        if not self.webhook_secret:
            raise BillingNotConfigured("STRIPE_WEBHOOK_SECRET")
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        try:
            return stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureError("Invalid webhook signature") from exc
        except ValueError as exc:
            raise WebhookSignatureError("Invalid webhook payload") from exc
